"""
Test collection headers and table directories.
"""

import struct

import pytest

import ttparse.settings
from ttparse.directory import (
    TableDirectory,
    get_base_name,
    get_ttc_name,
    read_collection_size,
    resolve_directory_offset,
    split_ttc_name,
)
from ttparse.exceptions import (
    FontSyntaxError,
    IndexOutOfRange,
    InvalidFontSignature,
    MalformedContainer,
)
from ttparse.source import ByteSource

from tests.data import OPENTYPE, build_collection, build_sfnt, minimal_tables


def test_bare_font() -> None:
    source = ByteSource(build_sfnt(minimal_tables()))
    assert resolve_directory_offset(source) == 0
    assert read_collection_size(source) == 0


def test_collection() -> None:
    """Verify selecting members of a collection."""
    data = build_collection([minimal_tables(), minimal_tables(), minimal_tables()])
    source = ByteSource(data)
    assert read_collection_size(source) == 3
    offsets = struct.unpack(">3L", data[12:24])
    for idx in range(3):
        assert resolve_directory_offset(source, idx) == offsets[idx]
    with pytest.raises(IndexOutOfRange) as e:
        resolve_directory_offset(source, 3, "foo.ttc")
    assert "foo.ttc" in str(e.value)
    assert "between 0 and 2" in str(e.value)
    with pytest.raises(MalformedContainer):
        resolve_directory_offset(source, -1)


def test_not_a_collection() -> None:
    source = ByteSource(build_sfnt(minimal_tables()))
    with pytest.raises(MalformedContainer):
        resolve_directory_offset(source, 0)


def test_directory() -> None:
    """Tables are in directory order with their offsets and lengths."""
    tables = minimal_tables()
    data = build_sfnt(tables)
    directory = TableDirectory.read(ByteSource(data))
    assert list(directory) == list(tables)
    assert len(directory) == len(tables)
    for tag, table in tables.items():
        offset, length = directory.tables[tag]
        assert length == len(table)
        assert data[offset : offset + length] == table
    assert "OS/2" in directory
    assert "glyf" not in directory
    assert directory.get("glyf") is None
    assert directory.cff is None


def test_cff_directory() -> None:
    tables = minimal_tables()
    tables["CFF "] = b"\x01\x00\x04\x02CFFDATA"
    data = build_sfnt(tables, OPENTYPE)
    directory = TableDirectory.read(ByteSource(data))
    assert directory.sfnt_version == OPENTYPE
    assert directory.cff is not None
    offset, length = directory.cff
    assert data[offset : offset + length] == tables["CFF "]


def test_bad_signature() -> None:
    data = build_sfnt(minimal_tables(), sfnt_version=0x74727565)  # "true"
    with pytest.raises(InvalidFontSignature) as e:
        TableDirectory.read(ByteSource(data), filename="foo.ttf")
    assert "foo.ttf" in str(e.value)
    with pytest.raises(InvalidFontSignature):
        TableDirectory.read(ByteSource(b"wOFF" + bytes(40)))


def test_out_of_bounds(caplog) -> None:
    """Tables past the end of the data are only an error in strict mode."""
    data = build_sfnt(minimal_tables())
    truncated = data[:-8]
    directory = TableDirectory.read(ByteSource(truncated))
    assert "OS/2" in directory
    assert "extends past end of data" in caplog.text
    ttparse.settings.STRICT = True
    try:
        with pytest.raises(FontSyntaxError):
            TableDirectory.read(ByteSource(truncated))
    finally:
        ttparse.settings.STRICT = False


def test_names() -> None:
    assert get_base_name("Arial,Bold") == "Arial"
    assert get_base_name("Arial,Italic") == "Arial"
    assert get_base_name("Arial,BoldItalic") == "Arial"
    assert get_base_name("Arial") == "Arial"
    assert get_ttc_name("msgothic.ttc,1") == "msgothic.ttc"
    assert get_ttc_name("MSGOTHIC.TTC,1") == "MSGOTHIC.TTC"
    assert get_ttc_name("arial.ttf") == "arial.ttf"
    assert split_ttc_name("fonts/msgothic.ttc,2") == ("fonts/msgothic.ttc", 2)
    assert split_ttc_name("fonts/msgothic.ttc,2,Bold") == ("fonts/msgothic.ttc", 2)
    assert split_ttc_name("fonts/arial.ttf") == ("fonts/arial.ttf", None)
    assert split_ttc_name("fonts/msgothic.ttc") == ("fonts/msgothic.ttc", None)
    with pytest.raises(MalformedContainer):
        split_ttc_name("fonts/msgothic.ttc,two")
