"""Font collection headers and sfnt table directories."""

import logging
from typing import Dict, Iterator, Tuple, Union

from ttparse import settings
from ttparse.encodings import decode_winansi
from ttparse.exceptions import (
    FontSyntaxError,
    IndexOutOfRange,
    InvalidFontSignature,
    MalformedContainer,
)
from ttparse.source import ByteSource

log = logging.getLogger(__name__)

TTC_TAG = "ttcf"
SFNT_TRUETYPE = 0x00010000
SFNT_OPENTYPE = 0x4F54544F  # "OTTO"
SFNT_VERSIONS = {SFNT_TRUETYPE, SFNT_OPENTYPE}
# searchRange, entrySelector, rangeShift
SEARCH_HEADER_SIZE = 6
TableLocation = Tuple[int, int]
STYLE_SUFFIXES = (",BoldItalic", ",Bold", ",Italic")


def read_tag(source: ByteSource) -> str:
    """Read a four-byte tag."""
    return decode_winansi(source.read(4))


def resolve_directory_offset(
    source: ByteSource,
    ttc_index: Union[int, None] = None,
    filename: Union[str, None] = None,
) -> int:
    """Find the offset of the table directory.

    For a bare font (`ttc_index` is `None`) this is simply 0.
    Otherwise, read the collection header at the start of `source` and
    return the directory offset of member `ttc_index`.
    """
    if ttc_index is None:
        return 0
    where = f" for {filename}" if filename else ""
    if ttc_index < 0:
        raise MalformedContainer(f"The font index{where} must be positive")
    source.seek(0)
    tag = read_tag(source)
    if tag != TTC_TAG:
        raise MalformedContainer(f"Not a valid TTC file{where} (tag {tag!r})")
    source.skip(4)  # version
    count = source.read_u32()
    if ttc_index >= count:
        raise IndexOutOfRange(
            f"The font index{where} must be between 0 and {count - 1},"
            f" it was {ttc_index}"
        )
    source.skip(ttc_index * 4)
    offset = source.read_u32()
    log.debug("TTC member %d of %d at offset %d", ttc_index, count, offset)
    return offset


def read_collection_size(source: ByteSource) -> int:
    """Get the number of fonts in a collection, or 0 if `source` is not
    a collection."""
    source.seek(0)
    if len(source) < 12 or read_tag(source) != TTC_TAG:
        return 0
    source.skip(4)
    return source.read_u32()


class TableDirectory:
    """Mapping of table tags to their location in the font data.

    Tags are kept in the order in which they appear in the directory.
    """

    def __init__(
        self,
        sfnt_version: int,
        tables: Dict[str, TableLocation],
        offset: int = 0,
    ) -> None:
        self.sfnt_version = sfnt_version
        self.tables = tables
        self.offset = offset

    @classmethod
    def read(
        cls,
        source: ByteSource,
        offset: int = 0,
        filename: Union[str, None] = None,
    ) -> "TableDirectory":
        """Read the table directory at `offset`."""
        source.seek(offset)
        sfnt_version = source.read_u32()
        if sfnt_version not in SFNT_VERSIONS:
            where = f"{filename} is" if filename else "Data is"
            nfonts = read_collection_size(source) if offset == 0 else 0
            if nfonts:
                raise InvalidFontSignature(
                    f"{where} a collection of {nfonts} fonts, an index is required"
                )
            raise InvalidFontSignature(
                f"{where} not a valid TTF or OTF file"
                f" (bad sfntVersion 0x{sfnt_version:08x})"
            )
        num_tables = source.read_u16()
        source.skip(SEARCH_HEADER_SIZE)
        tables: Dict[str, TableLocation] = {}
        for _ in range(num_tables):
            tag = read_tag(source)
            source.skip(4)  # checkSum
            table_offset = source.read_u32()
            length = source.read_u32()
            log.debug("table %r: offset=%d length=%d", tag, table_offset, length)
            if table_offset + length > len(source):
                if settings.STRICT:
                    raise FontSyntaxError(
                        f"Table {tag!r} extends past end of data"
                        f" ({table_offset} + {length} > {len(source)})"
                    )
                log.warning(
                    "Table %r extends past end of data (%d + %d > %d)",
                    tag,
                    table_offset,
                    length,
                    len(source),
                )
            tables[tag] = (table_offset, length)
        return cls(sfnt_version, tables, offset)

    def __repr__(self) -> str:
        return "<TableDirectory: tables=%r>" % list(self.tables)

    def __contains__(self, tag: object) -> bool:
        return tag in self.tables

    def __iter__(self) -> Iterator[str]:
        return iter(self.tables)

    def __len__(self) -> int:
        return len(self.tables)

    def get(self, tag: str) -> Union[TableLocation, None]:
        return self.tables.get(tag)

    @property
    def cff(self) -> Union[TableLocation, None]:
        """Location of the `CFF ` table, if any."""
        return self.tables.get("CFF ")


def get_base_name(name: str) -> str:
    """Remove a style modifier (",Bold" and friends) from a font name."""
    for suffix in STYLE_SUFFIXES:
        if name.endswith(suffix):
            return name[: -len(suffix)]
    return name


def get_ttc_name(name: str) -> str:
    """Get the file name from a composed TTC name.

    For instance, "myfont.ttc,2" gives "myfont.ttc".
    """
    idx = name.lower().find(".ttc,")
    if idx < 0:
        return name
    return name[: idx + 4]


def split_ttc_name(name: str) -> Tuple[str, Union[int, None]]:
    """Split a composed font name into a path and collection index."""
    base = get_base_name(name)
    path = get_ttc_name(base)
    if len(path) < len(base):
        suffix = base[len(path) + 1 :]
        try:
            return path, int(suffix)
        except ValueError:
            raise MalformedContainer(f"Invalid font index {suffix!r} in {name}")
    return path, None
