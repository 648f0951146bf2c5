"""Decoder for the naming table, 'name'."""

import logging
from typing import Dict, List, NamedTuple, Union

from ttparse.directory import TableDirectory
from ttparse.encodings import decode_utf16, decode_winansi
from ttparse.source import ByteSource
from ttparse.tables import require_table

log = logging.getLogger(__name__)

# Name IDs of interest
NAME_COPYRIGHT = 0
NAME_FAMILY = 1
NAME_SUBFAMILY = 2
NAME_UNIQUE_ID = 3
NAME_FULL_NAME = 4
NAME_VERSION = 5
NAME_POSTSCRIPT = 6


class NameRecord(NamedTuple):
    platform_id: int
    encoding_id: int
    language_id: int
    name: str


def is_unicode(platform_id: int, encoding_id: int) -> bool:
    """Are names for this platform and encoding stored as UTF-16?"""
    return platform_id in (0, 3) or (platform_id == 2 and encoding_id == 1)


def read_name_table(
    source: ByteSource, tables: TableDirectory, filename: Union[str, None] = None
) -> Dict[int, List[NameRecord]]:
    """Read all the name records, grouped by name ID.

    Records for each name ID are kept in the order in which they
    appear in the table.
    """
    offset, _ = require_table(tables, "name", filename)
    source.seek(offset + 2)
    nrecords = source.read_u16()
    storage = offset + source.read_u16()
    entries: Dict[int, List[NameRecord]] = {}
    for _ in range(nrecords):
        platform_id = source.read_u16()
        encoding_id = source.read_u16()
        language_id = source.read_u16()
        name_id = source.read_u16()
        length = source.read_u16()
        string_offset = source.read_u16()
        pos = source.tell()
        source.seek(storage + string_offset)
        data = source.read(length)
        if is_unicode(platform_id, encoding_id):
            name = decode_utf16(data)
        else:
            name = decode_winansi(data)
        entries.setdefault(name_id, []).append(
            NameRecord(platform_id, encoding_id, language_id, name)
        )
        source.seek(pos)
    log.debug("name IDs: %r", list(entries))
    return entries
