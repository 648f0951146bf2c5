"""Decoder for the character to glyph mapping table, 'cmap'.

Of all the subtables in a font, we keep at most four:

- (1, 0): Macintosh standard roman, in `CmapTable.cmap10`
- (3, 1): Windows Unicode BMP, in `CmapTable.cmap31`
- (3, 0): Windows symbol, which replaces (1, 0) in `CmapTable.cmap10`
  and marks the font as font-specific
- (3, 10): Windows Unicode full repertoire, in `CmapTable.cmap_ext`

Each one maps a character code to a tuple of glyph id and normalized
glyph width.
"""

import logging
from dataclasses import dataclass
from typing import AbstractSet, Callable, Dict, Optional, Sequence, Tuple, Union

from ttparse.directory import TableDirectory
from ttparse.source import ByteSource
from ttparse.tables import get_glyph_width, require_table

log = logging.getLogger(__name__)

GlyphMetrics = Tuple[int, int]
CodeMap = Dict[int, GlyphMetrics]
# Formats which we know how to read for each subtable
MAC_FORMATS = {0, 4, 6}
UNICODE_FORMATS = {4}
EXT_FORMATS = {0, 4, 6, 12}


@dataclass(frozen=True)
class CmapTable:
    """Character maps selected from the 'cmap' table."""

    cmap10: Optional[CodeMap] = None
    cmap31: Optional[CodeMap] = None
    cmap_ext: Optional[CodeMap] = None
    font_specific: bool = False


def read_format0(source: ByteSource, widths: Sequence[int]) -> CodeMap:
    """Byte encoding table (Apple standard)."""
    source.skip(4)  # length, language
    h: CodeMap = {}
    for code, glyph in enumerate(source.read(256)):
        h[code] = (glyph, get_glyph_width(widths, glyph))
    return h


def read_format4(
    source: ByteSource, widths: Sequence[int], font_specific: bool = False
) -> CodeMap:
    """Segment mapping to delta values (Microsoft standard).

    For symbol fonts (`font_specific`), codes in the private use area
    0xF000-0xF0FF are also mapped from their low byte alone.
    """
    table_length = source.read_u16()
    source.skip(2)  # language
    seg_count = source.read_u16() // 2
    source.skip(6)  # searchRange, entrySelector, rangeShift
    end_count = source.read_u16_array(seg_count)
    source.skip(2)  # reservedPad
    start_count = source.read_u16_array(seg_count)
    id_delta = source.read_u16_array(seg_count)
    id_range_offset = source.read_u16_array(seg_count)
    glyph_ids = source.read_u16_array(table_length // 2 - 8 - seg_count * 4)
    h: CodeMap = {}
    for k in range(seg_count):
        start = start_count[k]
        end = min(end_count[k], 0xFFFE)
        for code in range(start, end + 1):
            if id_range_offset[k] == 0:
                glyph = (code + id_delta[k]) & 0xFFFF
            else:
                idx = k + id_range_offset[k] // 2 - seg_count + code - start
                if not 0 <= idx < len(glyph_ids):
                    continue
                glyph = (glyph_ids[idx] + id_delta[k]) & 0xFFFF
            metrics = (glyph, get_glyph_width(widths, glyph))
            if font_specific and (code & 0xFF00) == 0xF000:
                h[code & 0xFF] = metrics
            h[code] = metrics
    return h


def read_format6(source: ByteSource, widths: Sequence[int]) -> CodeMap:
    """Trimmed table mapping."""
    source.skip(4)  # length, language
    first_code = source.read_u16()
    entry_count = source.read_u16()
    h: CodeMap = {}
    for k, glyph in enumerate(source.read_u16_array(entry_count)):
        h[first_code + k] = (glyph, get_glyph_width(widths, glyph))
    return h


def read_format12(source: ByteSource, widths: Sequence[int]) -> CodeMap:
    """Segmented coverage, for codes outside the BMP."""
    source.skip(2 + 4 + 4)  # reserved, length, language
    ngroups = source.read_u32()
    h: CodeMap = {}
    for _ in range(ngroups):
        start_char_code = source.read_u32()
        end_char_code = source.read_u32()
        glyph = source.read_u32()
        for code in range(start_char_code, end_char_code + 1):
            h[code] = (glyph, get_glyph_width(widths, glyph))
            glyph += 1
    return h


FORMAT_READERS: Dict[int, Callable[[ByteSource, Sequence[int]], CodeMap]] = {
    0: read_format0,
    4: read_format4,
    6: read_format6,
    12: read_format12,
}


def read_subtable(
    source: ByteSource,
    offset: int,
    widths: Sequence[int],
    formats: AbstractSet[int],
    platform: Tuple[int, int],
) -> Optional[CodeMap]:
    """Read one subtable if it is in one of `formats`."""
    source.seek(offset)
    fmt = source.read_u16()
    if fmt not in formats:
        log.debug("Unsupported format %d for cmap subtable %r", fmt, platform)
        return None
    log.debug("Reading format %d cmap subtable %r", fmt, platform)
    return FORMAT_READERS[fmt](source, widths)


def read_cmap(
    source: ByteSource,
    tables: TableDirectory,
    widths: Sequence[int],
    filename: Union[str, None] = None,
) -> CmapTable:
    """Read the character maps of interest.

    Depends on the glyph widths from 'hmtx'.
    """
    table_offset, _ = require_table(tables, "cmap", filename)
    source.seek(table_offset + 2)
    nsubtables = source.read_u16()
    map10 = map31 = map30 = map_ext = 0
    font_specific = False
    for _ in range(nsubtables):
        platform_id = source.read_u16()
        encoding_id = source.read_u16()
        offset = source.read_i32()
        if platform_id == 3 and encoding_id == 0:
            font_specific = True
            map30 = offset
        elif platform_id == 3 and encoding_id == 1:
            map31 = offset
        elif platform_id == 3 and encoding_id == 10:
            map_ext = offset
        elif platform_id == 1 and encoding_id == 0:
            map10 = offset
    cmap10 = cmap31 = cmap_ext = None
    if map10 > 0:
        cmap10 = read_subtable(
            source, table_offset + map10, widths, MAC_FORMATS, (1, 0)
        )
    if map31 > 0:
        cmap31 = read_subtable(
            source, table_offset + map31, widths, UNICODE_FORMATS, (3, 1)
        )
    if map30 > 0:
        source.seek(table_offset + map30)
        if source.read_u16() == 4:
            cmap10 = read_format4(source, widths, font_specific)
        else:
            log.debug("Symbol cmap subtable is not format 4, ignoring it")
            font_specific = False
    if map_ext > 0:
        cmap_ext = read_subtable(
            source, table_offset + map_ext, widths, EXT_FORMATS, (3, 10)
        )
    return CmapTable(
        cmap10=cmap10,
        cmap31=cmap31,
        cmap_ext=cmap_ext,
        font_specific=font_specific,
    )
