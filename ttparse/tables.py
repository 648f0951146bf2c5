"""Decoders for fixed-layout sfnt tables and glyph metrics.

Linear measurements are normalized to `UNITS_NORMALIZATION` units per
em, using integer division that truncates toward zero.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ttparse.directory import TableDirectory, TableLocation
from ttparse.exceptions import FontSyntaxError, MissingTable
from ttparse.source import ByteSource

log = logging.getLogger(__name__)

UNITS_NORMALIZATION = 1000
# Offset of indexToLocFormat in 'head'
HEAD_LOCA_FORMAT_OFFSET = 50
# Number of glyphs assumed when there is no 'maxp' table
MAX_GLYPH_ID = 65536
BBox = Tuple[int, int, int, int]


def normalize(value: int, units_per_em: int) -> int:
    """Scale a value in font units to normalized units."""
    scaled = value * UNITS_NORMALIZATION
    if scaled < 0:
        return -(-scaled // units_per_em)
    return scaled // units_per_em


def to_int16(value: int) -> int:
    """Reinterpret the low 16 bits of `value` as a signed integer."""
    value &= 0xFFFF
    return value - 0x10000 if value & 0x8000 else value


def require_table(
    tables: TableDirectory, tag: str, filename: Union[str, None] = None
) -> TableLocation:
    location = tables.get(tag)
    if location is None:
        raise MissingTable(tag, filename)
    return location


@dataclass(frozen=True)
class HeaderTable:
    """The font header, table 'head'."""

    flags: int
    units_per_em: int
    x_min: int
    y_min: int
    x_max: int
    y_max: int
    mac_style: int


@dataclass(frozen=True)
class HorizontalHeader:
    """The horizontal header, table 'hhea'."""

    ascender: int
    descender: int
    line_gap: int
    advance_width_max: int
    min_left_side_bearing: int
    min_right_side_bearing: int
    x_max_extent: int
    caret_slope_rise: int
    caret_slope_run: int
    number_of_hmetrics: int


@dataclass(frozen=True)
class WindowsMetrics:
    """OS/2 and Windows metrics, table 'OS/2'.

    `typo_descender` and `win_descent` are always negative (or zero),
    whatever the sign in the font.  Fields which are missing in older
    versions of the table are 0, except for `cap_height` which is
    estimated from the em size.
    """

    version: int
    x_avg_char_width: int
    us_weight_class: int
    us_width_class: int
    fs_type: int
    y_subscript_x_size: int
    y_subscript_y_size: int
    y_subscript_x_offset: int
    y_subscript_y_offset: int
    y_superscript_x_size: int
    y_superscript_y_size: int
    y_superscript_x_offset: int
    y_superscript_y_offset: int
    y_strikeout_size: int
    y_strikeout_position: int
    s_family_class: int
    panose: bytes
    ach_vend_id: bytes
    fs_selection: int
    us_first_char_index: int
    us_last_char_index: int
    typo_ascender: int
    typo_descender: int
    typo_line_gap: int
    win_ascent: int
    win_descent: int
    code_page_range1: int
    code_page_range2: int
    x_height: int
    cap_height: int


@dataclass(frozen=True)
class PostTable:
    """PostScript information, table 'post'.

    When the font has no 'post' table, the italic angle is derived from
    the caret slope in 'hhea' and the other fields keep their defaults.
    """

    italic_angle: float
    underline_position: int = 0
    underline_thickness: int = 0
    is_fixed_pitch: bool = False


def read_hhea(
    source: ByteSource, tables: TableDirectory, filename: Union[str, None] = None
) -> HorizontalHeader:
    """Read the horizontal header."""
    offset, _ = require_table(tables, "hhea", filename)
    source.seek(offset + 4)
    ascender = source.read_i16()
    descender = source.read_i16()
    line_gap = source.read_i16()
    advance_width_max = source.read_u16()
    min_left_side_bearing = source.read_i16()
    min_right_side_bearing = source.read_i16()
    x_max_extent = source.read_i16()
    caret_slope_rise = source.read_i16()
    caret_slope_run = source.read_i16()
    source.skip(12)
    number_of_hmetrics = source.read_u16()
    return HorizontalHeader(
        ascender=ascender,
        descender=descender,
        line_gap=line_gap,
        advance_width_max=advance_width_max,
        min_left_side_bearing=min_left_side_bearing,
        min_right_side_bearing=min_right_side_bearing,
        x_max_extent=x_max_extent,
        caret_slope_rise=caret_slope_rise,
        caret_slope_run=caret_slope_run,
        number_of_hmetrics=number_of_hmetrics,
    )


def read_head(
    source: ByteSource, tables: TableDirectory, filename: Union[str, None] = None
) -> HeaderTable:
    """Read the font header."""
    offset, _ = require_table(tables, "head", filename)
    source.seek(offset + 16)
    flags = source.read_u16()
    units_per_em = source.read_u16()
    if units_per_em == 0:
        raise FontSyntaxError("unitsPerEm in 'head' table is zero")
    source.skip(16)  # created, modified
    x_min = source.read_i16()
    y_min = source.read_i16()
    x_max = source.read_i16()
    y_max = source.read_i16()
    mac_style = source.read_u16()
    return HeaderTable(
        flags=flags,
        units_per_em=units_per_em,
        x_min=x_min,
        y_min=y_min,
        x_max=x_max,
        y_max=y_max,
        mac_style=mac_style,
    )


def read_os2(
    source: ByteSource,
    tables: TableDirectory,
    head: HeaderTable,
    filename: Union[str, None] = None,
) -> WindowsMetrics:
    """Read the OS/2 and Windows metrics.

    Depends on `head.units_per_em` to estimate the cap height for
    versions 0 and 1 of the table.
    """
    offset, _ = require_table(tables, "OS/2", filename)
    source.seek(offset)
    version = source.read_u16()
    x_avg_char_width = source.read_i16()
    us_weight_class = source.read_u16()
    us_width_class = source.read_u16()
    fs_type = source.read_i16()
    (
        y_subscript_x_size,
        y_subscript_y_size,
        y_subscript_x_offset,
        y_subscript_y_offset,
        y_superscript_x_size,
        y_superscript_y_size,
        y_superscript_x_offset,
        y_superscript_y_offset,
        y_strikeout_size,
        y_strikeout_position,
        s_family_class,
    ) = (source.read_i16() for _ in range(11))
    panose = source.read(10)
    source.skip(16)  # ulUnicodeRange1-4
    ach_vend_id = source.read(4)
    fs_selection = source.read_u16()
    us_first_char_index = source.read_u16()
    us_last_char_index = source.read_u16()
    typo_ascender = source.read_i16()
    typo_descender = source.read_i16()
    if typo_descender > 0:
        typo_descender = -typo_descender
    typo_line_gap = source.read_i16()
    win_ascent = source.read_u16()
    win_descent = source.read_u16()
    if win_descent > 0:
        win_descent = to_int16(-win_descent)
    code_page_range1 = code_page_range2 = 0
    if version > 0:
        code_page_range1 = source.read_u32()
        code_page_range2 = source.read_u32()
    if version > 1:
        x_height = source.read_i16()
        cap_height = source.read_i16()
    else:
        x_height = 0
        cap_height = int(0.7 * head.units_per_em)
    return WindowsMetrics(
        version=version,
        x_avg_char_width=x_avg_char_width,
        us_weight_class=us_weight_class,
        us_width_class=us_width_class,
        fs_type=fs_type,
        y_subscript_x_size=y_subscript_x_size,
        y_subscript_y_size=y_subscript_y_size,
        y_subscript_x_offset=y_subscript_x_offset,
        y_subscript_y_offset=y_subscript_y_offset,
        y_superscript_x_size=y_superscript_x_size,
        y_superscript_y_size=y_superscript_y_size,
        y_superscript_x_offset=y_superscript_x_offset,
        y_superscript_y_offset=y_superscript_y_offset,
        y_strikeout_size=y_strikeout_size,
        y_strikeout_position=y_strikeout_position,
        s_family_class=s_family_class,
        panose=panose,
        ach_vend_id=ach_vend_id,
        fs_selection=fs_selection,
        us_first_char_index=us_first_char_index,
        us_last_char_index=us_last_char_index,
        typo_ascender=typo_ascender,
        typo_descender=typo_descender,
        typo_line_gap=typo_line_gap,
        win_ascent=win_ascent,
        win_descent=win_descent,
        code_page_range1=code_page_range1,
        code_page_range2=code_page_range2,
        x_height=x_height,
        cap_height=cap_height,
    )


def read_post(
    source: ByteSource, tables: TableDirectory, hhea: HorizontalHeader
) -> PostTable:
    """Read the PostScript information, or derive it from `hhea` if
    there is no 'post' table."""
    location = tables.get("post")
    if location is None:
        angle = -math.atan2(hhea.caret_slope_run, hhea.caret_slope_rise)
        log.debug("No 'post' table, italic angle from caret slope")
        return PostTable(italic_angle=math.degrees(angle))
    offset, _ = location
    source.seek(offset + 4)
    mantissa = source.read_i16()
    fraction = source.read_u16()
    underline_position = source.read_i16()
    underline_thickness = source.read_i16()
    is_fixed_pitch = source.read_u32() != 0
    return PostTable(
        italic_angle=mantissa + fraction / 16384.0,
        underline_position=underline_position,
        underline_thickness=underline_thickness,
        is_fixed_pitch=is_fixed_pitch,
    )


def read_glyph_widths(
    source: ByteSource,
    tables: TableDirectory,
    hhea: HorizontalHeader,
    head: HeaderTable,
    filename: Union[str, None] = None,
) -> Tuple[int, ...]:
    """Read normalized advance widths from 'hmtx', indexed by glyph id."""
    offset, _ = require_table(tables, "hmtx", filename)
    if hhea.number_of_hmetrics == 0:
        log.warning("No horizontal metrics, all glyph widths will be 0")
    source.seek(offset)
    widths: List[int] = []
    for _ in range(hhea.number_of_hmetrics):
        widths.append(normalize(source.read_u16(), head.units_per_em))
        source.skip(2)  # lsb
    return tuple(widths)


def get_glyph_width(widths: Sequence[int], glyph: int) -> int:
    """Look up a glyph width, using the last width for glyphs past the
    end of the table, or 0 if the table is empty."""
    if not widths:
        return 0
    if glyph >= len(widths):
        glyph = len(widths) - 1
    return widths[glyph]


def read_kerning(
    source: ByteSource, tables: TableDirectory, units_per_em: int
) -> Dict[int, int]:
    """Read horizontal kerning pairs from the 'kern' table.

    Keys pack the left glyph id in the high 16 bits and the right glyph
    id in the low 16 bits.
    """
    kerning: Dict[int, int] = {}
    location = tables.get("kern")
    if location is None:
        return kerning
    offset, _ = location
    source.seek(offset + 2)
    ntables = source.read_u16()
    checkpoint = offset + 4
    length = 0
    for _ in range(ntables):
        checkpoint += length
        source.seek(checkpoint)
        source.skip(2)  # version
        length = source.read_u16()
        coverage = source.read_u16()
        if (coverage & 0xFFF7) != 0x0001:
            log.debug("Skipping kern subtable with coverage 0x%04x", coverage)
            continue
        npairs = source.read_u16()
        source.skip(6)
        for _ in range(npairs):
            pair = source.read_u32()
            kerning[pair] = normalize(source.read_i16(), units_per_em)
    return kerning


def read_bbox(
    source: ByteSource,
    tables: TableDirectory,
    units_per_em: int,
    filename: Union[str, None] = None,
) -> Optional[List[Optional[BBox]]]:
    """Read normalized glyph bounding boxes from 'loca' and 'glyf'.

    Returns `None` if the font has no 'loca' table.  Glyphs with no
    outline have no bounding box.
    """
    head_offset, _ = require_table(tables, "head", filename)
    source.seek(head_offset + HEAD_LOCA_FORMAT_OFFSET)
    short_loca = source.read_u16() == 0
    location = tables.get("loca")
    if location is None:
        return None
    loca_offset, loca_length = location
    source.seek(loca_offset)
    if short_loca:
        loca = [v * 2 for v in source.read_u16_array(loca_length // 2)]
    else:
        loca = [source.read_u32() for _ in range(loca_length // 4)]
    glyf_offset, _ = require_table(tables, "glyf", filename)
    bboxes: List[Optional[BBox]] = []
    for start, end in zip(loca, loca[1:]):
        if start == end:
            bboxes.append(None)
            continue
        source.seek(glyf_offset + start + 2)
        x_min, y_min, x_max, y_max = (
            normalize(source.read_i16(), units_per_em) for _ in range(4)
        )
        bboxes.append((x_min, y_min, x_max, y_max))
    return bboxes


def read_max_glyph_id(source: ByteSource, tables: TableDirectory) -> int:
    """Read the number of glyphs from 'maxp'."""
    location = tables.get("maxp")
    if location is None:
        return MAX_GLYPH_ID
    offset, _ = location
    source.seek(offset + 4)
    return source.read_u16()
