"""Schemas for decoded font tables.

This module contains schemas (as TypedDict) for the data produced by
`asobj` from a `FontProgram` and its tables.

"""

from typing import Dict, List, Tuple, Union

try:
    # We only absolutely need this when using Pydantic TypeAdapter
    from typing_extensions import TypedDict
except ImportError:
    from typing import TypedDict

from ttparse.cmap import CmapTable as _CmapTable
from ttparse.data.asobj import asobj
from ttparse.font import FontProgram as _FontProgram
from ttparse.name import NameRecord as _NameRecord
from ttparse.tables import BBox, WindowsMetrics as _WindowsMetrics

GlyphMetrics = Tuple[int, int]


class Font(TypedDict, total=False):
    """Metadata for a font program."""

    name: Union[str, None]
    """PostScript name of the font."""
    filename: str
    """File the font was read from."""
    ttc_index: int
    """Index of the font in a TrueType Collection."""
    is_cff: bool
    """Does the font have CFF outlines?"""
    tables: Dict[str, "Table"]
    """Location of tables in the font data."""
    head: "Header"
    """Font header."""
    hhea: "HorizontalHeader"
    """Horizontal header."""
    os_2: "WindowsMetrics"
    """OS/2 and Windows metrics."""
    post: "Post"
    """PostScript information."""
    names: List["NameRecord"]
    """Name records, in table order for each name ID."""
    glyph_widths: List[int]
    """Normalized advance widths indexed by glyph id."""
    max_glyph_id: int
    """Number of glyphs, according to 'maxp'."""
    cmaps: "CharacterMaps"
    """Character to glyph maps."""
    kerning: List["KerningPair"]
    """Kerning pairs."""
    bboxes: List[Union[BBox, None]]
    """Normalized glyph bounding boxes indexed by glyph id."""


class Table(TypedDict, total=False):
    offset: int
    """Offset of the table from the start of the font data."""
    length: int
    """Length of the table in bytes."""


class Header(TypedDict, total=False):
    """Font header, table 'head'."""

    flags: int
    units_per_em: int
    """Size of the em square in font units."""
    x_min: int
    y_min: int
    x_max: int
    y_max: int
    mac_style: int


class HorizontalHeader(TypedDict, total=False):
    """Horizontal header, table 'hhea'."""

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
    """Number of entries in the 'hmtx' table."""


class WindowsMetrics(TypedDict, total=False):
    """OS/2 and Windows metrics, table 'OS/2'."""

    version: int
    x_avg_char_width: int
    us_weight_class: int
    us_width_class: int
    fs_type: int
    """Embedding permissions."""
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
    panose: List[int]
    """PANOSE classification, as ten integers."""
    ach_vend_id: str
    """Font vendor identifier."""
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


class Post(TypedDict, total=False):
    """PostScript information, table 'post'."""

    italic_angle: float
    """Italic angle in degrees."""
    underline_position: int
    underline_thickness: int
    is_fixed_pitch: bool


class NameRecord(TypedDict, total=False):
    name_id: int
    """Name ID (6 is the PostScript name)."""
    platform_id: int
    encoding_id: int
    language_id: int
    name: str
    """Decoded string."""


class CharacterMaps(TypedDict, total=False):
    """Character to glyph maps, giving glyph id and normalized width
    for each character code."""

    cmap10: Dict[int, GlyphMetrics]
    """Macintosh roman (or Windows symbol) map."""
    cmap31: Dict[int, GlyphMetrics]
    """Windows Unicode BMP map."""
    cmap_ext: Dict[int, GlyphMetrics]
    """Windows Unicode full repertoire map."""
    font_specific: bool
    """Is this a symbol font?"""


class KerningPair(TypedDict, total=False):
    left: int
    """Glyph id of the left glyph."""
    right: int
    """Glyph id of the right glyph."""
    value: int
    """Normalized kerning adjustment."""


def kerning_pairs(kerning: Dict[int, int]) -> List[KerningPair]:
    """Unpack kerning values keyed by glyph pairs."""
    return [
        KerningPair(left=pair >> 16, right=pair & 0xFFFF, value=value)
        for pair, value in kerning.items()
    ]


@asobj.register
def asobj_windows_metrics(obj: _WindowsMetrics) -> WindowsMetrics:
    os_2 = WindowsMetrics()
    for field, value in vars(obj).items():
        os_2[field] = asobj(value)  # type: ignore[literal-required]
    os_2["panose"] = list(obj.panose)
    return os_2


@asobj.register
def asobj_cmap(obj: _CmapTable) -> CharacterMaps:
    cmaps = CharacterMaps(font_specific=obj.font_specific)
    for attr in "cmap10", "cmap31", "cmap_ext":
        val = getattr(obj, attr)
        if val is not None:
            cmaps[attr] = asobj(val)  # type: ignore[literal-required]
    return cmaps


@asobj.register
def asobj_name_record(obj: _NameRecord) -> NameRecord:
    return NameRecord(
        platform_id=obj.platform_id,
        encoding_id=obj.encoding_id,
        language_id=obj.language_id,
        name=obj.name,
    )


@asobj.register
def asobj_font(font: _FontProgram) -> Font:
    obj = Font(
        name=font.ps_font_name,
        is_cff=font.is_cff,
        tables={
            tag: Table(offset=offset, length=length)
            for tag, (offset, length) in font.tables.items()
        },
        head=asobj(font.head),
        hhea=asobj(font.hhea),
        os_2=asobj(font.os_2),
        post=asobj(font.post),
        glyph_widths=list(font.glyph_widths),
        max_glyph_id=font.read_max_glyph_id(),
    )
    if font.filename is not None:
        obj["filename"] = font.filename
    if font.ttc_index is not None:
        obj["ttc_index"] = font.ttc_index
    names = []
    for name_id, records in font.name_entries.items():
        for record in records:
            name = asobj(record)
            name["name_id"] = name_id
            names.append(name)
    obj["names"] = names
    return obj
