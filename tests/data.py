"""
Synthetic fonts and font tables to be shared by various tests.

Everything here is packed by hand with `struct` so that tests do not
depend on font files being installed.
"""

import struct
from typing import Dict, List, Optional, Sequence, Tuple

TRUETYPE = 0x00010000
OPENTYPE = 0x4F54544F
Segment = Tuple[int, int, int, int]


def make_head(
    units_per_em: int = 1000,
    flags: int = 3,
    bbox: Tuple[int, int, int, int] = (-100, -200, 900, 800),
    mac_style: int = 0,
    loca_format: int = 0,
) -> bytes:
    return struct.pack(
        ">LLLLHH8s8shhhhHHhhh",
        0x00010000,  # version
        0x00010000,  # fontRevision
        0,  # checkSumAdjustment
        0x5F0F3CF5,  # magicNumber
        flags,
        units_per_em,
        b"",  # created
        b"",  # modified
        *bbox,
        mac_style,
        8,  # lowestRecPPEM
        2,  # fontDirectionHint
        loca_format,
        0,  # glyphDataFormat
    )


def make_hhea(
    ascender: int = 800,
    descender: int = -200,
    line_gap: int = 90,
    advance_width_max: int = 1000,
    min_left_side_bearing: int = -50,
    min_right_side_bearing: int = -60,
    x_max_extent: int = 950,
    caret_slope_rise: int = 1,
    caret_slope_run: int = 0,
    number_of_hmetrics: int = 1,
) -> bytes:
    return struct.pack(
        ">LhhhHhhhhh12xH",
        0x00010000,
        ascender,
        descender,
        line_gap,
        advance_width_max,
        min_left_side_bearing,
        min_right_side_bearing,
        x_max_extent,
        caret_slope_rise,
        caret_slope_run,
        number_of_hmetrics,
    )


def make_os2(
    version: int = 0,
    weight: int = 400,
    typo_descender: int = -200,
    win_descent: int = 250,
    code_pages: Tuple[int, int] = (1, 0x80000000),
    x_height: int = 500,
    cap_height: int = 680,
) -> bytes:
    data = struct.pack(
        ">HhHHh11h10s16x4sHHHhhhHH",
        version,
        480,  # xAvgCharWidth
        weight,
        5,  # usWidthClass
        8,  # fsType
        650,  # ySubscriptXSize
        600,  # ySubscriptYSize
        0,  # ySubscriptXOffset
        75,  # ySubscriptYOffset
        650,  # ySuperscriptXSize
        600,  # ySuperscriptYSize
        0,  # ySuperscriptXOffset
        350,  # ySuperscriptYOffset
        50,  # yStrikeoutSize
        300,  # yStrikeoutPosition
        0,  # sFamilyClass
        bytes(range(2, 12)),  # panose
        b"TEST",
        0x40,  # fsSelection
        32,  # usFirstCharIndex
        126,  # usLastCharIndex
        750,  # sTypoAscender
        typo_descender,
        100,  # sTypoLineGap
        900,  # usWinAscent
        win_descent,
    )
    if version > 0:
        data += struct.pack(">LL", *code_pages)
    if version > 1:
        data += struct.pack(">hhHHH", x_height, cap_height, 0, 32, 2)
    return data


def make_post(
    mantissa: int = -12, fraction: int = 0, position: int = -100, fixed: int = 0
) -> bytes:
    return struct.pack(
        ">LhHhhLLLLL", 0x00030000, mantissa, fraction, position, 50, fixed, 0, 0, 0, 0
    )


def make_hmtx(widths: Sequence[int]) -> bytes:
    return b"".join(struct.pack(">Hh", width, 10) for width in widths)


def make_maxp(num_glyphs: int) -> bytes:
    return struct.pack(">LH", 0x00005000, num_glyphs)


def make_name(records: Sequence[Tuple[int, int, int, int, bytes]]) -> bytes:
    """Records are (platformID, encodingID, languageID, nameID, data)."""
    header = struct.pack(">HHH", 0, len(records), 6 + 12 * len(records))
    entries = b""
    storage = b""
    for platform_id, encoding_id, language_id, name_id, data in records:
        entries += struct.pack(
            ">HHHHHH",
            platform_id,
            encoding_id,
            language_id,
            name_id,
            len(data),
            len(storage),
        )
        storage += data
    return header + entries + storage


def make_cmap(subtables: Sequence[Tuple[int, int, bytes]]) -> bytes:
    """Subtables are (platformID, encodingID, data)."""
    header = struct.pack(">HH", 0, len(subtables))
    records = b""
    data = b""
    pos = 4 + 8 * len(subtables)
    for platform_id, encoding_id, subtable in subtables:
        records += struct.pack(">HHL", platform_id, encoding_id, pos + len(data))
        data += subtable
    return header + records + data


def make_format0(glyphs: Sequence[int]) -> bytes:
    glyphs = list(glyphs) + [0] * (256 - len(glyphs))
    return struct.pack(">HHH256B", 0, 262, 0, *glyphs)


def make_format4(
    segments: Sequence[Segment], glyph_ids: Sequence[int] = ()
) -> bytes:
    """Segments are (startCode, endCode, idDelta, idRangeOffset)."""
    seg_count = len(segments)
    length = 16 + 8 * seg_count + 2 * len(glyph_ids)
    data = struct.pack(">HHHHHHH", 4, length, 0, seg_count * 2, 0, 0, 0)
    data += struct.pack(">%dH" % seg_count, *(end for _, end, _, _ in segments))
    data += struct.pack(">H", 0)
    data += struct.pack(">%dH" % seg_count, *(start for start, _, _, _ in segments))
    data += struct.pack(
        ">%dH" % seg_count, *(delta & 0xFFFF for _, _, delta, _ in segments)
    )
    data += struct.pack(">%dH" % seg_count, *(ro for _, _, _, ro in segments))
    data += struct.pack(">%dH" % len(glyph_ids), *glyph_ids)
    return data


def range_offset(segment: int, seg_count: int, first: int) -> int:
    """idRangeOffset pointing segment `segment` at `glyph_ids[first]`."""
    return 2 * (seg_count - segment + first)


def make_format6(first_code: int, glyphs: Sequence[int]) -> bytes:
    return struct.pack(
        ">HHHHH%dH" % len(glyphs),
        6,
        10 + 2 * len(glyphs),
        0,
        first_code,
        len(glyphs),
        *glyphs,
    )


def make_format12(groups: Sequence[Tuple[int, int, int]]) -> bytes:
    data = struct.pack(">HHLLL", 12, 0, 16 + 12 * len(groups), 0, len(groups))
    for group in groups:
        data += struct.pack(">LLL", *group)
    return data


def make_kern(subtables: Sequence[Tuple[int, Sequence[Tuple[int, int, int]]]]) -> bytes:
    """Subtables are (coverage, [(left, right, value), ...])."""
    data = struct.pack(">HH", 0, len(subtables))
    for coverage, pairs in subtables:
        data += struct.pack(
            ">HHHHHHH", 0, 14 + 6 * len(pairs), coverage, len(pairs), 0, 0, 0
        )
        for left, right, value in pairs:
            data += struct.pack(">HHh", left, right, value)
    return data


def make_glyf(
    bboxes: Sequence[Optional[Tuple[int, int, int, int]]], long_loca: bool = False
) -> Tuple[bytes, bytes]:
    """Make 'loca' and 'glyf' tables for glyphs with the given bounding
    boxes (or no outline for `None`)."""
    glyf = b""
    offsets = [0]
    for bbox in bboxes:
        if bbox is not None:
            # One contour, bounding box, and padding to stay even
            glyf += struct.pack(">hhhhhH", 1, *bbox, 0)
        offsets.append(len(glyf))
    if long_loca:
        loca = struct.pack(">%dL" % len(offsets), *offsets)
    else:
        loca = struct.pack(">%dH" % len(offsets), *(o // 2 for o in offsets))
    return loca, glyf


NAME_RECORDS = [
    (3, 1, 0x409, 1, "Test Sans".encode("utf-16-be")),
    (1, 0, 0, 6, b"TestSans-Mac"),
    (3, 1, 0x409, 6, "TestSans-Regular".encode("utf-16-be")),
    (1, 0, 0, 1, b"Test Sans \x80"),
]


def minimal_tables(**overrides: bytes) -> Dict[str, bytes]:
    """Tables for the smallest font that ttparse will accept, with
    `unitsPerEm=1000`, one glyph width of 500 and a format 6 map of
    code 65 to glyph 10."""
    tables = {
        "cmap": make_cmap([(1, 0, make_format6(65, [10]))]),
        "head": make_head(),
        "hhea": make_hhea(),
        "hmtx": make_hmtx([500]),
        "name": make_name(NAME_RECORDS),
        "OS/2": make_os2(),
    }
    for tag, table in overrides.items():
        tables[tag.replace("_", "/")] = table
    return tables


def build_sfnt(
    tables: Dict[str, bytes], sfnt_version: int = TRUETYPE, base: int = 0
) -> bytes:
    """Build a font whose table directory will be at offset `base` in
    the file."""
    ntables = len(tables)
    directory = struct.pack(">LHHHH", sfnt_version, ntables, 16, 0, 0)
    data = b""
    pos = base + 12 + 16 * ntables
    for tag, table in tables.items():
        directory += struct.pack(
            ">4sLLL", tag.encode("latin-1"), 0, pos + len(data), len(table)
        )
        data += table + b"\0" * (-len(table) % 4)
    return directory + data


def build_font(**overrides: bytes) -> bytes:
    """Build a minimal font, overriding or adding tables ("OS_2" stands
    for "OS/2")."""
    return build_sfnt(minimal_tables(**overrides))


def build_collection(members: List[Dict[str, bytes]]) -> bytes:
    nfonts = len(members)
    header_size = 12 + 4 * nfonts
    offsets: List[int] = []
    body = b""
    for tables in members:
        offsets.append(header_size + len(body))
        body += build_sfnt(tables, base=header_size + len(body))
    header = struct.pack(">4sLL", b"ttcf", 0x00010000, nfonts)
    header += struct.pack(">%dL" % nfonts, *offsets)
    return header + body
