"""ttparse's CLI, which can get stuff out of a font file for you.

By default this will print the decoded tables of a TrueType or
OpenType font as a JSON dictionary, which will always contain the
following keys:

- `name`: the PostScript name of the font
- `is_cff`: whether the glyph outlines are in CFF format
- `tables`: offset and length of every table in the font
- `head`, `hhea`, `os_2`, `post`: the fixed-layout tables, with field
    names in lowercase with underscores
- `names`: every record from the naming table
- `glyph_widths`: advance widths, normalized to 1000 units per em
- `max_glyph_id`: the number of glyphs

The character maps, kerning pairs and glyph bounding boxes are large,
so you have to ask for them:

    ttparse --cmap --kerning foo.ttf

Fonts in a collection are selected with `--index`, or with the usual
comma syntax:

    ttparse cambria.ttc,1

You may also extract the raw CFF table from an OpenType font:

    ttparse --cff -o foo.cff foo.otf

"""

import argparse
import json
import logging
from pathlib import Path
from typing import List, Union

import ttparse
from ttparse.data import asobj, kerning_pairs
from ttparse.exceptions import FontException
from ttparse.font import FontProgram


def make_argparse() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("font", type=Path)
    parser.add_argument(
        "-n",
        "--index",
        type=int,
        help="Index of the font in a TrueType Collection",
    )
    parser.add_argument(
        "--cmap",
        action="store_true",
        help="Include character to glyph maps",
    )
    parser.add_argument(
        "--kerning",
        action="store_true",
        help="Include kerning pairs",
    )
    parser.add_argument(
        "--bbox",
        action="store_true",
        help="Include glyph bounding boxes",
    )
    parser.add_argument(
        "--cff",
        action="store_true",
        help="Write the raw CFF table instead of JSON",
    )
    parser.add_argument(
        "-o",
        "--outfile",
        help="File to write output (or - for standard output)",
        type=argparse.FileType("wt"),
        default="-",
    )
    parser.add_argument(
        "--debug",
        help="Very verbose debugging output",
        action="store_true",
    )
    return parser


def extract_cff(font: FontProgram, args: argparse.Namespace) -> None:
    """Extract the CFF table."""
    cff = font.read_cff_font()
    if cff is None:
        raise RuntimeError(f"{font.filename} does not have a CFF table")
    args.outfile.buffer.write(cff)


def extract_metadata(font: FontProgram, args: argparse.Namespace) -> None:
    """Extract tables as JSON."""
    stuff = asobj(font)
    if args.cmap:
        stuff["cmaps"] = asobj(font.cmaps)
    if args.kerning:
        stuff["kerning"] = kerning_pairs(font.read_kerning())
    if args.bbox:
        bboxes = font.read_bbox()
        if bboxes is not None:
            stuff["bboxes"] = asobj(bboxes)
    json.dump(stuff, args.outfile, indent=2, ensure_ascii=False)


def main(argv: Union[List[str], None] = None) -> None:
    parser = make_argparse()
    args = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)
    try:
        with ttparse.open(args.font, ttc_index=args.index) as font:
            if args.cff:
                extract_cff(font, args)
            else:
                extract_metadata(font, args)
        args.outfile.flush()
    except (FontException, OSError, RuntimeError) as e:
        parser.error(f"Something went wrong:\n{e}")


if __name__ == "__main__":
    main()
