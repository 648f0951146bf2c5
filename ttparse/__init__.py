"""
ttparse reads TrueType and OpenType font programs (and collections of
them) to get what you need to lay out and embed text: glyph widths,
character maps, kerning, font names and metrics.

Basic usage:

    with ttparse.open("DejaVuSans.ttf") as font:
        print(font.ps_font_name)
        glyph, width = font.cmaps.cmap31[ord("A")]

Fonts in a TrueType Collection are selected by appending their index
to the file name, as in `ttparse.open("cambria.ttc,1")`, or with the
`ttc_index` argument.
"""

from os import PathLike
from typing import Union

from ttparse.font import FontProgram
from ttparse._version import __version__  # noqa: F401

__all__ = ["FontProgram", "open"]


def open(
    path: Union[PathLike, str],
    *,
    ttc_index: Union[int, None] = None,
) -> FontProgram:
    """Open a font file from a path on the filesystem."""
    return FontProgram.from_path(path, ttc_index=ttc_index)
