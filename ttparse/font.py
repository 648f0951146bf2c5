import logging
from os import PathLike
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ttparse.cmap import CmapTable, read_cmap
from ttparse.directory import (
    TableDirectory,
    TableLocation,
    resolve_directory_offset,
    split_ttc_name,
)
from ttparse.name import NAME_POSTSCRIPT, NameRecord, read_name_table
from ttparse.source import Buffer, ByteSource
from ttparse.tables import (
    BBox,
    HeaderTable,
    HorizontalHeader,
    PostTable,
    WindowsMetrics,
    get_glyph_width,
    read_bbox,
    read_glyph_widths,
    read_head,
    read_hhea,
    read_kerning,
    read_max_glyph_id,
    read_os2,
    read_post,
)

log = logging.getLogger(__name__)


class FontProgram:
    """A TrueType or OpenType font program.

    Creating a `FontProgram` reads the table directory and decodes the
    tables needed to lay out and embed text with the font: 'hhea',
    'name', 'head', 'OS/2', 'post' (optional), 'hmtx' and 'cmap'.
    Kerning, glyph bounding boxes and the glyph count are read on
    demand each time they are requested.

    The font data is accessed through a single cursor, so a
    `FontProgram` should not be shared between threads.

    Args:
      source: Font data.
      ttc_index: Index of the font in a TrueType Collection, or `None`
        for a bare font.
      filename: Name of the file the data came from, used in error
        messages and as a fallback PostScript name.
    """

    def __init__(
        self,
        source: ByteSource,
        ttc_index: Union[int, None] = None,
        filename: Union[str, None] = None,
    ) -> None:
        self.source = source
        self._ttc_index = ttc_index
        self._filename = filename
        self._fontname: Union[str, None] = None
        self._directory_offset = resolve_directory_offset(source, ttc_index, filename)
        self._directory = TableDirectory.read(source, self._directory_offset, filename)
        self._cff = self._directory.cff
        log.debug(
            "directory at %d: %d tables, cff=%r",
            self._directory_offset,
            len(self._directory),
            self._cff,
        )
        # Order matters here: 'post' needs 'hhea', 'OS/2' and 'hmtx'
        # need 'head', and 'cmap' needs the widths from 'hmtx'
        self._hhea = read_hhea(source, self._directory, filename)
        self._names = read_name_table(source, self._directory, filename)
        self._head = read_head(source, self._directory, filename)
        self._os_2 = read_os2(source, self._directory, self._head, filename)
        self._post = read_post(source, self._directory, self._hhea)
        self._glyph_widths = read_glyph_widths(
            source, self._directory, self._hhea, self._head, filename
        )
        self._cmaps = read_cmap(source, self._directory, self._glyph_widths, filename)

    @classmethod
    def from_bytes(
        cls, data: Buffer, ttc_index: Union[int, None] = None
    ) -> "FontProgram":
        """Decode a font (or a member of a collection) from memory."""
        return cls(ByteSource(data), ttc_index)

    @classmethod
    def from_path(
        cls, path: Union[PathLike, str], ttc_index: Union[int, None] = None
    ) -> "FontProgram":
        """Decode a font file.

        If `ttc_index` is not given, `path` may end with a comma and
        the index of a font in a collection, e.g. "cambria.ttc,1".
        """
        filename = str(path)
        if ttc_index is None:
            filename, ttc_index = split_ttc_name(filename)
        source = ByteSource.from_path(filename)
        try:
            return cls(source, ttc_index, filename)
        except Exception:
            source.close()
            raise

    def __enter__(self) -> "FontProgram":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        self.source.close()

    def __repr__(self) -> str:
        return "<FontProgram: name=%r, tables=%r>" % (
            self.ps_font_name,
            list(self._directory),
        )

    @property
    def filename(self) -> Union[str, None]:
        return self._filename

    @property
    def ttc_index(self) -> Union[int, None]:
        return self._ttc_index

    @property
    def directory_offset(self) -> int:
        """Offset of the table directory (0 except in collections)."""
        return self._directory_offset

    @property
    def tables(self) -> Dict[str, TableLocation]:
        """Offset and length of each table, in directory order."""
        return dict(self._directory.tables)

    @property
    def head(self) -> HeaderTable:
        return self._head

    @property
    def hhea(self) -> HorizontalHeader:
        return self._hhea

    @property
    def os_2(self) -> WindowsMetrics:
        return self._os_2

    @property
    def post(self) -> PostTable:
        return self._post

    @property
    def cmaps(self) -> CmapTable:
        return self._cmaps

    @property
    def glyph_widths(self) -> Tuple[int, ...]:
        """Normalized advance widths, indexed by glyph id."""
        return self._glyph_widths

    @property
    def name_entries(self) -> Dict[int, List[NameRecord]]:
        """All the name records, grouped by name ID."""
        return self._names

    @property
    def is_cff(self) -> bool:
        """Does the font have Compact Font Format outlines?"""
        return self._cff is not None

    @property
    def ps_font_name(self) -> Union[str, None]:
        """The PostScript name of the font.

        This is the first name with ID 6 in the 'name' table, or failing
        that, the name of the font file with spaces replaced by hyphens.
        """
        if self._fontname is None:
            names = self._names.get(NAME_POSTSCRIPT)
            if names:
                self._fontname = names[0].name
            elif self._filename is not None:
                self._fontname = Path(self._filename).name.replace(" ", "-")
        return self._fontname

    def get_glyph_width(self, glyph: int) -> int:
        """Get the normalized width of a glyph.  Glyphs past the end of
        the 'hmtx' table have the width of the last glyph in it."""
        return get_glyph_width(self._glyph_widths, glyph)

    def get_full_font(self) -> bytes:
        """Get the entire font data (including all fonts in a
        collection)."""
        with self.source.view() as view:
            return view.read(len(view))

    def read_cff_font(self) -> Optional[bytes]:
        """Get the raw 'CFF ' table, or `None` for TrueType outlines."""
        if self._cff is None:
            return None
        offset, length = self._cff
        with self.source.view() as view:
            view.seek(offset)
            return view.read(length)

    def read_kerning(self) -> Dict[int, int]:
        """Read normalized kerning values, keyed by `(left << 16) | right`
        glyph pairs.  Fonts without a 'kern' table have no kerning."""
        return read_kerning(self.source, self._directory, self._head.units_per_em)

    def read_bbox(self) -> Optional[List[Optional[BBox]]]:
        """Read normalized glyph bounding boxes, or `None` if the font
        has no 'loca' table."""
        return read_bbox(
            self.source, self._directory, self._head.units_per_em, self._filename
        )

    def read_max_glyph_id(self) -> int:
        """Read the number of glyphs in the font."""
        return read_max_glyph_id(self.source, self._directory)
