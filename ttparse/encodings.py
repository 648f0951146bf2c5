"""String decoding for table tags and name records."""

import codecs
from typing import List

# Windows-1252 leaves five bytes undefined; those map to the code
# point with the same value, as Latin-1 would.
WINANSI_CHARS: List[str] = [
    codecs.decode(bytes((b,)), "cp1252", "ignore") or chr(b) for b in range(256)
]


def decode_winansi(data: bytes) -> str:
    """Decode single-byte Windows-1252 text."""
    return "".join(WINANSI_CHARS[b] for b in data)


def decode_utf16(data: bytes) -> str:
    """Decode sequential big-endian two-byte code units.

    Valid surrogate pairs are combined into a single code point.  Only
    unpaired surrogate halves are passed through unchanged, since font
    names are not always well-formed.  A trailing odd byte is ignored.
    """
    if len(data) % 2:
        data = data[:-1]
    return data.decode("utf-16-be", "surrogatepass")
