"""Random-access big-endian reader over font data.

All decoding in ttparse goes through a `ByteSource`, which is a cursor
over a `bytes` object or a memory-mapped file.  Creating a view with
`ByteSource.view` gives a second, independent cursor over the same
data without copying it, so that whole-file or sub-range extraction
never disturbs the position of the primary cursor.
"""

import logging
import mmap
import struct
from os import PathLike
from typing import Union

from ttparse.exceptions import IoFailure

log = logging.getLogger(__name__)

Buffer = Union[bytes, mmap.mmap]

U8 = struct.Struct(">B")
I8 = struct.Struct(">b")
U16 = struct.Struct(">H")
I16 = struct.Struct(">h")
U32 = struct.Struct(">L")
I32 = struct.Struct(">l")


class ByteSource:
    """Cursor over font data.

    Args:
      data: The font data.  Must support the buffer protocol and slicing.
      owned: Whether `close` should also close `data` (for memory maps
        created by `ByteSource.from_path`).
    """

    def __init__(self, data: Buffer, owned: bool = False) -> None:
        self.data = data
        self.pos = 0
        self.end = len(data)
        self._owned = owned

    @classmethod
    def from_path(cls, path: Union[PathLike, str]) -> "ByteSource":
        """Memory-map a file on the filesystem."""
        with open(path, "rb") as infh:
            try:
                data: Buffer = mmap.mmap(infh.fileno(), 0, access=mmap.ACCESS_READ)
            except ValueError:
                # Empty files cannot be mapped
                log.debug("Could not mmap %s, reading it instead", path)
                return cls(infh.read())
        return cls(data, owned=True)

    def __enter__(self) -> "ByteSource":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __len__(self) -> int:
        return self.end

    def __repr__(self) -> str:
        return "<ByteSource: pos=%d, length=%d>" % (self.pos, self.end)

    def close(self) -> None:
        """Release the backing data if this source owns it."""
        if self._owned and isinstance(self.data, mmap.mmap):
            self.data.close()
        self._owned = False

    def view(self) -> "ByteSource":
        """Create an independent cursor over the same data, positioned
        at the start."""
        return ByteSource(self.data)

    def seek(self, pos: int) -> None:
        """Move the cursor to an absolute offset."""
        if pos < 0:
            raise IoFailure(f"Cannot seek to negative offset {pos}")
        self.pos = pos

    def tell(self) -> int:
        """Get the current position of the cursor."""
        return self.pos

    def skip(self, nbytes: int) -> None:
        """Advance the cursor without reading."""
        self.seek(self.pos + nbytes)

    def read(self, nbytes: int) -> bytes:
        """Read exactly `nbytes` bytes, advancing the cursor."""
        if nbytes < 0:
            raise IoFailure(f"Cannot read {nbytes} bytes")
        pos = self.pos
        if pos + nbytes > self.end:
            raise IoFailure(
                f"Unexpected end of data reading {nbytes} bytes at {pos}"
                f" (length {self.end})"
            )
        self.pos = pos + nbytes
        return bytes(self.data[pos : self.pos])

    def _unpack(self, fmt: struct.Struct) -> int:
        pos = self.pos
        if pos + fmt.size > self.end:
            raise IoFailure(
                f"Unexpected end of data reading {fmt.size} bytes at {pos}"
                f" (length {self.end})"
            )
        (value,) = fmt.unpack_from(self.data, pos)
        self.pos = pos + fmt.size
        return value

    def read_u8(self) -> int:
        return self._unpack(U8)

    def read_i8(self) -> int:
        return self._unpack(I8)

    def read_u16(self) -> int:
        return self._unpack(U16)

    def read_i16(self) -> int:
        return self._unpack(I16)

    def read_u32(self) -> int:
        return self._unpack(U32)

    def read_i32(self) -> int:
        return self._unpack(I32)

    def read_u16_array(self, count: int) -> tuple:
        """Read `count` consecutive unsigned 16-bit values."""
        if count <= 0:
            return ()
        data = self.read(2 * count)
        return struct.unpack(">%dH" % count, data)
