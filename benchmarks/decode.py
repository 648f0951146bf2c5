"""
Benchmark decoding of a large synthetic font.
"""

import logging
import time

from ttparse.font import FontProgram
from tests.data import (
    build_font,
    make_cmap,
    make_format4,
    make_format12,
    make_glyf,
    make_hhea,
    make_hmtx,
    make_kern,
    make_maxp,
)

LOG = logging.getLogger("benchmark-decode")
NGLYPHS = 20000


def make_big_font() -> bytes:
    """A font with lots of glyphs, a full BMP map and lots of kerning."""
    cmap = make_cmap(
        [
            (3, 1, make_format4([(0x20, 0xD7FF, 0, 0), (0xFFFF, 0xFFFF, 1, 0)])),
            (3, 10, make_format12([(0x10000, 0x10000 + NGLYPHS, 1)])),
        ]
    )
    kern = make_kern(
        [(1, [(left, right, -50) for left in range(50) for right in range(50)])]
    )
    loca, glyf = make_glyf([(0, 0, 500, 700)] * NGLYPHS, long_loca=True)
    return build_font(
        cmap=cmap,
        hhea=make_hhea(number_of_hmetrics=NGLYPHS),
        hmtx=make_hmtx([500 + i % 100 for i in range(NGLYPHS)]),
        maxp=make_maxp(NGLYPHS),
        kern=kern,
        loca=loca,
        glyf=glyf,
    )


def benchmark_decode(data: bytes) -> None:
    font = FontProgram.from_bytes(data)
    _ = font.read_kerning()
    _ = font.read_bbox()


if __name__ == "__main__":
    logging.basicConfig(level=logging.ERROR)
    data = make_big_font()
    niter = 5
    decode_time = 0.0
    for iter in range(niter + 1):
        start = time.time()
        benchmark_decode(data)
        if iter != 0:
            decode_time += time.time() - start
    print("Decoding took %.2f s / iter" % (decode_time / niter,))
