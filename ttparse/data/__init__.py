from ttparse.data.asobj import asobj
from ttparse.data.metadata import (
    CharacterMaps,
    Font,
    Header,
    HorizontalHeader,
    KerningPair,
    NameRecord,
    Post,
    Table,
    WindowsMetrics,
    kerning_pairs,
)

__all__ = [
    "CharacterMaps",
    "Font",
    "Header",
    "HorizontalHeader",
    "KerningPair",
    "NameRecord",
    "Post",
    "Table",
    "WindowsMetrics",
    "asobj",
    "kerning_pairs",
]
VERSION = "1.0"
