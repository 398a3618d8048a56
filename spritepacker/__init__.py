"""
SpritePacker - Merge many small 8-bit sprites into one indexed texture atlas

A small Python library and CLI for offline asset pipelines: sprites are
packed largest-first into a power-of-two wide atlas and written as a single
palettised PNG, with a JSON manifest of their offsets.
"""

from spritepacker.client import SpritePacker, AtlasResult
from spritepacker.config import PackerSettings
from spritepacker.packing import Rectangle, PlacedRectangle, PackResult, pack_rectangles

__version__ = "0.0.1"
__all__ = [
    "SpritePacker",
    "AtlasResult",
    "PackerSettings",
    "Rectangle",
    "PlacedRectangle",
    "PackResult",
    "pack_rectangles",
]
