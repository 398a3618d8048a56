"""
Atlas manifest schema.

Describes where each sprite landed in the atlas, so engines can build
texture coordinates without re-running the packer.

Example:
    {
      "image": "SpriteAtlas.png",
      "width": 128,
      "height": 128,
      "sprites": [{"name": "hero.bmp", "x": 0, "y": 0, "width": 64, "height": 64}],
      "failures": []
    }
"""

from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from spritepacker.packing.rectangles import FailureReason, PackResult


class SpriteEntry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., description="Sprite identifier (usually its path).")
    x: int = Field(..., ge=0, description="Left offset in pixels.")
    y: int = Field(..., ge=0, description="Top offset in pixels.")
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class FailureEntry(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    reason: FailureReason


class AtlasManifest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    image: str = Field(..., description="Atlas image file name.")
    width: int = Field(..., gt=0, description="Atlas width in pixels.")
    height: int = Field(..., gt=0, description="Atlas height in pixels.")
    sprites: List[SpriteEntry] = Field(default_factory=list)
    failures: List[FailureEntry] = Field(default_factory=list)


def build_manifest(result: PackResult, image_name: str, height: Optional[int] = None) -> AtlasManifest:
    """
    Build a manifest from a pack result.

    Args:
        result: Packer output
        image_name: File name of the atlas image
        height: Height actually written (when rounded up), defaults to result.height
    """
    return AtlasManifest(
        image=image_name,
        width=result.width,
        height=height or result.height,
        sprites=[
            SpriteEntry(name=p.identifier, x=p.x, y=p.y, width=p.width, height=p.height)
            for p in result.placements
        ],
        failures=[
            FailureEntry(
                name=f.identifier,
                width=f.rectangle.width,
                height=f.rectangle.height,
                reason=f.reason,
            )
            for f in result.failures
        ],
    )
