"""
Atlas compositing and PNG output.

Builds a palette-mode ("P") canvas carrying the supplied color map and pastes
every placed sprite at its offset. 8-bit sprites are copied index-for-index;
anything else is mapped onto the color map without dithering.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Union

from PIL import Image

from spritepacker.imaging.palette import Color, flatten_color_map
from spritepacker.imaging.source import Sprite
from spritepacker.packing.rectangles import PackResult

logger = logging.getLogger(__name__)


def _palette_image(colors: List[Color]) -> Image.Image:
    palette = Image.new("P", (1, 1))
    palette.putpalette(flatten_color_map(colors))
    return palette


def _as_indices(image: Image.Image, palette: Image.Image) -> Image.Image:
    """Return a "P" image whose pixel values index into `palette`."""
    if image.mode in ("P", "L"):
        # Raw 8-bit values are already palette indices
        return Image.frombytes("P", image.size, image.tobytes())
    return image.convert("RGB").quantize(palette=palette, dither=Image.Dither.NONE)


def compose_atlas(
    result: PackResult,
    sprites: Iterable[Sprite],
    color_map: List[Color],
    pow2_height: bool = False
) -> Image.Image:
    """
    Paint every placed sprite into a new indexed atlas image.

    Args:
        result: Packer output with canvas size and placements
        sprites: Decoded sprites, matched to placements by identifier
        color_map: Exactly 256 RGB colors for the atlas palette
        pow2_height: Round the canvas height up to a power of two

    Returns:
        "P" mode PIL image of size (result.width, height)
    """
    height = result.rounded_height() if pow2_height else result.height
    palette = _palette_image(color_map)

    atlas = Image.new("P", (result.width, height), 0)
    atlas.putpalette(flatten_color_map(color_map))

    by_id = {sprite.identifier: sprite for sprite in sprites}

    for placed in result.placements:
        sprite = by_id.get(placed.identifier)
        if sprite is None:
            raise KeyError(f"No sprite loaded for placement {placed.identifier!r}")
        atlas.paste(_as_indices(sprite.image, palette), (placed.x, placed.y))

    logger.info(f"Composited {len(result.placements)} sprites into {result.width}x{height} atlas")
    return atlas


def save_atlas(atlas: Image.Image, path: Union[str, Path]) -> Path:
    """Write the atlas as an 8-bit indexed PNG."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    atlas.save(path, format="PNG")
    logger.info(f"Saved atlas to {path}")
    return path
