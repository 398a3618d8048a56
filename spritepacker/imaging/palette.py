"""Color map extraction from an indexed reference image."""

import logging
from pathlib import Path
from typing import List, Tuple, Union

from PIL import Image, UnidentifiedImageError

from spritepacker.exceptions import PaletteError

logger = logging.getLogger(__name__)

PALETTE_SIZE = 256

Color = Tuple[int, int, int]


def color_map_from_image(image: Image.Image) -> List[Color]:
    """
    Return the 256-entry RGB color map of a palette-mode image.

    Pillow may trim unused trailing entries; those are filled with black so
    the result always has exactly 256 colors.
    """
    if image.mode != "P":
        raise PaletteError(f"Reference image is not palettised (mode {image.mode})")

    flat = image.getpalette(rawmode="RGB") or []
    flat = list(flat[:PALETTE_SIZE * 3])
    flat += [0] * (PALETTE_SIZE * 3 - len(flat))

    return [tuple(flat[i:i + 3]) for i in range(0, len(flat), 3)]


def load_color_map(path: Union[str, Path]) -> List[Color]:
    """Read the color map from a palette image on disk."""
    path = Path(path)
    if not path.exists():
        raise PaletteError(f"Palette image not found: {path}")

    try:
        with Image.open(path) as image:
            colors = color_map_from_image(image)
    except (OSError, UnidentifiedImageError) as e:
        raise PaletteError(f"Cannot read palette image {path}: {e}") from e

    logger.info(f"Loaded {len(colors)} colors from {path}")
    return colors


def flatten_color_map(colors: List[Color]) -> List[int]:
    """Flatten a color map into Pillow's [r, g, b, r, g, b, ...] layout."""
    if len(colors) != PALETTE_SIZE:
        raise PaletteError(f"Color map must have {PALETTE_SIZE} entries, got {len(colors)}")
    return [channel for color in colors for channel in color]
