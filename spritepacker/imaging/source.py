"""
Sprite discovery and loading.

Walks a directory tree for sprite files, decodes them with Pillow and keeps
the ones that are small enough and stored at 8 bits per pixel.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from PIL import Image

from spritepacker.exceptions import SpriteLoadError
from spritepacker.packing.rectangles import Rectangle

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 256
DEFAULT_MAX_IMAGES = 1024
EIGHT_BIT_MODES = ("P", "L")


@dataclass
class Sprite:
    """A decoded source image and the name it is reported under."""
    identifier: str
    path: Path
    image: Image.Image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def rectangle(self) -> Rectangle:
        return Rectangle(self.identifier, self.width, self.height)


def find_sprite_files(root: Union[str, Path], extension: str = ".bmp") -> List[Path]:
    """
    Recursively collect files ending in `extension` under `root`.

    Directories that cannot be listed (permissions, over-long paths) are
    logged and skipped. The result is sorted so runs are repeatable.
    """
    root = Path(root)
    if not root.is_dir():
        raise FileNotFoundError(f"Sprite directory not found: {root}")

    extension = extension.lower()

    def _on_error(err: OSError):
        logger.warning(f"Skip directory: {err.filename} Reason: {err.strerror or err}")

    results = []
    for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
        dirnames.sort()
        for name in sorted(filenames):
            if name.lower().endswith(extension):
                results.append(Path(dirpath) / name)

    logger.info(f"Found {len(results)} '{extension}' files under {root}")
    return results


def _identifier_for(path: Path, root: Optional[Path]) -> str:
    if root is not None:
        try:
            return path.relative_to(root).as_posix()
        except ValueError:
            pass
    return path.as_posix()


def load_sprite(path: Union[str, Path], root: Optional[Union[str, Path]] = None) -> Sprite:
    """
    Decode one sprite file.

    Raises:
        SpriteLoadError: if the file cannot be read or is not an image
    """
    path = Path(path)
    try:
        image = Image.open(path)
    except (OSError, Image.DecompressionBombError) as e:
        raise SpriteLoadError(f"{path}: {e}") from e

    try:
        image.load()
    except (OSError, Image.DecompressionBombError) as e:
        image.close()
        raise SpriteLoadError(f"{path}: {e}") from e

    return Sprite(
        identifier=_identifier_for(path, Path(root) if root is not None else None),
        path=path,
        image=image,
    )


def load_sprites(
    paths: Iterable[Union[str, Path]],
    max_size: int = DEFAULT_MAX_SIZE,
    max_count: Optional[int] = DEFAULT_MAX_IMAGES,
    allowed_modes: Sequence[str] = EIGHT_BIT_MODES,
    root: Optional[Union[str, Path]] = None
) -> List[Sprite]:
    """
    Load sprites, skipping anything the atlas cannot hold.

    A sprite is kept when both sides are strictly below `max_size` and its
    Pillow mode is one of `allowed_modes`. Undecodable files are logged and
    skipped. Loading stops once `max_count` sprites have been kept.

    Args:
        paths: Candidate files, in the order they should be considered
        max_size: Exclusive per-side size limit in pixels
        max_count: Maximum number of sprites to keep (None for no cap)
        allowed_modes: Accepted Pillow image modes
        root: Directory identifiers are made relative to

    Returns:
        Loaded sprites in input order
    """
    sprites: List[Sprite] = []

    for path in paths:
        if max_count is not None and len(sprites) >= max_count:
            logger.info(f"Reached limit of {max_count} sprites, ignoring the rest")
            break

        try:
            sprite = load_sprite(path, root=root)
        except SpriteLoadError as e:
            logger.warning(f"Error: {e}")
            continue

        if sprite.width >= max_size or sprite.height >= max_size:
            logger.warning(f"Skip: {sprite.path} Reason: File too big {sprite.width}x{sprite.height}")
            continue

        if sprite.image.mode not in allowed_modes:
            logger.warning(f"Skip: {sprite.path} Reason: Not 8 bpp (mode {sprite.image.mode})")
            continue

        sprites.append(sprite)

    logger.info(f"Loaded {len(sprites)} sprites")
    return sprites
