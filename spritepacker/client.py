"""
Core SpritePacker client API

Provides the SpritePacker class that runs discovery, packing and compositing,
and the AtlasResult class for inspecting and saving the packed atlas.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image

from spritepacker.config import PackerSettings
from spritepacker.imaging.compositor import compose_atlas, save_atlas
from spritepacker.imaging.palette import Color, color_map_from_image, load_color_map
from spritepacker.imaging.source import Sprite, find_sprite_files, load_sprites
from spritepacker.packing.atlas_packer import pack_rectangles
from spritepacker.packing.rectangles import PackResult
from spritepacker.schema.manifest import AtlasManifest, build_manifest

logger = logging.getLogger(__name__)


@dataclass
class AtlasResult:
    """
    A packed atlas ready to be composited and saved.

    Attributes:
        pack: Packer output (canvas size, placements, failures)
        sprites: Sprites that took part in packing
        color_map: 256-entry palette for the output image
        settings: Settings the atlas was built with
    """
    pack: PackResult
    sprites: List[Sprite]
    color_map: List[Color]
    settings: PackerSettings = field(default_factory=PackerSettings)

    @property
    def size(self):
        """(width, height) of the image that will be written."""
        return self.pack.width, self.output_height

    @property
    def output_height(self) -> int:
        return self.pack.rounded_height() if self.settings.pow2_height else self.pack.height

    def to_image(self) -> Image.Image:
        """Composite the sprites into an indexed PIL image."""
        return compose_atlas(self.pack, self.sprites, self.color_map, pow2_height=self.settings.pow2_height)

    def to_manifest(self, image_name: Optional[str] = None) -> AtlasManifest:
        return build_manifest(self.pack, image_name or self.settings.output_name, height=self.output_height)

    def save(self, path: Union[str, Path], manifest: Optional[bool] = None) -> Path:
        """
        Write the atlas PNG, and the JSON manifest beside it.

        Args:
            path: Output image path
            manifest: Write `<path>.json` too (defaults to settings.write_manifest)

        Returns:
            Path of the written image
        """
        path = Path(path)
        save_atlas(self.to_image(), path)

        if manifest is None:
            manifest = self.settings.write_manifest
        if manifest:
            manifest_path = path.with_suffix('.json')
            with open(manifest_path, 'w') as f:
                f.write(self.to_manifest(path.name).model_dump_json(indent=2))
            logger.info(f"Saved manifest to {manifest_path}")

        return path


class SpritePacker:
    """
    Main client for packing a directory of sprites into one atlas.

    Examples:
        >>> packer = SpritePacker()
        >>> packer.build("assets/sprites").save("assets/SpriteAtlas.png")

        Custom settings:
        >>> packer = SpritePacker(PackerSettings(extension=".png", max_sprite_size=128))
        >>> result = packer.build("assets", palette="palette.bmp")
        >>> print(result.size, len(result.pack.failures))
    """

    def __init__(self, settings: Optional[PackerSettings] = None):
        self.settings = settings or PackerSettings()

    def find(self, root: Union[str, Path]) -> List[Path]:
        """List candidate sprite files under `root`."""
        return find_sprite_files(root, self.settings.extension)

    def load(self, files: List[Path], root: Optional[Union[str, Path]] = None) -> List[Sprite]:
        """Decode and filter candidate files."""
        s = self.settings
        return load_sprites(
            files,
            max_size=s.max_sprite_size,
            max_count=s.max_images,
            allowed_modes=s.allowed_modes,
            root=root,
        )

    def collect(self, root: Union[str, Path]) -> List[Sprite]:
        """Find and load every usable sprite under `root`."""
        return self.load(self.find(root), root=root)

    def pack(self, sprites: List[Sprite]) -> PackResult:
        return pack_rectangles([sprite.rectangle for sprite in sprites], max_width=self.settings.max_width)

    def resolve_color_map(
        self,
        sprites: List[Sprite],
        palette: Optional[Union[str, Path]] = None
    ) -> List[Color]:
        """
        Pick the atlas color map.

        The palette image wins when given; otherwise the first indexed sprite's
        palette is used. Grayscale-only sprites get a gray ramp, so their
        values keep their brightness. With no sprites at all the map is all black.
        """
        if palette is not None:
            return load_color_map(palette)
        for sprite in sprites:
            if sprite.image.mode == "P":
                logger.info(f"Using palette of {sprite.identifier}")
                return color_map_from_image(sprite.image)
        if not sprites:
            return [(0, 0, 0)] * 256
        logger.info("No indexed sprite found, using a grayscale palette")
        return [(i, i, i) for i in range(256)]

    def build(
        self,
        root: Union[str, Path] = ".",
        palette: Optional[Union[str, Path]] = None
    ) -> AtlasResult:
        """
        Collect, order and pack all sprites under `root`.

        Args:
            root: Directory searched recursively for sprites
            palette: Reference image whose color map the atlas uses

        Returns:
            AtlasResult: packed layout plus everything needed to save it
        """
        sprites = self.collect(root)
        color_map = self.resolve_color_map(sprites, palette)
        result = self.pack(sprites)
        return AtlasResult(pack=result, sprites=sprites, color_map=color_map, settings=self.settings)

    def layout(self, root: Union[str, Path] = ".") -> AtlasManifest:
        """Pack without compositing and return the manifest only."""
        sprites = self.collect(root)
        result = self.pack(sprites)
        height = result.rounded_height() if self.settings.pow2_height else result.height
        return build_manifest(result, self.settings.output_name, height=height)

