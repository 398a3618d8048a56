"""
Packer settings.

Defaults match the classic sprite pipeline: 8-bit .bmp sprites smaller than
256px per side, packed into SpriteAtlas.png beside them.
"""

from pathlib import Path
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from spritepacker.exceptions import ConfigError
from spritepacker.packing.atlas_packer import DEFAULT_MAX_WIDTH

DEFAULT_OUTPUT_NAME = "SpriteAtlas.png"


class PackerSettings(BaseModel):
    model_config = ConfigDict(extra='forbid')

    extension: str = Field(default=".bmp", description="File suffix of sprites to collect (case-insensitive).")
    max_sprite_size: int = Field(default=256, gt=0, description="Sprites must be strictly smaller than this on both sides.")
    max_images: Optional[int] = Field(default=1024, gt=0, description="Stop collecting after this many sprites (None for no cap).")
    allowed_modes: List[str] = Field(default=["P", "L"], description="Pillow modes accepted as 8 bits per pixel.")
    max_width: int = Field(default=DEFAULT_MAX_WIDTH, gt=1, description="Widest atlas allowed, rounded down to a power of two; wider sprites fail to place.")
    output_name: str = Field(default=DEFAULT_OUTPUT_NAME, description="Atlas file name used when no output path is given.")
    pow2_height: bool = Field(default=False, description="Round the atlas height up to a power of two.")
    write_manifest: bool = Field(default=True, description="Write a JSON placement manifest beside the atlas.")

    @field_validator('extension')
    @classmethod
    def normalize_extension(cls, v):
        v = v.strip().lower()
        if not v:
            raise ValueError("extension must not be empty")
        if not v.startswith('.'):
            v = '.' + v
        return v

    @field_validator('allowed_modes')
    @classmethod
    def validate_modes(cls, v):
        if not v:
            raise ValueError("at least one image mode must be allowed")
        return v

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "PackerSettings":
        """Load settings from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
        try:
            return cls.model_validate_json(path.read_text())
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {path}: {e}") from e

    def with_overrides(self, **overrides) -> "PackerSettings":
        """Return a copy with every non-None override applied and validated."""
        data = self.model_dump()
        data.update({k: v for k, v in overrides.items() if v is not None})
        try:
            return PackerSettings.model_validate(data)
        except ValidationError as e:
            raise ConfigError(str(e)) from e
