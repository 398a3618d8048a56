"""
Shared fixtures: small indexed sprites written to a temporary directory.
"""
import pytest
from PIL import Image


# Every entry is unique (first channel is the index)
TEST_PALETTE = [(i, 255 - i, (i * 7) % 256) for i in range(256)]


@pytest.fixture
def palette_colors():
    return list(TEST_PALETTE)


@pytest.fixture
def write_sprite(tmp_path):
    """Write a solid-color sprite under tmp_path and return its path."""
    def _write(relpath, size, index=1, mode="P"):
        path = tmp_path / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        img = Image.new(mode, size, index if mode in ("P", "L") else TEST_PALETTE[index])
        if mode == "P":
            img.putpalette([c for color in TEST_PALETTE for c in color])
        img.save(path)
        return path
    return _write
