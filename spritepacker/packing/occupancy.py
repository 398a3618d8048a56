"""
Occupancy mask for the atlas packer.

Cells are stored in a flat row-major numpy buffer, `cells[y * width + x]`.
Because rows are contiguous, growing the canvas downward only appends cells:
the old buffer is copied as the prefix of the new one.
"""

import logging
from typing import Optional, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class OccupancyMask:
    """Boolean grid of covered canvas cells. Width is fixed, height only grows."""

    def __init__(self, width: int, height: int):
        if width <= 0 or height < 0:
            raise ValueError(f"Invalid mask size {width}x{height}")
        self.width = width
        self.height = height
        self._cells = np.zeros(width * height, dtype=bool)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def _grid(self) -> np.ndarray:
        return self._cells.reshape(self.height, self.width)

    def __getitem__(self, point: Tuple[int, int]) -> bool:
        x, y = point
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) outside {self.width}x{self.height} mask")
        return bool(self._cells[y * self.width + x])

    def occupied_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def grow(self, new_height: int) -> None:
        """Extend the mask downward to `new_height` rows, keeping every set cell."""
        if new_height < self.height:
            raise ValueError(f"Mask height cannot shrink ({self.height} -> {new_height})")
        if new_height == self.height:
            return
        logger.debug(f"Resize: {self.width}x{new_height}")
        cells = np.zeros(self.width * new_height, dtype=bool)
        cells[:self._cells.size] = self._cells
        self._cells = cells
        self.height = new_height

    def _check_box(self, x: int, y: int, w: int, h: int) -> None:
        if w <= 0 or h <= 0:
            raise ValueError(f"Box must have positive size, got {w}x{h}")
        if x < 0 or y < 0 or x + w > self.width or y + h > self.height:
            raise ValueError(
                f"Box {w}x{h} at ({x}, {y}) outside {self.width}x{self.height} mask"
            )

    def is_free(self, x: int, y: int, w: int, h: int) -> bool:
        """True when no cell of the box [x, x+w) x [y, y+h) is occupied."""
        self._check_box(x, y, w, h)
        return not self._grid()[y:y + h, x:x + w].any()

    def mark(self, x: int, y: int, w: int, h: int) -> None:
        """Mark the box occupied. The box must be entirely free."""
        if not self.is_free(x, y, w, h):
            raise ValueError(f"Box {w}x{h} at ({x}, {y}) overlaps an occupied cell")
        self._grid()[y:y + h, x:x + w] = True

    def first_free_x(self, y: int, w: int, h: int) -> Optional[int]:
        """
        Leftmost x where the box [x, x+w) x [y, y+h) is free, or None.

        Same answer as trying is_free() for x = 0, 1, ... in turn, computed
        for the whole row band at once.
        """
        self._check_box(0, y, w, h)
        blocked = self._grid()[y:y + h].any(axis=0).astype(np.int64)
        sums = np.concatenate(([0], np.cumsum(blocked)))
        window = sums[w:] - sums[:-w]
        free = np.flatnonzero(window == 0)
        return int(free[0]) if free.size else None
