"""
Greedy row-scan atlas packer.

Packs rectangles into a canvas whose width is a fixed power of two and whose
height grows lazily. Each rectangle takes the first free spot found scanning
rows top to bottom and columns left to right.

Based on the simple mask approach from:
https://gamedev.stackexchange.com/questions/2829/texture-packing-algorithm
"""

import logging
import math
from typing import Iterable, List, Optional, Sequence, Tuple

from .occupancy import OccupancyMask
from .ordering import order_by_area
from .rectangles import (
    FailureReason,
    PackResult,
    PlacedRectangle,
    PlacementFailure,
    Rectangle,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_WIDTH = 8192


def next_power_of_two(n: int) -> int:
    """Return the smallest power of 2 >= n, never less than 2."""
    size = 2
    while size < n:
        size *= 2
    return size


def power_of_two_floor(n: int) -> int:
    """Return the largest power of 2 <= n, never less than 2."""
    size = 2
    while size * 2 <= n:
        size *= 2
    return size


def compute_canvas_width(rectangles: Sequence[Rectangle], max_width: int = DEFAULT_MAX_WIDTH) -> int:
    """
    Pick the atlas width from the total area and the widest rectangle.

    The width never exceeds the largest power of two <= `max_width`.
    Rectangles wider than that cap can never be placed, so they are left
    out of the estimate and the canvas is sized from the rest.
    """
    cap = power_of_two_floor(max_width)
    sized = [r for r in rectangles if r.width <= cap]

    total_area = sum(r.area for r in sized)
    desired_width = math.isqrt(total_area)

    if sized:
        desired_width = max(desired_width, max(r.width for r in sized))

    return min(next_power_of_two(desired_width), cap)


class AtlasPacker:
    """
    Places rectangles one at a time into a fixed-width, growing-height canvas.

    Each instance owns its own mask, so separate packers can run side by side.

    Example:
        >>> packer = AtlasPacker(64)
        >>> packer.place(Rectangle("a", 32, 32))
        PlacedRectangle(rectangle=Rectangle(identifier='a', width=32, height=32), x=0, y=0)
    """

    def __init__(self, width: int, height: Optional[int] = None):
        self.width = width
        self.initial_height = width if height is None else height
        self.mask = OccupancyMask(width, self.initial_height)
        self.placements: List[PlacedRectangle] = []
        self.failures: List[PlacementFailure] = []
        self.growth_steps: List[int] = []

    @property
    def height(self) -> int:
        return self.mask.height

    def _grow(self, amount: int) -> None:
        new_height = self.mask.height + amount
        self.mask.grow(new_height)
        self.growth_steps.append(new_height)
        logger.debug(f"Canvas grown to {self.width}x{new_height}")

    def _find_position(self, ix: int, iy: int) -> Optional[Tuple[int, int]]:
        y = 0
        while y < self.mask.height:
            # Grow one step early (>=) so the box below row y is always in bounds
            if y + iy >= self.mask.height:
                self._grow(iy)

            x = self.mask.first_free_x(y, ix, iy)
            if x is not None:
                return x, y
            y += 1
        return None

    def _fail(self, rect: Rectangle, reason: FailureReason) -> None:
        logger.warning(f"Can't fit {rect.identifier} {rect.width}x{rect.height} ({reason.value})")
        self.failures.append(PlacementFailure(rect, reason))

    def place(self, rect: Rectangle) -> Optional[PlacedRectangle]:
        """
        Place a single rectangle.

        Returns:
            The PlacedRectangle, or None when the rectangle was recorded as a failure.
        """
        if rect.width > self.width:
            self._fail(rect, FailureReason.INPUT_TOO_WIDE)
            return None

        position = self._find_position(rect.width, rect.height)
        if position is None:
            self._fail(rect, FailureReason.INPUT_TOO_WIDE)
            return None

        x, y = position
        self.mask.mark(x, y, rect.width, rect.height)
        placed = PlacedRectangle(rect, x, y)
        self.placements.append(placed)
        logger.info(f"{rect.identifier} {x}x{y}")
        return placed

    def place_all(self, rectangles: Iterable[Rectangle]) -> None:
        for rect in rectangles:
            self.place(rect)

    def result(self) -> PackResult:
        return PackResult(
            width=self.width,
            height=self.height,
            placements=list(self.placements),
            failures=list(self.failures),
            initial_height=self.initial_height,
            growth_steps=list(self.growth_steps),
        )


def pack_rectangles(
    rectangles: Iterable[Rectangle],
    max_width: int = DEFAULT_MAX_WIDTH,
    order: bool = True
) -> PackResult:
    """
    Pack rectangles into a single atlas.

    Args:
        rectangles: Items to place
        max_width: Widest canvas the caller can accept; wider items are failures
        order: Sort largest area first before placing (disable if already ordered)

    Returns:
        PackResult with canvas size, placements and failures. Every input
        rectangle lands in exactly one of placements or failures.
    """
    rects = list(rectangles)
    if order:
        rects = order_by_area(rects)

    width = compute_canvas_width(rects, max_width)
    packer = AtlasPacker(width)
    packer.place_all(rects)

    result = packer.result()
    logger.info(
        f"Packed {len(result.placements)}/{len(rects)} rectangles into "
        f"{result.width}x{result.height} atlas"
    )
    return result
