"""
Geometry records passed in and out of the atlas packer.

The packer only ever sees these; pixel data stays with the imaging layer.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List


@dataclass(frozen=True)
class Rectangle:
    """An item to place. `identifier` is opaque and only used for reporting."""
    identifier: str
    width: int
    height: int

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"Rectangle {self.identifier!r} must have positive size, got {self.width}x{self.height}"
            )

    @property
    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class PlacedRectangle:
    """A rectangle with its top-left offset inside the atlas."""
    rectangle: Rectangle
    x: int
    y: int

    @property
    def identifier(self) -> str:
        return self.rectangle.identifier

    @property
    def width(self) -> int:
        return self.rectangle.width

    @property
    def height(self) -> int:
        return self.rectangle.height

    def intersects(self, other: "PlacedRectangle") -> bool:
        """Check if the two boxes share at least one cell."""
        return not (
            self.x + self.width <= other.x or
            self.y + self.height <= other.y or
            self.x >= other.x + other.width or
            self.y >= other.y + other.height
        )


class FailureReason(str, Enum):
    INPUT_TOO_WIDE = "input_too_wide"


@dataclass(frozen=True)
class PlacementFailure:
    """A rectangle that could not be given any position."""
    rectangle: Rectangle
    reason: FailureReason

    @property
    def identifier(self) -> str:
        return self.rectangle.identifier


@dataclass
class PackResult:
    """
    Outcome of one packing run.

    Attributes:
        width: Canvas width (power of two, fixed for the run)
        height: Final canvas height after all growth steps
        placements: Placed rectangles, in placement order
        failures: Rectangles that could not be placed
        initial_height: Square starting guess (equal to width)
        growth_steps: Canvas height after each growth, in order
    """
    width: int
    height: int
    placements: List[PlacedRectangle] = field(default_factory=list)
    failures: List[PlacementFailure] = field(default_factory=list)
    initial_height: int = 0
    growth_steps: List[int] = field(default_factory=list)

    @property
    def size(self):
        return self.width, self.height

    def rounded_height(self) -> int:
        """Smallest power of two >= height, for formats that need square-ish pow2 textures."""
        from .atlas_packer import next_power_of_two
        return next_power_of_two(self.height)

    def placement_for(self, identifier: str) -> PlacedRectangle:
        for placed in self.placements:
            if placed.identifier == identifier:
                return placed
        raise KeyError(identifier)
