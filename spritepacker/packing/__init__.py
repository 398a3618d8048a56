"""
Atlas packing core.

Pure geometry: ordering, occupancy tracking and placement search.
"""
from .rectangles import Rectangle, PlacedRectangle, PlacementFailure, FailureReason, PackResult
from .ordering import order_by_area
from .occupancy import OccupancyMask
from .atlas_packer import AtlasPacker, pack_rectangles, compute_canvas_width, next_power_of_two

__all__ = [
    'Rectangle',
    'PlacedRectangle',
    'PlacementFailure',
    'FailureReason',
    'PackResult',
    'order_by_area',
    'OccupancyMask',
    'AtlasPacker',
    'pack_rectangles',
    'compute_canvas_width',
    'next_power_of_two',
]
