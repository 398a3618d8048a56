"""Insertion order for the greedy packer."""

from typing import Iterable, List

from .rectangles import Rectangle


def order_by_area(rectangles: Iterable[Rectangle]) -> List[Rectangle]:
    """
    Sort rectangles largest area first.

    Equal areas keep their input order, so the result is fully deterministic.
    """
    indexed = list(enumerate(rectangles))
    indexed.sort(key=lambda item: (-item[1].area, item[0]))
    return [rect for _, rect in indexed]
