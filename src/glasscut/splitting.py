"""Advisory cuts across oversized fill cells."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .geometry import distance, midpoint, polygon_area
from .models import Cell, ExtraCut

logger = logging.getLogger(__name__)

# A fill cell larger than this fraction of the canvas gets an extra cut.
MAX_PIECE_FRACTION = 0.12


def longest_edge_index(polygon: Sequence) -> int:
    """Index *i* of the longest segment ``polygon[i] → polygon[i+1]``.

    Ties resolve to the first such segment.
    """
    best_len = -1.0
    best_idx = 0
    n = len(polygon)
    for i in range(n):
        length = distance(polygon[i], polygon[(i + 1) % n])
        if length > best_len:
            best_len = length
            best_idx = i
    return best_idx


def split_cut(cell: Cell) -> Optional[ExtraCut]:
    """Cut from the midpoint of the longest edge to the roughly opposite edge."""
    poly = cell.polygon
    n = len(poly)
    if n < 3:
        return None
    a = longest_edge_index(poly)
    b = (a + n // 2) % n
    start = midpoint(poly[a], poly[(a + 1) % n])
    end = midpoint(poly[b], poly[(b + 1) % n])
    return ExtraCut(start, end, cell.seed_index)


def find_extra_cuts(
    cells: Sequence[Cell],
    width: float,
    height: float,
    max_fraction: float = MAX_PIECE_FRACTION,
) -> List[ExtraCut]:
    """One :class:`ExtraCut` per fill cell whose area exceeds the threshold.

    Primary cells are never split and no polygon is modified.
    """
    threshold = max_fraction * width * height
    cuts: List[ExtraCut] = []
    for cell in cells:
        if not cell.ring_role.is_fill:
            continue
        if polygon_area(cell.polygon) <= threshold:
            continue
        cut = split_cut(cell)
        if cut is not None:
            cuts.append(cut)
    logger.debug("splitter: %d oversized fill cells", len(cuts))
    return cuts
