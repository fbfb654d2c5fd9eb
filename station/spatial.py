"""
Spatial helpers for grid and world coordinates.

Ranks candidate item locations by grid (Manhattan) distance using a
scipy cKDTree, and provides the easing used for tile-to-tile movement.
"""

import numpy as np
from typing import List, Tuple
from scipy.spatial import cKDTree

from .grid import GridPosition

# cKDTree build parameters
CKDTREE_LEAFSIZE = 16


def rank_by_manhattan(origin: GridPosition, positions: List[GridPosition]) -> List[Tuple[int, GridPosition]]:
    """
    Order candidate positions by Manhattan distance from origin.

    Manhattan distance is a lower bound on path length through the grid,
    so callers can stop pathing once the next candidate is no closer than
    the best path found.

    Args:
        origin: Reference grid position
        positions: Candidate positions (e.g., from Station.find_items)

    Returns:
        List of (distance, position), nearest first, ties by position
    """
    if not positions:
        return []

    coords = np.array([[p.x, p.y] for p in positions], dtype=np.float64)
    tree = cKDTree(coords, leafsize=CKDTREE_LEAFSIZE)

    # p=1 selects the Manhattan metric
    k = len(positions)
    dists, idxs = tree.query([origin.x, origin.y], k=k, p=1)
    dists = np.atleast_1d(dists)
    idxs = np.atleast_1d(idxs)

    ranked = [(int(round(d)), positions[int(i)]) for d, i in zip(dists, idxs)]
    ranked.sort(key=lambda pair: (pair[0], pair[1]))
    return ranked


def ease_in_out(t: float) -> float:
    """
    Cubic ease-in-out on [0, 1].

    Clamps t so callers can pass raw elapsed fractions.
    """
    t = 0.0 if t < 0.0 else (1.0 if t > 1.0 else t)
    if t < 0.5:
        return 4.0 * t * t * t
    return 1.0 - ((-2.0 * t + 2.0) ** 3) / 2.0


def lerp(source: np.ndarray, target: np.ndarray, t: float) -> np.ndarray:
    """Linear interpolation between two world positions"""
    return source + (target - source) * t
