"""
A* pathfinding over the station grid.

Costs are integers (tile steps scaled by PATH_COST_SCALE) so the frontier
heap never compares floats. Walls are never entered. Frontier ties are
broken by GridPosition.tie_key() so the same station always yields the
same path.
"""

import heapq
from typing import Dict, List, Optional, TYPE_CHECKING

from .grid import GridPosition, Tile, TileType
from .constants import PATH_COST_SCALE, PATH_SEARCH_LIMIT

if TYPE_CHECKING:
    from .station import Station


def movement_cost(current: GridPosition, next_tile: Tile) -> int:
    """
    Cost of moving from a position onto a tile. Lower is better.

    Distance between the grid positions, scaled to integers.
    """
    # TODO: weight doors once they can be locked
    return current.distance(next_tile.pos) * PATH_COST_SCALE


def movement_heuristic(a: GridPosition, b: GridPosition) -> int:
    """Manhattan distance between two grid positions"""
    return abs(a.x - b.x) + abs(a.y - b.y)


def search(
    station: 'Station',
    start: GridPosition,
    target: GridPosition
) -> Dict[GridPosition, Optional[GridPosition]]:
    """
    Explore reachable non-wall tiles from start toward target (A*).

    Args:
        station: Station to search
        start: Starting grid position
        target: Goal grid position

    Returns:
        Dict of reached position -> position we came from (None for start)
    """
    frontier = [(0, start.tie_key(), start)]

    came_from: Dict[GridPosition, Optional[GridPosition]] = {start: None}
    cost_so_far: Dict[GridPosition, int] = {start: 0}

    while frontier:
        _, _, current = heapq.heappop(frontier)

        if current == target:
            break

        for next_tile in station.get_neighbors(current):
            if next_tile.kind == TileType.WALL:
                continue

            new_cost = cost_so_far[current] + movement_cost(current, next_tile)
            if new_cost < cost_so_far.get(next_tile.pos, float('inf')):
                cost_so_far[next_tile.pos] = new_cost
                priority = new_cost + movement_heuristic(next_tile.pos, target)
                heapq.heappush(frontier, (priority, next_tile.pos.tie_key(), next_tile.pos))
                came_from[next_tile.pos] = current

    return came_from


def path_to(station: 'Station', start: GridPosition, target: GridPosition) -> List[GridPosition]:
    """
    Path from start to target that doesn't include walls.

    Returns:
        Positions from the first step up to and including target.
        Empty if start == target or target is unreachable.
    """
    if start == target:
        return []

    reachable = search(station, start, target)
    if target not in reachable:
        return []

    # Start at the end and work backwards
    path = []
    current = target
    while current != start:
        path.append(current)
        current = reachable[current]

        if len(path) > PATH_SEARCH_LIMIT:
            return []

    path.reverse()
    return path
