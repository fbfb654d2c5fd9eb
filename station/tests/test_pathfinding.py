"""
Test A* pathfinding over the station grid.

Verifies:
- Straight corridors give the direct path
- Paths route around walls and never enter them
- Unreachable targets, wall targets and start == target give []
- Same station, same path
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from station.grid import GridPosition, Tile, TileType, WallDirection
from station.station import Station
from station.pathfinding import path_to, movement_cost, movement_heuristic


def make_room(width: int, height: int, walls=()) -> Station:
    """Rectangular room of floors with some cells replaced by walls"""
    s = Station()
    wall_set = set(walls)
    for x in range(width):
        for y in range(height):
            if (x, y) in wall_set:
                s.add_tile(Tile(GridPosition(x, y), TileType.WALL, WallDirection.FULL))
            else:
                s.add_tile(Tile(GridPosition(x, y), TileType.FLOOR))
    return s


def assert_connected(start: GridPosition, path):
    """Each step moves exactly one tile"""
    previous = start
    for pos in path:
        assert previous.distance(pos) == 1, f"Jump from {previous} to {pos}"
        previous = pos


def test_costs():
    a = GridPosition(0, 0)
    tile = Tile(GridPosition(0, 1), TileType.FLOOR)

    assert movement_cost(a, tile) == 1000
    assert movement_heuristic(a, GridPosition(3, 4)) == 7


def test_corridor():
    s = make_room(5, 1)

    path = path_to(s, GridPosition(0, 0), GridPosition(4, 0))
    assert path == [GridPosition(1, 0), GridPosition(2, 0), GridPosition(3, 0), GridPosition(4, 0)]

    # Backwards works too
    path = s.path_to(GridPosition(4, 0), GridPosition(0, 0))
    assert path == [GridPosition(3, 0), GridPosition(2, 0), GridPosition(1, 0), GridPosition(0, 0)]

    print("[OK] Corridor path\n")


def test_around_wall():
    # Wall column at x=2 with a gap at the bottom
    s = make_room(5, 3, walls=[(2, 0), (2, 1)])
    start, target = GridPosition(0, 0), GridPosition(4, 0)

    path = path_to(s, start, target)

    assert len(path) == 8, f"Expected detour of 8 steps, got {len(path)}"
    assert path[-1] == target
    assert GridPosition(2, 2) in path
    assert_connected(start, path)
    for pos in path:
        assert s.get_tile(pos).kind != TileType.WALL

    print(f"[OK] Detour path: {[str(p) for p in path]}\n")


def test_path_is_shortest_in_open_room():
    s = make_room(6, 6)
    start, target = GridPosition(0, 0), GridPosition(5, 3)

    path = path_to(s, start, target)

    assert len(path) == start.distance(target)
    assert path[-1] == target
    assert_connected(start, path)


def test_unreachable():
    # Full wall column splits the room in two
    s = make_room(5, 3, walls=[(2, 0), (2, 1), (2, 2)])

    assert path_to(s, GridPosition(0, 0), GridPosition(4, 0)) == []

    print("[OK] Unreachable target gives empty path\n")


def test_target_is_wall():
    s = make_room(3, 3, walls=[(2, 2)])
    assert path_to(s, GridPosition(0, 0), GridPosition(2, 2)) == []


def test_target_missing():
    s = make_room(3, 3)
    assert path_to(s, GridPosition(0, 0), GridPosition(10, 10)) == []


def test_start_is_target():
    s = make_room(3, 3)
    assert path_to(s, GridPosition(1, 1), GridPosition(1, 1)) == []


def test_deterministic():
    s = make_room(7, 7, walls=[(3, 1), (3, 2), (3, 3), (3, 4)])
    start, target = GridPosition(0, 3), GridPosition(6, 3)

    first = path_to(s, start, target)
    for _ in range(5):
        assert path_to(s, start, target) == first


if __name__ == '__main__':
    test_costs()
    test_corridor()
    test_around_wall()
    test_path_is_shortest_in_open_room()
    test_unreachable()
    test_target_is_wall()
    test_target_missing()
    test_start_is_target()
    test_deterministic()
    print("All pathfinding tests passed!")
