from hypothesis import given, settings
from hypothesis import strategies as st

from cairn.grid import GridTopology, HexCoordinate
from cairn.pathfinding import escape_distance, shortest_escape_route


def c(col, row):
    return HexCoordinate(col, row)


def brute_force_distance(start, obstacles, topology):
    """Distance to the boundary by relaxing every free cell until stable."""
    free = [cell for cell in topology.cells() if cell not in obstacles]
    inf = float("inf")
    dist = {cell: (0 if topology.is_boundary(cell) else inf) for cell in free}
    changed = True
    while changed:
        changed = False
        for cell in free:
            for neighbor in topology.neighbors(cell):
                if neighbor in dist and dist[neighbor] + 1 < dist[cell]:
                    dist[cell] = dist[neighbor] + 1
                    changed = True
    return None if dist[start] == inf else dist[start]


@st.composite
def boards(draw):
    topology = GridTopology(draw(st.integers(3, 7)), draw(st.integers(3, 7)))
    cells = list(topology.cells())
    start = draw(st.sampled_from(cells))
    obstacles = draw(st.sets(st.sampled_from(cells), max_size=len(cells)))
    obstacles.discard(start)
    return topology, start, obstacles


@settings(max_examples=200, deadline=None)
@given(boards())
def test_route_length_matches_brute_force(board):
    topology, start, obstacles = board
    route = shortest_escape_route(start, obstacles, topology)
    expected = brute_force_distance(start, obstacles, topology)

    if expected is None:
        assert route is None
        return

    assert route is not None
    assert len(route) - 1 == expected
    assert route[0] == start
    assert topology.is_boundary(route[-1])
    for a, b in zip(route, route[1:]):
        assert b in topology.neighbors(a)
    assert not any(cell in obstacles for cell in route)


def test_empty_board_route_from_center():
    topology = GridTopology(11, 10)
    route = shortest_escape_route(topology.center, set(), topology)
    assert route[0] == c(5, 5)
    assert len(route) == 5
    assert route[-1].row == 9
    assert escape_distance(topology.center, set(), topology) == 4


def test_tie_break_follows_neighbor_order():
    topology = GridTopology(5, 5)
    assert shortest_escape_route(c(2, 2), set(), topology) == [c(2, 2), c(1, 2), c(0, 2)]


def test_blocking_first_route_takes_opposite_side():
    topology = GridTopology(5, 5)
    route = shortest_escape_route(c(2, 2), {c(1, 2)}, topology)
    assert route == [c(2, 2), c(3, 2), c(4, 2)]


def test_surrounded_start_has_no_route():
    topology = GridTopology(5, 5)
    obstacles = set(topology.neighbors(c(2, 2)))
    assert shortest_escape_route(c(2, 2), obstacles, topology) is None
    assert escape_distance(c(2, 2), obstacles, topology) is None


def test_enclosed_region_has_no_route():
    topology = GridTopology(7, 7)
    ring = set()
    for cell in [c(3, 3)] + list(topology.neighbors(c(3, 3))):
        ring.update(topology.neighbors(cell))
    ring -= {c(3, 3)} | set(topology.neighbors(c(3, 3)))
    assert shortest_escape_route(c(3, 3), ring, topology) is None


def test_start_on_boundary_is_single_cell_route():
    topology = GridTopology(5, 5)
    assert shortest_escape_route(c(0, 2), set(), topology) == [c(0, 2)]


def test_obstacles_outside_grid_are_ignored():
    topology = GridTopology(5, 5)
    route = shortest_escape_route(c(2, 2), {c(-1, 2), c(9, 9)}, topology)
    assert route == [c(2, 2), c(1, 2), c(0, 2)]
