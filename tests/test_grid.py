import pytest

from cairn.grid import Direction, GridTopology, HexCoordinate


def c(col, row):
    return HexCoordinate(col, row)


def test_odd_row_neighbors_in_table_order():
    topology = GridTopology(11, 10)
    assert topology.neighbors(c(5, 5)) == (
        c(4, 5), c(6, 5), c(5, 4), c(6, 4), c(5, 6), c(6, 6),
    )


def test_even_row_neighbors_in_table_order():
    topology = GridTopology(5, 5)
    assert topology.neighbors(c(2, 2)) == (
        c(1, 2), c(3, 2), c(1, 1), c(2, 1), c(1, 3), c(2, 3),
    )


def test_corner_neighbors_exclude_out_of_bounds():
    topology = GridTopology(5, 5)
    assert topology.neighbors(c(0, 0)) == (c(1, 0), c(0, 1))
    assert all(topology.is_in_bounds(n) for n in topology.neighbors(c(4, 4)))


def test_adjacency_is_symmetric():
    topology = GridTopology(6, 5)
    for cell in topology.cells():
        neighbors = topology.neighbors(cell)
        assert len(neighbors) <= 6
        for neighbor in neighbors:
            assert cell in topology.neighbors(neighbor)


@pytest.mark.parametrize("cell, expected", [
    ((0, 3), True),
    ((10, 3), True),
    ((3, 0), True),
    ((3, 9), True),
    ((5, 5), False),
    ((1, 1), False),
])
def test_boundary_membership(cell, expected):
    assert GridTopology(11, 10).is_boundary(c(*cell)) is expected


def test_bounds_and_center():
    topology = GridTopology(11, 10)
    assert topology.is_in_bounds(c(10, 9))
    assert not topology.is_in_bounds(c(-1, 0))
    assert not topology.is_in_bounds(c(11, 0))
    assert not topology.is_in_bounds(c(0, 10))
    assert topology.center == c(5, 5)
    assert topology.cell_count == 110
    assert len(list(topology.cells())) == 110


def test_direction_between():
    topology = GridTopology(11, 10)
    assert topology.direction_between(c(5, 5), c(6, 4)) is Direction.NORTH_EAST
    assert topology.direction_between(c(2, 2), c(2, 1)) is Direction.NORTH_EAST
    assert topology.direction_between(c(2, 2), c(1, 3)) is Direction.SOUTH_WEST
    assert topology.direction_between(c(2, 2), c(4, 2)) is None
    assert Direction.WEST.degrees == 270


def test_distance():
    topology = GridTopology(11, 10)
    for neighbor in topology.neighbors(c(5, 5)):
        assert topology.distance(c(5, 5), neighbor) == 1
    assert topology.distance(c(5, 5), c(5, 9)) == 4
    assert topology.distance(c(0, 0), c(4, 4)) == 6


def test_coordinate_serialisation():
    cell = c(3, 7)
    assert cell.to_dict() == {"col": 3, "row": 7}
    assert HexCoordinate.from_dict({"col": 3, "row": 7}) == cell
    assert str(cell) == "(3,7)"


@pytest.mark.parametrize("data", [
    {"col": "3", "row": 7},
    {"col": 0.9, "row": 0},
    {"col": float("inf"), "row": 0},
    {"col": True, "row": 0},
])
def test_coordinate_rejects_non_integers(data):
    with pytest.raises(ValueError):
        HexCoordinate.from_dict(data)
