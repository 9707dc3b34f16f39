from cairn.grid import Direction, HexCoordinate

from conftest import make_board


def c(col, row):
    return HexCoordinate(col, row)


def test_next_step_follows_first_route_cell():
    board = make_board()
    step = board.agent.compute_next_step(board)
    assert step.next_cell == c(1, 2)
    assert not step.will_escape
    assert not step.captured


def test_next_step_onto_boundary_will_escape():
    board = make_board(agent=(1, 2))
    step = board.agent.compute_next_step(board)
    assert step.next_cell == c(0, 2)
    assert step.will_escape


def test_surrounded_agent_is_captured():
    board = make_board()
    board.obstacles.update(board.topology.neighbors(c(2, 2)))
    step = board.agent.compute_next_step(board)
    assert step.captured
    assert step.next_cell is None


def test_route_is_recomputed_after_each_obstacle():
    board = make_board()
    assert board.agent.compute_next_step(board).next_cell == c(1, 2)
    board.obstacles.add(c(1, 2))
    assert board.agent.compute_next_step(board).next_cell == c(3, 2)


def test_move_updates_facing():
    board = make_board()
    agent = board.agent
    assert agent.facing is None
    assert agent.facing_degrees == 0

    agent.move_to(c(3, 2), board)
    assert agent.position == c(3, 2)
    assert agent.facing is Direction.EAST
    assert agent.facing_degrees == 90

    agent.move_to(c(2, 1), board)
    assert agent.facing is Direction.NORTH_WEST
    assert agent.facing_degrees == 330
