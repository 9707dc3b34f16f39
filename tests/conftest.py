import pytest

from cairn import BoardState, EvasionAgent, GridTopology, HexCoordinate


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


def make_board(width=5, height=5, agent=(2, 2), obstacles=()):
    topology = GridTopology(width, height)
    return BoardState(
        topology,
        EvasionAgent(HexCoordinate(*agent)),
        [HexCoordinate(*c) for c in obstacles],
    )


@pytest.fixture()
def clock():
    return FakeClock()
