"""
Escape route search.

Breadth-first search from the agent's cell to the nearest boundary cell.
Every step costs 1, so the first boundary cell dequeued ends a shortest route.
Among equally short routes the neighbour table order decides.
"""

from collections import deque
from typing import Collection, Optional

from .grid import GridTopology, HexCoordinate


def shortest_escape_route(
    start: HexCoordinate,
    obstacles: Collection[HexCoordinate],
    topology: GridTopology,
) -> Optional[list[HexCoordinate]]:
    """Return the shortest route from start to the boundary, start included.

    Returns None when the boundary is unreachable (the agent is trapped).
    """
    parent: dict[HexCoordinate, Optional[HexCoordinate]] = {start: None}
    queue = deque([start])

    while queue:
        current = queue.popleft()

        if topology.is_boundary(current):
            route = []
            step: Optional[HexCoordinate] = current
            while step is not None:
                route.append(step)
                step = parent[step]
            return list(reversed(route))

        for neighbor in topology.neighbors(current):
            if neighbor in parent or neighbor in obstacles:
                continue
            parent[neighbor] = current
            queue.append(neighbor)

    return None


def escape_distance(
    start: HexCoordinate,
    obstacles: Collection[HexCoordinate],
    topology: GridTopology,
) -> Optional[int]:
    """Number of steps on the shortest escape route, None if trapped."""
    route = shortest_escape_route(start, obstacles, topology)
    if route is None:
        return None
    return len(route) - 1
