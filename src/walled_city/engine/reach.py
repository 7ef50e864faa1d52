from __future__ import annotations
from collections import deque
from typing import Optional

from .geometry import Coordinate, Direction, DIRECTIONS
from .grid import Cell, Grid

# Wall grids index the edge between two cells by the cell on its upper/left
# side: horizontal[c] sits between c and c.move(DOWN), vertical[c] between c
# and c.move(RIGHT).
#
# The BFS helpers below write into buffers owned by the caller. They clear
# the buffer first, so results never depend on a previous call, but a buffer
# must not be shared between two searches running at the same time.


def can_step(
    horizontal: Grid[Cell],
    vertical: Grid[Cell],
    current: Coordinate,
    direction: Direction,
) -> bool:
    """Whether no wall blocks the edge from ``current`` towards ``direction``.

    The neighbour must already be known to lie on the board.
    """
    if direction is Direction.RIGHT:
        return vertical.get(current).is_empty()
    if direction is Direction.LEFT:
        return vertical.get(current.move(direction)).is_empty()
    if direction is Direction.DOWN:
        return horizontal.get(current).is_empty()
    return horizontal.get(current.move(direction)).is_empty()


def reachable(
    area: Grid[bool],
    horizontal: Grid[Cell],
    vertical: Grid[Cell],
    start: Coordinate,
    blocker: Optional[Coordinate] = None,
    max_steps: Optional[int] = None,
) -> Grid[bool]:
    """Mark every cell within ``max_steps`` hops of ``start`` in ``area``.

    ``blocker`` (the other pawn) is never entered; pass ``None`` to walk
    through it. ``max_steps=None`` searches the whole board.
    """
    area.clear()
    width, height = area.width, area.height
    area.set(start, True)
    queue = deque([(start, 0)])
    while queue:
        current, steps = queue.popleft()
        if steps == max_steps:
            continue
        for direction in DIRECTIONS:
            nxt = current.move(direction)
            if not nxt.inside(width, height):
                continue
            if nxt == blocker:
                continue
            if area.get(nxt):
                continue
            if can_step(horizontal, vertical, current, direction):
                area.set(nxt, True)
                queue.append((nxt, steps + 1))
    return area


def distances(
    steps: Grid[int],
    horizontal: Grid[Cell],
    vertical: Grid[Cell],
    start: Coordinate,
    blocker: Coordinate,
) -> Grid[int]:
    """Fill ``steps`` with shortest hop counts from ``start``; -1 if unreached."""
    steps.clear()
    width, height = steps.width, steps.height
    steps.set(start, 0)
    queue = deque([start])
    while queue:
        current = queue.popleft()
        d = steps.get(current)
        for direction in DIRECTIONS:
            nxt = current.move(direction)
            if not nxt.inside(width, height):
                continue
            if nxt == blocker or steps.get(nxt) != -1:
                continue
            if can_step(horizontal, vertical, current, direction):
                steps.set(nxt, d + 1)
                queue.append(nxt)
    return steps
