"""Path validation for the line a player traces across the grid.

Every extension is checked in a fixed order:

1. the candidate must not already be on the line,
2. both the source (last visited cell) and the candidate must hold pieces,
3. the two pieces must be distinct,
4. the pieces must share a color, shape or sound,
5. the candidate must be one of the source's eight neighbours,
6. the line plus the candidate must not cross itself.

A candidate next to (or on) the bomb marker skips rules 4-6: the bomb acts
as a wildcard connector.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple, Union

from bombline.components.cell_line import CellLine
from bombline.components.grid import Grid
from bombline.systems.grid_ops import get_piece, neighbor_positions
from bombline.utils.geometry import has_self_intersections, is_neighbor, within_reach

Position = Tuple[int, int]


class RejectReason(Enum):
    REVISIT = "revisit"
    EMPTY_CELL = "empty_cell"
    SAME_PIECE = "same_piece"
    NO_SHARED_ATTRIBUTE = "no_shared_attribute"
    NOT_ADJACENT = "not_adjacent"
    SELF_INTERSECTION = "self_intersection"
    NO_PATH = "no_path"


@dataclass(frozen=True, slots=True)
class Accepted:
    position: Position
    via_bomb: bool = False


@dataclass(frozen=True, slots=True)
class Rejected:
    position: Position
    reason: RejectReason


ExtendOutcome = Union[Accepted, Rejected]


def begin(line: CellLine, position: Position) -> Accepted:
    """Start a new line; the first selection is always accepted."""
    if line.visited:
        raise RuntimeError("A line is already in progress")
    line.visited.append(position)
    return Accepted(position)


def cancel(line: CellLine) -> None:
    line.visited.clear()


def evaluate(
    grid: Grid,
    visited: Sequence[Position],
    candidate: Position,
    bomb_position: Position | None,
) -> ExtendOutcome:
    """Validate candidate against the line without mutating anything."""
    if not visited:
        return Rejected(candidate, RejectReason.NO_PATH)
    if candidate in visited:
        return Rejected(candidate, RejectReason.REVISIT)
    source = get_piece(grid, visited[-1])
    target = get_piece(grid, candidate)
    if source is None or target is None:
        return Rejected(candidate, RejectReason.EMPTY_CELL)
    if source.id == target.id:
        return Rejected(candidate, RejectReason.SAME_PIECE)
    if bomb_position is not None and within_reach(candidate, bomb_position):
        return Accepted(candidate, via_bomb=True)
    if not source.shares_attribute(target):
        return Rejected(candidate, RejectReason.NO_SHARED_ATTRIBUTE)
    if not is_neighbor(visited[-1], candidate):
        return Rejected(candidate, RejectReason.NOT_ADJACENT)
    if has_self_intersections(list(visited) + [candidate]):
        return Rejected(candidate, RejectReason.SELF_INTERSECTION)
    return Accepted(candidate)


def extend(
    line: CellLine,
    grid: Grid,
    candidate: Position,
    bomb_position: Position | None,
) -> ExtendOutcome:
    outcome = evaluate(grid, line.visited, candidate, bomb_position)
    if isinstance(outcome, Accepted):
        line.visited.append(candidate)
    return outcome


def has_exit(
    grid: Grid,
    target: Position,
    visited: Sequence[Position],
    bomb_position: Position | None,
) -> bool:
    """Can a line ending at target still grow by one more cell?

    visited is the line so far; target is appended when it is not already
    the last entry.
    """
    if bomb_position is not None and within_reach(target, bomb_position):
        return True
    path: List[Position] = list(visited)
    if not path or path[-1] != target:
        path.append(target)
    for neighbor in neighbor_positions(grid, target):
        if isinstance(evaluate(grid, path, neighbor, bomb_position), Accepted):
            return True
    return False
