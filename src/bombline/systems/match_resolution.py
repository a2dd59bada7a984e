from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple, Union

from bombline.components.grid import Grid
from bombline.constants import MAX_FAILED_PATH_LENGTH
from bombline.systems.grid_ops import clear_cells, collapse_grid

Position = Tuple[int, int]


@dataclass(frozen=True, slots=True)
class Failed:
    positions: List[Position] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class Matched:
    cleared_positions: List[Position]
    collapsed: Grid

    @property
    def length(self) -> int:
        return len(self.cleared_positions)


MatchOutcome = Union[Failed, Matched]


def resolve_path(
    grid: Grid,
    path: Sequence[Position],
    rng: random.Random | None = None,
    *,
    max_failed_length: int = MAX_FAILED_PATH_LENGTH,
) -> MatchOutcome:
    """Settle a completed line.

    Short lines fail without touching the grid. Longer ones empty every
    visited cell in place and carry the collapsed, refilled board for the
    caller to swap in once the pops have played out.
    """
    positions = list(path)
    if len(positions) <= max_failed_length:
        return Failed(positions)
    clear_cells(grid, positions)
    collapsed = collapse_grid(grid, rng)
    return Matched(cleared_positions=positions, collapsed=collapsed)
