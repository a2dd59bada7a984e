from __future__ import annotations

import random
import uuid
from typing import Iterable, List, Optional, Sequence, Tuple

from bombline.components.grid import Grid
from bombline.components.piece import Piece, random_piece
from bombline.utils.geometry import is_neighbor

Position = Tuple[int, int]

NEIGHBOR_OFFSETS: Tuple[Position, ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


def create_grid(rows: int, cols: int, rng: random.Random | None = None) -> Grid:
    """Build a fully populated grid of independent random pieces."""
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
    rng = rng or random.Random()
    cells = [[random_piece(rng) for _ in range(cols)] for _ in range(rows)]
    return Grid(rows=rows, cols=cols, cells=cells)


def get_piece(grid: Grid, position: Position) -> Optional[Piece]:
    """Lenient lookup: out-of-bounds positions read as empty."""
    if not grid.in_bounds(position):
        return None
    row, col = position
    return grid.cells[row][col]


def position_of(grid: Grid, piece_id: uuid.UUID) -> Position | None:
    for row in range(grid.rows):
        for col in range(grid.cols):
            piece = grid.cells[row][col]
            if piece is not None and piece.id == piece_id:
                return (row, col)
    return None


def require_position_of(grid: Grid, piece_id: uuid.UUID) -> Position:
    position = position_of(grid, piece_id)
    if position is None:
        raise LookupError(f"Piece {piece_id} is not on the grid")
    return position


def neighbor_positions(grid: Grid, position: Position) -> List[Position]:
    row, col = position
    candidates = [(row + dr, col + dc) for dr, dc in NEIGHBOR_OFFSETS]
    return [pos for pos in candidates if grid.in_bounds(pos)]


def neighbors8(grid: Grid, position: Position) -> List[Piece]:
    pieces: List[Piece] = []
    for pos in neighbor_positions(grid, position):
        piece = get_piece(grid, pos)
        if piece is not None:
            pieces.append(piece)
    return pieces


def are_adjacent(a: Position, b: Position) -> bool:
    return is_neighbor(a, b)


def clear_cell(grid: Grid, position: Position) -> None:
    if not grid.in_bounds(position):
        return
    row, col = position
    grid.cells[row][col] = None


def clear_cells(grid: Grid, positions: Iterable[Position]) -> List[Position]:
    """Empty each occupied position; returns the positions that held a piece."""
    cleared: List[Position] = []
    for position in positions:
        if get_piece(grid, position) is None:
            continue
        clear_cell(grid, position)
        cleared.append(position)
    return cleared


def get_column(grid: Grid, col: int) -> List[Optional[Piece]]:
    return [grid.cells[row][col] for row in range(grid.rows)]


def collapse_column(column: Sequence[Optional[Piece]], rng: random.Random | None = None) -> List[Piece]:
    """Slide surviving pieces toward index 0 and top up the far end with fresh ones.

    Survivors keep their relative order; the result is always fully occupied.
    """
    rng = rng or random.Random()
    survivors = [piece for piece in column if piece is not None]
    fresh = [random_piece(rng) for _ in range(len(column) - len(survivors))]
    return survivors + fresh


def collapse_grid(grid: Grid, rng: random.Random | None = None) -> Grid:
    """Return a new grid with every column collapsed; the input is left untouched."""
    rng = rng or random.Random()
    columns = [collapse_column(get_column(grid, col), rng) for col in range(grid.cols)]
    cells = [[columns[col][row] for col in range(grid.cols)] for row in range(grid.rows)]
    return Grid(rows=grid.rows, cols=grid.cols, cells=cells)


def empty_positions(grid: Grid) -> List[Position]:
    return [pos for pos in grid.positions() if get_piece(grid, pos) is None]


def reroll_cell(grid: Grid, position: Position, rng: random.Random | None = None) -> Optional[Piece]:
    """Give the piece at position a new color and shape, keeping its id."""
    piece = get_piece(grid, position)
    if piece is None:
        return None
    rerolled = piece.rerolled(rng or random.Random())
    row, col = position
    grid.cells[row][col] = rerolled
    return rerolled


def random_position(grid: Grid, rng: random.Random | None = None) -> Position:
    rng = rng or random.Random()
    return (rng.randrange(grid.rows), rng.randrange(grid.cols))
