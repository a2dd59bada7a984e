import pytest

from bombline.components.cell_line import CellLine
from bombline.components.piece import Piece, PieceColor, PieceShape, PieceSound
from bombline.systems.cell_line import (
    Accepted,
    Rejected,
    RejectReason,
    begin,
    cancel,
    evaluate,
    extend,
    has_exit,
)
from bombline.systems.grid_ops import clear_cell
from tests.helpers import build_grid, disjoint_piece, uniform_color_grid

FAR_BOMB = (4, 4)


def started_line(*positions):
    line = CellLine()
    begin(line, positions[0])
    line.visited.extend(positions[1:])
    return line


def test_first_selection_always_accepted():
    line = CellLine()
    outcome = begin(line, (2, 2))
    assert outcome == Accepted((2, 2))
    assert line.visited == [(2, 2)]
    assert line.active


def test_begin_twice_raises():
    line = started_line((0, 0))
    with pytest.raises(RuntimeError):
        begin(line, (1, 1))


def test_cancel_empties_line():
    line = started_line((0, 0), (0, 1))
    cancel(line)
    assert not line.active
    assert line.last is None


def test_evaluate_without_line_has_no_path():
    grid = uniform_color_grid(3, 3)
    assert evaluate(grid, [], (0, 0), None) == Rejected((0, 0), RejectReason.NO_PATH)


def test_extend_with_shared_color_neighbor():
    grid = uniform_color_grid(5, 5)
    line = started_line((0, 0))
    outcome = extend(line, grid, (1, 1), FAR_BOMB)
    assert outcome == Accepted((1, 1))
    assert line.visited == [(0, 0), (1, 1)]


def test_revisit_rejected():
    grid = uniform_color_grid(5, 5)
    line = started_line((0, 0), (0, 1))
    outcome = extend(line, grid, (0, 0), FAR_BOMB)
    assert outcome == Rejected((0, 0), RejectReason.REVISIT)
    assert line.visited == [(0, 0), (0, 1)]


def test_empty_cell_rejected():
    grid = uniform_color_grid(5, 5)
    clear_cell(grid, (0, 1))
    line = started_line((0, 0))
    assert extend(line, grid, (0, 1), FAR_BOMB).reason is RejectReason.EMPTY_CELL


def test_same_piece_rejected():
    grid = uniform_color_grid(5, 5)
    grid.cells[0][1] = grid.cells[0][0]
    line = started_line((0, 0))
    assert extend(line, grid, (0, 1), FAR_BOMB).reason is RejectReason.SAME_PIECE


def test_no_shared_attribute_rejected():
    grid = build_grid(5, 5, lambda r, c: disjoint_piece((r + c) % 2))
    line = started_line((0, 0))
    assert extend(line, grid, (0, 1), FAR_BOMB).reason is RejectReason.NO_SHARED_ATTRIBUTE


@pytest.mark.parametrize("attribute", ["color", "shape", "sound"])
def test_any_single_shared_attribute_is_enough(attribute):
    source = Piece(PieceColor.RED, PieceShape.CIRCLE, PieceSound.A)
    values = {
        "color": (PieceColor.RED, PieceShape.SQUARE, PieceSound.B),
        "shape": (PieceColor.BLUE, PieceShape.CIRCLE, PieceSound.B),
        "sound": (PieceColor.BLUE, PieceShape.SQUARE, PieceSound.A),
    }
    target = Piece(*values[attribute])
    grid = build_grid(5, 5, lambda r, c: disjoint_piece(5), {(0, 0): source, (0, 1): target})
    line = started_line((0, 0))
    assert isinstance(extend(line, grid, (0, 1), FAR_BOMB), Accepted)


def test_non_adjacent_rejected():
    grid = uniform_color_grid(5, 5)
    line = started_line((0, 0))
    assert extend(line, grid, (0, 2), FAR_BOMB).reason is RejectReason.NOT_ADJACENT


def test_crossing_line_rejected():
    grid = uniform_color_grid(5, 5)
    line = started_line((0, 0), (1, 1), (0, 1))
    outcome = extend(line, grid, (1, 0), FAR_BOMB)
    assert outcome == Rejected((1, 0), RejectReason.SELF_INTERSECTION)
    assert line.visited == [(0, 0), (1, 1), (0, 1)]


def test_bomb_neighbor_skips_attribute_and_adjacency_rules():
    grid = build_grid(5, 5, lambda r, c: disjoint_piece((r + c) % 2))
    line = started_line((0, 0))
    # (3, 4) touches the bomb at (4, 4); no shared attribute and far from (0, 0).
    outcome = extend(line, grid, (3, 4), FAR_BOMB)
    assert outcome == Accepted((3, 4), via_bomb=True)


def test_bomb_does_not_override_revisit_or_empty():
    grid = uniform_color_grid(5, 5)
    line = started_line((3, 3), (3, 4))
    assert extend(line, grid, (3, 3), FAR_BOMB).reason is RejectReason.REVISIT
    clear_cell(grid, (4, 3))
    assert extend(line, grid, (4, 3), FAR_BOMB).reason is RejectReason.EMPTY_CELL


def test_has_exit_true_with_matching_neighbor():
    grid = uniform_color_grid(4, 4)
    assert has_exit(grid, (1, 1), [(0, 0), (1, 1)], (3, 3))


def test_has_exit_false_when_boxed_in():
    grid = build_grid(
        4,
        4,
        lambda r, c: disjoint_piece(5),
        {(0, 0): disjoint_piece(0), (0, 1): disjoint_piece(1), (1, 0): disjoint_piece(2), (1, 1): disjoint_piece(3)},
    )
    assert not has_exit(grid, (0, 0), [(0, 1), (0, 0)], (3, 3))


def test_has_exit_true_next_to_bomb():
    grid = build_grid(4, 4, lambda r, c: disjoint_piece((r + c) % 2))
    assert has_exit(grid, (2, 2), [(2, 2)], (3, 3))


def test_has_exit_appends_target_when_missing():
    grid = uniform_color_grid(4, 4)
    assert has_exit(grid, (0, 1), [(0, 0)], (3, 3))
