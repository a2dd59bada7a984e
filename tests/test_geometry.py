import itertools

from bombline.systems.grid_ops import are_adjacent
from bombline.utils.geometry import (
    has_self_intersections,
    is_neighbor,
    orientation,
    segments_intersect,
    within_reach,
)


def test_adjacency_is_symmetric():
    cells = [(r, c) for r in range(4) for c in range(4)]
    for a, b in itertools.product(cells, repeat=2):
        assert are_adjacent(a, b) == are_adjacent(b, a)


def test_adjacency_is_chebyshev_one():
    assert is_neighbor((1, 1), (0, 0))
    assert is_neighbor((1, 1), (1, 2))
    assert not is_neighbor((1, 1), (1, 1))
    assert not is_neighbor((1, 1), (3, 1))
    assert not is_neighbor((0, 0), (1, 2))


def test_within_reach_includes_self():
    assert within_reach((2, 2), (2, 2))
    assert within_reach((2, 2), (3, 3))
    assert not within_reach((2, 2), (4, 2))


def test_orientation_classifies_turns():
    assert orientation((0, 0), (1, 1), (2, 2)) == 0
    assert orientation((0, 0), (1, 0), (1, 1)) != 0
    assert orientation((0, 0), (1, 0), (1, 1)) != orientation((0, 0), (1, 0), (1, -1))


def test_crossing_diagonals_intersect():
    assert segments_intersect((0.0, 0.0), (1.0, 1.0), (0.0, 1.0), (1.0, 0.0))


def test_parallel_segments_do_not_intersect():
    assert not segments_intersect((0.0, 0.0), (0.0, 1.0), (1.0, 0.0), (1.0, 1.0))


def test_colinear_overlap_intersects():
    assert segments_intersect((0.0, 0.0), (0.0, 2.0), (0.0, 1.0), (0.0, 3.0))
    assert not segments_intersect((0.0, 0.0), (0.0, 1.0), (0.0, 2.0), (0.0, 3.0))


def test_crossing_polyline_detected():
    assert has_self_intersections([(0, 0), (1, 1), (0, 2), (1, 0)])


def test_simple_polylines_pass():
    assert not has_self_intersections([])
    assert not has_self_intersections([(0, 0)])
    assert not has_self_intersections([(0, 0), (0, 1), (1, 1), (1, 0)])
    assert not has_self_intersections([(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)])


def test_open_path_checks_first_against_last_segment():
    # First and last segments cross; they are only exempt for closed loops.
    assert has_self_intersections([(0, 0), (1, 1), (0, 1), (1, 0)])


def test_closed_loop_endpoint_is_not_a_crossing():
    assert not has_self_intersections([(0, 0), (0, 1), (1, 1), (1, 0), (0, 0)])
