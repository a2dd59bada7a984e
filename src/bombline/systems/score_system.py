from __future__ import annotations

from bombline.components.score import Score
from bombline.constants import BASE_SCORE
from bombline.utils.scoring import ScoringPolicy


def points_for(path_length: int, perfects: int = 0, doubles: int = 0, *, base_score: int = BASE_SCORE) -> int:
    """Points for a matched line of path_length cells under the current multiplier."""
    return base_score * path_length * (2 * (perfects + 1)) + (doubles + 1)


def apply_match(
    score: Score,
    path_length: int,
    *,
    base_score: int = BASE_SCORE,
    policy: ScoringPolicy | None = None,
) -> int:
    points = points_for(path_length, score.perfects, score.doubles, base_score=base_score)
    score.total += points
    if policy is not None:
        policy.after_match(score, path_length, points)
    return points
