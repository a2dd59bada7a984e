from __future__ import annotations

from typing import Callable

from bombline.components.score import Score

# (score, path_length, points) -> None; may bump score.perfects / score.doubles.
CounterRule = Callable[[Score, int, int], None]


class ScoringPolicy:
    """Decides when the perfects/doubles multiplier counters advance.

    The base policy never touches them, which keeps the multiplier at its
    neutral value. Pass a rule to plug in a different balance.
    """

    def __init__(self, rule: CounterRule | None = None):
        self._rule = rule

    def after_match(self, score: Score, path_length: int, points: int) -> None:
        if self._rule is None:
            return
        before = (score.perfects, score.doubles)
        self._rule(score, path_length, points)
        if score.perfects < before[0] or score.doubles < before[1]:
            raise ValueError("Scoring rules may not decrease perfects or doubles")
