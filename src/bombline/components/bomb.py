from dataclasses import dataclass
from typing import Tuple

from bombline.constants import BASE_TURNS, DEFUSED_BANNER_DURATION, THRESHOLD_INCREMENT


@dataclass(slots=True)
class MatchBomb:
    """Round countdown: turns left and points still needed to defuse."""
    turns_remaining: int = BASE_TURNS
    point_threshold: int = THRESHOLD_INCREMENT
    defused_count: int = 0
    base_turns: int = BASE_TURNS
    base_threshold: int = THRESHOLD_INCREMENT

    def sub(self, points: int) -> None:
        self.point_threshold = max(0, self.point_threshold - max(0, points))

    def decrement(self) -> None:
        self.turns_remaining = max(0, self.turns_remaining - 1)

    def rearm(self) -> None:
        self.defused_count += 1
        self.turns_remaining = self.base_turns
        self.point_threshold = self.base_threshold + self.base_threshold * self.defused_count

    def reset(self) -> None:
        self.defused_count = 0
        self.turns_remaining = self.base_turns
        self.point_threshold = self.base_threshold

    @property
    def defused(self) -> bool:
        return self.point_threshold == 0

    @property
    def exploded(self) -> bool:
        return self.turns_remaining == 0 and self.point_threshold > 0


@dataclass(slots=True)
class BombMarker:
    """Grid cell occupied by the bomb; acts as a wildcard connector for paths."""
    position: Tuple[int, int]


@dataclass(slots=True)
class DefusedBanner:
    """Countdown for the transient "defused" banner shown after a round is won."""
    remaining: float = DEFUSED_BANNER_DURATION
