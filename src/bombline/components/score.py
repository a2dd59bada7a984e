from dataclasses import dataclass


@dataclass(slots=True)
class Score:
    """Session score. perfects/doubles feed the match multiplier."""
    total: int = 0
    perfects: int = 0
    doubles: int = 0
