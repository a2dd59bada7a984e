from dataclasses import dataclass

from bombline.constants import (
    BASE_SCORE,
    BASE_TURNS,
    CLEAR_INTERVAL,
    GRID_COLS,
    GRID_ROWS,
    MAX_FAILED_PATH_LENGTH,
    THRESHOLD_INCREMENT,
)


@dataclass(frozen=True, slots=True)
class GameConfig:
    """Per-session tuning; defaults come from bombline.constants.

    bomb_points_require_contact: only subtract match points from the bomb
    threshold when the path runs through the bomb cell.
    """
    rows: int = GRID_ROWS
    cols: int = GRID_COLS
    base_score: int = BASE_SCORE
    max_failed_path_length: int = MAX_FAILED_PATH_LENGTH
    base_turns: int = BASE_TURNS
    base_threshold: int = THRESHOLD_INCREMENT
    clear_interval: float = CLEAR_INTERVAL
    bomb_points_require_contact: bool = False

    def __post_init__(self) -> None:
        if self.rows <= 0 or self.cols <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {self.rows}x{self.cols}")
        if self.base_turns <= 0:
            raise ValueError("base_turns must be positive")
        if self.base_threshold <= 0:
            raise ValueError("base_threshold must be positive")
        if self.clear_interval < 0:
            raise ValueError("clear_interval cannot be negative")
