import random
from typing import Tuple

from esper import World

from bombline.components.bomb import BombMarker, MatchBomb
from bombline.components.cell_line import CellLine
from bombline.components.clear_queue import ClearQueue
from bombline.components.game_config import GameConfig
from bombline.components.game_state import GameMode, GameState
from bombline.components.grid import Grid
from bombline.components.score import Score
from bombline.systems.grid_ops import create_grid, random_position


def create_world(
    config: GameConfig | None = None,
    *,
    rng: random.Random | None = None,
    grid: Grid | None = None,
    bomb_position: Tuple[int, int] | None = None,
) -> World:
    """Build the session context: one world holding every game resource."""
    config = config or GameConfig()
    world = World()
    setattr(world, "random", rng or random.Random())
    rng = world.random

    # Session-level resources
    world.create_entity(
        GameState(mode=GameMode.FREE_PICK),
        config,
        Score(),
        CellLine(),
        ClearQueue(interval=config.clear_interval),
    )

    # Board and the bomb that sits on it
    board = grid or create_grid(config.rows, config.cols, rng)
    if bomb_position is None:
        bomb_position = random_position(board, rng)
    elif not board.in_bounds(bomb_position):
        raise ValueError(f"Bomb position {bomb_position} is outside the {board.rows}x{board.cols} grid")
    world.create_entity(board, BombMarker(position=bomb_position))
    world.create_entity(
        MatchBomb(
            turns_remaining=config.base_turns,
            point_threshold=config.base_threshold,
            base_turns=config.base_turns,
            base_threshold=config.base_threshold,
        )
    )
    return world
