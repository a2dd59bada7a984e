from __future__ import annotations

import random
from typing import Type, TypeVar

from esper import World

from bombline.components.bomb import BombMarker, MatchBomb
from bombline.components.cell_line import CellLine
from bombline.components.clear_queue import ClearQueue
from bombline.components.game_config import GameConfig
from bombline.components.grid import Grid
from bombline.components.score import Score

T = TypeVar("T")


def get_singleton(world: World, component_type: Type[T]) -> T:
    """Return the single instance of a session resource component."""
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} resource not found")


def get_grid(world: World) -> Grid:
    return get_singleton(world, Grid)


def get_cell_line(world: World) -> CellLine:
    return get_singleton(world, CellLine)


def get_bomb(world: World) -> MatchBomb:
    return get_singleton(world, MatchBomb)


def get_bomb_marker(world: World) -> BombMarker:
    return get_singleton(world, BombMarker)


def get_score(world: World) -> Score:
    return get_singleton(world, Score)


def get_clear_queue(world: World) -> ClearQueue:
    return get_singleton(world, ClearQueue)


def get_config(world: World) -> GameConfig:
    return get_singleton(world, GameConfig)


def get_rng(world: World) -> random.Random:
    rng = getattr(world, "random", None)
    if isinstance(rng, random.Random):
        return rng
    rng = random.Random()
    setattr(world, "random", rng)
    return rng
