from __future__ import annotations

import random
from typing import Callable, Dict, List, Sequence, Tuple

from esper import World

from bombline.components.game_config import GameConfig
from bombline.components.grid import Grid
from bombline.components.piece import Piece, PieceColor, PieceSound, SPAWNABLE_SHAPES
from bombline.events.bus import EVENT_TICK, EventBus
from bombline.systems.bomb_system import BombSystem
from bombline.systems.clear_queue_system import ClearQueueSystem
from bombline.systems.session import GameSessionSystem
from bombline.world import create_world

Position = Tuple[int, int]


def disjoint_piece(index: int) -> Piece:
    """Pieces built from different indices share no attribute (index 0..5)."""
    return Piece(
        color=list(PieceColor)[index],
        shape=SPAWNABLE_SHAPES[index],
        sound=list(PieceSound)[index],
    )


def uniform_color_piece(index: int, color: PieceColor = PieceColor.RED) -> Piece:
    """Pieces that all share color but vary in shape and sound."""
    return Piece(
        color=color,
        shape=SPAWNABLE_SHAPES[index % len(SPAWNABLE_SHAPES)],
        sound=list(PieceSound)[index % len(PieceSound)],
    )


def build_grid(
    rows: int,
    cols: int,
    factory: Callable[[int, int], Piece],
    overrides: Dict[Position, Piece | None] | None = None,
) -> Grid:
    cells = [[factory(row, col) for col in range(cols)] for row in range(rows)]
    for (row, col), piece in (overrides or {}).items():
        cells[row][col] = piece
    return Grid(rows=rows, cols=cols, cells=cells)


def uniform_color_grid(rows: int, cols: int) -> Grid:
    return build_grid(rows, cols, lambda r, c: uniform_color_piece(r * cols + c))


def build_session(
    grid: Grid,
    bomb_position: Position,
    *,
    config: GameConfig | None = None,
    seed: int = 7,
    scoring_policy=None,
) -> Tuple[EventBus, World, GameSessionSystem]:
    """Wire a world with the core systems the way main.py does, minus the window."""
    bus = EventBus()
    config = config or GameConfig(rows=grid.rows, cols=grid.cols)
    world = create_world(config, rng=random.Random(seed), grid=grid, bomb_position=bomb_position)
    session = GameSessionSystem(world, bus, scoring_policy=scoring_policy)
    ClearQueueSystem(world, bus)
    BombSystem(world, bus)
    return bus, world, session


def drive_ticks(bus: EventBus, count: int = 10, dt: float = 0.2) -> None:
    for _ in range(count):
        bus.emit(EVENT_TICK, dt=dt)


def select_all(session: GameSessionSystem, positions: Sequence[Position]) -> list:
    return [session.select(position) for position in positions]


class EventRecorder:
    """Collects (name, payload) pairs for the events it is attached to."""

    def __init__(self) -> None:
        self.events: List[Tuple[str, dict]] = []

    def attach(self, bus: EventBus, *names: str) -> "EventRecorder":
        for name in names:
            bus.subscribe(name, self._handler(name))
        return self

    def _handler(self, name: str):
        def handler(sender, **payload):
            self.events.append((name, payload))
        return handler

    def payloads(self, name: str) -> List[dict]:
        return [payload for event, payload in self.events if event == name]

    def names(self) -> List[str]:
        return [event for event, _ in self.events]
