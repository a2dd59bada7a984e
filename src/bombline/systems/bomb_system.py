from __future__ import annotations

import logging
from enum import Enum, auto

from esper import World

from bombline.components.bomb import DefusedBanner, MatchBomb
from bombline.components.game_state import GameMode
from bombline.events.bus import (
    EVENT_GAME_OVER,
    EVENT_ROUND_DEFUSED,
    EVENT_THRESHOLD_CHANGED,
    EVENT_TICK,
    EVENT_TURNS_CHANGED,
    EventBus,
)
from bombline.utils.game_state import current_mode, set_game_mode
from bombline.utils.resources import get_bomb

logger = logging.getLogger(__name__)


class RoundTransition(Enum):
    NONE = auto()
    DEFUSED = auto()
    GAME_OVER = auto()


def record_attempt(bomb: MatchBomb, *, matched: bool, points: int = 0) -> None:
    """Burn one turn and, for a match, knock the points off the threshold."""
    bomb.decrement()
    if matched:
        bomb.sub(points)


def check_round(bomb: MatchBomb) -> RoundTransition:
    """Decide whether the round has been won or lost; re-arms on a defuse."""
    if bomb.defused:
        bomb.rearm()
        return RoundTransition.DEFUSED
    if bomb.exploded:
        return RoundTransition.GAME_OVER
    return RoundTransition.NONE


class BombSystem:
    """Polls the bomb every tick and drives defuse / game-over transitions."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        dt = kwargs.get('dt', 1/60)
        self._advance_banner(dt)
        if current_mode(self.world) == GameMode.GAME_OVER:
            return
        bomb = get_bomb(self.world)
        transition = check_round(bomb)
        if transition is RoundTransition.DEFUSED:
            logger.info("Bomb defused (%d total); next threshold %d", bomb.defused_count, bomb.point_threshold)
            self.world.create_entity(DefusedBanner())
            self.event_bus.emit(
                EVENT_ROUND_DEFUSED,
                defused_count=bomb.defused_count,
                point_threshold=bomb.point_threshold,
            )
            self.event_bus.emit(EVENT_TURNS_CHANGED, remaining=bomb.turns_remaining)
            self.event_bus.emit(EVENT_THRESHOLD_CHANGED, remaining=bomb.point_threshold)
        elif transition is RoundTransition.GAME_OVER:
            logger.info("Bomb exploded with %d points outstanding", bomb.point_threshold)
            set_game_mode(self.world, self.event_bus, GameMode.GAME_OVER)
            self.event_bus.emit(EVENT_GAME_OVER, defused_count=bomb.defused_count)

    def _advance_banner(self, dt: float) -> None:
        for entity, banner in list(self.world.get_component(DefusedBanner)):
            banner.remaining -= dt
            if banner.remaining <= 0:
                self.world.delete_entity(entity, immediate=True)
