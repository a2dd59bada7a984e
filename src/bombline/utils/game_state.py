from __future__ import annotations

from esper import World

from bombline.components.game_state import GameMode, GameState
from bombline.events.bus import EVENT_GAME_MODE_CHANGED, EventBus


def current_mode(world: World) -> GameMode:
    for _, state in world.get_component(GameState):
        return state.mode
    return GameMode.FREE_PICK


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> None:
    """Update the session game mode and emit a change event when it differs."""
    for _, state in world.get_component(GameState):
        previous_mode = state.mode
        if previous_mode == mode:
            return
        state.mode = mode
        event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)
        return
    # No existing GameState component; create a new one.
    world.create_entity(GameState(mode=mode))
    event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=None, new_mode=mode)
