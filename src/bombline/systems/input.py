from bombline.components.game_state import GameMode
from bombline.events.bus import (
    EVENT_MOUSE_PRESS,
    EVENT_PATH_FINISH,
    EVENT_ROUND_RESTART,
    EVENT_TILE_SELECT,
    EventBus,
)
from bombline.ui.layout import cell_at_point
from bombline.utils.game_state import current_mode
from bombline.utils.resources import get_grid

# Arcade button ids
MOUSE_BUTTON_LEFT = 1
MOUSE_BUTTON_RIGHT = 4


class InputSystem:
    """Translates window mouse presses into grid-level session signals."""

    def __init__(self, event_bus: EventBus, window, world):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        if current_mode(self.world) == GameMode.GAME_OVER:
            # Any click on the game-over screen retries.
            self.event_bus.emit(EVENT_ROUND_RESTART)
            return
        if button == MOUSE_BUTTON_RIGHT:
            self.event_bus.emit(EVENT_PATH_FINISH)
            return
        if button != MOUSE_BUTTON_LEFT:
            return
        grid = get_grid(self.world)
        cell = cell_at_point(x, y, self.window.width, self.window.height, grid.rows, grid.cols)
        if cell is None:
            return
        row, col = cell
        self.event_bus.emit(EVENT_TILE_SELECT, row=row, col=col)
