"""Entry point for the Bombline path-matching puzzle.

Sets up the session world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, key, run, set_background_color, color

from bombline.world import create_world
from bombline.events.bus import (
    EVENT_MOUSE_PRESS,
    EVENT_PATH_CANCEL,
    EVENT_PATH_FINISH,
    EVENT_ROUND_RESTART,
    EVENT_TICK,
    EventBus,
)
from bombline.systems.bomb_system import BombSystem
from bombline.systems.clear_queue_system import ClearQueueSystem
from bombline.systems.input import InputSystem
from bombline.systems.render import RenderSystem
from bombline.systems.session import GameSessionSystem


class BomblineWindow(Window):
    def __init__(self):
        super().__init__(800, 720, "Bombline", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world()

        # Core systems: session handles input-driven steps, the rest are tick-driven.
        self.session_system = GameSessionSystem(self.world, self.event_bus)
        self.clear_queue_system = ClearQueueSystem(self.world, self.event_bus)
        self.bomb_system = BombSystem(self.world, self.event_bus)

        # Interface systems
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.BLACK)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.ESCAPE:
            self.event_bus.emit(EVENT_PATH_CANCEL)
        elif symbol in (key.SPACE, key.ENTER):
            self.event_bus.emit(EVENT_PATH_FINISH)
        elif symbol == key.R:
            self.event_bus.emit(EVENT_ROUND_RESTART)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    BomblineWindow()
    run()

if __name__ == "__main__":
    main()
