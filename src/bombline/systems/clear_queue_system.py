from esper import World

from bombline.events.bus import EVENT_BOARD_REFRESHED, EVENT_CELL_POPPED, EVENT_TICK, EventBus
from bombline.systems.grid_ops import random_position
from bombline.utils.resources import get_bomb_marker, get_clear_queue, get_grid, get_rng


class ClearQueueSystem:
    """Pops cleared cells one at a time, then swaps in the collapsed board.

    The grid already holds the cleared (empty) cells when a match resolves;
    this only paces the feedback and defers the refill.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        queue = get_clear_queue(self.world)
        if not queue.busy:
            return
        dt = kwargs.get('dt', 1/60)
        queue.elapsed += dt
        while queue.positions and queue.elapsed >= queue.interval:
            queue.elapsed -= queue.interval
            position = queue.positions.pop(0)
            self.event_bus.emit(EVENT_CELL_POPPED, position=position, remaining=len(queue.positions))
        if queue.positions:
            return
        if queue.pending_grid is not None:
            self._apply_collapse()
        queue.elapsed = 0.0

    def _apply_collapse(self) -> None:
        queue = get_clear_queue(self.world)
        grid = get_grid(self.world)
        grid.cells = queue.pending_grid.cells
        queue.pending_grid = None
        # The bomb moves to a fresh cell every time the board settles.
        marker = get_bomb_marker(self.world)
        marker.position = random_position(grid, get_rng(self.world))
        self.event_bus.emit(EVENT_BOARD_REFRESHED, bomb_position=marker.position)
