from __future__ import annotations

import logging
from typing import Tuple

from esper import World

from bombline.components.game_state import GameMode
from bombline.events.bus import (
    EVENT_BOARD_REFRESHED,
    EVENT_CELL_CLEARED,
    EVENT_PATH_CANCEL,
    EVENT_PATH_FAILED,
    EVENT_PATH_FINISH,
    EVENT_PATH_MATCHED,
    EVENT_ROUND_RESTART,
    EVENT_SCORE_CHANGED,
    EVENT_STEP_ACCEPTED,
    EVENT_STEP_REJECTED,
    EVENT_THRESHOLD_CHANGED,
    EVENT_TILE_SELECT,
    EVENT_TURNS_CHANGED,
    EventBus,
)
from bombline.systems import cell_line as validator
from bombline.systems.bomb_system import record_attempt
from bombline.systems.cell_line import Accepted, ExtendOutcome, Rejected
from bombline.systems.grid_ops import create_grid, get_piece, random_position
from bombline.systems.match_resolution import Failed, MatchOutcome, resolve_path
from bombline.systems.score_system import apply_match, points_for
from bombline.utils.game_state import current_mode, set_game_mode
from bombline.utils.resources import (
    get_bomb,
    get_bomb_marker,
    get_cell_line,
    get_clear_queue,
    get_config,
    get_grid,
    get_rng,
    get_score,
)
from bombline.utils.scoring import ScoringPolicy

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class GameSessionSystem:
    """Routes player input through the line, match, bomb and score steps.

    Each completed attempt is processed in a fixed order: the line is
    validated, the match resolved against the grid, the bomb updated and
    finally the score credited. Outbound notifications are emitted on the
    event bus for renderers and audio.
    """

    def __init__(self, world: World, event_bus: EventBus, *, scoring_policy: ScoringPolicy | None = None):
        self.world = world
        self.event_bus = event_bus
        self.scoring_policy = scoring_policy or ScoringPolicy()
        self.event_bus.subscribe(EVENT_TILE_SELECT, self.on_tile_select)
        self.event_bus.subscribe(EVENT_PATH_CANCEL, self.on_path_cancel)
        self.event_bus.subscribe(EVENT_PATH_FINISH, self.on_path_finish)
        self.event_bus.subscribe(EVENT_ROUND_RESTART, self.on_round_restart)

    # Bus adapters

    def on_tile_select(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        self.select((row, col))

    def on_path_cancel(self, sender, **kwargs):
        self.cancel_path()

    def on_path_finish(self, sender, **kwargs):
        self.finish_path()

    def on_round_restart(self, sender, **kwargs):
        self.restart_round()

    # Operations

    @property
    def input_locked(self) -> bool:
        if current_mode(self.world) == GameMode.GAME_OVER:
            return True
        # A spent bomb stays locked until the tick moves it to GAME_OVER.
        if get_bomb(self.world).exploded:
            return True
        return get_clear_queue(self.world).busy

    def select(self, position: Position) -> ExtendOutcome | None:
        """Start or extend the line; returns None when the input was not taken."""
        if self.input_locked:
            return None
        grid = get_grid(self.world)
        if not grid.in_bounds(position):
            return None
        line = get_cell_line(self.world)
        bomb_position = get_bomb_marker(self.world).position

        if not line.active:
            outcome = validator.begin(line, position)
            set_game_mode(self.world, self.event_bus, GameMode.PICK_NEXT)
            self._emit_step(outcome)
            return outcome

        outcome = validator.extend(line, grid, position, bomb_position)
        if isinstance(outcome, Rejected):
            self.event_bus.emit(EVENT_STEP_REJECTED, position=position, reason=outcome.reason)
            self.complete_attempt()
            return outcome
        self._emit_step(outcome)
        if not validator.has_exit(grid, position, line.visited, bomb_position):
            self.complete_attempt()
        return outcome

    def finish_path(self) -> MatchOutcome | None:
        if self.input_locked or not get_cell_line(self.world).active:
            return None
        return self.complete_attempt()

    def cancel_path(self) -> None:
        validator.cancel(get_cell_line(self.world))
        if current_mode(self.world) == GameMode.PICK_NEXT:
            set_game_mode(self.world, self.event_bus, GameMode.FREE_PICK)

    def complete_attempt(self) -> MatchOutcome:
        line = get_cell_line(self.world)
        path = list(line.visited)
        validator.cancel(line)
        set_game_mode(self.world, self.event_bus, GameMode.FREE_PICK)

        config = get_config(self.world)
        grid = get_grid(self.world)
        bomb = get_bomb(self.world)
        score = get_score(self.world)
        pieces = {position: get_piece(grid, position) for position in path}
        outcome = resolve_path(
            grid,
            path,
            get_rng(self.world),
            max_failed_length=config.max_failed_path_length,
        )

        if isinstance(outcome, Failed):
            record_attempt(bomb, matched=False)
            self.event_bus.emit(EVENT_PATH_FAILED, positions=path)
            self.event_bus.emit(EVENT_TURNS_CHANGED, remaining=bomb.turns_remaining)
            return outcome

        points = points_for(
            outcome.length, score.perfects, score.doubles, base_score=config.base_score
        )
        bomb_points = points
        if config.bomb_points_require_contact and get_bomb_marker(self.world).position not in path:
            bomb_points = 0
        record_attempt(bomb, matched=True, points=bomb_points)

        # Queue the refill before scoring so a failing policy cannot strand the holes.
        queue = get_clear_queue(self.world)
        queue.positions.extend(outcome.cleared_positions)
        queue.pending_grid = outcome.collapsed
        queue.elapsed = 0.0

        apply_match(score, outcome.length, base_score=config.base_score, policy=self.scoring_policy)

        for position in outcome.cleared_positions:
            self.event_bus.emit(EVENT_CELL_CLEARED, position=position, piece=pieces.get(position))
        self.event_bus.emit(EVENT_PATH_MATCHED, positions=outcome.cleared_positions, points=points)
        self.event_bus.emit(EVENT_SCORE_CHANGED, total=score.total, delta=points)
        self.event_bus.emit(EVENT_TURNS_CHANGED, remaining=bomb.turns_remaining)
        self.event_bus.emit(EVENT_THRESHOLD_CHANGED, remaining=bomb.point_threshold)
        return outcome

    def restart_round(self) -> bool:
        """Start over after the bomb went off; ignored in any other mode."""
        if current_mode(self.world) != GameMode.GAME_OVER:
            return False
        rng = get_rng(self.world)
        config = get_config(self.world)
        bomb = get_bomb(self.world)
        bomb.reset()

        grid = get_grid(self.world)
        grid.cells = create_grid(grid.rows, grid.cols, rng).cells
        marker = get_bomb_marker(self.world)
        marker.position = random_position(grid, rng)

        validator.cancel(get_cell_line(self.world))
        queue = get_clear_queue(self.world)
        queue.positions.clear()
        queue.pending_grid = None
        queue.elapsed = 0.0
        queue.interval = config.clear_interval

        logger.info("Round restarted")
        set_game_mode(self.world, self.event_bus, GameMode.FREE_PICK)
        self.event_bus.emit(EVENT_BOARD_REFRESHED, bomb_position=marker.position)
        self.event_bus.emit(EVENT_TURNS_CHANGED, remaining=bomb.turns_remaining)
        self.event_bus.emit(EVENT_THRESHOLD_CHANGED, remaining=bomb.point_threshold)
        return True

    def _emit_step(self, outcome: Accepted) -> None:
        piece = get_piece(get_grid(self.world), outcome.position)
        self.event_bus.emit(
            EVENT_STEP_ACCEPTED,
            position=outcome.position,
            sound=piece.sound if piece is not None else None,
            bomb=outcome.via_bomb,
        )
