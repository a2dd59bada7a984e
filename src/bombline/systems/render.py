from __future__ import annotations

from typing import Dict, Tuple

from esper import World

from bombline.components.bomb import DefusedBanner
from bombline.components.game_state import GameMode
from bombline.components.piece import Piece, PieceShape
from bombline.events.bus import (
    EVENT_BOARD_REFRESHED,
    EVENT_CELL_CLEARED,
    EVENT_CELL_POPPED,
    EventBus,
)
from bombline.systems.grid_ops import get_piece
from bombline.ui.layout import compute_board_geometry
from bombline.utils.game_state import current_mode
from bombline.utils.resources import get_bomb, get_bomb_marker, get_cell_line, get_grid, get_score

PADDING = 6
LINE_COLOR = (255, 0, 255)
BOMB_COLOR = (40, 40, 40)
BOMB_FUSE_COLOR = (255, 140, 0)
TEXT_COLOR = (255, 255, 255)
CELL_BACKGROUND = (24, 24, 32)

Position = Tuple[int, int]


class RenderSystem:
    """Flat 2D view of the session: cells, bomb, traced line and HUD."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.event_bus.subscribe(EVENT_CELL_CLEARED, self.on_cell_cleared)
        self.event_bus.subscribe(EVENT_CELL_POPPED, self.on_cell_popped)
        self.event_bus.subscribe(EVENT_BOARD_REFRESHED, self.on_board_refreshed)
        # Cleared pieces stay drawn until their paced pop arrives.
        self.ghosts: Dict[Position, Piece] = {}
        self._last_cell_centers: Dict[Position, Tuple[float, float]] = {}

    def on_cell_cleared(self, sender, **kwargs):
        position = kwargs.get('position')
        piece = kwargs.get('piece')
        if position is not None and piece is not None:
            self.ghosts[position] = piece

    def on_cell_popped(self, sender, **kwargs):
        self.ghosts.pop(kwargs.get('position'), None)

    def on_board_refreshed(self, sender, **kwargs):
        self.ghosts.clear()

    def cell_center(self, position: Position) -> Tuple[float, float] | None:
        return self._last_cell_centers.get(position)

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        headless = False
        try:
            arcade.get_window()
        except Exception:
            headless = True

        grid = get_grid(self.world)
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, grid.rows, grid.cols
        )
        bomb_position = get_bomb_marker(self.world).position
        self._last_cell_centers = {}
        for row, col in grid.positions():
            left = start_x + col * tile_size
            bottom = start_y + row * tile_size
            cx = left + tile_size / 2
            cy = bottom + tile_size / 2
            self._last_cell_centers[(row, col)] = (cx, cy)
            if headless:
                continue
            arcade.draw_lrbt_rectangle_filled(
                left + 1, left + tile_size - 1, bottom + 1, bottom + tile_size - 1, CELL_BACKGROUND
            )
            if (row, col) == bomb_position:
                self._draw_bomb(arcade, cx, cy, tile_size)
                continue
            piece = get_piece(grid, (row, col)) or self.ghosts.get((row, col))
            if piece is not None:
                self._draw_piece(arcade, piece, cx, cy, tile_size)

        if headless:
            return
        self._draw_line(arcade)
        self._draw_hud(arcade)

    def _draw_piece(self, arcade, piece: Piece, cx: float, cy: float, tile_size: float) -> None:
        half = tile_size / 2 - PADDING
        color = piece.rgb
        shape = piece.shape
        if shape is PieceShape.CIRCLE:
            arcade.draw_circle_filled(cx, cy, half, color)
        elif shape is PieceShape.SQUARE:
            arcade.draw_lrbt_rectangle_filled(cx - half, cx + half, cy - half, cy + half, color)
        elif shape is PieceShape.TRIANGLE:
            arcade.draw_polygon_filled([(cx - half, cy - half), (cx + half, cy - half), (cx, cy + half)], color)
        elif shape is PieceShape.DIAMOND:
            arcade.draw_polygon_filled([(cx, cy - half), (cx + half, cy), (cx, cy + half), (cx - half, cy)], color)
        elif shape is PieceShape.X:
            arcade.draw_line(cx - half, cy - half, cx + half, cy + half, color, 6)
            arcade.draw_line(cx - half, cy + half, cx + half, cy - half, color, 6)
        elif shape is PieceShape.PLUS:
            arcade.draw_line(cx - half, cy, cx + half, cy, color, 6)
            arcade.draw_line(cx, cy - half, cx, cy + half, color, 6)
        # Sound note in the corner so all three attributes are readable.
        arcade.draw_text(
            piece.sound.value.upper(),
            cx + half - 4,
            cy - half + 2,
            TEXT_COLOR,
            font_size=max(8, int(tile_size / 6)),
            anchor_x="right",
        )

    def _draw_bomb(self, arcade, cx: float, cy: float, tile_size: float) -> None:
        radius = tile_size / 2 - PADDING
        arcade.draw_circle_filled(cx, cy, radius, BOMB_COLOR)
        arcade.draw_circle_outline(cx, cy, radius, BOMB_FUSE_COLOR, 2)
        bomb = get_bomb(self.world)
        arcade.draw_text(
            str(bomb.turns_remaining),
            cx,
            cy,
            BOMB_FUSE_COLOR,
            font_size=max(10, int(tile_size / 3)),
            anchor_x="center",
            anchor_y="center",
        )

    def _draw_line(self, arcade) -> None:
        visited = get_cell_line(self.world).visited
        points = [self._last_cell_centers[pos] for pos in visited if pos in self._last_cell_centers]
        for (x1, y1), (x2, y2) in zip(points, points[1:]):
            arcade.draw_line(x1, y1, x2, y2, LINE_COLOR, 5)

    def _draw_hud(self, arcade) -> None:
        bomb = get_bomb(self.world)
        score = get_score(self.world)
        top = self.window.height - 30
        arcade.draw_text(f"Turns: {bomb.turns_remaining}", 20, top, TEXT_COLOR, font_size=18)
        arcade.draw_text(
            f"Points to defuse: {bomb.point_threshold}",
            self.window.width / 2,
            top,
            TEXT_COLOR,
            font_size=18,
            anchor_x="center",
        )
        arcade.draw_text(
            f"Score: {score.total}", self.window.width - 20, top, TEXT_COLOR, font_size=18, anchor_x="right"
        )
        defused_label = "bomb defused" if bomb.defused_count == 1 else "bombs defused"
        arcade.draw_text(
            f"{bomb.defused_count} {defused_label}",
            self.window.width / 2,
            4,
            TEXT_COLOR,
            font_size=14,
            anchor_x="center",
        )
        if any(True for _ in self.world.get_component(DefusedBanner)):
            arcade.draw_text(
                "DEFUSED!",
                self.window.width / 2,
                self.window.height / 2,
                BOMB_FUSE_COLOR,
                font_size=48,
                anchor_x="center",
                anchor_y="center",
            )
        if current_mode(self.world) == GameMode.GAME_OVER:
            arcade.draw_text(
                "BOOM - click to retry",
                self.window.width / 2,
                self.window.height / 2,
                (255, 60, 60),
                font_size=40,
                anchor_x="center",
                anchor_y="center",
            )
