from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_TILE_SELECT = "tile_select"          # payload: row, col
EVENT_PATH_CANCEL = "path_cancel"          # payload: None
EVENT_PATH_FINISH = "path_finish"          # payload: None
EVENT_ROUND_RESTART = "round_restart"      # payload: None


# ============================================================================
# PATH & BOARD
# ============================================================================
EVENT_STEP_ACCEPTED = "step_accepted"      # payload: position=(r,c), sound=PieceSound|None, bomb=bool
EVENT_STEP_REJECTED = "step_rejected"      # payload: position=(r,c), reason=RejectReason
EVENT_PATH_FAILED = "path_failed"          # payload: positions=[(r,c),...]
EVENT_PATH_MATCHED = "path_matched"        # payload: positions=[(r,c),...], points=int
EVENT_CELL_CLEARED = "cell_cleared"        # payload: position=(r,c), piece=Piece|None
EVENT_CELL_POPPED = "cell_popped"          # payload: position=(r,c), remaining=int
EVENT_BOARD_REFRESHED = "board_refreshed"  # payload: bomb_position=(r,c)


# ============================================================================
# SCORE & ROUND
# ============================================================================
EVENT_SCORE_CHANGED = "score_changed"          # payload: total=int, delta=int
EVENT_TURNS_CHANGED = "turns_changed"          # payload: remaining=int
EVENT_THRESHOLD_CHANGED = "threshold_changed"  # payload: remaining=int
EVENT_ROUND_DEFUSED = "round_defused"          # payload: defused_count=int, point_threshold=int
EVENT_GAME_OVER = "game_over"                  # payload: defused_count=int
EVENT_GAME_MODE_CHANGED = "game_mode_changed"  # payload: previous_mode=GameMode, new_mode=GameMode
