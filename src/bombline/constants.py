GRID_ROWS = 9
GRID_COLS = 9
BOTTOM_MARGIN = 20

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.85
# Space above the board reserved for the HUD line (turns, points remaining, score).
HUD_HEIGHT = 60

# Scoring
BASE_SCORE = 10
# A path must be longer than this to clear; shorter attempts fail.
MAX_FAILED_PATH_LENGTH = 3

# Bomb / round
BASE_TURNS = 5
THRESHOLD_INCREMENT = 250

# Seconds between consecutive cell pops while a matched path is cleared.
CLEAR_INTERVAL = 0.15
# Seconds the "defused" banner stays visible.
DEFUSED_BANNER_DURATION = 2.5

# Colinearity tolerance for path geometry.
GEOMETRY_EPSILON = 1e-9
