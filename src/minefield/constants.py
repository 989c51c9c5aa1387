GRID_ROWS = 9
GRID_COLS = 9
MINE_COUNT = 4
TILE_SIZE = 48
BOTTOM_MARGIN = 20

# Board footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.55
BOARD_MAX_HEIGHT_PCT = 0.80

# HUD strip above the board (timer, reset button, mine counter).
HUD_HEIGHT = 56
HUD_GAP = 12
RESET_BUTTON_SIZE = 44

# Persistent leaderboard panel on the right of the board.
PANEL_WIDTH = 300
PANEL_GAP = 30
PANEL_TAB_HEIGHT = 32
PANEL_BUTTON_HEIGHT = 32
PANEL_ROW_HEIGHT = 26

# Modal dialogs.
DIALOG_WIDTH = 420
DIALOG_HEIGHT = 300
ALL_SCORES_DIALOG_WIDTH = 520
ALL_SCORES_DIALOG_HEIGHT = 640
DIALOG_BUTTON_WIDTH = 140
DIALOG_BUTTON_HEIGHT = 40
GAME_OVER_DIALOG_DELAY = 0.3

# Score validation and rate limiting.
NAME_MAX_LENGTH = 20
MIN_TIME = 0.5
MAX_TIME = 9999.0
RATE_LIMIT_WINDOW = 5 * 60.0
RATE_LIMIT_MAX = 3

# Leaderboard views.
VIEW_DAILY = "daily"
VIEW_ALLTIME = "alltime"
PAGE_SIZE = 20
PANEL_TOP_N = 10
REFRESH_INTERVAL = 30.0
MIDNIGHT_CHECK_INTERVAL = 60.0
POST_SUBMIT_REFRESH_DELAY = 1.0
REQUEST_TIMEOUT = 10.0
