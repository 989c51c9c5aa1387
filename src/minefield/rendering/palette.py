"""Colours used by the renderers (RGB tuples)."""

BACKGROUND = (11, 18, 32)
PANEL = (15, 23, 42)
PANEL_EDGE = (31, 41, 55)
TEXT = (229, 231, 235)
SUBTEXT = (203, 213, 225)
TILE_HIDDEN = (51, 65, 85)
TILE_REVEALED = (229, 231, 235)
TILE_EDGE = (2, 6, 23)
MINE = (17, 24, 39)
MINE_BG = (254, 226, 226)
MINE_BG_TRIGGER = (252, 165, 165)
FLAG = (239, 68, 68)
WRONG = (239, 68, 68)
COUNTER_BG = (0, 0, 0)
COUNTER_TEXT = (239, 68, 68)
BUTTON = (55, 65, 81)
BUTTON_ACTIVE = (99, 102, 241)
BUTTON_DISABLED = (75, 85, 99)
OVERLAY = (0, 0, 0, 170)
SUCCESS = (165, 227, 111)
ERROR = (201, 74, 58)
INFO = (203, 213, 225)

NUMBER_COLORS = {
    1: (37, 99, 235),
    2: (22, 163, 74),
    3: (220, 38, 38),
    4: (124, 58, 237),
    5: (180, 83, 9),
    6: (15, 118, 110),
    7: (17, 24, 39),
    8: (55, 65, 81),
}

MESSAGE_COLORS = {
    "info": INFO,
    "success": SUCCESS,
    "error": ERROR,
}
