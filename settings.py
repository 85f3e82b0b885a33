"""
settings.py — Global constants for ColorNova.

All magic numbers live here. No other module should hardcode colors,
dimensions, timing values, or scoring rules. Import what you need with:
    from settings import COLOR, SCREEN_W, ...

Only two values come from the environment:
    COLORNOVA_DATA_DIR   where prefs.json and logs/ are written
    COLORNOVA_LOG_LEVEL  root log level name (DEBUG, INFO, ...)
"""

import os
from pathlib import Path

# ── Screen ────────────────────────────────────────────────────────────────────
SCREEN_W = 360
SCREEN_H = 640
FPS = 60
TITLE = "ColorNova"

# ── Colors ────────────────────────────────────────────────────────────────────
COLOR = {
    "background":   ( 16,  20,  38),   # deep space navy
    "panel":        ( 30,  38,  66),   # card / sheet fill
    "panel_border": ( 70,  82, 120),
    "overlay":      (  8,  10,  20),   # dimmer behind sheets
    "text":         (240, 242, 250),
    "text_dim":     (160, 168, 196),
    "bar_bg":       ( 50,  58,  92),
    "round_bar":    (255, 196,  64),
    "session_bar":  ( 96, 200, 255),
    "pass":         ( 52, 200, 120),   # green flash on correct
    "fail":         (240,  72,  72),   # red outline on wrong
    "toggle_on":    ( 96, 220, 150),
    "toggle_off":   ( 90,  96, 120),
    "shape_ink":    (255, 255, 255),   # shape glyph drawn over tile color
}

# ── Game modes ────────────────────────────────────────────────────────────────
# Fixed table. grid is the side length; round/session are seconds.
MODE_TABLE = {
    "easy": {
        "grid": 3, "round": 15, "session": 45,
        "title": "Easy",
        "accent": (61, 222, 242),
        "tip": "Tip: Scan corners first - the match pops out.",
    },
    "moderate": {
        "grid": 5, "round": 25, "session": 60,
        "title": "Moderate",
        "accent": (204, 61, 242),
        "tip": "Tip: Use peripheral vision - don't stare too long.",
    },
    "hard": {
        "grid": 7, "round": 35, "session": 75,
        "title": "Hard",
        "accent": (242, 103, 36),
        "tip": "Tip: Scan rows/columns - it's faster than random.",
    },
}
MODE_ORDER = ("easy", "moderate", "hard")

# ── Palette ───────────────────────────────────────────────────────────────────
PALETTE_MIN_SIZE   = 90          # never fewer colors than this per round
PALETTE_MARGIN     = 12          # extra colors above the grid cell count
SATURATION_BAND    = (0.70, 0.95)
BRIGHTNESS_BAND    = (0.75, 0.95)

# ── Scoring ───────────────────────────────────────────────────────────────────
BASE_POINTS        = 1
SPEED_BONUS        = ("Speed Bonus!", 3, 2)    # (title, points, max elapsed s)
QUICK_BONUS        = ("Quick Bonus!", 2, 5)
STREAK_BONUSES     = {
    3: ("Streak!", 2),
    5: ("HOT STREAK!", 5),
}

# (min score, rank, message), checked from the top down
RANK_TIERS = (
    (70, "Galaxy Legend", "WOW. Absolute top-tier reaction time."),
    (45, "Nova Pro",      "That was impressive!"),
    (25, "Star Runner",   "Great speed - keep that streak alive!"),
    (10, "Explorer",      "Solid! You're getting the hang of it."),
    ( 0, "Rookie",        "Nice start - try a faster scan pattern!"),
)

# ── Timing ────────────────────────────────────────────────────────────────────
TICK_INTERVAL_S    = 0.2     # engine poll cadence
POPUP_DURATION_S   = 1.0
CORRECT_FLASH_S    = 0.45
WRONG_FLASH_S      = 0.25
SAVE_PANEL_DELAY_S = 0.6
TIP_ROTATE_S       = 3.5

# ── Leaderboard ───────────────────────────────────────────────────────────────
LEADERBOARD_KEY    = "leaderboard_json"
LEADERBOARD_CAP    = 100
LEADERBOARD_TOP_N  = 10
DEFAULT_PLAYER     = "Player"
NAME_MAX_LEN       = 16

# ── Persistence / logging ─────────────────────────────────────────────────────
DATA_DIR   = Path(os.environ.get("COLORNOVA_DATA_DIR", Path.home() / ".colornova"))
PREFS_PATH = DATA_DIR / "prefs.json"
LOG_DIR    = DATA_DIR / "logs"
LOG_LEVEL  = os.environ.get("COLORNOVA_LOG_LEVEL", "INFO").upper()
LOG_KEEP   = 10       # per-launch log files kept in LOG_DIR

# ── Grid layout ───────────────────────────────────────────────────────────────
GRID_AREA_W   = 320   # px, square area the grid is fitted into
GRID_TOP      = 270   # px, y of the grid area
GRID_GAP      = {3: 12, 5: 8, 7: 6}

# ── UI Layout (relative to 360×640) ──────────────────────────────────────────
HEADER_H       = 64
BAR_H          = 10
TARGET_SIZE    = 96
BUTTON_H       = 44

# ── Fonts ─────────────────────────────────────────────────────────────────────
FONT_FAMILY  = "arial"
FONT_SIZE_XL = 34
FONT_SIZE_LG = 20
FONT_SIZE_MD = 15
FONT_SIZE_SM = 12

TIPS = (
    "Tap fast for Speed Bonus!",
    "Keep a streak alive - it boosts points.",
    "Hard mode: scan row-by-row, not randomly.",
    "Shape Mode: match BOTH color + shape.",
)

# (title, lines) per How to Play card, top to bottom
HOWTO_CARDS = (
    ("Goal", ("Tap the tile that matches the target",
              "shown above the grid.")),
    ("Timer", ("Each correct match resets the round timer.",
               "If it hits zero, the round restarts.")),
    ("Session", ("The full session timer counts down.",
                 "When it ends, the game ends.")),
    ("Bonuses", ("Speed bonus if you tap fast.",
                 "Streak bonus at 3 and 5 correct taps in a row.")),
    ("Shape Mode", ("When enabled, you must match",
                    "BOTH color and shape.")),
)
