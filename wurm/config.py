"""
config.py — Shared constants for the entire application.
No logic, no imports from internal modules.
"""

# ── Window & Grid ─────────────────────────────────────────────────
GRID_W, GRID_H  = 80, 60
CELL            = 10
HUD_H           = 20
FPS             = 30
CAPTION         = "Wurm the Game"

# ── Colors ────────────────────────────────────────────────────────
BG          = (0,   0,   0)
SNAKE_COL   = (0,   200, 0)
DEAD_COL    = (90,  110, 90)
FOOD_COL    = (220, 30,  30)
UI_COL      = (200, 200, 200)
TITLE_COL   = (0,   255, 120)
HUD_BG      = (18,  18,  24)
OVERLAY_BG  = (0,   0,   0, 170)

# ── Gameplay ──────────────────────────────────────────────────────
TICK_DELAY     = 0.1      # seconds of simulated time per tick
START_LENGTH   = 1        # initial snake segments
RESPAWN_TRIES  = 64       # rejected draws before picking from free cells

# ── Fonts ─────────────────────────────────────────────────────────
FONT_NAME   = "consolas"
FONT_SIZES  = {"title": 48, "med": 20, "small": 14}

# ── Driver States ─────────────────────────────────────────────────
STATE_SPLASH  = "splash"
STATE_PLAYING = "playing"
STATE_PAUSED  = "paused"
STATE_OVER    = "over"
