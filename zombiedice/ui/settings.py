"""Central settings and UI constants for the score keeper window."""

WIDTH, HEIGHT = 1000, 700
MARGIN = 20
FPS = 30

# === FONTS ===
FONT_SIZE = 24
SMALL_FONT_SIZE = 20
TITLE_FONT_SIZE = 44

# === COLOR PALETTE ===

# Background
BG_COLOR = (22, 38, 46)
PANEL_BG = (40, 55, 70)
PANEL_BORDER = (90, 140, 180)

# Text colors
TEXT_PRIMARY = (235, 225, 210)
TEXT_ACCENT = (255, 170, 80)
TEXT_MUTED = (160, 170, 165)
TEXT_WHITE = (255, 255, 255)

# Buttons
BTN_COLOR = (60, 120, 80)
BTN_DANGER_COLOR = (150, 60, 60)
BTN_NEUTRAL_COLOR = (60, 80, 120)
BTN_DISABLED_COLOR = (70, 70, 90)
BTN_TEXT_ENABLED = (255, 255, 255)
BTN_TEXT_DISABLED = (130, 130, 140)

# Text fields
FIELD_BG = (28, 44, 54)
FIELD_BG_DISABLED = (45, 55, 65)
FIELD_BORDER = (120, 170, 210)
FIELD_BORDER_FOCUSED = (255, 200, 120)

# Player selector
ROW_SELECTED_BG = (85, 110, 150)
ROW_HEIGHT = 28

# Status badge colors keyed by StatusLine.kind
BADGE_COLORS = {
    "": (90, 100, 110),
    "good": (40, 110, 70),
    "warn": (170, 120, 40),
    "danger": (150, 50, 50),
}

LOG_VISIBLE_ENTRIES = 8
LEADER_MARKER = " *"
