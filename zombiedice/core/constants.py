"""Game rule constants shared by the core and the persistence layer."""

DEFAULT_TARGET = 13  # brains needed to trigger the final round
MIN_TARGET = 1

# Persisted blob location
STORAGE_KEY = "zombie_dice_pwa_v1"
SAVE_DIR_NAME = ".zombiedice"
SAVE_FILE_NAME = "savegame.json"

UNKNOWN_PLAYER_NAME = "Unknown"
