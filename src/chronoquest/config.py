"""Game constants and environment-driven paths."""
import os
from pathlib import Path

EVENTS_PER_GAME = 5
TIMED_SECONDS = 30
MAX_GUESSES = 3

# Live sessions accept year guesses within 10 years; the standalone helper is looser.
YEAR_TOLERANCE = 10
LOOSE_YEAR_TOLERANCE = 50

FUZZY_THRESHOLD = 0.75

BASE_POINTS = {"easy": 100, "medium": 200, "hard": 300}
HINT_PENALTY = 25
STREAK_BONUS_STEP = 10
STREAK_BONUS_CAP = 100
MIN_POINTS = 10
MAX_TIME_BONUS = 50

TIMELINE_BASE_POINTS = 200
TIMELINE_PERFECT_BONUS = 100
TIMELINE_SESSION_POINTS = 1000

DEFAULT_DB_PATH = os.environ.get(
    "CHRONOQUEST_DB", str(Path.home() / ".chronoquest" / "profile.db")
)
EVENTS_PATH = os.environ.get("CHRONOQUEST_EVENTS")
IMAGES_DIR = os.environ.get("CHRONOQUEST_IMAGES")
LOG_LEVEL = os.environ.get("CHRONOQUEST_LOG_LEVEL", "WARNING")
