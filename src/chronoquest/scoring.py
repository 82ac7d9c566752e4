"""Point formulas and answer matching."""
import math
import re
from typing import Optional

from chronoquest.config import (
    BASE_POINTS, HINT_PENALTY, STREAK_BONUS_STEP, STREAK_BONUS_CAP, MIN_POINTS,
    MAX_TIME_BONUS, TIMED_SECONDS, TIMELINE_BASE_POINTS, TIMELINE_PERFECT_BONUS,
    FUZZY_THRESHOLD, LOOSE_YEAR_TOLERANCE,
)
from chronoquest.models import Difficulty

_YEAR_RE = re.compile(r"\s*([+-]?\d{1,9})(?!\d)(?:\s*(bce|bc|ce|ad)(?![a-z]))?", re.IGNORECASE)


def calculate_score(difficulty, hints_used: int, streak: int, time_bonus: int = 0) -> int:
    """Points for a correct answer.

    Base points by difficulty, minus a flat penalty per hint, plus a capped
    streak bonus and any time bonus. Never drops below MIN_POINTS.
    """
    base = BASE_POINTS[Difficulty(difficulty).value]
    hint_penalty = hints_used * HINT_PENALTY
    streak_bonus = min(streak * STREAK_BONUS_STEP, STREAK_BONUS_CAP)
    total = base - hint_penalty + streak_bonus + (time_bonus or 0)
    return max(total, MIN_POINTS)


def calculate_time_bonus(time_remaining: float, total_time: float = TIMED_SECONDS) -> int:
    if total_time <= 0:
        return 0
    fraction = max(0.0, min(1.0, time_remaining / total_time))
    return round_half_up(fraction * MAX_TIME_BONUS)


def calculate_timeline_score(correct_positions: int, total_events: int) -> int:
    """Standalone timeline score: 200 scaled by accuracy, +100 when perfect."""
    if total_events <= 0:
        return 0
    base_points = round_half_up(correct_positions / total_events * TIMELINE_BASE_POINTS)
    perfect_bonus = TIMELINE_PERFECT_BONUS if correct_positions == total_events else 0
    return base_points + perfect_bonus


def levenshtein(a: str, b: str) -> int:
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, 1):
        current = [i]
        for j, cb in enumerate(b, 1):
            cost = 0 if ca == cb else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current
    return previous[-1]


def string_similarity(s1: str, s2: str) -> float:
    """Case-insensitive normalized Levenshtein similarity in [0, 1]."""
    a = s1.lower()
    b = s2.lower()
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0
    return 1 - levenshtein(a, b) / max(len(a), len(b))


def check_answer(accepted_answers, user_answer: str) -> bool:
    trimmed = user_answer.strip()
    if not trimmed:
        return False
    return any(string_similarity(accepted, trimmed) > FUZZY_THRESHOLD for accepted in accepted_answers)


def check_year_answer(actual_year: int, guessed_year: int, tolerance: int = LOOSE_YEAR_TOLERANCE) -> bool:
    return abs(actual_year - guessed_year) <= tolerance


def check_location_answer(actual_location: str, guessed_location: str) -> bool:
    guess = guessed_location.strip().lower()
    if not guess:
        return False
    parts = [p for p in re.split(r"[,\s]+", actual_location.lower()) if len(p) > 2]
    return any(part in guess or guess in part for part in parts)


def parse_year(text: str) -> Optional[int]:
    """Read a leading signed integer year; a BCE/BC suffix makes it negative.

    Trailing text after the number is ignored. Returns None when no number
    is present or it runs past nine digits.
    """
    match = _YEAR_RE.match(text)
    if not match:
        return None
    year = int(match.group(1))
    era = (match.group(2) or "").lower()
    if era in ("bce", "bc"):
        year = -abs(year)
    return year


def format_year(year: int) -> str:
    if year < 0:
        return f"{abs(year)} BCE"
    return f"{year} CE"


def get_accuracy(correct: int, total: int) -> int:
    if total <= 0:
        return 0
    return round_half_up(correct / total * 100)


def get_star_rating(score: int, total: int) -> int:
    """1 to 3 stars by score relative to 200 points per question."""
    if total <= 0:
        return 1
    ratio = score / (total * 200)
    if ratio >= 0.8:
        return 3
    elif ratio >= 0.5:
        return 2
    return 1


def round_half_up(value: float) -> int:
    # Halves round up, matching the score tables.
    return math.floor(value + 0.5)
