"""Local player profile: the store a finished game reports to."""
import logging
from datetime import date, datetime, timedelta

from chronoquest.db import get_connection
from chronoquest.models import MASCOTS, SessionOutcome, UserProfile
from chronoquest.selector import today_key

logger = logging.getLogger(__name__)

_PROFILE_COLUMNS = (
    "name", "mascot", "total_games_played", "total_score", "best_score",
    "best_streak", "correct_answers", "total_answers", "daily_streak",
    "last_daily_date", "has_completed_onboarding",
)


def _ensure_profile(conn) -> None:
    conn.execute("INSERT OR IGNORE INTO profile (id) VALUES (1)")


def load_profile(db_path: str) -> UserProfile:
    """Stored values merged over the defaults; creates the row on first use."""
    conn = get_connection(db_path)
    _ensure_profile(conn)
    conn.commit()
    row = conn.execute("SELECT * FROM profile WHERE id = 1").fetchone()
    achievements = [r["id"] for r in conn.execute(
        "SELECT id FROM achievements ORDER BY unlocked_at, id"
    ).fetchall()]
    answered = [r["event_id"] for r in conn.execute(
        "SELECT event_id FROM answered_events ORDER BY event_id"
    ).fetchall()]
    conn.close()
    stored = {col: row[col] for col in _PROFILE_COLUMNS if row[col] is not None}
    stored["has_completed_onboarding"] = bool(stored.get("has_completed_onboarding", 0))
    return UserProfile(**stored, achievements=achievements, answered_event_ids=answered)


def _update_profile(db_path: str, **fields) -> None:
    assignments = ", ".join(f"{col} = ?" for col in fields)
    conn = get_connection(db_path)
    _ensure_profile(conn)
    conn.execute(f"UPDATE profile SET {assignments} WHERE id = 1", tuple(fields.values()))
    conn.commit()
    conn.close()


def complete_onboarding(db_path: str, name: str, mascot: str) -> None:
    if mascot not in MASCOTS:
        raise ValueError(f"Unknown mascot: {mascot}")
    _update_profile(db_path, name=name.strip() or "Explorer", mascot=mascot, has_completed_onboarding=1)


def update_name(db_path: str, name: str) -> None:
    _update_profile(db_path, name=name.strip() or "Explorer")


def record_game_result(db_path: str, outcome: SessionOutcome) -> UserProfile:
    """Fold a finished game into the profile totals and game history."""
    now = datetime.now().isoformat()
    conn = get_connection(db_path)
    _ensure_profile(conn)
    conn.execute(
        """UPDATE profile SET
            total_games_played = total_games_played + 1,
            total_score = total_score + ?,
            best_score = MAX(best_score, ?),
            best_streak = MAX(best_streak, ?),
            correct_answers = correct_answers + ?,
            total_answers = total_answers + ?
        WHERE id = 1""",
        (outcome.score, outcome.score, outcome.best_streak, outcome.correct_count, outcome.total_count),
    )
    for event_id in outcome.answered_event_ids:
        conn.execute(
            "INSERT OR IGNORE INTO answered_events (event_id, first_answered_at) VALUES (?, ?)",
            (event_id, now),
        )
    conn.execute(
        """INSERT INTO game_results
        (mode, score, correct_count, total_count, best_streak, hints_used, played_at)
        VALUES (?, ?, ?, ?, ?, ?, ?)""",
        (outcome.mode.value, outcome.score, outcome.correct_count, outcome.total_count,
         outcome.best_streak, outcome.hints_used, now),
    )
    conn.commit()
    conn.close()
    logger.info("Recorded %s game: %d points, %d/%d correct",
                outcome.mode.value, outcome.score, outcome.correct_count, outcome.total_count)
    return load_profile(db_path)


def unlock_achievement(db_path: str, achievement_id: str) -> bool:
    """Unlock an achievement. Returns False if it was already unlocked."""
    from chronoquest.achievements import ACHIEVEMENT_IDS
    if achievement_id not in ACHIEVEMENT_IDS:
        raise ValueError(f"Unknown achievement: {achievement_id}")
    conn = get_connection(db_path)
    cursor = conn.execute(
        "INSERT OR IGNORE INTO achievements (id, unlocked_at) VALUES (?, ?)",
        (achievement_id, datetime.now().isoformat()),
    )
    unlocked = cursor.rowcount > 0
    conn.commit()
    conn.close()
    return unlocked


def update_daily_streak(db_path: str, today: str = None) -> int:
    """Count a completed daily challenge toward the consecutive-day streak.

    A second completion on the same day does not count; missing a day
    restarts the streak at 1. Days are UTC dates, the same keys
    the daily challenge is picked by.
    """
    today = today or today_key()
    profile = load_profile(db_path)
    last = profile.last_daily_date
    if last == today:
        return profile.daily_streak
    yesterday = (date.fromisoformat(today) - timedelta(days=1)).isoformat()
    streak = profile.daily_streak + 1 if last == yesterday else 1
    _update_profile(db_path, daily_streak=streak, last_daily_date=today)
    return streak
