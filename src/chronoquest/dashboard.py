"""Profile statistics and game history."""
from chronoquest.catalog import events_by_era
from chronoquest.db import get_connection
from chronoquest.models import Era, GameMode
from chronoquest.scoring import get_accuracy


def count_games(db_path: str, mode=None) -> int:
    conn = get_connection(db_path)
    if mode is None:
        count = conn.execute("SELECT COUNT(*) FROM game_results").fetchone()[0]
    else:
        count = conn.execute(
            "SELECT COUNT(*) FROM game_results WHERE mode = ?", (GameMode(mode).value,)
        ).fetchone()[0]
    conn.close()
    return count


def get_profile_stats(db_path: str) -> dict:
    conn = get_connection(db_path)
    row = conn.execute("SELECT * FROM profile WHERE id = 1").fetchone()
    seen = conn.execute("SELECT COUNT(*) FROM answered_events").fetchone()[0]
    unlocked = conn.execute("SELECT COUNT(*) FROM achievements").fetchone()[0]
    conn.close()
    if row is None:
        return {
            "games_played": 0, "total_score": 0, "best_score": 0, "best_streak": 0,
            "accuracy": 0, "daily_streak": 0, "events_seen": seen, "achievements": unlocked,
        }
    return {
        "games_played": row["total_games_played"],
        "total_score": row["total_score"],
        "best_score": row["best_score"],
        "best_streak": row["best_streak"],
        "accuracy": get_accuracy(row["correct_answers"], row["total_answers"]),
        "daily_streak": row["daily_streak"],
        "events_seen": seen,
        "achievements": unlocked,
    }


def get_mode_summary(db_path: str) -> list[dict]:
    """Games, best and average score per mode, in menu order."""
    conn = get_connection(db_path)
    rows = conn.execute(
        """SELECT mode, COUNT(*) as games, MAX(score) as best, AVG(score) as avg,
            SUM(correct_count) as correct, SUM(total_count) as total
        FROM game_results GROUP BY mode"""
    ).fetchall()
    conn.close()
    by_mode = {r["mode"]: r for r in rows}
    results = []
    for mode in GameMode:
        r = by_mode.get(mode.value)
        if r is None:
            continue
        results.append({
            "mode": mode,
            "label": mode.label,
            "games": r["games"],
            "best_score": r["best"],
            "avg_score": round(r["avg"], 1),
            "accuracy": get_accuracy(r["correct"], r["total"]),
        })
    return results


def get_recent_games(db_path: str, limit: int = 10) -> list[dict]:
    conn = get_connection(db_path)
    rows = conn.execute(
        "SELECT * FROM game_results ORDER BY id DESC LIMIT ?", (limit,)
    ).fetchall()
    conn.close()
    return [dict(r) for r in rows]


def get_era_progress(db_path: str, catalog) -> list[dict]:
    """How many catalog events per era the player has already answered."""
    conn = get_connection(db_path)
    seen = {r["event_id"] for r in conn.execute("SELECT event_id FROM answered_events").fetchall()}
    conn.close()
    progress = []
    for era in Era:
        events = events_by_era(catalog, era)
        progress.append({
            "era": era,
            "label": era.label,
            "seen": sum(1 for e in events if e.id in seen),
            "total": len(events),
        })
    return progress
