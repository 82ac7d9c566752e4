# tests/test_dashboard.py
from chronoquest.dashboard import (
    count_games, get_profile_stats, get_mode_summary, get_recent_games, get_era_progress,
)
from chronoquest.db import init_db
from chronoquest.models import Era, GameMode, SessionOutcome
from chronoquest.profile import record_game_result, unlock_achievement


def outcome(mode, score, correct, total=5, ids=()):
    return SessionOutcome(
        mode=mode, score=score, correct_count=correct, total_count=total,
        best_streak=correct, answered_event_ids=tuple(ids),
    )


def test_profile_stats_empty(tmp_db):
    init_db(tmp_db)
    stats = get_profile_stats(tmp_db)
    assert stats["games_played"] == 0
    assert stats["accuracy"] == 0
    assert stats["events_seen"] == 0


def test_profile_stats_after_games(tmp_db):
    init_db(tmp_db)
    record_game_result(tmp_db, outcome(GameMode.CLASSIC, 600, 3, ids=(1, 2)))
    record_game_result(tmp_db, outcome(GameMode.MAP, 900, 4, ids=(2, 3)))
    unlock_achievement(tmp_db, "first_win")
    stats = get_profile_stats(tmp_db)
    assert stats["games_played"] == 2
    assert stats["total_score"] == 1500
    assert stats["best_score"] == 900
    assert stats["best_streak"] == 4
    assert stats["accuracy"] == 70
    assert stats["events_seen"] == 3
    assert stats["achievements"] == 1


def test_count_games(tmp_db):
    init_db(tmp_db)
    record_game_result(tmp_db, outcome(GameMode.DAILY, 100, 1))
    record_game_result(tmp_db, outcome(GameMode.DAILY, 100, 1))
    record_game_result(tmp_db, outcome(GameMode.ERA, 100, 1))
    assert count_games(tmp_db) == 3
    assert count_games(tmp_db, GameMode.DAILY) == 2
    assert count_games(tmp_db, "era") == 1
    assert count_games(tmp_db, GameMode.TIMELINE) == 0


def test_mode_summary(tmp_db):
    init_db(tmp_db)
    record_game_result(tmp_db, outcome(GameMode.TIMELINE, 600, 3))
    record_game_result(tmp_db, outcome(GameMode.CLASSIC, 400, 2))
    record_game_result(tmp_db, outcome(GameMode.CLASSIC, 800, 4))
    summary = get_mode_summary(tmp_db)
    assert [m["mode"] for m in summary] == [GameMode.CLASSIC, GameMode.TIMELINE]
    classic = summary[0]
    assert classic["games"] == 2
    assert classic["best_score"] == 800
    assert classic["avg_score"] == 600.0
    assert classic["accuracy"] == 60
    assert classic["label"] == "Classic"


def test_recent_games_newest_first(tmp_db):
    init_db(tmp_db)
    for score in (100, 200, 300):
        record_game_result(tmp_db, outcome(GameMode.CLASSIC, score, 1))
    recent = get_recent_games(tmp_db, limit=2)
    assert [g["score"] for g in recent] == [300, 200]


def test_era_progress(tmp_db, catalog):
    init_db(tmp_db)
    record_game_result(tmp_db, outcome(GameMode.CLASSIC, 100, 1, ids=(4, 5, 9)))
    progress = {p["era"]: p for p in get_era_progress(tmp_db, catalog)}
    assert len(progress) == 7
    assert progress[Era.MEDIEVAL]["seen"] == 2
    assert progress[Era.MEDIEVAL]["total"] == 2
    assert progress[Era.MODERN]["seen"] == 1
    assert progress[Era.ANCIENT]["seen"] == 0
