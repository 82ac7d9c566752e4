import random

import pytest
from unittest.mock import patch

from chronoquest.app import (
    SessionExitRequested, session_prompt, run_question_game, run_timeline_game,
    cmd_profile, cmd_name, run_onboarding, ask_question,
)
from chronoquest.db import init_db, get_connection
from chronoquest.engine import SessionEngine
from chronoquest.profile import load_profile


def test_session_exit_requested_is_exception():
    with pytest.raises(SessionExitRequested):
        raise SessionExitRequested()


def test_session_prompt_raises_on_q():
    with patch("chronoquest.app.Prompt.ask", return_value="q"):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_raises_on_menu():
    with patch("chronoquest.app.Prompt.ask", return_value=" MENU "):
        with pytest.raises(SessionExitRequested):
            session_prompt("test prompt")


def test_session_prompt_returns_normal_input():
    with patch("chronoquest.app.Prompt.ask", return_value="1776"):
        assert session_prompt("test prompt") == "1776"


def test_session_prompt_none_becomes_empty():
    with patch("chronoquest.app.Prompt.ask", return_value=None):
        assert session_prompt("test prompt") == ""


def test_run_question_game_records_result(tmp_db, make_event):
    """Hint, one wrong guess, then the right year."""
    init_db(tmp_db)
    engine = SessionEngine([make_event(1, 1776, hints=("a", "b"))], event_count=1)
    engine.start_classic_game()
    with patch("chronoquest.app.Prompt.ask", side_effect=["hint", "1700", "1776"]):
        run_question_game(tmp_db, engine)
    profile = load_profile(tmp_db)
    assert profile.total_games_played == 1
    assert profile.total_score == 175
    assert profile.correct_answers == 1
    assert profile.answered_event_ids == [1]
    assert "first_win" in profile.achievements
    assert "hint_free" not in profile.achievements


def test_run_question_game_skip_and_advance(tmp_db, make_event):
    init_db(tmp_db)
    engine = SessionEngine([make_event(1, 1000), make_event(2, 1500)], event_count=2,
                           rng=random.Random(0))
    engine.start_era_explorer()
    with patch("chronoquest.app.Prompt.ask", side_effect=["skip", "", "give up"]):
        run_question_game(tmp_db, engine)
    profile = load_profile(tmp_db)
    assert profile.total_games_played == 1
    assert profile.correct_answers == 0
    assert profile.total_answers == 2


def test_run_question_game_exits_on_q(tmp_db, make_event):
    init_db(tmp_db)
    engine = SessionEngine([make_event(1, 1776)], event_count=1)
    engine.start_map_quest()
    with patch("chronoquest.app.Prompt.ask", side_effect=["q"]):
        with pytest.raises(SessionExitRequested):
            run_question_game(tmp_db, engine)
    assert load_profile(tmp_db).total_games_played == 0


def test_run_question_game_daily_updates_streak(tmp_db, make_event):
    init_db(tmp_db)
    engine = SessionEngine([make_event(1, 1776)], event_count=1)
    engine.start_daily_challenge("2024-01-01")
    with patch("chronoquest.app.Prompt.ask", side_effect=["1776"]):
        run_question_game(tmp_db, engine)
    assert load_profile(tmp_db).daily_streak == 1
    assert load_profile(tmp_db).last_daily_date == "2024-01-01"


def test_run_question_game_without_events(tmp_db):
    init_db(tmp_db)
    engine = SessionEngine([])
    engine.start_classic_game()
    run_question_game(tmp_db, engine)
    assert load_profile(tmp_db).total_games_played == 0


def test_run_timeline_game(tmp_db, catalog):
    init_db(tmp_db)
    engine = SessionEngine(catalog, rng=random.Random(2))
    engine.start_timeline()
    with patch("chronoquest.app.Prompt.ask", side_effect=["move 1 2", "bogus", "", "submit"]):
        run_timeline_game(tmp_db, engine)
    assert engine.timeline.session.is_submitted is True
    conn = get_connection(tmp_db)
    row = conn.execute("SELECT * FROM game_results").fetchone()
    conn.close()
    assert row["mode"] == "timeline"
    assert row["score"] == engine.timeline.session.score
    assert row["total_count"] == 5


def test_run_timeline_game_move_clamps(tmp_db, catalog):
    init_db(tmp_db)
    engine = SessionEngine(catalog, rng=random.Random(2))
    timeline = engine.start_timeline()
    last = timeline.user_order[-1]
    with patch("chronoquest.app.Prompt.ask", side_effect=["move 9 1", "submit"]):
        run_timeline_game(tmp_db, engine)
    assert timeline.user_order[0] is last


def test_cmd_profile_renders(tmp_db, catalog):
    init_db(tmp_db)
    engine = SessionEngine(catalog, event_count=1)
    engine.start_classic_game()
    with patch("chronoquest.app.Prompt.ask", side_effect=["skip"]):
        run_question_game(tmp_db, engine)
    cmd_profile(tmp_db, catalog)


def test_cmd_name(tmp_db):
    init_db(tmp_db)
    with patch("chronoquest.app.Prompt.ask", return_value="Atlas"):
        cmd_name(tmp_db)
    assert load_profile(tmp_db).name == "Atlas"


def test_run_onboarding(tmp_db):
    init_db(tmp_db)
    with patch("chronoquest.app.Prompt.ask", side_effect=["Cleo", "explorer_f1"]):
        run_onboarding(tmp_db)
    profile = load_profile(tmp_db)
    assert profile.name == "Cleo"
    assert profile.has_completed_onboarding is True


def test_ask_question_carries_partial_seconds(make_event):
    """Several sub-second prompts still add up on the countdown."""
    engine = SessionEngine([make_event(1, 1776, hints=("a", "b", "c"))], event_count=1)
    engine.start_classic_game(is_timed=True)
    with patch("chronoquest.app.Prompt.ask", side_effect=["hint", "hint", "1776"]), \
            patch("chronoquest.app.time.monotonic", side_effect=[0.0, 0.6, 1.2, 1.8]):
        ask_question(engine)
    assert engine.session.is_correct is True
    assert engine.session.time_remaining == 29


def test_cmd_profile_lists_recent_games(tmp_db, catalog, capsys):
    init_db(tmp_db)
    engine = SessionEngine(catalog, event_count=1)
    engine.start_era_explorer()
    with patch("chronoquest.app.Prompt.ask", side_effect=["skip"]):
        run_question_game(tmp_db, engine)
    cmd_profile(tmp_db, catalog)
    out = capsys.readouterr().out
    assert "Recent Games" in out
    assert "Era Explorer" in out
    assert "3000 BCE - 500 BCE" in out
