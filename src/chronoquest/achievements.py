"""Achievement definitions and unlocking after each game."""
from chronoquest.dashboard import count_games
from chronoquest.models import Achievement, GameMode
from chronoquest.profile import load_profile, unlock_achievement

ACHIEVEMENTS = [
    Achievement("first_win", "First Discovery", "Get your first correct answer", "trophy"),
    Achievement("streak_5", "On a Roll", "Get a 5-answer streak", "fire"),
    Achievement("streak_10", "Unstoppable", "Get a 10-answer streak", "fire"),
    Achievement("perfect_game", "Perfect Explorer", "Get all 5 correct in a game", "star"),
    Achievement("speed_demon", "Speed Demon", "Answer in under 5 seconds", "bolt"),
    Achievement("hint_free", "No Hints Needed", "Complete a game without hints", "brain"),
    Achievement("era_master", "Era Master", "Get 10 correct in a single era", "school"),
    Achievement("century_scholar", "Century Scholar", "Play 100 total games", "medal"),
    Achievement("daily_devotee", "Daily Devotee", "Complete 7 daily challenges", "calendar"),
    Achievement("hard_mode", "History Professor", "Get 5 hard correct in a row", "crown"),
]

ACHIEVEMENT_IDS = {a.id for a in ACHIEVEMENTS}
_BY_ID = {a.id: a for a in ACHIEVEMENTS}


def earned_achievements(profile, outcome, daily_games: int = 0) -> list[str]:
    """Ids the player qualifies for after ``outcome`` has been recorded into ``profile``."""
    earned = []
    if profile.correct_answers > 0:
        earned.append("first_win")
    if profile.best_streak >= 5:
        earned.append("streak_5")
    if profile.best_streak >= 10:
        earned.append("streak_10")
    if outcome.total_count >= 5 and outcome.correct_count == outcome.total_count:
        earned.append("perfect_game")
    if outcome.mode != GameMode.TIMELINE and outcome.hints_used == 0 and outcome.correct_count > 0:
        earned.append("hint_free")
    if profile.total_games_played >= 100:
        earned.append("century_scholar")
    if daily_games >= 7:
        earned.append("daily_devotee")
    return earned


def award_achievements(db_path: str, outcome) -> list[Achievement]:
    """Unlock whatever the recorded game earned; returns only the new ones."""
    profile = load_profile(db_path)
    daily_games = count_games(db_path, GameMode.DAILY)
    new = []
    for achievement_id in earned_achievements(profile, outcome, daily_games):
        if achievement_id in profile.achievements:
            continue
        if unlock_achievement(db_path, achievement_id):
            new.append(_BY_ID[achievement_id])
    return new
