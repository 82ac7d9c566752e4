"""Data classes for the trivia domain model."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Era(str, Enum):
    ANCIENT = "ancient"
    CLASSICAL = "classical"
    MEDIEVAL = "medieval"
    RENAISSANCE = "renaissance"
    ENLIGHTENMENT = "enlightenment"
    MODERN = "modern"
    CONTEMPORARY = "contemporary"

    @property
    def label(self) -> str:
        return ERA_INFO[self]["name"]

    @property
    def span(self) -> str:
        return ERA_INFO[self]["span"]


ERA_INFO = {
    Era.ANCIENT: {"name": "Ancient World", "span": "3000 BCE - 500 BCE"},
    Era.CLASSICAL: {"name": "Classical Era", "span": "500 BCE - 500 CE"},
    Era.MEDIEVAL: {"name": "Medieval Period", "span": "500 - 1500"},
    Era.RENAISSANCE: {"name": "Renaissance", "span": "1400 - 1700"},
    Era.ENLIGHTENMENT: {"name": "Age of Revolution", "span": "1700 - 1850"},
    Era.MODERN: {"name": "Modern Era", "span": "1850 - 1950"},
    Era.CONTEMPORARY: {"name": "Contemporary", "span": "1950 - Present"},
}


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class GameMode(str, Enum):
    CLASSIC = "classic"
    TIMED = "timed"
    TIMELINE = "timeline"
    DAILY = "daily"
    ERA = "era"
    MAP = "map"

    @property
    def label(self) -> str:
        return MODE_LABELS[self]


MODE_LABELS = {
    GameMode.CLASSIC: "Classic",
    GameMode.TIMED: "Timed",
    GameMode.TIMELINE: "Timeline",
    GameMode.DAILY: "Daily Discovery",
    GameMode.ERA: "Era Explorer",
    GameMode.MAP: "Map Quest",
}


class AnswerStatus(str, Enum):
    IGNORED = "ignored"
    CORRECT = "correct"
    RETRY = "retry"
    INCORRECT = "incorrect"


@dataclass(frozen=True)
class HistoricalEvent:
    id: int
    name: str
    era: Era
    year: int
    location: str
    difficulty: Difficulty
    description: str = ""
    fun_fact: str = ""
    hints: tuple = ()
    accepted_answers: tuple = ()


@dataclass(frozen=True)
class AnswerOutcome:
    """Result of a single submit_answer call."""
    status: AnswerStatus
    points: int = 0
    guesses_left: int = 0

    @property
    def is_final(self) -> bool:
        return self.status in (AnswerStatus.CORRECT, AnswerStatus.INCORRECT)


@dataclass
class GameSession:
    mode: GameMode = GameMode.CLASSIC
    events: list = field(default_factory=list)
    current_index: int = 0
    score: int = 0
    streak: int = 0
    best_streak: int = 0
    hints_revealed: int = 0
    is_answered: bool = False
    is_correct: bool = False
    is_timed: bool = False
    time_remaining: int = 0
    image_uri: Optional[str] = None
    image_loading: bool = False
    guesses_used: int = 0
    correct_count: int = 0
    hints_used: int = 0
    answered_event_ids: list = field(default_factory=list)
    date_key: Optional[str] = None

    @property
    def current_event(self) -> Optional[HistoricalEvent]:
        if 0 <= self.current_index < len(self.events):
            return self.events[self.current_index]
        return None

    @property
    def is_last_question(self) -> bool:
        return self.current_index == len(self.events) - 1


@dataclass
class TimelineSession:
    events: list = field(default_factory=list)
    user_order: list = field(default_factory=list)
    is_submitted: bool = False
    correct_placements: int = 0
    score: int = 0


@dataclass(frozen=True)
class SessionOutcome:
    """What a finished game hands to the profile store."""
    mode: GameMode
    score: int
    correct_count: int
    total_count: int
    best_streak: int
    answered_event_ids: tuple = ()
    hints_used: int = 0


MASCOTS = ("explorer_m1", "explorer_m2", "explorer_f1", "explorer_f2")


@dataclass
class UserProfile:
    name: str = "Explorer"
    mascot: str = "explorer_m1"
    total_games_played: int = 0
    total_score: int = 0
    best_score: int = 0
    best_streak: int = 0
    correct_answers: int = 0
    total_answers: int = 0
    achievements: list = field(default_factory=list)
    daily_streak: int = 0
    last_daily_date: Optional[str] = None
    has_completed_onboarding: bool = False
    answered_event_ids: list = field(default_factory=list)


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str = ""
