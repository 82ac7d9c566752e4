"""Game session state machine.

One SessionEngine drives one game at a time. Each question moves from
awaiting an answer to answered (correct or not) through submit_answer,
give_up or the countdown running out, and next_event moves on to the next
question. Calls that make no sense in the current state are ignored.
"""
import logging
import random

from chronoquest.config import EVENTS_PER_GAME, TIMED_SECONDS, MAX_GUESSES, YEAR_TOLERANCE
from chronoquest.models import (
    AnswerOutcome, AnswerStatus, GameMode, GameSession, SessionOutcome,
)
from chronoquest.scoring import (
    calculate_score, calculate_time_bonus, check_year_answer, parse_year,
)
from chronoquest.selector import pick_random, pick_seeded_by_date, today_key
from chronoquest.timeline import TimelineEngine
from chronoquest.timer import Countdown

logger = logging.getLogger(__name__)


def _normalize(text: str) -> str:
    return text.strip().lower()


def match_year(event, answer: str) -> bool:
    year = parse_year(answer)
    if year is None:
        return False
    return check_year_answer(event.year, year, tolerance=YEAR_TOLERANCE)


def match_era(event, answer: str) -> bool:
    # Exact after normalizing; era names are a closed set, no fuzzy matching.
    return _normalize(answer) == event.era.value


def match_location(event, answer: str) -> bool:
    guess = _normalize(answer)
    location = _normalize(event.location)
    return guess == location or guess in location


ANSWER_MATCHERS = {
    GameMode.CLASSIC: match_year,
    GameMode.TIMED: match_year,
    GameMode.DAILY: match_year,
    GameMode.ERA: match_era,
    GameMode.MAP: match_location,
}


class SessionEngine:
    """Owns one GameSession (and, in timeline mode, one TimelineEngine).

    ``image_lookup`` maps an event id to an optional image path. ``tick``
    must be called by the host once per elapsed second while a timed
    question is open.
    """

    def __init__(self, catalog, image_lookup=None, rng: random.Random = None,
                 event_count: int = EVENTS_PER_GAME, total_seconds: int = TIMED_SECONDS,
                 max_guesses: int = MAX_GUESSES):
        self.catalog = tuple(catalog)
        self.image_lookup = image_lookup
        self.rng = rng or random.Random()
        self.event_count = event_count
        self.total_seconds = total_seconds
        self.max_guesses = max_guesses
        self.session = GameSession()
        self.timeline = TimelineEngine(self.catalog, rng=self.rng, event_count=event_count)
        self._countdown = None

    # --- starting a game ---

    def start_classic_game(self, is_timed: bool = False) -> GameSession:
        mode = GameMode.TIMED if is_timed else GameMode.CLASSIC
        return self._begin(mode, pick_random(self.catalog, self.event_count, self.rng), is_timed)

    def start_daily_challenge(self, date_key: str = None) -> GameSession:
        date_key = date_key or today_key()
        events = pick_seeded_by_date(self.catalog, self.event_count, date_key)
        session = self._begin(GameMode.DAILY, events, is_timed=True)
        session.date_key = date_key
        return session

    def start_era_explorer(self) -> GameSession:
        return self._begin(GameMode.ERA, pick_random(self.catalog, self.event_count, self.rng))

    def start_map_quest(self) -> GameSession:
        return self._begin(GameMode.MAP, pick_random(self.catalog, self.event_count, self.rng))

    def start_timeline(self):
        self._stop_timer()
        self.session = GameSession(mode=GameMode.TIMELINE)
        timeline = self.timeline.start_timeline(parent=self.session)
        self.session.events = list(timeline.events)
        logger.debug("Started %s game", GameMode.TIMELINE.value)
        return timeline

    def _begin(self, mode: GameMode, events: list, is_timed: bool = False) -> GameSession:
        self._stop_timer()
        self.session = GameSession(
            mode=mode,
            events=list(events),
            is_timed=is_timed,
            time_remaining=self.total_seconds if is_timed else 0,
        )
        self.timeline.reset()
        self._load_image()
        if is_timed and self.session.events:
            self._start_timer()
        logger.debug("Started %s game with %d events", mode.value, len(self.session.events))
        return self.session

    # --- per-question operations ---

    def submit_answer(self, answer: str) -> AnswerOutcome:
        s = self.session
        event = s.current_event
        matcher = ANSWER_MATCHERS.get(s.mode)
        if s.is_answered or event is None or matcher is None:
            return AnswerOutcome(AnswerStatus.IGNORED)

        answer = answer or ""
        is_correct = bool(answer.strip()) and matcher(event, answer)
        s.guesses_used += 1

        if is_correct:
            self._stop_timer()
            time_bonus = calculate_time_bonus(s.time_remaining, self.total_seconds) if s.is_timed else 0
            points = calculate_score(event.difficulty, s.hints_revealed, s.streak, time_bonus)
            s.score += points
            s.streak += 1
            s.best_streak = max(s.best_streak, s.streak)
            s.correct_count += 1
            self._mark_answered(correct=True)
            logger.debug("Event %s answered correctly for %d points", event.id, points)
            return AnswerOutcome(AnswerStatus.CORRECT, points=points)

        if s.guesses_used >= self.max_guesses:
            self._stop_timer()
            s.streak = 0
            self._mark_answered(correct=False)
            logger.debug("Event %s out of guesses", event.id)
            return AnswerOutcome(AnswerStatus.INCORRECT)

        logger.debug("Wrong guess %r for event %s", answer, event.id)
        return AnswerOutcome(AnswerStatus.RETRY, guesses_left=self.max_guesses - s.guesses_used)

    def reveal_hint(self):
        """Reveal the next hint and return its text, or None if there is none to show."""
        s = self.session
        event = s.current_event
        if s.is_answered or event is None:
            return None
        if s.hints_revealed >= len(event.hints):
            return None
        hint = event.hints[s.hints_revealed]
        s.hints_revealed += 1
        s.hints_used += 1
        return hint

    def give_up(self) -> None:
        s = self.session
        if s.is_answered or s.current_event is None:
            return
        self._stop_timer()
        s.streak = 0
        self._mark_answered(correct=False)

    def next_event(self) -> bool:
        s = self.session
        next_index = s.current_index + 1
        if next_index >= len(s.events):
            return False
        self._stop_timer()
        s.current_index = next_index
        s.is_answered = False
        s.is_correct = False
        s.hints_revealed = 0
        s.guesses_used = 0
        s.time_remaining = self.total_seconds if s.is_timed else 0
        self._load_image()
        if s.is_timed:
            self._start_timer()
        return True

    def tick(self, seconds: int = 1) -> None:
        if self._countdown is not None:
            self._countdown.tick(seconds)

    # --- timeline delegation ---

    def move_timeline_event(self, from_index: int, to_index: int) -> None:
        self.timeline.move_timeline_event(from_index, to_index)

    def submit_timeline(self) -> int:
        return self.timeline.submit_timeline()

    # --- derived state ---

    @property
    def is_game_complete(self) -> bool:
        return self.session.is_answered and self.session.is_last_question

    @property
    def timer_active(self) -> bool:
        return self._countdown is not None and self._countdown.active

    @property
    def guesses_left(self) -> int:
        return max(0, self.max_guesses - self.session.guesses_used)

    def outcome(self) -> SessionOutcome:
        s = self.session
        if s.mode == GameMode.TIMELINE:
            total = len(self.timeline.session.events)
        else:
            total = len(s.events)
        return SessionOutcome(
            mode=s.mode,
            score=s.score,
            correct_count=s.correct_count,
            total_count=total,
            best_streak=s.best_streak,
            answered_event_ids=tuple(s.answered_event_ids),
            hints_used=s.hints_used,
        )

    # --- internals ---

    def _mark_answered(self, correct: bool) -> None:
        s = self.session
        s.is_answered = True
        s.is_correct = correct
        event = s.current_event
        if event is not None and event.id not in s.answered_event_ids:
            s.answered_event_ids.append(event.id)

    def _load_image(self) -> None:
        s = self.session
        event = s.current_event
        s.image_uri = self.image_lookup(event.id) if (self.image_lookup and event) else None
        s.image_loading = False

    def _start_timer(self) -> None:
        self._stop_timer()
        self.session.time_remaining = self.total_seconds
        self._countdown = Countdown(self.total_seconds, on_tick=self._on_tick, on_expire=self._on_expire)
        self._countdown.start()

    def _stop_timer(self) -> None:
        if self._countdown is not None:
            self._countdown.stop()
            self._countdown = None

    def _on_tick(self, remaining: int) -> None:
        self.session.time_remaining = remaining

    def _on_expire(self) -> None:
        self._countdown = None
        s = self.session
        if s.is_answered:
            return
        s.streak = 0
        self._mark_answered(correct=False)
        logger.debug("Time ran out on event %s", s.current_event.id)
