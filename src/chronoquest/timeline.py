"""Timeline mode: put a handful of events in chronological order."""
import logging
import random

from chronoquest.config import EVENTS_PER_GAME, TIMELINE_SESSION_POINTS
from chronoquest.models import TimelineSession
from chronoquest.scoring import round_half_up
from chronoquest.selector import pick_spread_years

logger = logging.getLogger(__name__)


def placement_score(correct_placements: int, total: int) -> int:
    """Live timeline score: linear in placements, 1000 for a perfect order.

    Differs from scoring.calculate_timeline_score, which has no use in a
    running session.
    """
    if total <= 0:
        return 0
    return round_half_up(correct_placements / total * TIMELINE_SESSION_POINTS)


class TimelineEngine:
    """Owns one TimelineSession and reports its score to a parent GameSession."""

    def __init__(self, catalog, rng: random.Random = None, event_count: int = EVENTS_PER_GAME):
        self.catalog = tuple(catalog)
        self.rng = rng or random.Random()
        self.event_count = event_count
        self.session = TimelineSession()
        self.parent = None

    def reset(self) -> None:
        self.session = TimelineSession()
        self.parent = None

    def start_timeline(self, parent=None) -> TimelineSession:
        picked = pick_spread_years(self.catalog, self.event_count, self.rng)
        ordered = sorted(picked, key=lambda e: e.year)
        shuffled = self.rng.sample(ordered, len(ordered))
        self.session = TimelineSession(events=ordered, user_order=shuffled)
        self.parent = parent
        logger.debug("Timeline started with %d events", len(ordered))
        return self.session

    def move_timeline_event(self, from_index: int, to_index: int) -> None:
        """Move one entry of the player's order (remove, then reinsert)."""
        if self.session.is_submitted:
            return
        order = self.session.user_order
        if not 0 <= from_index < len(order):
            return
        moved = order.pop(from_index)
        order.insert(to_index, moved)

    def submit_timeline(self) -> int:
        s = self.session
        if s.is_submitted:
            return s.score
        # Identity, not equality: the session holds the exact event objects.
        s.correct_placements = sum(
            1 for placed, expected in zip(s.user_order, s.events) if placed is expected
        )
        s.score = placement_score(s.correct_placements, len(s.events))
        s.is_submitted = True
        if self.parent is not None:
            self.parent.score += s.score
            self.parent.is_answered = True
            self.parent.correct_count = s.correct_placements
            self.parent.answered_event_ids = [e.id for e in s.events]
        logger.debug("Timeline submitted: %d/%d placed, %d points",
                     s.correct_placements, len(s.events), s.score)
        return s.score
