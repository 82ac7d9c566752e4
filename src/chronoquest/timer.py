"""Per-question countdown for timed modes."""
import logging

logger = logging.getLogger(__name__)


class Countdown:
    """One-second countdown driven by cooperative ticks.

    The owner calls ``tick`` once per elapsed second (or with the number of
    whole seconds elapsed). ``on_tick`` receives the remaining seconds after
    every decrement; ``on_expire`` fires once when the count reaches zero,
    after which the countdown is stopped. Ticks on a stopped countdown do
    nothing.
    """

    def __init__(self, total_seconds: int, on_tick=None, on_expire=None):
        self.total_seconds = total_seconds
        self.remaining = total_seconds
        self.active = False
        self._on_tick = on_tick
        self._on_expire = on_expire

    def start(self) -> None:
        self.remaining = self.total_seconds
        self.active = True

    def stop(self) -> None:
        self.active = False

    def tick(self, seconds: int = 1) -> None:
        for _ in range(max(0, int(seconds))):
            if not self.active:
                return
            if self.remaining <= 1:
                self.remaining = 0
                self.active = False
                logger.debug("Countdown expired")
                if self._on_tick:
                    self._on_tick(0)
                if self._on_expire:
                    self._on_expire()
                return
            self.remaining -= 1
            if self._on_tick:
                self._on_tick(self.remaining)

