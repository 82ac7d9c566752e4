"""Event selection per game mode.

The daily challenge must pick the same events for every player on a given
calendar day, so it never touches the ``random`` module. Its scheme is fixed
at version 1:

* seed: 32-bit string hash ``h = h * 31 + ord(c)`` over the date key, wrapped
  to a signed 32-bit integer after every character, then made non-negative
  with ``abs``.
* generator: linear congruential ``s = (s * 1664525 + 1013904223) mod 2**32``,
  each draw yielding ``s / 0xFFFFFFFF``.
* permutation: Fisher-Yates from the last index down to 1, swapping ``i``
  with ``j = floor(draw * (i + 1))`` (clamped to ``i``).

Changing any of these changes the identity of every past daily challenge.
"""
import logging
import math
import random
from datetime import datetime, timezone

logger = logging.getLogger(__name__)

DAILY_SCHEME_VERSION = 1

_MASK32 = 0xFFFFFFFF
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223


def today_key() -> str:
    """ISO date of the current UTC day, the default daily challenge key."""
    return datetime.now(timezone.utc).date().isoformat()


def hash_string(text: str) -> int:
    h = 0
    for char in text:
        h = (h * 31 + ord(char)) & _MASK32
    if h >= 0x80000000:
        h -= 0x100000000
    return abs(h)


def seeded_random(seed: int):
    """Return a zero-argument callable producing reproducible floats in [0, 1]."""
    state = seed & _MASK32

    def draw() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) & _MASK32
        return state / _MASK32

    return draw


def shuffle_with(items, rng) -> list:
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = min(math.floor(rng() * (i + 1)), i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def pick_random(catalog, count: int, rng: random.Random = None) -> list:
    """Uniform sample without replacement; the whole catalog, shuffled, if count is too large."""
    rng = rng or random
    pool = list(catalog)
    count = max(0, min(count, len(pool)))
    return rng.sample(pool, count)


def pick_seeded_by_date(catalog, count: int, date_key: str = None) -> list:
    date_key = date_key or today_key()
    seed = hash_string(date_key)
    shuffled = shuffle_with(catalog, seeded_random(seed))
    logger.debug("Daily selection for %s (seed %d, scheme v%d)", date_key, seed, DAILY_SCHEME_VERSION)
    return shuffled[:max(0, count)]


def pick_spread_years(catalog, count: int, rng: random.Random = None) -> list:
    """Pick events spread across the catalog's year range, in ascending year order.

    The catalog is sorted by year and cut into ``count`` equal strides; one
    event is drawn at a random offset inside each stride.
    """
    rng = rng or random
    ordered = sorted(catalog, key=lambda e: e.year)
    if len(ordered) <= count:
        return ordered
    if count <= 0:
        return []
    step = len(ordered) // count
    picked = []
    for i in range(count):
        index = min(i * step + rng.randrange(step), len(ordered) - 1)
        picked.append(ordered[index])
    return picked
