import random

import pytest

from chronoquest.models import Era, Difficulty, HistoricalEvent


def build_event(id, year, era=Era.MODERN, location="Somewhere, Earth",
                difficulty=Difficulty.MEDIUM, hints=("First hint", "Second hint"), **kwargs):
    return HistoricalEvent(
        id=id, name=kwargs.pop("name", f"Event {id}"), era=era, year=year,
        location=location, difficulty=difficulty, hints=tuple(hints), **kwargs,
    )


@pytest.fixture
def tmp_db(tmp_path):
    """Provide a temporary SQLite database path for tests."""
    db_path = str(tmp_path / "test_profile.db")
    return db_path


@pytest.fixture
def make_event():
    return build_event


@pytest.fixture
def catalog():
    """Ten events spread from the ancient world to the space age."""
    return (
        build_event(1, -2560, Era.ANCIENT, "Giza, Egypt", hints=("Pharaoh", "Nile", "Wonder")),
        build_event(2, -490, Era.CLASSICAL, "Marathon, Greece"),
        build_event(3, 79, Era.CLASSICAL, "Pompeii, Italy", Difficulty.EASY),
        build_event(4, 800, Era.MEDIEVAL, "Rome, Italy"),
        build_event(5, 1066, Era.MEDIEVAL, "Hastings, England", Difficulty.EASY),
        build_event(6, 1492, Era.RENAISSANCE, "San Salvador, Bahamas", Difficulty.EASY),
        build_event(7, 1776, Era.ENLIGHTENMENT, "Philadelphia, United States", Difficulty.HARD),
        build_event(8, 1815, Era.ENLIGHTENMENT, "Waterloo, Belgium"),
        build_event(9, 1912, Era.MODERN, "North Atlantic Ocean"),
        build_event(10, 1969, Era.CONTEMPORARY, "Sea of Tranquility, Moon", Difficulty.HARD),
    )


@pytest.fixture
def rng():
    return random.Random(1234)
