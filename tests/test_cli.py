from __future__ import annotations

from typing import Iterable

import pytest

from app.cli import MenuLoop
from app.services.session import MovieSession
from app.services.storage import CsvStore


class ScriptedConsole:
    """Feeds canned answers to prompts and records printed lines."""

    def __init__(self, answers: Iterable[str]) -> None:
        self._answers = list(answers)
        self.lines: list[str] = []

    def input(self, prompt: str) -> str:
        self.lines.append(prompt)
        if not self._answers:
            raise AssertionError(f"Unexpected prompt: {prompt!r}")
        return self._answers.pop(0)

    def output(self, line: str) -> None:
        self.lines.append(line)


@pytest.fixture
def store(data_dir) -> CsvStore:
    (data_dir / "users.csv").write_text(
        "Username,Password,Watchlist,History\nbob,bob123,,\n", encoding="utf-8"
    )
    return CsvStore(data_dir / "movies.csv", data_dir / "users.csv")


def _run(store: CsvStore, answers: list[str]) -> ScriptedConsole:
    console = ScriptedConsole(answers)
    session = MovieSession.from_store(store, default_count=2)
    MenuLoop(session, input_func=console.input, output_func=console.output).run()
    return console


def test_login_failure_then_exit(store) -> None:
    console = _run(store, ["1", "bob", "nope", "x", "2"])

    assert "Invalid username or password. Please try again." in console.lines
    assert "Please enter a valid number." in console.lines
    assert console.lines[-1].startswith("Thank you for using")


def test_watch_flow_and_genre_recommendations(store) -> None:
    answers = [
        "1", "bob", "bob123",
        "2", "m003",        # add Arrival to the watchlist, lower-case id
        "5", "M003",        # mark it watched
        "4",                # watchlist is now empty
        "6",                # history shows Arrival
        "7", "1", "",       # genre strategy, default count
        "9",
        "2",
    ]

    console = _run(store, answers)

    assert "Login successful! Welcome, bob!" in console.lines
    assert "Movie added to watchlist successfully." in console.lines
    assert "Movie marked as watched successfully." in console.lines
    assert "Your watchlist is empty." in console.lines
    assert "M003 | Arrival (2016) | Genre: Sci-Fi | Rating: 7.9" in console.lines
    assert "\n=== Genre-Based Recommendation ===" in console.lines
    # Annihilation shares the Sci-Fi genre, then the best rated movie follows.
    assert "1. M006 | Annihilation (2018) | Genre: Sci-Fi | Rating: 6.8" in console.lines
    assert "2. M002 | Alien (1979) | Genre: Horror | Rating: 8.5" in console.lines
    assert "Goodbye, bob!" in console.lines
    assert store.load_users()["bob"].history.movie_ids == ["M003"]


def test_invalid_strategy_and_count_fall_back_to_defaults(store) -> None:
    answers = ["1", "bob", "bob123", "7", "9", "many", "9", "2"]

    console = _run(store, answers)

    assert "Invalid choice. Using hybrid strategy." in console.lines
    assert "Invalid number. Using default value 2." in console.lines
    assert "\n=== Hybrid Recommendation ===" in console.lines
    assert "1. M002 | Alien (1979) | Genre: Horror | Rating: 8.5" in console.lines
    assert "2. M001 | Heat (1995) | Genre: Crime | Rating: 8.3" in console.lines
    assert not any(line.startswith("3. M0") for line in console.lines)


def test_unknown_movie_and_repeat_actions(store) -> None:
    answers = [
        "1", "bob", "bob123",
        "2", "M404",
        "3", "M001",
        "5", "M001",
        "5", "M001",
        "9",
        "2",
    ]

    console = _run(store, answers)

    assert "Movie ID not found." in console.lines
    assert "Movie not found in your watchlist." in console.lines
    assert "Movie is already in your history." in console.lines


def test_view_strategies_lists_descriptions(store) -> None:
    console = _run(store, ["1", "bob", "bob123", "8", "9", "2"])

    assert "4. Hybrid Recommendation" in console.lines
    assert "   Recommends the most recent movies you haven't watched yet" in console.lines
    assert "Current strategy: Hybrid Recommendation" in console.lines


def test_watched_movie_is_not_added_back_to_watchlist(store) -> None:
    answers = [
        "1", "bob", "bob123",
        "5", "M002",
        "2", "M002",
        "2", "M004",
        "2", "M004",
        "9",
        "2",
    ]

    console = _run(store, answers)

    assert "Movie is already in your history." in console.lines
    assert "Movie is already in your watchlist." in console.lines
    saved = store.load_users()["bob"]
    assert saved.history.movie_ids == ["M002"]
    assert saved.watchlist.movie_ids == ["M004"]
