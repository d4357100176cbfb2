"""Pytest configuration and test helpers."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure the application package is importable when running tests without an
# editable install. This mirrors the expected runtime layout where ``app`` sits
# at the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


from app.models import History, Movie, UserProfile, Watchlist  # noqa: E402


MOVIES_CSV = """MovieID,Title,Genre,Year,Rating
M001,Heat,Crime,1995,8.3
M002,Alien,Horror,1979,8.5
M003,Arrival,Sci-Fi,2016,7.9
M004,Zodiac,Crime,2007,7.7
M005,Her,Romance,2013,8.0
M006,Annihilation,Sci-Fi,2018,6.8
"""


def make_movie(
    movie_id: str, genre: str = "Drama", rating: float = 7.0, year: int = 2000
) -> Movie:
    return Movie(id=movie_id, title=f"Title {movie_id}", genre=genre, year=year, rating=rating)


def make_user(
    *, watchlist: list[str] | None = None, history: list[str] | None = None
) -> UserProfile:
    return UserProfile(
        username="tester",
        password="secret",
        watchlist=Watchlist(movie_ids=watchlist or []),
        history=History(movie_ids=history or []),
    )


@pytest.fixture
def catalog() -> dict[str, Movie]:
    movies = [
        make_movie("M001", "Crime", 8.3, 1995),
        make_movie("M002", "Horror", 8.5, 1979),
        make_movie("M003", "Sci-Fi", 7.9, 2016),
        make_movie("M004", "Crime", 7.7, 2007),
        make_movie("M005", "Romance", 8.0, 2013),
        make_movie("M006", "Sci-Fi", 6.8, 2018),
    ]
    return {movie.id: movie for movie in movies}


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    (tmp_path / "movies.csv").write_text(MOVIES_CSV, encoding="utf-8")
    return tmp_path
