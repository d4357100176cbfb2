"""CSV persistence for the movie catalog and user profiles."""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Mapping

from pydantic import ValidationError

from ..models import History, Movie, UserProfile, Watchlist
from ..utils import join_id_list, split_id_list

logger = logging.getLogger(__name__)

MOVIE_COLUMNS: tuple[str, ...] = ("MovieID", "Title", "Genre", "Year", "Rating")
USER_COLUMNS: tuple[str, ...] = ("Username", "Password", "Watchlist", "History")

DEFAULT_USERS: tuple[tuple[str, str], ...] = (
    ("bob", "bob123"),
    ("eric", "eric123"),
    ("alice", "alice123"),
    ("diana", "diana123"),
    ("charlie", "charlie123"),
)


class StorageError(RuntimeError):
    """Raised when user data cannot be written back to disk."""


class CsvStore:
    """Reads the movie catalog and reads/writes user profiles as CSV files."""

    def __init__(self, movies_path: Path | str, users_path: Path | str) -> None:
        self.movies_path = Path(movies_path)
        self.users_path = Path(users_path)

    def load_movies(self) -> dict[str, Movie]:
        """Return the catalog keyed by movie id, in file order.

        A missing file yields an empty catalog. Rows that fail to parse are
        logged and skipped.
        """

        movies: dict[str, Movie] = {}
        if not self.movies_path.exists():
            logger.warning("Movie file not found: %s", self.movies_path)
            return movies

        with self.movies_path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for line_number, row in enumerate(reader, start=2):
                if not row or not any(cell.strip() for cell in row):
                    continue
                if len(row) < len(MOVIE_COLUMNS):
                    logger.warning(
                        "Skipping movie line %d with %d fields: %r",
                        line_number,
                        len(row),
                        row,
                    )
                    continue
                try:
                    movie = Movie.model_validate(
                        dict(zip(MOVIE_COLUMNS, (cell.strip() for cell in row)))
                    )
                except ValidationError as exc:
                    logger.warning(
                        "Error parsing movie line %d: %r (%s)",
                        line_number,
                        row,
                        exc.errors()[0]["msg"],
                    )
                    continue
                if movie.id in movies:
                    logger.warning(
                        "Duplicate movie id %s on line %d; keeping the later record",
                        movie.id,
                        line_number,
                    )
                movies[movie.id] = movie

        logger.info("Loaded %d movies from %s", len(movies), self.movies_path)
        return movies

    def load_users(self) -> dict[str, UserProfile]:
        """Return user profiles keyed by username.

        When the users file does not exist yet the default accounts are
        created and written out.
        """

        users: dict[str, UserProfile] = {}
        if not self.users_path.exists():
            logger.warning(
                "User file not found: %s; creating default users", self.users_path
            )
            users = self.default_users()
            self.save_users(users)
            return users

        with self.users_path.open("r", encoding="utf-8", newline="") as handle:
            reader = csv.reader(handle)
            next(reader, None)
            for line_number, row in enumerate(reader, start=2):
                if not row or not any(cell.strip() for cell in row):
                    continue
                if len(row) < 2:
                    logger.warning("Error parsing user line %d: %r", line_number, row)
                    continue
                # Trailing empty list columns may be omitted.
                cells = [cell.strip() for cell in row] + [""] * (len(USER_COLUMNS) - len(row))
                username, password, watchlist, history = cells[: len(USER_COLUMNS)]
                if not username:
                    logger.warning("Skipping user line %d without a username", line_number)
                    continue
                watchlist_ids = split_id_list(watchlist)
                history_ids = split_id_list(history)
                overlap = set(watchlist_ids) & set(history_ids)
                if overlap:
                    logger.warning(
                        "User %s has watched movies still queued: %s",
                        username,
                        ", ".join(sorted(overlap)),
                    )
                users[username] = UserProfile(
                    username=username,
                    password=password,
                    watchlist=Watchlist(movie_ids=watchlist_ids),
                    history=History(movie_ids=history_ids),
                )

        logger.info("Loaded %d users from %s", len(users), self.users_path)
        return users

    def save_users(self, users: Mapping[str, UserProfile]) -> None:
        """Write every profile back to the users file."""

        try:
            self.users_path.parent.mkdir(parents=True, exist_ok=True)
            with self.users_path.open("w", encoding="utf-8", newline="") as handle:
                writer = csv.writer(handle)
                writer.writerow(USER_COLUMNS)
                for user in users.values():
                    writer.writerow(
                        [
                            user.username,
                            user.password,
                            join_id_list(user.watchlist.movie_ids),
                            join_id_list(user.history.movie_ids),
                        ]
                    )
        except OSError as exc:
            logger.exception("Error saving user data to %s", self.users_path)
            raise StorageError(f"Error saving user data: {exc}") from exc
        logger.info("Saved %d users to %s", len(users), self.users_path)

    @staticmethod
    def default_users() -> dict[str, UserProfile]:
        return {
            username: UserProfile(username=username, password=password)
            for username, password in DEFAULT_USERS
        }
