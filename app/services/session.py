"""Single interactive session tying the store, the catalog and the engine."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import MutableMapping

from ..config import DEFAULT_RECOMMENDATION_COUNT
from ..models import Catalog, Movie, UserProfile, resolve_movies
from ..strategies import Strategy
from .recommendation import RecommendationEngine
from .storage import CsvStore

logger = logging.getLogger(__name__)


class NotLoggedInError(RuntimeError):
    """Raised when a user action is attempted without an active login."""


class MovieNotFoundError(KeyError):
    """Raised when a movie id does not exist in the catalog."""


@dataclass(frozen=True)
class StrategyInfo:
    key: str
    name: str
    description: str


class MovieSession:
    """Coordinates login state, watch-state updates and recommendations.

    Every successful mutation of the active profile is written back through
    the store before the call returns.
    """

    def __init__(
        self,
        catalog: Catalog,
        users: MutableMapping[str, UserProfile],
        store: CsvStore,
        *,
        default_count: int = DEFAULT_RECOMMENDATION_COUNT,
        engine: RecommendationEngine | None = None,
    ) -> None:
        self.catalog = catalog
        self.users = users
        self.store = store
        self.default_count = default_count
        self.engine = engine or RecommendationEngine(catalog)
        self.current_user: UserProfile | None = None

    @classmethod
    def from_store(
        cls, store: CsvStore, *, default_count: int = DEFAULT_RECOMMENDATION_COUNT
    ) -> "MovieSession":
        return cls(
            store.load_movies(),
            store.load_users(),
            store,
            default_count=default_count,
        )

    @property
    def is_logged_in(self) -> bool:
        return self.current_user is not None

    def login(self, username: str, password: str) -> UserProfile | None:
        user = self.users.get(username)
        if user is None or not user.check_password(password):
            logger.info("Rejected login for %r", username)
            return None
        self.current_user = user
        logger.info("User %s logged in", username)
        return user

    def logout(self) -> UserProfile:
        user = self._require_user()
        try:
            self.save()
        finally:
            self.current_user = None
        logger.info("User %s logged out", user.username)
        return user

    def save(self) -> None:
        self.store.save_users(self.users)

    def browse(self) -> list[Movie]:
        return [self.catalog[movie_id] for movie_id in sorted(self.catalog)]

    def get_movie(self, movie_id: str) -> Movie:
        movie = self.catalog.get(movie_id)
        if movie is None:
            raise MovieNotFoundError(f"Movie {movie_id} not found")
        return movie

    def add_to_watchlist(self, movie_id: str) -> bool:
        """Queue a movie. Returns ``False`` if it is already queued or watched."""

        user = self._require_user()
        self.get_movie(movie_id)
        if not user.add_to_watchlist(movie_id):
            return False
        self.save()
        return True

    def remove_from_watchlist(self, movie_id: str) -> bool:
        user = self._require_user()
        if not user.watchlist.remove(movie_id):
            return False
        self.save()
        return True

    def mark_watched(self, movie_id: str) -> bool:
        """Record a movie as watched. Returns ``False`` if already in history."""

        user = self._require_user()
        self.get_movie(movie_id)
        if not user.mark_watched(movie_id):
            return False
        self.save()
        return True

    def watchlist_movies(self) -> list[Movie]:
        return resolve_movies(self.catalog, self._require_user().watchlist.movie_ids)

    def history_movies(self) -> list[Movie]:
        return resolve_movies(self.catalog, self._require_user().history.movie_ids)

    def recommend(
        self, strategy: str | Strategy | None = None, count: int | None = None
    ) -> list[Movie]:
        """Return recommendations for the active user.

        A missing or non-positive ``count`` falls back to the session default.
        """

        user = self._require_user()
        if strategy is not None:
            self.engine.set_strategy(strategy)
        if count is None or count <= 0:
            count = self.default_count
        return self.engine.recommend(user, count)

    def strategy_overview(self) -> list[StrategyInfo]:
        return [
            StrategyInfo(
                key=key,
                name=self.engine.strategy_display_name(key),
                description=self.engine.strategy_description(key),
            )
            for key in self.engine.available_strategies()
        ]

    def _require_user(self) -> UserProfile:
        if self.current_user is None:
            raise NotLoggedInError("No user is logged in")
        return self.current_user
