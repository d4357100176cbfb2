"""Ranking engine turning a catalog and a viewer's watch state into picks."""

from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Sequence

from ..models import Catalog, Movie, UserProfile
from ..strategies import (
    DEFAULT_STRATEGY,
    STRATEGIES,
    Strategy,
    get_definition,
    parse_strategy,
)

logger = logging.getLogger(__name__)


def genre_affinity(catalog: Catalog, user: UserProfile) -> Counter[str]:
    """Count genre occurrences across the user's history and watchlist.

    History is scanned first, then the watchlist. A movie present in both
    contributes twice. Ids missing from the catalog are skipped.
    """

    counts: Counter[str] = Counter()
    for source in (user.history.movie_ids, user.watchlist.movie_ids):
        for movie_id in source:
            movie = catalog.get(movie_id)
            if movie is not None:
                counts[movie.genre] += 1
    return counts


def candidate_pool(catalog: Catalog, user: UserProfile) -> list[Movie]:
    """Return catalog movies the user has neither watched nor queued."""

    excluded = user.excluded_ids()
    return [movie for movie_id, movie in catalog.items() if movie_id not in excluded]


def rank_by_rating(movies: Sequence[Movie]) -> list[Movie]:
    return sorted(movies, key=lambda movie: movie.rating, reverse=True)


def rank_by_year(movies: Sequence[Movie]) -> list[Movie]:
    return sorted(movies, key=lambda movie: movie.year, reverse=True)


def rank_by_affinity(movies: Sequence[Movie], affinity: Counter[str]) -> list[Movie]:
    """Order by genre affinity, then rating, both descending.

    Genres absent from ``affinity`` score zero, so those movies trail every
    positively scored one while still being ordered by rating.
    """

    return sorted(
        movies,
        key=lambda movie: (affinity.get(movie.genre, 0), movie.rating),
        reverse=True,
    )


class RecommendationEngine:
    """Dispatches ranking requests to the currently selected strategy.

    The engine only reads the catalog and the profiles handed to it; it
    keeps no per-user state between calls.
    """

    def __init__(self, catalog: Catalog, strategy: Strategy = DEFAULT_STRATEGY) -> None:
        self._catalog = catalog
        self._strategy = strategy
        self._rankers: dict[Strategy, Callable[[UserProfile], list[Movie]]] = {
            Strategy.GENRE: self._rank_with_affinity,
            Strategy.RATING: self._rank_by_rating,
            Strategy.YEAR: self._rank_by_year,
            Strategy.HYBRID: self._rank_with_affinity,
        }

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def current_strategy(self) -> Strategy:
        return self._strategy

    def set_strategy(self, key: str | Strategy) -> None:
        """Select a strategy; unknown keys leave the current one in place."""

        strategy = parse_strategy(key)
        if strategy is None:
            logger.debug(
                "Ignoring unknown strategy %r; keeping %s", key, self._strategy.value
            )
            return
        self._strategy = strategy

    def current_strategy_name(self) -> str:
        return self.strategy_display_name(self._strategy)

    def strategy_display_name(self, key: str | Strategy) -> str:
        definition = get_definition(key)
        return definition.title if definition else "Unknown"

    def strategy_description(self, key: str | Strategy) -> str:
        definition = get_definition(key)
        return definition.description if definition else "Unknown strategy"

    @staticmethod
    def available_strategies() -> list[str]:
        return [definition.key.value for definition in STRATEGIES]

    def recommend(self, user: UserProfile, top_n: int) -> list[Movie]:
        """Return up to ``top_n`` movies ranked by the current strategy.

        Never pads and never fails for large ``top_n``; a non-positive
        ``top_n`` yields an empty list.
        """

        ranked = self._rankers[self._strategy](user)
        limit = max(top_n, 0)
        picks = ranked[:limit]
        logger.debug(
            "Ranked %d candidates for %s with %s; returning %d",
            len(ranked),
            user.username,
            self._strategy.value,
            len(picks),
        )
        return picks

    def _rank_by_rating(self, user: UserProfile) -> list[Movie]:
        return rank_by_rating(candidate_pool(self._catalog, user))

    def _rank_by_year(self, user: UserProfile) -> list[Movie]:
        return rank_by_year(candidate_pool(self._catalog, user))

    def _rank_with_affinity(self, user: UserProfile) -> list[Movie]:
        pool = candidate_pool(self._catalog, user)
        if user.history.is_empty() and user.watchlist.is_empty():
            return rank_by_rating(pool)

        affinity = genre_affinity(self._catalog, user)
        if not affinity:
            # Nothing resolved, so nothing was excluded from the catalog either.
            return rank_by_rating(pool)
        return rank_by_affinity(pool, affinity)
