"""Recommendation strategy definitions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Strategy(str, Enum):
    """Closed set of ranking policies the engine can dispatch to."""

    GENRE = "genre"
    RATING = "rating"
    YEAR = "year"
    HYBRID = "hybrid"


@dataclass(frozen=True)
class StrategyDefinition:
    """Describes a ranking strategy shown to the viewer."""

    key: Strategy
    title: str
    description: str
    menu_label: str


STRATEGIES: tuple[StrategyDefinition, ...] = (
    StrategyDefinition(
        key=Strategy.GENRE,
        title="Genre-Based Recommendation",
        description="Recommends movies based on your favorite genres from watch history and watchlist",
        menu_label="Genre-based (Your favorite genres)",
    ),
    StrategyDefinition(
        key=Strategy.RATING,
        title="Rating-Based Recommendation",
        description="Recommends highest rated movies you haven't watched yet",
        menu_label="Rating-based (Highest rated movies)",
    ),
    StrategyDefinition(
        key=Strategy.YEAR,
        title="Year-Based Recommendation",
        description="Recommends the most recent movies you haven't watched yet",
        menu_label="Year-based (Most recent movies)",
    ),
    StrategyDefinition(
        key=Strategy.HYBRID,
        title="Hybrid Recommendation",
        description="Recommends movies based on your favorite genres and highest ratings",
        menu_label="Hybrid (Genre + Rating)",
    ),
)

DEFAULT_STRATEGY = Strategy.HYBRID

_DEFINITIONS: dict[Strategy, StrategyDefinition] = {
    definition.key: definition for definition in STRATEGIES
}


def parse_strategy(value: object) -> Strategy | None:
    """Translate an external key into a strategy, or ``None`` if unknown."""

    if isinstance(value, Strategy):
        return value
    if not isinstance(value, str):
        return None
    try:
        return Strategy(value)
    except ValueError:
        return None


def get_definition(value: object) -> StrategyDefinition | None:
    """Return the definition for the key if it exists."""

    strategy = parse_strategy(value)
    if strategy is None:
        return None
    return _DEFINITIONS[strategy]
