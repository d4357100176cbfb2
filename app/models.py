"""Pydantic models describing movies and per-user watch state."""

from __future__ import annotations

from typing import Iterable, Mapping

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

from .utils import unique_ids


class Movie(BaseModel):
    """A single catalog entry. Immutable once loaded."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(validation_alias=AliasChoices("id", "MovieID", "movie_id"))
    title: str = Field(validation_alias=AliasChoices("title", "Title"))
    genre: str = Field(validation_alias=AliasChoices("genre", "Genre"))
    year: int = Field(validation_alias=AliasChoices("year", "Year"))
    rating: float = Field(
        validation_alias=AliasChoices("rating", "Rating"), allow_inf_nan=False
    )

    @field_validator("id", "title", "genre", mode="before")
    @classmethod
    def _strip_text(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator("id")
    @classmethod
    def _require_id(cls, value: str) -> str:
        if not value:
            raise ValueError("movie id must not be blank")
        return value

    def __str__(self) -> str:
        return (
            f"{self.id} | {self.title} ({self.year}) | Genre: {self.genre} | "
            f"Rating: {self.rating}"
        )


Catalog = Mapping[str, Movie]


class MovieIdList(BaseModel):
    """Ordered set of movie identifiers; insertion order is preserved."""

    movie_ids: list[str] = Field(default_factory=list)

    @field_validator("movie_ids", mode="before")
    @classmethod
    def _dedupe(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return unique_ids(str(entry) for entry in value)
        return value

    def add(self, movie_id: str) -> bool:
        if movie_id in self.movie_ids:
            return False
        self.movie_ids.append(movie_id)
        return True

    def remove(self, movie_id: str) -> bool:
        try:
            self.movie_ids.remove(movie_id)
        except ValueError:
            return False
        return True

    def is_empty(self) -> bool:
        return not self.movie_ids

    def __contains__(self, movie_id: object) -> bool:
        return movie_id in self.movie_ids


class Watchlist(MovieIdList):
    """Movies the user intends to watch."""


class History(MovieIdList):
    """Movies the user has already watched."""


class UserProfile(BaseModel):
    """A user account together with its watchlist and viewing history."""

    username: str
    password: str
    watchlist: Watchlist = Field(default_factory=Watchlist)
    history: History = Field(default_factory=History)

    @model_validator(mode="after")
    def _drop_watched_from_watchlist(self) -> "UserProfile":
        for movie_id in self.history.movie_ids:
            self.watchlist.remove(movie_id)
        return self

    def check_password(self, password: str) -> bool:
        return self.password == password

    def excluded_ids(self) -> set[str]:
        """Return every id the user has watched or plans to watch."""

        return set(self.history.movie_ids) | set(self.watchlist.movie_ids)

    def add_to_watchlist(self, movie_id: str) -> bool:
        """Queue ``movie_id`` unless it is already queued or watched."""

        if movie_id in self.history:
            return False
        return self.watchlist.add(movie_id)

    def mark_watched(self, movie_id: str) -> bool:
        """Move ``movie_id`` into the history.

        Returns ``False`` without touching either list when the movie is
        already in the history. Otherwise the id is appended to the history
        and dropped from the watchlist in the same step.
        """

        if movie_id in self.history:
            return False
        self.history.add(movie_id)
        self.watchlist.remove(movie_id)
        return True


def resolve_movies(catalog: Catalog, movie_ids: Iterable[str]) -> list[Movie]:
    """Return catalog movies for ``movie_ids`` in order, skipping unknown ids."""

    resolved: list[Movie] = []
    for movie_id in movie_ids:
        movie = catalog.get(movie_id)
        if movie is not None:
            resolved.append(movie)
    return resolved
