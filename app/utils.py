"""Utility helpers for the ReelTrack service."""

from __future__ import annotations

from typing import Iterable

ID_LIST_SEPARATOR = ";"


def unique_ids(values: Iterable[str]) -> list[str]:
    """Return stripped, non-blank ids in first-seen order without duplicates."""

    seen: set[str] = set()
    cleaned: list[str] = []
    for raw in values:
        entry = raw.strip()
        if not entry or entry in seen:
            continue
        seen.add(entry)
        cleaned.append(entry)
    return cleaned


def split_id_list(value: str | None) -> list[str]:
    """Parse a ``;``-delimited id list; an empty string is an empty list."""

    if not value or not value.strip():
        return []
    return unique_ids(value.split(ID_LIST_SEPARATOR))


def join_id_list(movie_ids: Iterable[str]) -> str:
    """Serialise ids as a ``;``-delimited list."""

    return ID_LIST_SEPARATOR.join(movie_ids)

