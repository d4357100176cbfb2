"""ReelTrack movie tracker application package."""

from __future__ import annotations

from importlib import import_module
from typing import Any

# Public names resolved lazily so importing the package stays cheap.
_EXPORTS: dict[str, str] = {
    "app": "app.main",
    "create_app": "app.main",
    "MovieSession": "app.services.session",
    "RecommendationEngine": "app.services.recommendation",
}

__all__ = list(_EXPORTS)


def __getattr__(name: str) -> Any:
    module_name = _EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module 'app' has no attribute {name}")
    return getattr(import_module(module_name), name)
