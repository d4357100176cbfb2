"""Distribution package exposing the ReelTrack entry points."""

from __future__ import annotations

from typing import Any

import app as _app

__all__ = list(_app.__all__)


def __getattr__(name: str) -> Any:
    if name in __all__:
        return getattr(_app, name)
    raise AttributeError(f"module 'reeltrack' has no attribute {name}")
