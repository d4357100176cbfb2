"""Module executed when running ``python -m reeltrack``."""

from __future__ import annotations

import argparse
import logging
from typing import Sequence

import uvicorn

from app.cli import MenuLoop
from app.config import settings
from app.services.session import MovieSession
from app.services.storage import CsvStore


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="reeltrack",
        description="Track movies you plan to watch and get recommendations.",
    )
    parser.add_argument(
        "command",
        nargs="?",
        choices=("menu", "serve"),
        default="menu",
        help="run the interactive menu (default) or the HTTP API",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the interactive menu or the uvicorn server."""

    args = _parse_args(argv)
    logging.basicConfig(level=settings.log_level)

    if args.command == "serve":
        uvicorn.run(
            "app.main:app",
            host=settings.server_host,
            port=settings.server_port,
            reload=settings.environment == "development",
        )
        return

    store = CsvStore(settings.movies_path, settings.users_path)
    session = MovieSession.from_store(
        store, default_count=settings.recommendation_count
    )
    MenuLoop(session).run()


if __name__ == "__main__":  # pragma: no cover - runtime entrypoint
    main()
