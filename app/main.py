"""Entry point for the FastAPI-powered movie tracker API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, Callable

from fastapi import FastAPI, HTTPException, Query
from pydantic import BaseModel

from .config import settings
from .models import Movie
from .services.session import MovieNotFoundError, MovieSession, NotLoggedInError
from .services.storage import CsvStore, StorageError

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app: FastAPI


class LoginRequest(BaseModel):
    username: str
    password: str


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    if getattr(fastapi_app.state, "movie_session", None) is None:
        store = CsvStore(settings.movies_path, settings.users_path)
        fastapi_app.state.movie_session = MovieSession.from_store(
            store, default_count=settings.recommendation_count
        )
        session = fastapi_app.state.movie_session
        logger.info(
            "Session ready with %d movies and %d users",
            len(session.catalog),
            len(session.users),
        )
    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        session = fastapi_app.state.movie_session
        if session.is_logged_in:
            session.logout()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Movie watchlist tracking with strategy-based recommendations",
        version="1.0.0",
        lifespan=lifespan,
    )
    fastapi_app.state.movie_session = None
    register_routes(fastapi_app)
    return fastapi_app


def get_movie_session(app: FastAPI) -> MovieSession:
    session = getattr(app.state, "movie_session", None)
    if not isinstance(session, MovieSession):
        raise RuntimeError("Movie session not initialised")
    return session


def _movie_payload(movies: list[Movie]) -> list[dict[str, Any]]:
    return [movie.model_dump() for movie in movies]


def register_routes(fastapi_app: FastAPI) -> None:
    # Handlers stay ``async`` so session mutations run on the event loop thread.

    def _session() -> MovieSession:
        return get_movie_session(fastapi_app)

    def _guard(call: Callable[..., Any], *args: Any) -> Any:
        try:
            return call(*args)
        except NotLoggedInError as exc:
            raise HTTPException(status_code=401, detail=str(exc)) from exc
        except MovieNotFoundError as exc:
            raise HTTPException(status_code=404, detail=exc.args[0]) from exc
        except StorageError as exc:
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/movies")
    async def list_movies() -> dict[str, Any]:
        movies = _session().browse()
        return {"movies": _movie_payload(movies), "total": len(movies)}

    @fastapi_app.get("/strategies")
    async def list_strategies() -> dict[str, Any]:
        session = _session()
        return {
            "current": session.engine.current_strategy.value,
            "currentName": session.engine.current_strategy_name(),
            "strategies": [
                {"key": info.key, "name": info.name, "description": info.description}
                for info in session.strategy_overview()
            ],
        }

    @fastapi_app.post("/session/login")
    async def login(payload: LoginRequest) -> dict[str, str]:
        user = _session().login(payload.username, payload.password)
        if user is None:
            raise HTTPException(status_code=401, detail="Invalid username or password")
        return {"username": user.username}

    @fastapi_app.post("/session/logout")
    async def logout() -> dict[str, str]:
        user = _guard(_session().logout)
        return {"username": user.username}

    @fastapi_app.get("/session/watchlist")
    async def view_watchlist() -> dict[str, Any]:
        return {"movies": _movie_payload(_guard(_session().watchlist_movies))}

    @fastapi_app.post("/session/watchlist/{movie_id}")
    async def add_to_watchlist(movie_id: str) -> dict[str, Any]:
        added = _guard(_session().add_to_watchlist, movie_id)
        return {"movieId": movie_id, "added": added}

    @fastapi_app.delete("/session/watchlist/{movie_id}")
    async def remove_from_watchlist(movie_id: str) -> dict[str, Any]:
        removed = _guard(_session().remove_from_watchlist, movie_id)
        if not removed:
            raise HTTPException(
                status_code=404, detail=f"Movie {movie_id} not in watchlist"
            )
        return {"movieId": movie_id, "removed": True}

    @fastapi_app.get("/session/history")
    async def view_history() -> dict[str, Any]:
        return {"movies": _movie_payload(_guard(_session().history_movies))}

    @fastapi_app.post("/session/history/{movie_id}")
    async def mark_watched(movie_id: str) -> dict[str, Any]:
        marked = _guard(_session().mark_watched, movie_id)
        return {"movieId": movie_id, "watched": marked}

    @fastapi_app.get("/session/recommendations")
    async def recommendations(
        strategy: str | None = Query(default=None),
        count: int | None = Query(default=None),
    ) -> dict[str, Any]:
        session = _session()
        movies = _guard(session.recommend, strategy, count)
        return {
            "strategy": session.engine.current_strategy.value,
            "strategyName": session.engine.current_strategy_name(),
            "movies": _movie_payload(movies),
        }


app = create_app()
