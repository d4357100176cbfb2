"""Configuration settings behaviour tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from app.config import DEFAULT_RECOMMENDATION_COUNT, Settings


def test_defaults_point_at_data_directory() -> None:
    settings = Settings(_env_file=None)

    assert settings.recommendation_count == DEFAULT_RECOMMENDATION_COUNT
    assert settings.movies_path == Path("data") / "movies.csv"
    assert settings.users_path == Path("data") / "users.csv"


def test_absolute_file_names_bypass_data_dir(tmp_path) -> None:
    users_file = tmp_path / "people.csv"
    settings = Settings(
        _env_file=None, DATA_DIR=str(tmp_path / "elsewhere"), USERS_FILE=str(users_file)
    )

    assert settings.users_path == users_file
    assert settings.movies_path == tmp_path / "elsewhere" / "movies.csv"


def test_log_level_is_case_insensitive() -> None:
    settings = Settings(_env_file=None, LOG_LEVEL="debug")

    assert settings.log_level == "DEBUG"


def test_unknown_log_level_raises() -> None:
    with pytest.raises(ValueError, match="Unknown log level"):
        Settings(_env_file=None, LOG_LEVEL="chatty")


@pytest.mark.parametrize("count", [0, 101])
def test_recommendation_count_bounds(count: int) -> None:
    with pytest.raises(ValueError):
        Settings(_env_file=None, RECOMMENDATION_COUNT=count)


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("RECOMMENDATION_COUNT", "8")
    monkeypatch.setenv("MOVIES_FILE", "catalog.csv")

    settings = Settings(_env_file=None)

    assert settings.recommendation_count == 8
    assert settings.movies_path.name == "catalog.csv"
