"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

import pytest

from poke_teams.config import DEFAULT_STORE_PATH, Settings


def test_defaults_from_empty_environment() -> None:
    settings = Settings.from_env({})

    assert settings.api_url == "https://pokeapi.co/api/v2"
    assert settings.cache_ttl == 300
    assert settings.batch_size == 20
    assert settings.store_path == DEFAULT_STORE_PATH
    assert settings.defensive_chart == "canonical"


def test_environment_overrides(tmp_path) -> None:
    settings = Settings.from_env(
        {
            "POKE_TEAMS_API_URL": "http://localhost:9000/api/v2",
            "POKE_TEAMS_CACHE_TTL": "60",
            "POKE_TEAMS_BATCH_SIZE": "5",
            "POKE_TEAMS_STORE_PATH": str(tmp_path / "teams.json"),
            "POKE_TEAMS_DEFENSIVE_CHART": "Legacy",
        }
    )

    assert settings.cache_ttl == 60
    assert settings.batch_size == 5
    assert settings.store_path == Path(tmp_path / "teams.json")
    assert settings.defensive_chart == "legacy"

    client = settings.make_client()
    assert client.base_url == "http://localhost:9000/api/v2"
    assert client.cache.ttl == 60
    assert settings.make_team_service().analyzer.defensive_chart == "legacy"


@pytest.mark.parametrize(
    "env",
    [
        {"POKE_TEAMS_DEFENSIVE_CHART": "modern"},
        {"POKE_TEAMS_TIMEOUT": "soon"},
        {"POKE_TEAMS_CACHE_TTL": "-1"},
    ],
)
def test_invalid_values_raise(env) -> None:
    with pytest.raises(ValueError):
        Settings.from_env(env)
