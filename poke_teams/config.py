"""Runtime settings read from the environment (and optional .env files)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Mapping, Optional

from dotenv import load_dotenv

from .analysis import TeamAnalyzer
from .clients import PokeAPIClient, ResponseCache
from .clients.cache import DEFAULT_TTL
from .data.type_chart import CANONICAL_CHART, DEFENSIVE_CHARTS
from .services import TeamService
from .storage import JsonTeamStore

DEFAULT_STORE_PATH = Path.home() / ".poke_teams" / "teams.json"


@dataclass(slots=True)
class Settings:
    api_url: str = PokeAPIClient.BASE_URL
    cache_ttl: float = DEFAULT_TTL
    timeout: float = 10
    batch_size: int = 20
    store_path: Path = DEFAULT_STORE_PATH
    defensive_chart: str = CANONICAL_CHART

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, *, load_files: bool = True
    ) -> "Settings":
        """Build settings from ``POKE_TEAMS_*`` variables.

        ``.env`` is loaded first and ``.env.local`` overrides it; pass
        ``environ`` to read from a plain mapping instead (files are skipped).
        """

        if environ is None:
            if load_files:
                load_dotenv()
                load_dotenv(".env.local", override=True)
            environ = os.environ

        defaults = cls()
        chart = environ.get("POKE_TEAMS_DEFENSIVE_CHART", defaults.defensive_chart).strip().lower()
        if chart not in DEFENSIVE_CHARTS:
            raise ValueError(
                f"POKE_TEAMS_DEFENSIVE_CHART must be one of {', '.join(DEFENSIVE_CHARTS)}, got {chart!r}"
            )
        store_path = environ.get("POKE_TEAMS_STORE_PATH")
        return cls(
            api_url=environ.get("POKE_TEAMS_API_URL", defaults.api_url),
            cache_ttl=_number(environ, "POKE_TEAMS_CACHE_TTL", defaults.cache_ttl),
            timeout=_number(environ, "POKE_TEAMS_TIMEOUT", defaults.timeout),
            batch_size=int(_number(environ, "POKE_TEAMS_BATCH_SIZE", defaults.batch_size)),
            store_path=Path(store_path).expanduser() if store_path else defaults.store_path,
            defensive_chart=chart,
        )

    def make_client(self, debug_logger: Optional[Callable[[str], None]] = None) -> PokeAPIClient:
        return PokeAPIClient(
            base_url=self.api_url,
            cache=ResponseCache(ttl=self.cache_ttl),
            timeout=self.timeout,
            batch_size=self.batch_size,
            debug_logger=debug_logger,
        )

    def make_team_service(self, debug_logger: Optional[Callable[[str], None]] = None) -> TeamService:
        return TeamService(
            store=JsonTeamStore(self.store_path, debug_logger=debug_logger),
            analyzer=TeamAnalyzer(defensive_chart=self.defensive_chart),
            debug_logger=debug_logger,
        )


def _number(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value
