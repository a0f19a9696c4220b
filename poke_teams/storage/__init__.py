"""Local persistence for teams."""

from .store import TEAMS_KEY, JsonTeamStore
from .validation import ValidationResult, validate_team_record

__all__ = [
    "TEAMS_KEY",
    "JsonTeamStore",
    "ValidationResult",
    "validate_team_record",
]
