"""Application services built on the analyzer and the team store."""

from .team_service import (
    CorruptTeamError,
    DuplicateMemberError,
    MemberNotFoundError,
    TeamCapacityError,
    TeamNotFoundError,
    TeamService,
    TeamServiceError,
    UnsupportedFormError,
)

__all__ = [
    "CorruptTeamError",
    "DuplicateMemberError",
    "MemberNotFoundError",
    "TeamCapacityError",
    "TeamNotFoundError",
    "TeamService",
    "TeamServiceError",
    "UnsupportedFormError",
]
