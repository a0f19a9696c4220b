"""Shared dataclasses for team building and analysis."""

from .analysis import MemberAnalysis, RoleMatch, TeamAnalysis, TeamWeakness
from .team import MAX_TEAM_SIZE, STAT_NAMES, Entity, FormVariant, StatBlock, Team, TeamMember

__all__ = [
    "MAX_TEAM_SIZE",
    "STAT_NAMES",
    "Entity",
    "FormVariant",
    "StatBlock",
    "Team",
    "TeamMember",
    "MemberAnalysis",
    "RoleMatch",
    "TeamAnalysis",
    "TeamWeakness",
]
