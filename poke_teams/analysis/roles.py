"""Score stat blocks against the role catalog."""

from __future__ import annotations

from typing import Dict, List

from ..data.roles import ROLE_CATALOG, RoleDefinition
from ..models.team import STAT_NAMES, StatBlock
from ..models.analysis import RoleMatch
from .stats import round_half_up

QUALIFYING_SUITABILITY = 5.0


def normalize_stat(value: float) -> float:
    """Map a base stat (roughly 30-255) onto a 0-10 scale."""

    return min(10.0, max(0.0, (value - 30) / 22.5))


def applicable_roles(game_mode: str) -> List[RoleDefinition]:
    return [role for role in ROLE_CATALOG if role.applies_to(game_mode)]


def suitability(role: RoleDefinition, normalized: Dict[str, float]) -> float:
    size = len(role.stats_priority)
    total = 0.0
    for index, stat_name in enumerate(role.stats_priority):
        total += normalized[stat_name] * (size - index)
    return min(10.0, max(0.0, total / (size * 1.5)))


def classify(stats: StatBlock, game_mode: str) -> List[RoleMatch]:
    normalized = {name: normalize_stat(stats.get(name)) for name in STAT_NAMES}
    matches: List[RoleMatch] = []
    for role in applicable_roles(game_mode):
        score = suitability(role, normalized)
        if score >= QUALIFYING_SUITABILITY:
            matches.append(
                RoleMatch(
                    role=role.name,
                    description=role.description,
                    suitability=round_half_up(score * 10) / 10,
                )
            )
    return matches
