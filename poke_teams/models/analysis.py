"""Result dataclasses produced by the team analyzer."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(slots=True)
class RoleMatch:
    """A catalog role a member qualifies for."""

    role: str
    description: str
    suitability: float


@dataclass(slots=True)
class MemberAnalysis:
    entity_id: int
    name: str
    types: List[str] = field(default_factory=list)
    roles: List[RoleMatch] = field(default_factory=list)
    recommended_move_types: List[str] = field(default_factory=list)


@dataclass(slots=True)
class TeamWeakness:
    """An attacking type that hits at least two members super-effectively."""

    type: str
    count: int
    severity: int


@dataclass(slots=True)
class TeamAnalysis:
    """Aggregated report returned by the analyzer. Never persisted."""

    type_counts: Dict[str, int] = field(default_factory=dict)
    weaknesses: Dict[str, int] = field(default_factory=dict)
    resistances: Dict[str, int] = field(default_factory=dict)
    coverage: List[str] = field(default_factory=list)
    team_roles: Dict[str, int] = field(default_factory=dict)
    missing_roles: List[str] = field(default_factory=list)
    member_analyses: List[MemberAnalysis] = field(default_factory=list)
    team_weaknesses: List[TeamWeakness] = field(default_factory=list)
    team_strengths: List[str] = field(default_factory=list)
    weak_against: List[str] = field(default_factory=list)
    strong_against: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    balance_score: int = 5

    def critical_weaknesses(self) -> List[TeamWeakness]:
        return [weakness for weakness in self.team_weaknesses if weakness.severity >= 4]
