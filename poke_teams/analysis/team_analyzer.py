"""Team analysis combining type aggregation, role coverage and heuristic scoring."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..data.roles import PVE, ROLE_CATALOG
from ..data.type_chart import CANONICAL_CHART, DEFENSIVE_CHARTS, TYPE_ORDER, defensive_factor
from ..models import MAX_TEAM_SIZE, MemberAnalysis, Team, TeamAnalysis, TeamMember, TeamWeakness
from .recommendations import (
    AnalysisContext,
    RecommendationRule,
    has_tera_role,
    run_rules,
    uses_alternate_form,
)
from .roles import applicable_roles, classify
from .stats import round_half_up

# game mode -> (weak-against watch list, strong-against watch list)
MODE_WATCH_LISTS: Dict[str, tuple[tuple[str, ...], tuple[str, ...]]] = {
    "pve": (("dragon", "ghost", "dark"), ("grass", "bug", "electric")),
    "pvp": (("fighting", "ground", "fire"), ("water", "flying", "psychic")),
}

# team size -> upper bound on the base score
SIZE_CAPS: Dict[int, float] = {2: 3, 3: 5, 4: 7, 5: 9}

BASE_BALANCE_SCORE = 5


class TeamAnalyzer:
    """Computes a :class:`TeamAnalysis` for a team snapshot. Holds no per-team state."""

    def __init__(
        self,
        *,
        defensive_chart: str = CANONICAL_CHART,
        rules: Optional[Sequence[RecommendationRule]] = None,
    ) -> None:
        if defensive_chart not in DEFENSIVE_CHARTS:
            raise ValueError(
                f"Unknown defensive chart {defensive_chart!r}; expected one of {DEFENSIVE_CHARTS}"
            )
        self.defensive_chart = defensive_chart
        self.rules = rules

    def analyze(self, team: Team, game_mode: Optional[str] = None) -> TeamAnalysis:
        game_mode = game_mode or team.game_mode or PVE
        analysis = TeamAnalysis()
        if team.is_empty():
            return analysis

        self._evaluate_types(team, analysis)
        self._evaluate_defensive_profile(team, analysis)
        self._evaluate_roles(team, analysis, game_mode)
        self._evaluate_team_weaknesses(analysis, game_mode)
        analysis.balance_score = self._balance_score(team, analysis)

        ctx = AnalysisContext(team=team, analysis=analysis, game_mode=game_mode)
        analysis.recommendations = run_rules(ctx, self.rules)
        return analysis

    # ------------------------------------------------------------------
    # Type coverage
    # ------------------------------------------------------------------
    def _evaluate_types(self, team: Team, analysis: TeamAnalysis) -> None:
        counts: Dict[str, int] = {}
        for member in team.members:
            for type_name in member.types:
                counts[type_name] = counts.get(type_name, 0) + 1
        analysis.type_counts = {t: counts[t] for t in TYPE_ORDER if t in counts}
        analysis.coverage = [t for t in TYPE_ORDER if t not in counts]

    # ------------------------------------------------------------------
    # Defensive profile
    # ------------------------------------------------------------------
    def _evaluate_defensive_profile(self, team: Team, analysis: TeamAnalysis) -> None:
        for attack_type in TYPE_ORDER:
            weak = 0
            resist = 0
            for member in team.members:
                multiplier = self._member_multiplier(member, attack_type)
                if multiplier > 1:
                    weak += 1
                elif multiplier < 1:
                    resist += 1
            if weak:
                analysis.weaknesses[attack_type] = weak
            if resist:
                analysis.resistances[attack_type] = resist

    def _member_multiplier(self, member: TeamMember, attack_type: str) -> float:
        multiplier = 1.0
        for defender in member.types:
            multiplier *= defensive_factor(attack_type, defender, self.defensive_chart)
        return multiplier

    def _recommended_move_types(self, member: TeamMember) -> List[str]:
        own_types = member.types
        return [
            target
            for target in TYPE_ORDER
            if any(
                defensive_factor(own, target, self.defensive_chart) > 1 for own in own_types
            )
        ]

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------
    def _evaluate_roles(self, team: Team, analysis: TeamAnalysis, game_mode: str) -> None:
        analysis.team_roles = {role.name: 0 for role in ROLE_CATALOG}
        for member in team.members:
            matches = classify(member.adjusted_stats, game_mode)
            for match in matches:
                analysis.team_roles[match.role] += 1
            analysis.member_analyses.append(
                MemberAnalysis(
                    entity_id=member.entity.id,
                    name=member.entity.name,
                    types=member.types,
                    roles=matches,
                    recommended_move_types=self._recommended_move_types(member),
                )
            )
        analysis.missing_roles = [
            role.name for role in applicable_roles(game_mode) if not analysis.team_roles[role.name]
        ]

    # ------------------------------------------------------------------
    # Weakness ranking
    # ------------------------------------------------------------------
    @staticmethod
    def _evaluate_team_weaknesses(analysis: TeamAnalysis, game_mode: str) -> None:
        ranked = [
            TeamWeakness(type=attack_type, count=count, severity=min(5, round_half_up(count * 1.5)))
            for attack_type, count in analysis.weaknesses.items()
            if count >= 2
        ]
        # sorted() is stable, ties keep chart order
        analysis.team_weaknesses = sorted(ranked, key=lambda weakness: weakness.severity, reverse=True)
        analysis.team_strengths = [t for t, count in analysis.resistances.items() if count >= 2]

        weak_watch, strong_watch = MODE_WATCH_LISTS.get(game_mode, MODE_WATCH_LISTS[PVE])
        analysis.weak_against = [t for t in weak_watch if analysis.weaknesses.get(t, 0) >= 2]
        analysis.strong_against = [t for t in strong_watch if analysis.resistances.get(t, 0) >= 2]

    # ------------------------------------------------------------------
    # Balance score
    # ------------------------------------------------------------------
    @staticmethod
    def _balance_score(team: Team, analysis: TeamAnalysis) -> int:
        size = len(team.members)
        distinct_types = len(analysis.type_counts)
        strengths = len(analysis.team_strengths)

        score: float = BASE_BALANCE_SCORE
        if size <= 1:
            score = 1
        elif size in SIZE_CAPS:
            score = min(score, SIZE_CAPS[size])

        if uses_alternate_form(team) or has_tera_role(team):
            score += 1

        if size >= 3:
            if distinct_types >= 6:
                score += 1
            if strengths >= 3:
                score += 1
            if size == MAX_TEAM_SIZE and distinct_types >= 8:
                score += 1
        else:
            if distinct_types >= 6:
                score += 0.5
            if len(analysis.team_weaknesses) <= 2:
                score += 0.5
            if strengths >= 3:
                score += 0.5

        if analysis.critical_weaknesses():
            score -= 2
        if len(analysis.missing_roles) > 3:
            score -= 2

        return int(min(10, max(1, round_half_up(score))))
