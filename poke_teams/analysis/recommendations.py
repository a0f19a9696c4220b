"""Ordered advisory rules that turn a team analysis into suggestions.

Each rule is a small function that inspects an :class:`AnalysisContext` and
returns zero or more messages. :data:`DEFAULT_RULES` is the list the analyzer
runs when no custom rules are supplied; callers can pass their own sequence to
:class:`~poke_teams.analysis.team_analyzer.TeamAnalyzer` to add or drop rules.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from ..data.forms import Form, supports_form
from ..data.roles import GAME_MODES, PVE, PVP
from ..models import MAX_TEAM_SIZE, Team, TeamAnalysis, TeamMember

WEATHER_ABILITIES = {
    "drought",
    "drizzle",
    "sand-stream",
    "snow-warning",
    "desolate-land",
    "primordial-sea",
    "delta-stream",
}

# (present, missing, message) checked in order; first hit wins
POWERFUL_PAIRS: Tuple[Tuple[str, str, str], ...] = (
    (
        "chi-yu",
        "flutter-mane",
        "Consider adding Flutter Mane: its high special attack benefits greatly "
        "from Chi-Yu's Beads of Ruin, which lowers opposing Special Defense by 25%.",
    ),
    (
        "flutter-mane",
        "chi-yu",
        "Consider adding Chi-Yu: its Beads of Ruin lowers opposing Special Defense "
        "by 25%, which greatly benefits Flutter Mane.",
    ),
    (
        "dondozo",
        "tatsugiri",
        "Consider adding Tatsugiri: its Commander ability gives Dondozo +2 to all "
        "stats while they are together.",
    ),
    (
        "tatsugiri",
        "dondozo",
        "Consider adding Dondozo: with Tatsugiri's Commander ability, Dondozo "
        "gains +2 to all stats.",
    ),
)

INCINEROAR_HINT = (
    "Incineroar is one of the most used picks in doubles thanks to Intimidate, "
    "Fake Out and Parting Shot, and solid bulk. Consider adding it for better "
    "board control."
)

MAX_MOVE_FIELD_HINT = (
    "Max moves grant field bonuses: Max Airstream (+1 Speed), Max Quake "
    "(+1 Sp. Def), Max Knuckle (+1 Attack). Use them to power up the whole team."
)


@dataclass(slots=True)
class AnalysisContext:
    """Everything a rule may look at. ``analysis`` is already fully scored."""

    team: Team
    analysis: TeamAnalysis
    game_mode: str

    @property
    def members(self) -> List[TeamMember]:
        return self.team.members

    def role_count(self, role_name: str) -> int:
        return self.analysis.team_roles.get(role_name, 0)

    def has_member(self, name: str) -> bool:
        return any(_slug(member.entity.name) == name for member in self.members)


@dataclass(frozen=True)
class RecommendationRule:
    name: str
    build: Callable[[AnalysisContext], List[str]]
    modes: Tuple[str, ...] = GAME_MODES

    def applies_to(self, game_mode: str) -> bool:
        return game_mode in self.modes


def _slug(name: str) -> str:
    return "-".join(name.strip().lower().split())


def uses_alternate_form(team: Team) -> bool:
    return any(member.form is not Form.NORMAL for member in team.members)


def has_tera_role(team: Team) -> bool:
    return any(member.role and "tera" in member.role.lower() for member in team.members)


def max_hp_boost_candidates(team: Team) -> List[TeamMember]:
    candidates = []
    for member in team.members:
        stats = member.adjusted_stats
        if stats.hp >= 80 and (stats.attack >= 90 or stats.special_attack >= 90):
            candidates.append(member)
    return candidates


def has_weather_setter(team: Team) -> bool:
    return any(
        ability.lower() in WEATHER_ABILITIES
        for member in team.members
        for ability in member.entity.abilities
    )


# ----------------------------------------------------------------------
# Shared rules
# ----------------------------------------------------------------------
def team_size_rule(ctx: AnalysisContext) -> List[str]:
    size = len(ctx.members)
    if size >= MAX_TEAM_SIZE:
        return []
    return [f"Your team has {size} members. A complete team should have {MAX_TEAM_SIZE}."]


def critical_weakness_rule(ctx: AnalysisContext) -> List[str]:
    critical = [weakness.type for weakness in ctx.analysis.critical_weaknesses()]
    if not critical:
        return []
    return [
        f"Warning! Your team has critical weaknesses against: {', '.join(critical)}. "
        "Consider adding members that resist these types."
    ]


def powerful_pairs_rule(ctx: AnalysisContext) -> List[str]:
    for present, missing, message in POWERFUL_PAIRS:
        if ctx.has_member(present) and not ctx.has_member(missing):
            return [message]
    if not ctx.has_member("incineroar") and len(ctx.members) < MAX_TEAM_SIZE:
        return [INCINEROAR_HINT]
    return []


def balance_summary_rule(ctx: AnalysisContext) -> List[str]:
    score = ctx.analysis.balance_score
    if score < 4:
        return [
            f"Your team has a low balance score ({score}/10). "
            "Consider adding more members and more type variety."
        ]
    if score >= 8:
        return [f"Congratulations! Your team has an excellent balance ({score}/10)."]
    return []


# ----------------------------------------------------------------------
# PvP rules
# ----------------------------------------------------------------------
def max_hp_boost_rule(ctx: AnalysisContext) -> List[str]:
    if uses_alternate_form(ctx.team):
        return []
    candidates = max_hp_boost_candidates(ctx.team)
    if not candidates:
        return []

    names = ", ".join(member.entity.name for member in candidates)
    messages = [
        f"Consider designating a member to use the max-HP boost in battle. Good candidates: {names}. "
        "The boost doubles HP and unlocks max moves with useful side effects.",
        MAX_MOVE_FIELD_HINT,
    ]
    signature = [
        member.entity.name
        for member in ctx.members
        if supports_form(member.entity.id, Form.MAX_HP_BOOST)
    ]
    if signature:
        messages.append(
            f"{', '.join(signature)} can take a signature max-HP form with unique max moves, "
            "such as setting screens or dealing residual damage."
        )
    return messages


def tera_rule(ctx: AnalysisContext) -> List[str]:
    if has_tera_role(ctx.team):
        return []

    messages = [
        "Consider assigning strategic Tera types. Terastallizing changes a member's type "
        "mid-battle, granting STAB in the new type while keeping its original STAB."
    ]
    physical = next(
        (m for m in ctx.members if m.adjusted_stats.attack > m.adjusted_stats.special_attack),
        None,
    )
    special = next(
        (m for m in ctx.members if m.adjusted_stats.special_attack > m.adjusted_stats.attack),
        None,
    )
    if physical is not None:
        messages.append(
            f"For {physical.entity.name}, consider Tera Normal to power up Extreme Speed "
            "or Tera Fighting for Close Combat, gaining extra STAB."
        )
    if special is not None:
        messages.append(
            f"For {special.entity.name}, consider Tera Fairy to power up Moonblast "
            "or Tera Fire for moves like Flamethrower."
        )
    if ctx.analysis.team_weaknesses:
        weakness = ctx.analysis.team_weaknesses[0].type
        messages.append(
            f"To cover your {weakness} weakness, consider a Tera type that resists or is immune "
            f"to {weakness}. For example, Tera Ghost is immune to Fighting and Tera Flying is "
            "immune to Ground."
        )
    return messages


def defensive_role_rule(ctx: AnalysisContext) -> List[str]:
    if ctx.role_count("Physical Tank") or ctx.role_count("Special Tank"):
        return []
    return [
        "In PvP it is important to have at least one defensive member that can absorb hits. "
        "Your team lacks physical or special tanks."
    ]


def setup_or_revenge_rule(ctx: AnalysisContext) -> List[str]:
    if ctx.role_count("Setup Sweeper") or ctx.role_count("Revenge Killer"):
        return []
    return [
        "Your PvP team could use a Setup Sweeper that boosts itself, or a fast "
        "Revenge Killer to finish off weakened opponents."
    ]


def attack_balance_rule(ctx: AnalysisContext) -> List[str]:
    physical = ctx.role_count("Physical Attacker")
    special = ctx.role_count("Special Attacker")
    if physical >= 3 and special <= 1:
        return [
            "Your team relies too much on physical attacks. Consider more special "
            "attackers so physical walls cannot stop you."
        ]
    if special >= 3 and physical <= 1:
        return [
            "Your team relies too much on special attacks. Consider more physical "
            "attackers so special walls cannot stop you."
        ]
    return []


def weather_rule(ctx: AnalysisContext) -> List[str]:
    if not has_weather_setter(ctx.team):
        return []
    return [
        "Your team includes a weather setter. Max moves such as Max Geyser (rain), "
        "Max Flare (sun), Max Rockfall (sand) or Max Hailstorm (hail) can set or extend weather."
    ]


# ----------------------------------------------------------------------
# PvE rules
# ----------------------------------------------------------------------
def sweeper_rule(ctx: AnalysisContext) -> List[str]:
    if (
        ctx.role_count("Sweeper PvE") > 0
        or ctx.role_count("Physical Attacker") >= 2
        or ctx.role_count("Special Attacker") >= 2
    ):
        return []
    return [
        "For PvE it helps to have at least one fast, hard-hitting member to sweep AI "
        "teams. Consider adding a member with high attack and speed."
    ]


def type_diversity_rule(ctx: AnalysisContext) -> List[str]:
    distinct = len(ctx.analysis.type_counts)
    if distinct >= 6:
        return []
    return [
        f"For PvE, type variety matters. Your team uses {distinct} different types. "
        "Consider adding more variety for better coverage against gyms."
    ]


def core_types_rule(ctx: AnalysisContext) -> List[str]:
    missing = [t for t in ("water", "fire", "grass") if not ctx.analysis.type_counts.get(t)]
    if not missing:
        return []
    return [
        "A Water-Fire-Grass core is very effective in PvE. Your team is missing: "
        f"{', '.join(t.title() for t in missing)}."
    ]


DEFAULT_RULES: Tuple[RecommendationRule, ...] = (
    RecommendationRule("team-size", team_size_rule),
    RecommendationRule("critical-weakness", critical_weakness_rule),
    RecommendationRule("max-hp-boost", max_hp_boost_rule, (PVP,)),
    RecommendationRule("tera", tera_rule, (PVP,)),
    RecommendationRule("powerful-pairs", powerful_pairs_rule),
    RecommendationRule("sweeper", sweeper_rule, (PVE,)),
    RecommendationRule("type-diversity", type_diversity_rule, (PVE,)),
    RecommendationRule("core-types", core_types_rule, (PVE,)),
    RecommendationRule("defensive-role", defensive_role_rule, (PVP,)),
    RecommendationRule("setup-or-revenge", setup_or_revenge_rule, (PVP,)),
    RecommendationRule("attack-balance", attack_balance_rule, (PVP,)),
    RecommendationRule("weather", weather_rule, (PVP,)),
    RecommendationRule("balance-summary", balance_summary_rule),
)


def run_rules(
    ctx: AnalysisContext, rules: Optional[Sequence[RecommendationRule]] = None
) -> List[str]:
    messages: List[str] = []
    for rule in DEFAULT_RULES if rules is None else rules:
        if rule.applies_to(ctx.game_mode):
            messages.extend(rule.build(ctx))
    return messages
