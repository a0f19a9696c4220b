"""Static type chart utilities for type effectiveness lookups."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple

TYPE_ORDER: Tuple[str, ...] = (
    "normal",
    "fire",
    "water",
    "electric",
    "grass",
    "ice",
    "fighting",
    "poison",
    "ground",
    "flying",
    "psychic",
    "bug",
    "rock",
    "ghost",
    "dragon",
    "dark",
    "steel",
    "fairy",
)

# strengths: x2 dealt, weaknesses: x0.5 dealt, immunities: x0 dealt
TYPE_CHART: dict[str, dict[str, tuple[str, ...]]] = {
    "normal": {"strengths": (), "weaknesses": ("rock", "steel"), "immunities": ("ghost",)},
    "fire": {
        "strengths": ("grass", "ice", "bug", "steel"),
        "weaknesses": ("fire", "water", "rock", "dragon"),
        "immunities": (),
    },
    "water": {
        "strengths": ("fire", "ground", "rock"),
        "weaknesses": ("water", "grass", "dragon"),
        "immunities": (),
    },
    "electric": {
        "strengths": ("water", "flying"),
        "weaknesses": ("electric", "grass", "dragon"),
        "immunities": ("ground",),
    },
    "grass": {
        "strengths": ("water", "ground", "rock"),
        "weaknesses": ("fire", "grass", "poison", "flying", "bug", "dragon", "steel"),
        "immunities": (),
    },
    "ice": {
        "strengths": ("grass", "ground", "flying", "dragon"),
        "weaknesses": ("fire", "water", "ice", "steel"),
        "immunities": (),
    },
    "fighting": {
        "strengths": ("normal", "ice", "rock", "dark", "steel"),
        "weaknesses": ("poison", "flying", "psychic", "bug", "fairy"),
        "immunities": ("ghost",),
    },
    "poison": {
        "strengths": ("grass", "fairy"),
        "weaknesses": ("poison", "ground", "rock", "ghost"),
        "immunities": ("steel",),
    },
    "ground": {
        "strengths": ("fire", "electric", "poison", "rock", "steel"),
        "weaknesses": ("grass", "bug"),
        "immunities": ("flying",),
    },
    "flying": {
        "strengths": ("grass", "fighting", "bug"),
        "weaknesses": ("electric", "rock", "steel"),
        "immunities": (),
    },
    "psychic": {
        "strengths": ("fighting", "poison"),
        "weaknesses": ("psychic", "steel"),
        "immunities": ("dark",),
    },
    "bug": {
        "strengths": ("grass", "psychic", "dark"),
        "weaknesses": ("fire", "fighting", "poison", "flying", "ghost", "steel", "fairy"),
        "immunities": (),
    },
    "rock": {
        "strengths": ("fire", "ice", "flying", "bug"),
        "weaknesses": ("fighting", "ground", "steel"),
        "immunities": (),
    },
    "ghost": {
        "strengths": ("psychic", "ghost"),
        "weaknesses": ("dark",),
        "immunities": ("normal",),
    },
    "dragon": {
        "strengths": ("dragon",),
        "weaknesses": ("steel",),
        "immunities": ("fairy",),
    },
    "dark": {
        "strengths": ("psychic", "ghost"),
        "weaknesses": ("fighting", "dark", "fairy"),
        "immunities": (),
    },
    "steel": {
        "strengths": ("ice", "rock", "fairy"),
        "weaknesses": ("fire", "water", "electric", "steel"),
        "immunities": (),
    },
    "fairy": {
        "strengths": ("fighting", "dragon", "dark"),
        "weaknesses": ("fire", "poison", "steel"),
        "immunities": (),
    },
}

# Flat defensive table from the legacy team screen, keyed by defending type.
# Kept for parity with older saved analyses; it disagrees with TYPE_CHART in
# several places (missing immunities, a few reversed entries).
LEGACY_DEFENSIVE_CHART: Dict[str, Dict[str, float]] = {
    "normal": {"rock": 0.5, "ghost": 0, "steel": 0.5, "fighting": 2},
    "fire": {
        "fire": 0.5, "water": 2, "grass": 0.5, "ice": 0.5, "bug": 0.5,
        "rock": 2, "dragon": 0.5, "steel": 0.5, "ground": 2,
    },
    "water": {"fire": 0.5, "water": 0.5, "grass": 2, "electric": 2, "ice": 0.5, "steel": 0.5},
    "electric": {"electric": 0.5, "ground": 2, "flying": 0.5, "steel": 0.5},
    "grass": {
        "fire": 2, "water": 0.5, "grass": 0.5, "poison": 2, "ground": 0.5,
        "flying": 2, "bug": 2, "ice": 2,
    },
    "ice": {"fire": 2, "ice": 0.5, "fighting": 2, "rock": 2, "steel": 2},
    "fighting": {"flying": 2, "psychic": 2, "bug": 0.5, "rock": 0.5, "dark": 0.5, "fairy": 2},
    "poison": {
        "grass": 0.5, "fighting": 0.5, "poison": 0.5, "ground": 2,
        "psychic": 2, "bug": 0.5, "fairy": 0.5,
    },
    "ground": {"water": 2, "grass": 2, "electric": 0, "poison": 0.5, "rock": 0.5, "ice": 2},
    "flying": {"electric": 2, "grass": 0.5, "fighting": 0.5, "bug": 0.5, "rock": 2, "ice": 2},
    "psychic": {"fighting": 0.5, "psychic": 0.5, "bug": 2, "ghost": 2, "dark": 2},
    "bug": {"fire": 2, "grass": 0.5, "fighting": 0.5, "ground": 0.5, "flying": 2, "rock": 2},
    "rock": {
        "normal": 0.5, "fire": 0.5, "water": 2, "grass": 2, "fighting": 2,
        "poison": 0.5, "ground": 2, "steel": 2,
    },
    "ghost": {"normal": 0, "fighting": 0, "poison": 0.5, "bug": 0.5, "ghost": 2, "dark": 2},
    "dragon": {"dragon": 2, "ice": 2, "fairy": 2},
    "dark": {"fighting": 2, "bug": 2, "ghost": 0.5, "dark": 0.5, "fairy": 2},
    "steel": {
        "fire": 2, "water": 0.5, "electric": 0.5, "ice": 0.5, "rock": 0.5,
        "steel": 0.5, "fighting": 2, "ground": 2,
    },
    "fairy": {"fighting": 0.5, "poison": 2, "bug": 0.5, "dragon": 0, "dark": 0.5, "steel": 2},
}

CANONICAL_CHART = "canonical"
LEGACY_CHART = "legacy"
DEFENSIVE_CHARTS = (CANONICAL_CHART, LEGACY_CHART)


class UnknownTypeError(ValueError):
    """Raised when a type name is not one of the 18 known types."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unknown type: {type_name!r}")
        self.type_name = type_name


@dataclass(frozen=True)
class TypeRelation:
    """Offensive relations of a single type."""

    name: str
    strengths: frozenset
    weaknesses: frozenset
    immunities: frozenset


_RELATIONS: Dict[str, TypeRelation] = {
    name: TypeRelation(
        name=name,
        strengths=frozenset(entry["strengths"]),
        weaknesses=frozenset(entry["weaknesses"]),
        immunities=frozenset(entry["immunities"]),
    )
    for name, entry in TYPE_CHART.items()
}


def normalize_type(type_name: str) -> str:
    slug = str(type_name).strip().lower()
    if slug not in _RELATIONS:
        raise UnknownTypeError(type_name)
    return slug


def relation(type_name: str) -> TypeRelation:
    """Return the relation entry for ``type_name``."""

    return _RELATIONS[normalize_type(type_name)]


def is_known_type(type_name: str) -> bool:
    return str(type_name).strip().lower() in _RELATIONS


def damage_multiplier(attack_type: str, defender_types: Iterable[str]) -> float:
    """Compute damage multiplier for an attack hitting defender types."""

    chart = relation(attack_type)
    multiplier = 1.0
    for defender in defender_types:
        d = normalize_type(defender)
        if d in chart.immunities:
            return 0.0
        if d in chart.strengths:
            multiplier *= 2.0
        elif d in chart.weaknesses:
            multiplier *= 0.5
    return multiplier


def defensive_factor(attack_type: str, defender_type: str, chart: str = CANONICAL_CHART) -> float:
    """Single-layer factor for ``attack_type`` hitting ``defender_type``."""

    attack = normalize_type(attack_type)
    defender = normalize_type(defender_type)
    if chart == CANONICAL_CHART:
        return damage_multiplier(attack, [defender])
    if chart == LEGACY_CHART:
        return float(LEGACY_DEFENSIVE_CHART.get(defender, {}).get(attack, 1.0))
    raise ValueError(f"Unknown defensive chart {chart!r}; expected one of {DEFENSIVE_CHARTS}")
