"""Derived stat blocks for alternate forms and held items."""

from __future__ import annotations

import math
from typing import Dict, Mapping, Optional, Tuple

from ..data.forms import Form
from ..models.team import STAT_NAMES, Entity, FormVariant, StatBlock

ALTERNATE_BOOST_MULTIPLIERS: Dict[str, float] = {
    "hp": 1.0,
    "attack": 1.3,
    "defense": 1.2,
    "special-attack": 1.3,
    "special-defense": 1.2,
    "speed": 1.1,
}

MAX_HP_BOOST_MULTIPLIERS: Dict[str, float] = {
    "hp": 2.0,
    "attack": 1.1,
    "defense": 1.1,
    "special-attack": 1.1,
    "special-defense": 1.1,
    "speed": 1.0,
}

HELD_ITEM_MULTIPLIER = 1.5

# item name substring -> boosted stats
HELD_ITEM_EFFECTS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("choice band", ("attack",)),
    ("choice specs", ("special-attack",)),
    ("choice scarf", ("speed",)),
    ("assault vest", ("special-defense",)),
    ("eviolite", ("defense", "special-defense")),
)

EVIOLITE = "eviolite"


def round_half_up(value: float) -> int:
    """Round to the nearest integer with ties away from zero."""

    if value < 0:
        return -int(math.floor(-value + 0.5))
    return int(math.floor(value + 0.5))


def _scale(base: StatBlock, multipliers: Mapping[str, float]) -> StatBlock:
    return StatBlock.from_mapping(
        {name: round_half_up(base.get(name) * multipliers[name]) for name in STAT_NAMES}
    )


def adjust_for_alternate_boost(
    base: StatBlock, variant_stats: Optional[Mapping[str, int]] = None
) -> StatBlock:
    if variant_stats:
        values = {}
        for name in STAT_NAMES:
            # a zero or missing variant stat falls back to the base value
            values[name] = variant_stats.get(name) or base.get(name)
        return StatBlock.from_mapping(values)
    return _scale(base, ALTERNATE_BOOST_MULTIPLIERS)


def adjust_for_max_hp_boost(base: StatBlock) -> StatBlock:
    return _scale(base, MAX_HP_BOOST_MULTIPLIERS)


def normalize_item_name(item_name: str) -> str:
    return " ".join(item_name.strip().lower().replace("-", " ").split())


def held_item_effect(item_name: Optional[str]) -> Tuple[str, Tuple[str, ...]] | None:
    if not item_name:
        return None
    normalized = normalize_item_name(item_name)
    for needle, boosted in HELD_ITEM_EFFECTS:
        if needle in normalized:
            return needle, boosted
    return None


def apply_held_item(
    stats: StatBlock,
    item_name: Optional[str],
    *,
    base: Optional[StatBlock] = None,
    fully_evolved: bool = True,
) -> StatBlock:
    """Apply a held item's stat multiplier.

    Boosted values are computed from ``base`` (the entity's declared stats)
    rather than from ``stats``, so applying an item to an already adjusted
    block does not stack. Unrecognized items return ``stats`` unchanged.
    """

    effect = held_item_effect(item_name)
    if effect is None:
        return stats
    needle, boosted = effect
    if needle == EVIOLITE and fully_evolved:
        return stats

    source = base or stats
    overrides = {
        name: int(math.floor(source.get(name) * HELD_ITEM_MULTIPLIER)) for name in boosted
    }
    return stats.replace(**overrides)


def adjust_for_form(
    base: StatBlock, form: Form | str, variant: Optional[FormVariant] = None
) -> StatBlock:
    form = Form.parse(form)
    if form is Form.ALTERNATE_BOOST:
        return adjust_for_alternate_boost(base, variant.stats if variant else None)
    if form is Form.MAX_HP_BOOST:
        return adjust_for_max_hp_boost(base)
    return StatBlock.from_mapping(base.as_dict())


def derive_member_stats(
    entity: Entity,
    form: Form | str = Form.NORMAL,
    variant: Optional[FormVariant] = None,
    item: Optional[str] = None,
) -> StatBlock:
    stats = adjust_for_form(entity.stats, form, variant)
    return apply_held_item(stats, item, base=entity.stats, fully_evolved=entity.fully_evolved)
