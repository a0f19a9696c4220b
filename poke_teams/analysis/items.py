"""Held-item suggestions based on a member's base stat spread."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence, Tuple

from ..models import Entity

# category -> item id fragments worth suggesting
CATEGORY_ITEMS: Dict[str, Tuple[str, ...]] = {
    "physical": ("choice-band", "muscle-band", "expert-belt", "life-orb"),
    "special": ("choice-specs", "wise-glasses", "expert-belt", "life-orb"),
    "tank": ("leftovers", "rocky-helmet", "black-sludge", "sitrus-berry"),
    "bulky": ("leftovers", "rocky-helmet", "eviolite", "assault-vest"),
    "physical-tank": ("rocky-helmet", "leftovers", "eviolite"),
    "special-tank": ("assault-vest", "leftovers", "light-clay"),
    "sweeper": ("life-orb", "expert-belt", "focus-sash", "choice-scarf"),
    "frail": ("focus-sash", "focus-band", "sitrus-berry"),
    "setup": ("focus-sash", "white-herb", "mental-herb", "power-herb"),
}

DEFAULT_ITEMS: Tuple[str, ...] = ("leftovers", "sitrus-berry", "life-orb", "choice-scarf")

SETUP_MOVES = {"swords-dance", "dragon-dance", "nasty-plot", "calm-mind", "quiver-dance"}


def item_category(entity: Entity) -> str:
    """Classify the entity's base stats into an item category.

    Later checks override earlier ones, so a fast frail attacker ends up as
    ``frail`` and anything that knows a setup move ends up as ``setup``.
    """

    stats = entity.stats
    attack = stats.attack
    sp_attack = stats.special_attack
    defense = stats.defense
    sp_defense = stats.special_defense

    category = "general"
    if attack > sp_attack and attack > 100:
        category = "physical"
    elif sp_attack > attack and sp_attack > 100:
        category = "special"

    if defense > 100 and sp_defense < 80:
        category = "physical-tank"
    elif sp_defense > 100 and defense < 80:
        category = "special-tank"
    elif defense > 90 and sp_defense > 90:
        category = "tank"

    if stats.hp > 100 and defense > 80 and sp_defense > 80:
        category = "bulky"
    if stats.speed > 100 and (attack > 90 or sp_attack > 90):
        category = "sweeper"
    if stats.hp < 70 or (defense < 70 and sp_defense < 70):
        category = "frail"
    if any(move in SETUP_MOVES for move in entity.moves):
        category = "setup"
    return category


def _matches(item: Mapping[str, Any], item_id: str) -> bool:
    if item_id in str(item.get("name") or ""):
        return True
    return any(
        item_id in str(entry.get("name") or "").lower() for entry in item.get("names") or []
    )


def recommend_items(
    entity: Entity, items: Sequence[Mapping[str, Any]], limit: int = 3
) -> List[Mapping[str, Any]]:
    """Keep the item records suggested for the entity's category, in input order."""

    wanted = CATEGORY_ITEMS.get(item_category(entity), DEFAULT_ITEMS)
    picked = [item for item in items if any(_matches(item, item_id) for item_id in wanted)]
    return picked[:limit]
