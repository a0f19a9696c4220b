"""Aggregate defensive profile of a single type combination."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from ..data.type_chart import TYPE_ORDER, relation

# factor -> bucket name
_BUCKETS: Dict[float, str] = {
    0.0: "immune",
    0.25: "super_resistant",
    0.5: "resistant",
    2.0: "effective",
    4.0: "super_effective",
}


@dataclass(slots=True)
class WeaknessBuckets:
    """Attacking types grouped by how hard they hit a type combination."""

    super_effective: List[str] = field(default_factory=list)
    effective: List[str] = field(default_factory=list)
    resistant: List[str] = field(default_factory=list)
    super_resistant: List[str] = field(default_factory=list)
    immune: List[str] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not (
            self.super_effective
            or self.effective
            or self.resistant
            or self.super_resistant
            or self.immune
        )


def damage_factors(types: Iterable[str]) -> Dict[str, float]:
    """Combined factor per type for the given type list.

    Uses each input type's own relation entry: its weaknesses double the
    factor, its strengths halve it and its immunities pin it to zero.
    """

    factors = {name: 1.0 for name in TYPE_ORDER}
    pinned: Set[str] = set()
    for type_name in types:
        entry = relation(type_name)
        for name in entry.weaknesses:
            if name not in pinned:
                factors[name] *= 2
        for name in entry.strengths:
            if name not in pinned:
                factors[name] /= 2
        for name in entry.immunities:
            factors[name] = 0.0
            pinned.add(name)
    return factors


def calculate_weaknesses(types: Iterable[str]) -> WeaknessBuckets:
    type_list = list(types)
    buckets = WeaknessBuckets()
    if not type_list:
        return buckets

    for name, factor in damage_factors(type_list).items():
        bucket = _BUCKETS.get(factor)
        if bucket is None:
            continue
        getattr(buckets, bucket).append(name)
    return buckets
