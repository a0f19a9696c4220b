"""Shape checks for persisted team records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..data.forms import FORM_ALIASES, Form
from ..data.type_chart import is_known_type

KNOWN_FORMS = {form.value for form in Form} | set(FORM_ALIASES)


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def invalid(cls, reason: str) -> "ValidationResult":
        return cls(False, reason)

    def __bool__(self) -> bool:
        return self.valid


def validate_team_record(record: Any) -> ValidationResult:
    """Check that a stored team record can be loaded.

    Never raises; the first problem found is returned as the reason.
    """

    if not isinstance(record, Mapping):
        return ValidationResult.invalid("Team record is not an object")
    if not record.get("id") or not record.get("name"):
        return ValidationResult.invalid("Incomplete team structure: missing id or name")
    members = record.get("members")
    if not isinstance(members, list):
        return ValidationResult.invalid("Incomplete team structure: missing members list")

    for index, member in enumerate(members):
        reason = _member_problem(member)
        if reason:
            return ValidationResult.invalid(f"Member {index + 1}: {reason}")
    return ValidationResult.ok()


def _member_problem(member: Any) -> Optional[str]:
    if not isinstance(member, Mapping) or not isinstance(member.get("entity"), Mapping):
        return "incomplete entity data"
    entity: Mapping[str, Any] = member["entity"]
    if not entity.get("id") or not entity.get("name") or "types" not in entity:
        return "corrupt or incomplete entity data"
    if not isinstance(entity["id"], int):
        return "entity id is not a number"
    types = entity.get("types")
    if not isinstance(types, list) or not types:
        return "corrupt type data"
    reason = _type_problem(types)
    if reason:
        return reason
    stats = entity.get("stats")
    if not isinstance(stats, Mapping) or not stats:
        return "corrupt stat data"
    reason = _stat_problem(stats)
    if reason:
        return reason
    form = member.get("form")
    if form is not None and str(form).strip().lower() not in KNOWN_FORMS:
        return f"unknown form {form!r}"
    variant = member.get("variant")
    if variant is not None:
        reason = _variant_problem(variant)
        if reason:
            return f"variant: {reason}"
    return None


def _type_problem(types: list) -> Optional[str]:
    for type_name in types:
        if not isinstance(type_name, str) or not is_known_type(type_name):
            return f"unknown type {type_name!r}"
    return None


def _stat_problem(stats: Mapping[str, Any]) -> Optional[str]:
    for name, value in stats.items():
        if value is None:
            continue
        # same coercion the loader applies
        try:
            int(value)
        except (TypeError, ValueError):
            return f"stat {name!r} is not a number"
    return None


def _variant_problem(variant: Any) -> Optional[str]:
    if not isinstance(variant, Mapping):
        return "not an object"
    if not isinstance(variant.get("id"), int) or not variant.get("name"):
        return "missing id or name"
    form = variant.get("form")
    if form is not None and str(form).strip().lower() not in KNOWN_FORMS:
        return f"unknown form {form!r}"
    types = variant.get("types") or []
    if not isinstance(types, list):
        return "corrupt type data"
    reason = _type_problem(types)
    if reason:
        return reason
    stats = variant.get("stats") or {}
    if not isinstance(stats, Mapping):
        return "corrupt stat data"
    return _stat_problem(stats)
