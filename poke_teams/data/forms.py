"""Which base entities can take each alternate battle form."""

from __future__ import annotations

from enum import Enum
from typing import Dict, FrozenSet


# stored records from older versions use the franchise names
FORM_ALIASES: Dict[str, str] = {
    "mega": "alternate-boost",
    "gigantamax": "max-hp-boost",
    "gmax": "max-hp-boost",
}


class Form(str, Enum):
    NORMAL = "normal"
    ALTERNATE_BOOST = "alternate-boost"
    MAX_HP_BOOST = "max-hp-boost"

    @classmethod
    def parse(cls, value: "Form | str | None") -> "Form":
        if value is None:
            return cls.NORMAL
        if isinstance(value, cls):
            return value
        slug = str(value).strip().lower()
        if slug in FORM_ALIASES:
            return cls(FORM_ALIASES[slug])
        try:
            return cls(slug)
        except ValueError as exc:
            raise ValueError(f"Unknown form {value!r}") from exc


ALTERNATE_FORM_SUPPORT: Dict[Form, FrozenSet[int]] = {
    Form.ALTERNATE_BOOST: frozenset(
        {
            3, 6, 9, 65, 94, 115, 127, 130, 142, 150, 181, 212, 214, 229,
            248, 257, 282, 303, 306, 308, 310, 354, 359, 380, 381, 445, 448, 460,
        }
    ),
    Form.MAX_HP_BOOST: frozenset(
        {
            3, 6, 9, 12, 25, 52, 68, 94, 99, 131, 143, 569, 809, 812, 815,
            818, 823, 826, 834, 839, 841, 844, 849, 851, 858, 861, 869, 879, 884, 892,
        }
    ),
}


def supports_form(entity_id: int, form: Form | str) -> bool:
    form = Form.parse(form)
    if form is Form.NORMAL:
        return True
    return entity_id in ALTERNATE_FORM_SUPPORT.get(form, frozenset())
