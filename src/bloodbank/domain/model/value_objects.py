"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

import re
import uuid
from dataclasses import dataclass

from bloodbank.domain.exceptions import ValidationError

ABO_GROUPS = ("A", "B", "AB", "O")
RH_FACTORS = ("+", "-")

_WHOLE_NUMBER = re.compile(r"[+-]?[0-9]+")


def new_id() -> str:
    """Stable synthetic identifier for records and orders."""
    return uuid.uuid4().hex


def parse_whole_number(text: str | None) -> int | None:
    """Optionally signed ASCII digits, surrounding blanks ignored; else None."""
    cleaned = (text or "").strip()
    if not _WHOLE_NUMBER.fullmatch(cleaned):
        return None
    return int(cleaned)


def same_text(left: str | None, right: str | None) -> bool:
    """Trimmed, case-sensitive equality used by every matching rule."""
    return (left or "").strip() == (right or "").strip()


@dataclass(frozen=True)
class BloodType:
    """ABO group plus Rh factor, e.g. ``O+``."""

    abo: str
    rh: str

    def __post_init__(self) -> None:
        if self.abo not in ABO_GROUPS:
            raise ValidationError(
                f"Invalid ABO group {self.abo!r}, expected one of {', '.join(ABO_GROUPS)}"
            )
        if self.rh not in RH_FACTORS:
            raise ValidationError(
                f"Invalid Rh factor {self.rh!r}, expected '+' or '-'"
            )

    def __str__(self) -> str:
        return f"{self.abo}{self.rh}"


@dataclass(frozen=True)
class Quantity:
    """Number of blood product units requested by one line item.

    Line items carry their quantity as text; ``parse`` turns that text
    into a count.  Booleans are not accepted as counts.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(f"Unit count must be a whole number, got {self.value!r}")
        if self.value < 1:
            raise ValidationError(f"Unit count must be positive, got {self.value}")

    @classmethod
    def parse(cls, text: str | None) -> Quantity:
        value = parse_whole_number(text)
        if value is None:
            raise ValidationError(f"Invalid quantity: {text!r}")
        return cls(value)

    def __str__(self) -> str:
        return f"{self.value} unit{'s' if self.value != 1 else ''}"
