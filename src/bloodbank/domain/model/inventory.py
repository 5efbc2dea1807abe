"""InventoryRecord — stock on hand for one blood product.

A record is addressed by its natural key (ABO, Rh, ElementID, Volume).
The key is not enforced unique: when several records share it, matching
always takes the first one in document order.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bloodbank.domain.exceptions import ValidationError
from bloodbank.domain.model.value_objects import BloodType, new_id, same_text


@dataclass
class InventoryRecord:
    """Units of one blood product held in the bank.

    Invariants:
    - ``quantity`` never drops below zero through ``deduct()``
    - ``id`` is assigned once and never changes
    """

    abo: str
    rh: str
    element_id: str
    element_name: str
    volume: int
    quantity: int
    id: str = field(default_factory=new_id)

    # --- Factory (used for NEW records only) ----------------------------------

    @staticmethod
    def create(
        abo: str,
        rh: str,
        element_id: str,
        element_name: str,
        volume: int,
        quantity: int,
    ) -> InventoryRecord:
        """Create a new record, enforcing all invariants."""
        BloodType(abo.strip(), rh.strip())

        if not element_id or not element_id.strip():
            raise ValidationError("ElementID is required")
        if volume <= 0:
            raise ValidationError(f"Volume must be greater than 0, got {volume}")
        if quantity < 0:
            raise ValidationError(f"Quantity cannot be negative, got {quantity}")

        return InventoryRecord(
            abo=abo.strip(),
            rh=rh.strip(),
            element_id=element_id.strip(),
            element_name=(element_name or "").strip(),
            volume=volume,
            quantity=quantity,
        )

    # --- Matching -------------------------------------------------------------

    def matches(self, abo: str | None, rh: str | None, element_id: str | None, volume: int) -> bool:
        """True if all four natural-key fields are equal (trimmed)."""
        return (
            same_text(self.abo, abo)
            and same_text(self.rh, rh)
            and same_text(self.element_id, element_id)
            and self.volume == volume
        )

    # --- Mutations ------------------------------------------------------------

    def deduct(self, quantity: int) -> None:
        """Permanently remove issued units from stock.

        Raises ValidationError if the deduction would leave negative stock.
        """
        if quantity <= 0:
            raise ValidationError("Deduction quantity must be positive")
        if quantity > self.quantity:
            raise ValidationError(
                f"Insufficient stock for {self.label} "
                f"(requested {quantity}, available {self.quantity})"
            )
        self.quantity -= quantity

    @property
    def label(self) -> str:
        return f"'{self.element_id}' ({self.abo}{self.rh}, {self.volume}ml)"
