"""Domain service: Order Validator.

Rejects malformed or unsatisfiable orders before anything is mutated.
Two phases, both free of side effects:

  Phase 1 — structure: required fields, formats and ranges.  No I/O.
  Phase 2 — stock: every line item must match an inventory record that
            holds at least the requested quantity.

Both phases are fail-fast and check in a fixed order, so the same bad
order always yields the same message.
"""

from __future__ import annotations

from datetime import datetime

from bloodbank.domain.exceptions import ValidationError
from bloodbank.domain.model.order import OrderLineItem, PatientOrder
from bloodbank.domain.model.value_objects import (
    ABO_GROUPS,
    RH_FACTORS,
    Quantity,
    parse_whole_number,
)
from bloodbank.domain.service.inventory_index import InventoryIndex

MIN_AGE = 0
MAX_AGE = 150
SEXES = ("M", "F")

ORDER_DATE_FORMATS = (
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y/%m/%d %H:%M:%S",
    "%d/%m/%Y %H:%M:%S",
    "%d/%m/%Y %H:%M",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%m/%d/%Y %I:%M:%S %p",
)


def parse_order_date(text: str) -> datetime | None:
    s = text.strip()
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        pass
    for fmt in ORDER_DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt)
        except ValueError:
            continue
    return None


def _blank(value: str | None) -> bool:
    return value is None or not value.strip()


class OrderValidator:

    def validate(self, order: PatientOrder, index: InventoryIndex) -> None:
        """Run both phases; raise ValidationError on the first failure."""
        self.validate_structure(order)
        self.validate_stock(order, index)

    # --- Phase 1 --------------------------------------------------------------

    def validate_structure(self, order: PatientOrder) -> None:
        self._require(order.pid, "PID is required (patient ID must not be empty)")
        self._require(order.order_id, "OrderID is required (order number must not be empty)")
        self._require(order.patient_name, "PatientName is required (patient name must not be empty)")
        self._require(order.order_date, "OrderDate is required (order time must not be empty)")

        if parse_order_date(order.order_date) is None:
            raise ValidationError(
                f"OrderDate is invalid (expected 'yyyy-MM-dd HH:mm:ss', got '{order.order_date}')"
            )

        self._require(order.age, "Age is required (age must not be empty)")
        age = parse_whole_number(order.age)
        if age is None or not MIN_AGE <= age <= MAX_AGE:
            raise ValidationError(
                f"Age is invalid (must be a number from {MIN_AGE} to {MAX_AGE}, got '{order.age}')"
            )

        self._require(order.sex, "Sex is required (sex must not be empty)")
        if order.sex not in SEXES:
            raise ValidationError(
                f"Sex is invalid (only 'M' or 'F' accepted, got '{order.sex}')"
            )

        if not _blank(order.blood_group) and order.blood_group not in ABO_GROUPS:
            raise ValidationError(
                f"BloodGroup is invalid (only 'A', 'B', 'AB', 'O' accepted, got '{order.blood_group}')"
            )
        if not _blank(order.rh) and order.rh not in RH_FACTORS:
            raise ValidationError(
                f"Rh is invalid (only '+' or '-' accepted, got '{order.rh}')"
            )

        for i, item in enumerate(order.items):
            self._validate_line_item(i, item)

    def _validate_line_item(self, i: int, item: OrderLineItem) -> None:
        prefix = f"ListOrder[{i}]"
        self._require(item.quantity, f"{prefix}.Quantity must not be empty")

        try:
            Quantity.parse(item.quantity)
        except ValidationError:
            raise ValidationError(
                f"{prefix}.Quantity is invalid (must be a positive number, got '{item.quantity}')"
            ) from None

        self._require(item.element_id, f"{prefix}.ElementID must not be empty")

        if item.volume <= 0:
            raise ValidationError(
                f"{prefix}.Volume is invalid (must be greater than 0, got {item.volume})"
            )

    @staticmethod
    def _require(value: str | None, message: str) -> None:
        if _blank(value):
            raise ValidationError(message)

    # --- Phase 2 --------------------------------------------------------------

    def validate_stock(self, order: PatientOrder, index: InventoryIndex) -> None:
        """Check every line item against the snapshot behind *index*.

        Assumes ``validate_structure`` already passed.
        """
        blood_type = order.blood_type_label
        for i, item in enumerate(order.items):
            candidates = index.filter(
                abo=order.blood_group, rh=order.rh, element_id=item.element_id
            )
            matched = next((r for r in candidates if r.volume == item.volume), None)
            if matched is None:
                raise ValidationError(
                    f"ListOrder[{i}]: no '{item.element_id}' units of blood type "
                    f"{blood_type}, volume {item.volume}ml found in stock"
                )

            requested = item.requested_quantity
            if matched.quantity < requested:
                raise ValidationError(
                    f"ListOrder[{i}]: insufficient stock. Requested {requested} units of "
                    f"'{item.element_id}' ({blood_type}, {item.volume}ml), "
                    f"available {matched.quantity}"
                )
