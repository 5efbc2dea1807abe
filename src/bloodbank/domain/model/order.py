"""PatientOrder — a transfusion request for one patient.

Orders arrive as loosely-typed requests (quantities and ages are text on
the wire), so the model keeps the raw values and leaves every rule to
``OrderValidator``.  Once accepted an order is immutable history: there
is no status to transition.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from bloodbank.domain.model.value_objects import Quantity, new_id


@dataclass(frozen=True)
class OrderLineItem:
    """One requested blood product: type, bag volume and bag count."""

    element_id: str | None
    quantity: str | None  # string-encoded positive integer
    volume: int = 0

    @property
    def requested_quantity(self) -> int:
        """Parsed quantity. Only meaningful after structural validation."""
        return Quantity.parse(self.quantity).value


@dataclass
class PatientOrder:
    """Aggregate root for patient transfusion orders.

    ``id`` is the store's own identifier; ``order_id`` is whatever the
    ordering system sent and is not guaranteed unique.
    """

    pid: str | None = None
    order_id: str | None = None
    patient_name: str | None = None
    insure_number: str | None = None
    treatment_code: str | None = None
    order_date: str | None = None
    age: str | None = None
    sex: str | None = None
    blood_group: str | None = None
    rh: str | None = None
    address: str | None = None
    doctor_id: str | None = None
    doctor_name: str | None = None
    location_id: str | None = None
    location_name: str | None = None
    items: list[OrderLineItem] = field(default_factory=list)
    id: str = field(default_factory=new_id)

    @property
    def blood_type_label(self) -> str:
        return f"{self.blood_group or ''}{self.rh or ''}"
