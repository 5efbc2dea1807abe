"""Document aggregate — the whole persisted state of the blood bank.

Inventory and orders are always loaded and saved together.  Records are
addressed either by their stable ``id`` (``str``) or by their position in
the current snapshot (``int``); positions are bounds-checked but are only
meaningful against the snapshot they were read from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TypeVar, Union

from bloodbank.domain.exceptions import EntityNotFoundError
from bloodbank.domain.model.inventory import InventoryRecord
from bloodbank.domain.model.order import PatientOrder

RecordRef = Union[int, str]

_T = TypeVar("_T", InventoryRecord, PatientOrder)


@dataclass
class Document:
    inventory: list[InventoryRecord] = field(default_factory=list)
    orders: list[PatientOrder] = field(default_factory=list)

    # --- Inventory ------------------------------------------------------------

    def inventory_record(self, ref: RecordRef) -> InventoryRecord:
        return self.inventory[self._position(self.inventory, ref, "Inventory record")]

    def add_inventory_record(self, record: InventoryRecord) -> None:
        self.inventory.append(record)

    def replace_inventory_record(self, ref: RecordRef, record: InventoryRecord) -> InventoryRecord:
        """Swap the record at *ref* for *record*, keeping the stable id."""
        return self._replace(self.inventory, ref, record, "Inventory record")

    def remove_inventory_record(self, ref: RecordRef) -> InventoryRecord:
        return self.inventory.pop(self._position(self.inventory, ref, "Inventory record"))

    # --- Orders ---------------------------------------------------------------

    def order(self, ref: RecordRef) -> PatientOrder:
        return self.orders[self._position(self.orders, ref, "Patient order")]

    def add_order(self, order: PatientOrder) -> None:
        self.orders.append(order)

    def replace_order(self, ref: RecordRef, order: PatientOrder) -> PatientOrder:
        return self._replace(self.orders, ref, order, "Patient order")

    def remove_order(self, ref: RecordRef) -> PatientOrder:
        return self.orders.pop(self._position(self.orders, ref, "Patient order"))

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _position(entries: list[_T], ref: RecordRef, kind: str) -> int:
        if isinstance(ref, int):
            if 0 <= ref < len(entries):
                return ref
            raise EntityNotFoundError(
                f"{kind} at index {ref} not found ({len(entries)} entries)"
            )
        for i, entry in enumerate(entries):
            if entry.id == ref:
                return i
        raise EntityNotFoundError(f"{kind} with ID '{ref}' not found")

    @classmethod
    def _replace(cls, entries: list[_T], ref: RecordRef, new: _T, kind: str) -> _T:
        i = cls._position(entries, ref, kind)
        new.id = entries[i].id
        entries[i] = new
        return new
