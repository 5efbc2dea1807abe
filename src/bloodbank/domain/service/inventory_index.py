"""Domain service: Inventory Index.

Linear-scan matching over one loaded snapshot of the inventory.  The
document is small and wholly loaded per operation, so no persistent
index structure is kept.
"""

from __future__ import annotations

from bloodbank.domain.model.inventory import InventoryRecord
from bloodbank.domain.model.value_objects import same_text


class InventoryIndex:

    def __init__(self, records: list[InventoryRecord]) -> None:
        self._records = records

    def filter(
        self,
        abo: str | None = None,
        rh: str | None = None,
        element_id: str | None = None,
        volume: int = 0,
    ) -> list[InventoryRecord]:
        """Return records matching every supplied criterion.

        Blank strings and a zero volume count as "not supplied"; with no
        criteria at all every record is returned.
        """
        result: list[InventoryRecord] = []
        for record in self._records:
            if abo and abo.strip() and not same_text(record.abo, abo):
                continue
            if rh and rh.strip() and not same_text(record.rh, rh):
                continue
            if element_id and element_id.strip() and not same_text(record.element_id, element_id):
                continue
            if volume > 0 and record.volume != volume:
                continue
            result.append(record)
        return result

    def find_match(
        self, abo: str | None, rh: str | None, element_id: str | None, volume: int
    ) -> InventoryRecord | None:
        """First record (document order) whose natural key matches exactly.

        Says nothing about whether it holds enough stock.
        """
        for record in self._records:
            if record.matches(abo, rh, element_id, volume):
                return record
        return None
