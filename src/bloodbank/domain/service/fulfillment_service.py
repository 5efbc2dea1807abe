"""Domain service: Fulfillment.

The single read-modify-write cycle that accepts an order: load a fresh
document, deduct every line item from its matching inventory record,
append the order and save the document as one unit.

Deduction is all-or-nothing.  Every mutation happens on the in-memory
snapshot, so any failure before ``save`` leaves the persisted document
untouched.  A line item with no matching record, or one whose deduction
would drive stock negative, rejects the whole order.
"""

from __future__ import annotations

import logging

from bloodbank.domain.exceptions import ValidationError
from bloodbank.domain.model.document import Document
from bloodbank.domain.model.order import PatientOrder
from bloodbank.domain.repository.document_repository import DocumentRepository
from bloodbank.domain.service.inventory_index import InventoryIndex

logger = logging.getLogger(__name__)


class FulfillmentService:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def fulfill(self, order: PatientOrder) -> PatientOrder:
        """Deduct stock for *order* and record it, under the writer lock."""
        with self._document_repo.write_lock():
            document = self._document_repo.load()
            self.apply(document, order)
            self._document_repo.save(document)

        logger.info(
            "Order %s for patient %s accepted with %d line item(s)",
            order.order_id, order.pid, len(order.items),
        )
        return order

    @staticmethod
    def apply(document: Document, order: PatientOrder) -> None:
        """Deduct and append on an in-memory document. No I/O."""
        index = InventoryIndex(document.inventory)

        # Resolve every match before touching any quantity.
        deductions = []
        for i, item in enumerate(order.items):
            record = index.find_match(order.blood_group, order.rh, item.element_id, item.volume)
            if record is None:
                logger.warning(
                    "No inventory match for ABO=%s Rh=%s ElementID=%s Volume=%sml",
                    order.blood_group, order.rh, item.element_id, item.volume,
                )
                raise ValidationError(
                    f"ListOrder[{i}]: no '{item.element_id}' units of blood type "
                    f"{order.blood_type_label}, volume {item.volume}ml found in stock"
                )
            deductions.append((record, item.requested_quantity))

        # Two line items may hit the same record; check their combined total.
        totals: dict[str, int] = {}
        for record, qty in deductions:
            totals[record.id] = totals.get(record.id, 0) + qty
        for record, _ in deductions:
            if totals[record.id] > record.quantity:
                raise ValidationError(
                    f"Insufficient stock for {record.label} "
                    f"(requested {totals[record.id]}, available {record.quantity})"
                )

        for record, qty in deductions:
            record.deduct(qty)
            logger.info(
                "Deducted %d unit(s) of %s, remaining %d", qty, record.label, record.quantity
            )

        document.add_order(order)
