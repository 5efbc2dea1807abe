"""Application service: Submit Order use case.

Orchestrates the validator and the fulfillment service:

1. Structural validation (no I/O, no lock).
2. Under the writer lock: stock validation against a fresh snapshot,
   then fulfillment, which reloads, deducts, appends and saves.

Holding the lock across steps 2a and 2b means no other writer can
consume the stock between the check and the deduction.
"""

from __future__ import annotations

from bloodbank.domain.model.order import PatientOrder
from bloodbank.domain.repository.document_repository import DocumentRepository
from bloodbank.domain.service.fulfillment_service import FulfillmentService
from bloodbank.domain.service.inventory_index import InventoryIndex
from bloodbank.domain.service.order_validator import OrderValidator


class SubmitOrderHandler:

    def __init__(
        self,
        document_repo: DocumentRepository,
        validator: OrderValidator | None = None,
    ) -> None:
        self._document_repo = document_repo
        self._validator = validator or OrderValidator()

    def handle(self, order: PatientOrder) -> PatientOrder:
        self._validator.validate_structure(order)

        with self._document_repo.write_lock():
            snapshot = self._document_repo.load()
            self._validator.validate_stock(order, InventoryIndex(snapshot.inventory))

            svc = FulfillmentService(self._document_repo)
            return svc.fulfill(order)
