"""Application services: direct maintenance of the order list.

Unlike ``SubmitOrderHandler`` these never touch inventory.  Create and
update still run structural validation so malformed orders cannot be
written into history.
"""

from __future__ import annotations

from bloodbank.domain.model.document import Document, RecordRef
from bloodbank.domain.model.order import PatientOrder
from bloodbank.domain.repository.document_repository import DocumentRepository
from bloodbank.domain.service.order_validator import OrderValidator


class ListOrdersHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self) -> list[PatientOrder]:
        return list(self._document_repo.load().orders)


class ShowDocumentHandler:
    """Both lists from one snapshot."""

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self) -> Document:
        return self._document_repo.load()


class CreateOrderHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self, order: PatientOrder) -> PatientOrder:
        OrderValidator().validate_structure(order)
        with self._document_repo.write_lock():
            document = self._document_repo.load()
            document.add_order(order)
            self._document_repo.save(document)
        return order


class UpdateOrderHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self, ref: RecordRef, order: PatientOrder) -> PatientOrder:
        OrderValidator().validate_structure(order)
        with self._document_repo.write_lock():
            document = self._document_repo.load()
            document.replace_order(ref, order)
            self._document_repo.save(document)
        return order


class DeleteOrderHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self, ref: RecordRef) -> PatientOrder:
        with self._document_repo.write_lock():
            document = self._document_repo.load()
            removed = document.remove_order(ref)
            self._document_repo.save(document)
        return removed
