"""Application services: create, update and delete inventory records.

Each handler performs one locked Load -> mutate -> Save cycle.  Records
are addressed by stable id or by position in the current snapshot.
"""

from __future__ import annotations

from bloodbank.application.dto import InventoryRecordSpec
from bloodbank.domain.model.document import RecordRef
from bloodbank.domain.model.inventory import InventoryRecord
from bloodbank.domain.repository.document_repository import DocumentRepository


def _build(spec: InventoryRecordSpec) -> InventoryRecord:
    return InventoryRecord.create(
        abo=spec.abo,
        rh=spec.rh,
        element_id=spec.element_id,
        element_name=spec.element_name,
        volume=spec.volume,
        quantity=spec.quantity,
    )


class CreateInventoryRecordHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self, spec: InventoryRecordSpec) -> InventoryRecord:
        record = _build(spec)
        with self._document_repo.write_lock():
            document = self._document_repo.load()
            document.add_inventory_record(record)
            self._document_repo.save(document)
        return record


class UpdateInventoryRecordHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self, ref: RecordRef, spec: InventoryRecordSpec) -> InventoryRecord:
        """Replace every field of the record at *ref*; its id is kept."""
        record = _build(spec)
        with self._document_repo.write_lock():
            document = self._document_repo.load()
            document.replace_inventory_record(ref, record)
            self._document_repo.save(document)
        return record


class DeleteInventoryRecordHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self, ref: RecordRef) -> InventoryRecord:
        with self._document_repo.write_lock():
            document = self._document_repo.load()
            removed = document.remove_inventory_record(ref)
            self._document_repo.save(document)
        return removed
