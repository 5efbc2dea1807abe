"""Caller-facing facade over the use-case handlers.

Every public method is total: it never raises.  Domain errors become
``OperationResult.failed`` with a human-readable message, and every call
emits exactly one audit entry.

Status mapping:

    ValidationError, EntityNotFoundError -> Failed, message verbatim
    StoreUnavailableError                -> Error, generic message
    anything else                        -> Error, generic message
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from bloodbank.application.audit import AuditEntry, AuditLog, AuditStatus
from bloodbank.application.dto import InventoryFilter, InventoryRecordSpec, OperationResult
from bloodbank.application.get_inventory import GetInventoryHandler
from bloodbank.application.inventory_records import (
    CreateInventoryRecordHandler,
    DeleteInventoryRecordHandler,
    UpdateInventoryRecordHandler,
)
from bloodbank.application.patient_orders import (
    CreateOrderHandler,
    DeleteOrderHandler,
    ListOrdersHandler,
    ShowDocumentHandler,
    UpdateOrderHandler,
)
from bloodbank.application.submit_order import SubmitOrderHandler
from bloodbank.domain.exceptions import (
    EntityNotFoundError,
    StoreUnavailableError,
    ValidationError,
)
from bloodbank.domain.model.document import RecordRef
from bloodbank.domain.model.order import PatientOrder
from bloodbank.domain.repository.document_repository import DocumentRepository

logger = logging.getLogger(__name__)

STORE_UNAVAILABLE_MESSAGE = "Document store is unavailable, please retry later"
UNEXPECTED_ERROR_MESSAGE = "Unexpected error while processing the request"


class BloodBankService:

    def __init__(self, document_repo: DocumentRepository, audit_log: AuditLog) -> None:
        self._document_repo = document_repo
        self._audit_log = audit_log

    # --- Queries --------------------------------------------------------------

    def get_inventory(self, criteria: InventoryFilter | None = None) -> OperationResult:
        handler = GetInventoryHandler(self._document_repo)
        return self._run("GetInventory", criteria, lambda: handler.handle(criteria))

    def list_orders(self) -> OperationResult:
        handler = ListOrdersHandler(self._document_repo)
        return self._run("GetPatientOrders", None, handler.handle)

    def get_all_data(self) -> OperationResult:
        handler = ShowDocumentHandler(self._document_repo)
        return self._run("GetAllData", None, handler.handle)

    # --- Order acceptance -----------------------------------------------------

    def submit_order(self, order: PatientOrder) -> OperationResult:
        handler = SubmitOrderHandler(self._document_repo)
        return self._run("SavePatient", order, lambda: handler.handle(order))

    # --- Inventory maintenance ------------------------------------------------

    def create_inventory_record(self, spec: InventoryRecordSpec) -> OperationResult:
        handler = CreateInventoryRecordHandler(self._document_repo)
        return self._run("CreateInventory", spec, lambda: handler.handle(spec))

    def update_inventory_record(self, ref: RecordRef, spec: InventoryRecordSpec) -> OperationResult:
        handler = UpdateInventoryRecordHandler(self._document_repo)
        return self._run(
            "UpdateInventory", {"ref": ref, "record": spec}, lambda: handler.handle(ref, spec)
        )

    def delete_inventory_record(self, ref: RecordRef) -> OperationResult:
        handler = DeleteInventoryRecordHandler(self._document_repo)
        return self._run("DeleteInventory", {"ref": ref}, lambda: handler.handle(ref))

    # --- Order maintenance ----------------------------------------------------

    def create_order(self, order: PatientOrder) -> OperationResult:
        handler = CreateOrderHandler(self._document_repo)
        return self._run("CreatePatientOrder", order, lambda: handler.handle(order))

    def update_order(self, ref: RecordRef, order: PatientOrder) -> OperationResult:
        handler = UpdateOrderHandler(self._document_repo)
        return self._run(
            "UpdatePatientOrder", {"ref": ref, "order": order}, lambda: handler.handle(ref, order)
        )

    def delete_order(self, ref: RecordRef) -> OperationResult:
        handler = DeleteOrderHandler(self._document_repo)
        return self._run("DeletePatientOrder", {"ref": ref}, lambda: handler.handle(ref))

    # --- Internal helpers -----------------------------------------------------

    def _run(self, operation: str, payload: Any, call: Callable[[], Any]) -> OperationResult:
        try:
            result = OperationResult.ok(call())
            status = AuditStatus.SUCCESS
        except (ValidationError, EntityNotFoundError) as exc:
            logger.warning("%s rejected: %s", operation, exc)
            result = OperationResult.failed(str(exc))
            status = AuditStatus.FAILED
        except StoreUnavailableError:
            logger.exception("%s failed: document store unavailable", operation)
            result = OperationResult.failed(STORE_UNAVAILABLE_MESSAGE)
            status = AuditStatus.ERROR
        except Exception:
            logger.exception("%s failed with an unexpected error", operation)
            result = OperationResult.failed(UNEXPECTED_ERROR_MESSAGE)
            status = AuditStatus.ERROR

        self._audit(AuditEntry(
            operation=operation,
            input=payload,
            output=result,
            status=status,
            error_message=result.error_message,
        ))
        return result

    def _audit(self, entry: AuditEntry) -> None:
        try:
            self._audit_log.record(entry)
        except Exception:
            logger.exception("Could not write audit entry for %s", entry.operation)
