"""Append-only audit log files, one per operation per day.

Each entry is a pretty-printed JSON object framed by rules of ``=``:

    ================================================================
    {"Time": "...", "API": "SavePatient", "Status": "Success", ...}
    ================================================================

written to ``API_<operation>_<YYYY-MM-DD>.log`` under the log directory.
"""

from __future__ import annotations

import dataclasses
import json
import logging
import threading
from enum import Enum
from pathlib import Path
from typing import Any

from bloodbank.application.audit import AuditEntry, AuditLog
from bloodbank.domain.model.document import Document
from bloodbank.domain.model.inventory import InventoryRecord
from bloodbank.domain.model.order import PatientOrder
from bloodbank.infrastructure.serialization import (
    document_to_raw,
    inventory_to_raw,
    order_to_raw,
)

logger = logging.getLogger(__name__)

RULE = "=" * 80


def _encode(value: Any) -> Any:
    """json.dumps fallback for domain objects and DTOs."""
    if isinstance(value, InventoryRecord):
        return inventory_to_raw(value)
    if isinstance(value, PatientOrder):
        return order_to_raw(value)
    if isinstance(value, Document):
        return document_to_raw(value)
    if isinstance(value, Enum):
        return value.value
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        # Nested values are encoded by later _encode calls.
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    return str(value)


class FileAuditLog(AuditLog):

    def __init__(self, log_dir: Path) -> None:
        self._log_dir = log_dir
        self._lock = threading.Lock()

    def record(self, entry: AuditEntry) -> None:
        path = self._log_dir / f"API_{entry.operation}_{entry.at:%Y-%m-%d}.log"
        body = json.dumps(
            {
                "Time": entry.at.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3],
                "API": entry.operation,
                "Status": entry.status.value,
                "Input": entry.input,
                "Output": entry.output,
                "ErrorMessage": entry.error_message,
            },
            default=_encode,
            indent=2,
            ensure_ascii=False,
        )

        with self._lock:
            self._log_dir.mkdir(parents=True, exist_ok=True)
            with path.open("a", encoding="utf-8") as fh:
                fh.write(f"\n{RULE}\n{body}\n{RULE}")

        logger.debug("Audit entry written to %s", path.name)
