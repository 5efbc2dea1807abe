"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class InventoryFilter:
    """Input: optional GetInventory criteria. Blank / zero means "any"."""

    abo: str | None = None
    rh: str | None = None
    element_id: str | None = None
    volume: int = 0

    @property
    def is_empty(self) -> bool:
        return (
            not (self.abo or "").strip()
            and not (self.rh or "").strip()
            and not (self.element_id or "").strip()
            and self.volume == 0
        )


@dataclass(frozen=True)
class InventoryRecordSpec:
    """Input: fields for creating or replacing an inventory record."""

    abo: str
    rh: str
    element_id: str
    element_name: str
    volume: int
    quantity: int


@dataclass(frozen=True)
class OperationResult:
    """Output: the outcome of one caller-facing operation.

    ``error_message`` is empty on success.  ``data`` holds whatever the
    operation returns (records, orders, the whole document) or None.
    """

    success: bool
    error_message: str = ""
    data: Any = None

    @staticmethod
    def ok(data: Any = None) -> OperationResult:
        return OperationResult(success=True, data=data)

    @staticmethod
    def failed(message: str) -> OperationResult:
        return OperationResult(success=False, error_message=message)
