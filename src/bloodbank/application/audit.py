"""Audit log port.

One entry is emitted per completed caller-facing operation.  Writing
an entry is fire-and-forget: an audit failure must never fail the
operation it describes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class AuditStatus(Enum):
    SUCCESS = "Success"
    FAILED = "Failed"
    ERROR = "Error"


@dataclass(frozen=True)
class AuditEntry:
    operation: str
    input: Any
    output: Any
    status: AuditStatus
    error_message: str = ""
    at: datetime = field(default_factory=datetime.now)


class AuditLog(ABC):

    @abstractmethod
    def record(self, entry: AuditEntry) -> None:
        """Persist *entry*. May raise; callers swallow and log failures."""
