"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.

Paths and the lock timeout can be overridden from the environment:

    BLOODBANK_DATA_FILE     JSON document (default: <project>/data/mockdb.json)
    BLOODBANK_LOG_DIR       audit log directory (default: <project>/logs)
    BLOODBANK_LOCK_TIMEOUT  seconds to wait for the writer lock (default: 10)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from bloodbank.application.service import BloodBankService
from bloodbank.infrastructure.audit.file_audit_log import FileAuditLog
from bloodbank.infrastructure.persistence.json_document_repository import (
    DEFAULT_LOCK_TIMEOUT,
    JsonDocumentRepository,
)

# Resolve defaults relative to the project root.
# When installed in editable mode the project root is the repo root.
_PROJECT_DIR = Path(__file__).resolve().parents[3]


@dataclass(frozen=True)
class Settings:
    data_file: Path
    log_dir: Path
    lock_timeout: float

    @staticmethod
    def from_env() -> Settings:
        return Settings(
            data_file=Path(
                os.environ.get("BLOODBANK_DATA_FILE", _PROJECT_DIR / "data" / "mockdb.json")
            ),
            log_dir=Path(os.environ.get("BLOODBANK_LOG_DIR", _PROJECT_DIR / "logs")),
            lock_timeout=float(
                os.environ.get("BLOODBANK_LOCK_TIMEOUT", DEFAULT_LOCK_TIMEOUT)
            ),
        )


@lru_cache(maxsize=None)
def document_repository(settings: Settings) -> JsonDocumentRepository:
    """One repository (and so one writer lock) per data file."""
    return JsonDocumentRepository(settings.data_file, lock_timeout=settings.lock_timeout)


def blood_bank_service(settings: Settings | None = None) -> BloodBankService:
    settings = settings or Settings.from_env()
    return BloodBankService(
        document_repo=document_repository(settings),
        audit_log=FileAuditLog(settings.log_dir),
    )
