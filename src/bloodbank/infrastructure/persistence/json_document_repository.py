"""JSON-file-backed implementation of DocumentRepository."""

from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from bloodbank.domain.exceptions import StoreUnavailableError
from bloodbank.domain.model.document import Document
from bloodbank.domain.repository.document_repository import DocumentRepository
from bloodbank.infrastructure.serialization import document_from_raw, document_to_raw

logger = logging.getLogger(__name__)

DEFAULT_LOCK_TIMEOUT = 10.0


class JsonDocumentRepository(DocumentRepository):
    """Whole-document storage in a single JSON file.

    The file (and its directory) is created with an empty document on the
    first load.  Writers are serialised by an in-process re-entrant lock.
    Saves go to a temporary sibling file that atomically replaces the
    target, so a failed write leaves the previous revision intact.
    """

    def __init__(self, file_path: Path, lock_timeout: float = DEFAULT_LOCK_TIMEOUT) -> None:
        self._file_path = file_path
        self._lock_timeout = lock_timeout
        self._lock = threading.RLock()

    # --- DocumentRepository interface -----------------------------------------

    def load(self) -> Document:
        if not self._file_path.exists():
            with self.write_lock():
                if not self._file_path.exists():
                    self.save(Document())
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return document_from_raw(raw)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot read {self._file_path}") from exc
        except (ValueError, TypeError, KeyError) as exc:
            raise StoreUnavailableError(f"Cannot decode {self._file_path}") from exc

    def save(self, document: Document) -> None:
        payload = json.dumps(document_to_raw(document), indent=2, ensure_ascii=False) + "\n"
        try:
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._write_atomic(payload)
        except OSError as exc:
            raise StoreUnavailableError(f"Cannot write {self._file_path}") from exc
        logger.debug(
            "Saved %d inventory record(s) and %d order(s) to %s",
            len(document.inventory), len(document.orders), self._file_path,
        )

    @contextmanager
    def write_lock(self) -> Iterator[None]:
        if not self._lock.acquire(timeout=self._lock_timeout):
            raise StoreUnavailableError(
                f"Timed out after {self._lock_timeout}s waiting for the document lock"
            )
        try:
            yield
        finally:
            self._lock.release()

    # --- File helpers ---------------------------------------------------------

    def _write_atomic(self, payload: str) -> None:
        fd, tmp_name = tempfile.mkstemp(
            dir=self._file_path.parent, prefix=f".{self._file_path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(payload)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
