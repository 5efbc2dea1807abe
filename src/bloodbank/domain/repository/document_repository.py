"""Abstract repository for the Document aggregate.

Defined in the domain layer so the domain never depends on
infrastructure.  Load and save are the only sanctioned access path to
persisted state: every change is a Load -> mutate in memory -> Save cycle
over the whole document, never an incremental edit of the medium.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager

from bloodbank.domain.model.document import Document


class DocumentRepository(ABC):

    @abstractmethod
    def load(self) -> Document:
        """Return a fresh snapshot of the whole document.

        Raises StoreUnavailableError if it cannot be read or decoded.
        """

    @abstractmethod
    def save(self, document: Document) -> None:
        """Replace the persisted document with *document*.

        Raises StoreUnavailableError if the write did not take effect.
        """

    @abstractmethod
    def write_lock(self) -> AbstractContextManager[None]:
        """Serialise a Load -> mutate -> Save cycle against other writers.

        Must be re-entrant for the calling thread.  Raises
        StoreUnavailableError if the lock cannot be acquired in time.
        """
