"""Application service: Get Inventory use case (query)."""

from __future__ import annotations

import logging

from bloodbank.application.dto import InventoryFilter
from bloodbank.domain.model.inventory import InventoryRecord
from bloodbank.domain.repository.document_repository import DocumentRepository
from bloodbank.domain.service.inventory_index import InventoryIndex

logger = logging.getLogger(__name__)


class GetInventoryHandler:

    def __init__(self, document_repo: DocumentRepository) -> None:
        self._document_repo = document_repo

    def handle(self, criteria: InventoryFilter | None = None) -> list[InventoryRecord]:
        """Return matching records from a fresh, unlocked snapshot.

        A missing or all-blank filter returns the whole inventory.
        """
        document = self._document_repo.load()

        if criteria is None or criteria.is_empty:
            logger.debug("Getting all inventory (no filters)")
            return list(document.inventory)

        logger.debug(
            "Getting inventory with filters ABO=%s Rh=%s ElementID=%s Volume=%s",
            criteria.abo, criteria.rh, criteria.element_id, criteria.volume,
        )
        return InventoryIndex(document.inventory).filter(
            abo=criteria.abo,
            rh=criteria.rh,
            element_id=criteria.element_id,
            volume=criteria.volume,
        )
