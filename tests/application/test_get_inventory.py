"""Tests for the GetInventory query."""

from bloodbank.application.dto import InventoryFilter
from bloodbank.application.get_inventory import GetInventoryHandler
from tests.builders import record
from tests.fakes import FakeDocumentRepository


def _repo():
    return FakeDocumentRepository([
        record("O", "+", "RBC", 250, 5),
        record("A", "-", "FFP", 200, 3),
    ])


class TestGetInventory:

    def test_no_filter_returns_all(self):
        assert len(GetInventoryHandler(_repo()).handle()) == 2

    def test_default_filter_returns_all(self):
        assert len(GetInventoryHandler(_repo()).handle(InventoryFilter())) == 2

    def test_blank_filter_returns_all(self):
        criteria = InventoryFilter(abo=" ", rh="", element_id="")
        assert len(GetInventoryHandler(_repo()).handle(criteria)) == 2

    def test_filtered(self):
        result = GetInventoryHandler(_repo()).handle(InventoryFilter(element_id="FFP"))
        assert [r.abo for r in result] == ["A"]

    def test_filter_by_volume_only(self):
        result = GetInventoryHandler(_repo()).handle(InventoryFilter(volume=250))
        assert [r.element_id for r in result] == ["RBC"]

    def test_repeated_reads_are_identical(self):
        handler = GetInventoryHandler(_repo())
        assert handler.handle() == handler.handle()

    def test_read_does_not_save(self):
        repo = _repo()
        GetInventoryHandler(repo).handle(InventoryFilter(abo="O"))
        assert repo.save_count == 0


class TestInventoryFilter:

    def test_is_empty(self):
        assert InventoryFilter().is_empty
        assert InventoryFilter(abo="  ", volume=0).is_empty

    def test_not_empty(self):
        assert not InventoryFilter(volume=250).is_empty
        assert not InventoryFilter(rh="+").is_empty
