"""Unit tests for the FulfillmentService domain service."""

import pytest

from bloodbank.domain.exceptions import StoreUnavailableError, ValidationError
from bloodbank.domain.model.document import Document
from bloodbank.domain.service.fulfillment_service import FulfillmentService
from tests.builders import line, order, record
from tests.fakes import FakeDocumentRepository


class TestFulfill:

    def test_deducts_and_appends_order(self):
        repo = FakeDocumentRepository([record(quantity=5)])
        submitted = order(items=[line(quantity="2")])

        FulfillmentService(repo).fulfill(submitted)

        assert repo.stored.inventory[0].quantity == 3
        assert repo.stored.orders == [submitted]
        assert repo.save_count == 1

    def test_deducts_each_line_item_from_its_own_record(self):
        repo = FakeDocumentRepository([
            record(element_id="RBC", quantity=5),
            record(element_id="FFP", quantity=4),
        ])
        submitted = order(items=[line("RBC", "1"), line("FFP", "4")])

        FulfillmentService(repo).fulfill(submitted)

        assert [r.quantity for r in repo.stored.inventory] == [4, 0]

    def test_only_first_duplicate_is_deducted(self):
        repo = FakeDocumentRepository([record(quantity=5), record(quantity=5)])

        FulfillmentService(repo).fulfill(order(items=[line(quantity="3")]))

        assert [r.quantity for r in repo.stored.inventory] == [2, 5]

    def test_unmatched_line_item_rejects_whole_order(self):
        repo = FakeDocumentRepository([record(element_id="RBC", quantity=5)])
        submitted = order(items=[line("RBC", "1"), line("PLT", "1")])

        with pytest.raises(ValidationError, match=r"ListOrder\[1\]: no 'PLT'"):
            FulfillmentService(repo).fulfill(submitted)

        assert repo.stored.inventory[0].quantity == 5
        assert repo.stored.orders == []
        assert repo.save_count == 0

    def test_never_drives_stock_negative(self):
        repo = FakeDocumentRepository([record(quantity=1)])

        with pytest.raises(ValidationError, match="requested 2, available 1"):
            FulfillmentService(repo).fulfill(order(items=[line(quantity="2")]))

        assert repo.stored.inventory[0].quantity == 1
        assert repo.save_count == 0

    def test_combined_line_items_checked_against_one_record(self):
        repo = FakeDocumentRepository([record(quantity=3)])
        submitted = order(items=[line(quantity="2"), line(quantity="2")])

        with pytest.raises(ValidationError, match="requested 4, available 3"):
            FulfillmentService(repo).fulfill(submitted)

        assert repo.stored.inventory[0].quantity == 3

    def test_save_failure_propagates(self):
        repo = FakeDocumentRepository([record(quantity=5)])
        repo.fail_on_save = True

        with pytest.raises(StoreUnavailableError):
            FulfillmentService(repo).fulfill(order())

        assert repo.stored.inventory[0].quantity == 5


class TestApply:

    def test_works_on_in_memory_document(self):
        document = Document(inventory=[record(quantity=5)])
        submitted = order(items=[line(quantity="5")])

        FulfillmentService.apply(document, submitted)

        assert document.inventory[0].quantity == 0
        assert document.orders == [submitted]

    def test_order_without_line_items_is_just_recorded(self):
        document = Document(inventory=[record(quantity=5)])

        FulfillmentService.apply(document, order(items=[]))

        assert document.inventory[0].quantity == 5
        assert len(document.orders) == 1
