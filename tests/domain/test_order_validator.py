"""Unit tests for the OrderValidator domain service."""

import pytest

from bloodbank.domain.exceptions import ValidationError
from bloodbank.domain.service.inventory_index import InventoryIndex
from bloodbank.domain.service.order_validator import OrderValidator, parse_order_date
from tests.builders import line, order, record


@pytest.fixture
def validator():
    return OrderValidator()


class TestStructure:

    def test_valid_order_passes(self, validator):
        validator.validate_structure(order())

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"pid": " "}, "PID is required"),
            ({"order_id": None}, "OrderID is required"),
            ({"patient_name": ""}, "PatientName is required"),
            ({"order_date": None}, "OrderDate is required"),
            ({"order_date": "yesterday"}, "OrderDate is invalid"),
            ({"age": ""}, "Age is required"),
            ({"age": "abc"}, "Age is invalid"),
            ({"age": "151"}, "Age is invalid"),
            ({"age": "-1"}, "Age is invalid"),
            ({"age": "1_0"}, "Age is invalid"),
            ({"age": "\u0664\u0662"}, "Age is invalid"),
            ({"sex": None}, "Sex is required"),
            ({"sex": "X"}, "Sex is invalid"),
            ({"blood_group": "C"}, "BloodGroup is invalid"),
            ({"rh": "positive"}, "Rh is invalid"),
        ],
    )
    def test_field_rules(self, validator, overrides, message):
        with pytest.raises(ValidationError, match=message):
            validator.validate_structure(order(**overrides))

    def test_age_bounds_inclusive(self, validator):
        validator.validate_structure(order(age="0"))
        validator.validate_structure(order(age="150"))

    def test_sex_is_exact(self, validator):
        with pytest.raises(ValidationError, match="Sex is invalid"):
            validator.validate_structure(order(sex="m"))

    def test_blood_group_and_rh_are_optional(self, validator):
        validator.validate_structure(order(blood_group="", rh=None))

    def test_order_without_line_items_passes(self, validator):
        validator.validate_structure(order(items=[]))

    @pytest.mark.parametrize(
        "item, message",
        [
            (line(quantity=""), r"ListOrder\[1\]\.Quantity must not be empty"),
            (line(quantity="0"), r"ListOrder\[1\]\.Quantity is invalid"),
            (line(quantity="2.5"), r"ListOrder\[1\]\.Quantity is invalid"),
            (line(quantity="+-1"), r"ListOrder\[1\]\.Quantity is invalid"),
            (line(quantity="--2"), r"ListOrder\[1\]\.Quantity is invalid"),
            (line(quantity="\u00b2"), r"ListOrder\[1\]\.Quantity is invalid"),
            (line(quantity="1_0"), r"ListOrder\[1\]\.Quantity is invalid"),
            (line(element_id=" "), r"ListOrder\[1\]\.ElementID must not be empty"),
            (line(volume=0), r"ListOrder\[1\]\.Volume is invalid"),
        ],
    )
    def test_line_item_rules_are_index_qualified(self, validator, item, message):
        with pytest.raises(ValidationError, match=message):
            validator.validate_structure(order(items=[line(), item]))

    def test_first_failure_wins(self, validator):
        bad = order(pid="", sex="X", items=[line(quantity="0")])
        with pytest.raises(ValidationError, match="PID"):
            validator.validate_structure(bad)

    def test_same_order_reports_same_field_twice(self, validator):
        bad = order(age="200", sex="X")
        messages = []
        for _ in range(2):
            with pytest.raises(ValidationError) as exc:
                validator.validate_structure(bad)
            messages.append(str(exc.value))
        assert messages[0] == messages[1]
        assert messages[0].startswith("Age")

    def test_first_bad_line_item_reported(self, validator):
        bad = order(items=[line(volume=-5), line(quantity="")])
        with pytest.raises(ValidationError, match=r"ListOrder\[0\]\.Volume"):
            validator.validate_structure(bad)


class TestOrderDateParsing:

    @pytest.mark.parametrize(
        "text",
        ["2025-03-01 08:30:00", "2025-03-01T08:30:00", "2025-03-01", "01/03/2025 08:30"],
    )
    def test_accepted_formats(self, text):
        assert parse_order_date(text) is not None

    def test_garbage(self):
        assert parse_order_date("32/13/2025") is None


class TestStock:

    def test_sufficient_stock_passes(self, validator):
        index = InventoryIndex([record(quantity=5)])
        validator.validate_stock(order(items=[line(quantity="5")]), index)

    def test_missing_product_rejected(self, validator):
        index = InventoryIndex([record(element_id="FFP")])
        with pytest.raises(ValidationError, match=r"ListOrder\[0\]: no 'RBC' units of blood type O\+"):
            validator.validate_stock(order(), index)

    def test_volume_must_match(self, validator):
        index = InventoryIndex([record(volume=350)])
        with pytest.raises(ValidationError, match="volume 250ml found in stock"):
            validator.validate_stock(order(), index)

    def test_insufficient_stock_names_requested_and_available(self, validator):
        index = InventoryIndex([record(quantity=5)])
        with pytest.raises(ValidationError, match="insufficient stock. Requested 10 .* available 5"):
            validator.validate_stock(order(items=[line(quantity="10")]), index)

    def test_first_volume_match_is_checked(self, validator):
        index = InventoryIndex([record(quantity=1), record(quantity=50)])
        with pytest.raises(ValidationError, match="available 1"):
            validator.validate_stock(order(items=[line(quantity="3")]), index)

    def test_every_line_item_is_checked(self, validator):
        index = InventoryIndex([record(quantity=5)])
        bad = order(items=[line(quantity="1"), line(element_id="PLT")])
        with pytest.raises(ValidationError, match=r"ListOrder\[1\]"):
            validator.validate_stock(bad, index)


class TestValidate:

    def test_structure_checked_before_stock(self, validator):
        # Sex is wrong and there is no stock at all: the Sex error wins.
        with pytest.raises(ValidationError, match="Sex is invalid"):
            validator.validate(order(sex="X"), InventoryIndex([]))

    def test_both_phases_pass(self, validator):
        validator.validate(order(), InventoryIndex([record()]))
