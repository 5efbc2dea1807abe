"""Mapping between domain objects and the JSON wire/storage shape.

The stored document and incoming order requests share one shape:

    {"Inventory": [{"Id", "ABO", "Rh", "ElementID", "ElementName",
                    "Volume", "Quantity"}, ...],
     "PatientOrders": [{"Id", "PID", "OrderID", ..., "ListOrder": [...]}]}

Keys are matched case-insensitively through explicit field maps.
Entries saved before ids existed get a fresh one on decode.
"""

from __future__ import annotations

from typing import Any

from bloodbank.domain.model.document import Document
from bloodbank.domain.model.inventory import InventoryRecord
from bloodbank.domain.model.order import OrderLineItem, PatientOrder
from bloodbank.domain.model.value_objects import new_id

INVENTORY_KEY = "Inventory"
ORDERS_KEY = "PatientOrders"

INVENTORY_FIELDS = {
    "id": "Id",
    "abo": "ABO",
    "rh": "Rh",
    "element_id": "ElementID",
    "element_name": "ElementName",
    "volume": "Volume",
    "quantity": "Quantity",
}

ORDER_FIELDS = {
    "id": "Id",
    "pid": "PID",
    "order_id": "OrderID",
    "patient_name": "PatientName",
    "insure_number": "InsureNumber",
    "treatment_code": "TREATMENT_CODE",
    "order_date": "OrderDate",
    "age": "Age",
    "sex": "Sex",
    "blood_group": "BloodGroup",
    "rh": "Rh",
    "address": "Address",
    "doctor_id": "DoctorID",
    "doctor_name": "DoctorName",
    "location_id": "LocationID",
    "location_name": "LocationName",
}

LINE_ITEMS_KEY = "ListOrder"

LINE_ITEM_FIELDS = {
    "element_id": "ElementID",
    "quantity": "Quantity",
    "volume": "Volume",
}


# --- Helpers -----------------------------------------------------------------

def _folded(raw: dict) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise TypeError(f"Expected a JSON object, got {type(raw).__name__}")
    return {str(k).lower(): v for k, v in raw.items()}


def _get(folded: dict[str, Any], wire_name: str, default: Any = None) -> Any:
    value = folded.get(wire_name.lower(), default)
    return default if value is None else value


def _text(value: Any) -> str | None:
    return None if value is None else str(value)


# --- Inventory ---------------------------------------------------------------

def inventory_to_raw(record: InventoryRecord) -> dict:
    return {wire: getattr(record, attr) for attr, wire in INVENTORY_FIELDS.items()}


def inventory_from_raw(raw: dict) -> InventoryRecord:
    f = _folded(raw)
    return InventoryRecord(
        abo=str(_get(f, "ABO", "")),
        rh=str(_get(f, "Rh", "")),
        element_id=str(_get(f, "ElementID", "")),
        element_name=str(_get(f, "ElementName", "")),
        volume=int(_get(f, "Volume", 0)),
        quantity=int(_get(f, "Quantity", 0)),
        id=str(_get(f, "Id")) if _get(f, "Id") else new_id(),
    )


# --- Orders ------------------------------------------------------------------

def line_item_to_raw(item: OrderLineItem) -> dict:
    return {wire: getattr(item, attr) for attr, wire in LINE_ITEM_FIELDS.items()}


def line_item_from_raw(raw: dict) -> OrderLineItem:
    f = _folded(raw)
    return OrderLineItem(
        element_id=_text(_get(f, "ElementID")),
        quantity=_text(_get(f, "Quantity")),
        volume=int(_get(f, "Volume", 0)),
    )


def order_to_raw(order: PatientOrder) -> dict:
    raw: dict[str, Any] = {wire: getattr(order, attr) for attr, wire in ORDER_FIELDS.items()}
    raw[LINE_ITEMS_KEY] = [line_item_to_raw(item) for item in order.items]
    return raw


def order_from_raw(raw: dict) -> PatientOrder:
    f = _folded(raw)
    values = {
        attr: _text(_get(f, wire))
        for attr, wire in ORDER_FIELDS.items()
        if attr != "id"
    }
    items = [line_item_from_raw(i) for i in _get(f, LINE_ITEMS_KEY, [])]
    order_id = _get(f, "Id")
    return PatientOrder(
        **values,
        items=items,
        id=str(order_id) if order_id else new_id(),
    )


# --- Document ----------------------------------------------------------------

def document_to_raw(document: Document) -> dict:
    return {
        INVENTORY_KEY: [inventory_to_raw(r) for r in document.inventory],
        ORDERS_KEY: [order_to_raw(o) for o in document.orders],
    }


def document_from_raw(raw: dict) -> Document:
    """Decode a stored document; absent sections become empty lists."""
    f = _folded(raw)
    return Document(
        inventory=[inventory_from_raw(r) for r in _get(f, INVENTORY_KEY, [])],
        orders=[order_from_raw(o) for o in _get(f, ORDERS_KEY, [])],
    )
