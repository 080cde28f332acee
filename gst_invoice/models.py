"""Immutable invoice value objects and their loader from JSON-like mappings."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple, Union

from .formatting import to_decimal


class InvoiceDataError(ValueError):
    """Raised when an invoice mapping cannot be turned into an Invoice."""


@dataclass(frozen=True)
class Party:
    name: str = ""
    address: str = ""
    tax_id: str = ""


@dataclass(frozen=True)
class LineItem:
    description: str
    quantity: int
    rate: Decimal
    tax_rate: Decimal


@dataclass(frozen=True)
class Invoice:
    invoice_number: str
    invoice_date: Union[str, date, None]
    business: Party
    customer: Party
    items: Tuple[LineItem, ...] = field(default_factory=tuple)
    # Values stored by the order-entry side; recomputed before use.
    subtotal: Optional[Decimal] = None
    tax_amount: Optional[Decimal] = None
    total_amount: Optional[Decimal] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Invoice":
        """Build an Invoice from either the nested or the flat record shape.

        Nested: ``{"business": {"name", "address", "tax_id"}, ...}``.
        Flat: ``business_name``, ``business_address``, ``business_gst`` and the
        same ``customer_*`` keys, with items carrying ``gstRate``.
        """
        if not isinstance(data, Mapping):
            raise InvoiceDataError("invoice must be a JSON object")

        number = str(data.get("invoice_number") or "").strip()
        if not number:
            raise InvoiceDataError("invoice_number is required")

        raw_items = data.get("items", [])
        if raw_items is None:
            raw_items = []
        if not isinstance(raw_items, list):
            raise InvoiceDataError("items must be an array")

        items = []
        for index, raw_item in enumerate(raw_items, start=1):
            if not isinstance(raw_item, Mapping):
                raise InvoiceDataError(f"item {index} must be an object")
            items.append(_load_item(raw_item, index))

        return cls(
            invoice_number=number,
            invoice_date=data.get("invoice_date") or data.get("created_at"),
            business=_load_party(data, "business"),
            customer=_load_party(data, "customer"),
            items=tuple(items),
            subtotal=_optional_decimal(data.get("subtotal")),
            tax_amount=_optional_decimal(_first(data, "tax_amount", "gst_amount")),
            total_amount=_optional_decimal(data.get("total_amount")),
        )


def _first(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _optional_decimal(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return to_decimal(value)


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _load_party(data: Mapping[str, Any], role: str) -> Party:
    nested = data.get(role)
    if isinstance(nested, Mapping):
        return Party(
            name=_text(nested.get("name")),
            address=_text(nested.get("address")),
            tax_id=_text(_first(nested, "tax_id", "gst", "gstin")),
        )
    if nested is not None and not isinstance(nested, Mapping):
        raise InvoiceDataError(f"{role} must be an object")
    return Party(
        name=_text(data.get(f"{role}_name")),
        address=_text(data.get(f"{role}_address")),
        tax_id=_text(_first(data, f"{role}_tax_id", f"{role}_gst")),
    )


def _load_item(raw: Mapping[str, Any], index: int) -> LineItem:
    raw_quantity = to_decimal(raw.get("quantity"))
    if raw_quantity != raw_quantity.to_integral_value():
        raise InvoiceDataError(f"item {index} has a non-integer quantity")
    quantity = int(raw_quantity)
    rate = to_decimal(raw.get("rate"))
    if quantity < 0 or rate < 0:
        raise InvoiceDataError(f"item {index} has a negative quantity or rate")
    return LineItem(
        description=_text(raw.get("description")),
        quantity=quantity,
        rate=rate,
        tax_rate=to_decimal(_first(raw, "tax_rate", "gstRate", "gst_rate")),
    )
