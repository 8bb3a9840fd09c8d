#!/usr/bin/env python3
"""
Core Data Models for Receipt Ledger

Structured receipt records as produced by the receipt parser. Field names in
the dict form match the parser's camelCase JSON.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from .currency import to_decimal


class ReceiptValidationError(ValueError):
    """Raised when a parsed receipt document is missing required fields."""

    pass


@dataclass(frozen=True)
class LineItem:
    """
    Individual line item from a receipt, already categorized by the parser.

    ``line_item_total_amount`` is the receipt-convention amount (positive = spent).
    """

    product_name: str
    line_item_total_amount: Decimal
    category: str
    quantity: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItem":
        """Create LineItem from the parser's JSON form."""
        if not isinstance(data, dict):
            raise ReceiptValidationError(f"Line item must be an object, got {data!r}")
        try:
            return cls(
                product_name=data.get("productName", ""),
                line_item_total_amount=to_decimal(data["lineItemTotalAmount"]),
                category=data["category"],
                quantity=data.get("quantity"),
            )
        except (KeyError, ValueError) as e:
            raise ReceiptValidationError(f"Invalid line item {data!r}: {e}") from e

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "productName": self.product_name,
            "lineItemTotalAmount": float(self.line_item_total_amount),
            "category": self.category,
        }
        if self.quantity is not None:
            result["quantity"] = self.quantity
        return result


@dataclass(frozen=True)
class ParsedReceipt:
    """
    Receipt record produced by the receipt parser.

    ``total_amount`` is signed (positive means money spent) and already
    includes ``total_taxes``. ``line_items`` is None when the parser did not
    itemize the receipt.
    """

    merchant: str
    transaction_date: str
    memo: str
    total_amount: Decimal
    category: str
    total_taxes: Decimal | None = None
    line_items: list[LineItem] | None = field(default=None)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParsedReceipt":
        """
        Create ParsedReceipt from the parser's JSON form.

        Raises:
            ReceiptValidationError: If a required field is missing or malformed
        """
        if not isinstance(data, dict):
            raise ReceiptValidationError(f"Receipt must be an object, got {type(data).__name__}")

        missing = [
            key for key in ("merchant", "transactionDate", "totalAmount", "category") if key not in data
        ]
        if missing:
            raise ReceiptValidationError(f"Receipt is missing required fields: {', '.join(missing)}")

        line_items = None
        if data.get("lineItems") is not None:
            if not isinstance(data["lineItems"], list):
                raise ReceiptValidationError("Receipt lineItems must be a list")
            line_items = [LineItem.from_dict(item) for item in data["lineItems"]]

        try:
            total_amount = to_decimal(data["totalAmount"])
            total_taxes = to_decimal(data["totalTaxes"]) if data.get("totalTaxes") is not None else None
        except ValueError as e:
            raise ReceiptValidationError(str(e)) from e

        if total_taxes is not None and total_taxes < 0:
            raise ReceiptValidationError(f"Receipt taxes must be non-negative, got {total_taxes}")

        return cls(
            merchant=data["merchant"],
            transaction_date=data["transactionDate"],
            memo=data.get("memo") or "",
            total_amount=total_amount,
            category=data["category"],
            total_taxes=total_taxes,
            line_items=line_items,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "merchant": self.merchant,
            "transactionDate": self.transaction_date,
            "memo": self.memo,
            "totalAmount": float(self.total_amount),
            "category": self.category,
        }
        if self.total_taxes is not None:
            result["totalTaxes"] = float(self.total_taxes)
        if self.line_items is not None:
            result["lineItems"] = [item.to_dict() for item in self.line_items]
        return result

    @property
    def line_item_total(self) -> Decimal:
        """Sum of line item amounts (zero when not itemized)."""
        return sum((item.line_item_total_amount for item in self.line_items or []), Decimal("0"))
