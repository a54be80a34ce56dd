"""Delivery cart: ordered lines keyed by listing identity."""
import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from thriftcart.catalog.models import DeliveryListing, ListingRecord
from thriftcart.errors import CartError

logger = logging.getLogger(__name__)


class CartLine(BaseModel):
    record: DeliveryListing
    quantity: int = Field(1, ge=1)

    @property
    def subtotal(self) -> float:
        return self.record.price * self.quantity


class OrderSummary(BaseModel):
    lines: List[CartLine]
    item_count: int
    total: float


class Cart:
    def __init__(self):
        self.lines: List[CartLine] = []

    def _find(self, identity: str) -> Optional[CartLine]:
        return next((line for line in self.lines if line.record.identity == identity), None)

    def add(self, record: ListingRecord) -> CartLine:
        """Add one unit; an existing line for the same identity is incremented."""
        if not isinstance(record, DeliveryListing):
            raise CartError(f"Only delivery listings can be added to the cart, got {record.domain}")
        line = self._find(record.identity)
        if line is not None:
            line.quantity += 1
            return line
        line = CartLine(record=record, quantity=1)
        self.lines.append(line)
        return line

    def remove(self, identity: str) -> None:
        before = len(self.lines)
        self.lines = [line for line in self.lines if line.record.identity != identity]
        if len(self.lines) == before:
            raise CartError(f"No cart line for {identity}")

    def update_quantity(self, identity: str, quantity: int) -> bool:
        """Set a line's quantity. Returns False (line unchanged) when ``quantity`` < 1."""
        line = self._find(identity)
        if line is None:
            raise CartError(f"No cart line for {identity}")
        if quantity < 1:
            return False
        line.quantity = quantity
        return True

    @property
    def total(self) -> float:
        return sum(line.subtotal for line in self.lines)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    def summary(self) -> OrderSummary:
        return OrderSummary(
            lines=[line.model_copy() for line in self.lines],
            item_count=self.item_count,
            total=self.total,
        )

    def clear(self) -> None:
        self.lines = []

    def checkout(self) -> OrderSummary:
        if not self.lines:
            raise CartError("Cart is empty")
        order = self.summary()
        logger.info("Order placed: %d items, total %.2f", order.item_count, order.total)
        self.clear()
        return order
