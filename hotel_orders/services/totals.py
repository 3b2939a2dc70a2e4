"""Order Totals Calculator."""

from decimal import Decimal
from typing import Sequence

from pydantic import BaseModel, Field

from hotel_orders.models.order import OrderItem


class OrderTotals(BaseModel):
    """Monetary totals of an order."""

    subtotal: Decimal = Field(ge=0)
    total_amount: Decimal = Field(ge=0)


class OrderTotalsCalculator:
    """Sums line items; surcharges (tax, fees) plug in via ``surcharges``."""

    def totals(self, items: Sequence[OrderItem]) -> OrderTotals:
        subtotal = sum((item.line_total for item in items), Decimal("0"))
        return OrderTotals(subtotal=subtotal, total_amount=subtotal + self.surcharges(subtotal))

    def surcharges(self, subtotal: Decimal) -> Decimal:
        # No taxes or delivery fees are charged yet
        return Decimal("0")
