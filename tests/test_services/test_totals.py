"""Tests for order totals."""

from decimal import Decimal

from hotel_orders.models.order import OrderItem
from hotel_orders.services.totals import OrderTotalsCalculator


def _item(item_id: str, price: str, quantity: int) -> OrderItem:
    unit_price = Decimal(price)
    return OrderItem(
        id=item_id,
        name=item_id,
        unit_price=unit_price,
        quantity=quantity,
        line_total=unit_price * quantity,
    )


def test_totals_sum_line_totals() -> None:
    """Test that the subtotal is the exact sum of line totals."""
    totals = OrderTotalsCalculator().totals([_item("a", "10.00", 2), _item("b", "0.10", 3)])

    assert totals.subtotal == Decimal("20.30")
    assert totals.total_amount == Decimal("20.30")


def test_totals_of_no_items() -> None:
    """Test that an empty list totals to zero."""
    totals = OrderTotalsCalculator().totals([])

    assert totals.subtotal == Decimal("0")
    assert totals.total_amount == Decimal("0")


def test_surcharges_are_added_to_total() -> None:
    """Test that a surcharge hook raises the total but not the subtotal."""

    class ServiceChargeCalculator(OrderTotalsCalculator):
        def surcharges(self, subtotal: Decimal) -> Decimal:
            return Decimal("1.50")

    totals = ServiceChargeCalculator().totals([_item("a", "4.00", 1)])

    assert totals.subtotal == Decimal("4.00")
    assert totals.total_amount == Decimal("5.50")
