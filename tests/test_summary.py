"""
Tests for cart totals and the summary view
"""

import pytest
from decimal import Decimal

from gomarket.cart import CartSummaryView, LineItem, line_total, summarize


def plain(amount) -> str:
    return f"${amount:.2f}"


class TestSummarize:
    """Tests for the totals fold."""

    def test_empty(self):
        """Test an empty cart."""
        summary = summarize([])

        assert summary.total_quantity == 0
        assert summary.total_amount == 0

    def test_totals(self):
        """Test quantity and amount sums."""
        items = [
            LineItem(id="a", title="A", image_url="u", price=10, quantity=2),
            LineItem(id="b", title="B", image_url="u", price=5, quantity=3),
        ]

        summary = summarize(items)

        assert summary.total_amount == 35
        assert summary.total_quantity == 5

    def test_decimal_prices_stay_exact(self):
        """Test float prices do not drift."""
        items = [LineItem(id="a", title="A", image_url="u", price=0.1, quantity=3)]

        assert summarize(items).total_amount == Decimal("0.3")

    def test_line_total(self):
        """Test unreduced per-row amount."""
        item = LineItem(id="a", title="A", image_url="u", price=9.99, quantity=2)

        assert line_total(item) == Decimal("19.98")


class TestCartSummaryView:
    """Tests for the view bound to a store."""

    @pytest.mark.asyncio
    async def test_recomputes_on_change(self, store, keyboard, mouse):
        """Test totals follow store mutations."""
        view = CartSummaryView(store, formatter=plain)
        assert view.total_quantity == 0

        await store.load()
        store.add_to_cart(keyboard)
        store.add_to_cart(keyboard)
        store.add_to_cart(mouse)

        assert view.total_quantity == 3
        assert view.total_amount == Decimal("25")
        assert view.summary.total_amount == Decimal("25")

        store.decrement("p1")

        assert view.total_quantity == 2
        assert view.total_amount == Decimal("15")
        await store.close()

    @pytest.mark.asyncio
    async def test_labels_and_rows(self, store, keyboard, mouse):
        """Test display strings for the cart screen."""
        view = CartSummaryView(store, formatter=plain)
        await store.load()
        store.add_to_cart(keyboard)
        store.add_to_cart(mouse)
        store.increment("p2")

        assert view.total_label == "3 itens"
        assert view.subtotal_label == "$20.00"

        rows = {row.id: row for row in view.rows}
        assert rows["p2"].quantity_label == "2x"
        assert rows["p2"].unit_price == "$5.00"
        assert rows["p2"].line_total == "$10.00"
        assert rows["p1"].title == "Mechanical Keyboard"
        assert rows["p1"].image_url == "https://cdn.example.com/keyboard.png"
        await store.close()

    @pytest.mark.asyncio
    async def test_close_stops_following(self, store, keyboard):
        """Test a closed view keeps its last totals."""
        view = CartSummaryView(store, formatter=plain)
        await store.load()
        store.add_to_cart(keyboard)

        view.close()
        store.add_to_cart(keyboard)

        assert view.total_quantity == 1
        assert store.get("p1").quantity == 2
        await store.close()

    @pytest.mark.asyncio
    async def test_default_formatter(self, store, keyboard):
        """Test the view formats with format_value by default."""
        view = CartSummaryView(store)
        await store.load()
        store.add_to_cart(keyboard)

        assert "10" in view.subtotal_label
        await store.close()
