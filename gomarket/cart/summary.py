"""Cart totals and display rows derived from the store's line items."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, Tuple

from gomarket.services.money import add, format_value
from .models import LineItem
from .service import CartStore

Formatter = Callable[[Decimal], str]


@dataclass(frozen=True)
class CartSummary:
    """Aggregate totals; recomputed, never stored."""
    total_quantity: int = 0
    total_amount: Decimal = Decimal("0")


@dataclass(frozen=True)
class CartRow:
    """One rendered line of the cart list."""
    id: str
    title: str
    image_url: str
    unit_price: str
    quantity_label: str
    line_total: str


def line_total(item: LineItem) -> Decimal:
    """Price for all units of one line."""
    return item.line_total


def summarize(products: Iterable[LineItem]) -> CartSummary:
    """Fold line items into total quantity and subtotal."""
    total_quantity = 0
    total_amount = Decimal("0")
    for item in products:
        total_quantity += item.quantity
        total_amount = add(total_amount, line_total(item))
    return CartSummary(total_quantity=total_quantity, total_amount=total_amount)


class CartSummaryView:
    """
    Read model for the cart screen.

    Subscribes to a CartStore and recomputes totals and rows on every
    change. Never mutates the store.
    """

    def __init__(self, store: CartStore, formatter: Formatter = format_value):
        self._formatter = formatter
        self._products: Tuple[LineItem, ...] = ()
        self._summary = CartSummary()
        self._refresh(store.products)
        self._unsubscribe = store.subscribe(self._refresh)

    def _refresh(self, products: Tuple[LineItem, ...]) -> None:
        self._products = products
        self._summary = summarize(products)

    @property
    def summary(self) -> CartSummary:
        return self._summary

    @property
    def total_quantity(self) -> int:
        return self._summary.total_quantity

    @property
    def total_amount(self) -> Decimal:
        return self._summary.total_amount

    @property
    def total_label(self) -> str:
        return f"{self.total_quantity} itens"

    @property
    def subtotal_label(self) -> str:
        return self._formatter(self.total_amount)

    @property
    def rows(self) -> Tuple[CartRow, ...]:
        return tuple(
            CartRow(
                id=item.id,
                title=item.title,
                image_url=item.image_url,
                unit_price=self._formatter(item.price),
                quantity_label=f"{item.quantity}x",
                line_total=self._formatter(line_total(item)),
            )
            for item in self._products
        )

    def close(self) -> None:
        """Stop following the store."""
        self._unsubscribe()
