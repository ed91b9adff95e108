"""Cart models with Decimal-based pricing."""
import json
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Iterable, List, Optional, Tuple, Union

from gomarket.errors import CartNotReadyError, ItemNotFoundError
from gomarket.models import SnapshotAdapter
from gomarket.services.money import to_decimal, to_float, multiply


def _validate_price(value) -> Decimal:
    """Reject prices the stored snapshot could not be reloaded with."""
    if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
        raise ValueError("price must be a non-negative number")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
    except InvalidOperation:
        raise ValueError("price must be a non-negative number") from None
    if not price.is_finite() or price < 0:
        raise ValueError("price must be a non-negative number")
    return price


@dataclass
class ProductSelection:
    """A product the user picked, before quantity accounting."""
    id: str
    title: str
    image_url: str
    price: Decimal

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("id must be a non-empty string")
        self.price = _validate_price(self.price)


@dataclass
class LineItem:
    """Single product entry in the cart."""
    id: str
    title: str
    image_url: str
    price: Decimal
    quantity: int = 1

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("id must be a non-empty string")
        self.price = _validate_price(self.price)
        if not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("quantity must be a positive integer")

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this product."""
        return multiply(self.price, self.quantity)

    def copy(self) -> "LineItem":
        return replace(self)

    def to_dict(self) -> dict:
        """Convert to the snapshot wire format."""
        return {
            "id": self.id,
            "title": self.title,
            "image_url": self.image_url,
            "price": to_float(self.price),
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Create from a wire dictionary (accepts "imageUrl" as well)."""
        return cls(
            id=data["id"],
            title=data["title"],
            image_url=data.get("image_url", data.get("imageUrl", "")),
            price=data["price"],
            quantity=int(data["quantity"]),
        )

    @classmethod
    def from_selection(cls, selection: ProductSelection) -> "LineItem":
        return cls(
            id=selection.id,
            title=selection.title,
            image_url=selection.image_url,
            price=selection.price,
            quantity=1,
        )


def encode_snapshot(items: Iterable[LineItem]) -> bytes:
    """Serialize the whole cart for storage."""
    return json.dumps([item.to_dict() for item in items], ensure_ascii=False).encode("utf-8")


def decode_snapshot(data: Union[bytes, str]) -> List[LineItem]:
    """
    Parse a stored snapshot.

    Raises:
        ValueError: If the payload is not a valid list of line items
            or repeats a product id (pydantic's ValidationError is a ValueError)
    """
    records = SnapshotAdapter.validate_json(data)
    items: List[LineItem] = []
    seen = set()
    for record in records:
        if record.id in seen:
            raise ValueError(f"duplicate line item id in snapshot: {record.id}")
        seen.add(record.id)
        items.append(LineItem(
            id=record.id,
            title=record.title,
            image_url=record.image_url,
            price=to_decimal(record.price),
            quantity=record.quantity,
        ))
    return items


class CartErrorKind(str, Enum):
    """Why a cart mutation was rejected."""
    ITEM_NOT_FOUND = "item_not_found"
    NOT_READY = "not_ready"


@dataclass(frozen=True)
class CartResult:
    """
    Outcome of a cart mutation.

    `item` is the line item after the mutation, or None when it was removed
    (or the mutation failed). `products` is the cart snapshot after the call.
    """
    ok: bool
    error: Optional[CartErrorKind] = None
    product_id: Optional[str] = None
    item: Optional[LineItem] = None
    removed: bool = False
    products: Tuple[LineItem, ...] = ()

    def raise_for_error(self) -> "CartResult":
        """Raise the matching CartError if the mutation failed."""
        if self.error is CartErrorKind.ITEM_NOT_FOUND:
            raise ItemNotFoundError(self.product_id)
        if self.error is CartErrorKind.NOT_READY:
            raise CartNotReadyError()
        return self
