"""Cart package: models, storage, store and summary view."""
from .models import LineItem, ProductSelection, CartErrorKind, CartResult
from .storage import KeyValueStore, RedisKeyValueStore, MemoryKeyValueStore
from .service import CartStore, init_cart_store, get_cart_store, reset_cart_store
from .summary import CartSummary, CartRow, CartSummaryView, summarize, line_total

__all__ = [
    "LineItem",
    "ProductSelection",
    "CartErrorKind",
    "CartResult",
    "KeyValueStore",
    "RedisKeyValueStore",
    "MemoryKeyValueStore",
    "CartStore",
    "init_cart_store",
    "get_cart_store",
    "reset_cart_store",
    "CartSummary",
    "CartRow",
    "CartSummaryView",
    "summarize",
    "line_total",
]
