"""
Cart Errors

Centralized error messages and the exception types raised by the cart.
"""
from typing import Optional

# Cart errors
ERROR_ITEM_NOT_FOUND = "Product not found in cart"
ERROR_CART_NOT_READY = "Cart has not finished loading"
ERROR_CART_STORE_NOT_INITIALIZED = "Cart store accessed before init_cart_store()"

# Storage errors
ERROR_SNAPSHOT_MALFORMED = "Stored cart snapshot is malformed"
ERROR_STORAGE_READ = "Cart storage read failed"
ERROR_STORAGE_WRITE = "Cart storage write failed"


class CartError(Exception):
    """Base class for cart errors."""


class ItemNotFoundError(CartError):
    """Increment/decrement targeted a product that is not in the cart."""

    def __init__(self, product_id: Optional[str] = None):
        self.product_id = product_id
        super().__init__(f"{ERROR_ITEM_NOT_FOUND}: {product_id}")


class CartNotReadyError(CartError):
    """Mutation issued before the stored cart was loaded."""

    def __init__(self, message: str = ERROR_CART_NOT_READY):
        super().__init__(message)


class CartStoreNotInitialized(CartError):
    """Registry lookup before a cart store was constructed."""

    def __init__(self, message: str = ERROR_CART_STORE_NOT_INITIALIZED):
        super().__init__(message)


class PersistenceError(CartError):
    """Key-value store failure."""


class PersistenceReadFailure(PersistenceError):
    pass


class PersistenceWriteFailure(PersistenceError):
    pass
