"""Cart store: in-memory line items kept in sync with a key-value snapshot."""
import asyncio
import contextlib
from typing import Callable, List, Optional, Tuple

from gomarket.errors import (
    ERROR_CART_NOT_READY,
    ERROR_ITEM_NOT_FOUND,
    ERROR_SNAPSHOT_MALFORMED,
    ERROR_STORAGE_READ,
    ERROR_STORAGE_WRITE,
    CartStoreNotInitialized,
)
from gomarket.logging import get_logger, loggable
from .models import (
    CartErrorKind,
    CartResult,
    LineItem,
    ProductSelection,
    decode_snapshot,
    encode_snapshot,
)
from .storage import KeyValueStore, RedisKeyValueStore, RedisKeys

logger = get_logger(__name__)

Listener = Callable[[Tuple[LineItem, ...]], None]


class CartStore:
    """
    Owns the cart line items and persists them.

    Features:
    - Merge-on-add: adding a product already in the cart increments it
    - Decrementing the last unit removes the product
    - Every mutation enqueues the post-mutation snapshot; a single writer
      drains the queue in order, so storage never goes back to an older state
    - Listeners are notified synchronously after every change

    Usage:
        store = CartStore(RedisKeyValueStore())
        await store.load()
        store.add_to_cart(selection)
        store.increment(product_id).raise_for_error()
        await store.close()
    """

    def __init__(self, storage: KeyValueStore, key: str = RedisKeys.CART_SNAPSHOT):
        self._storage = storage
        self._key = key
        self._items: List[LineItem] = []
        self._listeners: List[Listener] = []
        self._ready = False
        self._version = 0
        self._queue: Optional[asyncio.Queue] = None
        self._writer: Optional[asyncio.Task] = None
        self._loading: Optional[asyncio.Task] = None

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def version(self) -> int:
        """Bumped on load and on every successful mutation."""
        return self._version

    @property
    def key(self) -> str:
        return self._key

    @property
    def products(self) -> Tuple[LineItem, ...]:
        """Read-only snapshot of the line items."""
        return tuple(item.copy() for item in self._items)

    def get(self, product_id: str) -> Optional[LineItem]:
        index = self._index_of(product_id)
        return self._items[index].copy() if index is not None else None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def load(self) -> Tuple[LineItem, ...]:
        """
        Restore the cart from storage and start the persistence writer.

        A missing snapshot gives an empty cart. An unreadable or malformed
        snapshot is logged and also gives an empty cart, so a storage outage
        never blocks the cart. Concurrent callers share one load; calling
        load() again once ready is a no-op.
        """
        if self._ready:
            return self.products

        if self._loading is None:
            self._loading = asyncio.create_task(self._load())
        await self._loading
        return self.products

    async def _load(self) -> None:
        self._items = await self._read_snapshot()
        self._queue = asyncio.Queue()
        self._writer = asyncio.create_task(self._drain_writes(self._queue))
        self._ready = True
        self._version += 1

        logger.info(f"Cart loaded with {len(self._items)} products")
        self._notify()

    async def flush(self) -> None:
        """Wait until every enqueued snapshot has been written (or failed)."""
        if self._queue is not None:
            await self._queue.join()

    async def close(self) -> None:
        """Flush pending writes and stop the writer."""
        await self.flush()
        if self._writer is not None:
            self._writer.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._writer
        self._writer = None
        self._queue = None
        self._loading = None
        self._ready = False

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_to_cart(self, selection: ProductSelection) -> CartResult:
        """Add one unit of a product; a product already in the cart is incremented."""
        if not self._ready:
            return self._reject(CartErrorKind.NOT_READY, selection.id)

        if self._index_of(selection.id) is not None:
            return self.increment(selection.id)

        item = LineItem.from_selection(selection)
        self._items.append(item)
        logger.info(
            f"Cart: added {loggable(item.id)} "
            f"({loggable(item.title)})"
        )
        return self._commit(item)

    def increment(self, product_id: str) -> CartResult:
        """Increase the quantity of a product already in the cart by one."""
        if not self._ready:
            return self._reject(CartErrorKind.NOT_READY, product_id)

        index = self._index_of(product_id)
        if index is None:
            return self._reject(CartErrorKind.ITEM_NOT_FOUND, product_id)

        # Updated items move to the end, matching how the list is rendered
        item = self._items.pop(index)
        item.quantity += 1
        self._items.append(item)
        return self._commit(item)

    def decrement(self, product_id: str) -> CartResult:
        """Decrease the quantity by one; the last unit removes the product."""
        if not self._ready:
            return self._reject(CartErrorKind.NOT_READY, product_id)

        index = self._index_of(product_id)
        if index is None:
            return self._reject(CartErrorKind.ITEM_NOT_FOUND, product_id)

        item = self._items.pop(index)
        if item.quantity <= 1:
            logger.info(f"Cart: removed {loggable(product_id)}")
            return self._commit(None, product_id=product_id)

        item.quantity -= 1
        self._items.append(item)
        return self._commit(item)

    # ------------------------------------------------------------------
    # Observers
    # ------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _index_of(self, product_id: str) -> Optional[int]:
        return next(
            (i for i, item in enumerate(self._items) if item.id == product_id),
            None
        )

    def _reject(self, kind: CartErrorKind, product_id: str) -> CartResult:
        if kind is CartErrorKind.ITEM_NOT_FOUND:
            logger.warning(f"{ERROR_ITEM_NOT_FOUND}: {loggable(product_id)}")
        else:
            logger.warning(f"{ERROR_CART_NOT_READY}: {loggable(product_id)}")
        return CartResult(
            ok=False,
            error=kind,
            product_id=product_id,
            products=self.products,
        )

    def _commit(self, item: Optional[LineItem], product_id: Optional[str] = None) -> CartResult:
        self._version += 1
        # Serialize now: the write must carry this mutation's state
        self._queue.put_nowait(encode_snapshot(self._items))
        self._notify()
        return CartResult(
            ok=True,
            product_id=item.id if item is not None else product_id,
            item=item.copy() if item is not None else None,
            removed=item is None,
            products=self.products,
        )

    def _notify(self) -> None:
        snapshot = self.products
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Cart listener failed")

    async def _read_snapshot(self) -> List[LineItem]:
        try:
            data = await self._storage.get(self._key)
        except Exception as e:
            logger.error(f"{ERROR_STORAGE_READ}, starting with an empty cart: {e}")
            return []

        if not data:
            return []

        try:
            return decode_snapshot(data)
        except ValueError as e:
            logger.warning(f"{ERROR_SNAPSHOT_MALFORMED}, starting with an empty cart: {e}")
            return []

    async def _drain_writes(self, queue: asyncio.Queue) -> None:
        while True:
            payload = await queue.get()
            try:
                await self._storage.set(self._key, payload)
            except Exception as e:
                # Not retried; the in-memory cart is still correct
                logger.error(f"{ERROR_STORAGE_WRITE}: {e}")
            finally:
                queue.task_done()


# Process-wide instance for hosts that look the store up instead of passing it
_cart_store: Optional[CartStore] = None


def init_cart_store(
    storage: Optional[KeyValueStore] = None,
    key: str = RedisKeys.CART_SNAPSHOT,
) -> CartStore:
    """Construct the process-wide cart store (Redis-backed by default)."""
    global _cart_store
    _cart_store = CartStore(storage if storage is not None else RedisKeyValueStore(), key=key)
    return _cart_store


def get_cart_store() -> CartStore:
    """Get the process-wide cart store."""
    if _cart_store is None:
        raise CartStoreNotInitialized()
    return _cart_store


def reset_cart_store() -> None:
    """Forget the process-wide cart store."""
    global _cart_store
    _cart_store = None
