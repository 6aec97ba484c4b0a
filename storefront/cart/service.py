"""Cart store: owns the cart state and the operations that mutate it."""
import threading
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Callable, List, Optional, Union

from pydantic import ValidationError

from storefront.config import DEFAULT_CURRENCY
from storefront.errors import (
    ERROR_STORE_CLOSED,
    MSG_CART_CLEARED,
    MSG_CART_EMPTY,
    MSG_CHECKOUT_COMPLETED,
    MSG_ITEM_ADDED,
    MSG_ITEM_REMOVED,
    REASON_MALFORMED_STATE,
    REASON_MISSING_PRODUCT_ID,
    REASON_UNKNOWN_ITEM,
)
from storefront.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from storefront.models import CatalogProduct, CartSummaryResponse
from storefront.services.currency import PriceFormatter, normalize_currency
from storefront.services.money import parse_number, to_float
from .events import CartEvent, CartEventBus, CartNotification
from .models import Cart, LineItem
from .storage import InMemoryCartStorage
from .summary import build_cart_summary
from .totals import refresh_totals

logger = get_logger(__name__)

ProductInput = Union[CatalogProduct, Mapping, None]


class CartStore:
    """
    Owns one cart and keeps its totals consistent with its items.

    Every mutation computes the next item list, derives the totals and
    publishes both in one step; notifications go out only after that.
    Invalid input and unknown ids never raise: they leave the cart as it is.

    Usage:
        with CartStore() as store:
            store.events.subscribe(CartEvent.ITEM_ADDED, show_toast)
            store.add({"id": "A", "price": 10}, 2)
            store.get().totals.total_amount  # Decimal("20")
    """

    def __init__(
        self,
        storage: Optional[InMemoryCartStorage] = None,
        events: Optional[CartEventBus] = None,
        default_currency: str = DEFAULT_CURRENCY,
    ):
        self._storage = storage if storage is not None else InMemoryCartStorage()
        self.events = events if events is not None else CartEventBus()
        self.default_currency = normalize_currency(default_currency, "USD")
        self._lock = threading.RLock()
        self._closed = False

    # ==================== LIFECYCLE ====================

    def close(self) -> None:
        """Drop the cart state and all subscriptions."""
        with self._lock:
            if self._closed:
                return
            self._storage.delete()
            self.events.clear()
            self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "CartStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _ensure_open(self) -> None:
        if self._closed:
            raise RuntimeError(ERROR_STORE_CLOSED)

    # ==================== STATE ====================

    def _publish(self, cart: Cart) -> Cart:
        """Recalculate totals and replace the stored state in one assignment."""
        refresh_totals(cart, self.default_currency)
        self._storage.save(cart.to_dict())
        return cart

    def _read(self) -> Cart:
        """
        Load the current cart, creating or repairing it as needed.

        Whatever is stored is never trusted: a missing cart is initialized,
        a malformed one is replaced by an empty cart, and totals are always
        recomputed from the items.
        """
        raw = self._storage.load()
        if raw is None:
            return self._publish(Cart.empty(self.default_currency))

        try:
            cart = Cart.from_dict(raw, self.default_currency)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"{REASON_MALFORMED_STATE}, resetting to empty: {e}")
            return self._publish(Cart.empty(self.default_currency))

        refresh_totals(cart, self.default_currency)
        normalized = cart.to_dict()
        if normalized != raw:
            self._storage.save(normalized)
        return cart

    def _dispatch(self, notifications: List[CartNotification]) -> None:
        # Called outside the lock so subscribers can read or mutate the store
        self.events.emit_all(notifications)

    # ==================== READS ====================

    def get(self) -> Cart:
        """Current items and totals (a private copy)."""
        with self._lock:
            self._ensure_open()
            return self._read()

    def find_item(self, item_id: str) -> Optional[LineItem]:
        """Copy of the line with the given id, or None."""
        return self.get().find(item_id)

    def count(self) -> int:
        """Total units in the cart (badge counter)."""
        return self.get().totals.total_quantity

    def summary(self, formatter: Optional[PriceFormatter] = None) -> CartSummaryResponse:
        """Current cart with display texts from the given formatter."""
        return build_cart_summary(self.get(), formatter)

    # ==================== MUTATIONS ====================

    @staticmethod
    def _coerce_product(product: ProductInput) -> Optional[CatalogProduct]:
        if isinstance(product, CatalogProduct):
            return product
        if isinstance(product, Mapping):
            try:
                return CatalogProduct.model_validate(dict(product))
            except ValidationError as e:
                logger.debug(f"Unusable catalog product: {e}")
        return None

    @staticmethod
    def _resolve_quantity(quantity: Any) -> int:
        """Requested quantity, or 1 when it is missing, non-numeric or not positive."""
        parsed = parse_number(quantity)
        if parsed is None or parsed <= 0:
            return 1
        return max(1, int(parsed))

    def add(self, product: ProductInput, quantity: Any = 1) -> Cart:
        """
        Add a product to the cart, merging with an existing line of the same id.

        The first usable price of a line is kept on later adds; a line with
        no usable price adopts the incoming one. A missing currency on the
        line is filled in from the product.

        Args:
            product: CatalogProduct or a mapping with the same fields
            quantity: Requested units; anything but a positive number means 1

        Returns:
            The cart after the operation
        """
        prod = self._coerce_product(product)
        if prod is None or not prod.is_usable:
            logger.debug(f"Add rejected: {REASON_MISSING_PRODUCT_ID}")
            return self.get()

        qty = self._resolve_quantity(quantity)

        with self._lock:
            self._ensure_open()
            cart = self._read()
            existing = cart.find(prod.id)

            if existing:
                existing.quantity += qty
                if existing.unit_price <= 0:
                    existing.unit_price = prod.price
                if not existing.currency:
                    existing.currency = prod.currency or self.default_currency
            else:
                cart.items.append(
                    LineItem(
                        id=prod.id,
                        name=prod.name,
                        subtitle=prod.subtitle,
                        image_url=prod.image_url,
                        quantity=qty,
                        unit_price=prod.price,
                        currency=prod.currency or self.default_currency,
                    )
                )

            self._publish(cart)

        logger.debug(
            f"Added {qty} x {sanitize_id_for_logging(prod.id)} "
            f"({sanitize_string_for_logging(prod.name)})"
        )
        self._dispatch([
            CartNotification(CartEvent.REFRESH),
            CartNotification(CartEvent.ITEM_ADDED, MSG_ITEM_ADDED, prod.id, {"quantity": qty}),
            CartNotification(CartEvent.OPEN_CART),
        ])
        return cart

    def update_quantity(self, item_id: str, delta: Any) -> Cart:
        """
        Change a line's quantity by delta, never going below 1.

        This never removes a line; use remove() for that.
        """
        step = int(parse_number(delta, Decimal("0")))

        with self._lock:
            self._ensure_open()
            cart = self._read()
            item = cart.find(item_id)
            if item is None:
                logger.debug(f"Quantity update skipped: {REASON_UNKNOWN_ITEM} {sanitize_id_for_logging(item_id)}")
                return cart

            item.quantity = max(1, item.quantity + step)
            self._publish(cart)

        self._dispatch([
            CartNotification(CartEvent.REFRESH, item_id=item_id, payload={"quantity": item.quantity}),
        ])
        return cart

    def remove(self, item_id: str) -> Cart:
        """Remove a line; removing an id that is not in the cart does nothing."""
        with self._lock:
            self._ensure_open()
            cart = self._read()
            if cart.find(item_id) is None:
                logger.debug(f"Remove skipped: {REASON_UNKNOWN_ITEM} {sanitize_id_for_logging(item_id)}")
                return cart

            cart.items = [item for item in cart.items if item.id != item_id]
            self._publish(cart)

        if cart.is_empty:
            toast = CartNotification(CartEvent.CART_EMPTY, MSG_CART_EMPTY, item_id)
        else:
            toast = CartNotification(CartEvent.ITEM_REMOVED, MSG_ITEM_REMOVED, item_id)
        self._dispatch([CartNotification(CartEvent.REFRESH), toast])
        return cart

    def clear(self) -> Cart:
        """Replace the cart with an empty one."""
        with self._lock:
            self._ensure_open()
            cart = self._publish(Cart.empty(self.default_currency))

        self._dispatch([
            CartNotification(CartEvent.REFRESH),
            CartNotification(CartEvent.CART_CLEARED, MSG_CART_CLEARED),
        ])
        return cart

    def checkout(self, confirm: Optional[Callable[[Cart], Any]] = None) -> Cart:
        """
        Complete the order: reset the cart, then run the confirmation step.

        The cart is already empty when subscribers and confirm() run.

        Args:
            confirm: Confirmation collaborator, called with the completed cart

        Returns:
            The cart as it was when checkout started
        """
        with self._lock:
            self._ensure_open()
            completed = self._read()
            self._publish(Cart.empty(self.default_currency))

        logger.info(
            f"Checkout completed: {completed.totals.total_quantity} units, "
            f"{completed.totals.total_amount} {completed.totals.currency}"
        )
        self._dispatch([
            CartNotification(CartEvent.REFRESH),
            CartNotification(
                CartEvent.CHECKOUT_COMPLETED,
                MSG_CHECKOUT_COMPLETED,
                payload={
                    "total_quantity": completed.totals.total_quantity,
                    "total_amount": to_float(completed.totals.total_amount),
                    "currency": completed.totals.currency,
                },
            ),
        ])

        if confirm is not None:
            try:
                confirm(completed)
            except Exception:
                logger.exception("Checkout confirmation failed")
        return completed


def create_cart_store(
    storage: Optional[InMemoryCartStorage] = None,
    events: Optional[CartEventBus] = None,
) -> CartStore:
    """Build a cart store using the configured default currency."""
    return CartStore(storage=storage, events=events, default_currency=DEFAULT_CURRENCY)
