"""
Cart Notifications

Outbound signals emitted by the cart store after a mutation is published:
- refresh: any snapshot read earlier is stale
- item_added / item_removed / cart_empty / cart_cleared: toast messages
- open_cart: the cart view should be shown
- checkout_completed: the confirmation step may run

Subscribers are fire-and-forget. A failing subscriber is logged and
skipped; an async subscriber is scheduled on the running event loop.
"""
import asyncio
import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Set

from storefront.logging import get_logger

logger = get_logger(__name__)


class CartEvent(str, Enum):
    """Signals sent to the presentation layer."""
    REFRESH = "refresh"
    ITEM_ADDED = "item_added"
    ITEM_REMOVED = "item_removed"
    CART_EMPTY = "cart_empty"
    CART_CLEARED = "cart_cleared"
    OPEN_CART = "open_cart"
    CHECKOUT_COMPLETED = "checkout_completed"


@dataclass(frozen=True)
class CartNotification:
    """A single outbound signal."""
    event: CartEvent
    message: str = ""
    item_id: Optional[str] = None
    payload: Dict[str, Any] = field(default_factory=dict)


Subscriber = Callable[[CartNotification], Any]


class CartEventBus:
    """
    Dispatches cart notifications to subscribers.

    Usage:
        bus = CartEventBus()
        bus.subscribe(CartEvent.ITEM_ADDED, lambda n: toast(n.message))
        bus.subscribe_all(view.on_cart_event)
    """

    def __init__(self):
        self._subscribers: Dict[Optional[CartEvent], List[Subscriber]] = {}
        self._pending: Set[asyncio.Task] = set()

    def subscribe(self, event: CartEvent, handler: Subscriber) -> Callable[[], None]:
        """
        Register a handler for one event.

        Returns:
            Callable that removes the subscription
        """
        self._subscribers.setdefault(event, []).append(handler)
        return lambda: self.unsubscribe(event, handler)

    def subscribe_all(self, handler: Subscriber) -> Callable[[], None]:
        """Register a handler for every event."""
        self._subscribers.setdefault(None, []).append(handler)
        return lambda: self.unsubscribe(None, handler)

    def unsubscribe(self, event: Optional[CartEvent], handler: Subscriber) -> None:
        handlers = self._subscribers.get(event, [])
        if handler in handlers:
            handlers.remove(handler)

    def clear(self) -> None:
        """Drop every subscription."""
        self._subscribers.clear()

    def emit(self, notification: CartNotification) -> None:
        """Deliver a notification to its subscribers, in subscription order."""
        handlers = list(self._subscribers.get(notification.event, []))
        handlers += self._subscribers.get(None, [])

        for handler in handlers:
            try:
                result = handler(notification)
            except Exception:
                logger.exception(f"Cart subscriber failed on {notification.event.value}")
                continue
            if inspect.isawaitable(result):
                self._schedule(result, notification)

    def emit_all(self, notifications: List[CartNotification]) -> None:
        for notification in notifications:
            self.emit(notification)

    def _schedule(self, awaitable, notification: CartNotification) -> None:
        """Run an async subscriber on the current loop without waiting for it."""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning(f"No running event loop for async subscriber on {notification.event.value}")
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            return

        task = loop.create_task(self._guard(awaitable, notification))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    @staticmethod
    async def _guard(awaitable, notification: CartNotification) -> None:
        try:
            await awaitable
        except Exception:
            logger.exception(f"Async cart subscriber failed on {notification.event.value}")


__all__ = [
    "CartEvent",
    "CartNotification",
    "CartEventBus",
    "Subscriber",
]
