"""Cart package: models, totals, notifications, and the store facade."""
from .events import CartEvent, CartEventBus, CartNotification
from .models import Cart, CartTotals, LineItem
from .service import CartStore, create_cart_store
from .storage import InMemoryCartStorage
from .summary import build_cart_summary
from .totals import recalculate, refresh_totals

__all__ = [
    "Cart",
    "CartTotals",
    "LineItem",
    "CartEvent",
    "CartEventBus",
    "CartNotification",
    "CartStore",
    "create_cart_store",
    "InMemoryCartStorage",
    "build_cart_summary",
    "recalculate",
    "refresh_totals",
]
