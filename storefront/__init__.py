"""
Storefront Cart Engine

This package contains the cart aggregation engine used by the storefront UI:
- cart: cart store, totals recalculation, notifications
- models: Pydantic schemas for catalog input and cart summaries
- services: money and currency formatting helpers

Note: Imports are lazy so that importing a single helper module does not
pull in the whole cart stack.
"""

__all__ = [
    "CartStore",
    "create_cart_store",
]


def __getattr__(name):
    """Lazy attribute access."""
    if name == "CartStore":
        from storefront.cart import CartStore
        return CartStore
    elif name == "create_cart_store":
        from storefront.cart import create_cart_store
        return create_cart_store
    raise AttributeError(f"module 'storefront' has no attribute '{name}'")
