"""
Common Message Constants

Centralized notification texts and log reasons to avoid string duplication.
"""

# Notification texts (shown by the toast layer)
MSG_ITEM_ADDED = "Added to cart"
MSG_ITEM_REMOVED = "Item removed"
MSG_CART_EMPTY = "Cart is empty"
MSG_CART_CLEARED = "Cart cleared"
MSG_CHECKOUT_COMPLETED = "Thank you for your order."

# Rejection / no-op reasons (logged only)
REASON_MISSING_PRODUCT_ID = "product id is missing"
REASON_UNKNOWN_ITEM = "no line matches id"
REASON_MALFORMED_STATE = "malformed cart state"

# Lifecycle errors
ERROR_STORE_CLOSED = "Cart store is closed"
