"""
Cart totals recalculation.

Totals are never mutated on their own: they are always the fold of the
current item list computed here.

Currency is resolved last-writer-wins: starting from the previous cart
currency, every item that carries a currency overwrites it, so the cart
shows the currency of the last such item in list order. Amounts of lines
in different currencies are summed as plain numbers, with no conversion.
"""
from decimal import Decimal
from typing import Iterable, Optional

from storefront.config import DEFAULT_CURRENCY
from storefront.services.money import add
from .models import Cart, CartTotals, LineItem


def recalculate(
    items: Iterable[LineItem],
    previous_currency: Optional[str] = None,
    default_currency: str = DEFAULT_CURRENCY,
) -> CartTotals:
    """
    Clamp line quantities and fold the item list into totals.

    Quantities below 1 are written back as 1 before anything is summed,
    so totals always match the lines they were computed from.

    Args:
        items: Line items (quantities are clamped in place)
        previous_currency: Cart currency before this recalculation
        default_currency: Used when there is no previous currency

    Returns:
        Fresh CartTotals
    """
    total_quantity = 0
    total_amount = Decimal("0")
    currency = previous_currency or default_currency

    for item in items:
        item.quantity = max(1, item.quantity)
        total_quantity += item.quantity
        total_amount = add(total_amount, item.line_total)
        if item.currency:
            currency = item.currency

    return CartTotals(
        total_quantity=total_quantity,
        total_amount=total_amount,
        currency=currency,
    )


def refresh_totals(cart: Cart, default_currency: str = DEFAULT_CURRENCY) -> Cart:
    """Recompute cart.totals from cart.items in place and return the cart."""
    cart.totals = recalculate(cart.items, cart.totals.currency, default_currency)
    return cart
