"""Presentation projection of a cart (amounts as floats plus display texts)."""
from typing import Optional

from storefront.models import CartLineResponse, CartSummaryResponse
from storefront.services.currency import PriceFormatter, format_price
from storefront.services.money import to_float
from .models import Cart


def build_cart_summary(cart: Cart, formatter: Optional[PriceFormatter] = None) -> CartSummaryResponse:
    """
    Build the view model for a cart.

    Line texts use the line's own currency, falling back to the cart
    currency; the total uses the cart currency. Nothing produced here is
    written back to the cart.
    """
    fmt = formatter or format_price
    cart_currency = cart.totals.currency

    lines = []
    for item in cart.items:
        currency = item.currency or cart_currency
        lines.append(
            CartLineResponse(
                id=item.id,
                name=item.name,
                subtitle=item.subtitle,
                image_url=item.image_url,
                quantity=item.quantity,
                unit_price=to_float(item.unit_price),
                line_total=to_float(item.line_total),
                currency=currency,
                unit_price_text=fmt(item.unit_price, currency),
                line_total_text=fmt(item.line_total, currency),
            )
        )

    return CartSummaryResponse(
        is_empty=not lines,
        items=lines,
        total_quantity=cart.totals.total_quantity,
        total_amount=to_float(cart.totals.total_amount),
        currency=cart_currency,
        total_text=fmt(cart.totals.total_amount, cart_currency),
    )
