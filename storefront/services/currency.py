"""
Currency Formatting

Single source of truth for currency codes and display strings.

The cart engine only stores raw amounts plus a currency code; turning them
into text happens here, at presentation time.

Usage:
    from storefront.services.currency import format_price

    format_price(Decimal("1234.5"), "USD")   # "$1,234.50"
    format_price(Decimal("1500"), "JPY")     # "1,500 ¥"
"""
from decimal import Decimal
from typing import Callable, Dict, Optional, Union

from storefront.config import DEFAULT_CURRENCY, DISPLAY_LOCALE
from storefront.services.money import parse_number, round_money

# Currency formatting collaborator: (amount, currency_code) -> display string
PriceFormatter = Callable[[Union[Decimal, int, float, str], str], str]

# Currency symbols mapping
CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "RUB": "₽",
    "UAH": "₴",
    "TRY": "₺",
    "INR": "₹",
    "CNY": "¥",
    "JPY": "¥",
    "KRW": "₩",
    "BRL": "R$",
    "NOK": "kr",
    "SEK": "kr",
}

# Currencies that should be displayed as integers (no decimals)
INTEGER_CURRENCIES = {"JPY", "KRW"}

# Symbol goes before the amount for these
PREFIX_SYMBOL_CURRENCIES = {"USD", "EUR", "GBP"}


def normalize_currency(code: Optional[str], default: Optional[str] = DEFAULT_CURRENCY) -> Optional[str]:
    """
    Normalize a currency code ("eur " -> "EUR").

    Args:
        code: Raw currency code
        default: Returned when the code is missing or blank

    Returns:
        Upper-cased code, or the default
    """
    if not isinstance(code, str):
        return default
    cleaned = code.strip().upper()
    return cleaned or default


def _group_digits(formatted: str, locale: str) -> str:
    """Swap separators for non-English locales (1,234.50 -> 1 234,50)."""
    if locale.split("-")[0].lower() == "en":
        return formatted
    return formatted.replace(",", " ").replace(".", ",")


def format_price(
    amount: Union[Decimal, int, float, str, None],
    currency: Optional[str] = None,
    locale: str = DISPLAY_LOCALE,
) -> str:
    """
    Format an amount with its currency symbol.

    Unknown currency codes are printed as the code itself. Returns "" when
    the amount is not a number.
    """
    value = parse_number(amount)
    if value is None:
        return ""

    code = normalize_currency(currency)
    symbol = CURRENCY_SYMBOLS.get(code, code)

    if code in INTEGER_CURRENCIES:
        formatted = f"{int(round_money(value, to_int=True)):,}"
    else:
        formatted = f"{round_money(value):,.2f}"
    formatted = _group_digits(formatted, locale)

    if code in PREFIX_SYMBOL_CURRENCIES:
        if formatted.startswith("-"):
            return f"-{symbol}{formatted[1:]}"
        return f"{symbol}{formatted}"
    return f"{formatted} {symbol}"
