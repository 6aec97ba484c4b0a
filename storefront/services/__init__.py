# Services Module
from .currency import format_price, normalize_currency
from .money import parse_number, to_decimal

__all__ = ["format_price", "normalize_currency", "parse_number", "to_decimal"]
