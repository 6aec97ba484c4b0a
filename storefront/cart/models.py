"""Cart models with Decimal-based pricing."""
from collections.abc import Mapping
from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional

from storefront.config import DEFAULT_CURRENCY
from storefront.services.money import multiply, parse_number, to_decimal


def _text(value) -> str:
    return "" if value is None else str(value)


@dataclass
class LineItem:
    """One product's presence in the cart."""
    id: str
    name: str = ""
    subtitle: str = ""
    image_url: str = ""
    quantity: int = 1
    unit_price: Decimal = Decimal("0")
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        self.unit_price = to_decimal(self.unit_price)

    @property
    def line_total(self) -> Decimal:
        """Total price for all units."""
        return multiply(self.unit_price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "subtitle": self.subtitle,
            "image_url": self.image_url,
            "quantity": self.quantity,
            "unit_price": str(self.unit_price),
            "currency": self.currency,
        }

    @classmethod
    def from_dict(cls, data: Mapping) -> "LineItem":
        """
        Create from dictionary.

        Raises:
            TypeError: data is not a mapping
            KeyError: id is missing
            ValueError: id is empty
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"line item must be a mapping, got {type(data).__name__}")
        item_id = data["id"]
        if not isinstance(item_id, str) or not item_id:
            raise ValueError("line item id must be a non-empty string")

        quantity = parse_number(data.get("quantity"), Decimal("1"))
        unit_price = parse_number(data.get("unit_price"), Decimal("0"))
        return cls(
            id=item_id,
            name=_text(data.get("name")),
            subtitle=_text(data.get("subtitle")),
            image_url=_text(data.get("image_url")),
            quantity=int(quantity),
            unit_price=max(unit_price, Decimal("0")),
            currency=_text(data.get("currency")).strip().upper(),
        )


@dataclass
class CartTotals:
    """Aggregate projection over the item list."""
    total_quantity: int = 0
    total_amount: Decimal = Decimal("0")
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self):
        self.total_amount = to_decimal(self.total_amount)

    def to_dict(self) -> dict:
        return {
            "total_quantity": self.total_quantity,
            "total_amount": str(self.total_amount),
            "currency": self.currency,
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping], default_currency: str = DEFAULT_CURRENCY) -> "CartTotals":
        if not isinstance(data, Mapping):
            return cls(currency=default_currency)
        currency = _text(data.get("currency")).strip().upper() or default_currency
        return cls(
            total_quantity=int(parse_number(data.get("total_quantity"), Decimal("0"))),
            total_amount=parse_number(data.get("total_amount"), Decimal("0")),
            currency=currency,
        )


@dataclass
class Cart:
    """Shopping cart: ordered line items plus their totals."""
    items: List[LineItem] = field(default_factory=list)
    totals: CartTotals = field(default_factory=CartTotals)

    @classmethod
    def empty(cls, currency: str = DEFAULT_CURRENCY) -> "Cart":
        """Freshly initialized cart with zeroed totals."""
        return cls(items=[], totals=CartTotals(currency=currency))

    @property
    def is_empty(self) -> bool:
        return not self.items

    def find(self, item_id: str) -> Optional[LineItem]:
        """Line with the given id, or None."""
        return next((item for item in self.items if item.id == item_id), None)

    def to_dict(self) -> dict:
        """Convert to dictionary for the state slot."""
        return {
            "items": [item.to_dict() for item in self.items],
            "totals": self.totals.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Mapping, default_currency: str = DEFAULT_CURRENCY) -> "Cart":
        """
        Create from dictionary.

        Raises:
            TypeError / KeyError / ValueError: the data does not describe a cart
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"cart must be a mapping, got {type(data).__name__}")
        raw_items = data.get("items", [])
        if not isinstance(raw_items, list):
            raise TypeError("cart items must be a list")

        items = [LineItem.from_dict(item) for item in raw_items]
        if len({item.id for item in items}) != len(items):
            raise ValueError("duplicate line item ids")

        return cls(
            items=items,
            totals=CartTotals.from_dict(data.get("totals"), default_currency),
        )
