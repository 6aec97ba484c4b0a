"""
Pydantic Models - Boundary schemas for the cart engine

Contains:
- CatalogProduct: product data handed to the cart by the catalog layer
- CartLineResponse / CartSummaryResponse: presentation projection of a cart
"""

from decimal import Decimal
from typing import List

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from storefront.config import DEFAULT_CURRENCY
from storefront.services.currency import normalize_currency
from storefront.services.money import parse_number


# ============================================================
# Catalog input
# ============================================================

class CatalogProduct(BaseModel):
    """
    Product as delivered by the catalog source.

    Every field is optional; a product without an id cannot be added to
    the cart. An empty currency means the cart store picks its default.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = ""
    name: str = ""
    subtitle: str = ""
    price: Decimal = Decimal("0")
    currency: str = ""
    image_url: str = Field(
        default="",
        validation_alias=AliasChoices("imageUrl", "image_url", "image"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        if v is None or isinstance(v, bool):
            return ""
        value = str(v)
        return value if value.strip() else ""

    @field_validator("name", "subtitle", "image_url", mode="before")
    @classmethod
    def normalize_text(cls, v):
        return "" if v is None else str(v)

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        price = parse_number(v, Decimal("0"))
        return price if price > 0 else Decimal("0")

    @field_validator("currency", mode="before")
    @classmethod
    def normalize_currency_code(cls, v):
        return normalize_currency(v, None) or ""

    @property
    def is_usable(self) -> bool:
        """Whether the product can be added to a cart."""
        return bool(self.id)


# ============================================================
# Presentation projection
# ============================================================

class CartLineResponse(BaseModel):
    """One cart line with display texts."""
    id: str = Field(description="Catalog product id")
    name: str = ""
    subtitle: str = ""
    image_url: str = ""
    quantity: int = Field(description="Units of this product", ge=1)
    unit_price: float = Field(description="Price per unit", ge=0)
    line_total: float = Field(description="quantity * unit_price", ge=0)
    currency: str
    unit_price_text: str = ""
    line_total_text: str = ""


class CartSummaryResponse(BaseModel):
    """Cart totals and lines ready for rendering."""
    is_empty: bool
    items: List[CartLineResponse] = Field(default_factory=list)
    total_quantity: int = 0
    total_amount: float = 0.0
    currency: str = DEFAULT_CURRENCY
    total_text: str = ""
