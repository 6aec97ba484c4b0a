"""
Tests for Pydantic models and the cart summary projection
"""

import pytest
from decimal import Decimal
from unittest.mock import Mock

from pydantic import ValidationError

from storefront.cart import Cart, CartTotals, LineItem, build_cart_summary
from storefront.models import CartLineResponse, CartSummaryResponse, CatalogProduct


class TestCatalogProduct:
    """Tests for CatalogProduct."""

    def test_full_product(self, sample_product):
        """Test a complete product."""
        product = CatalogProduct.model_validate(sample_product)

        assert product.id == "sku-hoodie"
        assert product.price == Decimal("49.9")
        assert product.image_url == "https://cdn.example.com/hoodie.png"
        assert product.is_usable

    def test_normalization(self, euro_product):
        """Test lenient price, currency case and image alias."""
        product = CatalogProduct.model_validate(euro_product)

        assert product.price == Decimal("12.50")
        assert product.currency == "EUR"
        assert product.image_url == "https://cdn.example.com/cap.png"
        assert product.subtitle == ""

    def test_defaults(self):
        """Test an empty payload is valid but unusable."""
        product = CatalogProduct.model_validate({})

        assert product.id == ""
        assert product.price == Decimal("0")
        assert product.currency == ""
        assert not product.is_usable

    @pytest.mark.parametrize("price", [-5, "free", None, float("nan")])
    def test_invalid_price_is_zero(self, price):
        assert CatalogProduct(id="x", price=price).price == Decimal("0")

    def test_id_is_kept_verbatim(self):
        """Test padded ids are stored as given; blank ids are unusable."""
        assert CatalogProduct.model_validate({"id": " A "}).id == " A "
        assert not CatalogProduct.model_validate({"id": " \t "}).is_usable

    def test_numeric_id(self):
        """Test numeric catalog ids become strings."""
        assert CatalogProduct.model_validate({"id": 1042}).id == "1042"

    def test_null_text_fields(self):
        product = CatalogProduct.model_validate({"id": "a", "name": None, "currency": None})

        assert product.name == ""
        assert product.currency == ""


class TestSummaryModels:
    """Tests for response models."""

    def test_line_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            CartLineResponse(id="a", quantity=0, unit_price=1, line_total=0, currency="USD")

    def test_empty_summary(self):
        summary = CartSummaryResponse(is_empty=True)

        assert summary.items == []
        assert summary.currency == "USD"


class TestBuildCartSummary:
    """Tests for build_cart_summary()."""

    def test_empty_cart(self):
        summary = build_cart_summary(Cart.empty())

        assert summary.is_empty
        assert summary.total_text == "$0.00"

    def test_texts_use_line_currency(self):
        """Test line texts use the line currency and the total the cart currency."""
        cart = Cart(
            items=[
                LineItem(id="a", name="Hoodie", quantity=2, unit_price="10", currency="USD"),
                LineItem(id="b", name="Cap", quantity=1, unit_price="5", currency=""),
            ],
            totals=CartTotals(total_quantity=3, total_amount=25, currency="EUR"),
        )

        summary = build_cart_summary(cart)

        assert not summary.is_empty
        assert summary.items[0].unit_price_text == "$10.00"
        assert summary.items[0].line_total_text == "$20.00"
        assert summary.items[0].line_total == 20.0
        assert summary.items[1].currency == "EUR"
        assert summary.items[1].line_total_text == "€5.00"
        assert summary.total_text == "€25.00"
        assert summary.total_amount == 25.0

    def test_injected_formatter(self):
        """Test the formatting collaborator is injectable."""
        formatter = Mock(return_value="formatted")
        cart = Cart(
            items=[LineItem(id="a", quantity=1, unit_price=3)],
            totals=CartTotals(total_quantity=1, total_amount=3),
        )

        summary = build_cart_summary(cart, formatter)

        assert summary.total_text == "formatted"
        formatter.assert_any_call(Decimal("3"), "USD")

    def test_store_summary(self, store, sample_product):
        """Test the store exposes the summary of its current cart."""
        store.add(sample_product, 2)

        summary = store.summary()

        assert summary.total_quantity == 2
        assert summary.total_text == "$99.80"
        assert summary.items[0].name == "Classic Hoodie"
        assert store.get().items[0].unit_price == Decimal("49.9")
