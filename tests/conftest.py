"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock

# Set test environment variables before the package reads them
os.environ.setdefault("STOREFRONT_DEFAULT_CURRENCY", "USD")
os.environ.setdefault("STOREFRONT_LOCALE", "en")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from storefront.cart import CartEventBus, CartStore, InMemoryCartStorage  # noqa: E402


@pytest.fixture
def storage():
    """Bare state slot, so tests can plant arbitrary stored data."""
    return InMemoryCartStorage()


@pytest.fixture
def event_bus():
    return CartEventBus()


@pytest.fixture
def store(storage, event_bus):
    """Cart store with injected storage and bus, closed after the test."""
    cart_store = CartStore(storage=storage, events=event_bus)
    yield cart_store
    cart_store.close()


@pytest.fixture
def subscriber(event_bus):
    """Mock subscribed to every cart event."""
    handler = Mock(return_value=None)
    event_bus.subscribe_all(handler)
    return handler


@pytest.fixture
def sample_product():
    """Sample catalog product data"""
    return {
        "id": "sku-hoodie",
        "name": "Classic Hoodie",
        "subtitle": "Organic cotton",
        "price": 49.9,
        "currency": "USD",
        "imageUrl": "https://cdn.example.com/hoodie.png",
    }


@pytest.fixture
def euro_product():
    """Sample product priced in EUR"""
    return {
        "id": "sku-cap",
        "name": "Cap",
        "price": "12,50",
        "currency": "eur",
        "image": "https://cdn.example.com/cap.png",
    }
