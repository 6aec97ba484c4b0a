"""
Storefront configuration.

Settings are read from the environment (and a local .env file, if present)
once at import time.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# Currency for empty carts and products that do not carry one
DEFAULT_CURRENCY = os.environ.get("STOREFRONT_DEFAULT_CURRENCY", "USD").strip().upper() or "USD"

# Locale hint for the currency formatter ("en" uses 1,234.50; others 1 234,50)
DISPLAY_LOCALE = os.environ.get("STOREFRONT_LOCALE", "en")

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
STOREFRONT_ENV = os.environ.get("STOREFRONT_ENV", "development")
