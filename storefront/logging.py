"""
Centralized logging configuration for the storefront cart.

Usage:
    from storefront.logging import get_logger
    logger = get_logger(__name__)

    logger.info("Cart updated")
    logger.warning("Malformed cart state", exc_info=True)
"""

import logging
import sys
from functools import cache

from storefront.config import LOG_LEVEL, STOREFRONT_ENV

# Default format for logs
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"


def _get_log_level() -> int:
    """Get log level from configuration or default to INFO."""
    return getattr(logging, LOG_LEVEL.upper(), logging.INFO)


def _configure_root_logger() -> None:
    """Configure root logger with a stdout handler."""
    root = logging.getLogger()

    # Only configure if no handlers exist
    if root.handlers:
        return

    root.setLevel(_get_log_level())

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(_get_log_level())

    # Simple format in production, detailed locally
    is_production = STOREFRONT_ENV == "production"
    formatter = logging.Formatter(LOG_FORMAT_SIMPLE if is_production else LOG_FORMAT)
    handler.setFormatter(formatter)

    root.addHandler(handler)


# Configure once on module import
_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    """
    Get or create a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """
    Escape characters that could be used for log injection attacks (CWE-117).

    Args:
        value: String to escape

    Returns:
        Escaped string safe for logging
    """
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def sanitize_id_for_logging(id_value: object | None) -> str:
    """
    Sanitize a product id for logging (escaped, first 8 chars).

    Args:
        id_value: ID value to sanitize (can be None)

    Returns:
        Sanitized ID string or "N/A" if empty
    """
    if not id_value:
        return "N/A"
    safe_value = _escape_log_injection(str(id_value))
    return safe_value[:8] if len(safe_value) > 8 else safe_value


def sanitize_string_for_logging(value: object | None, max_length: int = 50) -> str:
    """
    Sanitize a caller-supplied string for logging (escaped, truncated).

    Args:
        value: String value to sanitize (can be None)
        max_length: Maximum length to keep (default: 50)

    Returns:
        Sanitized string or "N/A" if empty
    """
    if not value:
        return "N/A"
    safe_value = _escape_log_injection(str(value))
    if len(safe_value) <= max_length:
        return safe_value
    return safe_value[:max_length] + "..."


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
