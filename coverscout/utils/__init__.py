"""Utility modules for coverscout.

- **errors** -- Domain exception hierarchy rooted at CoverScoutError; each
  class carries the HTTP status the API layer maps it to.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

from coverscout.utils.errors import (
    BadGatewayError,
    ConfigurationError,
    ConnectionFailureError,
    CoverScoutError,
    GatewayTimeoutError,
    InvalidInputError,
    NotFoundError,
    ProviderUnavailableError,
    TooManyAttemptsError,
)
from coverscout.utils.logging import configure_logging, get_logger

__all__ = [
    "BadGatewayError",
    "ConfigurationError",
    "ConnectionFailureError",
    "CoverScoutError",
    "GatewayTimeoutError",
    "InvalidInputError",
    "NotFoundError",
    "ProviderUnavailableError",
    "TooManyAttemptsError",
    "configure_logging",
    "get_logger",
]
