"""Utility modules for the mural publisher.

- **errors** -- Domain exception hierarchy rooted at MuralPublisherError;
  each unit of work (photo, submission, admin item) raises its own subclass
  so callers contain failures at the right granularity.
- **logging** -- structlog setup: coloured console output for interactive
  runs, structured JSON in production.
- **retry** -- Bounded polling policy used while the content store
  processes uploaded assets.
- **text_normalizer** -- Template field-name canonicalisation and URL slugs.
"""

from mural_publisher.utils.errors import (
    AdminOperationError,
    ConfigurationError,
    ContentStoreError,
    MuralPublisherError,
    ParseError,
    ProviderUnavailableError,
    PublishError,
    RateLimitError,
    ScanError,
    UploadError,
)
from mural_publisher.utils.logging import configure_logging, get_logger
from mural_publisher.utils.retry import RetryExhaustedError, RetryPolicy, poll_until
from mural_publisher.utils.text_normalizer import normalize_field_name, slugify

__all__ = [
    "AdminOperationError",
    "ConfigurationError",
    "ContentStoreError",
    "MuralPublisherError",
    "ParseError",
    "ProviderUnavailableError",
    "PublishError",
    "RateLimitError",
    "RetryExhaustedError",
    "RetryPolicy",
    "ScanError",
    "UploadError",
    "configure_logging",
    "get_logger",
    "normalize_field_name",
    "poll_until",
    "slugify",
]
