"""Custom exception hierarchy for the mural publisher.

All application exceptions inherit from :class:`MuralPublisherError`, which
carries an optional ``provider_name`` so error handlers can identify which
external service (e.g. "contentful") caused the failure.

The hierarchy is organized by the unit of work each error belongs to:

    MuralPublisherError  (base -- catch-all for any mural publisher error)
    +-- ConfigurationError       (startup / missing credentials)
    +-- ParseError               (one template file)
    +-- ScanError                (one submission directory, or the root)
    +-- UploadError              (one photo)
    +-- PublishError             (one submission's entry)
    +-- AdminOperationError      (listing items for a bulk admin command)
    +-- ContentStoreError        (any failure reported by the remote store)
        +-- RateLimitError           (HTTP 429)
        +-- ProviderUnavailableError (5xx / transport failure)

Failures are contained at the smallest unit they describe: an
``UploadError`` drops one photo, a ``PublishError`` or ``ParseError`` drops
one submission, and only ``ConfigurationError`` or a failure to list the
work itself aborts a command.
"""


class MuralPublisherError(Exception):
    """Base exception for all mural publisher errors.

    Every subclass carries a human-readable ``message`` and an optional
    ``provider_name`` identifying which external service triggered the
    error.  The ``__str__`` method prefixes the provider name in brackets
    for log output, e.g. ``[contentful] Rate limit exceeded``.
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        provider_name: str | None = None,
    ) -> None:
        self._message = message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


# ---------------------------------------------------------------------------
# Startup errors
# ---------------------------------------------------------------------------

class ConfigurationError(MuralPublisherError):
    """Raised when credentials or configuration are missing or invalid."""

    def __init__(
        self,
        message: str = "Invalid or missing configuration",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Local filesystem errors
# ---------------------------------------------------------------------------

class ParseError(MuralPublisherError):
    """Raised when a template file cannot be read or is rejected in strict mode."""

    def __init__(
        self,
        message: str = "Template file could not be parsed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class ScanError(MuralPublisherError):
    """Raised when a submission directory (or the root folder) cannot be listed."""

    def __init__(
        self,
        message: str = "Directory could not be scanned",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Publishing errors
# ---------------------------------------------------------------------------

class UploadError(MuralPublisherError):
    """Raised when one photo cannot be uploaded, processed or published.

    The publisher catches this per photo and continues with the rest of
    the submission.
    """

    def __init__(
        self,
        message: str = "Photo upload failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class PublishError(MuralPublisherError):
    """Raised when a submission's entry cannot be built, created or published."""

    def __init__(
        self,
        message: str = "Entry publish failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


class AdminOperationError(MuralPublisherError):
    """Raised when an admin command cannot even list the items it works on."""

    def __init__(
        self,
        message: str = "Admin operation failed",
        provider_name: str | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)


# ---------------------------------------------------------------------------
# Remote store errors
# ---------------------------------------------------------------------------

class ContentStoreError(MuralPublisherError):
    """Raised when the remote content store rejects or fails a request.

    ``status_code`` is the HTTP status when one was received.
    """

    def __init__(
        self,
        message: str = "Content store request failed",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self.status_code = status_code


class RateLimitError(ContentStoreError):
    """Raised when the content store's rate limit is exceeded."""

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        provider_name: str | None = None,
        status_code: int | None = 429,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)


class ProviderUnavailableError(ContentStoreError):
    """Raised when the content store is unreachable or returns a server error."""

    def __init__(
        self,
        message: str = "External service is unavailable",
        provider_name: str | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name, status_code=status_code)
