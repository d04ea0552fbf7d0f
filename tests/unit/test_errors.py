"""Unit tests for the exception hierarchy."""

from __future__ import annotations

import pytest

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


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "error_cls",
        [
            ConfigurationError,
            ParseError,
            ScanError,
            UploadError,
            PublishError,
            AdminOperationError,
            ContentStoreError,
        ],
    )
    def test_all_derive_from_base(self, error_cls: type) -> None:
        assert issubclass(error_cls, MuralPublisherError)

    def test_store_error_subclasses(self) -> None:
        assert issubclass(RateLimitError, ContentStoreError)
        assert issubclass(ProviderUnavailableError, ContentStoreError)
        assert RateLimitError().status_code == 429

    def test_str_prefixes_provider(self) -> None:
        assert str(UploadError("bad file", provider_name="contentful")) == "[contentful] bad file"
        assert str(UploadError("bad file")) == "bad file"

    def test_default_message(self) -> None:
        assert PublishError().message == "Entry publish failed"
