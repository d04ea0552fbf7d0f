"""Abstract base class for remote content-store providers.

Defines the capability set the publisher and admin commands need from a
headless CMS: content-type schemas, entry and asset CRUD, uploads and the
publish/unpublish lifecycle.  The concrete Contentful adapter lives in
``mural_publisher/providers/contentful/``; tests inject an in-memory fake
implementing the same contract.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from mural_publisher.models.remote import ContentTypeSchema, RemoteAsset, RemoteEntry


class IContentStoreProvider(ABC):
    """Contract for a remote content store scoped to one space/environment.

    All remote operations are async.  Implementations raise
    :class:`~mural_publisher.utils.errors.ContentStoreError` (or a subclass)
    for any failure reported by the store.  Mutating operations take the
    current record and return the updated one, so callers always hold the
    latest version.
    """

    # -- Introspection -------------------------------------------------------

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider (e.g. ``"contentful"``)."""

    @abstractmethod
    def get_api_base_url(self) -> str:
        """Return the base URL of the management API in use."""

    @abstractmethod
    async def get_space_name(self) -> str:
        """Return the display name of the configured space."""

    # -- Content types -------------------------------------------------------

    @abstractmethod
    async def list_content_types(self) -> list[ContentTypeSchema]:
        """Return every content-type schema in the environment."""

    @abstractmethod
    async def get_content_type(self, content_type_id: str) -> ContentTypeSchema:
        """Return one content-type schema by id."""

    # -- Entries -------------------------------------------------------------

    @abstractmethod
    async def list_entries(self, content_type_id: str | None = None) -> list[RemoteEntry]:
        """Return every entry, optionally restricted to one content type.

        Implementations must follow pagination until all entries are read.
        """

    @abstractmethod
    async def create_entry(
        self, content_type_id: str, fields: dict[str, dict[str, Any]]
    ) -> RemoteEntry:
        """Create a draft entry of *content_type_id* with locale-keyed *fields*."""

    @abstractmethod
    async def publish_entry(self, entry: RemoteEntry) -> RemoteEntry:
        """Publish *entry* and return the published record."""

    @abstractmethod
    async def unpublish_entry(self, entry: RemoteEntry) -> RemoteEntry:
        """Unpublish *entry* and return the draft record."""

    @abstractmethod
    async def delete_entry(self, entry: RemoteEntry) -> None:
        """Delete *entry*.  The entry must not be published."""

    # -- Uploads and assets --------------------------------------------------

    @abstractmethod
    async def create_upload(self, data: bytes) -> str:
        """Upload raw bytes and return the upload id."""

    @abstractmethod
    async def create_asset(
        self,
        title: str,
        file_name: str,
        content_type: str,
        upload_id: str,
    ) -> RemoteAsset:
        """Create a draft asset whose file comes from upload *upload_id*."""

    @abstractmethod
    async def process_asset(self, asset: RemoteAsset) -> None:
        """Ask the store to process the asset's file.

        Processing is asynchronous: poll :meth:`get_asset` until
        :meth:`RemoteAsset.is_processed` is true.
        """

    @abstractmethod
    async def get_asset(self, asset_id: str) -> RemoteAsset:
        """Return the current state of one asset."""

    @abstractmethod
    async def publish_asset(self, asset: RemoteAsset) -> RemoteAsset:
        """Publish a processed asset and return the published record."""

    @abstractmethod
    async def list_assets(self) -> list[RemoteAsset]:
        """Return every asset in the environment (all pages)."""

    @abstractmethod
    async def unpublish_asset(self, asset: RemoteAsset) -> RemoteAsset:
        """Unpublish *asset* and return the draft record."""

    @abstractmethod
    async def delete_asset(self, asset: RemoteAsset) -> None:
        """Delete *asset*.  The asset must not be published."""

    # -- Lifecycle -----------------------------------------------------------

    async def close(self) -> None:  # noqa: B027
        """Release network resources.  No-op by default."""
