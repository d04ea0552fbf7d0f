"""Shared pytest fixtures for the mural publisher test suite."""

from __future__ import annotations

import itertools
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from mural_publisher.interfaces.content_store import IContentStoreProvider
from mural_publisher.models.remote import ContentTypeSchema, RemoteAsset, RemoteEntry
from mural_publisher.services.context import PublishContext
from mural_publisher.services.title_cache import TitleCache
from mural_publisher.utils.errors import ContentStoreError
from mural_publisher.utils.retry import RetryPolicy

# Minimal JPEG / PNG signatures; nothing decodes them.
JPEG_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 16
PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 16

MUTATING_OPERATIONS = frozenset(
    {
        "create_entry",
        "publish_entry",
        "unpublish_entry",
        "delete_entry",
        "create_upload",
        "create_asset",
        "process_asset",
        "publish_asset",
        "unpublish_asset",
        "delete_asset",
    }
)


# ---------------------------------------------------------------------------
# In-memory content store
# ---------------------------------------------------------------------------


class FakeContentStore(IContentStoreProvider):
    """In-memory IContentStoreProvider that records every call.

    ``calls`` holds ``(operation, item_id)`` tuples in call order.  Register
    failures with :meth:`fail` to make an operation raise ContentStoreError
    for one id (or ``"*"`` for every id).  ``processing_polls`` is the number
    of ``get_asset`` calls an asset needs before it reports a file URL;
    ``None`` means processing never completes.
    """

    def __init__(self, locale: str = "en-US", processing_polls: int | None = 1) -> None:
        self.locale = locale
        self.processing_polls = processing_polls
        self.space_name = "Murals"
        self.calls: list[tuple[str, str]] = []
        self.entries: dict[str, RemoteEntry] = {}
        self.assets: dict[str, RemoteAsset] = {}
        self.uploads: dict[str, bytes] = {}
        self.content_types: list[ContentTypeSchema] = []
        self.closed = False
        self._failures: dict[str, set[str]] = {}
        self._polls: dict[str, int] = {}
        self._ids = itertools.count(1)

    # -- Test helpers --------------------------------------------------------

    def fail(self, operation: str, item_id: str = "*") -> None:
        self._failures.setdefault(operation, set()).add(item_id)

    def seed_entry(
        self,
        title: str,
        published: bool = True,
        content_type_id: str = "mural",
    ) -> RemoteEntry:
        entry_id = f"seed-{next(self._ids)}"
        entry = RemoteEntry(
            id=entry_id,
            version=2 if published else 1,
            content_type_id=content_type_id,
            published_version=1 if published else None,
            fields={"title": {self.locale: title}},
        )
        self.entries[entry_id] = entry
        return entry

    def seed_asset(self, published: bool = True) -> RemoteAsset:
        asset_id = f"seed-asset-{next(self._ids)}"
        asset = RemoteAsset(
            id=asset_id,
            version=2 if published else 1,
            published_version=1 if published else None,
        )
        self.assets[asset_id] = asset
        return asset

    @property
    def operations(self) -> list[str]:
        return [operation for operation, _ in self.calls]

    @property
    def mutation_calls(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[0] in MUTATING_OPERATIONS]

    def published_entries(self, content_type_id: str = "mural") -> list[RemoteEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.content_type_id == content_type_id and entry.is_published
        ]

    def _record(self, operation: str, item_id: str = "") -> None:
        self.calls.append((operation, item_id))
        targets = self._failures.get(operation, set())
        if "*" in targets or item_id in targets:
            raise ContentStoreError(
                message=f"{operation} failed for {item_id or 'request'}",
                provider_name="fake",
                status_code=422,
            )

    # -- IContentStoreProvider -----------------------------------------------

    def get_provider_name(self) -> str:
        return "fake"

    def get_api_base_url(self) -> str:
        return "https://cms.example.test"

    async def get_space_name(self) -> str:
        self._record("get_space_name")
        return self.space_name

    async def list_content_types(self) -> list[ContentTypeSchema]:
        self._record("list_content_types")
        return list(self.content_types)

    async def get_content_type(self, content_type_id: str) -> ContentTypeSchema:
        self._record("get_content_type", content_type_id)
        for content_type in self.content_types:
            if content_type.id == content_type_id:
                return content_type
        raise ContentStoreError(f"content type {content_type_id} not found", "fake", 404)

    async def list_entries(self, content_type_id: str | None = None) -> list[RemoteEntry]:
        self._record("list_entries", content_type_id or "")
        return [
            entry
            for entry in self.entries.values()
            if content_type_id is None or entry.content_type_id == content_type_id
        ]

    async def create_entry(
        self, content_type_id: str, fields: dict[str, dict[str, Any]]
    ) -> RemoteEntry:
        self._record("create_entry", content_type_id)
        entry = RemoteEntry(
            id=f"entry-{next(self._ids)}",
            version=1,
            content_type_id=content_type_id,
            fields=fields,
        )
        self.entries[entry.id] = entry
        return entry

    async def publish_entry(self, entry: RemoteEntry) -> RemoteEntry:
        self._record("publish_entry", entry.id)
        updated = entry.model_copy(
            update={"version": entry.version + 1, "published_version": entry.version}
        )
        self.entries[entry.id] = updated
        return updated

    async def unpublish_entry(self, entry: RemoteEntry) -> RemoteEntry:
        self._record("unpublish_entry", entry.id)
        updated = entry.model_copy(
            update={"version": entry.version + 1, "published_version": None}
        )
        self.entries[entry.id] = updated
        return updated

    async def delete_entry(self, entry: RemoteEntry) -> None:
        self._record("delete_entry", entry.id)
        self.entries.pop(entry.id, None)

    async def create_upload(self, data: bytes) -> str:
        upload_id = f"upload-{next(self._ids)}"
        self._record("create_upload", upload_id)
        self.uploads[upload_id] = data
        return upload_id

    async def create_asset(
        self,
        title: str,
        file_name: str,
        content_type: str,
        upload_id: str,
    ) -> RemoteAsset:
        self._record("create_asset", file_name)
        asset = RemoteAsset(
            id=f"asset-{next(self._ids)}",
            version=1,
            fields={
                "title": {self.locale: title},
                "file": {
                    self.locale: {
                        "fileName": file_name,
                        "contentType": content_type,
                        "uploadFrom": {"sys": {"id": upload_id}},
                    }
                },
            },
        )
        self.assets[asset.id] = asset
        return asset

    async def process_asset(self, asset: RemoteAsset) -> None:
        self._record("process_asset", asset.id)
        self._polls[asset.id] = 0

    async def get_asset(self, asset_id: str) -> RemoteAsset:
        self._record("get_asset", asset_id)
        asset = self.assets[asset_id]
        self._polls[asset_id] = self._polls.get(asset_id, 0) + 1
        if self.processing_polls is not None and self._polls[asset_id] >= self.processing_polls:
            file_info = dict(asset.file_info(self.locale))
            file_name = file_info.get("fileName", "")
            file_info["url"] = f"//images.example.test/{asset_id}/{file_name}"
            asset = asset.model_copy(
                update={
                    "version": asset.version + 1,
                    "fields": {**asset.fields, "file": {self.locale: file_info}},
                }
            )
            self.assets[asset_id] = asset
        return asset

    async def publish_asset(self, asset: RemoteAsset) -> RemoteAsset:
        self._record("publish_asset", asset.id)
        updated = asset.model_copy(
            update={"version": asset.version + 1, "published_version": asset.version}
        )
        self.assets[asset.id] = updated
        return updated

    async def list_assets(self) -> list[RemoteAsset]:
        self._record("list_assets")
        return list(self.assets.values())

    async def unpublish_asset(self, asset: RemoteAsset) -> RemoteAsset:
        self._record("unpublish_asset", asset.id)
        updated = asset.model_copy(
            update={"version": asset.version + 1, "published_version": None}
        )
        self.assets[asset.id] = updated
        return updated

    async def delete_asset(self, asset: RemoteAsset) -> None:
        self._record("delete_asset", asset.id)
        self.assets.pop(asset.id, None)

    async def close(self) -> None:
        self.closed = True


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_store() -> FakeContentStore:
    """Empty in-memory content store."""
    return FakeContentStore()


@pytest.fixture
def fast_policy() -> RetryPolicy:
    """Retry policy with no waiting, for polling tests."""
    return RetryPolicy(max_attempts=3, base_delay=0.0, timeout=None)


@pytest.fixture
def publish_context(fake_store: FakeContentStore, fast_policy: RetryPolicy) -> PublishContext:
    """Run context wired to the fake store."""
    return PublishContext(
        store=fake_store,
        title_cache=TitleCache(content_type_id="mural", locale="en-US"),
        content_type_id="mural",
        locale="en-US",
        retry_policy=fast_policy,
    )


@pytest.fixture
def make_submission(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing one submission directory under ``tmp_path/root``.

    ``template`` is written verbatim to ``template.txt`` (skipped when
    ``None``); ``files`` maps file names to their bytes.
    """

    def _make(
        name: str,
        template: str | None,
        files: dict[str, bytes] | None = None,
    ) -> Path:
        directory = tmp_path / "root" / name
        directory.mkdir(parents=True)
        if template is not None:
            (directory / "template.txt").write_text(template, encoding="utf-8")
        for file_name, data in (files or {}).items():
            (directory / file_name).write_bytes(data)
        return directory

    return _make


@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """The root folder ``make_submission`` writes into."""
    root = tmp_path / "root"
    root.mkdir(exist_ok=True)
    return root


@pytest.fixture
def make_store() -> Callable[..., FakeContentStore]:
    """Factory for fake stores with non-default settings."""
    return FakeContentStore


@pytest.fixture
def photo_bytes() -> dict[str, bytes]:
    """Placeholder photo payloads keyed by format."""
    return {"jpeg": JPEG_BYTES, "png": PNG_BYTES}
