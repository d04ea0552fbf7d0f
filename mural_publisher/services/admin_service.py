"""Remote admin operations: inspection and bulk deletion.

Bulk deletes run in two phases over a list fetched up front:

    1. UNPUBLISH every item that is currently published
    2. DELETE every item

All unpublish calls happen before the first delete.  Failures are contained
per item: a failed unpublish is recorded and the item is still attempted
in the delete phase; a failed delete is recorded and the next item goes
ahead.  Only failing to list the items aborts the command.

Destructive operations are gated by a ``confirm`` callable that receives a
prompt naming the target and the item count.  Declining returns an
unconfirmed report and makes no mutating call.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence
from typing import TypeVar

import structlog

from mural_publisher.interfaces.content_store import IContentStoreProvider
from mural_publisher.models.remote import (
    ApiCheckResult,
    ContentTypeField,
    ContentTypeSchema,
    ContentTypeSnapshot,
    RemoteAsset,
    RemoteEntry,
)
from mural_publisher.models.reports import (
    BulkOperationReport,
    BulkPhase,
    ItemFailure,
    PhaseCounts,
)
from mural_publisher.utils.errors import AdminOperationError, ContentStoreError
from mural_publisher.utils.logging import get_logger

_Item = TypeVar("_Item", RemoteEntry, RemoteAsset)

ConfirmFn = Callable[[str], bool]

ASSETS_TARGET = "assets"


class AdminService:
    """Inspection and bulk-delete commands against one content store.

    Parameters
    ----------
    store:
        Content store to operate on.
    environment:
        Environment name, reported by :meth:`check_api`.
    space_id:
        Space id, reported by :meth:`check_api`.
    """

    def __init__(
        self,
        store: IContentStoreProvider,
        environment: str = "master",
        space_id: str = "",
    ) -> None:
        self._store = store
        self._environment = environment
        self._space_id = space_id
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    async def list_content_types(self) -> list[ContentTypeSchema]:
        """Return every content-type schema with its fields."""
        content_types = await self._list("content types", self._store.list_content_types)
        self._logger.info("content_types_listed", count=len(content_types))
        return content_types

    async def get_content_type_fields(self, content_type_id: str) -> list[ContentTypeField]:
        """Return the fields of one content type."""
        try:
            content_type = await self._store.get_content_type(content_type_id)
        except ContentStoreError as exc:
            raise AdminOperationError(
                f"Cannot fetch content type {content_type_id!r}: {exc.message}",
                provider_name=exc.provider_name,
            ) from exc
        return content_type.fields

    async def fetch_all_content(self) -> dict[str, ContentTypeSnapshot]:
        """Fetch every entry of every content type, keyed by content-type id."""
        snapshots: dict[str, ContentTypeSnapshot] = {}
        for content_type in await self.list_content_types():
            entries = await self._list(
                f"entries of {content_type.id!r}",
                lambda ct=content_type.id: self._store.list_entries(ct),
            )
            snapshots[content_type.id] = ContentTypeSnapshot(
                content_type=content_type,
                entries=[entry.fields for entry in entries],
            )
            self._logger.info(
                "content_type_fetched", content_type=content_type.id, entries=len(entries)
            )
        return snapshots

    async def check_api(self) -> ApiCheckResult:
        """Connect to the space and read its schema list."""
        try:
            space_name = await self._store.get_space_name()
        except ContentStoreError as exc:
            raise AdminOperationError(
                f"Cannot reach space {self._space_id!r}: {exc.message}",
                provider_name=exc.provider_name,
            ) from exc
        content_types = await self.list_content_types()
        return ApiCheckResult(
            base_url=self._store.get_api_base_url(),
            space_id=self._space_id,
            space_name=space_name,
            environment=self._environment,
            content_type_count=len(content_types),
        )

    # ------------------------------------------------------------------
    # Bulk delete
    # ------------------------------------------------------------------

    async def delete_entries(self, content_type_id: str, confirm: ConfirmFn) -> BulkOperationReport:
        """Unpublish and delete every entry of *content_type_id* after confirmation."""
        entries = await self._list(
            f"entries of {content_type_id!r}",
            lambda: self._store.list_entries(content_type_id),
        )
        prompt = f"Delete all {len(entries)} entries of content type '{content_type_id}'?"
        return await self._bulk_delete(
            target=content_type_id,
            items=entries,
            prompt=prompt,
            confirm=confirm,
            unpublish=self._store.unpublish_entry,
            delete=self._store.delete_entry,
        )

    async def delete_assets(self, confirm: ConfirmFn) -> BulkOperationReport:
        """Unpublish and delete every asset in the environment after confirmation."""
        assets = await self._list(ASSETS_TARGET, self._store.list_assets)
        prompt = f"Delete all {len(assets)} assets in environment '{self._environment}'?"
        return await self._bulk_delete(
            target=ASSETS_TARGET,
            items=assets,
            prompt=prompt,
            confirm=confirm,
            unpublish=self._store.unpublish_asset,
            delete=self._store.delete_asset,
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _list(self, what: str, fetch: Callable[[], Awaitable[list]]) -> list:
        """Run a listing call, turning store failures into AdminOperationError."""
        try:
            return await fetch()
        except ContentStoreError as exc:
            self._logger.error("admin_listing_failed", target=what, error=str(exc))
            raise AdminOperationError(
                f"Cannot list {what}: {exc.message}", provider_name=exc.provider_name
            ) from exc

    async def _bulk_delete(
        self,
        *,
        target: str,
        items: Sequence[_Item],
        prompt: str,
        confirm: ConfirmFn,
        unpublish: Callable[[_Item], Awaitable[_Item]],
        delete: Callable[[_Item], Awaitable[None]],
    ) -> BulkOperationReport:
        if not confirm(prompt):
            self._logger.info("bulk_delete_declined", target=target, total=len(items))
            return BulkOperationReport(target=target, confirmed=False, total=len(items))

        failures: list[ItemFailure] = []
        # Latest known version of each item; delete must send it.
        current: list[_Item] = list(items)

        published = [index for index, item in enumerate(current) if item.is_published]
        unpublished_ok = 0
        for index in published:
            item = current[index]
            try:
                current[index] = await unpublish(item)
                unpublished_ok += 1
            except ContentStoreError as exc:
                self._logger.warning("unpublish_failed", target=target, item_id=item.id, error=str(exc))
                failures.append(ItemFailure(item_id=item.id, phase=BulkPhase.UNPUBLISH, message=str(exc)))

        deleted_ok = 0
        for item in current:
            try:
                await delete(item)
                deleted_ok += 1
            except ContentStoreError as exc:
                self._logger.warning("delete_failed", target=target, item_id=item.id, error=str(exc))
                failures.append(ItemFailure(item_id=item.id, phase=BulkPhase.DELETE, message=str(exc)))

        report = BulkOperationReport(
            target=target,
            confirmed=True,
            total=len(current),
            unpublish=PhaseCounts(
                attempted=len(published),
                succeeded=unpublished_ok,
                failed=len(published) - unpublished_ok,
            ),
            delete=PhaseCounts(
                attempted=len(current),
                succeeded=deleted_ok,
                failed=len(current) - deleted_ok,
            ),
            failures=failures,
        )
        self._logger.info(
            "bulk_delete_finished",
            target=target,
            total=report.total,
            unpublished=unpublished_ok,
            deleted=deleted_ok,
            failures=len(failures),
        )
        return report
