"""Publisher: turns one parsed submission into a published mural entry.

Flow for one submission::

    title check -> duplicate check -> slug
        -> for each photo: validate -> read -> upload -> asset -> process
                           -> poll until processed -> publish asset
        -> create entry -> publish entry -> remember title

Photo failures are contained per photo (logged, photo omitted).  Failures
after the photos are handled, while creating or publishing the entry,
raise :class:`PublishError` for the caller to record.  A title that is
already known is skipped before anything is uploaded.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from pathlib import Path

import structlog

from mural_publisher.models.mural import AssetLink, MuralEntry
from mural_publisher.models.remote import RemoteAsset
from mural_publisher.models.template import ParsedTemplate
from mural_publisher.services.context import PublishContext
from mural_publisher.utils.errors import (
    ContentStoreError,
    PublishError,
    UploadError,
)
from mural_publisher.utils.logging import get_logger
from mural_publisher.utils.retry import RetryExhaustedError, poll_until
from mural_publisher.utils.text_normalizer import slugify


def content_type_for(file_name: str) -> str:
    """Return the MIME type sent for a photo: PNG or, otherwise, JPEG."""
    return "image/png" if Path(file_name).suffix.lower() == ".png" else "image/jpeg"


class MuralPublisher:
    """Uploads a submission's photos and publishes its mural entry.

    Parameters
    ----------
    context:
        Run context providing the store, title cache and upload policy.
    """

    def __init__(self, context: PublishContext) -> None:
        self._ctx = context
        self._logger: structlog.BoundLogger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def publish(
        self,
        template: ParsedTemplate,
        photos: Sequence[str],
        submission_dir: str | Path,
    ) -> MuralEntry | None:
        """Publish one submission.

        Returns
        -------
        MuralEntry or None
            The published entry, or ``None`` when the title already exists
            (an intentional skip, not a failure).

        Raises
        ------
        PublishError
            When the template has no title, the title yields no usable
            slug, or the entry cannot be created or published.
        """
        submission_dir = Path(submission_dir)
        title = template.title
        if not title:
            raise PublishError(f"{submission_dir}: template has no Title field")

        await self._ctx.title_cache.ensure_loaded(self._ctx.store)
        if title in self._ctx.title_cache:
            self._logger.info("submission_duplicate_skipped", title=title, directory=str(submission_dir))
            return None

        slug = slugify(title)
        if not slug:
            raise PublishError(f"{submission_dir}: title {title!r} produces an empty slug")

        links: list[AssetLink] = []
        for file_name in photos:
            try:
                links.append(await self.upload_photo(submission_dir / file_name))
            except UploadError as exc:
                self._logger.warning(
                    "photo_skipped",
                    title=title,
                    photo=str(submission_dir / file_name),
                    error=str(exc),
                )

        entry = MuralEntry(
            title=title,
            location=template.get("location"),
            description=template.get("description"),
            category=template.get("category"),
            slug=slug,
            photos=links,
        )

        try:
            created = await self._ctx.store.create_entry(
                self._ctx.content_type_id, entry.to_fields(self._ctx.locale)
            )
            published = await self._ctx.store.publish_entry(created)
        except ContentStoreError as exc:
            raise PublishError(
                f"{submission_dir}: could not publish entry {title!r}: {exc.message}",
                provider_name=exc.provider_name,
            ) from exc

        self._ctx.title_cache.add(title)
        self._logger.info(
            "submission_published",
            title=title,
            entry_id=published.id,
            photos=len(links),
            photos_found=len(photos),
        )
        return entry.model_copy(update={"entry_id": published.id, "version": published.version})

    async def upload_photo(self, photo_path: str | Path) -> AssetLink:
        """Upload, process and publish one photo; return a link to the asset.

        Raises
        ------
        UploadError
            For an unsupported extension, an unreadable file, a remote
            failure, or processing that does not finish within the retry
            policy.
        """
        photo_path = Path(photo_path)
        extension = photo_path.suffix.lower()
        if extension not in self._ctx.allowed_extensions:
            raise UploadError(
                f"{photo_path.name}: unsupported extension {extension or '(none)'!r}; "
                f"allowed: {', '.join(sorted(self._ctx.allowed_extensions))}"
            )

        try:
            data = await asyncio.to_thread(photo_path.read_bytes)
        except OSError as exc:
            raise UploadError(f"{photo_path}: cannot read file: {exc}") from exc

        store = self._ctx.store
        try:
            upload_id = await store.create_upload(data)
            asset = await store.create_asset(
                title=photo_path.stem,
                file_name=photo_path.name,
                content_type=content_type_for(photo_path.name),
                upload_id=upload_id,
            )
            await store.process_asset(asset)
            processed = await self._wait_for_processing(asset)
            published = await store.publish_asset(processed)
        except ContentStoreError as exc:
            raise UploadError(
                f"{photo_path.name}: {exc.message}", provider_name=exc.provider_name
            ) from exc

        self._logger.debug("photo_uploaded", photo=str(photo_path), asset_id=published.id)
        return AssetLink(asset_id=published.id)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    async def _wait_for_processing(self, asset: RemoteAsset) -> RemoteAsset:
        """Poll *asset* until its file is processed, per the retry policy."""
        locale = self._ctx.locale
        try:
            return await poll_until(
                lambda: self._ctx.store.get_asset(asset.id),
                lambda current: current.is_processed(locale),
                self._ctx.retry_policy,
                label=asset.id,
            )
        except RetryExhaustedError as exc:
            raise UploadError(f"asset {asset.id} was not processed: {exc}") from exc
