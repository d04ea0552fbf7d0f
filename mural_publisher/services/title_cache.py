"""Run-scoped cache of titles that already exist remotely.

The cache is filled once from a full listing of the mural content type and
then grown by the publisher after each successful publish, so duplicates
are caught both against earlier runs and within the current one.

The check is advisory: the snapshot is not refreshed, so a same-titled
entry created remotely (or by a concurrent run) after loading is not seen.
"""

from __future__ import annotations

import structlog

from mural_publisher.interfaces.content_store import IContentStoreProvider
from mural_publisher.models.mural import TITLE_FIELD
from mural_publisher.utils.logging import get_logger


class TitleCache:
    """Set of published titles, loaded lazily from the content store.

    Parameters
    ----------
    content_type_id:
        Content type whose entries are listed on load.
    locale:
        Locale of the title field to read.
    title_field:
        Field id holding the title.
    """

    def __init__(
        self,
        content_type_id: str,
        locale: str,
        title_field: str = TITLE_FIELD,
    ) -> None:
        self._content_type_id = content_type_id
        self._locale = locale
        self._title_field = title_field
        self._titles: set[str] = set()
        self._loaded = False
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def titles(self) -> frozenset[str]:
        return frozenset(self._titles)

    async def ensure_loaded(self, store: IContentStoreProvider) -> None:
        """Fill the cache from *store* on first call; later calls do nothing.

        Errors from the store propagate and leave the cache unloaded.
        """
        if self._loaded:
            return

        entries = await store.list_entries(self._content_type_id)
        for entry in entries:
            title = entry.field_value(self._title_field, self._locale)
            if isinstance(title, str) and title:
                self._titles.add(title)
        self._loaded = True

        self._logger.info(
            "title_cache_loaded",
            content_type=self._content_type_id,
            entries=len(entries),
            titles=len(self._titles),
        )

    def add(self, title: str) -> None:
        self._titles.add(title)

    def __contains__(self, title: object) -> bool:
        return title in self._titles

    def __len__(self) -> int:
        return len(self._titles)
