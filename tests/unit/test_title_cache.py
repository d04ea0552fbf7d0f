"""Unit tests for the run-scoped title cache."""

from __future__ import annotations

import pytest

from mural_publisher.services.title_cache import TitleCache
from mural_publisher.utils.errors import ContentStoreError


class TestTitleCache:
    @pytest.mark.asyncio
    async def test_loads_titles_once(self, fake_store) -> None:
        fake_store.seed_entry("Clock Tower")
        fake_store.seed_entry("Harbour Wall", published=False)
        fake_store.seed_entry("Other Type", content_type_id="article")
        cache = TitleCache(content_type_id="mural", locale="en-US")

        await cache.ensure_loaded(fake_store)
        await cache.ensure_loaded(fake_store)

        assert cache.is_loaded
        assert cache.titles == frozenset({"Clock Tower", "Harbour Wall"})
        assert fake_store.operations.count("list_entries") == 1

    @pytest.mark.asyncio
    async def test_add_extends_cache(self, fake_store) -> None:
        cache = TitleCache(content_type_id="mural", locale="en-US")
        await cache.ensure_loaded(fake_store)

        cache.add("New Mural")

        assert "New Mural" in cache
        assert len(cache) == 1

    @pytest.mark.asyncio
    async def test_other_locale_is_ignored(self, fake_store) -> None:
        fake_store.seed_entry("Clock Tower")
        cache = TitleCache(content_type_id="mural", locale="de-DE")

        await cache.ensure_loaded(fake_store)

        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_store_failure_leaves_cache_unloaded(self, fake_store) -> None:
        fake_store.fail("list_entries")
        cache = TitleCache(content_type_id="mural", locale="en-US")

        with pytest.raises(ContentStoreError):
            await cache.ensure_loaded(fake_store)

        assert not cache.is_loaded
