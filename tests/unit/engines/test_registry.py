"""Tests for the engine registry and the null engine."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from indexsync.config.settings import Settings
from indexsync.engines.algolia.engine import AlgoliaEngine
from indexsync.engines.base.exceptions import EngineNotFoundError
from indexsync.engines.base.registry import EngineRegistry
from indexsync.engines.null.engine import NullEngine
from indexsync.models.builder import SearchBuilder
from tests.records import Post


class TestEngineRegistry:
    async def test_register_and_initialize(self) -> None:
        registry = EngineRegistry()
        registry.register("null", NullEngine)

        engine = await registry.initialize_engine("null")

        assert registry.get("null") is engine
        assert registry.get_default() is engine
        assert registry.registered_engines == ["null"]
        assert registry.active_engines == ["null"]

    async def test_initialize_unknown_driver(self) -> None:
        with pytest.raises(EngineNotFoundError, match="Available engines"):
            await EngineRegistry().initialize_engine("typesense")

    def test_get_uninitialized(self) -> None:
        registry = EngineRegistry()
        registry.register("null", NullEngine)
        with pytest.raises(EngineNotFoundError, match="not initialized"):
            registry.get("null")

    def test_get_default_empty(self) -> None:
        with pytest.raises(EngineNotFoundError):
            EngineRegistry().get_default()

    async def test_from_settings_algolia(self, settings: Settings) -> None:
        created = AsyncMock()
        settings.search.soft_delete = True
        with patch("indexsync.engines.algolia.engine.create_client", return_value=created) as factory:
            registry = await EngineRegistry.from_settings(settings)

        engine = registry.get_default()
        assert isinstance(engine, AlgoliaEngine)
        assert engine.soft_delete is True
        assert engine.client is created
        factory.assert_called_once_with("TESTAPP", "test-key")
        assert set(registry.registered_engines) == {"algolia", "null"}

        await registry.shutdown_all()
        created.close.assert_awaited_once()
        assert registry.active_engines == []

    async def test_from_settings_null(self, settings: Settings) -> None:
        settings.search.driver = "null"
        registry = await EngineRegistry.from_settings(settings)
        assert isinstance(registry.get_default(), NullEngine)

    async def test_shutdown_all_logs_failures(self) -> None:
        registry = EngineRegistry()
        registry.register("null", NullEngine)
        engine = await registry.initialize_engine("null")

        with patch.object(engine, "shutdown", AsyncMock(side_effect=RuntimeError("boom"))):
            await registry.shutdown_all()

        assert registry.active_engines == []


class TestNullEngine:
    async def test_search_is_empty(self) -> None:
        engine = NullEngine()
        builder = SearchBuilder(model=Post, query="anything")

        results = await engine.search(builder)

        assert engine.get_total_count(results) == 0
        assert engine.map_ids(results) == []
        assert await engine.get(builder) == []
        assert [r async for r in engine.cursor(builder)] == []
        assert Post.fetched_ids == []

    async def test_writes_are_noops(self) -> None:
        engine = NullEngine()
        await engine.update([Post(1, "t")])
        await engine.delete([Post(1, "t")])
        await engine.flush(Post)
        assert await engine.create_index("posts") is None
        assert await engine.delete_index("posts") is None

    async def test_fetch_page(self) -> None:
        page = await NullEngine().fetch_page(SearchBuilder(model=Post), per_page=10)
        assert page.items == []
        assert page.total == 0
        assert not page.has_more_pages
