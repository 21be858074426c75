"""Shared test fixtures and configuration."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from indexsync.config.settings import Settings
from indexsync.engines.algolia.engine import AlgoliaEngine
from tests.records import Post


@pytest.fixture(autouse=True)
def _reset_rows() -> None:
    Post.rows = {}
    Post.fetched_ids = []


@pytest.fixture
def store_posts():
    """Put posts into the local table, in the given order."""

    def _store(*posts: Post) -> list[Post]:
        for post in posts:
            Post.rows[post.id] = post
        return list(posts)

    return _store


@pytest.fixture
def client() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def engine(client: AsyncMock) -> AlgoliaEngine:
    return AlgoliaEngine(client)


@pytest.fixture
def soft_delete_engine(client: AsyncMock) -> AlgoliaEngine:
    return AlgoliaEngine(client, soft_delete=True)


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        algolia={"app_id": "TESTAPP", "api_key": "test-key"},
    )
