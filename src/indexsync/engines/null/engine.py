"""Null engine — A driver that discards writes and never finds anything.

Useful when search is disabled for an environment (local development,
tests) but code paths still call into an engine.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Sequence
from typing import Any

from indexsync.engines.base.engine import DeleteBatch, SearchEngine
from indexsync.models.builder import SearchBuilder
from indexsync.models.searchable import Searchable


class NullEngine(SearchEngine):
    """Search engine that performs no remote calls."""

    def __init__(self, **kwargs: Any) -> None:
        self._extra_kwargs = kwargs

    @property
    def name(self) -> str:
        return "null"

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def update(self, records: Sequence[Searchable]) -> None:
        pass

    async def delete(self, batch: DeleteBatch) -> None:
        pass

    async def search(self, builder: SearchBuilder) -> dict[str, Any]:
        return {"hits": [], "nbHits": 0}

    async def paginate(self, builder: SearchBuilder, per_page: int, page: int) -> dict[str, Any]:
        return {"hits": [], "nbHits": 0}

    def map_ids(self, results: Any) -> list[Any]:
        return []

    async def map(self, builder: SearchBuilder, results: Any, model: type[Searchable]) -> list[Any]:
        return []

    async def lazy_map(self, builder: SearchBuilder, results: Any, model: type[Searchable]) -> AsyncIterator[Any]:
        return
        yield

    def get_total_count(self, results: Any) -> int:
        return 0

    async def flush(self, model: type[Searchable]) -> None:
        pass

    async def create_index(self, name: str, options: dict[str, Any] | None = None) -> Any:
        return None

    async def delete_index(self, name: str) -> Any:
        return None
