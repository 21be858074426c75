"""Base search engine — Abstract interface for all index synchronization drivers.

Every search backend must implement this interface to integrate with indexsync.
The engine is responsible for:
  1. Pushing record upserts and deletions to the remote index
  2. Translating a ``SearchBuilder`` into the backend's query request
  3. Mapping raw results back to local records in relevance order
  4. Managing the remote index lifecycle (flush, create, delete)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Sequence
from typing import Any

from indexsync.models.builder import SearchBuilder
from indexsync.models.pagination import Page
from indexsync.models.searchable import PendingRemoval, Searchable

DeleteBatch = Sequence[Searchable] | PendingRemoval
"""Input to ``SearchEngine.delete``: live records or a key-only pending removal."""


class SearchEngine(ABC):
    """Abstract base class for search engines.

    Engines are stateless between calls: every operation is a one-shot
    request against the backend. Client lifecycle is handled by
    ``initialize()`` and ``shutdown()``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique driver name (e.g., 'algolia', 'null')."""

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend client. Called once before first use."""

    @abstractmethod
    async def shutdown(self) -> None:
        """Release the backend client and any connections it holds."""

    # ── Writes ───────────────────────────────────────────────────────────

    @abstractmethod
    async def update(self, records: Sequence[Searchable]) -> None:
        """Upsert the given records into their index."""

    @abstractmethod
    async def delete(self, batch: DeleteBatch) -> None:
        """Remove the given records from their index."""

    # ── Queries ──────────────────────────────────────────────────────────

    @abstractmethod
    async def search(self, builder: SearchBuilder) -> Any:
        """Run the search described by ``builder`` and return raw results."""

    @abstractmethod
    async def paginate(self, builder: SearchBuilder, per_page: int, page: int) -> Any:
        """Run one page of the search described by ``builder``.

        Args:
            builder: Query state.
            per_page: Page size.
            page: 1-based page number.
        """

    @abstractmethod
    def map_ids(self, results: Any) -> list[Any]:
        """Return the record keys of ``results`` in hit order."""

    @abstractmethod
    async def map(self, builder: SearchBuilder, results: Any, model: type[Searchable]) -> list[Any]:
        """Map raw results to local records of type ``model``, in hit order."""

    @abstractmethod
    def lazy_map(self, builder: SearchBuilder, results: Any, model: type[Searchable]) -> AsyncIterator[Any]:
        """Like ``map``, but streams local records from the model's cursor."""

    @abstractmethod
    def get_total_count(self, results: Any) -> int:
        """Total number of matches reported in ``results``."""

    # ── Index lifecycle ──────────────────────────────────────────────────

    @abstractmethod
    async def flush(self, model: type[Searchable]) -> None:
        """Remove every record of ``model`` from its index."""

    @abstractmethod
    async def create_index(self, name: str, options: dict[str, Any] | None = None) -> Any:
        """Create a search index."""

    @abstractmethod
    async def delete_index(self, name: str) -> Any:
        """Delete a search index."""

    # ── Conveniences ─────────────────────────────────────────────────────

    async def keys(self, builder: SearchBuilder) -> list[Any]:
        """Search and return only the matching record keys."""
        return self.map_ids(await self.search(builder))

    async def get(self, builder: SearchBuilder) -> list[Any]:
        """Search and return the matching local records in relevance order."""
        return await self.map(builder, await self.search(builder), builder.model)

    async def cursor(self, builder: SearchBuilder) -> AsyncIterator[Any]:
        """Search and stream the matching local records in relevance order."""
        results = await self.search(builder)
        async for record in self.lazy_map(builder, results, builder.model):
            yield record

    async def fetch_page(self, builder: SearchBuilder, per_page: int, page: int = 1) -> Page:
        """Search one page and return its mapped records with the total count."""
        results = await self.paginate(builder, per_page, page)
        return Page(
            items=await self.map(builder, results, builder.model),
            total=self.get_total_count(results),
            per_page=per_page,
            current_page=page,
        )
