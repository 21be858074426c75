"""Algolia engine — Keeps Algolia indexes in sync with local records.

Writes go through the official ``algoliasearch`` v4 async client; searches
are translated from a ``SearchBuilder`` into Algolia search parameters, and
hits are mapped back to local records in relevance order.

Usage::

    engine = AlgoliaEngine(app_id="YourAppID", api_key="YourWriteKey", soft_delete=True)
    await engine.initialize()

    await engine.update(posts)
    builder = SearchBuilder.for_model(Post, "solar", soft_delete=True).where_in("category_id", [1, 2])
    posts = await engine.get(builder)
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any

from indexsync.engines.algolia.client import AlgoliaClient, create_client
from indexsync.engines.base.engine import DeleteBatch, SearchEngine
from indexsync.engines.base.exceptions import ConfigurationError, UnsupportedOperationError
from indexsync.models.builder import SearchBuilder
from indexsync.models.searchable import PendingRemoval, Searchable

logger = logging.getLogger(__name__)

METADATA_PREFIX = "_"
"""Hit fields starting with this prefix are result metadata (``_highlightResult``, ``_rankingInfo``...)."""

ALWAYS_FALSE_FILTER = "0=1"


class AlgoliaEngine(SearchEngine):
    """Search engine backed by Algolia.

    Either pass a ready ``client`` or the credentials needed to create one
    during ``initialize()``.

    Args:
        client: An object implementing ``AlgoliaClient``.
        app_id: Algolia application ID (used when ``client`` is omitted).
        api_key: Algolia API key (used when ``client`` is omitted).
        soft_delete: Index the ``__soft_deleted`` status of records whose
            type declares ``soft_deletes``.
        **kwargs: Extra keyword arguments forwarded to ``SearchClient``.
    """

    def __init__(
        self,
        client: AlgoliaClient | None = None,
        *,
        app_id: str | None = None,
        api_key: str | None = None,
        soft_delete: bool = False,
        **kwargs: Any,
    ) -> None:
        self._client = client
        self._owns_client = False
        self._app_id = app_id
        self._api_key = api_key
        self._soft_delete = soft_delete
        self._extra_kwargs = kwargs

    @property
    def name(self) -> str:
        return "algolia"

    @property
    def client(self) -> AlgoliaClient:
        if self._client is None:
            raise ConfigurationError("Algolia client not initialized.")
        return self._client

    @property
    def soft_delete(self) -> bool:
        return self._soft_delete

    async def initialize(self) -> None:
        """Create the Algolia client unless one was supplied."""
        if self._client is not None:
            return
        if not self._app_id or not self._api_key:
            raise ConfigurationError("Algolia app_id and api_key are required.")

        self._client = create_client(self._app_id, self._api_key, **self._extra_kwargs)
        self._owns_client = True
        logger.info("Created Algolia client for application %s", self._app_id)

    async def shutdown(self) -> None:
        """Close the Algolia client if this engine created it."""
        if self._client is not None and self._owns_client:
            await self._client.close()
            self._client = None
            self._owns_client = False

    # ── Writes ───────────────────────────────────────────────────────────

    async def update(self, records: Sequence[Searchable]) -> None:
        """Upsert ``records`` into their index.

        Records whose searchable dict is empty are skipped. Client errors
        propagate unchanged.
        """
        if not records:
            return

        index_name = records[0].indexable_as()

        if self._soft_delete and self.uses_soft_delete(records[0]):
            for record in records:
                record.push_soft_delete_metadata()

        objects = []
        for record in records:
            searchable = record.to_searchable_dict()
            if not searchable:
                continue
            objects.append({**searchable, **record.search_metadata(), "objectID": record.get_search_key()})

        if not objects:
            logger.debug("No searchable content in batch of %d for %s", len(records), index_name)
            return

        logger.debug("Saving %d objects to Algolia index %s", len(objects), index_name)
        await self.client.save_objects(index_name, objects)

    async def delete(self, batch: DeleteBatch) -> None:
        """Remove ``batch`` from its index.

        ``batch`` is either a sequence of live records or a ``PendingRemoval``
        that already carries the primary keys.
        """
        match batch:
            case PendingRemoval():
                if batch.is_empty():
                    return
                index_name = batch.index_name
                keys = batch.keys()
            case _:
                if not batch:
                    return
                index_name = batch[0].indexable_as()
                keys = [record.get_search_key() for record in batch]

        logger.debug("Deleting %d objects from Algolia index %s", len(keys), index_name)
        await self.client.delete_objects(index_name, [str(key) for key in keys])

    # ── Queries ──────────────────────────────────────────────────────────

    async def search(self, builder: SearchBuilder) -> Any:
        options = {
            "numericFilters": self.filters(builder),
            "hitsPerPage": builder.limit,
        }
        return await self._perform_search(builder, {k: v for k, v in options.items() if v})

    async def paginate(self, builder: SearchBuilder, per_page: int, page: int) -> Any:
        return await self._perform_search(
            builder,
            {
                "numericFilters": self.filters(builder),
                "hitsPerPage": per_page,
                "page": page - 1,
            },
        )

    async def _perform_search(self, builder: SearchBuilder, options: dict[str, Any]) -> Any:
        if not builder.index and builder.model is None:
            raise ConfigurationError("An explicit index or a searchable model is required to search.")

        index_name = builder.index or builder.model.searchable_as()
        options = {**builder.options, **options}

        if builder.callback is not None:
            return await builder.callback(self.client, builder.query, options)

        logger.debug("Searching Algolia index %s for %r", index_name, builder.query)
        response = await self.client.search_single_index(index_name, {"query": builder.query, **options})
        return _as_dict(response)

    def filters(self, builder: SearchBuilder) -> list[str | list[str]]:
        """Build Algolia ``numericFilters`` from the builder's where clauses.

        Top-level entries are ANDed; a nested list is ORed. An inclusion
        filter with no values becomes an always-false condition.
        """
        filters: list[str | list[str]] = [f"{key}={_format(value)}" for key, value in builder.wheres.items()]

        for key, values in builder.where_ins.items():
            if not values:
                filters.append(ALWAYS_FALSE_FILTER)
            else:
                filters.append([f"{key}={_format(value)}" for value in values])

        for key, values in builder.where_not_ins.items():
            filters.extend(f"{key}!={_format(value)}" for value in values)

        return filters

    def map_ids(self, results: Any) -> list[Any]:
        return [hit["objectID"] for hit in results["hits"]]

    async def map(self, builder: SearchBuilder, results: Any, model: type[Searchable]) -> list[Any]:
        """Map Algolia hits to local records, preserving hit order.

        Records missing locally are dropped; metadata fields of each hit
        are attached to its record.
        """
        hits = results["hits"]
        if not hits:
            return []

        object_ids = self.map_ids(results)
        positions = _positions(object_ids)

        records = [
            _attach_metadata(record, hits[positions[str(record.get_search_key())]])
            for record in await model.get_search_models_by_ids(builder, object_ids)
            if str(record.get_search_key()) in positions
        ]
        return sorted(records, key=lambda record: positions[str(record.get_search_key())])

    async def lazy_map(self, builder: SearchBuilder, results: Any, model: type[Searchable]) -> AsyncIterator[Any]:
        """Stream-fetch local records for the hits, yielding them in hit order.

        Reordering needs every fetched record, so yielding starts once the
        model's stream is exhausted.
        """
        hits = results["hits"]
        if not hits:
            return

        object_ids = self.map_ids(results)
        positions = _positions(object_ids)

        matched = []
        async for record in model.query_search_models_by_ids(builder, object_ids):
            key = str(record.get_search_key())
            if key in positions:
                matched.append(_attach_metadata(record, hits[positions[key]]))

        matched.sort(key=lambda record: positions[str(record.get_search_key())])
        for record in matched:
            yield record

    def get_total_count(self, results: Any) -> int:
        return results["nbHits"]

    # ── Index lifecycle ──────────────────────────────────────────────────

    async def flush(self, model: type[Searchable]) -> None:
        index_name = model.indexable_as()
        logger.info("Clearing all objects from Algolia index %s", index_name)
        await self.client.clear_objects(index_name)

    async def create_index(self, name: str, options: dict[str, Any] | None = None) -> Any:
        raise UnsupportedOperationError("Algolia indexes are created automatically upon adding objects.")

    async def delete_index(self, name: str) -> Any:
        logger.info("Deleting Algolia index %s", name)
        return await self.client.delete_index(name)

    @staticmethod
    def uses_soft_delete(record: Searchable) -> bool:
        return bool(getattr(type(record), "soft_deletes", False))


# ── Helpers ──────────────────────────────────────────────────────────────


def _format(value: Any) -> Any:
    """Render a filter value; booleans become ``1``/``0``."""
    return int(value) if isinstance(value, bool) else value


def _positions(object_ids: list[Any]) -> dict[str, int]:
    # Algolia object IDs are strings; local keys are compared in string form.
    return {str(object_id): position for position, object_id in enumerate(object_ids)}


def _attach_metadata(record: Searchable, hit: dict[str, Any]) -> Searchable:
    for key, value in hit.items():
        if key.startswith(METADATA_PREFIX):
            record.with_search_metadata(key, value)
    return record


def _as_dict(response: Any) -> Any:
    """Normalize a client response model to a plain dict keyed by wire names."""
    if isinstance(response, dict):
        return response
    to_dict = getattr(response, "to_dict", None)
    return to_dict() if callable(to_dict) else response
