"""Algolia client interface — The subset of the Algolia API used by the engine.

The engine depends on this protocol rather than on the concrete client so
that only the operations it needs are reachable through it. The official
``algoliasearch`` v4 async ``SearchClient`` satisfies it.
"""

from __future__ import annotations

from typing import Any, Protocol

from indexsync.engines.base.exceptions import ConfigurationError


class AlgoliaClient(Protocol):
    """Async Algolia search client operations used by ``AlgoliaEngine``."""

    async def save_objects(self, index_name: str, objects: list[dict[str, Any]], **kwargs: Any) -> Any: ...

    async def delete_objects(self, index_name: str, object_ids: list[str], **kwargs: Any) -> Any: ...

    async def clear_objects(self, index_name: str, **kwargs: Any) -> Any: ...

    async def delete_index(self, index_name: str, **kwargs: Any) -> Any: ...

    async def search_single_index(
        self, index_name: str, search_params: dict[str, Any] | None = None, **kwargs: Any
    ) -> Any: ...

    async def close(self) -> None: ...


def create_client(app_id: str, api_key: str, **kwargs: Any) -> AlgoliaClient:
    """Create the official async Algolia ``SearchClient``.

    Args:
        app_id: Algolia application ID.
        api_key: Algolia API key with write access to the indexes in use.
        **kwargs: Additional keyword arguments forwarded to ``SearchClient``.

    Raises:
        ConfigurationError: If ``algoliasearch`` is not installed.
    """
    try:
        from algoliasearch.search.client import SearchClient
    except ImportError as e:
        raise ConfigurationError(
            "algoliasearch package is required.  Install with: pip install 'algoliasearch>=4'"
        ) from e

    return SearchClient(app_id, api_key, **kwargs)
