from indexsync.engines.algolia.client import AlgoliaClient, create_client
from indexsync.engines.algolia.engine import AlgoliaEngine

__all__ = ["AlgoliaClient", "AlgoliaEngine", "create_client"]
