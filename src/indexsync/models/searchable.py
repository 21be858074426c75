"""Searchable record contract — What a record type must provide to be indexed.

Record types from any ORM (or plain classes) subclass ``Searchable`` and
implement the two abstract hooks:

  1. ``to_searchable_dict()`` — the document fields pushed to the index
  2. ``get_search_models_by_ids()`` — bulk fetch of local records by key

Everything else (index naming, keys, result metadata, soft-delete status)
has a sensible default that can be overridden per type.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Iterable, Sequence
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from indexsync.models.builder import SearchBuilder

SOFT_DELETE_FIELD = "__soft_deleted"
"""Metadata field carrying the soft-delete status of an indexed record."""


class Searchable(ABC):
    """Mixin for record types that are synchronized into a search index.

    Class attributes:
        search_index: Index name. Defaults to the lower-cased class name.
        search_key_name: Attribute holding the record's identifier.
        soft_deletes: Whether this record type supports soft deletion.
            Engines configured with soft-delete support index the
            ``__soft_deleted`` status only for types that set this flag.
    """

    search_index: ClassVar[str | None] = None
    search_key_name: ClassVar[str] = "id"
    soft_deletes: ClassVar[bool] = False

    @classmethod
    def searchable_as(cls) -> str:
        """Index name used when searching."""
        return cls.search_index or cls.__name__.lower()

    @classmethod
    def indexable_as(cls) -> str:
        """Index name used when writing. Same as ``searchable_as`` unless overridden."""
        return cls.searchable_as()

    @abstractmethod
    def to_searchable_dict(self) -> dict[str, Any]:
        """Return the searchable fields of this record.

        An empty dict means the record has nothing to index and will be
        skipped on upsert.
        """

    def get_search_key(self) -> Any:
        return getattr(self, self.search_key_name)

    @classmethod
    def get_search_key_name(cls) -> str:
        return cls.search_key_name

    def search_metadata(self) -> dict[str, Any]:
        """Metadata merged into the indexed document, or attached from a hit."""
        return self.__dict__.setdefault("_search_metadata", {})

    def with_search_metadata(self, key: str, value: Any) -> Searchable:
        self.search_metadata()[key] = value
        return self

    def is_trashed(self) -> bool:
        """Whether the record is soft-deleted. Override for soft-deleting types."""
        return False

    def push_soft_delete_metadata(self) -> Searchable:
        return self.with_search_metadata(SOFT_DELETE_FIELD, 1 if self.is_trashed() else 0)

    @classmethod
    @abstractmethod
    async def get_search_models_by_ids(cls, builder: SearchBuilder, ids: Sequence[Any]) -> list[Any]:
        """Fetch the local records whose keys are in ``ids``.

        Order of the returned records does not matter; the engine
        reorders them to match search relevance.

        Args:
            builder: The builder that produced the search, carrying an
                optional ``query_callback`` to customize the fetch.
            ids: Record keys from the search hits.
        """

    @classmethod
    async def query_search_models_by_ids(cls, builder: SearchBuilder, ids: Sequence[Any]) -> AsyncIterator[Any]:
        """Stream the local records whose keys are in ``ids``.

        The default delegates to ``get_search_models_by_ids``. Types backed
        by a cursor-capable store should override this to stream rows.
        """
        for record in await cls.get_search_models_by_ids(builder, ids):
            yield record


class PendingRemoval(BaseModel):
    """Deletion payload for records that may no longer exist locally.

    Carries only primary keys (under ``key_name``) so that removal from
    the index can happen after the records themselves are gone.
    """

    index_name: str = Field(description="Index the records were written to")
    key_name: str = Field(default="id", description="Payload field holding the record key")
    payloads: list[dict[str, Any]] = Field(default_factory=list, description="Key-bearing payloads")

    def keys(self) -> list[Any]:
        return [payload[self.key_name] for payload in self.payloads]

    def is_empty(self) -> bool:
        return not self.payloads

    @classmethod
    def from_records(cls, records: Iterable[Searchable]) -> PendingRemoval:
        """Capture the keys of ``records`` for deferred removal.

        Raises:
            ValueError: If ``records`` is empty.
        """
        records = list(records)
        if not records:
            raise ValueError("Cannot build a pending removal from an empty batch.")

        first = records[0]
        key_name = first.get_search_key_name()
        return cls(
            index_name=first.indexable_as(),
            key_name=key_name,
            payloads=[{key_name: record.get_search_key()} for record in records],
        )
