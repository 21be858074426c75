"""Search builder — Engine-independent description of a search query."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from indexsync.models.searchable import SOFT_DELETE_FIELD

SearchCallback = Callable[[Any, str, dict[str, Any]], Awaitable[Any]]
"""Raw search override: ``callback(client, query, options)``."""

QueryCallback = Callable[[Any], Any]
"""Customizes the local record fetch that follows a search."""


class SearchBuilder(BaseModel):
    """Query state read by search engines.

    Mutators return the builder so calls can be chained::

        builder = (
            SearchBuilder(model=Post, query="solar")
            .where("published", True)
            .where_in("category_id", [1, 2])
            .take(20)
        )
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    model: Any = Field(default=None, description="Searchable record type the results map to")
    query: str = Field(default="", description="Full-text query string")
    callback: SearchCallback | None = Field(
        default=None,
        description="Raw search override; replaces the engine's own search call",
    )
    query_callback: QueryCallback | None = Field(
        default=None,
        description="Hook applied by the record type when fetching local records",
    )
    index: str | None = Field(default=None, description="Explicit index name (overrides the model's)")
    wheres: dict[str, Any] = Field(default_factory=dict, description="Equality filters")
    where_ins: dict[str, list[Any]] = Field(default_factory=dict, description="Inclusion filters")
    where_not_ins: dict[str, list[Any]] = Field(default_factory=dict, description="Exclusion filters")
    limit: int | None = Field(default=None, ge=1, description="Maximum number of hits")
    options: dict[str, Any] = Field(default_factory=dict, description="Extra engine-specific search options")

    @classmethod
    def for_model(
        cls,
        model: Any,
        query: str = "",
        callback: SearchCallback | None = None,
        soft_delete: bool = False,
    ) -> SearchBuilder:
        """Create a builder for ``model``.

        When soft deletes are enabled and the model supports them, trashed
        records are excluded unless ``with_trashed()`` or ``only_trashed()``
        is called.
        """
        builder = cls(model=model, query=query, callback=callback)
        if soft_delete and getattr(model, "soft_deletes", False):
            builder.wheres[SOFT_DELETE_FIELD] = 0
        return builder

    def where(self, field: str, value: Any) -> SearchBuilder:
        self.wheres[field] = value
        return self

    def where_in(self, field: str, values: Iterable[Any]) -> SearchBuilder:
        self.where_ins[field] = list(values)
        return self

    def where_not_in(self, field: str, values: Iterable[Any]) -> SearchBuilder:
        self.where_not_ins[field] = list(values)
        return self

    def within(self, index: str) -> SearchBuilder:
        self.index = index
        return self

    def take(self, limit: int) -> SearchBuilder:
        self.limit = limit
        return self

    def with_options(self, options: dict[str, Any]) -> SearchBuilder:
        self.options.update(options)
        return self

    def query_using(self, callback: QueryCallback) -> SearchBuilder:
        self.query_callback = callback
        return self

    def with_trashed(self) -> SearchBuilder:
        self.wheres.pop(SOFT_DELETE_FIELD, None)
        return self

    def only_trashed(self) -> SearchBuilder:
        self.wheres[SOFT_DELETE_FIELD] = 1
        return self
