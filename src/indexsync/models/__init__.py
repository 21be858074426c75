"""Data models shared by all search engines."""

from indexsync.models.builder import SearchBuilder
from indexsync.models.pagination import Page
from indexsync.models.searchable import PendingRemoval, Searchable

__all__ = ["Page", "PendingRemoval", "SearchBuilder", "Searchable"]
