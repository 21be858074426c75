"""Base engine interface — Abstract classes for index synchronization drivers."""

from indexsync.engines.base.engine import SearchEngine
from indexsync.engines.base.registry import EngineRegistry

__all__ = ["EngineRegistry", "SearchEngine"]
