from indexsync.engines.null.engine import NullEngine

__all__ = ["NullEngine"]
