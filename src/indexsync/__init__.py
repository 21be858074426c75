"""indexsync — Keep application records in sync with a hosted search index."""

__version__ = "0.1.0"
