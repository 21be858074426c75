"""Engine-specific exceptions.

Errors raised by the remote search service are not wrapped; they reach
the caller exactly as the client library raised them.
"""


class EngineError(Exception):
    """Base exception for engine errors."""


class UnsupportedOperationError(EngineError):
    """Raised when an engine cannot perform the requested operation."""


class ConfigurationError(EngineError):
    """Raised when engine configuration is invalid or a dependency is missing."""


class EngineNotFoundError(EngineError):
    """Raised when a requested engine driver is not registered or not initialized."""
