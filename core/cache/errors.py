"""Errors raised by the application cache write path."""


class CacheError(Exception):
    """Base exception for application cache errors."""
    pass


class SerializationError(CacheError):
    """Raised when a value cannot be encoded as a JSON document."""
    pass


class StorageError(CacheError):
    """Raised when the cache table could not be written."""
    pass
