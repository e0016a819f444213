class StoreError(Exception):
    """Base exception for blob and record store failures."""


class NotFoundError(StoreError):
    """Raised when the addressed blob or record does not exist."""


class BlobNotFoundError(NotFoundError):
    """Raised when no blob exists at the given path."""


class RecordNotFoundError(NotFoundError):
    """Raised when no record exists under the given key."""


class StoreUnavailableError(StoreError):
    """Raised when the backing store cannot be reached or rejects the call."""
