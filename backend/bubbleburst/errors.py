"""Exception hierarchy for request handling and persistence."""


class BubbleBurstError(Exception):
    """Base exception for the screen coordinator."""


class ValidationError(BubbleBurstError):
    """Request body has the wrong shape or field types. Maps to HTTP 400."""

    def __init__(self, message, details=None):
        self.message = message
        self.details = details or []
        super().__init__(message)


class StorageError(BubbleBurstError):
    """A store operation failed. Maps to HTTP 500."""


class UninitializedStoreError(StorageError):
    """The store has not been bound to a database yet."""
