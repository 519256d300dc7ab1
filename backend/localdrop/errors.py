"""Error taxonomy shared by the registries and the HTTP layer.

Each error carries the HTTP status the API answers with. Nothing here is
fatal to the process; every error is scoped to the request that raised it.
"""


class LocalDropError(Exception):
    """Base class for registry errors surfaced to API clients."""

    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(LocalDropError):
    """Bad input. The caller may resubmit corrected data."""

    status_code = 400
    default_message = "Invalid request"


class NotFoundError(LocalDropError):
    """The referenced entity does not exist (or no longer exists)."""

    status_code = 404
    default_message = "Not found"


class PayloadTooLargeError(LocalDropError):
    status_code = 413
    default_message = "File too large"


class StorageError(LocalDropError):
    """A blob could not be written or removed. Never retried."""

    status_code = 500
    default_message = "File storage failed"


class BlobMissingError(LocalDropError):
    """A file record exists but its blob is gone from disk.

    Kept apart from NotFoundError so "never existed" and "went missing"
    can be told apart.
    """

    status_code = 500
    default_message = "File content is missing"
