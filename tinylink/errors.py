"""Error taxonomy for TinyLink.

Each error carries the HTTP status the web layer answers with, so the
exception handlers in ``web_app.app_factory`` stay a single lookup.
"""


class TinyLinkError(Exception):
    """Base class for all TinyLink errors."""

    status_code = 500

    def __init__(self, message: str = "Server error"):
        super().__init__(message)
        self.message = message


class ValidationError(TinyLinkError, ValueError):
    """Malformed or self-referential URL, or malformed code."""

    status_code = 400


class ConflictError(TinyLinkError):
    """The requested code is already taken."""

    status_code = 409


class NotFoundError(TinyLinkError):
    """No link record exists for the code."""

    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class StorageError(TinyLinkError):
    """The underlying store failed, or code allocation ran out of attempts."""

    status_code = 500
