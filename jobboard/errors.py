"""Error taxonomy shared by controllers and routes.

Every error carries the HTTP status it maps to. The app installs a single
handler for ``ListingError`` so controllers never build responses themselves.
"""


class ListingError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ListingError):
    """Missing or malformed required fields."""

    status_code = 400


class AuthError(ListingError):
    """Missing or invalid credentials or bearer token."""

    status_code = 401


class NotFoundError(ListingError):
    """No item matches the requested identifier."""

    status_code = 404


class ConflictError(ListingError):
    status_code = 409


class DownstreamError(ListingError):
    """A store or external-service call failed.

    ``public_message`` is what callers see outside development mode; the
    underlying ``message`` is logged.
    """

    status_code = 500

    def __init__(self, message: str, public_message: str = "Request failed"):
        super().__init__(message)
        self.public_message = public_message


class StoreError(DownstreamError):
    """The document store rejected or failed an operation."""
