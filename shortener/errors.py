"""Error kinds raised by the URL shortener service."""


class ShortenerError(ValueError):
    """Base class for URL shortener failures.

    Each subclass carries the HTTP status the route layer answers with.
    """

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingField(ShortenerError):
    """A required request field was not supplied."""


class InvalidValidity(ShortenerError):
    """Validity is not a positive number of minutes."""


class InvalidUrl(ShortenerError):
    """The original URL is not a valid absolute URL."""


class InvalidShortcodeFormat(ShortenerError):
    """A custom short code is malformed or not allowed."""


class ShortcodeCollision(ShortenerError):
    """A custom short code is already in use."""

    status_code = 409


class NotFound(ShortenerError):
    """Short code is unknown or expired."""

    status_code = 404


class AllocationExhausted(ShortenerError):
    """No free short code was found within the retry limit."""

    status_code = 500


class Internal(ShortenerError):
    """Unexpected failure inside the service."""

    status_code = 500
