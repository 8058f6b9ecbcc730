"""Error types raised by the link allocator, resolver and store."""


class LinkError(Exception):
    """Base class for link errors that map onto an HTTP status."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidInput(LinkError):
    """Malformed target URL or short code."""

    status_code = 400


class Conflict(LinkError):
    """Short code is already taken."""

    status_code = 409


class NotFound(LinkError):
    """No link exists for the requested code."""

    status_code = 404

    def __init__(self, message: str = "Link not found"):
        super().__init__(message)


class ExhaustedRetries(LinkError):
    """Every generated candidate code collided with an existing one."""

    status_code = 500
