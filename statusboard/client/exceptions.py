"""Client-side exceptions."""


class ApiError(Exception):
    """A non-2xx response from the API."""

    def __init__(self, status_code: int, error: str, code: str | None = None):
        self.status_code = status_code
        self.error = error
        self.code = code
        super().__init__(error)


class SessionExpiredError(ApiError):
    """The server rejected our token with a 401; the stored token was discarded."""
