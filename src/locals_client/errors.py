"""Exceptions raised by the HTTP layer."""


class LocalsClientError(RuntimeError):
    """Base error for the marketplace client."""


class ApiError(LocalsClientError):
    """The backend answered with a non-2xx status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        payload: dict[str, object] | None = None,
    ) -> None:
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}
        super().__init__(f"HTTP {status_code}: {message}")


class NetworkError(LocalsClientError):
    """No response was received (connection failure or timeout)."""


class LocalFileError(LocalsClientError):
    """A picked local file could not be read."""
