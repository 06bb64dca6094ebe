"""Public exceptions for netconnection."""


class NetConnectionError(Exception):
    """Base exception for all netconnection errors."""


class NetConnectionConfigError(NetConnectionError):
    """Configuration error (invalid timeout, worker count, etc.)."""


class ResponseFormatError(NetConnectionError):
    """Response body decoded as JSON but is not a JSON object."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
