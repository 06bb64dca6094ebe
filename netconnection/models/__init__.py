"""Result models for netconnection.

These models describe what a RequestDispatcher hands back to its caller:
an ErrorResult on failure, a decoded JSON object on success, and the
localized Messages used to fill ErrorResult.message.
"""

from typing import Any, Protocol

from pydantic import BaseModel

# =============================================================================
# Sentinel Error Codes
# =============================================================================

# Negative so they never collide with an HTTP status code.
UNDEFINED_EXCEPTION = -1
NETWORK_NOT_REACHABLE = -2
API_CALL_FAIL = -3

# =============================================================================
# Message Keys
# =============================================================================

VERIFY_NETWORK_CONNECTIVITY = "verify_you_network_connectivity"
SERVER_CONNECTION_ERROR = "server_connection_error"
EXCEPTION_IN_GATHERING_INFO = "exception_in_gathering_info"

# =============================================================================
# Models
# =============================================================================


class ErrorResult(BaseModel):
    """Failure value delivered to ResultCallback.on_failure.

    Fields:
        code: HTTP status code, or one of the negative sentinel codes
            (UNDEFINED_EXCEPTION, NETWORK_NOT_REACHABLE, API_CALL_FAIL)
        message: Server status text or a localized message
    """

    code: int
    message: str

    model_config = {"frozen": True}


class Messages(BaseModel):
    """Localized strings used for error messages.

    Field names are the lookup keys accepted by `string_for`.
    """

    verify_you_network_connectivity: str = "Please verify your network connectivity."
    server_connection_error: str = "Could not connect to the server."
    exception_in_gathering_info: str = "An error occurred while gathering information."

    model_config = {"frozen": True}

    def string_for(self, key: str) -> str:
        """Look up a localized string by key.

        Raises:
            KeyError: If the key is not a known message.
        """
        if key not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, key)


# =============================================================================
# Collaborator Protocols
# =============================================================================


class StringLookup(Protocol):
    """Anything that can resolve a message key to a localized string."""

    def string_for(self, key: str) -> str: ...


class ResultCallback(Protocol):
    """Receiver of request outcomes.

    Exactly one of these methods is called per submitted request.
    """

    def on_success(self, request_code: int, body: dict[str, Any]) -> None: ...

    def on_failure(self, request_code: int, error: ErrorResult) -> None: ...


__all__ = [
    "UNDEFINED_EXCEPTION",
    "NETWORK_NOT_REACHABLE",
    "API_CALL_FAIL",
    "VERIFY_NETWORK_CONNECTIVITY",
    "SERVER_CONNECTION_ERROR",
    "EXCEPTION_IN_GATHERING_INFO",
    "ErrorResult",
    "Messages",
    "StringLookup",
    "ResultCallback",
]
