"""netconnection: POST helper with designated-thread result callbacks.

Public API:
    RequestDispatcher - Builds and submits POST requests, reports results
    ResultCallback - Protocol for on_success / on_failure receivers
    ErrorResult - Failure value passed to on_failure
    Messages - Localized error messages
    QueueCallbackExecutor, AsyncioCallbackExecutor - Callback thread dispatch
    RouteConnectivityChecker, StaticConnectivityChecker - Pre-flight checks
"""

from netconnection._internal.callbacks import (
    AsyncioCallbackExecutor,
    CallbackExecutor,
    QueueCallbackExecutor,
)
from netconnection._internal.connectivity import (
    ConnectivityChecker,
    RouteConnectivityChecker,
    StaticConnectivityChecker,
)
from netconnection._version import __version__
from netconnection.client import RequestDispatcher
from netconnection.models import (
    API_CALL_FAIL,
    NETWORK_NOT_REACHABLE,
    UNDEFINED_EXCEPTION,
    ErrorResult,
    Messages,
    ResultCallback,
    StringLookup,
)

__all__ = [
    "__version__",
    "RequestDispatcher",
    "ResultCallback",
    "ErrorResult",
    "Messages",
    "StringLookup",
    "UNDEFINED_EXCEPTION",
    "NETWORK_NOT_REACHABLE",
    "API_CALL_FAIL",
    "CallbackExecutor",
    "QueueCallbackExecutor",
    "AsyncioCallbackExecutor",
    "ConnectivityChecker",
    "RouteConnectivityChecker",
    "StaticConnectivityChecker",
]
