"""RequestDispatcher: POST helper with designated-thread result callbacks."""

import os
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from netconnection._internal.callbacks import CallbackExecutor
from netconnection._internal.connectivity import ConnectivityChecker, RouteConnectivityChecker
from netconnection._internal.forms import (
    build_form_request,
    build_json_request,
    fields_from_object,
)
from netconnection._internal.http import (
    DEFAULT_CONNECT_TIMEOUT_MS,
    DEFAULT_MAX_WORKERS,
    HttpTransport,
    create_http_client,
)
from netconnection._internal.redaction import redact_mapping
from netconnection.exceptions import NetConnectionConfigError, ResponseFormatError
from netconnection.models import (
    API_CALL_FAIL,
    EXCEPTION_IN_GATHERING_INFO,
    NETWORK_NOT_REACHABLE,
    SERVER_CONNECTION_ERROR,
    UNDEFINED_EXCEPTION,
    VERIFY_NETWORK_CONNECTIVITY,
    ErrorResult,
    Messages,
    ResultCallback,
    StringLookup,
)

SUCCESS_STATUSES = frozenset({200, 201})
RAW_MESSAGE_STATUSES = frozenset({401, 403})
NOT_FOUND_STATUS = 404


class RequestDispatcher:
    """Issues POST requests and routes each outcome to a ResultCallback.

    Every call returns immediately. The request runs on a worker thread and
    exactly one of `on_success` / `on_failure` is delivered through the
    callback executor, so it runs on the executor's designated thread. The
    one exception is the pre-flight connectivity failure, which is reported
    synchronously before any I/O.

    Errors are never raised out of the post_* methods; every failure becomes
    an `on_failure` call carrying an ErrorResult.

    Use `RequestDispatcher.from_env()` to read timeouts and debug settings
    from environment variables.
    """

    def __init__(
        self,
        callback: ResultCallback | None = None,
        *,
        executor: CallbackExecutor,
        connectivity: ConnectivityChecker | None = None,
        messages: StringLookup | None = None,
        connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS,
        max_workers: int = DEFAULT_MAX_WORKERS,
        debug: bool = False,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            callback: Receiver of request outcomes. If None, outcomes are dropped.
            executor: Runs callbacks on the designated thread.
            connectivity: Pre-flight reachability check. Defaults to a route check.
            messages: Localized message lookup. Defaults to English Messages().
            connect_timeout_ms: Connection establishment timeout in milliseconds.
            max_workers: Number of worker threads performing I/O.
            debug: Enable debug logging to stderr.
            http_client: Pre-built httpx client; replaces the default one.

        Raises:
            NetConnectionConfigError: If the timeout or worker count is not positive.
        """
        if connect_timeout_ms <= 0:
            raise NetConnectionConfigError(
                f"connect_timeout_ms must be positive, got {connect_timeout_ms}"
            )
        if max_workers <= 0:
            raise NetConnectionConfigError(f"max_workers must be positive, got {max_workers}")

        self._callback = callback
        self._executor = executor
        self._connectivity = connectivity or RouteConnectivityChecker()
        self._messages = messages or Messages()
        self._connect_timeout_ms = connect_timeout_ms
        self._max_workers = max_workers
        self._debug = debug
        client = http_client or create_http_client(connect_timeout=connect_timeout_ms / 1000)
        self._transport = HttpTransport(client, max_workers=max_workers)

    @classmethod
    def from_env(
        cls,
        callback: ResultCallback | None = None,
        *,
        executor: CallbackExecutor,
        connectivity: ConnectivityChecker | None = None,
        messages: StringLookup | None = None,
    ) -> "RequestDispatcher":
        """Create a dispatcher configured from environment variables.

        Optional environment variables:
            NETCONNECTION_CONNECT_TIMEOUT_MS: Connect timeout in milliseconds.
            NETCONNECTION_MAX_WORKERS: Number of worker threads.
            NETCONNECTION_DEBUG: Set to "1" to enable debug logging.

        Returns:
            A configured RequestDispatcher.

        Raises:
            ValueError: If a numeric variable is not a valid integer.
            NetConnectionConfigError: If a numeric variable is not positive.
        """
        debug = os.environ.get("NETCONNECTION_DEBUG", "") == "1"
        connect_timeout_ms = int(
            os.environ.get("NETCONNECTION_CONNECT_TIMEOUT_MS", str(DEFAULT_CONNECT_TIMEOUT_MS))
        )
        max_workers = int(os.environ.get("NETCONNECTION_MAX_WORKERS", str(DEFAULT_MAX_WORKERS)))

        return cls(
            callback,
            executor=executor,
            connectivity=connectivity,
            messages=messages,
            connect_timeout_ms=connect_timeout_ms,
            max_workers=max_workers,
            debug=debug,
        )

    def _log_debug(self, message: str) -> None:
        """Log a debug message to stderr if debug mode is enabled."""
        if self._debug:
            import sys

            print(f"[netconnection] {message}", file=sys.stderr)

    # =========================================================================
    # Public POST Operations
    # =========================================================================

    def post_form(self, parameters: Mapping[str, str], url: str, request_code: int) -> None:
        """POST `parameters` as multipart/form-data, one field per entry.

        Args:
            parameters: Form field names and values.
            url: Target URL.
            request_code: Caller token echoed back in the callback.
        """
        self._log_debug(
            f"[{request_code}] POST form {url} fields={redact_mapping(parameters)}"
        )
        self._submit(
            request_code,
            lambda client: build_form_request(client, url, parameters),
        )

    def post_form_object(
        self,
        parameters: Mapping[str, Any] | str,
        url: str,
        request_code: int,
    ) -> None:
        """POST a JSON object's entries as multipart/form-data.

        Each value is stringified (nested objects and arrays become JSON text).

        Args:
            parameters: A JSON object as a mapping, or JSON text of an object.
            url: Target URL.
            request_code: Caller token echoed back in the callback.
        """
        self._log_debug(f"[{request_code}] POST form object {url}")
        self._submit(
            request_code,
            lambda client: build_form_request(client, url, fields_from_object(parameters)),
        )

    def post_json(
        self,
        url: str,
        request_code: int,
        body: str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        """POST `body` verbatim with Content-Type application/json.

        Args:
            url: Target URL.
            request_code: Caller token echoed back in the callback.
            body: JSON text sent as-is.
            headers: Extra request headers, added alongside Content-Type.
        """
        self._log_debug(
            f"[{request_code}] POST json {url} headers={redact_mapping(headers)}"
        )
        self._submit(
            request_code,
            lambda client: build_json_request(client, url, body, headers),
        )

    # =========================================================================
    # Submission
    # =========================================================================

    def _submit(
        self,
        request_code: int,
        build: Callable[[httpx.Client], httpx.Request],
    ) -> None:
        if not self._network_connected():
            self._log_debug(f"[{request_code}] Network not reachable, skipping request")
            self._fail(request_code, NETWORK_NOT_REACHABLE, VERIFY_NETWORK_CONNECTIVITY)
            return

        try:
            request = build(self._transport.client)
        except Exception as e:
            self._log_debug(f"[{request_code}] Could not build request: {e!r}")
            self._executor.call_soon(
                lambda: self._fail(request_code, UNDEFINED_EXCEPTION, EXCEPTION_IN_GATHERING_INFO)
            )
            return

        try:
            self._transport.submit(
                request,
                on_response=lambda response: self._deliver(
                    request_code, lambda: self.handle_response(response, request_code)
                ),
                on_error=lambda error: self._deliver(
                    request_code, lambda: self._handle_error(error, request_code)
                ),
            )
        except RuntimeError as e:
            # worker pool already shut down by close()
            self._log_debug(f"[{request_code}] Could not submit request: {e!r}")
            self._executor.call_soon(
                lambda: self._fail(request_code, UNDEFINED_EXCEPTION, EXCEPTION_IN_GATHERING_INFO)
            )

    def _deliver(self, request_code: int, callback: Callable[[], None]) -> None:
        try:
            self._executor.call_soon(callback)
        except Exception as e:
            self._log_debug(f"[{request_code}] Could not deliver result: {e!r}")

    def _network_connected(self) -> bool:
        try:
            return self._connectivity.is_network_connected()
        except Exception as e:
            self._log_debug(f"Connectivity check failed: {e!r}")
            return False

    def _handle_error(self, error: Exception, request_code: int) -> None:
        if isinstance(error, httpx.TransportError):
            self._log_debug(f"[{request_code}] Request failed: {error!r}")
            self._fail(request_code, API_CALL_FAIL, SERVER_CONNECTION_ERROR)
        else:
            self._log_debug(f"[{request_code}] Unexpected error: {error!r}")
            self._fail(request_code, UNDEFINED_EXCEPTION, EXCEPTION_IN_GATHERING_INFO)

    # =========================================================================
    # Response Handling
    # =========================================================================

    def handle_response(self, response: httpx.Response, request_code: int) -> None:
        """Map a received response onto exactly one callback.

        200/201 decode the body as a JSON object (empty body gives {}).
        401/403 fail with the server's status text; 404 fails with a
        localized message; any other status fails with its status text.
        Decoding errors fail with UNDEFINED_EXCEPTION.

        Args:
            response: The received response, body already read.
            request_code: Caller token echoed back in the callback.
        """
        status = response.status_code
        try:
            if status in SUCCESS_STATUSES:
                body = self._decode_body(response)
            elif status in RAW_MESSAGE_STATUSES:
                error = ErrorResult(code=status, message=response.reason_phrase)
            elif status == NOT_FOUND_STATUS:
                error = ErrorResult(
                    code=status,
                    message=self._messages.string_for(SERVER_CONNECTION_ERROR),
                )
            else:
                self._log_debug(f"[{request_code}] Unhandled status {status}")
                error = ErrorResult(code=status, message=response.reason_phrase)
        except ResponseFormatError as e:
            self._log_debug(
                f"[{request_code}] Unexpected body for status {e.status_code}: {e}"
            )
            self._fail(request_code, UNDEFINED_EXCEPTION, EXCEPTION_IN_GATHERING_INFO)
            return
        except Exception as e:
            self._log_debug(f"[{request_code}] Response processing error: {e!r}")
            self._fail(request_code, UNDEFINED_EXCEPTION, EXCEPTION_IN_GATHERING_INFO)
            return

        if self._callback is None:
            return
        if status in SUCCESS_STATUSES:
            self._callback.on_success(request_code, body)
        else:
            self._callback.on_failure(request_code, error)

    @staticmethod
    def _decode_body(response: httpx.Response) -> dict[str, Any]:
        if not response.content.strip():
            return {}
        body = response.json()
        if not isinstance(body, dict):
            raise ResponseFormatError(
                f"expected a JSON object, got {type(body).__name__}",
                status_code=response.status_code,
            )
        return body

    def _fail(self, request_code: int, code: int, message_key: str) -> None:
        if self._callback is None:
            return
        self._callback.on_failure(
            request_code,
            ErrorResult(code=code, message=self._messages.string_for(message_key)),
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def close(self) -> None:
        """Wait for in-flight requests to finish, then release the HTTP client."""
        self._transport.close()

    def __enter__(self) -> "RequestDispatcher":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
