"""Shared HTTP client configuration and background request transport."""

from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import httpx

from netconnection._version import __version__

DEFAULT_CONNECT_TIMEOUT_MS = 15000
DEFAULT_MAX_WORKERS = 4


def create_http_client(
    *,
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT_MS / 1000,
    base_url: str | None = None,
) -> httpx.Client:
    """Create configured HTTP client.

    Only connection establishment is bounded; reads, writes and pool waits
    are left unbounded.

    Args:
        connect_timeout: Connect timeout in seconds.
        base_url: Optional base URL for all requests.

    Returns:
        Configured httpx.Client instance.
    """
    return httpx.Client(
        timeout=httpx.Timeout(None, connect=connect_timeout),
        base_url=base_url or "",
        headers={"User-Agent": f"netconnection/{__version__}"},
    )


class HttpTransport:
    """Sends prepared requests on worker threads.

    One httpx.Client is shared by every submission; it is safe for
    concurrent use and nothing per-request is stored on it.
    """

    def __init__(
        self,
        client: httpx.Client,
        *,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        self._client = client
        self._pool = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="netconnection",
        )

    @property
    def client(self) -> httpx.Client:
        """The underlying httpx client, used to build requests."""
        return self._client

    def submit(
        self,
        request: httpx.Request,
        on_response: Callable[[httpx.Response], None],
        on_error: Callable[[Exception], None],
    ) -> Future:
        """Send `request` in the background.

        Exactly one of `on_response` / `on_error` is called, on the worker
        thread. The response body is fully read before `on_response` runs.
        """
        return self._pool.submit(self._send, request, on_response, on_error)

    def _send(
        self,
        request: httpx.Request,
        on_response: Callable[[httpx.Response], None],
        on_error: Callable[[Exception], None],
    ) -> None:
        try:
            response = self._client.send(request)
        except Exception as e:
            on_error(e)
            return
        on_response(response)

    def close(self) -> None:
        """Wait for in-flight requests, then close the client."""
        self._pool.shutdown(wait=True)
        self._client.close()
