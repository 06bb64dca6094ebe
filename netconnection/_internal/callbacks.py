"""Callback executors that run result callbacks on one designated thread."""

import asyncio
import queue
import threading
import time
from collections.abc import Callable
from typing import Protocol


class CallbackExecutor(Protocol):
    """Schedules zero-argument callables onto a designated thread."""

    def call_soon(self, callback: Callable[[], None]) -> None: ...


class QueueCallbackExecutor:
    """Queue-backed executor owned by the thread that creates it.

    Any thread may call `call_soon`; callbacks only run when the owning
    thread drains the queue with `run_pending` or `wait_for`, so they are
    serialized with the owner's other work.
    """

    def __init__(self) -> None:
        self._queue: queue.SimpleQueue[Callable[[], None]] = queue.SimpleQueue()
        self._owner = threading.get_ident()

    @property
    def owner_thread_id(self) -> int:
        """Identifier of the thread callbacks run on."""
        return self._owner

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._queue.put(callback)

    def run_pending(self) -> int:
        """Run every callback queued so far without blocking.

        Returns:
            Number of callbacks run.

        Raises:
            RuntimeError: If called from a thread other than the owner.
        """
        self._check_owner()
        ran = 0
        while True:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                return ran
            callback()
            ran += 1

    def wait_for(self, count: int, timeout: float | None = None) -> int:
        """Block until `count` callbacks have run.

        Args:
            count: Number of callbacks to run before returning.
            timeout: Maximum seconds to wait, or None to wait forever.

        Returns:
            Number of callbacks run.

        Raises:
            RuntimeError: If called from a thread other than the owner.
            TimeoutError: If fewer than `count` callbacks arrived in time.
        """
        self._check_owner()
        deadline = None if timeout is None else time.monotonic() + timeout
        ran = 0
        while ran < count:
            remaining = None if deadline is None else deadline - time.monotonic()
            if remaining is not None and remaining <= 0:
                raise TimeoutError(f"ran {ran} of {count} callbacks before timeout")
            try:
                callback = self._queue.get(timeout=remaining)
            except queue.Empty:
                continue
            callback()
            ran += 1
        return ran

    def _check_owner(self) -> None:
        if threading.get_ident() != self._owner:
            raise RuntimeError("callbacks must be drained on the owning thread")


class AsyncioCallbackExecutor:
    """Delivers callbacks onto an asyncio event loop's thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop or asyncio.get_running_loop()

    def call_soon(self, callback: Callable[[], None]) -> None:
        self._loop.call_soon_threadsafe(callback)
