"""Cooperative cancellation for in-flight requests."""

from __future__ import annotations

import asyncio
from typing import Awaitable, TypeVar

from witsml_client.models.errors import RequestAbortedError

T = TypeVar("T")


class AbortSignal:
    """Caller-owned cancellation handle for one or more requests.

    Calling `abort()` makes every awaitable currently guarded by this signal
    fail with RequestAbortedError. Aborting is permanent.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def aborted(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        return self._reason

    def abort(self, reason: str | None = None) -> None:
        """Trigger the signal. Subsequent calls are ignored."""
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    def raise_if_aborted(self) -> None:
        if self.aborted:
            raise RequestAbortedError(self._reason)

    async def guard(self, awaitable: Awaitable[T]) -> T:
        """Await `awaitable` unless the signal fires first.

        If the signal wins, the awaitable is cancelled and RequestAbortedError
        is raised. If the surrounding task is cancelled, the awaitable is
        cancelled with it.

        Args:
            awaitable: Coroutine or future to race against the signal.

        Returns:
            The awaitable's result.

        Raises:
            RequestAbortedError: If the signal fired before completion.
        """
        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter}, return_when=asyncio.FIRST_COMPLETED
            )
        except asyncio.CancelledError:
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)
            raise
        finally:
            waiter.cancel()

        if task in done:
            return task.result()

        task.cancel()
        await asyncio.gather(task, return_exceptions=True)
        raise RequestAbortedError(self._reason)
