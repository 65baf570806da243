import asyncio

import pytest

from witsml_client.models.errors import RequestAbortedError, ignore_abort
from witsml_client.shared.abort import AbortSignal


class TestAbortSignal:
    async def test_guard_returns_result_when_not_aborted(self):
        signal = AbortSignal()

        async def work():
            return 42

        assert await signal.guard(work()) == 42

    async def test_abort_cancels_guarded_work(self):
        # Arrange
        signal = AbortSignal()
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def work():
            started.set()
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise

        # Act
        task = asyncio.create_task(signal.guard(work()))
        await started.wait()
        signal.abort("user navigated away")

        # Assert
        with pytest.raises(RequestAbortedError) as exc_info:
            await task
        assert exc_info.value.reason == "user navigated away"
        assert cancelled.is_set()

    def test_abort_is_permanent_and_keeps_first_reason(self):
        signal = AbortSignal()

        signal.abort("first")
        signal.abort("second")

        assert signal.aborted
        assert signal.reason == "first"
        with pytest.raises(RequestAbortedError):
            signal.raise_if_aborted()


class TestIgnoreAbort:
    def test_abort_error_is_swallowed(self):
        ignore_abort(RequestAbortedError())

    def test_other_errors_are_raised(self):
        with pytest.raises(ValueError):
            ignore_abort(ValueError("bad"))


class TestGuardCancellation:
    async def test_cancelling_caller_waits_for_guarded_work_to_finish(self):
        # Arrange
        signal = AbortSignal()
        started = asyncio.Event()
        cleaned_up = asyncio.Event()

        async def work():
            started.set()
            try:
                await asyncio.Event().wait()
            finally:
                cleaned_up.set()

        caller = asyncio.create_task(signal.guard(work()))
        await started.wait()

        # Act
        caller.cancel()

        # Assert
        with pytest.raises(asyncio.CancelledError):
            await caller
        assert cleaned_up.is_set()
