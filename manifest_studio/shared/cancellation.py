"""Opt-in timeout and cancellation for awaited operations.

Callers pass an asyncio.Event as a cancellation token; setting it abandons
the pending operation.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from manifest_studio.domain.errors import OperationCancelledError

logger = logging.getLogger(__name__)
T = TypeVar("T")


async def await_cancellable(
    awaitable: Awaitable[T],
    timeout: float | None = None,
    cancel: asyncio.Event | None = None,
) -> T:
    """Await *awaitable*, racing it against *cancel* and *timeout*.

    Args:
        awaitable: Coroutine or future to wait for.
        timeout: Seconds before giving up. None waits forever.
        cancel: Event that aborts the wait when set.

    Returns:
        The awaitable's result.

    Raises:
        OperationCancelledError: cancel was set first.
        TimeoutError: timeout elapsed first.

    """
    if cancel is None:
        if timeout is None:
            return await awaitable
        return await asyncio.wait_for(awaitable, timeout)

    if cancel.is_set():
        if asyncio.iscoroutine(awaitable):
            awaitable.close()
        raise OperationCancelledError("Operation cancelled")

    task = asyncio.ensure_future(awaitable)
    waiter = asyncio.ensure_future(cancel.wait())
    try:
        done, _ = await asyncio.wait(
            {task, waiter},
            timeout=timeout,
            return_when=asyncio.FIRST_COMPLETED,
        )
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if task in done:
        return task.result()

    task.cancel()
    if cancel.is_set():
        logger.debug("Operation cancelled by caller")
        raise OperationCancelledError("Operation cancelled")
    raise TimeoutError(f"Operation timed out after {timeout}s")
