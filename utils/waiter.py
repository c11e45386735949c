import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

log = logging.getLogger("pagebot")


async def _maybe_await(result):
    if inspect.isawaitable(result):
        return await result
    return result


def _log_failure(task: asyncio.Task):
    if task.cancelled() or task.exception() is None:
        return
    log.error("event waiter callback failed", exc_info=task.exception())


class EventWaiter:
    """Single-fire conditional waits on top of ``bot.wait_for``.

    Each registration resolves at most once: either with the first event that
    passes ``check`` or with a timeout.
    """

    def __init__(self, bot):
        self.bot = bot

    async def wait(self, event: str, check: Callable[..., bool], timeout: Optional[float] = None) -> Any:
        """Return the first ``event`` matching ``check``; raises asyncio.TimeoutError."""
        return await self.bot.wait_for(event, check=check, timeout=timeout)

    def wait_for_event(
        self,
        event: str,
        check: Callable[..., bool],
        action: Callable[[Any], Any],
        timeout: Optional[float] = None,
        timeout_action: Optional[Callable[[], Any]] = None,
    ) -> asyncio.Task:
        """Callback flavour of :meth:`wait`. Exactly one of the callbacks runs.

        Keep a reference to the returned task and await it (or cancel it) when the
        outcome matters; a callback that raises is logged once the task finishes.
        """

        async def runner():
            try:
                result = await self.wait(event, check, timeout)
            except asyncio.TimeoutError:
                log.debug("wait for %s timed out after %ss", event, timeout)
                if timeout_action is not None:
                    await _maybe_await(timeout_action())
                return
            await _maybe_await(action(result))

        task = asyncio.create_task(runner())
        task.add_done_callback(_log_failure)
        return task
