"""
Polling Scheduler
=================

Runs a fetch coroutine every ``interval`` seconds and hands the result to
an ``apply`` callback. Polls may overlap when a fetch is slow; each poll
gets a sequence number and a result is only applied if it is newer than
the last applied one, so a slow, superseded poll never overwrites fresher
data. A failed fetch is logged and the previous data stay in place.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional


logger = logging.getLogger(__name__)


class PollScheduler:
    """
    Periodic poller with last-writer-wins by poll sequence.

    Usage:
        scheduler = PollScheduler(fetch_all, store.replace, interval=300)
        scheduler.start()          # inside a running event loop
        ...
        await scheduler.stop()
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        apply: Callable[[Any], None],
        interval: float = 300.0,
        name: str = 'poll',
    ):
        if interval <= 0:
            raise ValueError("Polling interval must be positive")
        self.fetch = fetch
        self.apply = apply
        self.interval = interval
        self.name = name

        self._sequence = 0
        self._applied = 0
        self._task: Optional[asyncio.Task] = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def last_applied_sequence(self) -> int:
        return self._applied

    async def poll_once(self) -> bool:
        """
        Run one poll.

        Returns:
            True if the result was applied, False if the fetch or apply
            failed or a newer poll had already been applied
        """
        self._sequence += 1
        sequence = self._sequence

        try:
            result = await self.fetch()
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.warning("%s #%d: fetch failed, keeping previous data: %s", self.name, sequence, e)
            return False

        if sequence <= self._applied:
            logger.debug("%s #%d: stale result discarded (#%d already applied)",
                         self.name, sequence, self._applied)
            return False

        try:
            self.apply(result)
        except Exception as e:
            logger.warning("%s #%d: apply failed, keeping previous data: %s", self.name, sequence, e)
            return False

        self._applied = sequence
        logger.debug("%s #%d: applied", self.name, sequence)
        return True

    async def _run(self):
        while True:
            task = asyncio.create_task(self.poll_once())
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            await asyncio.sleep(self.interval)

    def start(self) -> asyncio.Task:
        """Start polling (immediately, then every interval). Needs a running loop."""
        if not self.running:
            logger.info("%s: polling every %ss", self.name, self.interval)
            self._task = asyncio.get_running_loop().create_task(self._run())
        return self._task

    async def stop(self):
        """Stop polling and cancel in-flight polls. Safe to call twice."""
        tasks = list(self._in_flight)
        if self._task is not None:
            tasks.append(self._task)
            self._task = None
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
            logger.info("%s: stopped", self.name)
