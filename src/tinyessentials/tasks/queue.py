"""Sequential task queue with delays, cancellation and fan-out points.

Runs submitted task factories strictly one after another on the running
asyncio event loop. Each submission returns an asyncio.Future settled
with the task's result (or exception).

State machine:
    idle            - nothing picked up; new submissions start processing
    running-single  - one ordinary entry: optional delay, cancellation
                      check, then the task body
    running-group   - a batch of contiguous point entries runs concurrently;
                      the batch as a whole is serial with later entries

Cancellation:
    cancel_task(task_id) removes and rejects a queued entry, wakes and
    rejects an entry waiting out its delay, and blacklists an entry that
    was picked up but has not started. A task body that has started is
    never interrupted. Every path rejects with TaskCancelledError carrying
    CANCELLED_TASK_MESSAGE.

Concurrency:
    Not thread-safe. All methods must be called from the event loop thread
    that owns the queue.

Python 3.13+.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from tinyessentials.constants import CANCELLED_TASK_MESSAGE
from tinyessentials.diagnostics import TaskCancelledError
from tinyessentials.enums import EntryMarker

__all__ = ["QueuedId", "SequentialTaskQueue", "TaskFactory"]

logger = logging.getLogger(__name__)

TaskFactory: TypeAlias = Callable[[], Awaitable[Any]]
"""Zero-argument callable returning an awaitable (e.g. an async function)."""


@dataclass(frozen=True, slots=True)
class QueuedId:
    """Position of a waiting entry that carries an identifier.

    Attributes:
        index: Position in the waiting queue (0 = next to run)
        task_id: Entry identifier
    """

    index: int
    task_id: str


@dataclass(slots=True, eq=False)
class _Entry:
    task: TaskFactory
    future: asyncio.Future[Any]
    task_id: str | None = None
    delay_ms: int | None = None
    marker: EntryMarker | None = None


@dataclass(slots=True, eq=False)
class _PendingDelay:
    handle: asyncio.TimerHandle
    waiter: asyncio.Future[None] = field(repr=False)


def _wake(waiter: asyncio.Future[None]) -> None:
    if not waiter.done():
        waiter.set_result(None)


class SequentialTaskQueue:
    """Serial executor for asynchronous tasks.

    Example:
        >>> async def main() -> list[str]:
        ...     queue = SequentialTaskQueue()
        ...     order: list[str] = []
        ...
        ...     async def job(name: str) -> str:
        ...         order.append(name)
        ...         return name
        ...
        ...     first = queue.enqueue(lambda: job("a"), task_id="a")
        ...     second = queue.enqueue(lambda: job("b"), delay_ms=10)
        ...     await asyncio.gather(first, second)
        ...     return order
        >>> asyncio.run(main())
        ['a', 'b']
    """

    __slots__ = ("_blacklist", "_delays", "_picked", "_queue", "_runner", "_running")

    def __init__(self) -> None:
        self._queue: list[_Entry] = []
        self._running = False
        # Entries taken off the queue whose body has not started yet
        self._picked: list[_Entry] = []
        self._delays: dict[str, _PendingDelay] = {}
        self._blacklist: set[str] = set()
        self._runner: asyncio.Task[None] | None = None

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------

    def enqueue(
        self,
        task: TaskFactory,
        delay_ms: int | None = None,
        task_id: str | None = None,
    ) -> asyncio.Future[Any]:
        """Append an ordinary entry.

        Args:
            task: Zero-argument callable returning an awaitable
            delay_ms: Milliseconds to wait after pickup, before the body runs
            task_id: Identifier used by cancel_task() and the inspection methods

        Returns:
            Future settled with the task's result or exception

        Raises:
            TypeError: If task is not callable, delay_ms is not an int or
                task_id is not a string
            ValueError: If delay_ms is negative or task_id is empty
            RuntimeError: If called without a running event loop
        """
        self._check_task(task, "enqueue")
        self._check_task_id(task_id, "enqueue")
        if delay_ms is not None:
            if isinstance(delay_ms, bool) or not isinstance(delay_ms, int):
                msg = f"enqueue: 'delay_ms' must be an int or None, got {type(delay_ms).__name__}"
                raise TypeError(msg)
            if delay_ms < 0:
                msg = f"enqueue: 'delay_ms' must be non-negative, got {delay_ms}"
                raise ValueError(msg)

        return self._submit(_Entry(task, self._new_future(), task_id=task_id, delay_ms=delay_ms))

    def enqueue_point(
        self, task: TaskFactory, task_id: str | None = None
    ) -> asyncio.Future[Any]:
        """Append a fan-out point entry.

        Contiguous point entries at the head of the queue run concurrently
        as one batch. On an idle queue the entry starts at once as a batch
        of one.

        Raises:
            TypeError: If task is not callable or task_id is not a string
            ValueError: If task_id is empty
            RuntimeError: If called without a running event loop
        """
        self._check_task(task, "enqueue_point")
        self._check_task_id(task_id, "enqueue_point")
        return self._submit(
            _Entry(task, self._new_future(), task_id=task_id, marker=EntryMarker.POINT)
        )

    # ------------------------------------------------------------------
    # Cancellation and inspection
    # ------------------------------------------------------------------

    def cancel_task(self, task_id: str) -> bool:
        """Cancel an entry that has not started.

        Returns:
            True if a pending delay, a picked-up entry or a queued entry matched
        """
        if not isinstance(task_id, str) or not task_id:
            return False

        cancelled = False

        if any(entry.task_id == task_id for entry in self._picked):
            # Consumed by the check that runs right before the body
            self._blacklist.add(task_id)
            cancelled = True
            pending = self._delays.pop(task_id, None)
            if pending is not None:
                pending.handle.cancel()
                _wake(pending.waiter)

        index = self.get_index_by_id(task_id)
        if index != -1:
            self._reject_cancelled(self._queue.pop(index))
            cancelled = True

        if cancelled:
            logger.debug("Cancelled task %r", task_id)
        return cancelled

    def get_index_by_id(self, task_id: str) -> int:
        """Return the queue position of the first entry with task_id, or -1."""
        for index, entry in enumerate(self._queue):
            if entry.task_id == task_id:
                return index
        return -1

    def get_queued_ids(self) -> list[QueuedId]:
        """List waiting entries that carry an identifier, in queue order."""
        return [
            QueuedId(index=index, task_id=entry.task_id)
            for index, entry in enumerate(self._queue)
            if entry.task_id is not None
        ]

    def reorder_queue(self, from_index: int, to_index: int) -> None:
        """Move a waiting entry. Out-of-range or non-int indexes are ignored."""
        size = len(self._queue)
        for index in (from_index, to_index):
            if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < size:
                return
        entry = self._queue.pop(from_index)
        self._queue.insert(to_index, entry)

    def is_running(self) -> bool:
        """True while an entry (or a batch of point entries) is being processed."""
        return self._running

    def __len__(self) -> int:
        """Number of entries waiting to be picked up."""
        return len(self._queue)

    def __repr__(self) -> str:
        return f"SequentialTaskQueue(waiting={len(self._queue)}, running={self._running})"

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @staticmethod
    def _check_task(task: object, operation: str) -> None:
        if not callable(task):
            msg = f"{operation}: 'task' must be callable, got {type(task).__name__}"
            raise TypeError(msg)

    @staticmethod
    def _check_task_id(task_id: object, operation: str) -> None:
        if task_id is None:
            return
        if not isinstance(task_id, str):
            msg = f"{operation}: 'task_id' must be a string or None, got {type(task_id).__name__}"
            raise TypeError(msg)
        if not task_id:
            msg = f"{operation}: 'task_id' must not be empty"
            raise ValueError(msg)

    @staticmethod
    def _new_future() -> asyncio.Future[Any]:
        return asyncio.get_running_loop().create_future()

    def _submit(self, entry: _Entry) -> asyncio.Future[Any]:
        self._queue.append(entry)
        self._process_queue()
        return entry.future

    def _process_queue(self) -> None:
        if self._running or not self._queue:
            return
        self._running = True

        head = self._queue.pop(0)
        if head.marker is EntryMarker.POINT:
            batch = [head]
            while self._queue and self._queue[0].marker is EntryMarker.POINT:
                batch.append(self._queue.pop(0))
            self._picked.extend(batch)
            logger.debug("Starting batch of %d point tasks", len(batch))
            runner = self._run_group(batch)
        else:
            self._picked.append(head)
            runner = self._run_single(head)

        self._runner = asyncio.get_running_loop().create_task(runner)

    async def _run_single(self, entry: _Entry) -> None:
        try:
            await self._execute(entry)
        finally:
            self._finish()

    async def _run_group(self, batch: list[_Entry]) -> None:
        try:
            await asyncio.gather(*(self._execute(entry) for entry in batch), return_exceptions=True)
        finally:
            self._finish()

    def _finish(self) -> None:
        self._running = False
        self._runner = None
        self._process_queue()

    async def _execute(self, entry: _Entry) -> None:
        """Run one entry and settle its future. Task errors never escape."""
        future = entry.future
        try:
            if entry.delay_ms and not self._is_blacklisted(entry):
                await self._wait_delay(entry, entry.delay_ms)

            if self._consume_blacklisted(entry):
                self._reject_cancelled(entry)
                return
            if future.done():
                # Caller cancelled the returned future
                return

            self._picked.remove(entry)
            logger.debug("Running task %r", entry.task_id)
            result = await entry.task()
        except asyncio.CancelledError:
            if not future.done():
                future.cancel()
            raise
        except Exception as e:
            logger.debug("Task %r failed: %s", entry.task_id, e)
            if not future.done():
                future.set_exception(e)
        else:
            if not future.done():
                future.set_result(result)
        finally:
            if entry in self._picked:
                self._picked.remove(entry)

    def _is_blacklisted(self, entry: _Entry) -> bool:
        return entry.task_id is not None and entry.task_id in self._blacklist

    def _consume_blacklisted(self, entry: _Entry) -> bool:
        task_id = entry.task_id
        if task_id is None or task_id not in self._blacklist:
            return False
        self._blacklist.discard(task_id)
        return True

    async def _wait_delay(self, entry: _Entry, delay_ms: int) -> None:
        loop = asyncio.get_running_loop()
        waiter: asyncio.Future[None] = loop.create_future()
        handle = loop.call_later(delay_ms / 1000, _wake, waiter)
        if entry.task_id is not None:
            self._delays[entry.task_id] = _PendingDelay(handle, waiter)
        try:
            await waiter
        finally:
            handle.cancel()
            if entry.task_id is not None:
                pending = self._delays.get(entry.task_id)
                if pending is not None and pending.waiter is waiter:
                    del self._delays[entry.task_id]

    def _reject_cancelled(self, entry: _Entry) -> None:
        if entry in self._picked:
            self._picked.remove(entry)
        if not entry.future.done():
            entry.future.set_exception(
                TaskCancelledError(CANCELLED_TASK_MESSAGE, task_id=entry.task_id)
            )
