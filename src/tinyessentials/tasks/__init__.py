"""Sequential task queue package.

Submodules:
    queue - SequentialTaskQueue, QueuedId, TaskFactory

Python 3.13+. Zero external dependencies.
"""

from tinyessentials.constants import CANCELLED_TASK_MESSAGE
from tinyessentials.diagnostics import TaskCancelledError
from tinyessentials.enums import EntryMarker
from tinyessentials.tasks.queue import QueuedId, SequentialTaskQueue, TaskFactory

__all__ = [
    "CANCELLED_TASK_MESSAGE",
    "EntryMarker",
    "QueuedId",
    "SequentialTaskQueue",
    "TaskCancelledError",
    "TaskFactory",
]
