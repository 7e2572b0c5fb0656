"""
Task Registry
-------------

Centralized tracking of asyncio tasks created across the application.

Features:
- Register tasks with metadata (category, description)
- Track creation time, completion state, cancellation, errors
- Introspection API for debugging and the shutdown coordinator
- Finished records are pruned so a long-running poll loop (one animation
  task per command) does not grow the registry without bound
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Optional, List, Any
from datetime import datetime, timezone

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.TASK)


# ---------------------------------------------------------------------------
# TASK CATEGORY ENUM
# ---------------------------------------------------------------------------

class TaskCategory(Enum):
    """Logical grouping of asynchronous tasks."""
    DISPATCHER = auto()
    ANIMATION = auto()
    GENERAL = auto()


# ---------------------------------------------------------------------------
# TASK METADATA
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskInfo:
    """Immutable metadata captured at task creation time."""
    id: int
    category: TaskCategory
    description: str
    created_at: str  # ISO UTC string
    created_timestamp: float


@dataclass
class TaskRecord:
    """Internal structure tracking task state."""
    task: asyncio.Task
    info: TaskInfo
    cancelled: bool = False
    finished_with_error: Optional[BaseException] = None
    finished_return: Optional[Any] = None
    finished_at: Optional[str] = None


# ---------------------------------------------------------------------------
# TASK REGISTRY SINGLETON
# ---------------------------------------------------------------------------

class TaskRegistry:
    """
    Global registry for all asyncio tasks in the application.

    Responsibilities:
    - Track tasks and metadata
    - Detect and log task failures
    - Assist shutdown coordinator by exposing active / failed tasks
    """

    _instance: Optional["TaskRegistry"] = None

    def __init__(self, keep_finished: int = 64) -> None:
        self._records: Dict[int, TaskRecord] = {}
        self._next_id: int = 1
        self._keep_finished = keep_finished

    # -----------------------------
    # Singleton accessor
    # -----------------------------
    @classmethod
    def instance(cls) -> "TaskRegistry":
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Drop the singleton (tests start from an empty registry)."""
        cls._instance = None

    # -----------------------------
    # Register new task
    # -----------------------------
    def register(
        self,
        task: asyncio.Task,
        category: TaskCategory,
        description: str
    ) -> int:
        """Register a new task with metadata."""
        task_id = self._next_id
        self._next_id += 1

        now = datetime.now(timezone.utc)
        info = TaskInfo(
            id=task_id,
            category=category,
            description=description,
            created_at=now.isoformat(),
            created_timestamp=now.timestamp(),
        )

        self._records[task_id] = TaskRecord(task=task, info=info)

        log.debug(f"[Task {task_id}] Registered ({category.name}) - {description}")

        task.add_done_callback(self._on_task_done)
        self._prune_finished()

        return task_id

    # -----------------------------
    # Internal completion handler
    # -----------------------------
    def _on_task_done(self, task: asyncio.Task) -> None:
        """Internal callback whenever a task finishes."""
        record = self._get_record_by_task(task)
        if record is None:
            return

        record.finished_at = datetime.now(timezone.utc).isoformat()

        if task.cancelled():
            record.cancelled = True
            log.debug(f"[Task {record.info.id}] Cancelled")
            return

        exc = task.exception()
        if exc:
            record.finished_with_error = exc
            log.error(
                f"[Task {record.info.id}] FAILED: {exc}",
                task=record.info.description,
                error_type=type(exc).__name__
            )
        else:
            record.finished_return = task.result()
            log.debug(f"[Task {record.info.id}] Completed successfully")

    def _prune_finished(self) -> None:
        """Forget the oldest finished, non-failed records beyond the keep limit."""
        finished = [
            task_id for task_id, r in self._records.items()
            if r.task.done() and r.finished_with_error is None
        ]
        for task_id in finished[:max(0, len(finished) - self._keep_finished)]:
            del self._records[task_id]

    def _get_record_by_task(self, task: asyncio.Task) -> Optional[TaskRecord]:
        for record in self._records.values():
            if record.task is task:
                return record
        return None

    # -----------------------------
    # Public API
    # -----------------------------

    def list_all(self) -> List[TaskRecord]:
        return list(self._records.values())

    def active(self) -> List[TaskRecord]:
        """Return only tasks that are still running."""
        return [r for r in self._records.values() if not r.task.done()]

    def failed(self) -> List[TaskRecord]:
        """Return tasks that ended with an exception."""
        return [r for r in self._records.values() if r.finished_with_error is not None]

    def cancelled(self) -> List[TaskRecord]:
        return [r for r in self._records.values() if r.cancelled]

    def summary(self) -> str:
        """Return human-readable summary for logs."""
        return (
            f"Tasks: total={len(self._records)}, running={len(self.active())}, "
            f"failed={len(self.failed())}, cancelled={len(self.cancelled())}"
        )

    def get_tasks_for_shutdown(
        self,
        exclude: Optional[List[asyncio.Task]] = None
    ) -> List[asyncio.Task]:
        """Return all tasks that should be cancelled during shutdown."""
        exclude = exclude or []
        tasks = [
            r.task for r in self._records.values()
            if not r.task.done() and r.task not in exclude
        ]

        log.debug(f"Shutdown: {len(tasks)} tasks to cancel")
        return tasks


# ---------------------------------------------------------------------------
# Convenience wrapper function
# ---------------------------------------------------------------------------

def create_tracked_task(
    coro,
    *,
    category: TaskCategory,
    description: str
) -> asyncio.Task:
    """
    Create and register a task in a single call.
    """
    task = asyncio.get_running_loop().create_task(coro, name=description)

    TaskRegistry.instance().register(
        task=task,
        category=category,
        description=description
    )

    return task
