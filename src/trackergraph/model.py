import math
from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class TaskStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class ExecutionStatus(str, Enum):
    """Readiness derived from dependency state; recomputed on every call."""
    DONE = "DONE"
    BLOCKED = "BLOCKED"
    WAITING = "WAITING"
    READY = "READY"


@dataclass(frozen=True)
class Task:
    id: int
    status: TaskStatus = TaskStatus.PENDING
    estimated_effort_hours: Optional[float] = None
    depends_on: FrozenSet[int] = field(default_factory=frozenset)
    name: str = ""
    priority: str = ""

    def __post_init__(self):
        # accept any iterable of ids from callers, store an immutable set
        if not isinstance(self.depends_on, frozenset):
            object.__setattr__(self, 'depends_on', frozenset(self.depends_on))
        if not isinstance(self.status, TaskStatus):
            object.__setattr__(self, 'status', TaskStatus(self.status))


@dataclass(frozen=True)
class CriticalPathResult:
    task_ids: Tuple[int, ...] = ()
    total_duration_days: float = 0.0


@dataclass(frozen=True)
class ScheduleSettings:
    hours_per_day: float = 8.0
    count_done: bool = True


DEFAULT_SETTINGS = ScheduleSettings()


def duration_days(task: Task, settings: ScheduleSettings = DEFAULT_SETTINGS) -> int:
    """Work-days a task contributes to a path: ceil(hours / hours_per_day), at least 1.

    Unset or zero effort still counts one day. With ``count_done`` off, finished
    tasks contribute nothing.
    """
    if not settings.count_done and task.status == TaskStatus.DONE:
        return 0
    hours = task.estimated_effort_hours or 0.0
    return max(1, math.ceil(hours / settings.hours_per_day))
