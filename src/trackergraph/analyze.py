import logging
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional

from .model import DEFAULT_SETTINGS, CriticalPathResult, ExecutionStatus, ScheduleSettings, Task, duration_days
from .schedule import _closure, _downstream, compute_critical_path, compute_execution_status, index_tasks

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskAnalysis:
    task_id: int
    execution_status: ExecutionStatus
    upstream: FrozenSet[int] = frozenset()
    downstream: FrozenSet[int] = frozenset()
    blocking_count: int = 0
    duration_days: int = 1
    on_critical_path: bool = False


@dataclass(frozen=True)
class SnapshotAnalysis:
    tasks: Dict[int, TaskAnalysis] = field(default_factory=dict)
    critical_path: CriticalPathResult = CriticalPathResult()
    settings: ScheduleSettings = DEFAULT_SETTINGS


def analyze(tasks: Iterable[Task], settings: Optional[ScheduleSettings] = None) -> SnapshotAnalysis:
    """Recompute every derived value for one task snapshot.

    Raises the engine's ``GraphError`` subclasses unchanged; there is no partial result.
    """
    settings = settings or DEFAULT_SETTINGS
    snapshot = list(tasks)
    statuses = compute_execution_status(snapshot)
    cp = compute_critical_path(snapshot, settings)
    index = index_tasks(snapshot); succ = _downstream(index)
    on_path = set(cp.task_ids); out = {}
    for tid, t in index.items():
        out[tid] = TaskAnalysis(
            task_id=tid,
            execution_status=statuses[tid],
            upstream=frozenset(_closure(tid, lambda n: index[n].depends_on)),
            downstream=frozenset(_closure(tid, succ.__getitem__)),
            blocking_count=len(succ[tid]),
            duration_days=duration_days(t, settings),
            on_critical_path=tid in on_path,
        )
    logger.debug('analyzed %d tasks, critical path %s', len(out), list(cp.task_ids))
    return SnapshotAnalysis(tasks=out, critical_path=cp, settings=settings)
