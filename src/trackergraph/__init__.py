"""Dependency status, critical path and related-task closure over task snapshots."""

from .model import CriticalPathResult, ExecutionStatus, ScheduleSettings, Task, TaskStatus, duration_days
from .schedule import (
    CyclicDependencyError, GraphError, InvalidGraphError, blocking_counts, compute_critical_path,
    compute_execution_status, compute_related_task_ids, downstream_ids, find_cycle, topo_order, upstream_ids,
)
from .analyze import SnapshotAnalysis, TaskAnalysis, analyze

__all__ = [
    "Task",
    "TaskStatus",
    "ExecutionStatus",
    "CriticalPathResult",
    "ScheduleSettings",
    "duration_days",
    "GraphError",
    "InvalidGraphError",
    "CyclicDependencyError",
    "compute_execution_status",
    "compute_critical_path",
    "compute_related_task_ids",
    "upstream_ids",
    "downstream_ids",
    "blocking_counts",
    "topo_order",
    "find_cycle",
    "analyze",
    "SnapshotAnalysis",
    "TaskAnalysis",
]
