import heapq
import logging
from collections.abc import Mapping
from typing import Dict, Iterable, List, Optional, Set

from .model import (
    DEFAULT_SETTINGS, CriticalPathResult, ExecutionStatus, ScheduleSettings, Task, TaskStatus, duration_days,
)

logger = logging.getLogger(__name__)


class GraphError(Exception):
    """Structural problem in a task snapshot. Nothing is computed when raised."""


class InvalidGraphError(GraphError):
    def __init__(self, task_ids, message: str):
        self.task_ids = tuple(task_ids)
        super().__init__(message)


class CyclicDependencyError(GraphError):
    def __init__(self, cycle):
        self.cycle = tuple(cycle)
        loop = ' -> '.join(str(t) for t in self.cycle + self.cycle[:1])
        super().__init__(f'cycle detected: {loop}')


def index_tasks(tasks: Iterable[Task]) -> Dict[int, Task]:
    """Map task id -> task, rejecting duplicate ids, self-dependencies and dangling edges."""
    if isinstance(tasks, Mapping): tasks = tasks.values()
    index: Dict[int, Task] = {}
    for t in tasks:
        if t.id in index: raise InvalidGraphError([t.id], f'Duplicate task id {t.id}')
        index[t.id] = t
    for t in index.values():
        if t.id in t.depends_on: raise InvalidGraphError([t.id], f'Task {t.id} depends on itself')
        missing = sorted(d for d in t.depends_on if d not in index)
        if missing: raise InvalidGraphError([t.id], f'Missing dependency {missing} for {t.id}')
    return index


def _downstream(index: Dict[int, Task]) -> Dict[int, List[int]]:
    succ: Dict[int, List[int]] = {k: [] for k in index}
    for t in index.values():
        for d in t.depends_on: succ[d].append(t.id)
    for v in succ.values(): v.sort()
    return succ


def _extract_cycle(index: Dict[int, Task], leftover: Set[int]) -> List[int]:
    # every task Kahn could not emit still has an unemitted dependency,
    # so following those edges must revisit a node
    node = min(leftover); seen: Dict[int, int] = {}; path: List[int] = []
    while node not in seen:
        seen[node] = len(path); path.append(node)
        node = min(d for d in index[node].depends_on if d in leftover)
    return path[seen[node]:]


def _topo_order(index: Dict[int, Task], succ: Dict[int, List[int]]) -> List[int]:
    indeg = {k: len(t.depends_on) for k, t in index.items()}
    ready = [k for k, v in indeg.items() if v == 0]; heapq.heapify(ready); order = []
    while ready:
        n = heapq.heappop(ready); order.append(n)
        for s in succ[n]:
            indeg[s] -= 1
            if indeg[s] == 0: heapq.heappush(ready, s)
    if len(order) != len(index):
        cycle = _extract_cycle(index, {k for k, v in indeg.items() if v > 0})
        logger.debug('cycle among %d unordered tasks: %s', len(index) - len(order), cycle)
        raise CyclicDependencyError(cycle)
    return order


def downstream_map(tasks: Iterable[Task]) -> Dict[int, List[int]]:
    """Inverse of ``depends_on``: task id -> ids of the tasks it blocks, sorted."""
    return _downstream(index_tasks(tasks))


def topo_order(tasks: Iterable[Task]) -> List[int]:
    """Upstream-first ordering, lowest id first among tasks that are ready together."""
    index = index_tasks(tasks)
    return _topo_order(index, _downstream(index))


def find_cycle(tasks: Iterable[Task]) -> Optional[List[int]]:
    try:
        topo_order(tasks)
    except CyclicDependencyError as e:
        return list(e.cycle)
    return None


def _classify(task: Task, index: Dict[int, Task]) -> ExecutionStatus:
    if task.status == TaskStatus.DONE: return ExecutionStatus.DONE
    unfinished = [index[d].status for d in task.depends_on if index[d].status != TaskStatus.DONE]
    if not unfinished: return ExecutionStatus.READY
    if all(s == TaskStatus.IN_PROGRESS for s in unfinished): return ExecutionStatus.WAITING
    return ExecutionStatus.BLOCKED


def compute_execution_status(tasks: Iterable[Task]) -> Dict[int, ExecutionStatus]:
    index = index_tasks(tasks)
    _topo_order(index, _downstream(index))
    return {tid: _classify(t, index) for tid, t in index.items()}


def _pick(length: Dict[int, int], candidates: List[int]) -> Optional[int]:
    # longest first, lowest id on ties
    if not candidates: return None
    return max(candidates, key=lambda c: (length[c], -c))


def compute_critical_path(tasks: Iterable[Task], settings: Optional[ScheduleSettings] = None) -> CriticalPathResult:
    """Longest root-to-leaf chain along "blocks" edges, weighted by work-days.

    Each task's best continuation is memoised by id within this call, filled in
    reverse topological order so every edge is examined once.
    """
    settings = settings or DEFAULT_SETTINGS
    index = index_tasks(tasks)
    if not index: return CriticalPathResult()
    succ = _downstream(index); order = _topo_order(index, succ)
    length: Dict[int, int] = {}; nxt: Dict[int, Optional[int]] = {}
    for tid in reversed(order):
        tail = _pick(length, succ[tid])
        nxt[tid] = tail
        length[tid] = duration_days(index[tid], settings) + (length[tail] if tail is not None else 0)
    roots = [tid for tid, t in index.items() if not t.depends_on]
    start = _pick(length, roots); path = []; node = start
    while node is not None:
        path.append(node); node = nxt[node]
    logger.debug('critical path %s: %d days over %d tasks', path, length[start], len(index))
    return CriticalPathResult(task_ids=tuple(path), total_duration_days=float(length[start]))


def _closure(start: int, neighbours) -> Set[int]:
    seen: Set[int] = set(); stack = [start]
    while stack:
        for m in neighbours(stack.pop()):
            if m not in seen:
                seen.add(m); stack.append(m)
    seen.discard(start)
    return seen


def _require(index: Dict[int, Task], task_id: int) -> None:
    if task_id not in index: raise InvalidGraphError([task_id], f'Unknown task {task_id}')


def upstream_ids(tasks: Iterable[Task], task_id: int) -> Set[int]:
    """Every task ``task_id`` transitively depends on."""
    index = index_tasks(tasks); _require(index, task_id)
    return _closure(task_id, lambda n: index[n].depends_on)


def downstream_ids(tasks: Iterable[Task], task_id: int) -> Set[int]:
    """Every task that transitively depends on ``task_id``."""
    index = index_tasks(tasks); _require(index, task_id)
    succ = _downstream(index)
    return _closure(task_id, succ.__getitem__)


def compute_related_task_ids(tasks: Iterable[Task], focus_id: int) -> Set[int]:
    """Focus task plus its upstream and downstream closures.

    No cycle check runs here; the visited set alone guarantees termination.
    """
    index = index_tasks(tasks); _require(index, focus_id)
    succ = _downstream(index)
    up = _closure(focus_id, lambda n: index[n].depends_on)
    down = _closure(focus_id, succ.__getitem__)
    return {focus_id} | up | down


def blocking_counts(tasks: Iterable[Task]) -> Dict[int, int]:
    """Number of tasks directly waiting on each task."""
    return {k: len(v) for k, v in downstream_map(tasks).items()}
