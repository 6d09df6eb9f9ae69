import pandas as pd

from .model import ExecutionStatus

FRAME_COLUMNS = ['ID', 'Name', 'Status', 'ExecutionStatus', 'Days', 'Blocks', 'Upstream', 'Downstream', 'Critical']


def work_queue(analysis, tasks):
    """Open tasks, blocked ones first, then HIGH priority, then by id."""
    by_id = {t.id: t for t in tasks}
    open_ids = [tid for tid, a in analysis.tasks.items() if a.execution_status != ExecutionStatus.DONE]
    return sorted(open_ids, key=lambda tid: (
        analysis.tasks[tid].execution_status != ExecutionStatus.BLOCKED,
        by_id[tid].priority != 'HIGH',
        tid,
    ))


def compute_kpis(analysis, tasks):
    counts = {s.value: 0 for s in ExecutionStatus}
    for a in analysis.tasks.values(): counts[a.execution_status.value] += 1
    cp = analysis.critical_path
    return {
        'task_count': len(analysis.tasks),
        'execution_status': counts,
        'critical_path': list(cp.task_ids),
        'critical_path_days': cp.total_duration_days,
        'ready_to_start': sorted(tid for tid, a in analysis.tasks.items() if a.execution_status == ExecutionStatus.READY),
        'work_queue': work_queue(analysis, tasks),
    }


def analysis_frame(analysis, tasks) -> pd.DataFrame:
    rows = []
    for t in sorted(tasks, key=lambda t: t.id):
        a = analysis.tasks[t.id]
        rows.append({
            'ID': t.id, 'Name': t.name, 'Status': t.status.value,
            'ExecutionStatus': a.execution_status.value, 'Days': a.duration_days,
            'Blocks': a.blocking_count, 'Upstream': len(a.upstream), 'Downstream': len(a.downstream),
            'Critical': a.on_critical_path,
        })
    return pd.DataFrame(rows, columns=FRAME_COLUMNS)
