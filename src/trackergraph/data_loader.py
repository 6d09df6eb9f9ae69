import logging
from pathlib import Path

import pandas as pd

from .model import ScheduleSettings, Task, TaskStatus

logger = logging.getLogger(__name__)

MAX_ESTIMATED_HOURS = 1000.0
PRIORITIES = ('HIGH', 'MEDIUM', 'LOW')
TASK_COLUMNS = ('ID', 'Status')
SETTINGS_COLUMNS = ('Profile', 'Param', 'Value')


def _parse_depends_on(dep, row_no):
    if dep is None or (not isinstance(dep, str) and pd.isna(dep)): return []
    if isinstance(dep, str):
        tokens = [d.strip() for d in dep.split(',') if d.strip()]
    else:
        tokens = [dep]
    deps = []
    for tok in tokens:
        try:
            value = float(tok)
        except (TypeError, ValueError):
            raise ValueError(f'row {row_no}: dependency {tok!r} is not a task id') from None
        if not value.is_integer(): raise ValueError(f'row {row_no}: dependency {tok!r} is not a task id')
        deps.append(int(value))
    return deps


def _parse_hours(raw, row_no):
    if raw is None or pd.isna(raw): return None
    try:
        hours = float(raw)
    except (TypeError, ValueError):
        raise ValueError(f'row {row_no}: estimated hours {raw!r} is not a number') from None
    if hours < 0 or hours > MAX_ESTIMATED_HOURS:
        raise ValueError(f'row {row_no}: estimated hours must be between 0 and {MAX_ESTIMATED_HOURS:g}, got {hours:g}')
    return hours


def _parse_status(raw, row_no):
    value = str(raw).strip().upper()
    try:
        return TaskStatus(value)
    except ValueError:
        valid = ', '.join(s.value for s in TaskStatus)
        raise ValueError(f'row {row_no}: invalid status {raw!r}, must be one of {valid}') from None


def _parse_priority(raw, row_no):
    if raw is None or pd.isna(raw) or not str(raw).strip(): return ''
    value = str(raw).strip().upper()
    if value not in PRIORITIES: raise ValueError(f'row {row_no}: invalid priority {raw!r}')
    return value


def _parse_id(raw, row_no):
    try:
        value = float(raw)
    except (TypeError, ValueError):
        value = float('nan')
    if not value.is_integer(): raise ValueError(f'row {row_no}: id {raw} is not a task id')
    return int(value)


def _require_columns(df, columns, what):
    missing = [c for c in columns if c not in df.columns]
    if missing: raise ValueError(f'{what} is missing column(s): {", ".join(missing)}')


def tasks_from_frame(tasks_df: pd.DataFrame):
    """Build validated ``Task`` objects from a frame with ID/Status/EstimatedHours/DependsOn columns."""
    _require_columns(tasks_df, TASK_COLUMNS, 'Tasks')
    tasks = []
    for row_no, (_, row) in enumerate(tasks_df.iterrows(), start=2):
        name = row.get('Name')
        tasks.append(Task(
            id=_parse_id(row['ID'], row_no),
            status=_parse_status(row['Status'], row_no),
            estimated_effort_hours=_parse_hours(row.get('EstimatedHours'), row_no),
            depends_on=frozenset(_parse_depends_on(row.get('DependsOn'), row_no)),
            name=str(name).strip() if name is not None and pd.notna(name) else '',
            priority=_parse_priority(row.get('Priority'), row_no),
        ))
    return tasks


def load_tasks(path: str):
    """Read a task snapshot from an Excel workbook (``Tasks`` + optional ``Settings`` sheet) or a CSV file."""
    suffix = Path(path).suffix.lower()
    if suffix == '.csv':
        tasks_df = pd.read_csv(path); settings_df = None
    else:
        xls = pd.read_excel(path, sheet_name=None)
        if 'Tasks' not in xls: raise ValueError(f'{path}: workbook has no Tasks sheet')
        tasks_df = xls['Tasks']; settings_df = xls.get('Settings')
    tasks = tasks_from_frame(tasks_df)
    logger.info('loaded %d tasks from %s', len(tasks), path)
    return {'tasks': tasks, 'settings': settings_df}


def _as_bool(value):
    return str(value).strip().lower() in ('1', 'true', 'yes', 'y')


def parse_settings(settings_df, profile) -> ScheduleSettings:
    if settings_df is None: return ScheduleSettings()
    _require_columns(settings_df, SETTINGS_COLUMNS, 'Settings')
    rows = settings_df[settings_df['Profile'] == profile]
    if rows.empty: return ScheduleSettings()
    d = {}
    for _, r in rows.iterrows():
        d[str(r['Param']).strip().upper()] = str(r['Value']).strip()
    settings = ScheduleSettings(
        hours_per_day=float(d.get('HOURS_PER_DAY', 8.0)),
        count_done=_as_bool(d.get('COUNT_DONE', 'true')),
    )
    if settings.hours_per_day <= 0: raise ValueError(f'profile {profile}: HOURS_PER_DAY must be positive')
    return settings
