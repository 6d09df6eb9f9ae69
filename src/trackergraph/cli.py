import argparse, json, sys
from .analyze import analyze
from .data_loader import load_tasks, parse_settings
from .kpis import analysis_frame, compute_kpis
from .logger import setup_logger
from .schedule import GraphError, compute_related_task_ids


def build_parser():
    ap = argparse.ArgumentParser(prog='trackergraph', description='Task dependency status and critical path')
    ap.add_argument('--data', default='data/tasks.xlsx', help='Excel workbook (Tasks/Settings sheets) or CSV file')
    ap.add_argument('--profile', default='default', help='row group of the Settings sheet to apply')
    ap.add_argument('--focus', type=int, help='also report tasks related to this task id')
    ap.add_argument('--table', action='store_true', help='print the per-task table after the summary')
    ap.add_argument('-v', '--verbose', action='store_true')
    ap.add_argument('--log-file')
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    log = setup_logger(verbose=args.verbose, log_file=args.log_file)
    try:
        data = load_tasks(args.data); tasks = data['tasks']
        settings = parse_settings(data['settings'], args.profile)
        analysis = analyze(tasks, settings)
        k = compute_kpis(analysis, tasks)
        if args.focus is not None: k['related'] = sorted(compute_related_task_ids(tasks, args.focus))
    except (GraphError, ValueError, OSError) as e:
        log.debug('recompute of %s failed', args.data, exc_info=True)
        print(f'error: {e}', file=sys.stderr)
        return 2
    print('# Summary'); print(json.dumps(k, indent=2))
    if args.table:
        print(); print(analysis_frame(analysis, tasks).to_string(index=False))
    return 0


if __name__ == '__main__': sys.exit(main())
