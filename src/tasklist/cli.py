from __future__ import annotations

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table

from .client import TaskApiClient, TaskListState
from .client import messages
from .config import ClientConfig, get_client_config, get_server_config, load_config_file
from .constants import DEFAULT_CLIENT_LOG_LEVEL
from .logging_utils import configure_logging
from .server import create_app
from .store.model import TaskStatus


def _load(args: argparse.Namespace) -> dict:
    config, err = load_config_file(Path(args.config) if args.config else None)
    if err:
        sys.stderr.write(err + '\n')
    return config


def _client_config(args: argparse.Namespace) -> ClientConfig:
    cfg, err = get_client_config(_load(args))
    if err:
        sys.stderr.write(err + '\n')
    if args.url:
        cfg.base_url = args.url
    return cfg


def _with_state(args: argparse.Namespace, action) -> int:
    cfg = _client_config(args)
    with TaskApiClient(cfg.base_url, timeout=cfg.timeout) as api:
        state = TaskListState(api, locale=cfg.locale)
        result = action(state)
        if state.error:
            sys.stderr.write(state.error + '\n')
            return 1
    if result is not None:
        sys.stdout.write(json.dumps({'task': result.to_dict()}, ensure_ascii=False, indent=2) + '\n')
    return 0


def _print_table(state: TaskListState) -> None:
    console = Console()
    if not state.todos:
        console.print(messages.message('empty', state.locale))
        return
    table = Table(show_header=True, header_style='bold')
    table.add_column('ID', justify='right')
    table.add_column(messages.message('title', state.locale))
    table.add_column(messages.message('status', state.locale))
    table.add_column(messages.message('deadline', state.locale))
    for task in state.todos:
        title = f'[strike]{task.title}[/strike]' if task.is_done else task.title
        table.add_row(task.id, title, state.status_label(task), state.deadline_label(task) or '')
    console.print(table)


def _list(args: argparse.Namespace) -> int:
    cfg = _client_config(args)
    with TaskApiClient(cfg.base_url, timeout=cfg.timeout) as api:
        state = TaskListState(api, locale=cfg.locale)
        if not state.load():
            sys.stderr.write(state.error + '\n')
            return 1
    if args.json:
        sys.stdout.write(json.dumps([t.to_dict() for t in state.todos], ensure_ascii=False, indent=2) + '\n')
    else:
        _print_table(state)
    return 0


def _add(args: argparse.Namespace) -> int:
    if not args.title.strip():
        sys.stderr.write('Title is required\n')
        return 1
    return _with_state(args, lambda s: s.add(args.title, deadline=args.deadline))


def _edit(args: argparse.Namespace) -> int:
    if not args.title.strip():
        sys.stderr.write('Title is required\n')
        return 1
    return _with_state(args, lambda s: s.rename(args.task_id, args.title))


def _toggle(args: argparse.Namespace) -> int:
    def action(state: TaskListState):
        if not state.load():
            return None
        return state.toggle(args.task_id, checked=not args.uncheck)
    return _with_state(args, action)


def _status(args: argparse.Namespace) -> int:
    return _with_state(args, lambda s: s.set_status(args.task_id, TaskStatus(args.status)))


def _deadline(args: argparse.Namespace) -> int:
    if args.clear or args.date is None:
        return _with_state(args, lambda s: s.clear_deadline(args.task_id))
    return _with_state(args, lambda s: s.set_deadline(args.task_id, args.date))


def _remove(args: argparse.Namespace) -> int:
    def confirm(prompt: str) -> bool:
        if args.yes:
            return True
        answer = input(f'{prompt} [y/N] ')
        return answer.strip().lower() in {'y', 'yes'}

    def action(state: TaskListState):
        state.delete(args.task_id, confirm=confirm)
        return None
    return _with_state(args, action)


def _server(args: argparse.Namespace) -> int:
    try:
        import uvicorn
    except ImportError:
        sys.stderr.write("Install server extras: pip install 'tasklist[server]'\n")
        return 1

    cfg, err = get_server_config(_load(args))
    if err:
        sys.stderr.write(err + '\n')
    level = args.log_level or cfg.log_level
    configure_logging(level)
    host = args.host or cfg.host
    port = args.port or cfg.port
    app = create_app(enable_cors=cfg.cors and not args.no_cors)
    uvicorn.run(app, host=host, port=port, log_level=level.lower())
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='In-memory task list server and client')
    parser.add_argument('--config', default=None, help='Path to tasklist.yaml (default: ./tasklist.yaml)')
    parser.add_argument('--url', default=None, help='Server URL for client commands')
    parser.add_argument('--log-level', default=None, help='Log level (default: WARNING; server uses its configured level)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    server = subparsers.add_parser('server', help='Start the task list server')
    server.add_argument('--host', default=None)
    server.add_argument('--port', default=None, type=int)
    server.add_argument('--no-cors', action='store_true')
    server.set_defaults(func=_server)

    tlist = subparsers.add_parser('list', help='List tasks')
    tlist.add_argument('--json', action='store_true')
    tlist.set_defaults(func=_list)

    tadd = subparsers.add_parser('add', help='Add a task')
    tadd.add_argument('title')
    tadd.add_argument('--deadline', default=None, type=date.fromisoformat, help='YYYY-MM-DD')
    tadd.set_defaults(func=_add)

    tedit = subparsers.add_parser('edit', help='Rename a task')
    tedit.add_argument('task_id')
    tedit.add_argument('title')
    tedit.set_defaults(func=_edit)

    ttoggle = subparsers.add_parser('toggle', help='Tick (or untick) the task checkbox')
    ttoggle.add_argument('task_id')
    ttoggle.add_argument('--uncheck', action='store_true')
    ttoggle.set_defaults(func=_toggle)

    tstatus = subparsers.add_parser('status', help='Set a task status')
    tstatus.add_argument('task_id')
    tstatus.add_argument('status', choices=[s.value for s in TaskStatus])
    tstatus.set_defaults(func=_status)

    tdeadline = subparsers.add_parser('deadline', help='Set or clear a task deadline')
    tdeadline.add_argument('task_id')
    tdeadline.add_argument('date', nargs='?', default=None, type=date.fromisoformat, help='YYYY-MM-DD')
    tdeadline.add_argument('--clear', action='store_true')
    tdeadline.set_defaults(func=_deadline)

    tremove = subparsers.add_parser('rm', help='Delete a task')
    tremove.add_argument('task_id')
    tremove.add_argument('--yes', '-y', action='store_true')
    tremove.set_defaults(func=_remove)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level or DEFAULT_CLIENT_LOG_LEVEL)
    handler = getattr(args, 'func', None)
    if handler is None:
        parser.print_help()
        return 1
    return int(handler(args) or 0)


if __name__ == '__main__':
    sys.exit(main())
