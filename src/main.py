"""Main entry point for the terminal task tracker.

`tracker` with no subcommand opens the interactive shell; the subcommands
are one-shot versions of the shell commands for scripting.
"""
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional
import click
from board import Board
from cli import CLI, parse_status, parse_status_filter, resolve_task
from config import Settings, load_settings
from display import display
from logging_setup import setup_logging
from models import ALL, TrackerError
from storage import FileMedium, TaskStore

logger = logging.getLogger(__name__)


def open_board(settings: Settings) -> Board:
    store = TaskStore(FileMedium(settings.data_dir), key=settings.storage_key)
    return Board.open(store)


def _board(ctx: click.Context) -> Board:
    """Open the board on first use; help and parse-only runs never touch the file."""
    obj = ctx.find_object(dict)
    if obj.get('board') is None:
        obj['board'] = open_board(obj['settings'])
    return obj['board']


@click.group(invoke_without_command=True)
@click.option('--data-dir', type=click.Path(file_okay=False, path_type=Path), default=None,
              help='Directory holding the task file (overrides TRACKER_DATA_DIR).')
@click.pass_context
def cli(ctx: click.Context, data_dir: Optional[Path]) -> None:
    """Track tasks with categories, deadlines and automatic overdue status."""
    settings = load_settings()
    if data_dir is not None:
        settings = replace(settings, data_dir=data_dir)
    setup_logging(console_level=settings.log_level, log_file=settings.log_file)
    ctx.ensure_object(dict)
    ctx.obj['settings'] = settings
    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@cli.command()
@click.pass_context
def shell(ctx: click.Context) -> None:
    """Interactive board (the default)."""
    CLI(_board(ctx), alt_screen=ctx.obj['settings'].alt_screen).run()


@cli.command()
@click.argument('name')
@click.option('--category', '-c', default='', help='Free-form category label.')
@click.option('--deadline', '-d', default=None, metavar='YYYY-MM-DD', help='Due date.')
@click.pass_context
def add(ctx: click.Context, name: str, category: str, deadline: Optional[str]) -> None:
    """Add a task."""
    try:
        task = _board(ctx).add_task(name, category, deadline)
    except TrackerError as exc:
        raise click.ClickException(str(exc))
    click.echo(f'Added "{task.name}" ({task.short_id}), status {task.status.value}.')


@cli.command(name='list')
@click.option('--status', '-s', 'status_raw', default=ALL, help='All, ip, c or o.')
@click.option('--category', '-c', default=ALL, help='Exact category, or All.')
@click.pass_context
def list_tasks(ctx: click.Context, status_raw: str, category: str) -> None:
    """Show the (filtered) task table and global counts."""
    status_filter = parse_status_filter(status_raw)
    if status_filter is None:
        raise click.ClickException(f'Invalid status filter: {status_raw}')
    display(_board(ctx).view(status_filter, category))


@cli.command()
@click.argument('task_id')
@click.argument('status', nargs=-1, required=True)
@click.pass_context
def status(ctx: click.Context, task_id: str, status: tuple) -> None:
    """Set a task's status (ip, c, o or the full name)."""
    board = _board(ctx)
    raw_status = ' '.join(status)
    try:
        task = resolve_task(board, task_id)
        board.set_status(task.id, parse_status(raw_status) or raw_status)
    except TrackerError as exc:
        raise click.ClickException(str(exc))
    updated = board.get(task.id)
    click.echo(f'Task "{task.name}" is now {updated.status.value}.')


@cli.command()
@click.argument('task_id')
@click.pass_context
def rm(ctx: click.Context, task_id: str) -> None:
    """Remove a task."""
    board = _board(ctx)
    try:
        task = resolve_task(board, task_id)
    except TrackerError as exc:
        raise click.ClickException(str(exc))
    board.delete_task(task.id)
    click.echo(f'Task "{task.name}" removed.')


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
