"""Main entry point for the terminal todo list.

`todos` with no subcommand opens the interactive list; the subcommands
perform one action against the same storage file and exit.
"""
import functools
import logging
import os
from pathlib import Path
from typing import Optional

import click

from cli import CLI
from controller import TodoController
from renderer import format_list, render_page
from storage import FileStorage, default_storage_path
from store import TodoStore


def configure_logging(verbose: bool = False) -> None:
    level_name = 'DEBUG' if verbose else os.environ.get('TODOS_LOG_LEVEL', 'WARNING').upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format='%(levelname)s %(name)s: %(message)s',
    )


def build_app(storage_path: Optional[Path] = None) -> TodoController:
    store = TodoStore(FileStorage(storage_path or default_storage_path()))
    controller = TodoController(store, render_page())
    controller.load()
    return controller


def _controller(ctx: click.Context) -> TodoController:
    """Build the app on first use so --help and usage errors leave storage untouched."""
    state = ctx.find_root().obj
    if state['controller'] is None:
        state['controller'] = build_app(state['storage_path'])
    return state['controller']


def pass_controller(f):
    @click.pass_context
    def wrapper(ctx: click.Context, *args, **kwargs):
        return ctx.invoke(f, _controller(ctx), *args, **kwargs)
    return functools.update_wrapper(wrapper, f)


def _echo_list(controller: TodoController) -> None:
    for line in format_list(controller.task_list, controller.document.title):
        click.echo(line)


def _require_rendered(controller: TodoController, task_id: int) -> None:
    if task_id not in controller.items:
        raise click.BadParameter(f'no task with id {task_id}', param_hint='ID')


@click.group(invoke_without_command=True)
@click.option('--storage', 'storage_path', type=click.Path(dir_okay=False, path_type=Path),
              default=None, help='Storage file (default: $TODOS_STORAGE or data/storage.json).')
@click.option('-v', '--verbose', is_flag=True, help='Log debug output.')
@click.pass_context
def todos(ctx: click.Context, storage_path: Optional[Path], verbose: bool) -> None:
    """A small persisted todo list."""
    configure_logging(verbose)
    ctx.obj = {'storage_path': storage_path, 'controller': None}
    if ctx.invoked_subcommand is None:
        CLI(_controller(ctx)).run()


@todos.command()
@pass_controller
def run(controller: TodoController) -> None:
    """Open the interactive list (the default)."""
    CLI(controller).run()


@todos.command()
@click.argument('text', nargs=-1, required=True)
@pass_controller
def add(controller: TodoController, text) -> None:
    """Add a task."""
    task = controller.submit(' '.join(text))
    if task is None:
        raise click.BadParameter('task text is empty', param_hint='TEXT')
    click.echo(f'Added {task.id}. {task.task}')


@todos.command()
@click.argument('task_id', metavar='ID', type=int)
@pass_controller
def toggle(controller: TodoController, task_id: int) -> None:
    """Toggle a task between active and completed."""
    _require_rendered(controller, task_id)
    completed = controller.toggle(task_id)
    click.echo(f'Task {task_id} is now {"completed" if completed else "active"}.')


@todos.command()
@click.argument('task_id', metavar='ID', type=int)
@pass_controller
def rm(controller: TodoController, task_id: int) -> None:
    """Delete a task."""
    _require_rendered(controller, task_id)
    controller.delete(task_id)
    click.echo(f'Task {task_id} removed.')


@todos.command(name='list')
@pass_controller
def list_tasks(controller: TodoController) -> None:
    """Print the list."""
    _echo_list(controller)


@todos.command()
@pass_controller
def clear(controller: TodoController) -> None:
    """Delete every completed task."""
    removed = controller.clear_completed()
    click.echo(f'Cleared {removed} completed task(s).')


@todos.command(name='export-html')
@click.argument('output', type=click.Path(dir_okay=False, path_type=Path), required=False)
@pass_controller
def export_html(controller: TodoController, output: Optional[Path]) -> None:
    """Write the rendered page as HTML (stdout if no OUTPUT)."""
    page = controller.document.to_html()
    if output is None:
        click.echo(page, nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(page, encoding='utf-8')
    click.echo(f'Wrote {output}')


def main():
    todos()

if __name__ == "__main__":
    main()
