"""CLI interface for Task Tracker"""
from pathlib import Path
from typing import List

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from config import Config
from core.api import TaskAPI
from core.errors import TaskTrackerError
from core.models import Task
from core.storage import TaskStorage
from utils.logging_config import setup_logging

console = Console()


def _fail(ctx: click.Context, error: TaskTrackerError):
    console.print(f"[red]Error: {escape(str(error))}[/red]", soft_wrap=True)
    ctx.exit(1)


def _render_tasks(tasks: List[Task], title: str):
    """Print tasks as a numbered table"""
    if not tasks:
        console.print("[yellow]No tasks found[/yellow]")
        return

    table = Table(title=f"{title} ({len(tasks)})")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Title", style="bold white")
    table.add_column("Description", style="white")
    table.add_column("Priority", style="yellow", justify="right")
    table.add_column("Status", style="green")
    table.add_column("Project", style="cyan")

    for index, task in enumerate(tasks, 1):
        table.add_row(
            str(index),
            escape(task.title),
            escape(task.description),
            str(task.priority),
            escape(task.status),
            escape(task.project),
        )

    console.print(table)


@click.group()
@click.option('--file', 'tasks_file', type=click.Path(dir_okay=False, path_type=Path),
              default=None, help='Path to the tasks JSON file (default: TASK_TRACKER_FILE or tasks.json)')
@click.option('-v', '--verbose', is_flag=True, help='Log debug output to stderr')
@click.version_option('1.0', prog_name='task-tracker')
@click.pass_context
def cli(ctx, tasks_file, verbose):
    """Task Tracker - a console-based task management application"""
    setup_logging(
        level='DEBUG' if verbose else Config.LOG_LEVEL,
        log_dir=Config.get_log_dir(),
        json_output=Config.LOG_JSON,
    )
    ctx.obj = TaskAPI(TaskStorage(tasks_file))


@cli.command()
@click.argument('title')
@click.argument('description')
@click.argument('priority')
@click.argument('status')
@click.argument('project')
@click.pass_context
def add(ctx, title, description, priority, status, project):
    """Add a new task"""
    try:
        ctx.obj.add_task(title, description, priority, status, project)
    except TaskTrackerError as e:
        _fail(ctx, e)
    console.print("[green]Task added successfully![/green]")


@cli.command()
@click.argument('title')
@click.pass_context
def remove(ctx, title):
    """Remove every task with this title"""
    try:
        removed = ctx.obj.remove_task(title)
    except TaskTrackerError as e:
        _fail(ctx, e)
    console.print(f"[green]Task removed successfully![/green] [dim]({removed} removed)[/dim]")


@cli.command(name='list')
@click.pass_context
def list_(ctx):
    """List all tasks"""
    try:
        tasks = ctx.obj.list_tasks()
    except TaskTrackerError as e:
        _fail(ctx, e)
    _render_tasks(tasks, "Tasks")


@cli.command(name='list-by-project')
@click.option('--project', required=True, help='Project name (exact match)')
@click.pass_context
def list_by_project(ctx, project):
    """List tasks by project"""
    try:
        tasks = ctx.obj.list_by_project(project)
    except TaskTrackerError as e:
        _fail(ctx, e)
    _render_tasks(tasks, f"Project: {escape(project)}")


@cli.command(name='list-by-status')
@click.option('--status', required=True, help='Status label (exact match)')
@click.pass_context
def list_by_status(ctx, status):
    """List tasks by status"""
    try:
        tasks = ctx.obj.list_by_status(status)
    except TaskTrackerError as e:
        _fail(ctx, e)
    _render_tasks(tasks, f"Status: {escape(status)}")


@cli.command(name='list-by-priority')
@click.option('--priority', required=True, help='Priority number 0-255')
@click.pass_context
def list_by_priority(ctx, priority):
    """List tasks by priority"""
    try:
        tasks = ctx.obj.list_by_priority(priority)
    except TaskTrackerError as e:
        _fail(ctx, e)
    _render_tasks(tasks, f"Priority: {escape(priority)}")


@cli.command()
@click.argument('query')
@click.pass_context
def search(ctx, query):
    """Search for tasks by title or description"""
    try:
        tasks = ctx.obj.search(query)
    except TaskTrackerError as e:
        _fail(ctx, e)
    _render_tasks(tasks, f"Search: {escape(query)}")


@cli.command()
@click.argument('title')
@click.option('--description', default=None, help='New description')
@click.option('--priority', default=None, help='New priority 0-255')
@click.option('--status', default=None, help='New status')
@click.option('--project', default=None, help='New project')
@click.pass_context
def update(ctx, title, description, priority, status, project):
    """Update a task"""
    try:
        ctx.obj.update_task(
            title,
            description=description,
            priority=priority,
            status=status,
            project=project,
        )
    except TaskTrackerError as e:
        _fail(ctx, e)
    console.print("[green]Task updated successfully![/green]")


@cli.command()
@click.pass_context
def stats(ctx):
    """Show task statistics"""
    try:
        statistics = ctx.obj.get_statistics()
    except TaskTrackerError as e:
        _fail(ctx, e)

    def _lines(counts):
        if not counts:
            return "  -"
        return "\n".join(f"  {escape(str(key))}: {count}" for key, count in counts.items())

    stats_text = f"""[bold]Task statistics[/bold]

[yellow]Total tasks:[/yellow] {statistics['total']}

[yellow]By status:[/yellow]
{_lines(statistics['by_status'])}

[yellow]By project:[/yellow]
{_lines(statistics['by_project'])}

[yellow]By priority:[/yellow]
{_lines(statistics['by_priority'])}
"""

    console.print(Panel(stats_text, border_style="cyan"))


if __name__ == '__main__':
    cli()
