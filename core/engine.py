"""
Query and update operations over the in-memory task collection.

Queries never touch storage. add_task, remove_tasks and update_task mutate
the list they are given and then persist the whole collection.
"""
from collections import Counter
from typing import List, Optional, Dict, Any, Union

from pydantic import ValidationError as PydanticValidationError

from core.errors import NotFoundError, ValidationError
from core.models import Task, parse_priority, describe_validation_error
from core.storage import TaskStorage


def add_task(tasks: List[Task], new_task: Task, storage: TaskStorage) -> Task:
    """Append a task (duplicate titles allowed) and persist"""
    tasks.append(new_task)
    storage.save_tasks(tasks)
    return new_task


def remove_tasks(tasks: List[Task], title: str, storage: TaskStorage) -> int:
    """Remove every task with this exact title and persist; returns how many went"""
    kept = [t for t in tasks if t.title != title]
    removed = len(tasks) - len(kept)
    tasks[:] = kept
    storage.save_tasks(tasks)
    return removed


def list_tasks(tasks: List[Task]) -> List[Task]:
    return list(tasks)


def find_by_project(tasks: List[Task], project: str) -> List[Task]:
    return [t for t in tasks if t.project == project]


def find_by_status(tasks: List[Task], status: str) -> List[Task]:
    return [t for t in tasks if t.status == status]


def find_by_priority(tasks: List[Task], priority: int) -> List[Task]:
    return [t for t in tasks if t.priority == priority]


def search(tasks: List[Task], query: str) -> List[Task]:
    """Case-insensitive substring match on title or description"""
    query = query.lower()
    return [t for t in tasks if query in t.title.lower() or query in t.description.lower()]


def update_task(
    tasks: List[Task],
    title: str,
    storage: TaskStorage,
    description: Optional[str] = None,
    priority: Optional[Union[str, int]] = None,
    status: Optional[str] = None,
    project: Optional[str] = None,
) -> Task:
    """
    Update the first task with the given title.

    Supplied fields are validated before anything is changed, so a bad
    priority leaves the task untouched and nothing is written.

    Raises:
        NotFoundError: no task has this title
        ValidationError: a supplied field is invalid
    """
    task = next((t for t in tasks if t.title == title), None)
    if task is None:
        raise NotFoundError(title)

    changes: Dict[str, Any] = {}
    if description is not None:
        changes['description'] = description
    if priority is not None:
        changes['priority'] = parse_priority(priority)
    if status is not None:
        changes['status'] = status
    if project is not None:
        changes['project'] = project

    try:
        updated = Task.model_validate({**task.to_dict(), **changes})
    except PydanticValidationError as e:
        raise ValidationError(describe_validation_error(e)) from e

    for field, value in changes.items():
        setattr(task, field, getattr(updated, field))

    storage.save_tasks(tasks)
    return task


def collect_statistics(tasks: List[Task]) -> Dict[str, Any]:
    """Counters by status, project and priority"""
    return {
        'total': len(tasks),
        'by_status': dict(Counter(t.status for t in tasks)),
        'by_project': dict(Counter(t.project for t in tasks)),
        'by_priority': dict(sorted(Counter(t.priority for t in tasks).items())),
    }
