"""Core module for Task Tracker"""
from core.errors import (
    TaskTrackerError,
    StorageIOError,
    DecodeError,
    ValidationError,
    NotFoundError,
)
from core.models import Task, parse_priority, build_task
from core.storage import TaskStorage
from core.engine import (
    add_task,
    remove_tasks,
    list_tasks,
    find_by_project,
    find_by_status,
    find_by_priority,
    search,
    update_task,
    collect_statistics,
)
from core.api import TaskAPI

__all__ = [
    # Errors
    'TaskTrackerError',
    'StorageIOError',
    'DecodeError',
    'ValidationError',
    'NotFoundError',
    # Models
    'Task',
    'parse_priority',
    'build_task',
    # Storage
    'TaskStorage',
    # Engine
    'add_task',
    'remove_tasks',
    'list_tasks',
    'find_by_project',
    'find_by_status',
    'find_by_priority',
    'search',
    'update_task',
    'collect_statistics',
    # API
    'TaskAPI',
]
