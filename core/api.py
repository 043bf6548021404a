"""Functional API for Task Tracker - one load, one operation, one save per call"""
from typing import List, Optional, Dict, Any, Union

from core import engine
from core.errors import NotFoundError, ValidationError
from core.models import Task, build_task, parse_priority
from core.storage import TaskStorage
from utils.logging_config import get_logger, LogTimer

logger = get_logger('api')


class TaskAPI:
    """
    Programmatic interface for task management.

    Every call loads the collection fresh from storage, applies one engine
    operation and, for mutations, writes the whole collection back.

    Usage:
        api = TaskAPI()

        api.add_task("Task 1", "Write script", "3", "Todo", "Project")
        api.list_by_project("Project")
        api.update_task("Task 1", status="Done")
        api.remove_task("Task 1")
    """

    def __init__(self, storage: Optional[TaskStorage] = None):
        """
        Initialize the API.

        Args:
            storage: Optional custom storage instance. Uses default if not provided.
        """
        self._storage = storage or TaskStorage()

    @property
    def storage(self) -> TaskStorage:
        return self._storage

    # ==================== Mutations ====================

    def add_task(self, title: str, description: str, priority: Union[str, int],
                 status: str, project: str) -> Task:
        """
        Create and append a new task.

        Raises:
            ValidationError: priority not in 0..255 or an empty title
        """
        task = build_task(title, description, priority, status, project)

        with LogTimer(logger, f"add_task: {title}", title=title):
            tasks = self._storage.load_tasks()
            engine.add_task(tasks, task, self._storage)

        logger.info(f"Task added: {task}")
        return task

    def remove_task(self, title: str) -> int:
        """
        Remove all tasks with this title.

        Returns:
            Number of removed tasks (0 is not an error)
        """
        with LogTimer(logger, f"remove_task: {title}", title=title):
            tasks = self._storage.load_tasks()
            removed = engine.remove_tasks(tasks, title, self._storage)

        if removed:
            logger.info(f"Removed {removed} task(s) titled {title!r}", extra={'count': removed})
        else:
            logger.info(f"No task titled {title!r} to remove")
        return removed

    def update_task(self, title: str, description: Optional[str] = None,
                    priority: Optional[Union[str, int]] = None,
                    status: Optional[str] = None,
                    project: Optional[str] = None) -> Task:
        """
        Update the first task with this title. None values are left unchanged.

        Raises:
            NotFoundError: no such task (nothing is written)
            ValidationError: a supplied field is invalid (nothing is written)
        """
        tasks = self._storage.load_tasks()

        with LogTimer(logger, f"update_task: {title}",
                      expected=(NotFoundError, ValidationError), title=title):
            task = engine.update_task(
                tasks, title, self._storage,
                description=description,
                priority=priority,
                status=status,
                project=project,
            )

        logger.info(f"Task updated: {task}")
        return task

    # ==================== Queries ====================

    def list_tasks(self) -> List[Task]:
        return engine.list_tasks(self._storage.load_tasks())

    def list_by_project(self, project: str) -> List[Task]:
        return engine.find_by_project(self._storage.load_tasks(), project)

    def list_by_status(self, status: str) -> List[Task]:
        return engine.find_by_status(self._storage.load_tasks(), status)

    def list_by_priority(self, priority: Union[str, int]) -> List[Task]:
        """Filter by exact priority; a string is parsed first"""
        number = parse_priority(priority)
        return engine.find_by_priority(self._storage.load_tasks(), number)

    def search(self, query: str) -> List[Task]:
        return engine.search(self._storage.load_tasks(), query)

    def get_statistics(self) -> Dict[str, Any]:
        """Get task statistics"""
        return engine.collect_statistics(self._storage.load_tasks())
