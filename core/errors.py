"""Error types raised by the task store and query/update engine"""


class TaskTrackerError(Exception):
    """Base class for all task tracker errors"""


class StorageIOError(TaskTrackerError):
    """Reading or writing the tasks file failed (a missing file is not an error)"""


class DecodeError(TaskTrackerError):
    """Stored content does not parse into a list of tasks"""


class ValidationError(TaskTrackerError):
    """A supplied field value is out of range or of the wrong type"""


class NotFoundError(TaskTrackerError):
    """No task with the requested title exists"""

    def __init__(self, title: str):
        super().__init__(f"Task not found: {title}")
        self.title = title
