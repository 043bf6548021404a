"""JSON file storage for Task Tracker"""
import json
import os
import stat
import tempfile
from pathlib import Path
from typing import List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from core.errors import DecodeError, StorageIOError
from core.models import Task, describe_validation_error
from config import Config
from utils.logging_config import get_logger

logger = get_logger('storage')


class TaskStorage:
    """
    Whole-file JSON store for the task collection.

    The file holds a pretty-printed JSON array of task records. Every save
    rewrites the file in full through a temporary file and an atomic rename.
    """

    def __init__(self, tasks_file: Optional[Union[str, Path]] = None):
        if tasks_file:
            self.tasks_file = Path(tasks_file)
        else:
            self.tasks_file = Config.get_tasks_file()

    def load_tasks(self) -> List[Task]:
        """Load tasks in stored order. A missing or empty file is an empty collection."""
        try:
            content = self.tasks_file.read_text(encoding='utf-8')
        except FileNotFoundError:
            logger.debug(f"No tasks file at {self.tasks_file}, starting empty")
            return []
        except UnicodeDecodeError as e:
            raise DecodeError(f"Tasks file {self.tasks_file} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise StorageIOError(f"Failed to read {self.tasks_file}: {e}") from e

        if not content.strip():
            return []

        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise DecodeError(f"Tasks file {self.tasks_file} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise DecodeError(
                f"Tasks file {self.tasks_file} must contain a JSON array, got {type(data).__name__}"
            )

        tasks = []
        for index, record in enumerate(data):
            try:
                tasks.append(Task.from_dict(record))
            except PydanticValidationError as e:
                raise DecodeError(
                    f"Invalid task #{index + 1} in {self.tasks_file}: {describe_validation_error(e)}"
                ) from e

        logger.debug(f"Loaded {len(tasks)} tasks from {self.tasks_file}")
        return tasks

    def save_tasks(self, tasks: List[Task]):
        """Replace the tasks file with the full collection"""
        data = [task.to_dict() for task in tasks]
        directory = self.tasks_file.parent
        tmp_path = None

        try:
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                'w',
                dir=directory,
                prefix=f".{self.tasks_file.name}.",
                suffix='.tmp',
                delete=False,
                encoding='utf-8'
            ) as tmp:
                tmp_path = tmp.name
                json.dump(data, tmp, ensure_ascii=False, indent=2)
                tmp.write('\n')

            os.chmod(tmp_path, self._target_mode())
            os.replace(tmp_path, self.tasks_file)
        except OSError as e:
            logger.error(f"Failed to write {self.tasks_file}: {e}")
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise StorageIOError(f"Failed to write {self.tasks_file}: {e}") from e

        logger.debug(f"Saved {len(tasks)} tasks to {self.tasks_file}")

    def _target_mode(self) -> int:
        """Permission bits for the saved file: keep the existing file's, else the umask default"""
        try:
            return stat.S_IMODE(os.stat(self.tasks_file).st_mode)
        except FileNotFoundError:
            umask = os.umask(0)
            os.umask(umask)
            return 0o666 & ~umask
