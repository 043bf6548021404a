"""Task Tracker application configuration"""
import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


def _truthy_env(value: str, default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


class Config:
    """Application configuration"""

    PROJECT_ROOT = Path(__file__).parent

    # Data file (relative paths resolve against the working directory)
    TASKS_FILE = os.getenv("TASK_TRACKER_FILE", "tasks.json")

    # Logging
    LOG_LEVEL = os.getenv("TASK_TRACKER_LOG_LEVEL", "WARNING").upper()
    LOG_DIR = os.getenv("TASK_TRACKER_LOG_DIR", "")
    LOG_JSON = _truthy_env(os.getenv("TASK_TRACKER_LOG_JSON"), False)

    @classmethod
    def get_tasks_file(cls) -> Path:
        """Path to the tasks file"""
        return Path(cls.TASKS_FILE)

    @classmethod
    def get_log_dir(cls) -> Path | None:
        """Directory for JSON log files, None when file logging is off"""
        return Path(cls.LOG_DIR) if cls.LOG_DIR else None
