"""Data model for Task Tracker with Pydantic validation"""
import re
from typing import Dict, Any, Union

from pydantic import BaseModel, Field, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError

PRIORITY_MIN = 0
PRIORITY_MAX = 255

_PRIORITY_PATTERN = re.compile(r"\+?[0-9]+")


class Task(BaseModel):
    """A single tracked task. Every field is required."""
    model_config = ConfigDict(strict=True, validate_assignment=True)

    title: str = Field(..., min_length=1)
    description: str
    priority: int = Field(..., ge=PRIORITY_MIN, le=PRIORITY_MAX)
    status: str
    project: str

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON, keys in declaration order"""
        return self.model_dump(mode='json')

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Task':
        """Deserialize a stored record; raises pydantic's ValidationError on shape mismatch"""
        return cls.model_validate(data)

    def __str__(self) -> str:
        return f"[{self.priority}] {self.title} ({self.status}) @{self.project}"


def parse_priority(value: Union[str, int]) -> int:
    """Parse a priority given as an int or a decimal string into 0..255."""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid priority: {value!r}")

    if isinstance(value, int):
        number = value
    elif isinstance(value, str) and _PRIORITY_PATTERN.fullmatch(value.strip()):
        number = int(value.strip())
    else:
        raise ValidationError(f"Invalid priority: {value!r}")

    if not PRIORITY_MIN <= number <= PRIORITY_MAX:
        raise ValidationError(
            f"Invalid priority: {value!r} (must be between {PRIORITY_MIN} and {PRIORITY_MAX})"
        )
    return number


def build_task(title: str, description: str, priority: Union[str, int],
               status: str, project: str) -> Task:
    """Create a Task from raw CLI values, raising the tracker's ValidationError."""
    number = parse_priority(priority)
    try:
        return Task(
            title=title,
            description=description,
            priority=number,
            status=status,
            project=project,
        )
    except PydanticValidationError as e:
        raise ValidationError(describe_validation_error(e)) from e


def describe_validation_error(error: PydanticValidationError) -> str:
    """Flatten pydantic errors into one readable line"""
    parts = []
    for item in error.errors():
        field = '.'.join(str(p) for p in item.get('loc', ())) or 'task'
        parts.append(f"{field}: {item.get('msg')}")
    return '; '.join(parts)
