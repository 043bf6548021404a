"""Unit tests for core/storage.py"""
import pytest
import os
import json
import stat

from core.errors import DecodeError, StorageIOError
from core.models import Task
from core.storage import TaskStorage


def make_tasks():
    return [
        Task(title="Task 1", description="Description 1", priority=1, status="Todo", project="Project"),
        Task(title="Task 2", description="Description 2", priority=2, status="In Progress", project="Project"),
    ]


class TestTaskStorage:
    """Tests for TaskStorage class"""

    @pytest.fixture
    def temp_storage(self, temp_dir):
        """Create a TaskStorage with temporary file"""
        return TaskStorage(tasks_file=os.path.join(temp_dir, "tasks.json"))

    @pytest.fixture
    def storage_with_data(self, temp_tasks_file):
        """Create a TaskStorage with pre-existing data"""
        return TaskStorage(tasks_file=temp_tasks_file)

    def test_save_and_load_round_trip(self, temp_storage):
        """Saved tasks load back equal and in the same order"""
        tasks = make_tasks()
        temp_storage.save_tasks(tasks)

        loaded = temp_storage.load_tasks()
        assert loaded == tasks

    def test_load_missing_file_returns_empty(self, temp_storage):
        """A missing file is an empty collection"""
        assert temp_storage.load_tasks() == []

    @pytest.mark.parametrize("content", ["", "   \n\t"])
    def test_load_empty_file_returns_empty(self, temp_storage, content):
        """An empty or whitespace-only file is an empty collection"""
        temp_storage.tasks_file.write_text(content, encoding='utf-8')
        assert temp_storage.load_tasks() == []

    def test_load_tasks_parses_correctly(self, storage_with_data):
        """Loaded tasks keep stored order and values"""
        tasks = storage_with_data.load_tasks()
        assert [t.title for t in tasks] == ["Task 1", "Task 2", "Task 3"]
        assert tasks[1].status == "In Progress"
        assert tasks[2].priority == 3

    def test_save_writes_pretty_json_array(self, temp_storage):
        """File content is an indented JSON array with stable key order"""
        temp_storage.save_tasks(make_tasks())

        content = temp_storage.tasks_file.read_text(encoding='utf-8')
        data = json.loads(content)
        assert isinstance(data, list)
        assert list(data[0]) == ["title", "description", "priority", "status", "project"]
        assert '\n  {' in content

    def test_save_replaces_previous_content(self, storage_with_data):
        """Each save rewrites the whole file"""
        storage_with_data.save_tasks(make_tasks()[:1])
        assert [t.title for t in storage_with_data.load_tasks()] == ["Task 1"]

    def test_save_empty_collection(self, storage_with_data):
        storage_with_data.save_tasks([])
        assert json.loads(storage_with_data.tasks_file.read_text(encoding='utf-8')) == []
        assert storage_with_data.load_tasks() == []

    def test_save_creates_parent_directory(self, temp_dir):
        storage = TaskStorage(tasks_file=os.path.join(temp_dir, "nested", "dir", "tasks.json"))
        storage.save_tasks(make_tasks())
        assert len(storage.load_tasks()) == 2

    def test_save_leaves_no_temp_files(self, temp_storage, temp_dir):
        temp_storage.save_tasks(make_tasks())
        temp_storage.save_tasks(make_tasks())
        assert os.listdir(temp_dir) == ["tasks.json"]

    def test_task_with_unicode(self, temp_storage):
        """Non-ASCII text survives a round trip and is stored unescaped"""
        task = Task(title="Задача 🎉", description="Описание", priority=0, status="Todo", project="Проект")
        temp_storage.save_tasks([task])

        assert "Задача" in temp_storage.tasks_file.read_text(encoding='utf-8')
        assert temp_storage.load_tasks() == [task]

    def test_default_path_from_config(self, monkeypatch):
        from config import Config
        monkeypatch.setattr(Config, "TASKS_FILE", "custom.json")
        assert TaskStorage().tasks_file.name == "custom.json"


class TestTaskStorageErrors:
    """Error cases for TaskStorage"""

    @pytest.fixture
    def temp_storage(self, temp_dir):
        return TaskStorage(tasks_file=os.path.join(temp_dir, "tasks.json"))

    def test_load_corrupted_json(self, temp_storage):
        """Malformed JSON is a DecodeError"""
        temp_storage.tasks_file.write_text("{ invalid json }", encoding='utf-8')
        with pytest.raises(DecodeError):
            temp_storage.load_tasks()

    def test_load_non_array(self, temp_storage):
        """Top level must be an array"""
        temp_storage.tasks_file.write_text('{"tasks": []}', encoding='utf-8')
        with pytest.raises(DecodeError, match="JSON array"):
            temp_storage.load_tasks()

    def test_load_missing_key(self, temp_storage):
        """A record without a required key is a DecodeError"""
        record = {"title": "T", "description": "", "priority": 1, "status": "Todo"}
        temp_storage.tasks_file.write_text(json.dumps([record]), encoding='utf-8')
        with pytest.raises(DecodeError, match="project"):
            temp_storage.load_tasks()

    def test_load_wrong_type(self, temp_storage):
        """A record with a wrong field type is a DecodeError"""
        record = {"title": "T", "description": "", "priority": "high", "status": "Todo", "project": "P"}
        temp_storage.tasks_file.write_text(json.dumps([record]), encoding='utf-8')
        with pytest.raises(DecodeError):
            temp_storage.load_tasks()

    def test_load_priority_out_of_range(self, temp_storage):
        record = {"title": "T", "description": "", "priority": 300, "status": "Todo", "project": "P"}
        temp_storage.tasks_file.write_text(json.dumps([record]), encoding='utf-8')
        with pytest.raises(DecodeError):
            temp_storage.load_tasks()

    def test_load_invalid_utf8(self, temp_storage):
        temp_storage.tasks_file.write_bytes(b'\xff\xfe\x00garbage')
        with pytest.raises(DecodeError):
            temp_storage.load_tasks()

    def test_load_directory_is_io_error(self, temp_dir):
        """Read failures other than absence are StorageIOError"""
        storage = TaskStorage(tasks_file=temp_dir)
        with pytest.raises(StorageIOError):
            storage.load_tasks()

    def test_save_into_directory_path_is_io_error(self, temp_dir):
        """Write failures are StorageIOError and leave no temp file behind"""
        target = os.path.join(temp_dir, "tasks.json")
        os.mkdir(target)
        storage = TaskStorage(tasks_file=target)

        with pytest.raises(StorageIOError):
            storage.save_tasks(make_tasks())
        assert os.listdir(temp_dir) == ["tasks.json"]

    def test_failed_save_keeps_previous_file(self, temp_tasks_file, monkeypatch):
        """The previous file stays intact when the rename fails"""
        storage = TaskStorage(tasks_file=temp_tasks_file)
        before = storage.tasks_file.read_text(encoding='utf-8')

        def broken_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("core.storage.os.replace", broken_replace)
        with pytest.raises(StorageIOError, match="disk full"):
            storage.save_tasks(make_tasks())

        assert storage.tasks_file.read_text(encoding='utf-8') == before

    def test_load_blank_title(self, temp_storage):
        """A whitespace-only title is valid data, not a decode failure"""
        record = {"title": "   ", "description": "d", "priority": 1, "status": "Todo", "project": "P"}
        temp_storage.tasks_file.write_text(json.dumps([record]), encoding='utf-8')
        assert temp_storage.load_tasks()[0].title == "   "


@pytest.mark.skipif(os.name == 'nt', reason="POSIX permission bits")
class TestTaskStoragePermissions:
    """Saving keeps the file's permission bits"""

    def test_save_keeps_existing_mode(self, temp_tasks_file):
        os.chmod(temp_tasks_file, 0o644)
        storage = TaskStorage(tasks_file=temp_tasks_file)

        storage.save_tasks(make_tasks())

        assert stat.S_IMODE(os.stat(temp_tasks_file).st_mode) == 0o644

    def test_new_file_uses_umask_default(self, temp_dir):
        path = os.path.join(temp_dir, "tasks.json")
        umask = os.umask(0o022)
        try:
            TaskStorage(tasks_file=path).save_tasks(make_tasks())
        finally:
            os.umask(umask)

        assert stat.S_IMODE(os.stat(path).st_mode) == 0o644
