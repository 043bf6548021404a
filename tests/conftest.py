"""Pytest configuration and fixtures"""
import pytest
import os
import sys
import json
import logging

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams of a finished CliRunner invocation"""
    yield
    logger = logging.getLogger('task_tracker')
    logger.handlers.clear()
    logger.propagate = True


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    import tempfile
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def sample_tasks_data():
    """Sample tasks.json data for testing"""
    return [
        {
            "title": "Task 1",
            "description": "Write SCRIPT for deploy",
            "priority": 1,
            "status": "Todo",
            "project": "Project"
        },
        {
            "title": "Task 2",
            "description": "Fix login bug",
            "priority": 2,
            "status": "In Progress",
            "project": "Project"
        },
        {
            "title": "Task 3",
            "description": "Review notes",
            "priority": 3,
            "status": "Todo",
            "project": "Other"
        }
    ]


@pytest.fixture
def temp_tasks_file(temp_dir, sample_tasks_data):
    """Create a temporary tasks.json file"""
    file_path = os.path.join(temp_dir, "tasks.json")
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(sample_tasks_data, f, ensure_ascii=False, indent=2)
    return file_path
