#!/usr/bin/env python3
"""
Task Tracker - console task manager backed by a JSON file

Usage:
    python task_manager.py add <title> <description> <priority> <status> <project>
    python task_manager.py remove <title>
    python task_manager.py list
    python task_manager.py list-by-project --project <name>
    python task_manager.py list-by-status --status <status>
    python task_manager.py list-by-priority --priority <n>
    python task_manager.py search <query>
    python task_manager.py update <title> [--description ...] [--priority ...] [--status ...] [--project ...]
    python task_manager.py stats
"""

import sys
from core.cli_interface import cli


def main():
    """Entry point"""
    try:
        cli()
    except KeyboardInterrupt:
        print("\n\nInterrupted")
        sys.exit(130)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
