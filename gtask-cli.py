#!/usr/bin/env python3
"""
gtask CLI

Command-line client for Google Tasks.

Usage:
    ./gtask-cli.py                          # List all open tasks
    ./gtask-cli.py list <list-name>         # List tasks in one list
    ./gtask-cli.py add <title...>           # Create a task
    ./gtask-cli.py done <ref...>            # Complete tasks (3, a1, b 2)
    ./gtask-cli.py rm <ref...>              # Delete tasks

Examples:
    # Complete the first task of the second named list
    ./gtask-cli.py done b1

    # Add a task to a named list
    ./gtask-cli.py add --list Shopping Buy bread
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / 'src'))

from gtask.cli import main

if __name__ == '__main__':
    sys.exit(main())
