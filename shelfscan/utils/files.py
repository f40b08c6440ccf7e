"""Utility functions for locating and creating the .shelfscan workspace."""

from pathlib import Path

WORKSPACE_DIR = '.shelfscan'


def get_project_root() -> Path:
    """Find the project root by searching upwards from the Current Working Directory.

    Stops at the first directory containing a marker file.
    """
    current_path = Path.cwd()
    markers = {'.git', 'pyproject.toml', WORKSPACE_DIR, 'requirements.txt'}

    for parent in [current_path] + list(current_path.parents):
        if any((parent / marker).exists() for marker in markers):
            return parent

    # No markers (e.g. running in /tmp): use the current directory
    return current_path


def get_workspace_path() -> Path:
    """Return the path to the .shelfscan directory."""
    return get_project_root() / WORKSPACE_DIR


def get_logs_path() -> Path:
    """Return the path to the logs directory in .shelfscan."""
    return get_workspace_path() / 'logs'


def is_initialized() -> bool:
    """Check if the .shelfscan directory exists in the project root."""
    return get_workspace_path().is_dir()


def init_shelfscan(storage_name: str = 'products') -> Path:
    """Initialize the .shelfscan directory and return the named storage path."""
    workspace = get_workspace_path()
    storage_dir = workspace / storage_name

    storage_dir.mkdir(parents=True, exist_ok=True)
    (workspace / 'logs').mkdir(parents=True, exist_ok=True)

    # Keep captured data out of source control
    gitignore = workspace / '.gitignore'
    if not gitignore.exists():
        gitignore.write_text('# Automatically created by shelfscan\n*\n')

    return storage_dir
