"""Utility components for shelfscan."""

from shelfscan.utils.files import get_project_root, init_shelfscan, is_initialized
from shelfscan.utils.headers import build_headers
from shelfscan.utils.logging import setup_local_logging, setup_logfire

__all__ = [
    'build_headers',
    'get_project_root',
    'init_shelfscan',
    'is_initialized',
    'setup_local_logging',
    'setup_logfire',
]
