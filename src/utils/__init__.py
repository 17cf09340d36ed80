"""
Utility Module for the Energy Invoice Extraction System.

Common utilities used across all other modules:
    - Logging configuration
    - File operations
    - Exception hierarchy
"""

from .logger import setup_logger, get_logger
from .helpers import ensure_directory, get_file_extension, generate_timestamp, safe_filename

__all__ = [
    'setup_logger',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'generate_timestamp',
    'safe_filename'
]
