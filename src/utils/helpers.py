"""
Helper Utilities Module.

Small filesystem and naming helpers shared by the input handler, the
batch runner and the report writers.

Functions:
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
    - generate_timestamp: Generate formatted timestamps
    - safe_filename: Sanitize names used in report filenames
    - collect_files: List supported documents under a path
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/reports")
        PosixPath('outputs/reports')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Return the lowercase extension of a path, including the dot.

    Example:
        >>> get_file_extension("factura.PDF")
        ".pdf"
    """
    return Path(filepath).suffix.lower()


def generate_timestamp(format_str: str = "%Y%m%d_%H%M%S") -> str:
    """
    Generate a formatted timestamp string.

    Example:
        >>> generate_timestamp("%Y-%m-%d")
        "2025-02-24"
    """
    return datetime.now().strftime(format_str)


def safe_filename(filename: str, replacement: str = "_") -> str:
    """
    Sanitize a filename fragment.

    Whitespace and characters that are not allowed in filenames on
    Windows are replaced.

    Example:
        >>> safe_filename("COMUNA BANIA: 2025")
        "COMUNA_BANIA__2025"
    """
    invalid_chars = r'[<>:"/\\|?*\x00-\x1f\s]'
    sanitized = re.sub(invalid_chars, replacement, filename)
    sanitized = sanitized.strip('. ')

    if not sanitized:
        sanitized = "unnamed"

    return sanitized


def collect_files(
    input_path: Union[str, Path],
    extensions: Iterable[str],
    recursive: bool = False
) -> List[Path]:
    """
    Collect the documents to process from a file or a directory.

    Args:
        input_path: A single document or a directory of documents.
        extensions: Accepted extensions (with the dot, any case).
        recursive: Whether to descend into subdirectories.

    Returns:
        Sorted list of matching files. A single file is returned as-is
        when its extension is accepted.
    """
    path = Path(input_path)
    accepted = {ext.lower() for ext in extensions}

    if path.is_file():
        return [path] if path.suffix.lower() in accepted else []

    pattern = "**/*" if recursive else "*"
    files = {
        candidate for candidate in path.glob(pattern)
        if candidate.is_file() and candidate.suffix.lower() in accepted
    }
    return sorted(files)
