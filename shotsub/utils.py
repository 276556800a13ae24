"""Utility functions for ShotSub."""

import os
import logging
from typing import Iterable
from .exceptions import FileSystemError

logger = logging.getLogger(__name__)

def ensure_dir_exists(dir_path: str) -> None:
    """
    Ensures that a directory exists. Creates it if it doesn't.

    Args:
        dir_path: The path to the directory.

    Raises:
        FileSystemError: If the directory cannot be created due to permissions
                         or if the path exists but is not a directory.
    """
    if not dir_path:
        raise ValueError("Directory path cannot be empty.")
    try:
        if not os.path.exists(dir_path):
            os.makedirs(dir_path)
            logger.info(f"Created directory: {dir_path}")
        elif not os.path.isdir(dir_path):
            raise FileSystemError(f"Path exists but is not a directory: {dir_path}")
    except OSError as e:
        logger.error(f"Error creating or accessing directory {dir_path}: {e}", exc_info=True)
        raise FileSystemError(f"Could not create or access directory {dir_path}: {e}") from e

def has_extension(filename: str, extensions: Iterable[str]) -> bool:
    """Case-insensitive extension check; extensions are given without the dot."""
    ext = os.path.splitext(filename)[1].lstrip('.').lower()
    return bool(ext) and ext in {e.lower().lstrip('.') for e in extensions}

def file_stem(path: str) -> str:
    """Returns the file name of `path` without directory and extension."""
    return os.path.splitext(os.path.basename(path))[0]

def parse_flag(value: str) -> bool:
    """Command line booleans: only the literal 'true' enables a flag."""
    return value == "true"
