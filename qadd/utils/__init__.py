"""Utility functions for qadd."""

from .file_utils import (
    DocumentReadError,
    is_binary_file,
    read_text_file,
)

__all__ = [
    "DocumentReadError",
    "is_binary_file",
    "read_text_file",
]
