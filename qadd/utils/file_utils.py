"""File utility functions."""

from __future__ import annotations

from pathlib import Path


class DocumentReadError(OSError):
    """Raised when an input file cannot be read as text."""


def is_binary_file(path: Path) -> bool:
    """Check if file is binary by looking for null bytes."""
    with path.open("rb") as f:
        sample = f.read(2048)
    return b"\x00" in sample


def read_text_file(path: Path) -> str:
    """Read a UTF-8 text file.

    Raises:
        DocumentReadError: If the file is missing, unreadable, binary or
            not valid UTF-8
    """
    path = Path(path)
    try:
        if is_binary_file(path):
            raise DocumentReadError(f"{path} looks like a binary file")
        # newline="" keeps \r\n intact so spans match the file
        with path.open("r", encoding="utf-8", newline="") as f:
            return f.read()
    except DocumentReadError:
        raise
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentReadError(f"Cannot read {path}: {e}") from e
