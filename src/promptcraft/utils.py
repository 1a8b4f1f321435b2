"""Shared utility functions for PromptCraft."""

import re
from pathlib import Path

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
_MARKDOWN_MARKERS = re.compile(r"#+\s|\*\*|\*|`")


def get_unique_path(dest: Path) -> Path:
    """Get a unique path by appending a counter if the file already exists.

    Args:
        dest: The desired destination path

    Returns:
        The original path if it doesn't exist, or a path with a counter suffix
    """
    if not dest.exists():
        return dest

    stem = dest.stem
    suffix = dest.suffix
    parent = dest.parent
    counter = 1

    while dest.exists():
        dest = parent / f"{stem}_{counter}{suffix}"
        counter += 1

    return dest


def coerce_count(value: object) -> int:
    """Coerce form input to a non-negative integer.

    Strings are read like a form field: a leading integer is honored
    ("12 words" -> 12) and anything unparseable becomes 0. Negative
    values clamp to 0.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return 0
        return max(int(value), 0)
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if not match:
            return 0
        try:
            return max(int(match.group(1)), 0)
        except ValueError:
            # Digit runs past the interpreter's int conversion limit
            return 0
    return 0


def truncate(text: str, limit: int) -> str:
    """Cut text to `limit` characters, adding an ellipsis only when cut."""
    if len(text) > limit:
        return f"{text[:limit]}..."
    return text


def strip_markdown(text: str) -> str:
    """Remove heading, emphasis and code markers before pasting elsewhere."""
    return _MARKDOWN_MARKERS.sub("", text)
