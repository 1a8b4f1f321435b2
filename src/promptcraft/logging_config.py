"""Colored logging configuration for the PromptCraft CLI."""

import logging
import os
import re
import sys
from typing import TextIO

RESET = "\033[0m"
BOLD = "\033[1m"

LEVEL_COLORS = {
    "DEBUG": "\033[36m",      # Cyan
    "INFO": "\033[32m",       # Green
    "WARNING": "\033[33m",    # Yellow
    "ERROR": "\033[31m",      # Red
    "CRITICAL": "\033[35m",   # Magenta
}

# One tag per area of the codebase, e.g. "[LIBRARY] Saved to ..."
SERVICE_COLORS = {
    "EXTRACT": "\033[96m",    # Bright Cyan
    "BUILD": "\033[95m",      # Bright Magenta
    "STARTUP": "\033[94m",    # Bright Blue
    "LIBRARY": "\033[97m",    # Bright White
    "LAB": "\033[93m",        # Bright Yellow
}

_SERVICE_TAG = re.compile(r"\[(" + "|".join(SERVICE_COLORS) + r")\]")


def colorize_tags(message: str) -> str:
    """Wrap every known `[SERVICE]` tag in its color."""
    return _SERVICE_TAG.sub(
        lambda m: f"{SERVICE_COLORS[m.group(1)]}{BOLD}{m.group(0)}{RESET}",
        message,
    )


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the level name and service tags.

    The record passed in is never modified; coloring happens on a copy
    so other handlers see the plain message.
    """

    def __init__(self, fmt: str | None = None, datefmt: str | None = None, use_color: bool = True):
        super().__init__(fmt=fmt, datefmt=datefmt)
        self.use_color = use_color

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_color:
            return super().format(record)

        colored = logging.makeLogRecord(record.__dict__)
        color = LEVEL_COLORS.get(record.levelname, "")
        colored.levelname = f"{color}{record.levelname:<7}{RESET}"
        colored.msg = colorize_tags(record.getMessage())
        colored.args = None
        return super().format(colored)


def wants_color(stream: TextIO) -> bool:
    """Color only interactive streams, and never when NO_COLOR is set."""
    if "NO_COLOR" in os.environ:
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def setup_colored_logging(verbose: bool = False, stream: TextIO | None = None) -> logging.Handler:
    """Configure root logging for the CLI.

    Logs go to stderr by default so that generated prompts on stdout stay
    pipeable.

    Args:
        verbose: If True, set log level to DEBUG. Otherwise WARNING.
        stream: Where to write; defaults to stderr.

    Returns:
        The installed handler.
    """
    stream = stream or sys.stderr
    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        ColoredFormatter(
            fmt="%(asctime)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
            use_color=wants_color(stream),
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # Replace rather than stack handlers when called more than once
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)
    root_logger.addHandler(handler)

    return handler
