"""Extraction engine."""

from .extractors import create_extractors, extract
from .lab import PromptLab

__all__ = ["PromptLab", "create_extractors", "extract"]
