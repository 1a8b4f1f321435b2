"""Prompt documents, field state, builders and the library store."""

from .builders import build, copy_document, render_copy
from .fields import (
    FieldState,
    ImageFields,
    NotionFields,
    StoryFields,
    ThreadsFields,
    VideoFields,
    default_fields,
)
from .schema import DocumentKind, NotionKind, PromptDocument
from .store import LibraryStore, open_store

__all__ = [
    "DocumentKind",
    "FieldState",
    "ImageFields",
    "LibraryStore",
    "NotionFields",
    "NotionKind",
    "PromptDocument",
    "StoryFields",
    "ThreadsFields",
    "VideoFields",
    "build",
    "copy_document",
    "default_fields",
    "open_store",
    "render_copy",
]
