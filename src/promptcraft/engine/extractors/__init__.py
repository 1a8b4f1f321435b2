"""Rule-based field extractors, one per lab."""

import random
from typing import Any

from ...prompts.schema import DocumentKind
from ...prompts.fields import FieldState, default_fields
from .base import Extractor, classify
from .image import ImageExtractor
from .notion import NotionExtractor
from .story import StoryExtractor
from .threads import ThreadsExtractor
from .video import VideoExtractor


def create_extractors(rng: random.Random | None = None) -> dict[DocumentKind, Extractor]:
    """Build one extractor per kind; `rng` drives style-reference picks."""
    extractors: list[Extractor] = [
        StoryExtractor(),
        ImageExtractor(rng),
        VideoExtractor(),
        NotionExtractor(),
        ThreadsExtractor(),
    ]
    return {extractor.kind: extractor for extractor in extractors}


def extract(
    kind: DocumentKind,
    text: str,
    state: FieldState | None = None,
    rng: random.Random | None = None,
) -> dict[str, Any]:
    """Extract partial fields for `kind` from free text."""
    kind = DocumentKind(kind)
    if state is None:
        state = default_fields(kind)
    return create_extractors(rng)[kind].extract(text, state)


__all__ = [
    "Extractor",
    "ImageExtractor",
    "NotionExtractor",
    "StoryExtractor",
    "ThreadsExtractor",
    "VideoExtractor",
    "classify",
    "create_extractors",
    "extract",
]
