"""Story/task prompt extractor."""

import logging
import re
from typing import Any

from ...prompts.schema import DocumentKind
from ...prompts.fields import FieldState
from ...utils import coerce_count
from .base import Extractor

logger = logging.getLogger(__name__)

# Scan order matters: the first genre found wins.
GENRES = (
    "sci-fi",
    "fantasy",
    "romance",
    "horror",
    "mystery",
    "thriller",
    "adventure",
    "drama",
    "comedy",
)

VULGAR_KEYWORDS = ("vulgar", "mature", "adult")
CUSSING_KEYWORDS = ("cussing", "swearing", "profanity")

ACT_AS_PATTERN = re.compile(r"act as (.*?)(?:\.|,|$)", re.IGNORECASE)
BE_A_PATTERN = re.compile(r"be a (.*?)(?:\.|,|$)", re.IGNORECASE)
MAX_WORDS_PATTERN = re.compile(r"(\d+)\s*max\s*words?", re.IGNORECASE)
MIN_WORDS_PATTERN = re.compile(r"(\d+)\s*min\s*words?", re.IGNORECASE)


class StoryExtractor(Extractor):
    """Reads genre, task, content flags and word limits from a description."""

    kind = DocumentKind.STORY

    def extract(self, text: str, state: FieldState) -> dict[str, Any]:
        lowered = text.lower()
        fields: dict[str, Any] = {"storyline": text}

        genre = self._find_genre(lowered)
        if genre:
            fields["genre"] = genre[0].upper() + genre[1:]

        task = self._find_task(text, lowered)
        if task:
            fields["task"] = task

        if any(keyword in lowered for keyword in VULGAR_KEYWORDS):
            fields["vulgar"] = True
        if any(keyword in lowered for keyword in CUSSING_KEYWORDS):
            fields["cussing"] = True

        max_match = MAX_WORDS_PATTERN.search(text)
        if max_match:
            fields["max_words"] = coerce_count(max_match.group(1))
        min_match = MIN_WORDS_PATTERN.search(text)
        if min_match:
            fields["min_words"] = coerce_count(min_match.group(1))

        logger.debug(f"[EXTRACT] Story fields: {sorted(fields)}")
        return fields

    def _find_genre(self, lowered: str) -> str | None:
        for genre in GENRES:
            if genre in lowered:
                return genre
        return None

    def _find_task(self, text: str, lowered: str) -> str | None:
        """Find an "act as ..." or "be a ..." phrase.

        Only the first pattern whose trigger words appear is tried.
        """
        if "act as" in lowered:
            match = ACT_AS_PATTERN.search(text)
            if match:
                return f"Act as {match.group(1)}"
        elif "be a" in lowered:
            match = BE_A_PATTERN.search(text)
            if match:
                return f"Act as a {match.group(1)}"
        return None
