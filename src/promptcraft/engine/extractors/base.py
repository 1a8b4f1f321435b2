"""Base extractor interface."""

from abc import ABC, abstractmethod
from typing import Any

from ...prompts.schema import DocumentKind
from ...prompts.fields import FieldState

# Ordered (keywords, value) pairs; the first rule with any keyword present wins.
KeywordRules = tuple[tuple[tuple[str, ...], str], ...]


def classify(lowered: str, rules: KeywordRules, default: str) -> str:
    """Pick a value by substring keywords, falling back to `default`."""
    for keywords, value in rules:
        if any(keyword in lowered for keyword in keywords):
            return value
    return default


class Extractor(ABC):
    """Base class for rule-based field extractors.

    `extract` returns only the fields it sets; callers merge the result
    into their current state.
    """

    kind: DocumentKind

    @abstractmethod
    def extract(self, text: str, state: FieldState) -> dict[str, Any]:
        """Derive field values from free text."""
        pass
