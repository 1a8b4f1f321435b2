"""Video prompt extractor."""

import logging
from typing import Any

from ...prompts.schema import DocumentKind
from ...prompts.fields import FieldState
from .base import Extractor, KeywordRules, classify

logger = logging.getLogger(__name__)

ASPECT_RULES: KeywordRules = (
    (("vertical", "portrait"), "9:16"),
    (("square",), "1:1"),
    (("widescreen", "landscape"), "16:9"),
)
DEFAULT_ASPECT = "91:51"  # cinematic

MOTION_RULES: KeywordRules = (
    (("slow", "gentle", "subtle"), "low"),
    (("moderate", "medium"), "medium"),
)


class VideoExtractor(Extractor):
    """Picks aspect ratio and motion level for a scene description."""

    kind = DocumentKind.VIDEO

    def extract(self, text: str, state: FieldState) -> dict[str, Any]:
        lowered = text.lower()
        fields = {
            "idea": text,
            "aspect": classify(lowered, ASPECT_RULES, DEFAULT_ASPECT),
            "motion": classify(lowered, MOTION_RULES, "high"),
        }
        logger.debug(f"[EXTRACT] Video: --ar {fields['aspect']} --motion {fields['motion']}")
        return fields
