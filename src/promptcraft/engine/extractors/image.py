"""Image prompt extractor."""

import logging
import random
from typing import Any

from ...prompts.schema import DocumentKind
from ...prompts.fields import FieldState
from .base import Extractor, KeywordRules, classify

logger = logging.getLogger(__name__)

SREF_CODES = (
    "5523", "6953", "2829", "1829", "9283",
    "4729", "3829", "7293", "8293", "1039",
)

MEDIUM_RULES: KeywordRules = (
    (("painting", "art"), "painting"),
    (("illustration",), "illustration"),
    (("3d", "render"), "3d render"),
    (("sketch",), "sketch"),
)

ENVIRONMENT_RULES: KeywordRules = (
    (("indoor",), "indoors"),
    (("underwater",), "underwater"),
    (("city",), "in the city"),
    (("moon",), "on the moon"),
)

LIGHTING_RULES: KeywordRules = (
    (("soft light",), "soft"),
    (("neon",), "neon"),
    (("studio",), "studio"),
    (("overcast",), "overcast"),
)

COLOR_RULES: KeywordRules = (
    (("muted",), "muted"),
    (("monochrome", "monochromatic"), "monochromatic"),
    (("colorful",), "colorful"),
    (("pastel",), "pastel"),
    (("black and white",), "black and white"),
)

MOOD_RULES: KeywordRules = (
    (("playful",), "playful"),
    (("calm",), "calm"),
    (("gloomy", "sad"), "gloomy"),
)

COMPOSITION_RULES: KeywordRules = (
    (("portrait",), "portrait"),
    (("headshot",), "headshot"),
    (("birds-eye", "aerial"), "birds-eye view"),
    (("wide",), "wide shot"),
)


class ImageExtractor(Extractor):
    """Classifies an image description into Midjourney prompt fields.

    Every call also draws a fresh style-reference code from `rng`, so
    results are only reproducible when the caller pins the random source.
    """

    kind = DocumentKind.IMAGE

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()

    def extract(self, text: str, state: FieldState) -> dict[str, Any]:
        lowered = text.lower()
        fields = {
            "subject": text,
            "medium": classify(lowered, MEDIUM_RULES, "photo"),
            "environment": classify(lowered, ENVIRONMENT_RULES, "outdoors"),
            "lighting": classify(lowered, LIGHTING_RULES, "cinematic"),
            "color": classify(lowered, COLOR_RULES, "vibrant"),
            "mood": classify(lowered, MOOD_RULES, "energetic"),
            "composition": classify(lowered, COMPOSITION_RULES, "closeup"),
            "sref": self.rng.choice(SREF_CODES),
        }
        logger.debug(
            f"[EXTRACT] Image: {fields['medium']}, {fields['environment']}, "
            f"{fields['lighting']}, sref {fields['sref']}"
        )
        return fields
