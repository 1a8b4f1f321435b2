"""Immutable field state for each lab.

The caller owns these records. Extraction and building never mutate them;
`merge` and the rule helpers return new records.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, field_validator

from ..config import Settings
from ..utils import coerce_count
from .schema import DocumentKind, NotionKind

DEFAULT_TASK = "Act as a storyteller, the rules must be strictly followed!"


class FieldState(BaseModel):
    """Base for per-lab form state."""

    model_config = ConfigDict(frozen=True)

    def merge(self, partial: dict[str, Any]) -> "FieldState":
        """Return a new record with `partial` applied on top of this one."""
        if not partial:
            return self
        return self.model_validate({**self.model_dump(), **partial})


class StoryFields(FieldState):
    task: str = ""
    task_rules: tuple[str, ...] = ("",)
    genre: str = ""
    storyline: str = ""
    specifics: str = ""
    vulgar: bool = False
    cussing: bool = False
    max_words: int = 125
    min_words: int = 75
    max_chapter_per_output: int = 1
    uniqueness_level: int = 100

    @field_validator("max_words", "min_words", "max_chapter_per_output", "uniqueness_level", mode="before")
    @classmethod
    def non_negative(cls, v: Any) -> int:
        return coerce_count(v)

    def add_rule(self) -> "StoryFields":
        return self.merge({"task_rules": (*self.task_rules, "")})

    def remove_rule(self, index: int) -> "StoryFields":
        rules = tuple(rule for i, rule in enumerate(self.task_rules) if i != index)
        return self.merge({"task_rules": rules})

    def update_rule(self, index: int, value: str) -> "StoryFields":
        rules = list(self.task_rules)
        rules[index] = value
        return self.merge({"task_rules": tuple(rules)})


class ImageFields(FieldState):
    subject: str = ""
    medium: str = "photo"
    environment: str = "outdoors"
    lighting: str = "cinematic"
    color: str = "vibrant"
    mood: str = "energetic"
    composition: str = "closeup"
    aspect: str = "16:9"
    version: str = "7"
    profile: bool = True
    sref: str = ""

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageFields":
        return cls(
            aspect=settings.image_aspect,
            version=settings.image_version,
            profile=settings.image_profile,
        )

    def structured_text(self) -> str:
        """Labelled preview of the descriptive fields."""
        return "\n".join([
            f"Subject: {self.subject}",
            f"Medium: {self.medium}",
            f"Environment: {self.environment}",
            f"Lighting: {self.lighting}",
            f"Color: {self.color}",
            f"Mood: {self.mood}",
            f"Composition: {self.composition}",
        ])


VideoAspect = Literal["91:51", "16:9", "9:16", "1:1"]
MotionLevel = Literal["low", "medium", "high"]


class VideoFields(FieldState):
    idea: str = ""
    aspect: VideoAspect = "91:51"
    motion: MotionLevel = "high"


class NotionFields(FieldState):
    content: str = ""
    kind: NotionKind = NotionKind.SUMMARY
    output: str = ""


class ThreadsFields(FieldState):
    conversation: str = ""
    generated_prompt: str = ""


FIELD_MODELS: dict[DocumentKind, type[FieldState]] = {
    DocumentKind.STORY: StoryFields,
    DocumentKind.IMAGE: ImageFields,
    DocumentKind.VIDEO: VideoFields,
    DocumentKind.NOTION: NotionFields,
    DocumentKind.THREADS: ThreadsFields,
}


def default_fields(kind: DocumentKind, settings: Settings | None = None) -> FieldState:
    """Initial form state for a lab."""
    if kind == DocumentKind.IMAGE and settings is not None:
        return ImageFields.from_settings(settings)
    return FIELD_MODELS[kind]()
