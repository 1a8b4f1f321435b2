"""Pydantic models for saved prompt documents."""

import json
from datetime import datetime
from enum import Enum
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..utils import coerce_count


class DocumentKind(str, Enum):
    """Which lab produced a document."""

    STORY = "story"
    IMAGE = "image"
    VIDEO = "video"
    NOTION = "notion"
    THREADS = "threads"


class NotionKind(str, Enum):
    """Output kinds offered by the Notion lab."""

    SUMMARY = "summary"
    TEMPLATE = "template"
    CONTENT = "content"
    TROUBLESHOOTING = "troubleshooting"
    TABLE = "table"
    AUTOMATION = "automation"
    COLLABORATION = "collaboration"
    FORMULA = "formula"
    LEARNING = "learning"


STORYTELLER_RULES = (
    "You must be able to complete the story",
    "Output should only be 1 chapter and at most 1 chapter. IMPORTANT",
    "Follows the story object contents strictly",
)

STORY_DETAIL = (
    "Must be in great and specific detail, dialogues must be humane, "
    "serious and humor, all characters should be named"
)


class PromptModel(BaseModel):
    """Base for persisted models: camelCase on disk, immutable in memory."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_json(self) -> str:
        """Render as indented camelCase JSON, the form users copy out."""
        return json.dumps(self.model_dump(mode="json", by_alias=True), indent=2)


# Story


class Chapters(PromptModel):
    max_words: int = 125
    min_words: int = 75
    max_chapter_per_output: int = 1
    uniqueness_level: int = 100

    @field_validator("max_words", "min_words", "max_chapter_per_output", "uniqueness_level", mode="before")
    @classmethod
    def non_negative(cls, v: Any) -> int:
        return coerce_count(v)


class Plot(PromptModel):
    storyline: str = ""
    specifics: str = ""


class Story(PromptModel):
    genre: str = ""
    plot: Plot = Field(default_factory=Plot)
    detail: str = STORY_DETAIL
    vulgar: bool = False
    cussing: bool = False
    chapters: Chapters = Field(default_factory=Chapters)


class Storyteller(PromptModel):
    rules: list[str] = Field(default_factory=lambda: list(STORYTELLER_RULES))


class StoryPayload(PromptModel):
    """Task/story prompt, the original document shape."""

    task: str = ""
    task_rules: list[str] = Field(default_factory=list)
    storyteller: Storyteller = Field(default_factory=Storyteller)
    story: Story = Field(default_factory=Story)

    @field_validator("task_rules")
    @classmethod
    def drop_blank_rules(cls, v: list[str]) -> list[str]:
        return [rule for rule in v if rule.strip()]


# Image / Video


class GenreTag(PromptModel):
    genre: str


class ImageStructured(PromptModel):
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


class ImagePayload(PromptModel):
    type: Literal["image"] = "image"
    command: str
    structured: ImageStructured
    task: str = "Midjourney Image Prompt"
    story: GenreTag = Field(default_factory=lambda: GenreTag(genre="Image"))


class VideoFlags(PromptModel):
    aspect: str = "91:51"
    motion: str = "high"
    video: Literal[1] = 1


class VideoPayload(PromptModel):
    type: Literal["video"] = "video"
    command: str
    flags: VideoFlags
    task: str = "Midjourney Video Prompt"
    story: GenreTag = Field(default_factory=lambda: GenreTag(genre="Video"))


# Notion / Threads


class NotionPayload(PromptModel):
    content: str
    summary: str
    type: NotionKind


class ThreadsPayload(PromptModel):
    conversation: str
    generated_prompt: str


Payload = Union[StoryPayload, ImagePayload, VideoPayload, NotionPayload, ThreadsPayload]

PAYLOAD_MODELS: dict[DocumentKind, type[PromptModel]] = {
    DocumentKind.STORY: StoryPayload,
    DocumentKind.IMAGE: ImagePayload,
    DocumentKind.VIDEO: VideoPayload,
    DocumentKind.NOTION: NotionPayload,
    DocumentKind.THREADS: ThreadsPayload,
}


def infer_kind(data: Any) -> DocumentKind:
    """Work out the kind of a record saved without an explicit `kind`.

    Records written before documents were tagged only had the payload
    shape to go on: image/video carry `type`, threads carry a
    conversation, notion carries a summary, and anything else is a story.
    """
    if not isinstance(data, dict):
        return DocumentKind.STORY
    if data.get("type") == "image":
        return DocumentKind.IMAGE
    if data.get("type") == "video":
        return DocumentKind.VIDEO
    if "conversation" in data:
        return DocumentKind.THREADS
    if "summary" in data:
        return DocumentKind.NOTION
    return DocumentKind.STORY


class PromptDocument(PromptModel):
    """A saved library entry: envelope plus a kind-specific payload."""

    id: str
    name: str
    kind: DocumentKind
    created_at: datetime
    data: Payload
    genre: Optional[str] = None
    task: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def resolve_payload(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values

        values = dict(values)
        data = values.get("data")
        kind = values.get("kind") or infer_kind(data)
        kind = DocumentKind(kind)
        values["kind"] = kind

        if isinstance(data, dict):
            values["data"] = PAYLOAD_MODELS[kind].model_validate(data)
        return values

    @model_validator(mode="after")
    def payload_matches_kind(self) -> "PromptDocument":
        expected = PAYLOAD_MODELS[self.kind]
        if not isinstance(self.data, expected):
            raise ValueError(
                f"{self.kind.value} document carries a {type(self.data).__name__} payload"
            )
        return self

    def to_record(self) -> dict:
        """Convert to a JSON-serializable dict in the on-disk layout."""
        return self.model_dump(mode="json", by_alias=True)

    def payload_json(self) -> str:
        return self.data.to_json()
