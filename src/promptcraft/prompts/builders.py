"""Assemble saved documents and copy text from lab field state."""

import logging
import uuid
from datetime import datetime
from typing import Callable

from ..errors import NothingToDoError
from ..utils import strip_markdown, truncate
from .fields import (
    FieldState,
    ImageFields,
    NotionFields,
    StoryFields,
    ThreadsFields,
    VideoFields,
)
from .schema import (
    Chapters,
    DocumentKind,
    ImagePayload,
    ImageStructured,
    NotionPayload,
    Plot,
    PromptDocument,
    Story,
    StoryPayload,
    ThreadsPayload,
    VideoFlags,
    VideoPayload,
)

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]


def _new_id() -> str:
    return str(uuid.uuid4())


def document_name(prefix: str, primary: str, limit: int, created_at: datetime) -> str:
    """`<prefix>: <primary, truncated> (<HH:MM>)`."""
    return f"{prefix}: {truncate(primary, limit)} ({created_at.strftime('%H:%M')})"


# Commands


def image_command(fields: ImageFields) -> str:
    base = (
        f"/imagine {fields.subject} {fields.medium}, {fields.environment}, "
        f"{fields.lighting} lighting, {fields.color} colors, {fields.mood} mood, "
        f"{fields.composition}"
    ).strip()
    flags = [
        f"--ar {fields.aspect}",
        "--profile" if fields.profile else "",
        f"--v {fields.version}",
        f"--sref {fields.sref}" if fields.sref else "",
    ]
    return f"{base} {' '.join(flag for flag in flags if flag)}".strip()


def video_command(fields: VideoFields) -> str:
    base = f"/imagine {fields.idea}".strip()
    flags = f"--ar {fields.aspect} --motion {fields.motion} --video 1"
    return f"{base} {flags}".strip()


# Payloads


def story_payload(fields: StoryFields) -> StoryPayload:
    """Nest story fields into the storyteller prompt structure.

    Blank task rules are dropped here rather than while editing.
    """
    return StoryPayload(
        task=fields.task,
        task_rules=[rule for rule in fields.task_rules if rule.strip()],
        story=Story(
            genre=fields.genre,
            plot=Plot(storyline=fields.storyline, specifics=fields.specifics),
            vulgar=fields.vulgar,
            cussing=fields.cussing,
            chapters=Chapters(
                max_words=fields.max_words,
                min_words=fields.min_words,
                max_chapter_per_output=fields.max_chapter_per_output,
                uniqueness_level=fields.uniqueness_level,
            ),
        ),
    )


def image_payload(fields: ImageFields) -> ImagePayload:
    return ImagePayload(
        command=image_command(fields),
        structured=ImageStructured(**fields.model_dump()),
    )


def video_payload(fields: VideoFields) -> VideoPayload:
    return VideoPayload(
        command=video_command(fields),
        flags=VideoFlags(aspect=fields.aspect, motion=fields.motion),
    )


# Documents


def build_story(fields: StoryFields, created_at: datetime, new_id: IdFactory) -> PromptDocument:
    if not fields.task.strip() and not fields.storyline.strip():
        raise NothingToDoError("Nothing to save", "Describe your story or set a task first.")

    payload = story_payload(fields)
    task = payload.task or "Untitled Task"
    if payload.story.genre:
        name = document_name(payload.story.genre, task, 30, created_at)
    else:
        name = document_name("Story", task, 40, created_at)

    return PromptDocument(
        id=new_id(),
        name=name,
        kind=DocumentKind.STORY,
        created_at=created_at,
        data=payload,
        genre=payload.story.genre or None,
        task=payload.task,
    )


def build_image(fields: ImageFields, created_at: datetime, new_id: IdFactory) -> PromptDocument:
    if not fields.subject.strip():
        raise NothingToDoError("Nothing to save", "Please generate a prompt first.")

    payload = image_payload(fields)
    return PromptDocument(
        id=new_id(),
        name=document_name("Image", fields.subject, 40, created_at),
        kind=DocumentKind.IMAGE,
        created_at=created_at,
        data=payload,
        genre=payload.story.genre,
        task=payload.task,
    )


def build_video(fields: VideoFields, created_at: datetime, new_id: IdFactory) -> PromptDocument:
    if not fields.idea.strip():
        raise NothingToDoError("Nothing to save", "Please generate a prompt first.")

    payload = video_payload(fields)
    return PromptDocument(
        id=new_id(),
        name=document_name("Video", fields.idea, 40, created_at),
        kind=DocumentKind.VIDEO,
        created_at=created_at,
        data=payload,
        genre=payload.story.genre,
        task=payload.task,
    )


def build_notion(fields: NotionFields, created_at: datetime, new_id: IdFactory) -> PromptDocument:
    if not fields.output:
        raise NothingToDoError("Nothing to save", "Please generate content first.")

    prefix = f"Notion {fields.kind.value.capitalize()}"
    return PromptDocument(
        id=new_id(),
        name=document_name(prefix, fields.content, 30, created_at),
        kind=DocumentKind.NOTION,
        created_at=created_at,
        data=NotionPayload(content=fields.content, summary=fields.output, type=fields.kind),
    )


def build_threads(fields: ThreadsFields, created_at: datetime, new_id: IdFactory) -> PromptDocument:
    if not fields.generated_prompt:
        raise NothingToDoError("No prompt to save", "Please generate a prompt first.")

    first_line = fields.conversation.strip().split("\n")[0].strip()
    return PromptDocument(
        id=new_id(),
        name=document_name("Threads", first_line, 40, created_at),
        kind=DocumentKind.THREADS,
        created_at=created_at,
        data=ThreadsPayload(
            conversation=fields.conversation,
            generated_prompt=fields.generated_prompt,
        ),
        genre="Conversation",
        task="LLM Prompt",
    )


BUILDERS: dict[DocumentKind, Callable[[FieldState, datetime, IdFactory], PromptDocument]] = {
    DocumentKind.STORY: build_story,
    DocumentKind.IMAGE: build_image,
    DocumentKind.VIDEO: build_video,
    DocumentKind.NOTION: build_notion,
    DocumentKind.THREADS: build_threads,
}


def build(
    kind: DocumentKind,
    fields: FieldState,
    created_at: datetime | None = None,
    id_factory: IdFactory | None = None,
) -> PromptDocument:
    """Build a new document from the current field state.

    Raises:
        NothingToDoError: If the lab has no output to save yet.
    """
    kind = DocumentKind(kind)
    document = BUILDERS[kind](fields, created_at or datetime.now(), id_factory or _new_id)
    logger.debug(f"[BUILD] {kind.value} document: {document.name}")
    return document


def render_copy(kind: DocumentKind, fields: FieldState) -> str:
    """Text a lab puts on the clipboard for its current output.

    Story copies its payload JSON, image/video their command, threads its
    prompt, and notion its output with markdown markers removed.

    Raises:
        NothingToDoError: If there is nothing generated to copy.
    """
    kind = DocumentKind(kind)

    if kind == DocumentKind.STORY:
        if not fields.task.strip() and not fields.storyline.strip():
            raise NothingToDoError("Nothing to copy", "Describe your story or set a task first.")
        return story_payload(fields).to_json()
    if kind == DocumentKind.IMAGE:
        if not fields.subject.strip():
            raise NothingToDoError("Nothing to copy", "Please generate a prompt first.")
        return image_command(fields)
    if kind == DocumentKind.VIDEO:
        if not fields.idea.strip():
            raise NothingToDoError("Nothing to copy", "Please generate a prompt first.")
        return video_command(fields)
    if kind == DocumentKind.NOTION:
        if not fields.output:
            raise NothingToDoError("Nothing to copy", "Please generate content first.")
        return strip_markdown(fields.output)

    if not fields.generated_prompt:
        raise NothingToDoError("Nothing to copy", "Please generate a prompt first.")
    return fields.generated_prompt


def copy_document(document: PromptDocument) -> str:
    """Text copied for a saved library entry.

    Notion entries copy their output without markdown markers; every other
    kind copies its payload JSON.
    """
    if document.kind == DocumentKind.NOTION:
        return strip_markdown(document.data.summary)
    return document.payload_json()
