"""Shared pytest fixtures for PromptCraft tests."""

import random
from datetime import datetime
from pathlib import Path

import pytest

from promptcraft.config import Settings
from promptcraft.prompts import (
    DocumentKind,
    ImageFields,
    LibraryStore,
    NotionFields,
    NotionKind,
    StoryFields,
    ThreadsFields,
    build,
)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A temporary library directory."""
    return tmp_path / "data"


@pytest.fixture
def settings(data_dir: Path, monkeypatch) -> Settings:
    """Create settings with a temporary library and no generation delay."""
    monkeypatch.delenv("PROMPTCRAFT_DATA_DIR", raising=False)
    return Settings(data_dir=data_dir, generation_delay=0)


@pytest.fixture
def rng() -> random.Random:
    """A seeded random source so style-reference picks are repeatable."""
    return random.Random(42)


@pytest.fixture
def created_at() -> datetime:
    return datetime(2024, 1, 15, 9, 5)


@pytest.fixture
def story_fields() -> StoryFields:
    """Story fields as they look after parsing a typical description."""
    return StoryFields(
        task="Act as a bard",
        task_rules=("Keep it short", ""),
        genre="Fantasy",
        storyline="Act as a bard, sing of a dragon and a lost crown",
    )


@pytest.fixture
def image_fields() -> ImageFields:
    return ImageFields(subject="a neon city at night", lighting="neon", environment="in the city", sref="5523")


@pytest.fixture
def make_document(created_at):
    """Factory building documents with predictable ids."""

    def _make(kind=DocumentKind.STORY, fields=None, doc_id="doc-1", when=None):
        if fields is None:
            fields = StoryFields(task="Act as a bard", storyline="a dragon tale")
        return build(kind, fields, created_at=when or created_at, id_factory=lambda: doc_id)

    return _make


@pytest.fixture
def notion_fields() -> NotionFields:
    return NotionFields(content="Plan the launch", kind=NotionKind.TABLE, output="## Table\n\n**bold** `code`")


@pytest.fixture
def threads_fields() -> ThreadsFields:
    return ThreadsFields(
        conversation="Alice: Hi\nBob: Hello",
        generated_prompt="I want you to respond...",
    )


@pytest.fixture
def store(settings: Settings) -> LibraryStore:
    """An empty library store under the temporary data dir."""
    return LibraryStore(settings.library_path)
