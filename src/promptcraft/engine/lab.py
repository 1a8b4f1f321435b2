"""Lab pipeline: free text -> field state -> document -> library."""

import asyncio
import logging
import random
from datetime import datetime

from ..config import Settings
from ..errors import NothingToDoError
from ..prompts import (
    DocumentKind,
    FieldState,
    LibraryStore,
    PromptDocument,
    StoryFields,
    build,
    default_fields,
    open_store,
    render_copy,
)
from ..prompts.fields import DEFAULT_TASK
from .extractors import Extractor, create_extractors

logger = logging.getLogger(__name__)


class PromptLab:
    """What a session calls into: generate, save and copy for every lab.

    Field state is owned by the caller. Each call takes the current record
    and returns a new one; nothing here holds per-session state.
    """

    def __init__(self, settings: Settings, rng: random.Random | None = None):
        self.settings = settings
        self.extractors: dict[DocumentKind, Extractor] = create_extractors(rng)
        self.stores: dict[DocumentKind, LibraryStore] = {
            kind: open_store(settings, kind) for kind in DocumentKind
        }
        logger.debug(f"[STARTUP] Library at {settings.data_dir}")

    def initial_state(self, kind: DocumentKind) -> FieldState:
        return default_fields(DocumentKind(kind), self.settings)

    def store_for(self, kind: DocumentKind) -> LibraryStore:
        return self.stores[DocumentKind(kind)]

    def delay_for(self, kind: DocumentKind) -> float:
        """Seconds to wait before surfacing output; story parsing is instant."""
        if DocumentKind(kind) == DocumentKind.STORY:
            return 0.0
        return self.settings.generation_delay

    def parse(self, kind: DocumentKind, text: str, state: FieldState | None = None) -> FieldState:
        """Run extraction and merge the result into `state`.

        Raises:
            NothingToDoError: If `text` is blank.
        """
        kind = DocumentKind(kind)
        if not text.strip():
            raise NothingToDoError("Input required", "Please enter a description first.")

        if state is None:
            state = self.initial_state(kind)

        partial = self.extractors[kind].extract(text, state)
        updated = state.merge(partial)

        if isinstance(updated, StoryFields) and not updated.task.strip():
            updated = updated.merge({"task": DEFAULT_TASK})

        logger.debug(f"[LAB] Parsed {kind.value} input ({len(text)} chars)")
        return updated

    async def generate(
        self,
        kind: DocumentKind,
        text: str,
        state: FieldState | None = None,
    ) -> FieldState:
        """Parse after the lab's generation delay.

        Overlapping calls are not cancelled; whichever result the caller
        applies last wins.
        """
        kind = DocumentKind(kind)
        if not text.strip():
            raise NothingToDoError("Input required", "Please enter a description first.")

        delay = self.delay_for(kind)
        if delay > 0:
            logger.debug(f"[LAB] Generating {kind.value} output in {delay:.1f}s")
            await asyncio.sleep(delay)

        return self.parse(kind, text, state)

    def save(
        self,
        kind: DocumentKind,
        state: FieldState,
        created_at: datetime | None = None,
    ) -> PromptDocument:
        """Build a document from `state` and insert it into its library."""
        kind = DocumentKind(kind)
        document = build(kind, state, created_at=created_at)
        self.store_for(kind).save(document)
        logger.info(f"[LAB] Saved {kind.value} prompt: {document.name}")
        return document

    async def generate_and_save(
        self,
        kind: DocumentKind,
        text: str,
        state: FieldState | None = None,
    ) -> tuple[FieldState, PromptDocument]:
        updated = await self.generate(kind, text, state)
        return updated, self.save(kind, updated)

    def copy_text(self, kind: DocumentKind, state: FieldState) -> str:
        return render_copy(kind, state)
