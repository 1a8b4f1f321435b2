"""JSON-file backed prompt library."""

import json
import logging
import shutil
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..config import Settings
from ..utils import get_unique_path
from .schema import DocumentKind, PromptDocument

logger = logging.getLogger(__name__)


class LibraryStore:
    """An ordered, newest-first list of saved documents in one JSON file.

    Every call reads the file and every mutation rewrites it, so the
    store holds no state between calls and survives restarts. It assumes
    a single writer.

    Entries that fail validation are hidden from reads but written back
    untouched, so they stay on disk until deleted by id.
    """

    def __init__(self, path: Path):
        self.path = path

    @property
    def name(self) -> str:
        return self.path.stem

    def _read_records(self) -> list[Any]:
        """Raw records as stored, or [] for a missing or quarantined file."""
        if not self.path.exists():
            return []

        try:
            records = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            self._quarantine(f"invalid JSON ({e})")
            return []

        if not isinstance(records, list):
            self._quarantine(f"expected a list, found {type(records).__name__}")
            return []

        return records

    def _parse(self, records: list[Any]) -> list[PromptDocument]:
        documents = []
        for position, record in enumerate(records):
            try:
                documents.append(PromptDocument.model_validate(record))
            except ValidationError as e:
                logger.warning(
                    f"[LIBRARY] Skipping unreadable entry {position} in {self.path.name}: "
                    f"{e.error_count()} validation errors"
                )
        return documents

    def _read(self) -> list[PromptDocument]:
        return self._parse(self._read_records())

    def _write(self, records: list[Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps(records, indent=2, ensure_ascii=False)

        # Write-then-rename so a crash never leaves a half-written store
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        tmp_path.write_text(payload, encoding="utf-8")
        tmp_path.replace(self.path)

    def _quarantine(self, reason: str) -> None:
        """Move an unreadable store file aside so the next save starts clean."""
        dest = get_unique_path(self.path.with_name(f"{self.path.stem}.corrupt{self.path.suffix}"))
        shutil.move(self.path, dest)
        logger.warning(f"[LIBRARY] {self.path.name} is unreadable ({reason}); moved to {dest.name}")

    def save(self, document: PromptDocument) -> None:
        """Insert a document at the front of the library.

        Raises:
            ValueError: If a document with the same id is already stored.
        """
        records = self._read_records()
        if any(_record_id(record) == document.id for record in records):
            raise ValueError(f"Document id already stored: {document.id}")

        self._write([document.to_record(), *records])
        logger.info(f"[LIBRARY] Saved to {self.name}: {document.name}")

    def search(self, term: str) -> list[PromptDocument]:
        """Case-insensitive substring match on name, genre and task."""
        needle = term.lower()
        return [
            doc for doc in self.list()
            if needle in doc.name.lower()
            or needle in (doc.genre or "").lower()
            or needle in (doc.task or "").lower()
        ]

    def get(self, document_id: str) -> PromptDocument | None:
        for doc in self._read():
            if doc.id == document_id:
                return doc
        return None

    def delete(self, document_id: str) -> bool:
        """Remove a document by id. Unknown ids are ignored.

        Unreadable entries can be deleted too, as long as they carry an id.

        Returns:
            True if a record was removed.
        """
        records = self._read_records()
        remaining = [record for record in records if _record_id(record) != document_id]

        if len(remaining) == len(records):
            logger.debug(f"[LIBRARY] Nothing to delete for id {document_id}")
            return False

        self._write(remaining)
        logger.info(f"[LIBRARY] Deleted from {self.name}: {document_id}")
        return True

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

    def list(self) -> list[PromptDocument]:
        """All readable documents, newest first."""
        return self._read()


def _record_id(record: Any) -> Any:
    return record.get("id") if isinstance(record, dict) else None


def store_name_for(settings: Settings, kind: DocumentKind) -> str:
    """Notion content has its own store; every other lab shares the library."""
    if DocumentKind(kind) == DocumentKind.NOTION:
        return settings.notion_store
    return settings.library_store


def open_store(settings: Settings, kind: DocumentKind) -> LibraryStore:
    return LibraryStore(settings.store_path(store_name_for(settings, kind)))
