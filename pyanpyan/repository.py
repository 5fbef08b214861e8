"""Checklist persistence boundary.

Every operation returns a RepositoryResult; I/O and parse failures are
mapped to RepositoryError values and never raised to the caller. Writes
always replace the whole collection (read-all, splice, write-all), which
assumes a single writer.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterable

from pyanpyan.codec import CodecError, decode_checklists, encode_checklists
from pyanpyan.defaults import create_default_checklists
from pyanpyan.errors import FileReadError, FileWriteError, InvalidDataError, JsonParseError, RepositoryError
from pyanpyan.fileio import write_text_atomic
from pyanpyan.models import Checklist, ChecklistId
from pyanpyan.result import RepositoryResult, failure, success
from pyanpyan.workspace import data_dir

logger = logging.getLogger(__name__)


class ChecklistRepository(ABC):
    """Storage contract consumed by front ends and flows."""

    @abstractmethod
    def get_all_checklists(self) -> RepositoryResult[list[Checklist]]:
        """All checklists; seeds and persists the default set on first-ever read."""

    def get_checklist(self, checklist_id: ChecklistId) -> RepositoryResult[Checklist | None]:
        """The checklist with *checklist_id*, or Success(None) when absent."""
        return self.get_all_checklists().map(lambda checklists: find_checklist(checklists, checklist_id))

    @abstractmethod
    def save_checklist(self, checklist: Checklist) -> RepositoryResult[None]:
        """Upsert by id: replace in place if present, else append."""

    @abstractmethod
    def delete_checklist(self, checklist_id: ChecklistId) -> RepositoryResult[None]:
        """Remove by id; an absent id is not an error."""

    @abstractmethod
    def export_to_json(self) -> RepositoryResult[str]:
        """The stored collection as a JSON array ("[]" when nothing is stored)."""

    @abstractmethod
    def import_from_json(self, text: str) -> RepositoryResult[None]:
        """Replace the entire collection with the checklists in *text*."""


# ── Collection helpers ────────────────────────────────────────


def find_checklist(checklists: Iterable[Checklist], checklist_id: ChecklistId) -> Checklist | None:
    for checklist in checklists:
        if checklist.id == checklist_id:
            return checklist
    return None


def upsert_checklist(checklists: list[Checklist], checklist: Checklist) -> list[Checklist]:
    """Replace the entry with the same id keeping its position, or append."""
    updated = []
    replaced = False
    for existing in checklists:
        if existing.id == checklist.id:
            updated.append(checklist)
            replaced = True
        else:
            updated.append(existing)
    if not replaced:
        updated.append(checklist)
    return updated


def remove_checklist(checklists: list[Checklist], checklist_id: ChecklistId) -> list[Checklist]:
    return [c for c in checklists if c.id != checklist_id]


def decode_result(text: str) -> RepositoryResult[list[Checklist]]:
    """Decode *text*, mapping codec failures to repository errors."""
    try:
        return success(decode_checklists(text))
    except CodecError as e:
        error: RepositoryError
        if e.kind == "json":
            error = JsonParseError(str(e), e)
        else:
            error = InvalidDataError(str(e), e)
        logger.warning("Rejected checklist data: %s", e)
        return failure(error)


# ── JSON file implementation ──────────────────────────────────


class JsonChecklistRepository(ChecklistRepository):
    """Keeps all checklists in one pretty-printed checklists.json file."""

    FILE_NAME = "checklists.json"

    def __init__(self, storage_dir: Path | None = None) -> None:
        self.storage_dir = Path(storage_dir) if storage_dir is not None else data_dir()

    @property
    def path(self) -> Path:
        return self.storage_dir / self.FILE_NAME

    def get_all_checklists(self) -> RepositoryResult[list[Checklist]]:
        if not self.path.exists():
            defaults = create_default_checklists()
            written = self._write_all(defaults)
            if written.is_failure():
                return written
            logger.info("Seeded %s with %d default checklist(s)", self.path, len(defaults))
            return success(defaults)

        read = self._read_text()
        if read.is_failure():
            return read
        text = read.value
        if not text.strip():
            return success([])
        return decode_result(text)

    def save_checklist(self, checklist: Checklist) -> RepositoryResult[None]:
        return self.get_all_checklists().flat_map(
            lambda checklists: self._write_all(upsert_checklist(checklists, checklist))
        )

    def delete_checklist(self, checklist_id: ChecklistId) -> RepositoryResult[None]:
        return self.get_all_checklists().flat_map(
            lambda checklists: self._write_all(remove_checklist(checklists, checklist_id))
        )

    def export_to_json(self) -> RepositoryResult[str]:
        if not self.path.exists():
            return success("[]")
        return self._read_text().map(lambda text: text if text.strip() else "[]")

    def import_from_json(self, text: str) -> RepositoryResult[None]:
        return decode_result(text).flat_map(self._write_all)

    def _read_text(self) -> RepositoryResult[str]:
        try:
            return success(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Failed to read %s: %s", self.path, e)
            return failure(FileReadError(str(e) or "Failed to read file", e))

    def _write_all(self, checklists: list[Checklist]) -> RepositoryResult[None]:
        try:
            write_text_atomic(self.path, encode_checklists(checklists))
        except Exception as e:
            logger.error("Failed to write %s: %s", self.path, e)
            return failure(FileWriteError(str(e) or "Failed to write file", e))
        return success(None)


# ── In-memory implementation ──────────────────────────────────


class InMemoryChecklistRepository(ChecklistRepository):
    """Same contract over a Python list. ``None`` means nothing stored yet."""

    def __init__(self, checklists: Iterable[Checklist] | None = None) -> None:
        self._store: list[Checklist] | None = list(checklists) if checklists is not None else None

    def get_all_checklists(self) -> RepositoryResult[list[Checklist]]:
        if self._store is None:
            self._store = create_default_checklists()
        return success(list(self._store))

    def save_checklist(self, checklist: Checklist) -> RepositoryResult[None]:
        return self.get_all_checklists().flat_map(
            lambda checklists: self._replace_all(upsert_checklist(checklists, checklist))
        )

    def delete_checklist(self, checklist_id: ChecklistId) -> RepositoryResult[None]:
        return self.get_all_checklists().flat_map(
            lambda checklists: self._replace_all(remove_checklist(checklists, checklist_id))
        )

    def export_to_json(self) -> RepositoryResult[str]:
        if self._store is None:
            return success("[]")
        return success(encode_checklists(self._store))

    def import_from_json(self, text: str) -> RepositoryResult[None]:
        return decode_result(text).flat_map(self._replace_all)

    def _replace_all(self, checklists: list[Checklist]) -> RepositoryResult[None]:
        self._store = list(checklists)
        return success(None)
