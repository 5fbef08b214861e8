"""Export to and import from JSON files.

Import always replaces everything stored. Every imported item starts
Pending, and nothing is written until the caller confirms the plan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from pyanpyan.codec import encode_checklists
from pyanpyan.errors import FileReadError, FileWriteError
from pyanpyan.fileio import write_text_atomic
from pyanpyan.models import Checklist
from pyanpyan.repository import ChecklistRepository, decode_result
from pyanpyan.result import RepositoryResult, failure, success

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportPlan:
    checklists: list[Checklist]
    payload: str

    @property
    def checklist_count(self) -> int:
        return len(self.checklists)


def prepare_import(text: str) -> RepositoryResult[ImportPlan]:
    """Parse *text* and reset every item to Pending, without touching storage."""

    def _plan(checklists: list[Checklist]) -> ImportPlan:
        reset = [c.reset_all_items() for c in checklists]
        return ImportPlan(checklists=reset, payload=encode_checklists(reset))

    return decode_result(text).map(_plan)


def import_checklists(
    repository: ChecklistRepository,
    text: str,
    confirm: Callable[[ImportPlan], bool],
) -> RepositoryResult[bool]:
    """Replace stored checklists with *text* once *confirm* agrees.

    Success(False) means the user declined and storage is untouched.
    """
    prepared = prepare_import(text)
    if prepared.is_failure():
        return prepared
    plan = prepared.value
    if not confirm(plan):
        logger.info("Import of %d checklist(s) declined", plan.checklist_count)
        return success(False)
    imported = repository.import_from_json(plan.payload)
    if imported.is_failure():
        return imported
    logger.info("Imported %d checklist(s)", plan.checklist_count)
    return success(True)


def import_file(
    repository: ChecklistRepository,
    path: Path,
    confirm: Callable[[ImportPlan], bool],
) -> RepositoryResult[bool]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.error("Could not read import file %s: %s", path, e)
        return failure(FileReadError(f"Could not read file: {e}", e))
    return import_checklists(repository, text, confirm)


def export_checklists(repository: ChecklistRepository, path: Path) -> RepositoryResult[Path]:
    """Write the stored collection to *path* exactly as stored."""
    exported = repository.export_to_json()
    if exported.is_failure():
        return exported
    target = Path(path)
    try:
        write_text_atomic(target, exported.value)
    except OSError as e:
        logger.error("Could not write export file %s: %s", target, e)
        return failure(FileWriteError(f"Could not save file: {e}", e))
    logger.info("Exported checklists to %s", target)
    return success(target)
