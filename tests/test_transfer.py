"""Tests for pyanpyan/transfer.py — file export and confirmed import."""

import json

from pyanpyan.codec import encode_checklists
from pyanpyan.errors import FileReadError, JsonParseError
from pyanpyan.models import ChecklistItemState
from pyanpyan.repository import InMemoryChecklistRepository, JsonChecklistRepository
from pyanpyan.transfer import export_checklists, import_checklists, import_file, prepare_import

from conftest import make_checklist

DONE_AND_IGNORED = (ChecklistItemState.DONE, ChecklistItemState.IGNORED_TODAY)


def _payload():
    return encode_checklists([make_checklist("a", "A", DONE_AND_IGNORED), make_checklist("b", "B")])


def test_prepare_import_resets_items():
    plan = prepare_import(_payload()).value
    assert plan.checklist_count == 2
    assert all(item.is_pending for c in plan.checklists for item in c.items)
    states = [i["state"]["type"] for c in json.loads(plan.payload) for i in c["items"]]
    assert set(states) == {"Pending"}


def test_prepare_import_malformed():
    assert isinstance(prepare_import("nope").error_or_none(), JsonParseError)


def test_import_declined_keeps_store():
    repo = InMemoryChecklistRepository([make_checklist("keep", "Keep")])
    seen = []

    def decline(plan):
        seen.append(plan.checklist_count)
        return False

    result = import_checklists(repo, _payload(), decline)
    assert result.value is False
    assert seen == [2]
    assert [c.id.value for c in repo.get_all_checklists().value] == ["keep"]


def test_import_confirmed_replaces_store():
    repo = InMemoryChecklistRepository([make_checklist("keep", "Keep")])
    result = import_checklists(repo, _payload(), lambda plan: True)
    assert result.value is True
    stored = repo.get_all_checklists().value
    assert [c.id.value for c in stored] == ["a", "b"]
    assert all(item.is_pending for c in stored for item in c.items)


def test_import_malformed_never_asks():
    asked = []
    result = import_checklists(InMemoryChecklistRepository([]), "[{", asked.append)
    assert result.is_failure()
    assert asked == []


def test_import_file(tmp_path):
    source = tmp_path / "backup.json"
    source.write_text(_payload(), encoding="utf-8")
    repo = InMemoryChecklistRepository([])
    assert import_file(repo, source, lambda plan: True).value is True
    assert len(repo.get_all_checklists().value) == 2


def test_import_missing_file(tmp_path):
    result = import_file(InMemoryChecklistRepository([]), tmp_path / "missing.json", lambda plan: True)
    assert isinstance(result.error_or_none(), FileReadError)


def test_export_writes_stored_text(workspace):
    repo = JsonChecklistRepository(workspace / "data")
    repo.save_checklist(make_checklist())
    target = workspace / "exports" / "backup.json"

    result = export_checklists(repo, target)
    assert result.value == target
    assert target.read_text(encoding="utf-8") == repo.path.read_text(encoding="utf-8")


def test_export_then_import_restores(workspace, tmp_path):
    source = JsonChecklistRepository(workspace / "data")
    source.save_checklist(make_checklist(states=DONE_AND_IGNORED))
    target = tmp_path / "backup.json"
    export_checklists(source, target)

    fresh = JsonChecklistRepository(tmp_path / "other")
    import_file(fresh, target, lambda plan: True)
    assert [c.id.value for c in fresh.get_all_checklists().value] == ["school", "morning"]
