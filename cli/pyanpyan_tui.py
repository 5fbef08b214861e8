#!/usr/bin/env python3
"""pyanpyan TUI: daily routine checklists in the terminal, powered by Textual."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from textual import on, work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, DataTable, Footer, Header, Input, Label, Static

from pyanpyan.events import ChecklistEvent
from pyanpyan.hooks import hook_sink
from pyanpyan.library import load_library
from pyanpyan.logger import setup_logger
from pyanpyan.models import Checklist, ChecklistId, ChecklistItemId, ChecklistItemState, CompletionSound
from pyanpyan.repository import JsonChecklistRepository
from pyanpyan.session import ignore_item_today, mark_item_done, open_checklist, reset_checklist, reset_item
from pyanpyan.settings import JsonSettingsRepository
from pyanpyan.transfer import ImportPlan, export_checklists, import_checklists, prepare_import
from pyanpyan.workspace import (
    data_dir,
    exports_dir,
    get_log_level,
    log_path,
    now_local,
    now_utc,
    settings_path,
    workspace_root,
)

logger = logging.getLogger("pyanpyan.tui")

STATE_MARKS = {
    ChecklistItemState.PENDING: "[ ]",
    ChecklistItemState.DONE: "[x]",
    ChecklistItemState.IGNORED_TODAY: "[-]",
}


CSS = """
Screen {
    layout: vertical;
}

#main-layout {
    height: 1fr;
}

#library-pane {
    width: 2fr;
    border: tall $primary-background-darken-2;
    padding: 0 1;
}

#checklist-pane {
    width: 3fr;
    border: tall $primary-background-darken-2;
    padding: 0 1;
}

.section-title {
    text-style: bold;
    color: $accent;
    margin: 0 0 1 0;
}

#library-table, #items-table {
    height: 1fr;
}

#checklist-info {
    height: auto;
    color: $text-muted;
    margin: 0 0 1 0;
}

ImportPathScreen, ConfirmImportScreen {
    align: center middle;
}

.dialog {
    width: 60;
    height: auto;
    padding: 1 2;
    border: thick $primary;
    background: $surface;
}

.dialog-buttons {
    height: auto;
    margin: 1 0 0 0;
}
"""


# ── Dialogs ────────────────────────────────────────────────────


class ImportPathScreen(ModalScreen[str]):
    """Ask for the path of a JSON file to import."""

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label("Import checklists from file", classes="section-title"),
            Input(placeholder="/path/to/checklists.json", id="import-path"),
            classes="dialog",
        )

    @on(Input.Submitted, "#import-path")
    def _on_submit(self, event: Input.Submitted) -> None:
        self.dismiss(event.value.strip())

    def action_cancel(self) -> None:
        self.dismiss("")


class ConfirmImportScreen(ModalScreen[bool]):
    """Warn that importing replaces every stored checklist."""

    def __init__(self, plan: ImportPlan) -> None:
        super().__init__()
        self.plan = plan

    def compose(self) -> ComposeResult:
        yield Vertical(
            Label("Replace all checklists?", classes="section-title"),
            Static(
                f"This imports {self.plan.checklist_count} checklist(s) with every item reset "
                "and deletes everything currently stored."
            ),
            Horizontal(
                Button("Import", variant="error", id="confirm-import"),
                Button("Cancel", id="cancel-import"),
                classes="dialog-buttons",
            ),
            classes="dialog",
        )

    @on(Button.Pressed)
    def _on_button(self, event: Button.Pressed) -> None:
        self.dismiss(event.button.id == "confirm-import")


# ── Main app ───────────────────────────────────────────────────


class PyanpyanApp(App):
    """pyanpyan: today's checklists, one keypress per item."""

    TITLE = "pyanpyan"
    CSS = CSS

    BINDINGS = [
        Binding("space", "mark_done", "Done"),
        Binding("i", "ignore_today", "Skip today"),
        Binding("u", "reset_item", "Undo"),
        Binding("r", "reset_checklist", "Reset all"),
        Binding("l", "reload", "Reload"),
        Binding("x", "export", "Export"),
        Binding("m", "import", "Import"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, root: Path | None = None) -> None:
        super().__init__()
        self.root_dir = root or workspace_root()
        self.repository = JsonChecklistRepository(data_dir(self.root_dir))
        self.settings_repository = JsonSettingsRepository(settings_path(self.root_dir))
        self._hooks = hook_sink(self.root_dir)
        self._library_ids: list[ChecklistId | None] = []
        self._current: Checklist | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        yield Horizontal(
            Vertical(
                Label("Checklists", classes="section-title"),
                DataTable(id="library-table", cursor_type="row"),
                id="library-pane",
            ),
            Vertical(
                Label("Items", classes="section-title", id="checklist-title"),
                Static(id="checklist-info"),
                DataTable(id="items-table", cursor_type="row"),
                id="checklist-pane",
            ),
            id="main-layout",
        )
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#library-table", DataTable).add_columns("Name", "Items")
        self.query_one("#items-table", DataTable).add_columns("", "Item")
        self._load_library()

    # ── Events from the domain ─────────────────────────────────

    @work(thread=True)
    def _run_hooks(self, event: ChecklistEvent) -> None:
        self._hooks(event)

    def _handle_domain_event(self, event: ChecklistEvent) -> None:
        self._run_hooks(event)
        if event.kind == "completed":
            self.notify("All done!", title=self._current.name if self._current else "Checklist")
            if self.settings_repository.settings.completion_sound is not CompletionSound.NONE:
                self.bell()

    # ── Library ────────────────────────────────────────────────

    def _load_library(self) -> None:
        table = self.query_one("#library-table", DataTable)
        table.clear()
        self._library_ids = []

        loaded = load_library(self.repository, now_local(self.root_dir))
        if loaded.is_failure():
            self.notify(str(loaded.error), title="Could not load checklists", severity="error")
            return

        library = loaded.value
        for heading, checklists in (("Now", library.active), ("Later", library.inactive)):
            table.add_row(f"── {heading} ──", "")
            self._library_ids.append(None)
            for checklist in checklists:
                table.add_row(checklist.name, str(len(checklist.items)))
                self._library_ids.append(checklist.id)
        self.sub_title = f"{len(library.active)} active"

    @on(DataTable.RowSelected, "#library-table")
    def _on_library_select(self, event: DataTable.RowSelected) -> None:
        if event.cursor_row >= len(self._library_ids):
            return
        checklist_id = self._library_ids[event.cursor_row]
        if checklist_id is None:
            return
        opened = open_checklist(self.repository, checklist_id, now_utc(), self._handle_domain_event)
        if opened.is_failure():
            self.notify(str(opened.error), title="Could not open checklist", severity="error")
            return
        if opened.value is None:
            self.notify("That checklist no longer exists", severity="warning")
            self._load_library()
            return
        self._show_checklist(opened.value)
        self.query_one("#items-table", DataTable).focus()

    # ── Checklist ──────────────────────────────────────────────

    def _show_checklist(self, checklist: Checklist | None) -> None:
        self._current = checklist
        table = self.query_one("#items-table", DataTable)
        cursor = table.cursor_row
        table.clear()
        title = self.query_one("#checklist-title", Label)
        info = self.query_one("#checklist-info", Static)
        if checklist is None:
            title.update("Items")
            info.update("")
            return

        title.update(checklist.name)
        pending = sum(1 for item in checklist.items if item.is_pending)
        info.update(f"{pending} of {len(checklist.items)} left · resets after {checklist.state_persistence.display_name}")
        for item in checklist.items:
            table.add_row(STATE_MARKS[item.state], item.title)
        if checklist.items:
            table.move_cursor(row=min(cursor, len(checklist.items) - 1))

    def _selected_item_id(self) -> ChecklistItemId | None:
        if self._current is None or not self._current.items:
            return None
        row = self.query_one("#items-table", DataTable).cursor_row
        if row < 0 or row >= len(self._current.items):
            return None
        return self._current.items[row].id

    def _apply(self, action) -> None:
        item_id = self._selected_item_id()
        if item_id is None:
            return
        result = action(item_id)
        if result.is_failure():
            self.notify(str(result.error), title="Could not save", severity="error")
            return
        self._show_checklist(result.value)

    def action_mark_done(self) -> None:
        self._apply(lambda item_id: mark_item_done(self.repository, self._current, item_id, now_utc(), self._handle_domain_event))

    def action_ignore_today(self) -> None:
        self._apply(lambda item_id: ignore_item_today(self.repository, self._current, item_id, now_utc(), self._handle_domain_event))

    def action_reset_item(self) -> None:
        self._apply(lambda item_id: reset_item(self.repository, self._current, item_id))

    def action_reset_checklist(self) -> None:
        if self._current is None:
            return
        result = reset_checklist(self.repository, self._current)
        if result.is_failure():
            self.notify(str(result.error), title="Could not save", severity="error")
            return
        self._show_checklist(result.value)

    def action_reload(self) -> None:
        self._show_checklist(None)
        self._load_library()

    # ── Import / export ────────────────────────────────────────

    def action_export(self) -> None:
        target = exports_dir(self.root_dir) / f"checklists-{now_local(self.root_dir):%Y%m%d-%H%M%S}.json"
        result = export_checklists(self.repository, target)
        if result.is_failure():
            self.notify(str(result.error), title="Export failed", severity="error")
        else:
            self.notify(str(result.value), title="Exported")

    def action_import(self) -> None:
        self.push_screen(ImportPathScreen(), self._on_import_path)

    def _on_import_path(self, path: str | None) -> None:
        if not path:
            return
        try:
            text = Path(path).expanduser().read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            self.notify(str(e), title="Could not read file", severity="error")
            return
        prepared = prepare_import(text)
        if prepared.is_failure():
            self.notify(str(prepared.error), title="Import failed", severity="error")
            return

        def _confirmed(ok: bool | None) -> None:
            if not ok:
                return
            result = import_checklists(self.repository, text, lambda _plan: True)
            if result.is_failure():
                self.notify(str(result.error), title="Import failed", severity="error")
                return
            self.notify(f"{prepared.value.checklist_count} checklist(s) imported", title="Imported")
            self.action_reload()

        self.push_screen(ConfirmImportScreen(prepared.value), _confirmed)


# ── Entry point ────────────────────────────────────────────────


def main() -> None:
    root = workspace_root()
    try:
        root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        print(f"Workspace not usable: {root} ({e})")
        print("Set PYANPYAN_ROOT to a writable directory.")
        sys.exit(1)

    setup_logger(get_log_level(root), log_file=log_path(root), console=False)
    logger.info("Starting pyanpyan in %s", root)
    PyanpyanApp(root).run()


if __name__ == "__main__":
    main()
