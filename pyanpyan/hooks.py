"""Lifecycle hooks for pyanpyan.

Hooks run shell commands when something happens to a checklist.
Configured via hooks.yaml in the workspace root:

    on_checklist_completed:
      - notify-send "All done"
      - command: ./log-access.sh
        timeout: 5

Hook points:
- on_checklist_created, on_checklist_updated, on_checklist_deleted
- on_checklist_accessed, on_checklist_completed
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Any

from pyanpyan.events import ChecklistEvent, EventSink, event_to_dict
from pyanpyan.fileio import read_yaml
from pyanpyan.workspace import hooks_config_path, workspace_root

logger = logging.getLogger(__name__)

VALID_HOOK_POINTS = {
    "on_checklist_created",
    "on_checklist_updated",
    "on_checklist_deleted",
    "on_checklist_accessed",
    "on_checklist_completed",
}

DEFAULT_TIMEOUT = 30
OUTPUT_CAP = 4096


def load_hooks_config(root: Path | None = None) -> dict[str, Any]:
    """Load hooks configuration from hooks.yaml; broken files count as empty."""
    path = hooks_config_path(root)
    if not path.exists():
        return {}
    try:
        return read_yaml(path)
    except Exception as e:
        logger.warning("Ignoring unreadable hooks config %s: %s", path, e)
        return {}


def run_hooks(
    hook_point: str,
    context: dict[str, Any],
    root: Path | None = None,
) -> list[dict[str, Any]]:
    """Run all hooks registered for a given hook point.

    Context is passed as JSON via stdin to each hook subprocess.
    Returns list of results with stdout/stderr and exit codes.
    """
    if hook_point not in VALID_HOOK_POINTS:
        return []

    if root is None:
        root = workspace_root()

    hooks = load_hooks_config(root).get(hook_point, [])
    if not hooks or not isinstance(hooks, list):
        return []

    results = []
    context_json = json.dumps(context, ensure_ascii=False)

    for hook in hooks:
        if isinstance(hook, str):
            command = hook
            timeout = DEFAULT_TIMEOUT
        elif isinstance(hook, dict):
            command = hook.get("command", "")
            timeout = hook.get("timeout", DEFAULT_TIMEOUT)
        else:
            continue

        if not command:
            continue

        result: dict[str, Any] = {"command": command, "hook_point": hook_point}
        try:
            proc = subprocess.run(
                command,
                shell=True,
                input=context_json,
                capture_output=True,
                text=True,
                timeout=timeout,
                cwd=str(root),
            )
            result["exit_code"] = proc.returncode
            result["stdout"] = proc.stdout[:OUTPUT_CAP]
            result["stderr"] = proc.stderr[:OUTPUT_CAP]
        except subprocess.TimeoutExpired:
            result["exit_code"] = -1
            result["error"] = f"Hook timed out after {timeout}s"
        except Exception as e:
            result["exit_code"] = -1
            result["error"] = str(e)

        if result["exit_code"] != 0:
            logger.warning("Hook %r at %s failed: %s", command, hook_point, result.get("error") or result.get("stderr"))
        results.append(result)

    return results


def hook_sink(root: Path | None = None) -> EventSink:
    """An event sink that runs the hooks matching each event."""

    def _sink(event: ChecklistEvent) -> None:
        run_hooks(f"on_checklist_{event.kind}", event_to_dict(event), root)

    return _sink
