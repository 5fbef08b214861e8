"""Workspace root, config, timezone and path helpers for pyanpyan."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from pyanpyan.fileio import read_yaml

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = "INFO"


def workspace_root() -> Path:
    """Get the workspace root directory (holds config.yaml and data/)."""
    return Path(
        os.environ.get("PYANPYAN_ROOT", str(Path.home() / ".pyanpyan"))
    ).expanduser().resolve()


def load_config(root: Path | None = None) -> dict[str, Any]:
    """Load config.yaml; a missing or malformed file yields an empty config."""
    try:
        return read_yaml(config_path(root))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable config %s: %s", config_path(root), e)
        return {}


def get_user_timezone(root: Path | None = None) -> ZoneInfo:
    """Get user's timezone from config.yaml, defaulting to UTC."""
    name = load_config(root).get("timezone")
    if name:
        try:
            return ZoneInfo(str(name))
        except (ZoneInfoNotFoundError, ValueError):
            logger.warning("Unknown timezone %r in config, using UTC", name)
    return ZoneInfo("UTC")


def get_log_level(root: Path | None = None) -> str:
    return str(load_config(root).get("log_level") or DEFAULT_LOG_LEVEL).upper()


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def now_local(root: Path | None = None) -> datetime:
    """Get current datetime in user's timezone."""
    return datetime.now(get_user_timezone(root))


# ── Path helpers ──────────────────────────────────────────────

def config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "config.yaml"


def data_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "data"


def checklists_path(root: Path | None = None) -> Path:
    return data_dir(root) / "checklists.json"


def settings_path(root: Path | None = None) -> Path:
    return data_dir(root) / "settings.json"


def hooks_config_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "hooks.yaml"


def log_path(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "logs" / "pyanpyan.log"


def exports_dir(root: Path | None = None) -> Path:
    if root is None:
        root = workspace_root()
    return root / "exports"
