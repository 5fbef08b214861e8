"""Logging setup for pyanpyan front ends."""

from __future__ import annotations

import logging
from pathlib import Path


def setup_logger(
    log_level: str = "INFO",
    log_file: Path | str | None = None,
    console: bool = True,
) -> None:
    """Configure root logging.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        log_file: optional log file path
        console: also log to stderr (turn off under a full-screen TUI)
    """
    handlers: list[logging.Handler] = []
    if log_file is not None:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))
    if console:
        handlers.append(logging.StreamHandler())
    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )
