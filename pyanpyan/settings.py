"""App settings storage with change notification."""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable

from pyanpyan.errors import FileWriteError
from pyanpyan.fileio import read_text, write_text_atomic
from pyanpyan.models import AppSettings
from pyanpyan.result import RepositoryResult, failure, success
from pyanpyan.workspace import settings_path

logger = logging.getLogger(__name__)

SettingsListener = Callable[[AppSettings], None]


class SettingsRepository(ABC):
    """Holds the current AppSettings and tells subscribers when they change."""

    def __init__(self) -> None:
        self._listeners: list[SettingsListener] = []

    @property
    @abstractmethod
    def settings(self) -> AppSettings:
        """Current settings; defaults when nothing (valid) is stored."""

    @abstractmethod
    def _store(self, settings: AppSettings) -> RepositoryResult[None]:
        ...

    def update_settings(self, settings: AppSettings) -> RepositoryResult[None]:
        stored = self._store(settings)
        if stored.is_success():
            for listener in list(self._listeners):
                listener(settings)
        return stored

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Call *listener* now and after every successful update. Returns an unsubscribe function."""
        self._listeners.append(listener)
        listener(self.settings)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe


class JsonSettingsRepository(SettingsRepository):
    def __init__(self, path: Path | None = None) -> None:
        super().__init__()
        self.path = Path(path) if path is not None else settings_path()

    @property
    def settings(self) -> AppSettings:
        try:
            text = read_text(self.path)
            if not text.strip():
                return AppSettings()
            return AppSettings.from_dict(json.loads(text))
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Using default settings, %s is unreadable: %s", self.path, e)
            return AppSettings()

    def _store(self, settings: AppSettings) -> RepositoryResult[None]:
        try:
            write_text_atomic(self.path, json.dumps(settings.to_dict(), indent=2) + "\n")
        except (OSError, ValueError) as e:
            logger.error("Failed to save settings to %s: %s", self.path, e)
            return failure(FileWriteError(str(e) or "Failed to save settings", e))
        return success(None)


class InMemorySettingsRepository(SettingsRepository):
    def __init__(self, settings: AppSettings | None = None) -> None:
        super().__init__()
        self._settings = settings or AppSettings()

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def _store(self, settings: AppSettings) -> RepositoryResult[None]:
        self._settings = settings
        return success(None)
