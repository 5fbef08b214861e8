"""Error types for pyanpyan.

Commands raise ValidationError / PreconditionError. The repository layer
never raises: its failures are RepositoryError values carried in a Failure.
"""

from __future__ import annotations

from dataclasses import dataclass


class ValidationError(ValueError):
    """Input rejected by a command (blank name, inverted time range, ...)."""


class PreconditionError(ValueError):
    """A command was executed against the wrong target."""


@dataclass(frozen=True)
class RepositoryError:
    message: str
    cause: BaseException | None = None

    def __str__(self) -> str:
        return f"{type(self).__name__}: {self.message}"


@dataclass(frozen=True)
class FileReadError(RepositoryError):
    pass


@dataclass(frozen=True)
class FileWriteError(RepositoryError):
    pass


@dataclass(frozen=True)
class JsonParseError(RepositoryError):
    pass


@dataclass(frozen=True)
class InvalidDataError(RepositoryError):
    pass
