"""Two-case result type returned by every repository operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar, Union

from pyanpyan.errors import RepositoryError

T = TypeVar("T")
R = TypeVar("R")


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def get_or_none(self) -> T | None:
        return self.value

    def error_or_none(self) -> RepositoryError | None:
        return None

    def map(self, transform: Callable[[T], R]) -> Success[R]:
        return Success(transform(self.value))

    def flat_map(self, transform: Callable[[T], RepositoryResult[R]]) -> RepositoryResult[R]:
        return transform(self.value)

    def on_success(self, action: Callable[[T], object]) -> Success[T]:
        action(self.value)
        return self

    def on_failure(self, action: Callable[[RepositoryError], object]) -> Success[T]:
        return self


@dataclass(frozen=True)
class Failure:
    error: RepositoryError

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def get_or_none(self) -> None:
        return None

    def error_or_none(self) -> RepositoryError:
        return self.error

    def map(self, transform: Callable[[object], object]) -> Failure:
        return self

    def flat_map(self, transform: Callable[[object], object]) -> Failure:
        return self

    def on_success(self, action: Callable[[object], object]) -> Failure:
        return self

    def on_failure(self, action: Callable[[RepositoryError], object]) -> Failure:
        action(self.error)
        return self


RepositoryResult = Union[Success[T], Failure]


def success(value: T) -> Success[T]:
    return Success(value)


def failure(error: RepositoryError) -> Failure:
    return Failure(error)
