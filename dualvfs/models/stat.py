from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

from result import Result

from dualvfs.models.enums import StatKind

T = TypeVar("T")


@dataclass(slots=True, frozen=True)
class Stat:
    kind: StatKind
    size: int
    created_at: int
    modified_at: int

    @property
    def is_file(self) -> bool:
        return self.kind is StatKind.FILE

    @property
    def is_dir(self) -> bool:
        return self.kind is StatKind.DIRECTORY


@dataclass(slots=True, frozen=True)
class IoFailure:
    path: str
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


FsResult = Result[T, IoFailure]


def ms_to_seconds(value: float) -> int:
    """Truncate a millisecond timestamp to whole epoch seconds."""
    return int(value // 1000)
