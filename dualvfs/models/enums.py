from __future__ import annotations

from enum import Enum


class StatKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class ChangeKind(str, Enum):
    CREATE = "create"
    CHANGE = "change"
    DELETE = "delete"


class StoreKind(str, Enum):
    REPOSITORY = "repository"
    WORKSPACE = "workspace"
