from __future__ import annotations

import logging

from dualvfs.models.enums import StoreKind

logger = logging.getLogger(__name__)

ROOT = "."
SEP = "/"
WORKSPACE_PREFIX = "workspace"


def normalize(path: str) -> str:
    """Collapse a logical path to its canonical store-relative form.

    Repeated separators, ``.`` segments and leading/trailing separators are
    dropped. ``..`` removes the previous segment and never climbs above the
    root. The store root is ``"."``.
    """
    parts: list[str] = []
    for part in path.split(SEP):
        if part in ("", "."):
            continue
        if part == "..":
            if parts:
                parts.pop()
            continue
        parts.append(part)
    return SEP.join(parts) if parts else ROOT


def is_root(path: str) -> bool:
    return normalize(path) == ROOT


def join(base: str, name: str) -> str:
    base = normalize(base)
    return name if base == ROOT else f"{base}{SEP}{name}"


def parent(path: str) -> str:
    norm = normalize(path)
    if SEP not in norm:
        return ROOT
    return norm.rsplit(SEP, 1)[0]


def resolve(path: str) -> StoreKind:
    """Pick the backing store addressed by a logical path. Always succeeds."""
    norm = normalize(path)
    kind = StoreKind.WORKSPACE if norm.startswith(WORKSPACE_PREFIX) else StoreKind.REPOSITORY
    logger.debug("resolved %r -> %s", path, kind.value)
    return kind
