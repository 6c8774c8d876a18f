from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from rich.console import Console
from rich.markup import escape

from dualvfs.models.enums import ChangeKind

_KIND_STYLE: dict[ChangeKind, str] = {
    ChangeKind.CREATE: "#b5bd68",
    ChangeKind.CHANGE: "#f0c674",
    ChangeKind.DELETE: "#cc6666",
}


class ChangeNotifier(Protocol):
    def notify(self, uri: str, kind: ChangeKind) -> None: ...


@dataclass(slots=True)
class RecordingNotifier:
    events: list[tuple[str, ChangeKind]] = field(default_factory=list)

    def notify(self, uri: str, kind: ChangeKind) -> None:
        self.events.append((uri, kind))


class ConsoleNotifier:
    """Print each change event to a rich console."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def notify(self, uri: str, kind: ChangeKind) -> None:
        style = _KIND_STYLE.get(kind, "white")
        self._console.print(f"[{style}]{kind.value:<6}[/] {escape(uri)}")
