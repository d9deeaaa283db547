from __future__ import annotations

from typing import Protocol


class NotifierPort(Protocol):
    def notify(self, title: str, body: str) -> None:
        """Show a user-facing notification."""


class PasterPort(Protocol):
    def paste(self) -> bool:
        """Paste the clipboard into the focused application; return True on success."""
