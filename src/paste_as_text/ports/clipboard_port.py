from __future__ import annotations

from typing import Protocol, runtime_checkable

TEXT_PLAIN = "text/plain"


@runtime_checkable
class ClipboardPort(Protocol):
    def change_token(self) -> int:
        """Return an opaque value that differs whenever the content changes."""

    def types(self) -> list[str]:
        """Return the content-type tags currently present."""

    def read(self, content_type: str) -> bytes | None:
        """Return the raw bytes stored for a content type, or None."""

    def clear(self) -> None:
        """Remove every content type."""

    def write(self, content_type: str, data: bytes) -> bool:
        """Store bytes for a content type; return True on success."""
