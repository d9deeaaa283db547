from __future__ import annotations

from typing import Protocol


class TextSinkPort(Protocol):
    def write_text(self, text: str) -> bool:
        """Deliver extracted text; return True on success."""
