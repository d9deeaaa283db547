from __future__ import annotations

import threading

from paste_as_text.ports.clipboard_port import ClipboardPort


class MemoryClipboard(ClipboardPort):
    """Multi-typed in-process clipboard."""

    def __init__(self, items: dict[str, bytes] | None = None) -> None:
        self._items: dict[str, bytes] = dict(items or {})
        self._changes = 0
        self._lock = threading.Lock()

    def change_token(self) -> int:
        with self._lock:
            return self._changes

    def types(self) -> list[str]:
        with self._lock:
            return list(self._items)

    def read(self, content_type: str) -> bytes | None:
        with self._lock:
            return self._items.get(content_type)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()
            self._changes += 1

    def write(self, content_type: str, data: bytes) -> bool:
        with self._lock:
            self._items[content_type] = bytes(data)
            self._changes += 1
        return True
