from __future__ import annotations

import threading
from collections import deque
from uuid import UUID

from paste_as_text import log
from paste_as_text.domain.models import ChannelBackup
from paste_as_text.ports.clipboard_port import ClipboardPort

_MAX_CAPTURE_ATTEMPTS = 3
_RESTORED_HISTORY = 64

logger = log.get_logger()


class ClipboardSnapshot:
    """Capture and restore the full multi-typed clipboard content.

    The clipboard is OS-global state: another application can write between a
    capture and its restore, and the last writer wins. ``capture`` re-reads
    when the clipboard changes under it so the backup reflects one instant.
    The ids of the most recent restores are kept to refuse a second restore
    of the same backup.
    """

    def __init__(self, clipboard: ClipboardPort) -> None:
        self._clipboard = clipboard
        self._lock = threading.Lock()
        self._restored: deque[UUID] = deque(maxlen=_RESTORED_HISTORY)

    def capture(self) -> ChannelBackup:
        with self._lock:
            items: dict[str, bytes] = {}
            for attempt in range(1, _MAX_CAPTURE_ATTEMPTS + 1):
                before = self._clipboard.change_token()
                items = self._read_all()
                if self._clipboard.change_token() == before:
                    break
                logger.debug("clipboard changed during capture", attempt=attempt)
            else:
                logger.warning(
                    "clipboard kept changing during capture",
                    attempts=_MAX_CAPTURE_ATTEMPTS,
                )
        backup = ChannelBackup(items=items)
        logger.debug("clipboard captured", types=len(items), backup_id=str(backup.backup_id))
        return backup

    def restore(self, backup: ChannelBackup) -> bool:
        with self._lock:
            if backup.backup_id in self._restored:
                logger.warning("clipboard backup already restored", backup_id=str(backup.backup_id))
                return False
            self._restored.append(backup.backup_id)
            self._clipboard.clear()
            ok = True
            for content_type, data in backup.items.items():
                if not self._clipboard.write(content_type, data):
                    logger.warning("failed to restore clipboard type", content_type=content_type)
                    ok = False
        logger.debug("clipboard restored", types=len(backup.items), ok=ok)
        return ok

    def _read_all(self) -> dict[str, bytes]:
        items: dict[str, bytes] = {}
        for content_type in self._clipboard.types():
            data = self._clipboard.read(content_type)
            if data is not None:
                items[content_type] = data
        return items
