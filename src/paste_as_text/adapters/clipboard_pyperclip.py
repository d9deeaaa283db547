from __future__ import annotations

import zlib

import pyperclip

from paste_as_text import log
from paste_as_text.ports.clipboard_port import TEXT_PLAIN, ClipboardPort

logger = log.get_logger()


class PyperclipClipboard(ClipboardPort):
    """System clipboard through pyperclip.

    pyperclip only exchanges text, so ``text/plain`` (UTF-8) is the single
    content type this adapter can read or write.
    """

    def change_token(self) -> int:
        return zlib.crc32(self._paste().encode("utf-8"))

    def types(self) -> list[str]:
        return [TEXT_PLAIN] if self._paste() else []

    def read(self, content_type: str) -> bytes | None:
        if content_type != TEXT_PLAIN:
            return None
        text = self._paste()
        return text.encode("utf-8") if text else None

    def clear(self) -> None:
        self._copy("")

    def write(self, content_type: str, data: bytes) -> bool:
        if content_type != TEXT_PLAIN:
            logger.warning("unsupported clipboard type", content_type=content_type)
            return False
        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning("clipboard text is not valid UTF-8", bytes_len=len(data))
            return False
        return self._copy(text)

    @staticmethod
    def _paste() -> str:
        try:
            return pyperclip.paste() or ""
        except pyperclip.PyperclipException as exc:
            logger.error("failed to read clipboard", err=str(exc))
            return ""

    @staticmethod
    def _copy(text: str) -> bool:
        try:
            pyperclip.copy(text)
            return True
        except pyperclip.PyperclipException as exc:
            # No clipboard mechanism available (e.g. Linux without xclip/xsel).
            logger.error("failed to write clipboard", err=str(exc))
            return False
