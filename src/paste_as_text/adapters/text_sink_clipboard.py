from __future__ import annotations

from paste_as_text.ports.clipboard_port import TEXT_PLAIN, ClipboardPort
from paste_as_text.ports.text_sink_port import TextSinkPort


class ClipboardTextSink(TextSinkPort):
    def __init__(self, clipboard: ClipboardPort) -> None:
        self._clipboard = clipboard

    def write_text(self, text: str) -> bool:
        self._clipboard.clear()
        return self._clipboard.write(TEXT_PLAIN, text.encode("utf-8"))
