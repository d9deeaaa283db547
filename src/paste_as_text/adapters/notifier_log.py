from __future__ import annotations

from paste_as_text import log
from paste_as_text.ports.notifier_port import NotifierPort, PasterPort

logger = log.get_logger()


class LogNotifier(NotifierPort):
    def notify(self, title: str, body: str) -> None:
        logger.info("notification", title=title, body=body)


class NoopPaster(PasterPort):
    """Keystroke simulation is owned by the host application."""

    def paste(self) -> bool:
        logger.debug("auto-paste requested but no paster is installed")
        return False
