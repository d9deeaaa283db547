from __future__ import annotations

from dataclasses import dataclass

from paste_as_text import settings
from paste_as_text.domain.models import RetryPolicy
from paste_as_text.ports.preferences_port import PreferencesPort

_MIN_BASE_DELAY_SECONDS = 0.01
_MIN_TIMEOUT_SECONDS = 1.0


@dataclass
class Preferences(PreferencesPort):
    """User preferences, clamped to their valid ranges on construction."""

    selected_backend: str = "gemini"
    language: str = "en"
    auto_paste: bool = True
    show_notifications: bool = True
    restore_clipboard: bool = False
    confidence_threshold: float = 0.0
    max_retries: int = 3
    base_delay_seconds: float = 1.0
    retry_transport_errors: bool = False
    timeout_seconds: float = 30.0

    def __post_init__(self) -> None:
        self.selected_backend = self.selected_backend.strip().lower()
        self.confidence_threshold = max(0.0, min(1.0, self.confidence_threshold))
        self.max_retries = max(0, self.max_retries)
        self.base_delay_seconds = max(_MIN_BASE_DELAY_SECONDS, self.base_delay_seconds)
        self.timeout_seconds = max(_MIN_TIMEOUT_SECONDS, self.timeout_seconds)

    @classmethod
    def from_settings(cls) -> Preferences:
        return cls(
            selected_backend=settings.SELECTED_BACKEND,
            language=settings.LANGUAGE,
            auto_paste=settings.AUTO_PASTE,
            show_notifications=settings.SHOW_NOTIFICATIONS,
            restore_clipboard=settings.RESTORE_CLIPBOARD,
            confidence_threshold=settings.CONFIDENCE_THRESHOLD,
            max_retries=settings.MAX_RETRIES,
            base_delay_seconds=settings.RETRY_BASE_DELAY_SECONDS,
            retry_transport_errors=settings.RETRY_TRANSPORT_ERRORS,
            timeout_seconds=settings.REQUEST_TIMEOUT_SECONDS,
        )

    def get_selected_backend(self) -> str:
        return self.selected_backend

    def get_max_retries(self) -> int:
        return self.max_retries

    def get_base_delay_seconds(self) -> float:
        return self.base_delay_seconds

    def get_confidence_threshold(self) -> float:
        return self.confidence_threshold

    def get_auto_paste_enabled(self) -> bool:
        return self.auto_paste

    def get_notifications_enabled(self) -> bool:
        return self.show_notifications

    def get_language(self) -> str:
        return self.language

    def get_timeout_seconds(self) -> float:
        return self.timeout_seconds

    def get_restore_clipboard_enabled(self) -> bool:
        return self.restore_clipboard

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_retries=self.max_retries,
            base_delay=self.base_delay_seconds,
            retry_transport_errors=self.retry_transport_errors,
        )
