from __future__ import annotations

from typing import Protocol

from paste_as_text.domain.models import RetryPolicy


class PreferencesPort(Protocol):
    def get_selected_backend(self) -> str:
        """Return the id of the backend the user selected."""

    def get_max_retries(self) -> int:
        """Return the maximum number of retries for rate-limited calls (>= 0)."""

    def get_base_delay_seconds(self) -> float:
        """Return the first backoff delay in seconds (> 0)."""

    def get_confidence_threshold(self) -> float:
        """Return the minimum accepted confidence (0..1)."""

    def get_auto_paste_enabled(self) -> bool:
        """Return True if extracted text should be pasted automatically."""

    def get_notifications_enabled(self) -> bool:
        """Return True if notifications should be shown."""

    def get_language(self) -> str:
        """Return the preferred language code for extraction."""

    def get_timeout_seconds(self) -> float:
        """Return the request timeout for backend calls."""

    def get_restore_clipboard_enabled(self) -> bool:
        """Return True if prior clipboard content is restored after auto-paste."""

    def retry_policy(self) -> RetryPolicy:
        """Return the retry policy built from the preferences."""
