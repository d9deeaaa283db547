from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


SELECTED_BACKEND = os.getenv("PASTE_AS_TEXT_BACKEND", "gemini").strip().lower()
LANGUAGE = os.getenv("PASTE_AS_TEXT_LANGUAGE", "en")
AUTO_PASTE = _env_bool("AUTO_PASTE", True)
SHOW_NOTIFICATIONS = _env_bool("SHOW_NOTIFICATIONS", True)
RESTORE_CLIPBOARD = _env_bool("RESTORE_CLIPBOARD", False)
CONFIDENCE_THRESHOLD = _env_float("CONFIDENCE_THRESHOLD", 0.0)
MAX_RETRIES = _env_int("MAX_RETRIES", 3)
RETRY_BASE_DELAY_SECONDS = _env_float("RETRY_BASE_DELAY_SECONDS", 1.0)
RETRY_TRANSPORT_ERRORS = _env_bool("RETRY_TRANSPORT_ERRORS", False)
REQUEST_TIMEOUT_SECONDS = _env_float("REQUEST_TIMEOUT_SECONDS", 30.0)

KEYRING_SERVICE = os.getenv("KEYRING_SERVICE", "com.pasteAsText.apiKeys")
CREDENTIAL_STORE = os.getenv("CREDENTIAL_STORE", "keyring").strip().lower()
CLIPBOARD = os.getenv("CLIPBOARD", "system").strip().lower()

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
DEBUG_LOGGING = _env_bool("DEBUG_LOGGING", False)

GEMINI_ENDPOINT = os.getenv("GEMINI_ENDPOINT", "").strip() or None
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "").strip() or None
ANTHROPIC_ENDPOINT = os.getenv("ANTHROPIC_ENDPOINT", "").strip() or None
