from __future__ import annotations

from typing import Any

from paste_as_text.adapters.backend_anthropic import AnthropicAdapter
from paste_as_text.adapters.backend_gemini import GeminiAdapter
from paste_as_text.adapters.backend_openai import OpenAIAdapter
from paste_as_text.adapters.clipboard_memory import MemoryClipboard
from paste_as_text.adapters.clipboard_pyperclip import PyperclipClipboard
from paste_as_text.adapters.credentials_keyring import KeyringCredentialStore
from paste_as_text.adapters.credentials_memory import MemoryCredentialStore
from paste_as_text.adapters.image_sources import ClipboardImageSource
from paste_as_text.adapters.notifier_log import LogNotifier, NoopPaster
from paste_as_text.adapters.preferences_env import Preferences
from paste_as_text.adapters.text_sink_clipboard import ClipboardTextSink
from paste_as_text.ports.clipboard_port import ClipboardPort
from paste_as_text.ports.image_source_port import ImageSourcePort
from paste_as_text.services.clipboard_snapshot import ClipboardSnapshot
from paste_as_text.services.credentials_service import CredentialsService
from paste_as_text.services.extraction_orchestrator import ExtractionOrchestrator
from paste_as_text.services.paste_as_text_service import PasteAsTextService
from paste_as_text.settings import (
    ANTHROPIC_ENDPOINT,
    CLIPBOARD,
    CREDENTIAL_STORE,
    GEMINI_ENDPOINT,
    KEYRING_SERVICE,
    OPENAI_BASE_URL,
)


def build_services(
    preferences: Preferences | None = None,
    clipboard: ClipboardPort | None = None,
    image_source: ImageSourcePort | None = None,
) -> dict[str, Any]:
    preferences = preferences or Preferences.from_settings()
    if clipboard is None:
        clipboard = MemoryClipboard() if CLIPBOARD == "memory" else PyperclipClipboard()
    if CREDENTIAL_STORE == "memory":
        store = MemoryCredentialStore()
    else:
        store = KeyringCredentialStore(KEYRING_SERVICE)

    timeout = preferences.get_timeout_seconds()
    orchestrator = ExtractionOrchestrator(default_policy=preferences.retry_policy())
    orchestrator.register_adapter(GeminiAdapter(timeout=timeout))
    orchestrator.register_adapter(OpenAIAdapter(timeout=timeout))
    orchestrator.register_adapter(AnthropicAdapter(timeout=timeout))
    orchestrator.select_backend(preferences.get_selected_backend())

    credentials_service = CredentialsService(
        orchestrator,
        store,
        endpoints={
            GeminiAdapter.backend_id: GEMINI_ENDPOINT,
            OpenAIAdapter.backend_id: OPENAI_BASE_URL,
            AnthropicAdapter.backend_id: ANTHROPIC_ENDPOINT,
        },
    )
    credentials_service.load_from_store()

    snapshot = ClipboardSnapshot(clipboard)
    paste_service = PasteAsTextService(
        orchestrator=orchestrator,
        image_source=image_source or ClipboardImageSource(),
        text_sink=ClipboardTextSink(clipboard),
        preferences=preferences,
        notifier=LogNotifier(),
        paster=NoopPaster(),
        snapshot=snapshot,
    )
    return {
        "credentials_service": credentials_service,
        "orchestrator": orchestrator,
        "paste_service": paste_service,
        "preferences": preferences,
        "snapshot": snapshot,
        "clipboard": clipboard,
        "store": store,
    }
