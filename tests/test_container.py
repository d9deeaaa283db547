from unittest.mock import Mock

from paste_as_text import container
from paste_as_text.adapters.clipboard_memory import MemoryClipboard
from paste_as_text.adapters.credentials_memory import MemoryCredentialStore
from paste_as_text.adapters.preferences_env import Preferences


def test_build_services_wires_all_backends(monkeypatch) -> None:
    monkeypatch.setattr(container, "CREDENTIAL_STORE", "memory")

    services = container.build_services(
        preferences=Preferences(selected_backend="openai", max_retries=1),
        clipboard=MemoryClipboard(),
        image_source=Mock(),
    )

    orchestrator = services["orchestrator"]
    assert sorted(orchestrator.registered_backends()) == ["anthropic", "gemini", "openai"]
    assert orchestrator.selected_backend == "openai"
    assert isinstance(services["store"], MemoryCredentialStore)
    assert services["credentials_service"].configured_backends() == set()


def test_build_services_then_configure_backend(monkeypatch) -> None:
    monkeypatch.setattr(container, "CREDENTIAL_STORE", "memory")
    monkeypatch.setattr(container, "GEMINI_ENDPOINT", "https://proxy.example.com/gemini")

    services = container.build_services(
        preferences=Preferences(), clipboard=MemoryClipboard(), image_source=Mock()
    )
    services["credentials_service"].configure_backend("gemini", "key")

    assert services["orchestrator"].is_backend_configured("gemini") is True
    assert services["store"].get("gemini") == "key"
