from __future__ import annotations

import threading

from paste_as_text.ports.credential_store_port import CredentialStorePort


class MemoryCredentialStore(CredentialStorePort):
    """Process-local credential store for tests and keyring-less environments."""

    def __init__(self, secrets: dict[str, str] | None = None) -> None:
        self._secrets = dict(secrets or {})
        self._lock = threading.Lock()

    def save(self, backend_id: str, secret: str) -> None:
        with self._lock:
            self._secrets[backend_id] = secret

    def get(self, backend_id: str) -> str | None:
        with self._lock:
            return self._secrets.get(backend_id)

    def delete(self, backend_id: str) -> None:
        with self._lock:
            self._secrets.pop(backend_id, None)

    def has(self, backend_id: str) -> bool:
        return self.get(backend_id) is not None

    def list_configured_backends(self) -> set[str]:
        with self._lock:
            return set(self._secrets)
