from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CredentialStorePort(Protocol):
    def save(self, backend_id: str, secret: str) -> None:
        """Persist a secret for a backend, overwriting any existing one."""

    def get(self, backend_id: str) -> str | None:
        """Return the secret for a backend, or None if absent."""

    def delete(self, backend_id: str) -> None:
        """Remove the secret for a backend; succeeds when it was already absent."""

    def has(self, backend_id: str) -> bool:
        """Return True if a secret is stored for the backend."""

    def list_configured_backends(self) -> set[str]:
        """Return the ids of every backend with a stored secret."""
