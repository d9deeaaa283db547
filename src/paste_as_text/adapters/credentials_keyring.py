from __future__ import annotations

import json
import threading

import keyring
from keyring.backend import KeyringBackend
from keyring.errors import KeyringError, PasswordDeleteError

from paste_as_text import log
from paste_as_text.domain.errors import StoreError
from paste_as_text.ports.credential_store_port import CredentialStorePort

_INDEX_ACCOUNT = "__configured_backends__"

logger = log.get_logger()


class KeyringCredentialStore(CredentialStorePort):
    """Backend secrets kept in the OS keyring, one entry per backend id.

    The keyring API cannot enumerate entries, so the ids of saved secrets are
    also tracked in a reserved index entry under the same service name.
    """

    def __init__(self, service_name: str, backend: KeyringBackend | None = None) -> None:
        self._service = service_name
        self._keyring = backend if backend is not None else keyring.get_keyring()
        self._index_lock = threading.Lock()

    def save(self, backend_id: str, secret: str) -> None:
        self._check_id(backend_id)
        # Indexed ids without a secret are filtered out by list_configured_backends.
        with self._index_lock:
            index = self._read_index()
            if backend_id not in index:
                index.add(backend_id)
                self._write_index(index)
        try:
            self._keyring.set_password(self._service, backend_id, secret)
        except KeyringError as exc:
            raise StoreError(f"Failed to save API key for {backend_id}: {exc}") from exc
        logger.info("credential saved", backend=backend_id)

    def get(self, backend_id: str) -> str | None:
        self._check_id(backend_id)
        try:
            return self._keyring.get_password(self._service, backend_id)
        except KeyringError as exc:
            raise StoreError(f"Failed to read API key for {backend_id}: {exc}") from exc

    def delete(self, backend_id: str) -> None:
        self._check_id(backend_id)
        try:
            self._keyring.delete_password(self._service, backend_id)
        except PasswordDeleteError:
            pass
        except KeyringError as exc:
            raise StoreError(f"Failed to delete API key for {backend_id}: {exc}") from exc
        with self._index_lock:
            index = self._read_index()
            if backend_id in index:
                index.discard(backend_id)
                self._write_index(index)
        logger.info("credential deleted", backend=backend_id)

    def has(self, backend_id: str) -> bool:
        return self.get(backend_id) is not None

    def list_configured_backends(self) -> set[str]:
        with self._index_lock:
            index = self._read_index()
        return {backend_id for backend_id in index if self.has(backend_id)}

    def _read_index(self) -> set[str]:
        try:
            raw = self._keyring.get_password(self._service, _INDEX_ACCOUNT)
        except KeyringError as exc:
            raise StoreError(f"Failed to read credential index: {exc}") from exc
        if not raw:
            return set()
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise StoreError("Credential index is corrupted") from exc
        if not isinstance(data, list):
            raise StoreError("Credential index is corrupted")
        return {str(item) for item in data}

    def _write_index(self, index: set[str]) -> None:
        try:
            self._keyring.set_password(self._service, _INDEX_ACCOUNT, json.dumps(sorted(index)))
        except KeyringError as exc:
            raise StoreError(f"Failed to update credential index: {exc}") from exc

    @staticmethod
    def _check_id(backend_id: str) -> None:
        if not backend_id or backend_id == _INDEX_ACCOUNT:
            raise ValueError(f"Invalid backend id: {backend_id!r}")
