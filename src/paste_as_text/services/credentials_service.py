from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from paste_as_text import log
from paste_as_text.domain.errors import InvalidConfiguration, StoreError
from paste_as_text.domain.models import BackendConfiguration
from paste_as_text.ports.backend_port import BackendPort
from paste_as_text.ports.credential_store_port import CredentialStorePort
from paste_as_text.services.extraction_orchestrator import ExtractionOrchestrator

logger = log.get_logger()


class CredentialsService:
    def __init__(
        self,
        orchestrator: ExtractionOrchestrator,
        store: CredentialStorePort,
        endpoints: Mapping[str, str | None] | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._store = store
        self._endpoints = dict(endpoints or {})

    def configure_backend(
        self,
        backend_id: str,
        api_key: str,
        endpoint: str | None = None,
        extra_params: Mapping[str, Any] | None = None,
    ) -> None:
        """Validate the key against the adapter, then persist it."""

        adapter = self._require_adapter(backend_id)
        adapter.configure(
            BackendConfiguration(
                credential=api_key,
                endpoint=endpoint or self._endpoints.get(backend_id),
                extra_params=extra_params or {},
            )
        )
        self._store.save(backend_id, api_key)

    def remove_backend(self, backend_id: str) -> None:
        self._store.delete(backend_id)
        adapter = self._orchestrator.get_adapter(backend_id)
        if adapter is not None:
            adapter.reset()

    def load_from_store(self) -> set[str]:
        """Configure every registered adapter that has a stored key.

        A failing backend is logged and skipped so the others still load.
        """
        configured: set[str] = set()
        for backend_id in self._orchestrator.registered_backends():
            adapter = self._require_adapter(backend_id)
            try:
                api_key = self._store.get(backend_id)
                if not api_key:
                    continue
                adapter.configure(
                    BackendConfiguration(
                        credential=api_key, endpoint=self._endpoints.get(backend_id)
                    )
                )
            except (StoreError, InvalidConfiguration) as exc:
                logger.error("failed to configure backend", backend=backend_id, err=exc.message)
                continue
            configured.add(backend_id)
        logger.info("backends loaded from store", configured=sorted(configured))
        return configured

    def configured_backends(self) -> set[str]:
        return self._store.list_configured_backends()

    def _require_adapter(self, backend_id: str) -> BackendPort:
        adapter = self._orchestrator.get_adapter(backend_id)
        if adapter is None:
            raise InvalidConfiguration(f"Service adapter not available for {backend_id}")
        return adapter
