from __future__ import annotations

from typing import Protocol, runtime_checkable

from paste_as_text.domain.models import BackendConfiguration, ImageContent


@runtime_checkable
class BackendPort(Protocol):
    def identity(self) -> str:
        """Return the stable backend id of this adapter."""

    def is_configured(self) -> bool:
        """Return True iff a non-empty credential is currently held."""

    def configure(self, config: BackendConfiguration) -> None:
        """Validate and replace the configuration; raise InvalidConfiguration."""

    def reset(self) -> None:
        """Drop any held configuration."""

    async def extract(self, image: ImageContent) -> str:
        """Extract visible text from the image with one remote call, no retries."""
