from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, ClassVar

import httpx

from paste_as_text import log
from paste_as_text.domain.errors import (
    InvalidConfiguration,
    NotConfigured,
    ParseError,
    RateLimited,
    RemoteError,
    TransportError,
)
from paste_as_text.domain.models import BackendConfiguration, ImageContent
from paste_as_text.ports.backend_port import BackendPort

EXTRACT_INSTRUCTION = "Extract all visible text from this image"
_THROTTLED_STATUS = 429


@dataclass
class BackendRequest:
    url: str
    json_body: dict[str, Any]
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)


class HTTPVisionAdapter(BackendPort, ABC):
    """Shared request/response handling for HTTP vision backends.

    Subclasses translate one backend's wire format: ``_build_request`` turns the
    encoded image into a request and ``_parse_text`` pulls the text out of a
    decoded 2xx payload. Status mapping, transport failures and configuration
    checks live here so every backend classifies errors the same way.
    """

    backend_id: ClassVar[str]
    default_model: ClassVar[str]

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._config: BackendConfiguration | None = None
        self._log = log.get_logger(backend=self.backend_id)

    def identity(self) -> str:
        return self.backend_id

    def is_configured(self) -> bool:
        return self._config is not None and self._config.is_valid

    def configure(self, config: BackendConfiguration) -> None:
        if not config.is_valid:
            raise InvalidConfiguration("API key must not be empty.")
        if config.endpoint is not None:
            _validate_endpoint(config.endpoint)
        self._config = config

    def reset(self) -> None:
        self._config = None

    async def extract(self, image: ImageContent) -> str:
        config = self._config
        if config is None or not config.is_valid:
            raise NotConfigured()
        encoded = image.base64_encoded("JPEG")
        request = self._build_request(config, encoded, "image/jpeg")
        response = await self._send(request)
        if response.status_code == _THROTTLED_STATUS:
            raise RateLimited(retry_after=_retry_after_seconds(response))
        if not 200 <= response.status_code < 300:
            body = response.text or "Unknown error"
            raise RemoteError(
                f"HTTP error {response.status_code}: {body}",
                status_code=response.status_code,
                body=body,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ParseError(f"{self.backend_id} returned a non-JSON body") from exc
        if not isinstance(payload, dict):
            raise ParseError(f"{self.backend_id} returned an unexpected JSON document")
        return self._parse_text(payload)

    def _endpoint(self, config: BackendConfiguration) -> str:
        return (config.endpoint or self._fallback_endpoint(config)).rstrip("/")

    def _model(self, config: BackendConfiguration) -> str:
        return str(config.extra_params.get("model") or self.default_model)

    def _instruction(self, config: BackendConfiguration) -> str:
        return str(config.extra_params.get("instruction") or EXTRACT_INSTRUCTION)

    async def _send(self, request: BackendRequest) -> httpx.Response:
        self._log.debug("backend request", url=request.url)
        try:
            if self._client is not None:
                return await self._post(self._client, request)
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await self._post(client, request)
        except httpx.HTTPError as exc:
            self._log.warning("backend transport failure", err=str(exc))
            raise TransportError(exc) from exc

    @staticmethod
    async def _post(client: httpx.AsyncClient, request: BackendRequest) -> httpx.Response:
        return await client.post(
            request.url,
            json=request.json_body,
            headers={"Content-Type": "application/json", **request.headers},
            params=request.params or None,
        )

    @abstractmethod
    def _fallback_endpoint(self, config: BackendConfiguration) -> str:
        """Return the public endpoint used when no override is configured."""

    @abstractmethod
    def _build_request(
        self, config: BackendConfiguration, image_b64: str, mime_type: str
    ) -> BackendRequest:
        """Build the backend request for one encoded image."""

    @abstractmethod
    def _parse_text(self, payload: dict[str, Any]) -> str:
        """Return the extracted text from a decoded 2xx payload or raise ParseError."""


def _validate_endpoint(endpoint: str) -> None:
    try:
        url = httpx.URL(endpoint)
    except (httpx.InvalidURL, TypeError) as exc:
        raise InvalidConfiguration(f"Invalid endpoint URL: {endpoint}") from exc
    if url.scheme not in {"http", "https"} or not url.host:
        raise InvalidConfiguration(f"Invalid endpoint URL: {endpoint}")


def _retry_after_seconds(response: httpx.Response) -> float | None:
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None
