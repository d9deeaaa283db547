from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from datetime import datetime
from enum import Enum

from paste_as_text import log
from paste_as_text.domain.errors import (
    Cancelled,
    ExtractError,
    NotConfigured,
    RateLimited,
    TransportError,
)
from paste_as_text.domain.models import ExtractedText, ImageContent, RetryPolicy, utc_now
from paste_as_text.ports.backend_port import BackendPort

logger = log.get_logger()


class ExtractionState(str, Enum):
    ATTEMPTING = "attempting"
    BACKOFF = "backoff"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class ExtractionOrchestrator:
    """Selects the active backend adapter and applies the retry/backoff policy.

    The selected backend id is plain shared state without locking; callers that
    change the selection while an extraction is in flight synchronize
    themselves. An extraction resolves its adapter once, up front, and stamps
    the result with the id it resolved.
    """

    def __init__(
        self,
        selected_backend: str | None = None,
        default_policy: RetryPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._adapters: dict[str, BackendPort] = {}
        self._selected = selected_backend
        self._default_policy = default_policy or RetryPolicy()
        self._sleep = sleep
        self._clock = clock

    @property
    def selected_backend(self) -> str | None:
        return self._selected

    def register_adapter(self, adapter: BackendPort) -> None:
        self._adapters[adapter.identity()] = adapter

    def select_backend(self, backend_id: str) -> bool:
        if backend_id not in self._adapters:
            logger.warning("cannot select unregistered backend", backend=backend_id)
            return False
        self._selected = backend_id
        return True

    def get_adapter(self, backend_id: str) -> BackendPort | None:
        return self._adapters.get(backend_id)

    def registered_backends(self) -> list[str]:
        return list(self._adapters)

    def is_backend_configured(self, backend_id: str) -> bool:
        adapter = self._adapters.get(backend_id)
        return adapter is not None and adapter.is_configured()

    async def extract(
        self, image: ImageContent, policy: RetryPolicy | None = None
    ) -> ExtractedText:
        """Extract text from ``image`` with the selected backend.

        Rate-limited calls are retried up to ``policy.max_retries`` times with
        ``base_delay * 2**attempt`` seconds of backoff; every other failure is
        raised at once. Cancellation during a call or a backoff raises
        ``Cancelled``.
        """
        policy = policy or self._default_policy
        backend_id, adapter = self._resolve()
        try:
            text, attempts = await self._run(adapter, image, policy)
        except asyncio.CancelledError as exc:
            logger.info("extraction cancelled", backend=backend_id, image_id=str(image.id))
            raise Cancelled() from exc
        logger.info(
            "extraction succeeded",
            backend=backend_id,
            attempts=attempts,
            chars=len(text),
        )
        return ExtractedText(
            content=text,
            source_image_id=image.id,
            backend_id=backend_id,
            extracted_at=self._clock(),
        )

    def _resolve(self) -> tuple[str, BackendPort]:
        backend_id = self._selected
        adapter = self._adapters.get(backend_id) if backend_id is not None else None
        if backend_id is None or adapter is None:
            raise NotConfigured(f"No adapter registered for backend: {backend_id}")
        if not adapter.is_configured():
            raise NotConfigured()
        return backend_id, adapter

    async def _run(
        self, adapter: BackendPort, image: ImageContent, policy: RetryPolicy
    ) -> tuple[str, int]:
        state = ExtractionState.ATTEMPTING
        attempt = 0
        calls = 0
        text = ""
        last_error: ExtractError | None = None
        while True:
            if state is ExtractionState.ATTEMPTING:
                calls += 1
                try:
                    text = await adapter.extract(image)
                except ExtractError as exc:
                    last_error = exc
                    if self._should_retry(exc, policy) and attempt < policy.max_retries:
                        state = ExtractionState.BACKOFF
                    else:
                        state = ExtractionState.FAILED
                else:
                    state = ExtractionState.SUCCEEDED
            elif state is ExtractionState.BACKOFF:
                delay = policy.delay_for(attempt)
                logger.warning(
                    "retrying after transient failure",
                    backend=adapter.identity(),
                    error=type(last_error).__name__,
                    attempt=attempt + 1,
                    delay_s=delay,
                )
                await self._sleep(delay)
                attempt += 1
                state = ExtractionState.ATTEMPTING
            elif state is ExtractionState.SUCCEEDED:
                return text, calls
            else:
                assert last_error is not None
                logger.error(
                    "extraction failed",
                    backend=adapter.identity(),
                    error=type(last_error).__name__,
                    calls=calls,
                )
                raise last_error

    @staticmethod
    def _should_retry(error: ExtractError, policy: RetryPolicy) -> bool:
        if isinstance(error, RateLimited):
            return True
        return policy.retry_transport_errors and isinstance(error, TransportError)
