from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from paste_as_text import log
from paste_as_text.domain.errors import Cancelled, ExtractError, NotConfigured, RateLimited
from paste_as_text.domain.models import ExtractedText, ImageContent
from paste_as_text.ports.image_source_port import ImageSourcePort
from paste_as_text.ports.notifier_port import NotifierPort, PasterPort
from paste_as_text.ports.preferences_port import PreferencesPort
from paste_as_text.ports.text_sink_port import TextSinkPort
from paste_as_text.services.clipboard_snapshot import ClipboardSnapshot
from paste_as_text.services.extraction_orchestrator import ExtractionOrchestrator

logger = log.get_logger()


class PasteOutcome(str, Enum):
    SUCCESS = "success"
    NO_IMAGE = "no_image"
    NO_TEXT = "no_text"
    LOW_CONFIDENCE = "low_confidence"
    NOT_CONFIGURED = "not_configured"
    RATE_LIMITED = "rate_limited"
    SINK_FAILED = "sink_failed"
    FAILED = "failed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class PasteResult:
    outcome: PasteOutcome
    extracted: ExtractedText | None = None
    error: ExtractError | None = None
    pasted: bool = False


class PasteAsTextService:
    def __init__(
        self,
        orchestrator: ExtractionOrchestrator,
        image_source: ImageSourcePort,
        text_sink: TextSinkPort,
        preferences: PreferencesPort,
        notifier: NotifierPort,
        paster: PasterPort,
        snapshot: ClipboardSnapshot | None = None,
    ) -> None:
        self._orchestrator = orchestrator
        self._image_source = image_source
        self._text_sink = text_sink
        self._preferences = preferences
        self._notifier = notifier
        self._paster = paster
        self._snapshot = snapshot

    async def process_clipboard_image(self) -> PasteResult:
        image = self._image_source.read_image()
        if image is None:
            self._notify("No Image Found", "The clipboard does not contain an image.")
            return PasteResult(PasteOutcome.NO_IMAGE)
        return await self.process_image(image)

    async def process_image(self, image: ImageContent) -> PasteResult:
        self._notify("Processing Image", "Extracting text from image...")
        try:
            extracted = await self._orchestrator.extract(
                image, self._preferences.retry_policy()
            )
        except Cancelled as exc:
            return PasteResult(PasteOutcome.CANCELLED, error=exc)
        except NotConfigured as exc:
            self._notify(
                "Configuration Required", "Please configure the AI service in settings."
            )
            return PasteResult(PasteOutcome.NOT_CONFIGURED, error=exc)
        except RateLimited as exc:
            self._notify(
                "Rate Limit Exceeded",
                "The AI service rate limit has been exceeded. Please try again later.",
            )
            return PasteResult(PasteOutcome.RATE_LIMITED, error=exc)
        except ExtractError as exc:
            self._notify("Error", f"Failed to extract text: {exc.message}")
            return PasteResult(PasteOutcome.FAILED, error=exc)

        if extracted.is_empty():
            self._notify("No Text Found", "No text could be extracted from the image.")
            return PasteResult(PasteOutcome.NO_TEXT, extracted=extracted)
        threshold = self._preferences.get_confidence_threshold()
        if extracted.confidence is not None and extracted.confidence < threshold:
            self._notify(
                "Low Confidence",
                f"Extraction confidence {extracted.confidence:.2f} is below {threshold:.2f}.",
            )
            return PasteResult(PasteOutcome.LOW_CONFIDENCE, extracted=extracted)

        auto_paste = self._preferences.get_auto_paste_enabled()
        backup = None
        if auto_paste and self._snapshot and self._preferences.get_restore_clipboard_enabled():
            backup = self._snapshot.capture()
        if not self._text_sink.write_text(extracted.content):
            logger.error("failed to write extracted text", backend=extracted.backend_id)
            self._notify("Error", "Failed to copy the extracted text to the clipboard.")
            return PasteResult(PasteOutcome.SINK_FAILED, extracted=extracted)
        self._notify(
            "Text Extracted",
            f"Text has been copied to clipboard: {extracted.summary(max_words=5)}",
        )
        pasted = False
        if auto_paste:
            pasted = self._paster.paste()
        if backup is not None and self._snapshot is not None:
            if pasted:
                self._snapshot.restore(backup)
            else:
                # Nothing consumed the text; keep it on the clipboard.
                logger.debug("paste did not happen, clipboard backup dropped")
        return PasteResult(PasteOutcome.SUCCESS, extracted=extracted, pasted=pasted)

    def _notify(self, title: str, body: str) -> None:
        if not self._preferences.get_notifications_enabled():
            return
        self._notifier.notify(title, body)
