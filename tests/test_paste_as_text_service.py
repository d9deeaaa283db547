from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from paste_as_text.adapters.clipboard_memory import MemoryClipboard
from paste_as_text.adapters.notifier_log import NoopPaster
from paste_as_text.adapters.preferences_env import Preferences
from paste_as_text.adapters.text_sink_clipboard import ClipboardTextSink
from paste_as_text.domain.errors import (
    Cancelled,
    NotConfigured,
    RateLimited,
    RemoteError,
)
from paste_as_text.domain.models import ExtractedText, ImageContent, ImageSource, RetryPolicy
from paste_as_text.ports.clipboard_port import TEXT_PLAIN
from paste_as_text.services.clipboard_snapshot import ClipboardSnapshot
from paste_as_text.services.paste_as_text_service import PasteAsTextService, PasteOutcome


def _image() -> ImageContent:
    return ImageContent(data=b"img", source=ImageSource.clipboard())


def _extracted(content: str = "Hello from the image", confidence: float | None = None):
    return ExtractedText(
        content=content, source_image_id=uuid4(), backend_id="gemini", confidence=confidence
    )


def _service(
    *,
    extract_result=None,
    extract_error: Exception | None = None,
    image: ImageContent | None = None,
    preferences: Preferences | None = None,
    text_sink=None,
    paster=None,
    snapshot: ClipboardSnapshot | None = None,
):
    orchestrator = Mock()
    orchestrator.extract = AsyncMock(return_value=extract_result, side_effect=extract_error)
    image_source = Mock()
    image_source.read_image.return_value = image
    if text_sink is None:
        text_sink = Mock()
        text_sink.write_text.return_value = True
    notifier = Mock()
    paster = paster or Mock(**{"paste.return_value": True})
    service = PasteAsTextService(
        orchestrator=orchestrator,
        image_source=image_source,
        text_sink=text_sink,
        preferences=preferences or Preferences(auto_paste=False),
        notifier=notifier,
        paster=paster,
        snapshot=snapshot,
    )
    return service, orchestrator, text_sink, notifier, paster


def _titles(notifier: Mock) -> list[str]:
    return [call.args[0] for call in notifier.notify.call_args_list]


@pytest.mark.asyncio
async def test_no_clipboard_image_skips_extraction() -> None:
    service, orchestrator, _, notifier, _ = _service(image=None)

    result = await service.process_clipboard_image()

    assert result.outcome is PasteOutcome.NO_IMAGE
    orchestrator.extract.assert_not_awaited()
    assert _titles(notifier) == ["No Image Found"]


@pytest.mark.asyncio
async def test_success_writes_text_and_passes_retry_policy() -> None:
    extracted = _extracted()
    preferences = Preferences(auto_paste=False, max_retries=2, base_delay_seconds=0.5)
    service, orchestrator, text_sink, notifier, paster = _service(
        extract_result=extracted, image=_image(), preferences=preferences
    )

    result = await service.process_clipboard_image()

    assert result.outcome is PasteOutcome.SUCCESS
    assert result.extracted == extracted
    assert result.pasted is False
    text_sink.write_text.assert_called_once_with("Hello from the image")
    paster.paste.assert_not_called()
    assert orchestrator.extract.await_args.args[1] == RetryPolicy(max_retries=2, base_delay=0.5)
    assert _titles(notifier) == ["Processing Image", "Text Extracted"]


@pytest.mark.asyncio
async def test_auto_paste_restores_previous_clipboard_after_paste() -> None:
    clipboard = MemoryClipboard({"image/png": b"png-bytes"})
    pasted_text: list[bytes | None] = []
    paster = Mock()
    paster.paste.side_effect = lambda: pasted_text.append(clipboard.read(TEXT_PLAIN)) or True
    service, *_ = _service(
        extract_result=_extracted("pasted words"),
        preferences=Preferences(auto_paste=True, restore_clipboard=True),
        text_sink=ClipboardTextSink(clipboard),
        paster=paster,
        snapshot=ClipboardSnapshot(clipboard),
    )

    result = await service.process_image(_image())

    assert result.outcome is PasteOutcome.SUCCESS
    assert result.pasted is True
    assert pasted_text == [b"pasted words"]
    assert clipboard.types() == ["image/png"]
    assert clipboard.read("image/png") == b"png-bytes"


@pytest.mark.asyncio
async def test_failed_paste_keeps_extracted_text_on_clipboard() -> None:
    clipboard = MemoryClipboard({TEXT_PLAIN: b"old"})
    service, *_ = _service(
        extract_result=_extracted("new text"),
        preferences=Preferences(auto_paste=True, restore_clipboard=True),
        text_sink=ClipboardTextSink(clipboard),
        paster=NoopPaster(),
        snapshot=ClipboardSnapshot(clipboard),
    )

    result = await service.process_image(_image())

    assert result.outcome is PasteOutcome.SUCCESS
    assert result.pasted is False
    assert clipboard.read(TEXT_PLAIN) == b"new text"


@pytest.mark.asyncio
async def test_auto_paste_without_restore_leaves_text_on_clipboard() -> None:
    clipboard = MemoryClipboard({"image/png": b"png-bytes"})
    service, *_ = _service(
        extract_result=_extracted("kept"),
        preferences=Preferences(auto_paste=True, restore_clipboard=False),
        text_sink=ClipboardTextSink(clipboard),
        snapshot=ClipboardSnapshot(clipboard),
    )

    await service.process_image(_image())

    assert clipboard.types() == [TEXT_PLAIN]
    assert clipboard.read(TEXT_PLAIN) == b"kept"


@pytest.mark.asyncio
async def test_empty_text_is_reported_and_not_written() -> None:
    service, _, text_sink, notifier, _ = _service(extract_result=_extracted("   "))

    result = await service.process_image(_image())

    assert result.outcome is PasteOutcome.NO_TEXT
    text_sink.write_text.assert_not_called()
    assert _titles(notifier)[-1] == "No Text Found"


@pytest.mark.asyncio
async def test_low_confidence_is_not_written() -> None:
    service, _, text_sink, _, _ = _service(
        extract_result=_extracted(confidence=0.2),
        preferences=Preferences(auto_paste=False, confidence_threshold=0.5),
    )

    result = await service.process_image(_image())

    assert result.outcome is PasteOutcome.LOW_CONFIDENCE
    text_sink.write_text.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("error", "outcome", "title"),
    [
        (NotConfigured(), PasteOutcome.NOT_CONFIGURED, "Configuration Required"),
        (RateLimited(), PasteOutcome.RATE_LIMITED, "Rate Limit Exceeded"),
        (RemoteError("HTTP error 500: x", status_code=500), PasteOutcome.FAILED, "Error"),
    ],
)
async def test_extraction_errors_map_to_outcomes(error, outcome, title) -> None:
    service, _, text_sink, notifier, _ = _service(extract_error=error)

    result = await service.process_image(_image())

    assert result.outcome is outcome
    assert result.error is error
    text_sink.write_text.assert_not_called()
    assert _titles(notifier)[-1] == title


@pytest.mark.asyncio
async def test_cancelled_extraction_is_silent() -> None:
    service, _, text_sink, notifier, _ = _service(extract_error=Cancelled())

    result = await service.process_image(_image())

    assert result.outcome is PasteOutcome.CANCELLED
    text_sink.write_text.assert_not_called()
    assert _titles(notifier) == ["Processing Image"]


@pytest.mark.asyncio
async def test_sink_failure_is_reported() -> None:
    text_sink = Mock()
    text_sink.write_text.return_value = False
    service, _, _, notifier, paster = _service(
        extract_result=_extracted(),
        preferences=Preferences(auto_paste=True),
        text_sink=text_sink,
    )

    result = await service.process_image(_image())

    assert result.outcome is PasteOutcome.SINK_FAILED
    paster.paste.assert_not_called()
    assert _titles(notifier)[-1] == "Error"


@pytest.mark.asyncio
async def test_notifications_can_be_disabled() -> None:
    service, _, _, notifier, _ = _service(
        extract_result=_extracted(),
        preferences=Preferences(auto_paste=False, show_notifications=False),
    )

    await service.process_image(_image())

    notifier.notify.assert_not_called()
