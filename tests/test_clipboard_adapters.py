import pyperclip
from PIL import Image, ImageGrab

from paste_as_text.adapters.clipboard_memory import MemoryClipboard
from paste_as_text.adapters.clipboard_pyperclip import PyperclipClipboard
from paste_as_text.adapters.image_sources import ClipboardImageSource, FileImageSource
from paste_as_text.adapters.notifier_log import NoopPaster
from paste_as_text.adapters.text_sink_clipboard import ClipboardTextSink
from paste_as_text.domain.models import SourceKind
from paste_as_text.ports.clipboard_port import TEXT_PLAIN


def _fake_system_clipboard(monkeypatch, initial: str = "") -> dict[str, str]:
    state = {"text": initial}
    monkeypatch.setattr(pyperclip, "paste", lambda: state["text"])
    monkeypatch.setattr(pyperclip, "copy", lambda text: state.update(text=text))
    return state


def test_memory_clipboard_change_token_moves_on_every_mutation() -> None:
    clipboard = MemoryClipboard()
    tokens = [clipboard.change_token()]

    clipboard.write(TEXT_PLAIN, b"a")
    tokens.append(clipboard.change_token())
    clipboard.clear()
    tokens.append(clipboard.change_token())

    assert len(set(tokens)) == 3
    assert clipboard.types() == []


def test_pyperclip_clipboard_reads_and_writes_utf8(monkeypatch) -> None:
    state = _fake_system_clipboard(monkeypatch, initial="héllo")
    clipboard = PyperclipClipboard()

    assert clipboard.types() == [TEXT_PLAIN]
    assert clipboard.read(TEXT_PLAIN) == "héllo".encode("utf-8")
    assert clipboard.read("image/png") is None

    before = clipboard.change_token()
    assert clipboard.write(TEXT_PLAIN, "new text".encode("utf-8")) is True
    assert state["text"] == "new text"
    assert clipboard.change_token() != before


def test_pyperclip_clipboard_rejects_unsupported_content(monkeypatch) -> None:
    state = _fake_system_clipboard(monkeypatch, initial="keep")
    clipboard = PyperclipClipboard()

    assert clipboard.write("image/png", b"\x89PNG") is False
    assert clipboard.write(TEXT_PLAIN, b"\xff\xfe\xfa") is False
    assert state["text"] == "keep"


def test_pyperclip_clipboard_without_mechanism_fails_softly(monkeypatch) -> None:
    def _unavailable(*args):
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(pyperclip, "paste", _unavailable)
    monkeypatch.setattr(pyperclip, "copy", _unavailable)
    clipboard = PyperclipClipboard()

    assert clipboard.types() == []
    assert clipboard.read(TEXT_PLAIN) is None
    assert clipboard.write(TEXT_PLAIN, b"text") is False


def test_clipboard_text_sink_replaces_every_type() -> None:
    clipboard = MemoryClipboard({"image/png": b"png", TEXT_PLAIN: b"old"})
    sink = ClipboardTextSink(clipboard)

    assert sink.write_text("naïve text") is True
    assert clipboard.types() == [TEXT_PLAIN]
    assert clipboard.read(TEXT_PLAIN) == "naïve text".encode("utf-8")


def test_file_image_source_loads_images(tmp_path) -> None:
    path = tmp_path / "capture.png"
    Image.new("RGB", (4, 4)).save(path, format="PNG")

    image = FileImageSource(path).read_image()

    assert image is not None
    assert image.source.kind is SourceKind.FILE
    assert image.mime_type == "image/png"


def test_file_image_source_ignores_non_images(tmp_path) -> None:
    text_file = tmp_path / "notes.txt"
    text_file.write_text("not an image")

    assert FileImageSource(text_file).read_image() is None
    assert FileImageSource(tmp_path / "missing.png").read_image() is None


def test_clipboard_image_source_wraps_grabbed_image(monkeypatch) -> None:
    monkeypatch.setattr(ImageGrab, "grabclipboard", lambda: Image.new("RGB", (2, 3)))

    image = ClipboardImageSource().read_image()

    assert image is not None
    assert image.source.kind is SourceKind.CLIPBOARD
    assert image.dimensions == (2, 3)


def test_clipboard_image_source_reads_copied_files(monkeypatch, tmp_path) -> None:
    text_file = tmp_path / "a.txt"
    text_file.write_text("skip me")
    image_file = tmp_path / "b.png"
    Image.new("RGB", (1, 1)).save(image_file, format="PNG")
    monkeypatch.setattr(
        ImageGrab, "grabclipboard", lambda: [str(text_file), str(image_file)]
    )

    image = ClipboardImageSource().read_image()

    assert image is not None
    assert image.source.location == str(image_file)


def test_clipboard_image_source_handles_empty_or_unsupported(monkeypatch) -> None:
    monkeypatch.setattr(ImageGrab, "grabclipboard", lambda: None)
    assert ClipboardImageSource().read_image() is None

    def _unsupported():
        raise NotImplementedError("no clipboard on this platform")

    monkeypatch.setattr(ImageGrab, "grabclipboard", _unsupported)
    assert ClipboardImageSource().read_image() is None


def test_noop_paster_reports_not_pasted() -> None:
    assert NoopPaster().paste() is False
