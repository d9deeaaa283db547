from __future__ import annotations

from pathlib import Path

from PIL import Image, ImageGrab, UnidentifiedImageError

from paste_as_text import log
from paste_as_text.domain.models import ImageContent, ImageSource
from paste_as_text.ports.image_source_port import ImageSourcePort

logger = log.get_logger()


class ClipboardImageSource(ImageSourcePort):
    def read_image(self) -> ImageContent | None:
        try:
            grabbed = ImageGrab.grabclipboard()
        except (NotImplementedError, OSError) as exc:
            logger.warning("clipboard image grab unavailable", err=str(exc))
            return None
        if grabbed is None:
            return None
        if isinstance(grabbed, Image.Image):
            return ImageContent.from_pil(grabbed, ImageSource.clipboard())
        # Copied files arrive as a list of paths.
        for name in grabbed:
            image = _load_file(Path(name))
            if image is not None:
                return image
        return None


class FileImageSource(ImageSourcePort):
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    def read_image(self) -> ImageContent | None:
        return _load_file(self._path)


def _load_file(path: Path) -> ImageContent | None:
    if not path.is_file():
        return None
    try:
        with Image.open(path) as image:
            image.verify()
    except (UnidentifiedImageError, OSError):
        logger.info("file is not an image", path=str(path))
        return None
    return ImageContent.from_file(path)
