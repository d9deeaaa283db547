from __future__ import annotations

from typing import Protocol

from paste_as_text.domain.models import ImageContent


class ImageSourcePort(Protocol):
    def read_image(self) -> ImageContent | None:
        """Return the current image, or None when no image is available."""
