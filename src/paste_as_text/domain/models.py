from __future__ import annotations

import base64
import io
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any
from uuid import UUID, uuid4

from paste_as_text.domain.errors import InvalidImageFormat


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class BackendId(str, Enum):
    """Identities of the built-in vision backends."""

    GEMINI = "gemini"
    OPENAI = "openai"
    ANTHROPIC = "anthropic"

    @property
    def display_name(self) -> str:
        names = {
            BackendId.GEMINI: "Google Gemini",
            BackendId.OPENAI: "OpenAI",
            BackendId.ANTHROPIC: "Anthropic Claude",
        }
        return names[self]


def parse_backend_id(value: str) -> BackendId:
    """Parse a backend id string into a BackendId enum (case-insensitive)."""

    normalized = value.strip().lower()
    for backend_id in BackendId:
        if backend_id.value == normalized:
            return backend_id
    raise ValueError(f"Unsupported backend: {value}")


class SourceKind(str, Enum):
    CLIPBOARD = "clipboard"
    FILE = "file"
    URL = "url"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ImageSource:
    kind: SourceKind
    location: str | None = None

    @classmethod
    def clipboard(cls) -> ImageSource:
        return cls(SourceKind.CLIPBOARD)

    @classmethod
    def file(cls, path: str | Path) -> ImageSource:
        return cls(SourceKind.FILE, str(path))

    @classmethod
    def url(cls, url: str) -> ImageSource:
        return cls(SourceKind.URL, url)

    @classmethod
    def custom(cls, label: str) -> ImageSource:
        return cls(SourceKind.CUSTOM, label)


@dataclass(frozen=True)
class ImageContent:
    """Raw image bytes captured from one source, immutable once built."""

    data: bytes = field(repr=False)
    source: ImageSource
    id: UUID = field(default_factory=uuid4)
    created_at: datetime = field(default_factory=utc_now)

    @classmethod
    def from_file(cls, path: str | Path) -> ImageContent:
        file_path = Path(path)
        return cls(data=file_path.read_bytes(), source=ImageSource.file(file_path))

    @classmethod
    def from_pil(cls, image: Any, source: ImageSource) -> ImageContent:
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return cls(data=buffer.getvalue(), source=source)

    @property
    def mime_type(self) -> str | None:
        from PIL import Image

        try:
            with Image.open(io.BytesIO(self.data)) as image:
                image_format = image.format
        except Exception:
            return None
        if not image_format:
            return None
        return Image.MIME.get(image_format)

    @property
    def dimensions(self) -> tuple[int, int]:
        image = self._open()
        return image.size

    def encode(self, format: str = "JPEG") -> bytes:
        """Re-encode the image into ``format``; raise InvalidImageFormat on failure."""

        image = self._open()
        if format.upper() in {"JPEG", "JPG"} and image.mode not in {"RGB", "L"}:
            image = image.convert("RGB")
        buffer = io.BytesIO()
        try:
            image.save(buffer, format=format)
        except (OSError, ValueError, KeyError) as exc:
            raise InvalidImageFormat(f"Cannot encode image as {format}.") from exc
        return buffer.getvalue()

    def base64_encoded(self, format: str = "JPEG") -> str:
        return base64.b64encode(self.encode(format)).decode("ascii")

    def _open(self) -> Any:
        from PIL import Image, UnidentifiedImageError

        if not self.data:
            raise InvalidImageFormat("Image payload is empty.")
        try:
            image = Image.open(io.BytesIO(self.data))
            image.load()
        except (UnidentifiedImageError, OSError, ValueError) as exc:
            raise InvalidImageFormat() from exc
        return image


@dataclass(frozen=True)
class ExtractedText:
    """Immutable result of one successful extraction."""

    content: str
    source_image_id: UUID
    backend_id: str
    confidence: float | None = None
    detected_language: str | None = None
    extracted_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        if self.confidence is not None and not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be within 0..1, got {self.confidence}")

    def word_count(self) -> int:
        return len(self.content.split())

    def character_count(self) -> int:
        return len(self.content)

    def is_empty(self) -> bool:
        return not self.content.strip()

    def summary(self, max_words: int = 10) -> str:
        words = self.content.split()
        if len(words) <= max_words:
            return self.content
        return " ".join(words[:max_words]) + "..."

    def with_content(self, new_content: str) -> ExtractedText:
        return ExtractedText(
            content=new_content,
            source_image_id=self.source_image_id,
            backend_id=self.backend_id,
            confidence=self.confidence,
            detected_language=self.detected_language,
            extracted_at=self.extracted_at,
        )


@dataclass(frozen=True)
class BackendConfiguration:
    credential: str = field(repr=False)
    endpoint: str | None = None
    extra_params: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra_params", MappingProxyType(dict(self.extra_params)))

    @property
    def is_valid(self) -> bool:
        return bool(self.credential and self.credential.strip())


@dataclass(frozen=True)
class ChannelBackup:
    """Content of the shared channel at one instant, keyed by content type."""

    items: Mapping[str, bytes] = field(default_factory=dict, hash=False)
    backup_id: UUID = field(default_factory=uuid4)
    captured_at: datetime = field(default_factory=utc_now)

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", MappingProxyType(dict(self.items)))

    @property
    def is_empty(self) -> bool:
        return not self.items

    @property
    def types(self) -> list[str]:
        return list(self.items.keys())


@dataclass(frozen=True)
class RetryPolicy:
    max_retries: int = 3
    base_delay: float = 1.0
    retry_transport_errors: bool = False

    def __post_init__(self) -> None:
        if self.max_retries < 0:
            raise ValueError("max_retries must be >= 0")
        if self.base_delay <= 0:
            raise ValueError("base_delay must be > 0")

    def delay_for(self, attempt: int) -> float:
        return self.base_delay * (2**attempt)

    def max_total_delay(self) -> float:
        return self.base_delay * (2**self.max_retries - 1)
