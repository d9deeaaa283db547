from __future__ import annotations

from typing import Any

from paste_as_text.adapters.backend_http import BackendRequest, HTTPVisionAdapter
from paste_as_text.domain.errors import ParseError
from paste_as_text.domain.models import BackendConfiguration, BackendId

_GEMINI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiAdapter(HTTPVisionAdapter):
    backend_id = BackendId.GEMINI.value
    default_model = "gemini-1.5-flash"

    def _fallback_endpoint(self, config: BackendConfiguration) -> str:
        return f"{_GEMINI_BASE_URL}/{self._model(config)}:generateContent"

    def _build_request(
        self, config: BackendConfiguration, image_b64: str, mime_type: str
    ) -> BackendRequest:
        return BackendRequest(
            url=self._endpoint(config),
            params={"key": config.credential},
            json_body={
                "contents": [
                    {
                        "parts": [
                            {"text": self._instruction(config)},
                            {"inline_data": {"mime_type": mime_type, "data": image_b64}},
                        ]
                    }
                ]
            },
        )

    def _parse_text(self, payload: dict[str, Any]) -> str:
        candidates = payload.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            raise ParseError("Failed to parse Gemini API response")
        content = candidates[0].get("content") if isinstance(candidates[0], dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list):
            raise ParseError("Failed to parse Gemini API response")
        texts = [
            part["text"]
            for part in parts
            if isinstance(part, dict) and isinstance(part.get("text"), str)
        ]
        if not texts:
            raise ParseError("Failed to parse Gemini API response")
        return "".join(texts)
