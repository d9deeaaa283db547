from __future__ import annotations

from typing import Any

from paste_as_text.adapters.backend_http import BackendRequest, HTTPVisionAdapter
from paste_as_text.domain.errors import ParseError
from paste_as_text.domain.models import BackendConfiguration, BackendId

_ANTHROPIC_MESSAGES_URL = "https://api.anthropic.com/v1/messages"
_ANTHROPIC_VERSION = "2023-06-01"


class AnthropicAdapter(HTTPVisionAdapter):
    backend_id = BackendId.ANTHROPIC.value
    default_model = "claude-3-5-haiku-latest"

    def _fallback_endpoint(self, config: BackendConfiguration) -> str:
        return _ANTHROPIC_MESSAGES_URL

    def _build_request(
        self, config: BackendConfiguration, image_b64: str, mime_type: str
    ) -> BackendRequest:
        return BackendRequest(
            url=self._endpoint(config),
            headers={
                "x-api-key": config.credential,
                "anthropic-version": _ANTHROPIC_VERSION,
            },
            json_body={
                "model": self._model(config),
                "max_tokens": int(config.extra_params.get("max_tokens", 2048)),
                "messages": [
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image",
                                "source": {
                                    "type": "base64",
                                    "media_type": mime_type,
                                    "data": image_b64,
                                },
                            },
                            {"type": "text", "text": self._instruction(config)},
                        ],
                    }
                ],
            },
        )

    def _parse_text(self, payload: dict[str, Any]) -> str:
        blocks = payload.get("content")
        if not isinstance(blocks, list):
            raise ParseError("Failed to parse Anthropic API response")
        texts = [
            block["text"]
            for block in blocks
            if isinstance(block, dict)
            and block.get("type") == "text"
            and isinstance(block.get("text"), str)
        ]
        if not texts:
            raise ParseError("Failed to parse Anthropic API response")
        return "\n".join(texts)
