from __future__ import annotations

from typing import Any

from paste_as_text.adapters.backend_http import BackendRequest, HTTPVisionAdapter
from paste_as_text.domain.errors import ParseError
from paste_as_text.domain.models import BackendConfiguration, BackendId

_OPENAI_BASE_URL = "https://api.openai.com/v1"


class OpenAIAdapter(HTTPVisionAdapter):
    """Vision extraction through the OpenAI Responses API.

    An endpoint override is treated as the API base URL; ``/responses`` is
    appended to it.
    """

    backend_id = BackendId.OPENAI.value
    default_model = "gpt-4o-mini"

    def _fallback_endpoint(self, config: BackendConfiguration) -> str:
        return _OPENAI_BASE_URL

    def _build_request(
        self, config: BackendConfiguration, image_b64: str, mime_type: str
    ) -> BackendRequest:
        max_tokens = int(config.extra_params.get("max_tokens", 2048))
        return BackendRequest(
            url=f"{self._endpoint(config)}/responses",
            headers={"Authorization": f"Bearer {config.credential}"},
            json_body={
                "model": self._model(config),
                "input": [
                    {
                        "role": "user",
                        "content": [
                            {"type": "input_text", "text": self._instruction(config)},
                            {
                                "type": "input_image",
                                "image_url": f"data:{mime_type};base64,{image_b64}",
                            },
                        ],
                    }
                ],
                "temperature": 0.0,
                "max_output_tokens": max_tokens,
            },
        )

    def _parse_text(self, payload: dict[str, Any]) -> str:
        direct_text = payload.get("output_text")
        if isinstance(direct_text, str) and direct_text.strip():
            return direct_text
        output_items = payload.get("output")
        if isinstance(output_items, list):
            for item in output_items:
                if not isinstance(item, dict):
                    continue
                for block in item.get("content") or []:
                    if not isinstance(block, dict):
                        continue
                    if block.get("type") in {"output_text", "text"} and isinstance(
                        block.get("text"), str
                    ):
                        return block["text"]
        raise ParseError("Failed to parse OpenAI API response")
