"""Model client abstraction layer."""

from __future__ import annotations

from typing import Any

import httpx

from tonepicker.config import ModelConfig
from tonepicker.errors import UpstreamError


class ModelClientError(UpstreamError):
    """Raised when a downstream model call fails."""


class ModelClient:
    """HTTP client for OpenAI-compatible (Mistral) or Ollama chat endpoints."""

    def __init__(
        self,
        config: ModelConfig,
        *,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.timeout = timeout
        self._transport = transport

    async def generate(self, messages: list[dict[str, str]]) -> str:
        """Call the downstream model and return the raw completion text."""
        payload = self._build_payload(messages)

        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.post(
                    self.config.endpoint,
                    json=payload,
                    headers=self._build_headers(),
                )
                response.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise ModelClientError(
                    f"Model endpoint returned {exc.response.status_code}: {_error_detail(exc.response)}"
                ) from exc
            except httpx.HTTPError as exc:
                raise ModelClientError(str(exc) or exc.__class__.__name__) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise ModelClientError("Model endpoint returned invalid JSON.") from exc
        return self._parse_response(data)

    def _build_headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def _build_payload(self, messages: list[dict[str, str]]) -> dict[str, Any]:
        """Translate messages to the downstream API shape."""
        payload: dict[str, Any] = {
            "model": self.config.name,
            "messages": messages,
        }

        if self.config.api_type == "ollama":
            payload["stream"] = False
            payload["options"] = {"temperature": self.config.temperature}
            return payload

        payload["temperature"] = self.config.temperature
        return payload

    def _parse_response(self, payload: Any) -> str:
        """Extract the completion text; an absent message yields an empty string."""
        if not isinstance(payload, dict):
            raise ModelClientError("Malformed model response: expected a JSON object.")

        if self.config.api_type == "ollama":
            message = payload.get("message") or {}
        else:
            choices = payload.get("choices") or []
            if not isinstance(choices, list):
                raise ModelClientError("Malformed OpenAI response: 'choices' is not a list.")
            if not choices:
                return ""
            if not isinstance(choices[0], dict):
                raise ModelClientError("Malformed OpenAI response: choice is not an object.")
            message = choices[0].get("message") or {}

        if not isinstance(message, dict):
            raise ModelClientError("Malformed model response: 'message' is not an object.")
        content = message.get("content") or ""
        return content if isinstance(content, str) else ""


def _error_detail(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(data, dict):
        return str(data.get("message") or data.get("error") or data)
    return str(data)
