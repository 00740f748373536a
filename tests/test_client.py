"""Tests for the HTTP model client."""

from __future__ import annotations

import json
from dataclasses import replace

import httpx
import pytest

from tonepicker.config import ModelConfig
from tonepicker.errors import UpstreamError
from tonepicker.models.client import ModelClient, ModelClientError

MESSAGES = [{"role": "user", "content": "hello"}]


def _client(config: ModelConfig, handler) -> ModelClient:
    return ModelClient(config, timeout=5.0, transport=httpx.MockTransport(handler))


async def test_openai_payload_and_auth(model_config: ModelConfig) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"choices": [{"message": {"content": "Hi there."}}]})

    text = await _client(model_config, handler).generate(MESSAGES)

    assert text == "Hi there."
    request = seen[0]
    assert str(request.url) == model_config.endpoint
    assert request.headers["Authorization"] == "Bearer test-key"
    body = json.loads(request.content)
    assert body == {"model": "mistral-small-latest", "messages": MESSAGES, "temperature": 0.4}


async def test_ollama_payload(model_config: ModelConfig) -> None:
    config = replace(model_config, api_type="ollama", api_key=None)
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        assert "Authorization" not in request.headers
        return httpx.Response(200, json={"message": {"content": "Local reply."}})

    text = await _client(config, handler).generate(MESSAGES)

    assert text == "Local reply."
    assert seen[0]["stream"] is False
    assert seen[0]["options"] == {"temperature": 0.4}


async def test_missing_choices_yields_empty_text(model_config: ModelConfig) -> None:
    text = await _client(model_config, lambda request: httpx.Response(200, json={"choices": []})).generate(MESSAGES)
    assert text == ""


async def test_http_error_status_is_wrapped(model_config: ModelConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(429, json={"message": "Rate limit exceeded"})

    with pytest.raises(ModelClientError) as excinfo:
        await _client(model_config, handler).generate(MESSAGES)

    assert isinstance(excinfo.value, UpstreamError)
    assert "429" in str(excinfo.value)
    assert "Rate limit exceeded" in str(excinfo.value)


async def test_transport_error_is_wrapped(model_config: ModelConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(ModelClientError, match="connection refused"):
        await _client(model_config, handler).generate(MESSAGES)


async def test_invalid_json_is_wrapped(model_config: ModelConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>oops</html>")

    with pytest.raises(ModelClientError, match="invalid JSON"):
        await _client(model_config, handler).generate(MESSAGES)


@pytest.mark.parametrize("body", [[], "oops", {"choices": ["not-a-dict"]}, {"choices": "x"}])
async def test_malformed_body_is_wrapped(model_config: ModelConfig, body) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=body)

    with pytest.raises(ModelClientError, match="Malformed"):
        await _client(model_config, handler).generate(MESSAGES)


async def test_ollama_non_object_message_is_wrapped(model_config: ModelConfig) -> None:
    config = replace(model_config, api_type="ollama")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"message": "hello"})

    with pytest.raises(ModelClientError, match="Malformed"):
        await _client(config, handler).generate(MESSAGES)


async def test_non_string_content_yields_empty_text(model_config: ModelConfig) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"choices": [{"message": {"content": ["parts"]}}]})

    assert await _client(model_config, handler).generate(MESSAGES) == ""
