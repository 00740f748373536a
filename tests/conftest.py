"""Shared fixtures for the Tone Picker tests."""

from __future__ import annotations

import asyncio

import pytest

from tonepicker.config import ModelConfig
from tonepicker.services.cache import ResponseCache
from tonepicker.services.rewrite import RewriteService


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeModelClient:
    """Stands in for ModelClient and records every call."""

    def __init__(self) -> None:
        self.calls: list[list[dict[str, str]]] = []
        self.reply = "Rewritten text."
        self.error: Exception | None = None
        self.gate: asyncio.Event | None = None

    async def generate(self, messages: list[dict[str, str]]) -> str:
        self.calls.append(messages)
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def model_config() -> ModelConfig:
    return ModelConfig(
        name="mistral-small-latest",
        endpoint="https://models.example.test/v1/chat/completions",
        api_type="openai",
        temperature=0.4,
        api_key="test-key",
    )


@pytest.fixture
def fake_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def cache(clock: FakeClock) -> ResponseCache:
    return ResponseCache(ttl_seconds=60.0, clock=clock)


@pytest.fixture
def service(model_config: ModelConfig, cache: ResponseCache, fake_client: FakeModelClient) -> RewriteService:
    return RewriteService(model_config=model_config, cache=cache, client=fake_client)  # type: ignore[arg-type]
