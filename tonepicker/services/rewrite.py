"""Rewrite relay: prompt assembly, response cache and model invocation."""

from __future__ import annotations

import asyncio
import json
import time
from dataclasses import dataclass

from tonepicker.config import ModelConfig
from tonepicker.errors import EmptyResponse, InvalidInput, RewriteCancelled, ServiceUnconfigured
from tonepicker.logging_utils import get_logger
from tonepicker.models.client import ModelClient
from tonepicker.prompts import build_messages
from tonepicker.services.cache import ResponseCache
from tonepicker.types import ToneSpec, Unspecified, tone_spec_key

logger = get_logger(__name__)


@dataclass
class RewriteResult:
    """Structured response returned by the rewrite service."""

    text: str
    cached: bool
    latency_ms: float


class CancellationToken:
    """Cooperative cancellation signal for one rewrite call."""

    def __init__(self) -> None:
        self._event = asyncio.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    async def wait(self) -> None:
        await self._event.wait()


class RewriteService:
    """Relays tone rewrites to the completion service, cache first.

    The service never retries: a single upstream failure is raised to the
    caller and nothing is cached.
    """

    def __init__(
        self,
        *,
        model_config: ModelConfig,
        cache: ResponseCache,
        timeout: float = 60.0,
        client: ModelClient | None = None,
    ) -> None:
        self._model_config = model_config
        self._cache = cache
        self._client = client or ModelClient(model_config, timeout=timeout)

    @staticmethod
    def cache_key(text: str, tone: ToneSpec) -> str:
        """Deterministic key for the exact structured request."""
        return json.dumps({"text": text, **tone_spec_key(tone)}, sort_keys=True, ensure_ascii=False)

    async def rewrite(
        self,
        text: str,
        tone: ToneSpec | None = None,
        *,
        cancel_token: CancellationToken | None = None,
    ) -> RewriteResult:
        """Rewrite ``text`` in the requested tone."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidInput("Missing or empty `text`")
        tone = tone if tone is not None else Unspecified()

        start = time.perf_counter()
        key = self.cache_key(text, tone)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Rewrite served from cache | text_len=%d", len(text))
            return RewriteResult(text=cached, cached=True, latency_ms=(time.perf_counter() - start) * 1000)

        if self._model_config.api_type == "openai" and not self._model_config.api_key:
            raise ServiceUnconfigured("MISTRAL_API_KEY not configured on server")

        messages = build_messages(text, tone)
        output = await self._call_model(messages, cancel_token)
        if not isinstance(output, str) or not output.strip():
            raise EmptyResponse("Empty response from model")
        output = output.strip()

        self._cache.set(key, output)
        latency_ms = (time.perf_counter() - start) * 1000

        logger.debug(
            "Rewrite completed | model=%s latency_ms=%.2f text_len=%d",
            self._model_config.name,
            latency_ms,
            len(text),
        )

        return RewriteResult(text=output, cached=False, latency_ms=latency_ms)

    async def _call_model(
        self,
        messages: list[dict[str, str]],
        cancel_token: CancellationToken | None,
    ) -> str:
        if cancel_token is None:
            return await self._client.generate(messages)
        if cancel_token.cancelled:
            raise RewriteCancelled("Rewrite cancelled")

        call = asyncio.ensure_future(self._client.generate(messages))
        waiter = asyncio.ensure_future(cancel_token.wait())
        try:
            done, _ = await asyncio.wait({call, waiter}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            waiter.cancel()
            if not call.done():
                call.cancel()

        if call not in done:
            logger.info("Rewrite cancelled before the model responded")
            raise RewriteCancelled("Rewrite cancelled")
        return call.result()
