from __future__ import annotations

import logging
from typing import Optional

import httpx

from echowrite.core.config import settings
from echowrite.core.errors import QuotaExhausted, RateLimited, UpstreamError
from echowrite.services.prompt_builder import PromptPair

logger = logging.getLogger(__name__)


class AIRelay:
    """Forward a prompt pair to an OpenAI-compatible chat completion gateway."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout: Optional[float] = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = settings.ai_gateway_api_key if api_key is None else api_key
        self.url = url or settings.ai_gateway_url
        self.model = model or settings.ai_model
        self.temperature = settings.ai_temperature if temperature is None else temperature
        self.timeout = timeout or settings.ai_timeout_seconds
        self.transport = transport

    async def complete(self, prompt: PromptPair) -> str:
        if not self.api_key:
            logger.error("AI_GATEWAY_API_KEY is not configured")
            raise UpstreamError("AI gateway is not configured")

        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": prompt.system},
                {"role": "user", "content": prompt.user},
            ],
            "temperature": self.temperature,
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                resp = await client.post(self.url, headers=headers, json=payload)
        except httpx.RequestError as e:
            logger.error("Cannot reach AI gateway: %s", e)
            raise UpstreamError("Cannot reach AI gateway")

        if resp.status_code == 429:
            logger.warning("AI gateway rate limited the request")
            raise RateLimited()
        if resp.status_code == 402:
            logger.error("AI gateway credits exhausted")
            raise QuotaExhausted()
        if resp.status_code < 200 or resp.status_code >= 300:
            logger.error("AI gateway error: %s %s", resp.status_code, resp.text[:300])
            raise UpstreamError(f"AI Gateway error: {resp.status_code}")

        try:
            data = resp.json()
        except ValueError:
            logger.error("AI gateway returned a non-JSON body")
            raise UpstreamError("AI gateway returned an invalid response")

        try:
            content = data["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError):
            content = ""
        return content


def get_ai_relay() -> AIRelay:
    return AIRelay()
