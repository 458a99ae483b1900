"""Typed async client for the relay and account endpoints."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

import httpx

from echowrite.core.errors import ErrorKind

logger = logging.getLogger(__name__)

KIND_BY_STATUS = {
    400: ErrorKind.invalid_input,
    401: ErrorKind.unauthenticated,
    402: ErrorKind.quota_exhausted,
    403: ErrorKind.quota_exceeded,
    429: ErrorKind.rate_limited,
}


class RelayError(Exception):
    def __init__(self, kind: ErrorKind, message: str, status_code: int | None = None):
        self.kind = kind
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def requires_login(self) -> bool:
        return self.kind is ErrorKind.unauthenticated

    @property
    def requires_upgrade(self) -> bool:
        return self.kind is ErrorKind.quota_exceeded

    @property
    def retryable(self) -> bool:
        return not (self.requires_login or self.requires_upgrade)


def error_from_response(resp: httpx.Response) -> RelayError:
    try:
        body = resp.json()
    except ValueError:
        body = {}
    if not isinstance(body, dict):
        body = {}

    message = body.get("error") or body.get("detail") or f"Request failed with status {resp.status_code}"
    try:
        kind = ErrorKind(body.get("code"))
    except ValueError:
        kind = KIND_BY_STATUS.get(resp.status_code, ErrorKind.upstream_error)
    return RelayError(kind, str(message), resp.status_code)


@dataclass
class PanelResults:
    """Outcome of a generate_all fan-out; each panel holds a result or its error."""

    variations: Union[List[Dict[str, Any]], RelayError, None] = None
    length_variations: Union[Dict[str, Any], RelayError, None] = None
    visual: Union[Dict[str, Any], RelayError, None] = None


class EchoWriteClient:
    def __init__(
        self,
        base_url: str,
        access_token: str,
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.access_token = access_token
        self.timeout = timeout
        self.transport = transport

    async def _post(self, path: str, body: Dict[str, Any]) -> Any:
        headers = {"Authorization": f"Bearer {self.access_token}", "Content-Type": "application/json"}
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self.transport
            ) as client:
                resp = await client.post(path, headers=headers, json=body)
        except httpx.RequestError as e:
            logger.warning("Request to %s failed: %s", path, e)
            raise RelayError(ErrorKind.upstream_error, f"Cannot reach EchoWrite API: {e}")

        if resp.status_code != 200:
            err = error_from_response(resp)
            logger.warning("%s failed: %s (%s)", path, err.kind.value, err.status_code)
            raise err
        return resp.json()

    async def _relay(self, action: str, text: str, **params: Optional[str]) -> Any:
        body: Dict[str, Any] = {"action": action, "text": text}
        body.update({k: v for k, v in params.items() if v is not None})
        return await self._post("/echowrite", body)

    async def get_writing_variations(self, text: str, style: str) -> List[Dict[str, Any]]:
        data = await self._relay("variations", text, style=style)
        return data.get("variations", []) if isinstance(data, dict) else []

    async def get_length_variations(self, text: str) -> Dict[str, Any]:
        return await self._relay("length-variations", text)

    async def generate_visual(self, text: str, visual_type: str = "diagram") -> Dict[str, Any]:
        return await self._relay("generate-visual", text, visualType=visual_type)

    async def translate_text(self, text: str, target_language: str) -> str:
        data = await self._relay("translate", text, targetLanguage=target_language)
        return data["text"]

    async def rephrase_text(self, text: str, length_type: str) -> str:
        data = await self._relay("rephrase", text, lengthType=length_type)
        return data["text"]

    async def generate_all(self, text: str, style: str, visual_type: str = "diagram") -> PanelResults:
        """Run the three structured actions concurrently; one failing panel does not cancel the others."""
        results = await asyncio.gather(
            self.get_writing_variations(text, style),
            self.get_length_variations(text),
            self.generate_visual(text, visual_type),
            return_exceptions=True,
        )
        for r in results:
            if isinstance(r, BaseException) and not isinstance(r, RelayError):
                raise r
        return PanelResults(variations=results[0], length_variations=results[1], visual=results[2])

    async def bootstrap_account(self) -> Dict[str, Any]:
        return await self._post("/user-account", {"action": "bootstrap"})

    async def activate_premium(self) -> Dict[str, Any]:
        return await self._post("/user-account", {"action": "activate-premium"})
