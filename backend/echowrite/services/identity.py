"""Resolve a bearer token to a Supabase Auth identity.

Tokens are verified locally when the project's JWT secret is configured;
otherwise they are resolved against the Supabase Auth `/user` endpoint.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import httpx
from jose import jwt, JWTError

from echowrite.core.config import settings
from echowrite.core.errors import Unauthenticated

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    user_id: str
    email: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        name = self.metadata.get("name") or self.metadata.get("full_name")
        if name:
            return str(name)
        if self.email:
            return self.email.split("@")[0]
        return "User"


def _identity_from_claims(claims: Dict[str, Any]) -> Identity:
    user_id = claims.get("sub") or claims.get("id")
    if not user_id:
        raise Unauthenticated("Invalid token")
    return Identity(
        user_id=str(user_id),
        email=claims.get("email") or None,
        metadata=claims.get("user_metadata") or {},
    )


def decode_token(token: str) -> Identity:
    try:
        claims = jwt.decode(
            token,
            settings.supabase_jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"verify_aud": False},
        )
    except JWTError:
        raise Unauthenticated("Invalid token")
    return _identity_from_claims(claims)


async def fetch_identity(token: str, transport: httpx.AsyncBaseTransport | None = None) -> Identity:
    base = settings.supabase_url.rstrip("/")
    if not base or not settings.supabase_anon_key:
        logger.error("Supabase auth is not configured; cannot resolve bearer token")
        raise Unauthenticated("Invalid token")

    try:
        async with httpx.AsyncClient(timeout=10, transport=transport) as client:
            resp = await client.get(
                f"{base}/auth/v1/user",
                headers={"Authorization": f"Bearer {token}", "apikey": settings.supabase_anon_key},
            )
    except httpx.RequestError as e:
        logger.warning("Supabase auth unreachable: %s", e)
        raise Unauthenticated("Invalid token")

    if resp.status_code != 200:
        raise Unauthenticated("Invalid token")
    try:
        data = resp.json()
    except ValueError:
        logger.warning("Supabase auth returned a non-JSON body")
        raise Unauthenticated("Invalid token")
    if not isinstance(data, dict):
        raise Unauthenticated("Invalid token")
    return _identity_from_claims(data)


async def resolve_identity(token: str | None) -> Identity:
    if not token or not token.strip():
        raise Unauthenticated("Missing bearer token")
    if settings.supabase_jwt_secret:
        return decode_token(token)
    return await fetch_identity(token)
