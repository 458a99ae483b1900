from dataclasses import dataclass

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from echowrite.core.errors import Unauthenticated
from echowrite.db.session import get_db
from echowrite.models.user_roles import UsageRecord
from echowrite.services.identity import Identity, resolve_identity

bearer = HTTPBearer(auto_error=False)


@dataclass
class RequestContext:
    """State carried through the gate chain for one request."""

    identity: Identity
    db: AsyncSession
    usage: UsageRecord | None = None


async def get_current_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> Identity:
    if not creds or creds.scheme.lower() != "bearer":
        raise Unauthenticated("Missing bearer token")
    return await resolve_identity(creds.credentials)


async def get_request_context(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db),
) -> RequestContext:
    return RequestContext(identity=identity, db=db)
