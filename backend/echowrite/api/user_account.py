from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from echowrite.api.deps import RequestContext, get_request_context
from echowrite.core.errors import InvalidInput
from echowrite.services.accounts import AccountAction, sync_account

router = APIRouter(tags=["user-account"])


class UserAccountIn(BaseModel):
    action: Optional[str] = None


class UserAccountOut(BaseModel):
    ok: bool = True
    action: str
    userId: str
    role: str
    usageCount: int
    maxUsage: int


@router.post("/user-account", response_model=UserAccountOut)
async def user_account(
    payload: UserAccountIn | None = None,
    ctx: RequestContext = Depends(get_request_context),
):
    try:
        action = AccountAction(payload.action if payload else None)
    except ValueError:
        raise InvalidInput("Invalid request")

    usage = await sync_account(ctx.db, ctx.identity, action)
    return UserAccountOut(
        action=action.value,
        userId=ctx.identity.user_id,
        role=usage.role,
        usageCount=usage.usage_count,
        maxUsage=usage.max_usage,
    )
