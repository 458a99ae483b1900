from __future__ import annotations

import logging

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from echowrite.core.errors import ProfileMissing, QuotaExceeded
from echowrite.models.user_roles import UsageRecord, UserRole

logger = logging.getLogger(__name__)


async def get_usage(db: AsyncSession, user_id: str) -> UsageRecord | None:
    res = await db.execute(select(UsageRecord).where(UsageRecord.user_id == user_id))
    return res.scalar_one_or_none()


async def check_quota(db: AsyncSession, user_id: str) -> UsageRecord:
    """Pre-check before any relay call. Does not modify the ledger."""
    usage = await get_usage(db, user_id)
    if usage is None:
        raise ProfileMissing()
    if usage.quota_reached:
        logger.info("Quota reached for user %s (%s/%s)", user_id, usage.usage_count, usage.max_usage)
        raise QuotaExceeded()
    return usage


async def record_usage(db: AsyncSession, user_id: str) -> int:
    """Increment the counter in one conditional statement and return the new count.

    The WHERE clause re-validates the ceiling, so concurrent requests can never
    push a non-premium counter past max_usage.
    """
    stmt = (
        update(UsageRecord)
        .where(UsageRecord.user_id == user_id)
        .where(
            or_(
                UsageRecord.role == UserRole.premium.value,
                UsageRecord.usage_count < UsageRecord.max_usage,
            )
        )
        .values(usage_count=UsageRecord.usage_count + 1)
        .returning(UsageRecord.usage_count)
        .execution_options(synchronize_session=False)
    )
    res = await db.execute(stmt)
    new_count = res.scalar_one_or_none()
    await db.commit()

    if new_count is None:
        logger.info("Usage increment rejected for user %s after relay call", user_id)
        raise QuotaExceeded()
    return new_count
