from __future__ import annotations

import logging
from enum import Enum

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import update
from sqlalchemy.dialects import postgresql, sqlite

from echowrite.core.config import settings
from echowrite.core.errors import ProfileMissing
from echowrite.models.profiles import Profile
from echowrite.models.user_roles import UsageRecord, UserRole
from echowrite.services.identity import Identity
from echowrite.services.usage_gate import get_usage

logger = logging.getLogger(__name__)


class AccountAction(str, Enum):
    bootstrap = "bootstrap"
    activate_premium = "activate-premium"


def _insert_for(db: AsyncSession, table):
    if db.get_bind().dialect.name == "sqlite":
        return sqlite.insert(table)
    return postgresql.insert(table)


async def upsert_profile(db: AsyncSession, identity: Identity) -> None:
    stmt = _insert_for(db, Profile).values(
        user_id=identity.user_id,
        email=identity.email,
        name=identity.display_name,
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=[Profile.user_id],
        set_={"email": stmt.excluded.email, "name": stmt.excluded.name},
    )
    await db.execute(stmt)


async def ensure_usage_record(db: AsyncSession, user_id: str) -> None:
    """Insert the single ledger row for a user unless one already exists."""
    stmt = (
        _insert_for(db, UsageRecord)
        .values(
            user_id=user_id,
            role=UserRole.user.value,
            usage_count=0,
            max_usage=settings.default_max_usage,
        )
        .on_conflict_do_nothing(index_elements=[UsageRecord.user_id])
    )
    await db.execute(stmt)


async def sync_account(db: AsyncSession, identity: Identity, action: AccountAction) -> UsageRecord:
    if identity.email:
        await upsert_profile(db, identity)
    await ensure_usage_record(db, identity.user_id)

    if action is AccountAction.activate_premium:
        # counters are left untouched on upgrade
        await db.execute(
            update(UsageRecord)
            .where(UsageRecord.user_id == identity.user_id)
            .values(role=UserRole.premium.value)
            .execution_options(synchronize_session=False)
        )
        logger.info("Premium activated for user %s", identity.user_id)

    await db.commit()

    usage = await get_usage(db, identity.user_id)
    if usage is None:
        raise ProfileMissing("Unable to confirm account")
    await db.refresh(usage)
    return usage
