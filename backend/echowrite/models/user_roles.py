from datetime import datetime, timezone
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from echowrite.db.base import Base


class UserRole(str, Enum):
    user = "user"
    premium = "premium"


DEFAULT_MAX_USAGE = 10


class UsageRecord(Base):
    """Per-user role and generation counter (the usage ledger)."""

    __tablename__ = "user_roles"
    __table_args__ = (
        CheckConstraint("usage_count >= 0", name="ck_user_roles_usage_count_nonnegative"),
        CheckConstraint("max_usage > 0", name="ck_user_roles_max_usage_positive"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[str] = mapped_column(String(64), unique=True, index=True, nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.user.value)
    usage_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    max_usage: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_MAX_USAGE)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    @property
    def is_premium(self) -> bool:
        return self.role == UserRole.premium.value

    @property
    def quota_reached(self) -> bool:
        return not self.is_premium and self.usage_count >= self.max_usage
