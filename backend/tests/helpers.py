import asyncio
from typing import Callable, Optional

from jose import jwt
from sqlalchemy import select
from sqlalchemy.orm import Session

from echowrite.models.user_roles import UsageRecord
from echowrite.services.prompt_builder import PromptPair

TEST_SECRET = "test-secret"


def make_token(user_id: str = "u1", email: Optional[str] = "u1@example.com", secret: str = TEST_SECRET, **metadata) -> str:
    claims = {"sub": user_id, "aud": "authenticated", "role": "authenticated", "user_metadata": metadata}
    if email:
        claims["email"] = email
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(user_id: str = "u1", **kwargs) -> dict:
    return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}


class FakeRelay:
    """Stands in for AIRelay; returns a scripted completion or raises a scripted error."""

    def __init__(self, content: str = "translated text", error: Optional[Exception] = None, delay: float = 0.0):
        self.content = content
        self.error = error
        self.delay = delay
        self.prompts: list[PromptPair] = []
        self.on_complete: Optional[Callable[[], None]] = None

    @property
    def calls(self) -> int:
        return len(self.prompts)

    async def complete(self, prompt: PromptPair) -> str:
        self.prompts.append(prompt)
        if self.on_complete is not None:
            self.on_complete()
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.content


def seed_usage(session: Session, user_id: str = "u1", role: str = "user", usage_count: int = 0, max_usage: int = 10) -> UsageRecord:
    record = UsageRecord(user_id=user_id, role=role, usage_count=usage_count, max_usage=max_usage)
    session.add(record)
    session.commit()
    return record


def read_usage(session: Session, user_id: str = "u1") -> Optional[UsageRecord]:
    session.expire_all()
    return session.execute(select(UsageRecord).where(UsageRecord.user_id == user_id)).scalar_one_or_none()


def async_override_get_db_factory(maker):
    async def _override_get_db():
        async with maker() as session:
            yield session

    return _override_get_db
