"""Client-local persisted state: recent generation history and the signed-in user snapshot.

Both live as JSON blobs under fixed keys in a single file and are cleared on logout.
"""
from __future__ import annotations

import json
import logging
import time
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

HISTORY_KEY = "echowrite_history"
USER_KEY = "echowrite_user"
MAX_HISTORY_ITEMS = 10


@dataclass
class HistoryItem:
    id: str
    timestamp: int
    originalText: str
    style: str
    variations: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class UserSnapshot:
    id: str
    email: str
    name: str
    tier: str = "free"
    usageCount: int = 0
    maxUsage: int = 10

    @classmethod
    def from_account(cls, account: Dict[str, Any], email: str, name: str | None = None) -> "UserSnapshot":
        return cls(
            id=account["userId"],
            email=email,
            name=name or email.split("@")[0],
            tier="premium" if account.get("role") == "premium" else "free",
            usageCount=account.get("usageCount", 0),
            maxUsage=account.get("maxUsage", 10),
        )


class ClientState:
    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Failed to load client state: %s", e)
            return {}
        return data if isinstance(data, dict) else {}

    def _write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def history(self) -> List[HistoryItem]:
        items = self._read().get(HISTORY_KEY) or []
        return [HistoryItem(**item) for item in items]

    def add_to_history(self, original_text: str, style: str, variations: List[Dict[str, Any]]) -> HistoryItem:
        now = int(time.time() * 1000)
        item = HistoryItem(id=str(now), timestamp=now, originalText=original_text, style=style, variations=variations)

        data = self._read()
        items = [asdict(item)] + (data.get(HISTORY_KEY) or [])
        data[HISTORY_KEY] = items[:MAX_HISTORY_ITEMS]
        self._write(data)
        return item

    def clear_history(self) -> None:
        data = self._read()
        data.pop(HISTORY_KEY, None)
        self._write(data)

    def save_user(self, user: UserSnapshot) -> None:
        data = self._read()
        data[USER_KEY] = asdict(user)
        self._write(data)

    def load_user(self) -> Optional[UserSnapshot]:
        raw = self._read().get(USER_KEY)
        return UserSnapshot(**raw) if raw else None

    def logout(self) -> None:
        data = self._read()
        for key in (HISTORY_KEY, USER_KEY):
            data.pop(key, None)
        self._write(data)
