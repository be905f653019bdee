"""
Typed views over GitHub REST payloads.

GitHub JSON is loosely shaped from our point of view: fields can be missing
or null, and an error object can arrive where a list was expected. Every
parser here is total and falls back to a zero/empty value instead of raising.
"""

from __future__ import annotations

import datetime as dt
import enum
import math
from dataclasses import dataclass
from typing import Any, List, Optional, Union


class AccountType(str, enum.Enum):
    USER = "User"
    ORGANIZATION = "Organization"


class Rarity(str, enum.Enum):
    COMMON = "Common"
    UNCOMMON = "Uncommon"
    RARE = "Rare"
    EPIC = "Epic"
    LEGENDARY = "Legendary"


# -----------------------------
# Utility helpers
# -----------------------------
def _count(value: Any) -> int:
    # bool is an int subclass; a JSON true is not a count
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    return max(0, int(value))


def _dateparse(s: Any) -> Optional[dt.datetime]:
    if not s or not isinstance(s, str):
        return None
    try:
        return dt.datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        return None


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


# -----------------------------
# Models
# -----------------------------
@dataclass(frozen=True)
class Profile:
    followers: int = 0
    public_repos: int = 0
    public_gists: int = 0
    account_type: AccountType = AccountType.USER
    created_at: Optional[dt.datetime] = None

    @classmethod
    def from_payload(cls, payload: Any) -> "Profile":
        if not isinstance(payload, dict):
            return cls()
        try:
            account_type = AccountType(payload.get("type"))
        except ValueError:
            account_type = AccountType.USER
        return cls(
            followers=_count(payload.get("followers")),
            public_repos=_count(payload.get("public_repos")),
            public_gists=_count(payload.get("public_gists")),
            account_type=account_type,
            created_at=_dateparse(payload.get("created_at")),
        )


@dataclass(frozen=True)
class Repository:
    name: str
    stargazers_count: int = 0
    is_fork: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["Repository"]:
        if not isinstance(payload, dict):
            return None
        name = payload.get("name")
        return cls(
            name=name if isinstance(name, str) else "",
            stargazers_count=_count(payload.get("stargazers_count")),
            is_fork=payload.get("fork") is True,
        )


@dataclass(frozen=True)
class Event:
    type: str

    @classmethod
    def from_payload(cls, payload: Any) -> Optional["Event"]:
        if not isinstance(payload, dict):
            return None
        etype = payload.get("type")
        return cls(type=etype if isinstance(etype, str) else "")


def parse_repositories(payload: Any) -> List[Repository]:
    repos = (Repository.from_payload(r) for r in _as_list(payload))
    return [r for r in repos if r is not None]


def parse_events(payload: Any) -> List[Event]:
    events = (Event.from_payload(e) for e in _as_list(payload))
    return [e for e in events if e is not None]


@dataclass(frozen=True)
class Trophy:
    title: str
    icon: str
    value: Union[str, int]
    rarity: Optional[Rarity] = None
