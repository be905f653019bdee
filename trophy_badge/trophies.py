"""
Trophy derivation.

Turns the raw GitHub documents into the ordered list of trophies shown on the
badge. Everything here is pure: the only input besides the payloads is the
clock used for the account age, which callers may pin.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence

from .models import Event, Profile, Rarity, Repository, Trophy, parse_events, parse_repositories

PUSH_EVENT = "PushEvent"
PULL_REQUEST_EVENT = "PullRequestEvent"

ACTIVE_DEVELOPER_THRESHOLD = 20

# (minimum magnitude, band), checked top-down
RARITY_BANDS = (
    (300, Rarity.LEGENDARY),
    (100, Rarity.EPIC),
    (50, Rarity.RARE),
    (10, Rarity.UNCOMMON),
)

STAR_COLLECTOR_LEVELS = (
    (100, "Level 3"),
    (50, "Level 2"),
    (10, "Level 1"),
)


def rarity_for(magnitude: int) -> Rarity:
    for minimum, rarity in RARITY_BANDS:
        if magnitude >= minimum:
            return rarity
    return Rarity.COMMON


def star_collector_level(stars: int) -> str:
    for minimum, level in STAR_COLLECTOR_LEVELS:
        if stars >= minimum:
            return level
    return "Level 0"


# -----------------------------
# Recent activity
# -----------------------------
def count_contributions(events: Sequence[Event]) -> int:
    return sum(1 for e in events if e.type in (PUSH_EVENT, PULL_REQUEST_EVENT))


@dataclass(frozen=True)
class Engagement:
    score: int
    label: str

    def __str__(self) -> str:
        return f"{self.label} ({self.score})"


def engagement_label(score: int) -> str:
    if score > 40:
        return "High"
    if score > 15:
        return "Medium"
    return "Low"


def engagement(events: Sequence[Event]) -> Engagement:
    """One point per push, three per pull request."""
    pushes = sum(1 for e in events if e.type == PUSH_EVENT)
    prs = sum(1 for e in events if e.type == PULL_REQUEST_EVENT)
    score = pushes + prs * 3
    return Engagement(score=score, label=engagement_label(score))


# -----------------------------
# Repositories
# -----------------------------
def total_stars(repos: Sequence[Repository]) -> int:
    return sum(r.stargazers_count for r in repos)


def popular_repo(repos: Sequence[Repository]) -> Optional[Repository]:
    """Most starred repository; the first one wins a tie. None if nothing has stars."""
    top: Optional[Repository] = None
    for repo in repos:
        if top is None or repo.stargazers_count > top.stargazers_count:
            top = repo
    if top is None or top.stargazers_count <= 0:
        return None
    return top


def account_age_years(profile: Profile, now: dt.datetime) -> int:
    if profile.created_at is None:
        return 0
    return max(0, now.year - profile.created_at.year)


# -----------------------------
# Trophies
# -----------------------------
def build_trophies(data: Any, now: Optional[dt.datetime] = None) -> List[Trophy]:
    """
    Derive the ten trophies from a fetched GitHubData (anything exposing
    ``user``, ``repos`` and ``events``).

    Missing or malformed collections degrade to zero values; this never raises
    on bad upstream data.
    """
    now = now or dt.datetime.now(dt.timezone.utc)
    profile = Profile.from_payload(getattr(data, "user", None))
    repos = parse_repositories(getattr(data, "repos", None))
    events = parse_events(getattr(data, "events", None))

    stars = total_stars(repos)
    contributions = count_contributions(events)
    top = popular_repo(repos)
    open_source_hero = any(r.is_fork for r in repos)

    return [
        Trophy("Followers", "👤", profile.followers, rarity_for(profile.followers)),
        Trophy("Stars", "⭐", stars, rarity_for(stars)),
        Trophy("Repos", "📦", profile.public_repos, rarity_for(profile.public_repos)),
        Trophy("Account Age", "📅", f"{account_age_years(profile, now)} years"),
        Trophy("Contributions", "🔧", contributions, rarity_for(contributions)),
        Trophy("Popular Repo", "📈", f"{top.name} ({top.stargazers_count}★)" if top else "None"),
        Trophy("Engagement Score", "📊", str(engagement(events))),
        Trophy("Active Developer", "🚀", "Yes" if contributions > ACTIVE_DEVELOPER_THRESHOLD else "No"),
        Trophy("Star Collector", "🌟", star_collector_level(stars)),
        Trophy("Open Source Hero", "💚", "Yes" if open_source_hero else "No"),
    ]


def filter_trophies(trophies: Iterable[Trophy], hide: Iterable[str]) -> List[Trophy]:
    """Drop trophies whose title is in ``hide`` (case-insensitive), keeping order."""
    hidden = {h.strip().lower() for h in hide}
    return [t for t in trophies if t.title.lower() not in hidden]
