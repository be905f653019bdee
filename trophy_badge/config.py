"""
Configuration for the trophy badge service.

Environment-driven settings live at module level; request-level rendering
options are parsed into a BadgeOptions value at the HTTP boundary so the
derivation code never sees raw query strings.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass
from typing import Dict, FrozenSet, Mapping, Optional, Tuple

# -----------------------------
# Environment
# -----------------------------
GITHUB_API_BASE = os.getenv("GITHUB_API_BASE", "https://api.github.com").rstrip("/")
API_VERSION = os.getenv("GITHUB_API_VERSION", "2022-11-28")
GITHUB_TIMEOUT_SECONDS = float(os.getenv("GITHUB_TIMEOUT_SECONDS", "20"))

# Rendered badges are cached per process for this long
CACHE_TTL_SECONDS = int(os.getenv("TROPHY_CACHE_TTL_SECONDS", "60"))

DEFAULT_COLUMNS = 3
MAX_COLUMNS = 5

TROPHY_TITLES: Tuple[str, ...] = (
    "Followers",
    "Stars",
    "Repos",
    "Account Age",
    "Contributions",
    "Popular Repo",
    "Engagement Score",
    "Active Developer",
    "Star Collector",
    "Open Source Hero",
)

_TITLE_KEYS: FrozenSet[str] = frozenset(t.lower() for t in TROPHY_TITLES)

_TRUTHY = {"1", "true", "yes", "on"}


class InvalidRequest(ValueError):
    """A caller-correctable problem with the request parameters."""


# -----------------------------
# Themes
# -----------------------------
class Theme(str, enum.Enum):
    UPLINK = "uplink"
    DARK = "dark"
    LIGHT = "light"


@dataclass(frozen=True)
class Palette:
    bg: str
    card_bg: str
    mini_card_bg: str
    text: str
    border: str
    accent: str


_UPLINK_GREEN = "#6bff7a"

PALETTES: Dict[Theme, Palette] = {
    Theme.UPLINK: Palette(
        bg="#0d0d0f",
        card_bg="#131416",
        mini_card_bg="#1a1b1d",
        text="#e5e5e5",
        border=_UPLINK_GREEN + "40",
        accent=_UPLINK_GREEN,
    ),
    Theme.DARK: Palette(
        bg="#0d1117",
        card_bg="#161b22",
        mini_card_bg="#21262d",
        text="#c9d1d9",
        border="#30363d",
        accent="#58a6ff",
    ),
    Theme.LIGHT: Palette(
        bg="#ffffff",
        card_bg="#f6f8fa",
        mini_card_bg="#ffffff",
        text="#24292f",
        border="#d0d7de",
        accent="#0969da",
    ),
}


# -----------------------------
# Request options
# -----------------------------
@dataclass(frozen=True)
class BadgeOptions:
    theme: Theme = Theme.UPLINK
    columns: int = DEFAULT_COLUMNS
    hide: FrozenSet[str] = frozenset()

    @property
    def palette(self) -> Palette:
        return PALETTES[self.theme]

    def cache_key(self, username: str) -> str:
        """Compose the cache key from the user and every rendering option."""
        hidden = ",".join(sorted(self.hide))
        return f"{username.lower()}|{self.theme.value}|{self.columns}|{hidden}"


def _parse_columns(raw: Optional[str]) -> int:
    try:
        columns = int((raw or "").strip())
    except ValueError:
        return DEFAULT_COLUMNS
    if columns < 1:
        return DEFAULT_COLUMNS
    return min(columns, MAX_COLUMNS)


def _parse_theme(raw: Optional[str]) -> Theme:
    value = (raw or "").strip().lower()
    if not value:
        return Theme.UPLINK
    try:
        return Theme(value)
    except ValueError:
        valid = ", ".join(t.value for t in Theme)
        raise InvalidRequest(f"Unknown theme '{raw}'. Expected one of: {valid}.") from None


def _parse_hide(raw: Optional[str]) -> FrozenSet[str]:
    titles = {part.strip().lower() for part in (raw or "").split(",")}
    titles.discard("")
    unknown = sorted(titles - _TITLE_KEYS)
    if unknown:
        raise InvalidRequest(f"Unknown trophy title(s) in 'hide': {', '.join(unknown)}.")
    return frozenset(titles)


def parse_options(args: Mapping[str, str]) -> BadgeOptions:
    """Build BadgeOptions from query parameters, raising InvalidRequest on bad input."""
    return BadgeOptions(
        theme=_parse_theme(args.get("theme")),
        columns=_parse_columns(args.get("columns")),
        hide=_parse_hide(args.get("hide")),
    )


def is_truthy(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in _TRUTHY
