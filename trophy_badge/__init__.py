"""GitHub trophy badge: derive gamified profile stats and render them as SVG."""

from .cache import TTLCache
from .config import BadgeOptions, InvalidRequest, Theme, parse_options
from .github import GitHubAPIError, GitHubData, GitHubNotFoundError, fetch_github
from .models import Rarity, Trophy
from .render import render_badge
from .trophies import build_trophies, filter_trophies

__all__ = [
    "BadgeOptions",
    "GitHubAPIError",
    "GitHubData",
    "GitHubNotFoundError",
    "InvalidRequest",
    "Rarity",
    "TTLCache",
    "Theme",
    "Trophy",
    "build_trophies",
    "fetch_github",
    "filter_trophies",
    "parse_options",
    "render_badge",
]
