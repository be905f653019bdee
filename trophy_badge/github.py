"""
GitHub REST fetcher.

Pulls the three public documents a badge is built from: the user profile,
one page of repositories and the recent event list. The requests have no
dependency on each other, so they are dispatched together on a small thread
pool and joined before returning.

Payloads are returned exactly as parsed from JSON. Shape checking is left to
the models layer.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from . import config

logger = logging.getLogger(__name__)


# -----------------------------
# Errors
# -----------------------------
class GitHubAPIError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class GitHubNotFoundError(GitHubAPIError):
    """GitHub says the account does not exist."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"User '{username}' not found.", status_code=404)


# -----------------------------
# HTTP helpers
# -----------------------------
def _headers() -> Dict[str, str]:
    return {
        "Accept": "application/vnd.github+json",
        "User-Agent": "github-trophy-badge",
        "X-GitHub-Api-Version": config.API_VERSION,
    }


def _is_not_found(resp: requests.Response) -> bool:
    if resp.status_code == 404:
        return True
    try:
        body = resp.json()
    except ValueError:
        return False
    return isinstance(body, dict) and body.get("message") == "Not Found"


def _get(url: str, *, params: Optional[dict] = None) -> requests.Response:
    """
    Single GET against the REST API. Transport failures surface once as
    GitHubAPIError; there is no retry.
    """
    try:
        return requests.request(
            "GET", url, headers=_headers(), params=params, timeout=config.GITHUB_TIMEOUT_SECONDS
        )
    except requests.RequestException as e:
        raise GitHubAPIError(f"GitHub request failed: {e}") from e


def _decode(resp: requests.Response, url: str) -> Any:
    if resp.status_code >= 400:
        raise GitHubAPIError(
            f"GitHub REST error {resp.status_code}: {resp.text[:600]}", status_code=resp.status_code
        )
    try:
        return resp.json()
    except ValueError as e:
        raise GitHubAPIError(f"GitHub returned a non-JSON body for {url}") from e


def _request_json(url: str, *, params: Optional[dict] = None) -> Any:
    return _decode(_get(url, params=params), url)


def _user_url(username: str, suffix: str = "") -> str:
    return f"{config.GITHUB_API_BASE}/users/{requests.utils.quote(username, safe='')}{suffix}"


def _fetch_user(username: str) -> Any:
    url = _user_url(username)
    resp = _get(url)
    if _is_not_found(resp):
        raise GitHubNotFoundError(username)
    return _decode(resp, url)


def _fetch_repos(username: str) -> Any:
    return _request_json(_user_url(username, "/repos"), params={"per_page": 100})


def _fetch_events(username: str) -> Any:
    return _request_json(_user_url(username, "/events"))


# -----------------------------
# Fetcher
# -----------------------------
@dataclass(frozen=True)
class GitHubData:
    user: Any
    repos: Any
    events: Any

    def as_dict(self) -> Dict[str, Any]:
        return {"user": self.user, "repos": self.repos, "events": self.events}


def fetch_github(username: str) -> GitHubData:
    """
    Fetch profile, repositories and events for ``username`` concurrently.

    If more than one request fails, the profile error wins over the repos
    error, which wins over the events error.
    """
    if not username:
        raise ValueError("username must be a non-empty string")

    with ThreadPoolExecutor(max_workers=3, thread_name_prefix="github-fetch") as pool:
        user_f = pool.submit(_fetch_user, username)
        repos_f = pool.submit(_fetch_repos, username)
        events_f = pool.submit(_fetch_events, username)

        # result() re-raises the worker's exception
        user = user_f.result()
        repos = repos_f.result()
        events = events_f.result()

    logger.debug(f"Fetched GitHub data for {username}")
    return GitHubData(user=user, repos=repos, events=events)
