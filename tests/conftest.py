"""Shared fixtures: canned GitHub payloads and a controllable clock."""

from __future__ import annotations

import datetime as dt

import pytest

from trophy_badge.github import GitHubData

FIXED_NOW = dt.datetime(2026, 6, 1, 12, 0, 0, tzinfo=dt.timezone.utc)


class FakeClock:
    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def user_payload():
    return {
        "login": "octocat",
        "type": "User",
        "followers": 120,
        "public_repos": 8,
        "public_gists": 3,
        "created_at": "2011-01-25T18:44:36Z",
    }


@pytest.fixture
def repos_payload():
    return [
        {"name": "hello-world", "stargazers_count": 40, "fork": False},
        {"name": "spoon-knife", "stargazers_count": 25, "fork": True},
        {"name": "linguist", "stargazers_count": 40, "fork": False},
        {"name": "empty", "stargazers_count": 0, "fork": False},
    ]


@pytest.fixture
def events_payload():
    return (
        [{"type": "PushEvent"}] * 12
        + [{"type": "PullRequestEvent"}] * 4
        + [{"type": "WatchEvent"}] * 5
        + [{"type": "IssuesEvent"}]
    )


@pytest.fixture
def github_data(user_payload, repos_payload, events_payload):
    return GitHubData(user=user_payload, repos=repos_payload, events=events_payload)
