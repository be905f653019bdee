"""
Tests for the Flask badge endpoint.

The GitHub fetcher is replaced by a MagicMock so these exercise the request
state machine: validation, cache lookup, fetch, render, store.
"""

import json
from unittest.mock import MagicMock

import pytest

from app import create_app
from trophy_badge.cache import TTLCache
from trophy_badge.github import GitHubAPIError, GitHubData, GitHubNotFoundError


@pytest.fixture
def fetcher(github_data):
    return MagicMock(return_value=github_data)


@pytest.fixture
def cache(clock):
    return TTLCache(60, clock=clock)


@pytest.fixture
def client(cache, fetcher):
    return create_app(cache=cache, fetcher=fetcher).test_client()


def test_renders_svg(client, fetcher):
    resp = client.get("/api/trophy?username=octocat")

    assert resp.status_code == 200
    assert resp.mimetype == "image/svg+xml"
    assert resp.headers["Cache-Control"] == "public, max-age=60"
    body = resp.get_data(as_text=True)
    assert "Engagement Score" in body
    assert "GitHub Trophy — octocat" in body
    fetcher.assert_called_once_with("octocat")


@pytest.mark.parametrize("query", ["", "?username=", "?username=%20%20"])
def test_missing_username_is_400_without_fetch(client, fetcher, cache, query):
    resp = client.get(f"/api/trophy{query}")

    assert resp.status_code == 400
    assert "username" in resp.get_json()["error"]
    fetcher.assert_not_called()
    assert len(cache) == 0


def test_invalid_theme_is_400(client, fetcher):
    resp = client.get("/api/trophy?username=octocat&theme=neon")

    assert resp.status_code == 400
    fetcher.assert_not_called()


def test_second_request_within_ttl_is_cached(client, fetcher, clock):
    first = client.get("/api/trophy?username=octocat")
    clock.advance(30)
    second = client.get("/api/trophy?username=octocat")

    assert first.get_data() == second.get_data()
    assert fetcher.call_count == 1


def test_request_after_ttl_refetches_once(client, fetcher, clock):
    client.get("/api/trophy?username=octocat")
    clock.advance(61)
    client.get("/api/trophy?username=octocat")
    client.get("/api/trophy?username=octocat")

    assert fetcher.call_count == 2


def test_rendering_options_get_their_own_cache_entry(client, fetcher, cache):
    client.get("/api/trophy?username=octocat")
    resp = client.get("/api/trophy?username=octocat&hide=stars&theme=dark")

    assert fetcher.call_count == 2
    assert len(cache) == 2
    assert "⭐ Stars" not in resp.get_data(as_text=True)


def test_hide_removes_trophies(client):
    body = client.get("/api/trophy?username=octocat&hide=Popular%20Repo,open%20source%20hero").get_data(
        as_text=True
    )

    assert "Popular Repo" not in body
    assert "Open Source Hero" not in body
    assert "Followers" in body


def test_not_found_is_404_and_not_cached(client, fetcher, cache):
    fetcher.side_effect = GitHubNotFoundError("Not Found")

    resp = client.get("/api/trophy?username=Not%20Found")

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "User 'Not Found' not found."
    assert len(cache) == 0


def test_upstream_failure_is_500(client, fetcher, cache):
    fetcher.side_effect = GitHubAPIError("GitHub request failed: timed out")

    resp = client.get("/api/trophy?username=octocat")

    assert resp.status_code == 500
    assert "timed out" in resp.get_json()["error"]
    assert len(cache) == 0


def test_unexpected_failure_is_500(client, fetcher):
    fetcher.side_effect = RuntimeError("kaboom")

    resp = client.get("/api/trophy?username=octocat")

    assert resp.status_code == 500
    assert "kaboom" in resp.get_json()["error"]


def test_failure_is_not_cached_and_next_request_retries(client, fetcher, github_data):
    fetcher.side_effect = [GitHubAPIError("boom"), github_data]

    assert client.get("/api/trophy?username=octocat").status_code == 500
    assert client.get("/api/trophy?username=octocat").status_code == 200
    assert fetcher.call_count == 2


def test_debug_bypasses_cache(client, fetcher, cache, github_data):
    client.get("/api/trophy?username=octocat")

    resp = client.get("/api/trophy?username=octocat&debug=true")

    assert resp.status_code == 200
    assert resp.mimetype == "application/json"
    assert json.loads(resp.get_data(as_text=True)) == github_data.as_dict()
    assert "\n  " in resp.get_data(as_text=True)
    assert fetcher.call_count == 2
    assert len(cache) == 1


def test_debug_never_writes_cache(client, cache):
    client.get("/api/trophy?username=octocat&debug=1")
    assert len(cache) == 0


def test_degraded_data_still_renders(client, fetcher, user_payload):
    fetcher.return_value = GitHubData(user=user_payload, repos={"message": "oops"}, events=None)

    resp = client.get("/api/trophy?username=octocat")

    assert resp.status_code == 200
    assert "Low (0)" in resp.get_data(as_text=True)


def test_healthz(client, cache):
    client.get("/api/trophy?username=octocat")

    data = client.get("/healthz").get_json()

    assert data == {"ok": True, "cache_ttl_seconds": 60, "cache_entries": 1}
    assert len(cache) == data["cache_entries"]


def test_home(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "/api/trophy?username=" in resp.get_data(as_text=True)
