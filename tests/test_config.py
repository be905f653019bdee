"""Tests for request option parsing."""

import pytest

from trophy_badge.config import (
    DEFAULT_COLUMNS,
    MAX_COLUMNS,
    BadgeOptions,
    InvalidRequest,
    Theme,
    is_truthy,
    parse_options,
)


def test_defaults():
    options = parse_options({})
    assert options == BadgeOptions(theme=Theme.UPLINK, columns=DEFAULT_COLUMNS, hide=frozenset())


@pytest.mark.parametrize(
    "raw, expected",
    [("4", 4), ("1", 1), ("0", DEFAULT_COLUMNS), ("-2", DEFAULT_COLUMNS), ("abc", DEFAULT_COLUMNS), ("99", MAX_COLUMNS)],
)
def test_columns(raw, expected):
    assert parse_options({"columns": raw}).columns == expected


def test_theme_is_case_insensitive():
    assert parse_options({"theme": "DARK"}).theme is Theme.DARK


def test_unknown_theme_rejected():
    with pytest.raises(InvalidRequest, match="neon"):
        parse_options({"theme": "neon"})


def test_hide_is_normalised():
    options = parse_options({"hide": " Stars, ,repos ,Account Age"})
    assert options.hide == frozenset({"stars", "repos", "account age"})


def test_unknown_hide_title_rejected():
    with pytest.raises(InvalidRequest, match="lines of code"):
        parse_options({"hide": "stars,lines of code"})


def test_cache_key_covers_all_options():
    base = BadgeOptions()
    assert base.cache_key("OctoCat") == base.cache_key("octocat")
    assert base.cache_key("octocat") != BadgeOptions(theme=Theme.LIGHT).cache_key("octocat")
    assert base.cache_key("octocat") != BadgeOptions(columns=2).cache_key("octocat")
    assert base.cache_key("octocat") != BadgeOptions(hide=frozenset({"stars"})).cache_key("octocat")


def test_cache_key_ignores_hide_order():
    a = parse_options({"hide": "stars,repos"})
    b = parse_options({"hide": "Repos,Stars"})
    assert a.cache_key("octocat") == b.cache_key("octocat")


@pytest.mark.parametrize("raw", ["true", "1", "YES", " on "])
def test_truthy(raw):
    assert is_truthy(raw)


@pytest.mark.parametrize("raw", [None, "", "false", "0", "nope"])
def test_not_truthy(raw):
    assert not is_truthy(raw)
