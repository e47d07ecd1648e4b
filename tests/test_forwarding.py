"""Tests for the route forwarding table."""

import pytest

from ohwan_link.web.forwarding import (
    DEFAULT_FORWARDING_TABLE,
    ForwardingRule,
    build_forwarding_table,
    match_forward,
)


def _rule_name(path):
    rule = match_forward(path, DEFAULT_FORWARDING_TABLE)
    return rule.name if rule else None


def test_default_table_order():
    assert [rule.name for rule in DEFAULT_FORWARDING_TABLE] == ["root", "single-segment", "deep-link"]
    assert all(rule.target == "index.html" for rule in DEFAULT_FORWARDING_TABLE)


def test_build_forwarding_table_custom_target():
    table = build_forwarding_table("app.html")
    assert {rule.target for rule in table} == {"app.html"}


@pytest.mark.parametrize("path", ["/timeline", "/groups", "/daily-reports", "/chat_detail", "/A1"])
def test_single_segment_paths(path):
    assert _rule_name(path) == "single-segment"


def test_root_path():
    assert _rule_name("/") == "root"


@pytest.mark.parametrize("path", ["/foo/bar", "/foo/bar/baz", "/groups/12/members", "/apix/detail", "/a.b/c"])
def test_deep_link_paths(path):
    assert _rule_name(path) == "deep-link"


@pytest.mark.parametrize("path", ["/api/anything", "/api/users/1", "/api/v1/groups/list"])
def test_api_paths_never_deep_linked(path):
    assert _rule_name(path) is None


def test_bare_api_is_a_single_segment():
    assert _rule_name("/api") == "single-segment"


@pytest.mark.parametrize(
    "path",
    [
        "/file.png",
        "/assets/logo.png",
        "/foo/",
        "/foo//bar",
        "//foo",
        "",
        "/café",
        "/groups/café",
    ],
)
def test_unmatched_paths(path):
    assert _rule_name(path) is None


def test_first_match_wins():
    first = ForwardingRule("first", r"/[\w-]+", "first.html")
    second = ForwardingRule("second", r"/.*", "second.html")
    assert match_forward("/about", (first, second)) is first
    assert match_forward("/a/b", (first, second)) is second


def test_rules_are_immutable():
    rule = DEFAULT_FORWARDING_TABLE[0]
    with pytest.raises(AttributeError):
        rule.target = "other.html"
