import pytest

from oaspec.util import join_path, join_url, optional


def test_optional_returns_default_without_values():
    assert optional("default") == "default"


def test_optional_returns_first_value():
    assert optional("default", "provided") == "provided"


def test_optional_returns_first_of_many():
    assert optional("default", "first", "second", "third") == "first"


def test_optional_returns_default_for_empty_sequence():
    values: list[str] = []
    assert optional("default", *values) == "default"


@pytest.mark.parametrize(
    ("base", "segments", "expected"),
    [
        ("https://example.com", ["api", "v1", "users"], "https://example.com/api/v1/users"),
        ("https://example.com/", ["api", "v1", "users"], "https://example.com/api/v1/users"),
        ("https://example.com///", ["api", "v1", "users"], "https://example.com/api/v1/users"),
        ("https://example.com", [], "https://example.com"),
        ("https://example.com", ["api"], "https://example.com/api"),
        ("https://example.com", ["api/v1", "users"], "https://example.com/api/v1/users"),
        ("https://example.com", ["/api/v1", "/users"], "https://example.com/api/v1/users"),
        ("", ["api", "v1"], "/api/v1"),
        ("", [], ""),
        ("///", ["api", "v1"], "/api/v1"),
        ("", ["api", "v1", "/"], "/api/v1/"),
        ("", ["api", "v1", "///"], "/api/v1/"),
        ("", ["api", "v1/"], "/api/v1/"),
        ("", ["api", "v1///"], "/api/v1/"),
    ],
)
def test_join_url(base, segments, expected):
    assert join_url(base, *segments) == expected


def test_join_path_empty_input():
    assert join_path() == ""


def test_join_path_all_empty_segments():
    assert join_path("", "") == ""


def test_join_path_keeps_trailing_slash():
    assert join_path("/api", "v1/") == "/api/v1/"


def test_join_path_collapses_slashes():
    assert join_path("/api/", "/v1") == "/api/v1"