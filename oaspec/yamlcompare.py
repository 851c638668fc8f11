"""Semantic comparison of YAML documents."""

from __future__ import annotations

import difflib
from typing import Any

import yaml


def yaml_to_object(data: bytes | str) -> Any:
    """Parse the first YAML document in ``data`` into plain Python objects."""
    try:
        return next(iter(yaml.safe_load_all(data)), None)
    except yaml.YAMLError as exc:
        raise ValueError(f"invalid YAML: {exc}") from exc


def _same(a: Any, b: Any) -> bool:
    if type(a) is not type(b):
        return False
    if isinstance(a, dict):
        return a.keys() == b.keys() and all(_same(a[k], b[k]) for k in a)
    if isinstance(a, list):
        return len(a) == len(b) and all(_same(x, y) for x, y in zip(a, b))
    return a == b


def _dump(obj: Any) -> list[str]:
    return yaml.safe_dump(obj, sort_keys=True, default_flow_style=False).splitlines()


def yaml_diff(want: bytes | str, got: bytes | str) -> str:
    """Return a diff (-want +got) of two YAML documents, empty if they are equal."""
    want_obj = yaml_to_object(want)
    got_obj = yaml_to_object(got)
    if _same(want_obj, got_obj):
        return ""
    diff = "\n".join(
        difflib.unified_diff(_dump(want_obj), _dump(got_obj), "want", "got", lineterm="")
    )
    return diff or f"-{want_obj!r}\n+{got_obj!r}"


def assert_equal_yaml(want: bytes | str, got: bytes | str) -> None:
    """Raise AssertionError if two YAML documents are not semantically equal."""
    diff = yaml_diff(want, got)
    if diff:
        raise AssertionError(f"YAML mismatch (-want +got):\n{diff}")