"""Small helpers for optional arguments and URL path joining."""

from __future__ import annotations

from typing import TypeVar

T = TypeVar("T")


def optional(default: T, *args: T) -> T:
    """Return the first of ``args`` or ``default`` when none are given."""
    return args[0] if args else default


def _clean(path: str) -> str:
    """Return the shortest path equivalent to ``path`` by lexical processing."""
    if not path:
        return "."
    rooted = path.startswith("/")
    parts: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if parts and parts[-1] != "..":
                parts.pop()
            elif not rooted:
                parts.append("..")
            continue
        parts.append(segment)
    cleaned = "/".join(parts)
    if rooted:
        cleaned = "/" + cleaned
    return cleaned or "."


def join_path(*args: str) -> str:
    """Join path segments, keeping a trailing slash of the last segment."""
    if not args:
        return ""
    joined = "/".join(segment for segment in args if segment)
    if not joined:
        return ""
    result = _clean(joined)
    if args[-1].endswith("/"):
        return result + "/"
    return result


def join_url(base: str, *args: str) -> str:
    """Join a base URL with path segments, normalising the slashes between them."""
    base = base.rstrip("/")
    if not args:
        return base
    return base + "/" + join_path(*args).lstrip("/")