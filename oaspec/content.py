"""Request and response content units and the options that shape them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from oaspec.util import optional


@dataclass
class ContentUnit:
    """One request or response body description."""

    http_status: int = 0
    structure: Any = None
    content_type: str = ""
    description: str = ""
    is_default: bool = False
    encoding: dict[str, str] | None = None


ContentOption = Callable[[ContentUnit], None]


def content_type(value: str) -> ContentOption:
    """Set the media type of the content."""

    def apply(unit: ContentUnit) -> None:
        unit.content_type = value

    return apply


def content_description(description: str) -> ContentOption:
    """Set the description of the content."""

    def apply(unit: ContentUnit) -> None:
        unit.description = description

    return apply


def content_default(*args: bool) -> ContentOption:
    """Mark the content as the default response (true when no value is given)."""
    value = optional(True, *args)

    def apply(unit: ContentUnit) -> None:
        unit.is_default = value

    return apply


def content_encoding(prop: str, enc: str) -> ContentOption:
    """Set the encoding of one property of the content."""

    def apply(unit: ContentUnit) -> None:
        if unit.encoding is None:
            unit.encoding = {}
        unit.encoding[prop] = enc

    return apply