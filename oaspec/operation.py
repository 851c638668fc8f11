"""Operation configuration and the options that build it."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from oaspec.content import ContentOption, ContentUnit
from oaspec.util import optional


@dataclass
class OperationSecurityConfig:
    """A security requirement: a scheme name and its scopes."""

    name: str
    scopes: list[str] = field(default_factory=list)


@dataclass
class OperationConfig:
    """Everything known about one operation."""

    hide: bool = False
    operation_id: str = ""
    description: str = ""
    summary: str = ""
    deprecated: bool = False
    tags: list[str] = field(default_factory=list)
    security: list[OperationSecurityConfig] = field(default_factory=list)
    requests: list[ContentUnit] = field(default_factory=list)
    responses: list[ContentUnit] = field(default_factory=list)


OperationOption = Callable[[OperationConfig], None]


def hidden(*args: bool) -> OperationOption:
    """Hide the operation from the generated document (true when no value is given)."""
    value = optional(True, *args)

    def apply(cfg: OperationConfig) -> None:
        cfg.hide = value

    return apply


def operation_id(value: str) -> OperationOption:
    """Set the unique operation ID."""

    def apply(cfg: OperationConfig) -> None:
        cfg.operation_id = value

    return apply


def description(text: str) -> OperationOption:
    """Set the detailed description."""

    def apply(cfg: OperationConfig) -> None:
        cfg.description = text

    return apply


def summary(text: str) -> OperationOption:
    """Set the summary; it also becomes the description if none is set."""

    def apply(cfg: OperationConfig) -> None:
        cfg.summary = text
        if not cfg.description:
            cfg.description = text

    return apply


def deprecated(*args: bool) -> OperationOption:
    """Mark the operation as deprecated (true when no value is given)."""
    value = optional(True, *args)

    def apply(cfg: OperationConfig) -> None:
        cfg.deprecated = value

    return apply


def tags(*args: str) -> OperationOption:
    """Add tags to the operation."""

    def apply(cfg: OperationConfig) -> None:
        cfg.tags.extend(args)

    return apply


def security(name: str, *args: str) -> OperationOption:
    """Add a security requirement with optional scopes."""

    def apply(cfg: OperationConfig) -> None:
        cfg.security.append(OperationSecurityConfig(name=name, scopes=list(args)))

    return apply


def request(structure: Any, *args: ContentOption) -> OperationOption:
    """Add a request body or parameter structure."""

    def apply(cfg: OperationConfig) -> None:
        unit = ContentUnit(structure=structure)
        for option in args:
            option(unit)
        cfg.requests.append(unit)

    return apply


def response(http_status: int, structure: Any, *args: ContentOption) -> OperationOption:
    """Add a response for the given HTTP status."""

    def apply(cfg: OperationConfig) -> None:
        unit = ContentUnit(http_status=http_status, structure=structure)
        for option in args:
            option(unit)
        cfg.responses.append(unit)

    return apply