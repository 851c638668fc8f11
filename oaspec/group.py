"""Configuration shared by a group of routes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

from oaspec.operation import OperationSecurityConfig
from oaspec.util import optional


@dataclass
class GroupConfig:
    """Settings applied to every route of a group."""

    tags: list[str] = field(default_factory=list)
    security: list[OperationSecurityConfig] = field(default_factory=list)
    deprecated: bool = False
    hide: bool = False


GroupOption = Callable[[GroupConfig], None]


def group_tags(*args: str) -> GroupOption:
    """Add tags to all routes of the group."""

    def apply(cfg: GroupConfig) -> None:
        cfg.tags.extend(args)

    return apply


def group_security(name: str, *args: str) -> GroupOption:
    """Add a security requirement to all routes of the group."""

    def apply(cfg: GroupConfig) -> None:
        cfg.security.append(OperationSecurityConfig(name=name, scopes=list(args)))

    return apply


def group_hidden(*args: bool) -> GroupOption:
    """Hide the group and its routes (true when no value is given)."""
    value = optional(True, *args)

    def apply(cfg: GroupConfig) -> None:
        cfg.hide = value

    return apply


def group_deprecated(*args: bool) -> GroupOption:
    """Mark all routes of the group as deprecated (true when no value is given)."""
    value = optional(True, *args)

    def apply(cfg: GroupConfig) -> None:
        cfg.deprecated = value

    return apply