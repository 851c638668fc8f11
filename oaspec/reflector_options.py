"""Schema reflector configuration and the options that shape it."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping


class ParameterIn(str, enum.Enum):
    """Where an operation parameter is located."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    COOKIE = "cookie"


@dataclass
class TypeMapping:
    """Describe values like ``src`` with the schema of ``dst``."""

    src: Any
    dst: Any


@dataclass
class InterceptPropParams:
    """What a property interceptor is told about one property."""

    name: str
    tags: Mapping[str, str] = field(default_factory=dict)
    parent_required: list[str] = field(default_factory=list)
    processed: bool = False


InterceptDefNameFunc = Callable[[Any, str], str]
InterceptPropFunc = Callable[[InterceptPropParams], None]
InterceptSchemaFunc = Callable[[Any], bool]


@dataclass
class ReflectorConfig:
    """Settings for schema generation."""

    inline_refs: bool = False
    root_ref: bool = False
    root_nullable: bool = False
    strip_def_name_prefix: list[str] = field(default_factory=list)
    intercept_def_name_func: InterceptDefNameFunc | None = None
    intercept_prop_func: InterceptPropFunc | None = None
    intercept_schema_func: InterceptSchemaFunc | None = None
    type_mappings: list[TypeMapping] = field(default_factory=list)
    parameter_tag_mapping: dict[ParameterIn, str] | None = None


ReflectorOption = Callable[[ReflectorConfig], None]


def inline_refs() -> ReflectorOption:
    """Inline references instead of defining them among the components."""

    def apply(cfg: ReflectorConfig) -> None:
        cfg.inline_refs = True

    return apply


def root_ref() -> ReflectorOption:
    """Use a shared reference for the root schema."""

    def apply(cfg: ReflectorConfig) -> None:
        cfg.root_ref = True

    return apply


def root_nullable() -> ReflectorOption:
    """Allow root schemas to be nullable."""

    def apply(cfg: ReflectorConfig) -> None:
        cfg.root_nullable = True

    return apply


def strip_def_name_prefix(*args: str) -> ReflectorOption:
    """Strip the given prefixes from schema definition names."""

    def apply(cfg: ReflectorConfig) -> None:
        cfg.strip_def_name_prefix.extend(args)

    return apply


def intercept_def_name_func(fn: InterceptDefNameFunc) -> ReflectorOption:
    """Set a function that chooses schema definition names."""

    def apply(cfg: ReflectorConfig) -> None:
        cfg.intercept_def_name_func = fn

    return apply


def intercept_prop_func(fn: InterceptPropFunc) -> ReflectorOption:
    """Set a function called for every reflected property."""

    def apply(cfg: ReflectorConfig) -> None:
        cfg.intercept_prop_func = fn

    return apply


def required_prop_by_validate_tag(*args: str) -> ReflectorOption:
    """Mark properties required whose validation tag holds ``required``.

    The first argument names the tag (default ``validate``), the second the
    separator of its parts (default ``,``).
    """
    tag_name = args[0] if args else "validate"
    separator = args[1] if len(args) > 1 else ","

    def intercept(params: InterceptPropParams) -> None:
        if not params.processed:
            return
        value = params.tags.get(tag_name)
        if value is None:
            return
        if any(part.strip() == "required" for part in value.split(separator)):
            params.parent_required.append(params.name)

    return intercept_prop_func(intercept)


def intercept_schema_func(fn: InterceptSchemaFunc) -> ReflectorOption:
    """Set a function that may alter schemas as they are generated."""

    def apply(cfg: ReflectorConfig) -> None:
        cfg.intercept_schema_func = fn

    return apply


def type_mapping(src: Any, dst: Any) -> ReflectorOption:
    """Describe values like ``src`` with the schema of ``dst``."""

    def apply(cfg: ReflectorConfig) -> None:
        cfg.type_mappings.append(TypeMapping(src=src, dst=dst))

    return apply


def parameter_tag_mapping(param_in: ParameterIn, tag_name: str) -> ReflectorOption:
    """Read parameters of the given location from a custom field tag."""

    def apply(cfg: ReflectorConfig) -> None:
        if cfg.parameter_tag_mapping is None:
            cfg.parameter_tag_mapping = {}
        cfg.parameter_tag_mapping[param_in] = tag_name

    return apply