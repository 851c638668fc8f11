"""Document-wide configuration and the options that build it."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Callable, Protocol

from oaspec.reflector_options import ReflectorConfig, ReflectorOption
from oaspec.server import Server, ServerOption
from oaspec.util import optional

DEFAULT_OPENAPI_VERSION = "3.0.3"
DEFAULT_TITLE = "API Documentation"
DEFAULT_DOCS_PATH = "/docs"
DEFAULT_SPEC_PATH = "/docs/openapi.yaml"


class PathParser(Protocol):
    """Converts framework-style paths to OpenAPI path syntax."""

    def parse(self, path: str) -> str:
        """Return ``path`` in OpenAPI syntax."""


def _silent_logger() -> logging.Logger:
    logger = logging.Logger("oaspec.silent")
    logger.addHandler(logging.NullHandler())
    logger.propagate = False
    logger.disabled = True
    return logger


@dataclass
class ExternalDocs:
    """A link to documentation outside the document."""

    url: str
    description: str = ""


@dataclass
class Contact:
    """Contact information for the API."""

    name: str = ""
    url: str = ""
    email: str = ""


@dataclass
class License:
    """Licence information for the API."""

    name: str = ""
    url: str = ""


@dataclass
class Tag:
    """A tag with its description and optional external documentation."""

    name: str
    description: str = ""
    external_docs: ExternalDocs | None = None


@dataclass
class Config:
    """Everything that describes the document as a whole."""

    openapi_version: str = DEFAULT_OPENAPI_VERSION
    title: str = DEFAULT_TITLE
    version: str = ""
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None
    external_docs: ExternalDocs | None = None
    servers: list[Server] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    security_schemes: dict[str, object] | None = None
    reflector_config: ReflectorConfig | None = None
    disable_docs: bool = False
    docs_path: str = DEFAULT_DOCS_PATH
    spec_path: str = DEFAULT_SPEC_PATH
    cache_age: int | None = None
    logger: logging.Logger = field(default_factory=_silent_logger)
    path_parser: PathParser | None = None


OpenAPIOption = Callable[[Config], None]


def with_openapi_config(*args: OpenAPIOption) -> Config:
    """Return a default configuration with the given options applied."""
    cfg = Config()
    for option in args:
        option(cfg)
    return cfg


def with_openapi_version(version: str) -> OpenAPIOption:
    """Set the OpenAPI version of the document (default ``3.0.3``)."""

    def apply(cfg: Config) -> None:
        cfg.openapi_version = version

    return apply


def with_title(title: str) -> OpenAPIOption:
    """Set the title of the document."""

    def apply(cfg: Config) -> None:
        cfg.title = title

    return apply


def with_version(version: str) -> OpenAPIOption:
    """Set the version of the API."""

    def apply(cfg: Config) -> None:
        cfg.version = version

    return apply


def with_description(description: str) -> OpenAPIOption:
    """Set the description of the API."""

    def apply(cfg: Config) -> None:
        cfg.description = description

    return apply


def with_contact(contact: Contact) -> OpenAPIOption:
    """Set the contact information."""

    def apply(cfg: Config) -> None:
        cfg.contact = dataclasses.replace(contact)

    return apply


def with_license(license: License) -> OpenAPIOption:  # noqa: A002
    """Set the licence information."""

    def apply(cfg: Config) -> None:
        cfg.license = dataclasses.replace(license)

    return apply


def with_terms_of_service(terms: str) -> OpenAPIOption:
    """Set the terms of service URL."""

    def apply(cfg: Config) -> None:
        cfg.terms_of_service = terms

    return apply


def with_tags(*args: Tag) -> OpenAPIOption:
    """Add tags to the document."""

    def apply(cfg: Config) -> None:
        cfg.tags.extend(args)

    return apply


def with_server(url: str, *args: ServerOption) -> OpenAPIOption:
    """Add a server, shaped by the given server options."""

    def apply(cfg: Config) -> None:
        server = Server(url=url)
        for option in args:
            option(server)
        cfg.servers.append(server)

    return apply


def with_external_docs(url: str, *args: str) -> OpenAPIOption:
    """Set the external documentation, with an optional description."""

    def apply(cfg: Config) -> None:
        cfg.external_docs = ExternalDocs(url=url, description=args[0] if args else "")

    return apply


def with_reflector_config(*args: ReflectorOption) -> OpenAPIOption:
    """Apply options to the schema reflector configuration."""

    def apply(cfg: Config) -> None:
        if cfg.reflector_config is None:
            cfg.reflector_config = ReflectorConfig()
        for option in args:
            option(cfg.reflector_config)

    return apply


def with_disable_docs(*args: bool) -> OpenAPIOption:
    """Disable serving the documentation (true when no value is given)."""
    value = optional(True, *args)

    def apply(cfg: Config) -> None:
        cfg.disable_docs = value

    return apply


def with_docs_path(path: str) -> OpenAPIOption:
    """Set the path the documentation is served at."""

    def apply(cfg: Config) -> None:
        cfg.docs_path = path

    return apply


def with_spec_path(path: str) -> OpenAPIOption:
    """Set the path the specification is served at."""

    def apply(cfg: Config) -> None:
        cfg.spec_path = path

    return apply


def with_cache_age(cache_age: int) -> OpenAPIOption:
    """Set the cache age of specification responses."""

    def apply(cfg: Config) -> None:
        cfg.cache_age = cache_age

    return apply


def with_debug(*args: bool) -> OpenAPIOption:
    """Enable debug logging (true when no value is given) or silence it."""
    enabled = optional(True, *args)

    def apply(cfg: Config) -> None:
        cfg.logger = logging.getLogger("oaspec") if enabled else _silent_logger()

    return apply


def with_path_parser(parser: PathParser) -> OpenAPIOption:
    """Set the parser that turns framework paths into OpenAPI paths."""

    def apply(cfg: Config) -> None:
        cfg.path_parser = parser

    return apply