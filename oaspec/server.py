"""Server entries of the document and the options that shape them."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable


@dataclass
class ServerVariable:
    """A substitution variable of a server URL template."""

    default: str
    enum: list[str] = field(default_factory=list)
    description: str = ""


@dataclass
class Server:
    """A server the API is reachable at."""

    url: str
    description: str | None = None
    variables: dict[str, ServerVariable] | None = None


ServerOption = Callable[[Server], None]


def server_description(description: str) -> ServerOption:
    """Set the description of the server."""

    def apply(server: Server) -> None:
        server.description = description

    return apply


def server_variables(variables: dict[str, ServerVariable]) -> ServerOption:
    """Set the URL template variables of the server."""

    def apply(server: Server) -> None:
        server.variables = variables

    return apply