"""Conversion of framework-style paths to OpenAPI path syntax."""

from __future__ import annotations

import re

_COLON_PARAM = re.compile(r":([a-zA-Z_][a-zA-Z0-9_]*)")


class ColonParamParser:
    """Converts colon-prefixed parameters (``/users/:id``) to ``/users/{id}``."""

    def parse(self, path: str) -> str:
        """Return ``path`` with every ``:name`` replaced by ``{name}``."""
        return _COLON_PARAM.sub(r"{\1}", path)