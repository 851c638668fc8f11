"""Build OpenAPI 3.0 and 3.1 documents from operation options and dataclasses."""

__version__ = "0.1.0"