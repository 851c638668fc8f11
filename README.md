# oaspec

Describe the operations of an HTTP API in code and get an OpenAPI 3.0 or 3.1
document out of it, as YAML or JSON.

Every operation is registered with small option functions that fill in its id,
summary, description, tags, security, request and responses. Request and
response bodies are described with dataclasses; field metadata says where a
value lives (path, query, header, cookie, form data or JSON body) and adds
details such as `required`, `enum`, `format`, `description` and `example`.

## Installation

```
pip install oaspec
```

For running the test suite:

```
pip install "oaspec[test]"
pytest
```

## Quick start

```python
from __future__ import annotations

from dataclasses import dataclass, field

from oaspec.config import (
    with_openapi_config,
    with_openapi_version,
    with_title,
    with_version,
)
from oaspec.operation import operation_id, request, response, summary
from oaspec.reflector import new_reflector


@dataclass
class Pet:
    id: int = field(metadata={"json": "id"})
    name: str = field(metadata={"json": "name", "required": "true"})


@dataclass
class GetPet:
    pet_id: int = field(metadata={"path": "petId"})


cfg = with_openapi_config(
    with_openapi_version("3.1.0"),
    with_title("Pet API"),
    with_version("1.0.0"),
)
reflector = new_reflector(cfg)
reflector.add(
    "GET",
    "/pets/{petId}",
    operation_id("getPet"),
    summary("Get a pet"),
    request(GetPet),
    response(200, Pet),
)
reflector.validate()
print(reflector.marshal_yaml().decode())
```

## Building a document

`new_reflector(cfg)` in `oaspec.reflector` looks at `cfg.openapi_version`:

- a `3.0.x` version gives an `OpenAPIReflector` that writes an OpenAPI 3.0
  document;
- a `3.1.x` version gives one that writes OpenAPI 3.1 (nullable values become
  `type: [..., "null"]` or `anyOf` instead of `nullable: true`);
- any other version gives an `InvalidReflector`, whose `validate()` raises a
  `SpecError` naming the unsupported version and whose output is empty.

`OpenAPIReflector.add(method, path, *options)` registers one operation. It
never raises; problems are collected in a `SpecError` and raised together by
`validate()`. Recorded problems include a path the configured path parser
rejects, an unknown HTTP method, the same method registered twice on a path,
and path placeholders that do not match the request's path parameters.
Operations marked with `hidden()` are left out of the document. An operation
with no responses gets a `204` response.

`marshal_yaml()` returns the document as YAML bytes, `marshal_json()` as
compact JSON bytes, and `document()` as plain Python objects. Dataclass schemas
go into `components/schemas` and are referenced with `$ref`, unless the
reflector configuration asks for inlining. Several responses with the same
status and media type are combined with `oneOf`.

## Configuration

`with_openapi_config(*options)` in `oaspec.config` returns a `Config` with
defaults (OpenAPI `"3.0.3"`, title `"API Documentation"`) and the options
applied:

- `with_openapi_version`, `with_title`, `with_version`, `with_description`,
  `with_terms_of_service`
- `with_contact(Contact(...))`, `with_license(License(...))`
- `with_tags(Tag(...), ...)`, `with_external_docs(url, description)`
- `with_server(url, server_description(...), server_variables({...}))`, with
  the server options and `ServerVariable` from `oaspec.server`
- `with_reflector_config(...)` with options from `oaspec.reflector_options`
- `with_path_parser(parser)`, for example `ColonParamParser()` from
  `oaspec.parser`, which turns `/users/:id` into `/users/{id}`
- `with_debug()`, which logs what the reflector does to the `oaspec` logger
- `with_docs_path`, `with_spec_path`, `with_cache_age`, `with_disable_docs`,
  which only record values on the `Config`

Security schemes are read from `Config.security_schemes`, a mapping of names to
plain dicts, dataclasses, or objects with a `to_openapi()` method.

### Reflector options

From `oaspec.reflector_options`:

- `type_mapping(src, dst)` describes values of type `src` with the schema of
  `dst`
- `parameter_tag_mapping(ParameterIn.PATH, "param")` reads parameters of a
  location from a different metadata key
- `inline_refs()` inlines dataclass schemas instead of referencing them
- `strip_def_name_prefix(...)` and `intercept_def_name_func(fn)` shape schema
  names
- `intercept_prop_func(fn)` is called with an `InterceptPropParams` for every
  JSON property; `required_prop_by_validate_tag()` uses it to mark properties
  required whose `validate` metadata contains `required`
- `intercept_schema_func(fn)` is called with every dataclass schema
- `root_ref()` and `root_nullable()` set flags on `ReflectorConfig`

### Operation and content options

`oaspec.operation` has `operation_id`, `summary` (which also sets the
description when none is set), `description`, `tags`, `security`,
`deprecated`, `hidden`, `request` and `response`. `oaspec.content` has
`content_type`, `content_description`, `content_default` (uses the `default`
response key) and `content_encoding`.

## Helpers

- `oaspec.util`: `optional(default, *values)`, `join_path(*segments)` (keeps a
  trailing slash of the last segment) and `join_url(base, *segments)`.
- `oaspec.yamlcompare`: `yaml_to_object`, `yaml_diff` and `assert_equal_yaml`
  check that two YAML documents are semantically the same regardless of key
  order, which suits golden-file tests of generated documents.

## What this package does not do

- There is no router layer. Operations are added one by one on the reflector
  with full paths; nothing joins path prefixes for you. `oaspec.group` builds a
  `GroupConfig` (`group_tags`, `group_security`, `group_hidden`,
  `group_deprecated`), but nothing in the package applies it to operations.
- There is no helper that picks a format by name or writes the document to a
  file; use `marshal_yaml()` or `marshal_json()` and write the bytes yourself.
- It does not serve the document or a documentation UI, and has no command-line
  tool.