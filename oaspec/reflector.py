"""Building OpenAPI 3.0 and 3.1 documents from registered operations."""

from __future__ import annotations

import ast
import dataclasses
import datetime
import enum
import http
import json
import re
import typing
from typing import Any

import yaml

from oaspec.config import Config
from oaspec.content import ContentUnit
from oaspec.operation import OperationConfig, OperationOption
from oaspec.reflector_options import InterceptPropParams, ParameterIn, ReflectorConfig

_RE_30 = re.compile(r"^3\.0\.\d(-.+)?$")
_RE_31 = re.compile(r"^3\.1\.\d+(-.+)?$")
_PLACEHOLDER = re.compile(r"\{([^{}]+)\}")
_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
_JSON = "application/json"
_FORM = "application/x-www-form-urlencoded"

_NAMES: dict[str, Any] = {
    "int": int,
    "str": str,
    "float": float,
    "bool": bool,
    "bytes": bytes,
    "Any": Any,
    "None": type(None),
    "NoneType": type(None),
    "list": list,
    "tuple": tuple,
    "set": set,
    "frozenset": frozenset,
    "dict": dict,
    "datetime": datetime.datetime,
    "date": datetime.date,
}
_GENERICS: dict[str, Any] = {
    "list": list,
    "List": list,
    "tuple": tuple,
    "Tuple": tuple,
    "set": set,
    "Set": set,
    "frozenset": frozenset,
    "FrozenSet": frozenset,
    "dict": dict,
    "Dict": dict,
    "Sequence": list,
    "Mapping": dict,
}


class SpecError(Exception):
    """Collects the errors found while building a document."""

    def __init__(self) -> None:
        super().__init__()
        self.errors: list[Exception] = []

    def add(self, error: Exception) -> None:
        """Record one error."""
        self.errors.append(error)

    def has_errors(self) -> bool:
        """Return whether any error was recorded."""
        return bool(self.errors)

    def __str__(self) -> str:
        return "\n".join(str(error) for error in self.errors)


def new_reflector(cfg: Config) -> OpenAPIReflector | InvalidReflector:
    """Return a reflector for the configured OpenAPI version."""
    version = cfg.openapi_version
    if _RE_30.match(version):
        return OpenAPIReflector(cfg, v31=False)
    if _RE_31.match(version):
        return OpenAPIReflector(cfg, v31=True)
    cfg.logger.debug("spec: Unsupported OpenAPI version: %s", version)
    return InvalidReflector(ValueError(f"unsupported OpenAPI version: {version}"))


class InvalidReflector:
    """Stands in for a reflector whose configuration cannot be used."""

    def __init__(self, error: Exception) -> None:
        self.errors = SpecError()
        self.errors.add(error)
        self.skipped: list[tuple[str, str]] = []

    def add(self, method: str, path: str, *args: OperationOption) -> None:
        """Record the operation as skipped; it never reaches a document."""
        self.skipped.append((method.upper(), path))

    def validate(self) -> None:
        """Raise the recorded configuration error."""
        if self.errors.has_errors():
            raise self.errors

    def marshal_yaml(self) -> bytes:
        """Return an empty document."""
        return b""

    def marshal_json(self) -> bytes:
        """Return an empty document."""
        return b""


def _compact(mapping: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in mapping.items() if v not in (None, "", [], {})}


def _security_scheme(scheme: Any) -> dict[str, Any] | None:
    if scheme is None:
        return None
    if isinstance(scheme, dict):
        return dict(scheme)
    to_openapi = getattr(scheme, "to_openapi", None)
    if callable(to_openapi):
        return to_openapi()
    if dataclasses.is_dataclass(scheme):
        return _compact(dataclasses.asdict(scheme))
    return None


def _reason(status: int) -> str:
    try:
        return http.HTTPStatus(status).phrase
    except ValueError:
        return ""


def _split_top(text: str, sep: str) -> list[str]:
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in text:
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        if ch == sep and depth == 0:
            parts.append("".join(current).strip())
            current = []
        else:
            current.append(ch)
    parts.append("".join(current).strip())
    return parts


def _lookup(name: str, namespace: dict[str, Any]) -> Any:
    if name in namespace:
        return namespace[name]
    if name in _NAMES:
        return _NAMES[name]
    head, _, rest = name.partition(".")
    if rest and head in namespace:
        value = namespace[head]
        for attr in rest.split("."):
            value = getattr(value, attr, None)
            if value is None:
                return Any
        return value
    if name.startswith("datetime."):
        return _NAMES.get(name.split(".", 1)[1], Any)
    return _NAMES.get(name.rsplit(".", 1)[-1], Any)


def _resolve(annotation: Any, namespace: dict[str, Any]) -> Any:
    """Turn a string annotation into a type without running any code."""
    if not isinstance(annotation, str):
        return annotation
    text = annotation.strip()
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
        text = text[1:-1].strip()
    parts = _split_top(text, "|")
    if len(parts) > 1:
        return typing.Union[tuple(_resolve(p, namespace) for p in parts)]
    if text.endswith("]") and "[" in text:
        head, inner = text[:-1].split("[", 1)
        head = head.strip().rsplit(".", 1)[-1]
        items = _split_top(inner, ",")
        if head == "Literal":
            try:
                values = tuple(ast.literal_eval(item) for item in items)
            except (ValueError, SyntaxError):
                return Any
            return typing.Literal[values]
        args = tuple(_resolve(item, namespace) for item in items if item and item != "...")
        if head == "Optional" and args:
            return typing.Union[args[0], None]
        if head == "Union" and args:
            return typing.Union[args]
        base = _GENERICS.get(head)
        if base is None or not args:
            return Any
        return base[args]
    return _lookup(text, namespace)


class OpenAPIReflector:
    """Builds an OpenAPI document in version 3.0 or 3.1."""

    def __init__(self, cfg: Config, v31: bool) -> None:
        self.v31 = v31
        self.logger = cfg.logger
        self.errors = SpecError()
        self.path_parser = cfg.path_parser
        self.reflector_config: ReflectorConfig = cfg.reflector_config or ReflectorConfig()
        self.parameter_tag_mapping = dict(self.reflector_config.parameter_tag_mapping or {})
        self._mappings = {
            self._as_type(m.src): self._as_type(m.dst)
            for m in self.reflector_config.type_mappings
        }
        self._schemas: dict[str, Any] = {}
        self._paths: dict[str, dict[str, Any]] = {}
        self._log("Using OpenAPI %s reflector for version %s",
                  "3.1" if v31 else "3.0", cfg.openapi_version)
        self._spec = self._base_spec(cfg)

    def _log(self, message: str, *args: Any) -> None:
        self.logger.debug("spec: " + message, *args)

    def _base_spec(self, cfg: Config) -> dict[str, Any]:
        info: dict[str, Any] = {"title": cfg.title, "version": cfg.version}
        if cfg.description is not None:
            info["description"] = cfg.description
        if cfg.terms_of_service is not None:
            info["termsOfService"] = cfg.terms_of_service
        if cfg.contact is not None:
            info["contact"] = _compact(
                {"name": cfg.contact.name, "url": cfg.contact.url, "email": cfg.contact.email}
            )
        if cfg.license is not None:
            info["license"] = _compact({"name": cfg.license.name, "url": cfg.license.url})
        spec: dict[str, Any] = {
            "openapi": cfg.openapi_version,
            "info": info,
        }
        if cfg.external_docs is not None:
            spec["externalDocs"] = _compact(
                {"description": cfg.external_docs.description, "url": cfg.external_docs.url}
            )
        if cfg.servers:
            spec["servers"] = [self._server(s) for s in cfg.servers]
        if cfg.tags:
            spec["tags"] = [self._tag(t) for t in cfg.tags]
        if cfg.security_schemes:
            schemes = {}
            for name, scheme in cfg.security_schemes.items():
                mapped = _security_scheme(scheme)
                if mapped is not None:
                    schemes[name] = mapped
                    self._log("add security scheme %s", name)
            spec["components"] = {"securitySchemes": schemes}
        return spec

    @staticmethod
    def _server(server: Any) -> dict[str, Any]:
        out: dict[str, Any] = {"url": server.url}
        if server.description is not None:
            out["description"] = server.description
        if server.variables:
            out["variables"] = {
                name: _compact(
                    {"default": v.default, "enum": list(v.enum), "description": v.description}
                )
                for name, v in server.variables.items()
            }
        return out

    @staticmethod
    def _tag(tag: Any) -> dict[str, Any]:
        out = _compact({"name": tag.name, "description": tag.description})
        if tag.external_docs is not None:
            out["externalDocs"] = _compact(
                {"description": tag.external_docs.description, "url": tag.external_docs.url}
            )
        return out

    # ---- operations -------------------------------------------------------

    def add(self, method: str, path: str, *args: OperationOption) -> None:
        """Register an operation; problems are recorded for ``validate``."""
        if self.path_parser is not None:
            try:
                path = self.path_parser.parse(path)
            except Exception as exc:  # noqa: BLE001
                self.errors.add(ValueError(f"failed to parse path {path!r}: {exc}"))
                return
        cfg = OperationConfig()
        for option in args:
            option(cfg)
        upper = method.upper()
        try:
            self._add_operation(method.lower(), path, cfg)
        except Exception as exc:  # noqa: BLE001
            self._log("%s %s: add operation failed", upper, path)
            self.errors.add(exc)
            return
        self._log("%s %s: add operation successfully registered", upper, path)

    def _add_operation(self, method: str, path: str, cfg: OperationConfig) -> None:
        if method not in _METHODS:
            raise ValueError(f"unexpected http method: {method}")
        if cfg.hide:
            return
        item = self._paths.setdefault(path, {})
        if method in item:
            raise ValueError(f"operation already exists: {method} {path}")
        op: dict[str, Any] = {}
        if cfg.tags:
            op["tags"] = list(cfg.tags)
        if cfg.summary:
            op["summary"] = cfg.summary
        if cfg.description:
            op["description"] = cfg.description
        if cfg.operation_id:
            op["operationId"] = cfg.operation_id

        parameters: list[dict[str, Any]] = []
        for unit in cfg.requests:
            params, body = self._request(unit)
            parameters.extend(params)
            if body is not None:
                op["requestBody"] = body
        declared = {p["name"] for p in parameters if p["in"] == "path"}
        in_path = set(_PLACEHOLDER.findall(path))
        for name in sorted(in_path - declared):
            raise ValueError(f"{method.upper()} {path}: missing path parameter: {name}")
        for name in sorted(declared - in_path):
            raise ValueError(
                f"{method.upper()} {path}: missing path parameter placeholder in url: {name}"
            )
        if parameters:
            op["parameters"] = parameters
        op["responses"] = self._responses(cfg.responses)
        if cfg.deprecated:
            op["deprecated"] = True
        if cfg.security:
            op["security"] = [{s.name: list(s.scopes)} for s in cfg.security]
        item[method] = op

    def _request(self, unit: ContentUnit) -> tuple[list[dict[str, Any]], dict[str, Any] | None]:
        tp = self._structure_type(unit.structure)
        if tp is None:
            return [], None
        if not (isinstance(tp, type) and dataclasses.is_dataclass(tp)):
            schema = self._schema(tp)
            return [], self._body({unit.content_type or _JSON: schema}, unit)
        params: list[dict[str, Any]] = []
        json_props: dict[str, Any] = {}
        json_required: list[str] = []
        form_props: dict[str, Any] = {}
        form_required: list[str] = []
        hints = self._hints(tp)
        for f in dataclasses.fields(tp):
            meta = {k: str(v) for k, v in f.metadata.items()}
            ftype = hints.get(f.name, f.type)
            location = self._param_location(meta)
            required = meta.get("required") == "true"
            schema = self._field_schema(ftype, meta)
            if location is not None:
                loc, name = location
                param = {"name": name, "in": loc.value}
                if meta.get("description"):
                    param["description"] = meta["description"]
                if required or loc is ParameterIn.PATH:
                    param["required"] = True
                param["schema"] = schema
                params.append(param)
            elif "formData" in meta:
                form_props[meta["formData"]] = schema
                if required:
                    form_required.append(meta["formData"])
            elif "json" in meta and meta["json"] != "-":
                name = meta["json"].split(",")[0] or f.name
                json_props[name] = schema
                if required:
                    json_required.append(name)
                self._intercept(name, meta, json_required)
        content: dict[str, Any] = {}
        if json_props:
            content[unit.content_type or _JSON] = self._struct_body_schema(
                tp, json_props, json_required
            )
        if form_props:
            form_schema: dict[str, Any] = {"type": "object", "properties": form_props}
            if form_required:
                form_schema["required"] = form_required
            content[_FORM] = {"schema": form_schema}
        if content:
            for media, value in list(content.items()):
                if "schema" not in value:
                    content[media] = value
            return params, self._body(content, unit)
        return params, None

    def _struct_body_schema(
        self, tp: type, props: dict[str, Any], required: list[str]
    ) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object", "properties": props}
        if required:
            schema["required"] = required
        if self.reflector_config.inline_refs:
            return schema
        name = self._def_name(tp)
        self._schemas.setdefault(name, schema)
        return self._ref(name)

    def _body(self, content: dict[str, Any], unit: ContentUnit) -> dict[str, Any]:
        wrapped = {
            media: value if isinstance(value, dict) and "schema" in value and len(value) == 1
            else {"schema": value}
            for media, value in content.items()
        }
        for media in wrapped:
            if unit.encoding:
                wrapped[media]["encoding"] = {
                    prop: {"contentType": enc} for prop, enc in unit.encoding.items()
                }
        body: dict[str, Any] = {"content": wrapped}
        if unit.description:
            body["description"] = unit.description
        return body

    def _responses(self, units: list[ContentUnit]) -> dict[str, Any]:
        if not units:
            return {"204": {"description": _reason(204)}}
        grouped: dict[str, dict[str, Any]] = {}
        for unit in units:
            key = "default" if unit.is_default else str(unit.http_status)
            entry = grouped.setdefault(
                key, {"description": unit.description or _reason(unit.http_status)}
            )
            tp = self._structure_type(unit.structure)
            if tp is None:
                continue
            schema = self._schema(tp)
            content = entry.setdefault("content", {})
            media = unit.content_type or _JSON
            if media in content:
                existing = content[media]["schema"]
                options = existing["oneOf"] if "oneOf" in existing else [existing]
                content[media]["schema"] = {"oneOf": [*options, schema]}
            else:
                content[media] = {"schema": schema}
        return grouped

    def _param_location(self, meta: dict[str, str]) -> tuple[ParameterIn, str] | None:
        for loc in ParameterIn:
            tag = self.parameter_tag_mapping.get(loc, loc.value)
            if tag in meta:
                return loc, meta[tag]
        return None

    def _intercept(self, name: str, meta: dict[str, str], required: list[str]) -> None:
        fn = self.reflector_config.intercept_prop_func
        if fn is not None:
            fn(InterceptPropParams(name=name, tags=meta, parent_required=required, processed=True))

    # ---- schemas ----------------------------------------------------------

    @staticmethod
    def _as_type(value: Any) -> Any:
        if value is None or isinstance(value, type) or typing.get_origin(value) is not None:
            return value
        return type(value)

    def _structure_type(self, structure: Any) -> Any:
        return self._as_type(structure)

    @staticmethod
    def _hints(tp: type) -> dict[str, Any]:
        namespace = getattr(getattr(tp, "__init__", None), "__globals__", None) or {}
        return {f.name: _resolve(f.type, namespace) for f in dataclasses.fields(tp)}

    def _def_name(self, tp: type) -> str:
        name = tp.__name__
        for prefix in self.reflector_config.strip_def_name_prefix:
            if name.startswith(prefix):
                name = name[len(prefix):]
        fn = self.reflector_config.intercept_def_name_func
        if fn is not None:
            name = fn(tp, name)
        return name

    def _ref(self, name: str) -> dict[str, Any]:
        return {"$ref": f"#/components/schemas/{name}"}

    def _nullable(self, schema: dict[str, Any]) -> dict[str, Any]:
        if "$ref" in schema:
            if self.v31:
                return {"anyOf": [schema, {"type": "null"}]}
            return {"allOf": [schema], "nullable": True}
        if self.v31:
            out = dict(schema)
            kind = out.get("type")
            if isinstance(kind, str):
                out["type"] = [kind, "null"]
            return out
        return {**schema, "nullable": True}

    def _field_schema(self, tp: Any, meta: dict[str, str]) -> dict[str, Any]:
        schema = dict(self._schema(tp))
        if "enum" in meta:
            values: list[Any] = meta["enum"].split(",")
            if schema.get("type") == "integer":
                values = [int(v) for v in values]
            schema["enum"] = values
        for key in ("format", "description", "example"):
            if key in meta:
                value: Any = meta[key]
                if key == "example" and schema.get("type") == "integer":
                    value = int(value)
                schema[key] = value
        return schema

    def _schema(self, tp: Any) -> dict[str, Any]:
        tp = self._mappings.get(tp, tp)
        if tp is Any:
            return {}
        origin = typing.get_origin(tp)
        args = typing.get_args(tp)
        if origin is typing.Union or (origin is not None and origin.__name__ == "UnionType"):
            rest = [a for a in args if a is not type(None)]
            inner = self._schema(rest[0]) if len(rest) == 1 else {
                "anyOf": [self._schema(a) for a in rest]
            }
            return self._nullable(inner) if len(rest) < len(args) else inner
        if origin is typing.Literal:
            return {"enum": list(args)}
        if origin in (list, tuple, set, frozenset):
            items = self._schema(args[0]) if args else {}
            return {"type": "array", "items": items}
        if origin is dict:
            values = self._schema(args[1]) if len(args) == 2 else {}
            return {"type": "object", "additionalProperties": values}
        if tp is bool:
            return {"type": "boolean"}
        if tp is int:
            return {"type": "integer"}
        if tp is float:
            return {"type": "number"}
        if tp is str:
            return {"type": "string"}
        if tp is bytes:
            return {"type": "string", "format": "binary"}
        if tp is datetime.datetime:
            return {"type": "string", "format": "date-time"}
        if tp is datetime.date:
            return {"type": "string", "format": "date"}
        if isinstance(tp, type) and issubclass(tp, enum.Enum):
            return {"enum": [m.value for m in tp]}
        if tp in (list, tuple, set):
            return {"type": "array", "items": {}}
        if tp is dict:
            return {"type": "object"}
        if isinstance(tp, type) and dataclasses.is_dataclass(tp):
            return self._struct_schema(tp)
        return {}

    def _struct_schema(self, tp: type) -> dict[str, Any]:
        name = self._def_name(tp)
        if not self.reflector_config.inline_refs and name in self._schemas:
            return self._ref(name)
        if not self.reflector_config.inline_refs:
            self._schemas[name] = {}
        props: dict[str, Any] = {}
        required: list[str] = []
        hints = self._hints(tp)
        for f in dataclasses.fields(tp):
            meta = {k: str(v) for k, v in f.metadata.items()}
            json_name = meta.get("json", f.name).split(",")[0] or f.name
            if json_name == "-":
                continue
            props[json_name] = self._field_schema(hints.get(f.name, f.type), meta)
            if meta.get("required") == "true":
                required.append(json_name)
            self._intercept(json_name, meta, required)
        schema: dict[str, Any] = {"type": "object", "properties": props}
        if required:
            schema["required"] = required
        fn = self.reflector_config.intercept_schema_func
        if fn is not None:
            fn(schema)
        if self.reflector_config.inline_refs:
            return schema
        self._schemas[name] = schema
        return self._ref(name)

    # ---- output -----------------------------------------------------------

    def document(self) -> dict[str, Any]:
        """Return the document as plain Python objects."""
        spec = dict(self._spec)
        spec["paths"] = {path: dict(item) for path, item in self._paths.items() if item}
        if self._schemas:
            components = dict(spec.get("components", {}))
            components["schemas"] = dict(self._schemas)
            spec["components"] = components
        return spec

    def validate(self) -> None:
        """Raise ``SpecError`` if any operation could not be added."""
        if self.errors.has_errors():
            raise self.errors

    def marshal_yaml(self) -> bytes:
        """Return the document as YAML."""
        return yaml.safe_dump(self.document(), sort_keys=False, allow_unicode=True).encode()

    def marshal_json(self) -> bytes:
        """Return the document as compact JSON."""
        return json.dumps(self.document(), ensure_ascii=False).encode()