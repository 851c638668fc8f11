import json
from dataclasses import dataclass, field

import pytest
import yaml

from oaspec.config import with_openapi_config, with_openapi_version, with_path_parser, with_title
from oaspec.operation import hidden, operation_id, request, response, security
from oaspec.parser import ColonParamParser
from oaspec.reflector import InvalidReflector, OpenAPIReflector, SpecError, new_reflector


@dataclass
class Token:
    token: str = field(default="", metadata={"json": "token"})


@dataclass
class ByID:
    id: int = field(default=0, metadata={"path": "id"})


@dataclass
class BadParam:
    id: int = field(default=0, metadata={"params": "id"})


class FailingParser:
    def parse(self, path):
        raise ValueError("boom")


def make(*opts):
    return new_reflector(with_openapi_config(*opts))


def test_invalid_version():
    r = make(with_openapi_version("2.0.0"))
    assert isinstance(r, InvalidReflector)
    with pytest.raises(SpecError, match="unsupported OpenAPI version: 2.0.0"):
        r.validate()
    assert r.marshal_yaml() == b""


@pytest.mark.parametrize("version", ["3.0.0", "3.1.0"])
def test_versions_accepted(version):
    r = make(with_openapi_version(version), with_title("T"))
    assert isinstance(r, OpenAPIReflector)
    doc = yaml.safe_load(r.marshal_yaml())
    assert doc["openapi"] == version
    assert doc["info"]["title"] == "T"


def test_ref_schema_and_json_roundtrip():
    r = make()
    r.add("post", "/login", operation_id("login"), response(200, Token()))
    r.validate()
    doc = json.loads(r.marshal_json())
    op = doc["paths"]["/login"]["post"]
    assert op["operationId"] == "login"
    schema = op["responses"]["200"]["content"]["application/json"]["schema"]
    assert schema == {"$ref": "#/components/schemas/Token"}
    assert "token" in doc["components"]["schemas"]["Token"]["properties"]


def test_path_parameter():
    r = make(with_path_parser(ColonParamParser()))
    r.add("GET", "/user/:id", request(ByID()), security("bearerAuth"))
    r.validate()
    op = r.document()["paths"]["/user/{id}"]["get"]
    assert op["parameters"][0]["name"] == "id"
    assert op["parameters"][0]["in"] == "path"
    assert op["security"] == [{"bearerAuth": []}]


def test_missing_path_parameter_errors():
    r = make()
    r.add("GET", "/user/{id}", request(BadParam()))
    with pytest.raises(SpecError):
        r.validate()


def test_parser_error_recorded():
    r = make(with_path_parser(FailingParser()))
    r.add("GET", "/user/:id")
    with pytest.raises(SpecError, match="failed to parse path"):
        r.validate()


def test_hidden_and_duplicate():
    r = make()
    r.add("GET", "/h", hidden())
    assert r.document()["paths"] == {}
    r.add("GET", "/x")
    r.add("GET", "/x")
    with pytest.raises(SpecError):
        r.validate()


def test_spec_error_collects():
    err = SpecError()
    assert not err.has_errors()
    err.add(ValueError("a"))
    err.add(ValueError("b"))
    assert err.has_errors()
    assert str(err) == "a\nb"