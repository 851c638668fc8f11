import pytest

from oaspec.yamlcompare import assert_equal_yaml, yaml_diff, yaml_to_object

EQUAL_CASES = [
    ("identical YAML", b"key: value\nother: 123", b"key: value\nother: 123"),
    ("different formatting", b"key: value\nother: 123", b"other: 123\nkey: value"),
    ("nested objects equal", b"parent:\n  child: value\n  num: 42", b"parent:\n  num: 42\n  child: value"),
    ("arrays equal", b"items:\n  - one\n  - two\n  - three", b"items:\n  - one\n  - two\n  - three"),
]

MISMATCH_CASES = [
    ("different values", b"key: value1", b"key: value2"),
    ("different keys", b"key1: value", b"key2: value"),
    ("arrays different order", b"items:\n  - one\n  - two", b"items:\n  - two\n  - one"),
]


def _changed_lines(diff):
    removed = [line for line in diff.splitlines() if line.startswith("-") and not line.startswith("---")]
    added = [line for line in diff.splitlines() if line.startswith("+") and not line.startswith("+++")]
    return removed, added


@pytest.mark.parametrize("name,want,got", EQUAL_CASES, ids=[c[0] for c in EQUAL_CASES])
def test_equal_yaml(name, want, got):
    assert yaml_diff(want, got) == ""
    assert_equal_yaml(want, got)


@pytest.mark.parametrize("name,want,got", MISMATCH_CASES, ids=[c[0] for c in MISMATCH_CASES])
def test_mismatched_yaml(name, want, got):
    removed, added = _changed_lines(yaml_diff(want, got))
    assert len(removed) >= 1
    assert len(added) >= 1


def test_diff_names_both_values():
    diff = yaml_diff("key: value1", "key: value2")
    assert "-key: value1" in diff
    assert "+key: value2" in diff


def test_yaml_to_object():
    assert yaml_to_object(b"parent:\n  child: value\n  num: 42") == {"parent": {"child": "value", "num": 42}}


def test_yaml_to_object_first_document_only():
    assert yaml_to_object("a: 1\n---\nb: 2\n") == {"a": 1}


def test_invalid_yaml():
    with pytest.raises(ValueError):
        yaml_to_object("key: [unclosed")


def test_int_and_float_differ():
    assert yaml_to_object("n: 1") == {"n": 1}
    assert isinstance(yaml_to_object("n: 1.0")["n"], float)
    removed, added = _changed_lines(yaml_diff("n: 1", "n: 1.0"))
    assert len(removed) >= 1
    assert len(added) >= 1