import pytest

from schema_cleaner.reconcile import (
    append_nullable_marker,
    drop_nullable_required,
    ensure_object_placeholder,
    filter_required_to_properties,
    normalize_type_field,
)


@pytest.mark.parametrize(
    "type_value, expected_type, expected_nullable",
    [
        ("STRING", "string", False),
        ("null", "null", True),
        ("Null", "null", True),
        (["string", "null"], "string", True),
        (["null", "integer"], "integer", True),
        (["integer", "Boolean"], "boolean", False),
        ([], "string", False),
        ([1, "null"], "string", True),
    ],
)
def test_normalize_type_field(type_value, expected_type, expected_nullable) -> None:
    node = {"type": type_value}
    assert normalize_type_field(node) is expected_nullable
    assert node["type"] == expected_type


def test_normalize_type_field_ignores_missing_type() -> None:
    node = {"description": "x"}
    assert normalize_type_field(node) is False
    assert node == {"description": "x"}


@pytest.mark.parametrize("type_val", [5, None, {"const": "string"}, True])
def test_normalize_type_field_drops_unusable_type(type_val) -> None:
    node = {"type": type_val, "description": "x"}
    assert normalize_type_field(node) is False
    assert node == {"description": "x"}


def test_append_nullable_marker() -> None:
    node = {}
    append_nullable_marker(node)
    assert node == {"description": "(nullable)"}

    node = {"description": "Name"}
    append_nullable_marker(node)
    assert node["description"] == "Name (nullable)"


def test_append_nullable_marker_is_not_repeated() -> None:
    node = {"description": "Already nullable here"}
    append_nullable_marker(node)
    assert node["description"] == "Already nullable here"


def test_placeholder_for_object_without_properties() -> None:
    node = {"type": "object", "properties": {}, "required": ["gone"]}

    assert ensure_object_placeholder(node) is True
    assert node["properties"] == {
        "reason": {"type": "string", "description": "Reason for calling this tool"}
    }
    assert node["required"] == ["reason"]


def test_placeholder_instances_are_independent() -> None:
    first = {"type": "object"}
    second = {"type": "object"}
    ensure_object_placeholder(first)
    ensure_object_placeholder(second)

    first["properties"]["reason"]["description"] = "changed"

    assert second["properties"]["reason"]["description"] == "Reason for calling this tool"


def test_no_placeholder_when_properties_exist_or_not_object() -> None:
    node = {"type": "object", "properties": {"a": {}}}
    assert ensure_object_placeholder(node) is False
    assert node == {"type": "object", "properties": {"a": {}}}

    node = {"type": "string"}
    assert ensure_object_placeholder(node) is False
    assert node == {"type": "string"}


def test_drop_nullable_required() -> None:
    node = {"required": ["a", "b", 3]}
    drop_nullable_required(node, {"a"})
    assert node["required"] == ["b", 3]

    drop_nullable_required(node, {"b"})
    assert node["required"] == [3]


def test_drop_nullable_required_removes_emptied_list() -> None:
    node = {"required": ["a"]}
    drop_nullable_required(node, {"a"})
    assert "required" not in node


def test_drop_nullable_required_without_nullable_keys_keeps_empty_list() -> None:
    node = {"required": []}
    drop_nullable_required(node, set())
    assert node == {"required": []}


def test_filter_required_to_properties() -> None:
    node = {"properties": {"a": {}, "b": {}}, "required": ["b", "zzz", 1, "a"]}
    filter_required_to_properties(node)
    assert node["required"] == ["b", "a"]


def test_filter_required_without_properties_empties_list() -> None:
    node = {"required": ["a"]}
    filter_required_to_properties(node)
    assert node == {"required": []}
