import pytest

from schema_cleaner import clean_json_schema
from schema_cleaner.refs import collect_definitions, flatten_refs


def test_collect_definitions_merges_tables_with_definitions_winning() -> None:
    root = {
        "$defs": {"Shared": {"type": "string"}, "OnlyDefs": {"type": "boolean"}},
        "definitions": {"Shared": {"type": "integer"}},
        "type": "object",
    }

    defs = collect_definitions(root)

    assert defs == {
        "Shared": {"type": "integer"},
        "OnlyDefs": {"type": "boolean"},
    }
    assert root == {"type": "object"}


def test_collect_definitions_discards_non_object_tables() -> None:
    root = {"$defs": ["not", "a", "table"], "definitions": None}
    assert collect_definitions(root) == {}
    assert root == {}


def test_referencing_node_keys_win_over_definition() -> None:
    node = {"$ref": "#/$defs/Name", "description": "Who"}

    flatten_refs(node, {"Name": {"type": "string", "description": "A name"}})

    assert node == {"description": "Who", "type": "string"}


def test_substituted_content_is_expanded_again() -> None:
    defs = {
        "Outer": {"$ref": "#/definitions/Inner", "description": "outer"},
        "Inner": {"type": "object", "properties": {"leaf": {"$ref": "#/$defs/Leaf"}}},
        "Leaf": {"type": "number"},
    }
    node = {"$ref": "#/$defs/Outer"}

    flatten_refs(node, defs)

    assert node == {
        "description": "outer",
        "type": "object",
        "properties": {"leaf": {"type": "number"}},
    }


def test_refs_inside_arrays_are_expanded() -> None:
    node = {"anyOf": [{"$ref": "#/$defs/A"}, {"type": "null"}], "prefixItems": [[{"$ref": "x"}]]}

    flatten_refs(node, {"A": {"type": "string"}})

    assert node["anyOf"] == [{"type": "string"}, {"type": "null"}]
    # Only objects directly inside arrays are visited
    assert node["prefixItems"] == [[{"$ref": "x"}]]


def test_definition_is_copied_not_shared() -> None:
    defs = {"Tag": {"type": "object", "properties": {"name": {"type": "string"}}}}
    node = {"properties": {"a": {"$ref": "#/$defs/Tag"}, "b": {"$ref": "#/$defs/Tag"}}}

    flatten_refs(node, defs)
    node["properties"]["a"]["properties"]["name"]["type"] = "integer"

    assert node["properties"]["b"]["properties"]["name"]["type"] == "string"
    assert defs["Tag"]["properties"]["name"]["type"] == "string"


@pytest.mark.parametrize("ref", ["#/$defs/Missing", 42, None])
def test_unresolvable_ref_is_dropped(ref, lib_caplog: pytest.LogCaptureFixture) -> None:
    node = {"$ref": ref, "title": "Kept"}

    flatten_refs(node, {"Other": {"type": "string"}})

    assert node == {"title": "Kept"}


def test_unresolved_ref_is_logged(lib_caplog: pytest.LogCaptureFixture) -> None:
    flatten_refs({"$ref": "#/$defs/Missing"}, {})
    assert "Dropping unresolved $ref '#/$defs/Missing'" in lib_caplog.text


def test_self_referencing_definition_stops_at_the_cycle() -> None:
    defs = {
        "Tree": {
            "type": "object",
            "properties": {
                "value": {"type": "string"},
                "children": {"type": "array", "items": {"$ref": "#/$defs/Tree"}},
            },
        }
    }
    node = {"$ref": "#/$defs/Tree"}

    flatten_refs(node, defs)

    assert node["properties"]["children"]["items"] == {}


def test_sibling_references_to_same_definition_are_both_expanded() -> None:
    defs = {"Point": {"type": "object", "properties": {"x": {"type": "number"}}}}
    node = {
        "type": "object",
        "properties": {
            "start": {"$ref": "#/$defs/Point"},
            "end": {"$ref": "#/$defs/Point"},
        },
    }

    flatten_refs(node, defs)

    assert node["properties"]["start"] == defs["Point"]
    assert node["properties"]["end"] == defs["Point"]


def test_own_children_may_reference_the_definition_being_expanded() -> None:
    defs = {"A": {"type": "string"}}
    node = {"$ref": "#/$defs/A", "properties": {"x": {"$ref": "#/$defs/A"}}}

    flatten_refs(node, defs)

    assert node == {"type": "string", "properties": {"x": {"type": "string"}}}


def test_acyclic_ref_below_an_expansion_in_the_full_pipeline() -> None:
    schema = {
        "$defs": {"Name": {"type": "string", "minLength": 1}},
        "$ref": "#/$defs/Name",
        "properties": {"nickname": {"$ref": "#/$defs/Name"}},
    }

    clean_json_schema(schema)

    assert schema["properties"]["nickname"] == {
        "type": "string",
        "description": " [Constraint: minLen: 1]",
    }
