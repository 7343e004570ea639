"""Tests for $ref resolution."""
import pytest

from schema_deref import SchemaReferenceError, dereference, resolve_pointer


class TestResolvePointer:
    def test_nested_path(self):
        root = {"components": {"schemas": {"Pet": {"type": "object"}}}}
        assert resolve_pointer(root, "#/components/schemas/Pet") == {"type": "object"}

    def test_root(self):
        root = {"a": 1}
        assert resolve_pointer(root, "#") is root
        assert resolve_pointer(root, "#/") is root

    def test_escaped_segments(self):
        root = {"paths": {"/pets/{id}": {"get": {}}}, "a~b": 1}
        assert resolve_pointer(root, "#/paths/~1pets~1{id}/get") == {}
        assert resolve_pointer(root, "#/a~0b") == 1
        assert resolve_pointer(root, "#/paths/%7E1pets%7E1%7Bid%7D") == {"get": {}}

    def test_list_index(self):
        root = {"allOf": [{"a": 1}, {"b": 2}]}
        assert resolve_pointer(root, "#/allOf/1") == {"b": 2}

    def test_external_ref(self):
        with pytest.raises(SchemaReferenceError, match="Cannot resolve external reference other.json#/Pet"):
            resolve_pointer({}, "other.json#/Pet")

    def test_missing_segment(self):
        root = {"components": {"schemas": {}}}
        with pytest.raises(
            SchemaReferenceError,
            match="Could not follow ref #/components/schemas/Pet, failed at Pet",
        ):
            resolve_pointer(root, "#/components/schemas/Pet")

    def test_list_index_out_of_range(self):
        with pytest.raises(SchemaReferenceError):
            resolve_pointer({"allOf": []}, "#/allOf/0")


class TestDereference:
    def test_replaces_refs_and_returns_same_object(self):
        root = {
            "components": {"schemas": {"Pet": {"type": "object"}}},
            "paths": {"/pets": {"get": {"schema": {"$ref": "#/components/schemas/Pet"}}}},
        }
        result = dereference(root)
        assert result is root
        assert root["paths"]["/pets"]["get"]["schema"] == {"type": "object"}
        assert root["paths"]["/pets"]["get"]["schema"] is root["components"]["schemas"]["Pet"]

    def test_refs_inside_lists(self):
        root = {"defs": {"A": {"type": "string"}}, "oneOf": [{"$ref": "#/defs/A"}, {"type": "null"}]}
        dereference(root)
        assert root["oneOf"] == [{"type": "string"}, {"type": "null"}]

    def test_follows_chains(self):
        root = {
            "defs": {"A": {"$ref": "#/defs/B"}, "B": {"type": "integer"}},
            "use": {"$ref": "#/defs/A"},
        }
        dereference(root)
        assert root["use"] == {"type": "integer"}
        assert root["defs"]["A"] == {"type": "integer"}

    def test_refs_inside_targets(self):
        root = {
            "defs": {
                "Pet": {"properties": {"owner": {"$ref": "#/defs/Owner"}}},
                "Owner": {"type": "string"},
            },
            "schema": {"$ref": "#/defs/Pet"},
        }
        dereference(root)
        assert root["schema"] == {"properties": {"owner": {"type": "string"}}}

    def test_self_referencing_schema_terminates(self):
        root = {
            "defs": {"Node": {"properties": {"next": {"$ref": "#/defs/Node"}}}},
        }
        dereference(root)
        node = root["defs"]["Node"]
        assert node["properties"]["next"] is node

    def test_circular_ref_chain(self):
        root = {"defs": {"A": {"$ref": "#/defs/B"}, "B": {"$ref": "#/defs/A"}}}
        with pytest.raises(SchemaReferenceError, match="Circular"):
            dereference(root)

    def test_external_ref_fails(self):
        with pytest.raises(SchemaReferenceError):
            dereference({"schema": {"$ref": "https://example.com/schema.json"}})

    def test_missing_ref_fails(self):
        with pytest.raises(SchemaReferenceError, match="failed at missing"):
            dereference({"schema": {"$ref": "#/defs/missing"}, "defs": {}})

    def test_document_without_refs_is_unchanged(self):
        root = {"type": "object", "properties": {"a": {"type": "string"}}, "list": [1, "x", None]}
        expected = {"type": "object", "properties": {"a": {"type": "string"}}, "list": [1, "x", None]}
        assert dereference(root) == expected
