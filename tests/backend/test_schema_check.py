"""
Tests for rule-set syntax checks and provisioning unit definitions.

These tests cover:
- check_schema rejecting malformed rule sets
- CollectionSpec / IndexSpec failing at construction time
"""

import pytest

from sharespace_init.core.errors import ValidationSchemaError
from sharespace_init.core.schema_check import check_schema
from sharespace_init.database.specs import CollectionSpec, IndexSpec
from sharespace_init.database.validators import (
    users_schema,
    mentorship_requests_schema,
    mentorship_connections_schema,
)


class TestCheckSchema:
    """Tests for check_schema."""

    @pytest.mark.parametrize(
        "schema",
        [users_schema, mentorship_requests_schema, mentorship_connections_schema],
    )
    def test_collection_rule_sets_are_well_formed(self, schema):
        check_schema(schema)

    @pytest.mark.parametrize(
        "schema,message",
        [
            ({"bsonType": "integer"}, "unknown bsonType"),
            ({"type": "object"}, "unsupported keyword"),
            ({"required": []}, "'required'"),
            ({"required": ["a", "a"]}, "'required'"),
            ({"enum": []}, "'enum'"),
            ({"minLength": -1}, "'minLength'"),
            ({"minLength": 5, "maxLength": 2}, "greater than"),
            ({"minimum": 5, "maximum": 1}, "greater than"),
            ({"pattern": "[unclosed"}, "invalid pattern"),
            ({"properties": []}, "'properties'"),
            ({"additionalProperties": "no"}, "'additionalProperties'"),
            ("object", "must be a mapping"),
        ],
    )
    def test_malformed_rule_sets_rejected(self, schema, message):
        with pytest.raises(ValidationSchemaError, match=message):
            check_schema(schema)

    def test_nested_error_reports_location(self):
        schema = {"bsonType": "object", "properties": {"tags": {"items": {"bsonType": "text"}}}}

        with pytest.raises(ValidationSchemaError, match=r"\$jsonSchema\.tags\[\]"):
            check_schema(schema)


class TestCollectionSpec:
    """Tests for CollectionSpec construction."""

    def test_options_wrap_schema(self):
        spec = CollectionSpec(name="users", schema=users_schema)

        assert spec.options == {
            "validator": {"$jsonSchema": users_schema},
            "validationLevel": "strict",
            "validationAction": "error",
        }

    def test_malformed_schema_fails_at_construction(self):
        with pytest.raises(ValidationSchemaError, match="broken"):
            CollectionSpec(name="broken", schema={"bsonType": "objekt"})

    def test_unknown_validation_action_rejected(self):
        with pytest.raises(ValidationSchemaError):
            CollectionSpec(name="users", schema=users_schema, validation_action="ignore")


class TestIndexSpec:
    """Tests for IndexSpec construction and comparison."""

    def test_name_follows_server_default(self):
        spec = IndexSpec("mentorship_requests", [("menteeId", 1), ("mentorId", 1), ("status", 1)])
        assert spec.name == "menteeId_1_mentorId_1_status_1"

    @pytest.mark.parametrize(
        "keys",
        [[], [("status", 2)], [("status", True)], [("", 1)], [("status", 1), ("status", -1)]],
    )
    def test_invalid_keys_rejected(self, keys):
        with pytest.raises(ValidationSchemaError):
            IndexSpec("users", keys)

    def test_options_only_include_set_flags(self):
        assert IndexSpec("users", [("isMentee", 1)]).options == {}
        assert IndexSpec("users", [("displayName", 1)], unique=True, sparse=True).options == {
            "unique": True,
            "sparse": True,
        }

    def test_matches_index_information_entry(self):
        spec = IndexSpec("users", [("displayName", 1)], unique=True, sparse=True)

        assert spec.matches({"key": [("displayName", 1)], "unique": True, "sparse": True, "v": 2})
        assert not spec.matches({"key": [("displayName", 1)], "unique": True, "v": 2})
        assert not spec.matches({"key": [("displayName", -1)], "unique": True, "sparse": True})

    def test_describe_lists_flags(self):
        spec = IndexSpec("users", [("displayName", 1)], unique=True, sparse=True)
        assert spec.describe() == "users.displayName_1 (unique, sparse)"
