"""
Tests for Record and key helpers.
"""

from enum import Enum

import pytest

from seedgraph import FieldKey, Record, describe_key, key_name, kind_name


class Kind(Enum):
    ACCOUNT = "acct"


class Contact:
    pass


class TestKeys:
    """Tests for FieldKey, key_name and describe_key."""

    def test_field_key_equality_ignores_label(self):
        """Two keys with the same name are the same key."""
        assert FieldKey("name", "Name") == FieldKey("name", "Account Name")
        assert hash(FieldKey("name", "A")) == hash(FieldKey("name", "B"))

    def test_field_keys_are_ordered_by_name(self):
        assert sorted([FieldKey("b"), FieldKey("a")]) == [FieldKey("a"), FieldKey("b")]

    def test_key_name(self):
        assert key_name(FieldKey("account_id", "Account")) == "account_id"
        assert key_name("email") == "email"

    def test_describe_key_prefers_label(self):
        assert describe_key(FieldKey("account_id", "Account")) == "Account"
        assert describe_key(FieldKey("account_id")) == "account_id"
        assert describe_key(42) == "42"


class TestKindName:
    """Tests for rendering entity kinds."""

    @pytest.mark.parametrize(
        "kind, expected",
        [
            ("account", "account"),
            (Kind.ACCOUNT, "ACCOUNT"),
            (Contact, "Contact"),
            (7, "7"),
        ],
    )
    def test_kind_name(self, kind, expected):
        assert kind_name(kind) == expected


class TestRecord:
    """Tests for the Record container."""

    def test_new_record_has_no_id(self):
        record = Record("account")
        assert record.is_new
        assert record.fields == {}

    def test_item_access(self):
        record = Record("account", fields={"name": "Acme"}, id="account-1")

        assert record["name"] == "Acme"
        assert "name" in record
        assert record.get("missing", "x") == "x"
        assert not record.is_new

    def test_records_compare_by_identity(self):
        """Equal contents do not make two records the same row."""
        assert Record("account") != Record("account")
        assert len({Record("account"), Record("account")}) == 2

    def test_to_dict_uses_storage_names(self):
        record = Record("contact", fields={FieldKey("account_id", "Account"): "a-1"})

        assert record.to_dict() == {"account_id": "a-1", "id": None}
