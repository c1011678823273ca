"""Tests for mapping table models."""

from loader_config.mappings.models import DirectEntry
from loader_config.mappings.models import MappingTable
from loader_config.mappings.models import QualifiedEntry
from loader_config.mappings.models import decode_entry


class TestDecodeEntry:
    """Tests for decoding raw mapping values."""

    def test_string_is_direct(self):
        assert decode_entry("liferay@1.0.0") == DirectEntry("liferay@1.0.0")

    def test_object_is_qualified(self):
        entry = decode_entry({"value": "liferay@1.0.0", "exactMatch": True})
        assert entry == QualifiedEntry("liferay@1.0.0", exact_match=True)

    def test_snake_case_flag_accepted(self):
        entry = decode_entry({"value": "b", "exact_match": True})
        assert entry == QualifiedEntry("b", exact_match=True)

    def test_flag_defaults_to_false(self):
        assert decode_entry({"value": "b"}) == QualifiedEntry("b", exact_match=False)

    def test_malformed_values(self):
        assert decode_entry(42) is None
        assert decode_entry(None) is None
        assert decode_entry({"exactMatch": True}) is None
        assert decode_entry({"value": ""}) is None
        assert decode_entry(["a"]) is None


class TestMappingTable:
    """Tests for MappingTable."""

    def test_empty_table_is_falsy(self):
        table = MappingTable()
        assert not table
        assert len(table) == 0

    def test_preserves_insertion_order(self):
        table = MappingTable({"c": "3", "a": "1", "b": "2"})
        assert table.aliases() == ["c", "a", "b"]

    def test_update_overwrites_in_place(self):
        table = MappingTable({"a": "1", "b": "2"})
        table.update({"a": "10", "c": "3"})

        assert table.aliases() == ["a", "b", "c"]
        assert table.get("a") == DirectEntry("10")

    def test_update_can_change_entry_shape(self):
        table = MappingTable({"a": "1"})
        table.update({"a": {"value": "2", "exactMatch": True}})
        assert table.get("a") == QualifiedEntry("2", exact_match=True)

    def test_malformed_entries_skipped(self):
        table = MappingTable({"good": "x", "bad": 5, "worse": {"nope": 1}})
        assert table.aliases() == ["good"]

    def test_malformed_update_removes_existing_alias(self):
        table = MappingTable({"a": "b", "c": "d"})
        table.update({"a": 42})

        assert "a" not in table
        assert table.aliases() == ["c"]

    def test_string_star_replaces_wildcard(self):
        table = MappingTable({"*": lambda name: name.upper()})
        table.update({"*": "star"})

        assert table.wildcard is None
        assert table.get("*") == DirectEntry("star")

    def test_malformed_star_clears_wildcard(self):
        table = MappingTable({"*": lambda name: name.upper()})
        table.update({"*": 5})

        assert table.wildcard is None
        assert not table

    def test_callable_star_replaces_star_alias(self):
        def handler(name):
            return name.upper()

        table = MappingTable({"*": "star"})
        table.update({"*": handler})

        assert table.wildcard is handler
        assert "*" not in table

    def test_callable_star_becomes_wildcard(self):
        def handler(name):
            return name.upper()

        table = MappingTable({"*": handler})

        assert table.wildcard is handler
        assert "*" not in table
        assert len(table) == 1
        assert table

    def test_string_star_is_plain_alias(self):
        table = MappingTable({"*": "everything"})
        assert table.wildcard is None
        assert table.get("*") == DirectEntry("everything")

    def test_update_from_table(self):
        def handler(name):
            return None

        base = MappingTable({"a": "1"})
        base.update(MappingTable({"b": "2"}, wildcard=handler))

        assert base.aliases() == ["a", "b"]
        assert base.wildcard is handler

    def test_from_dict_returns_existing_table(self):
        table = MappingTable({"a": "1"})
        assert MappingTable.from_dict(table) is table

    def test_to_dict(self):
        table = MappingTable({"a": "1", "b": {"value": "2", "exactMatch": True}})
        assert table.to_dict() == {"a": "1", "b": {"value": "2", "exactMatch": True}}
