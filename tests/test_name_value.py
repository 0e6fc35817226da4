# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Exceptional contributors

"""Tests for ordered name/value collections and the pair codec."""

import pytest

from exceptional.name_value import (
    NameValueCollection,
    NameValuePair,
    from_pairs,
    to_json_dict,
    to_pairs,
)


class TestNameValueCollection:
    """Tests for NameValueCollection."""

    def test_add_keeps_duplicate_names(self):
        """Test that adding an existing name appends rather than overwrites."""
        collection = NameValueCollection()
        collection.add("a", "1")
        collection.add("a", "2")

        assert len(collection) == 2
        assert collection.get_all("a") == ["1", "2"]

    def test_get_returns_last_value(self):
        """Test that get returns the value added last under a name."""
        collection = NameValueCollection([("a", "1"), ("b", "x"), ("a", "2")])

        assert collection.get("a") == "2"
        assert collection["a"] == "2"
        assert collection.get("missing") is None
        assert collection.get("missing", "") == ""

    def test_getitem_missing_raises(self):
        """Test that indexing a missing name raises KeyError."""
        with pytest.raises(KeyError):
            NameValueCollection()["missing"]

    def test_names_are_distinct_in_first_seen_order(self):
        """Test names() ordering."""
        collection = NameValueCollection([("b", "1"), ("a", "2"), ("b", "3")])

        assert collection.names() == ["b", "a"]
        assert "a" in collection
        assert "c" not in collection

    def test_construct_from_mapping(self):
        """Test building a collection from a dict."""
        collection = NameValueCollection({"HTTP_HOST": "example.com", "URL": "/"})

        assert collection.items() == [("HTTP_HOST", "example.com"), ("URL", "/")]

    def test_construct_from_dict_pairs(self):
        """Test building a collection from serialized pair dicts."""
        collection = NameValueCollection([{"name": "a", "value": "1"}, {"name": "a", "value": None}])

        assert collection.items() == [("a", "1"), ("a", None)]

    def test_copy_is_independent(self):
        """Test that a copy does not share entries with the original."""
        original = NameValueCollection([("a", "1")])
        copy = original.copy()
        copy.add("a", "2")

        assert original.get_all("a") == ["1"]
        assert copy.get_all("a") == ["1", "2"]

    def test_equality_is_order_sensitive(self):
        """Test that equal collections need the same pairs in the same order."""
        first = NameValueCollection([("a", "1"), ("b", "2")])

        assert first == NameValueCollection([("a", "1"), ("b", "2")])
        assert first != NameValueCollection([("b", "2"), ("a", "1")])


class TestPairCodec:
    """Tests for to_pairs / from_pairs."""

    def test_to_pairs_of_none_is_empty(self):
        """Test that an absent collection yields no pairs."""
        assert to_pairs(None) == []
        assert to_pairs(NameValueCollection()) == []

    def test_to_pairs_preserves_order_and_duplicates(self):
        """Test the pair projection of a collection with repeated names."""
        collection = NameValueCollection([("a", "1"), ("b", "x"), ("a", "2")])

        assert to_pairs(collection) == [
            NameValuePair("a", "1"),
            NameValuePair("b", "x"),
            NameValuePair("a", "2"),
        ]

    def test_round_trip_reproduces_collection(self):
        """Test that from_pairs(to_pairs(m)) reproduces m exactly."""
        collection = NameValueCollection([("a", "1"), ("a", "2"), ("b", ""), ("a", "3")])

        assert from_pairs(to_pairs(collection)) == collection

    def test_round_trip_through_dicts(self):
        """Test the round trip through the wire representation."""
        collection = NameValueCollection([("a", "1"), ("a", "2")])
        wire = [pair.to_dict() for pair in to_pairs(collection)]

        assert wire == [{"name": "a", "value": "1"}, {"name": "a", "value": "2"}]
        assert from_pairs(wire) == collection

    def test_from_pairs_of_none_is_empty(self):
        """Test that rebuilding from nothing yields an empty collection."""
        result = from_pairs(None)

        assert isinstance(result, NameValueCollection)
        assert len(result) == 0

    def test_to_json_dict_keeps_last_value(self):
        """Test the lossy display projection."""
        pairs = to_pairs(NameValueCollection([("a", "1"), ("b", "x"), ("a", "2")]))

        assert to_json_dict(pairs) == {"a": "2", "b": "x"}
        assert to_json_dict([]) == {}
        assert to_json_dict(None) == {}
