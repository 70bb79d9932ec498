"""Tests for mapping TypeScript shapes to GraphQL type names."""

import logging

import pytest

from gql_tsschema.core.type_ast import (
    ArrayShape,
    IndexedAccess,
    KeywordShape,
    LiteralShape,
    Member,
    ObjectShape,
    OpaqueShape,
    TypeReference,
    UnionShape,
)
from gql_tsschema.core.type_mapper import UNKNOWN, lower_member, map_type


def ref(name, *args):
    return TypeReference(name=name, type_arguments=list(args))


def scalar_access(key):
    return IndexedAccess(object_type=ref("Scalars"), index_type=LiteralShape(key))


class TestKeywords:
    """Tests for keyword types."""

    @pytest.mark.parametrize(
        "keyword,expected",
        [("string", "String"), ("number", "Int"), ("boolean", "Boolean"), ("any", "String")],
    )
    def test_primitive_keywords(self, keyword, expected):
        assert map_type(KeywordShape(keyword)) == expected

    def test_empty_object_is_string(self):
        assert map_type(ObjectShape(members=[])) == "String"

    def test_unhandled_keyword_is_unknown(self):
        assert map_type(KeywordShape("unknown")) == UNKNOWN


class TestWrappers:
    """Tests for Maybe and Array wrappers."""

    def test_maybe_is_unwrapped(self):
        assert map_type(ref("Maybe", ref("User"))) == "User"

    def test_maybe_of_array(self):
        assert map_type(ref("Maybe", ref("Array", KeywordShape("number")))) == "[Int]"

    def test_array_of_maybe(self):
        assert map_type(ref("Array", ref("Maybe", KeywordShape("string")))) == "[String]"

    def test_nested_arrays(self):
        assert map_type(ref("Array", ref("Array", KeywordShape("boolean")))) == "[[Boolean]]"

    def test_maybe_without_argument(self):
        assert map_type(ref("Maybe")) == UNKNOWN

    def test_array_without_argument(self):
        assert map_type(ref("Array")) == UNKNOWN

    def test_other_reference_passes_through(self):
        assert map_type(ref("User")) == "User"


class TestScalars:
    """Tests for Scalars lookups."""

    def test_indexed_access(self):
        assert map_type(scalar_access("DateTime")) == "DateTime"

    def test_chained_indexed_access(self):
        shape = IndexedAccess(object_type=scalar_access("ID"), index_type=LiteralShape("input"))
        assert map_type(shape) == "ID"

    def test_indexed_access_with_non_literal_key(self):
        shape = IndexedAccess(object_type=ref("Scalars"), index_type=ref("K"))
        assert map_type(shape) == UNKNOWN

    def test_indexed_access_on_other_type(self):
        shape = IndexedAccess(object_type=ref("User"), index_type=LiteralShape("id"))
        assert map_type(shape) == "User"

    def test_generic_form_with_literal(self):
        assert map_type(ref("Scalars", LiteralShape("JSON"))) == "JSON"

    def test_generic_form_without_argument(self):
        assert map_type(ref("Scalars")) == UNKNOWN


class TestFallback:
    """Unrecognized shapes degrade to Unknown and are reported."""

    @pytest.mark.parametrize(
        "shape",
        [
            UnionShape(types=[KeywordShape("string"), KeywordShape("null")]),
            LiteralShape("Query"),
            ArrayShape(element=KeywordShape("string")),
            OpaqueShape(text="keyof User"),
            None,
        ],
    )
    def test_fallback_is_unknown(self, shape):
        assert map_type(shape) == UNKNOWN

    def test_fallback_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="gql_tsschema.core.type_mapper"):
            map_type(LiteralShape("Query"))
        assert "Unknown" in caplog.text


class TestLowerMember:
    """Tests for rendering members as field lines."""

    def test_required_member_gets_marker(self):
        member = Member(name="id", value_shape=KeywordShape("string"))
        assert lower_member(member) == "  id: String!"

    def test_optional_member_has_no_marker(self):
        member = Member(name="name", value_shape=ref("Maybe", KeywordShape("string")), optional=True)
        assert lower_member(member) == "  name: String"

    def test_list_member(self):
        member = Member(name="tags", value_shape=ref("Array", KeywordShape("string")))
        assert lower_member(member) == "  tags: [String]!"

    def test_member_without_name_is_skipped(self):
        assert lower_member(Member(name=None, value_shape=KeywordShape("string"))) == ""

    def test_member_without_type_is_skipped(self):
        assert lower_member(Member(name="run", value_shape=None)) == ""
