"""Tests for query-literal detection and table extraction."""

import pytest

from cs_inspector.src.cs_inspector.models.findings import UNKNOWN_TABLE, QueryKind, VariableReference
from cs_inspector.src.cs_inspector.queries import (
    classify_query,
    extract_table,
    is_query_literal,
    literal_value,
)


class TestIsQueryLiteral:
    @pytest.mark.parametrize("text", [
        "Select * from X",
        "insert into T values (1)",
        "UPDATE T SET a = 1",
        "delete from T",
        "FROM T",
        "where a = 1",
        "INTO T",
        "values (1, 2)",
        "SET a = 1",
    ])
    def test_keywords_at_start(self, text):
        assert is_query_literal(text)

    @pytest.mark.parametrize("text", ["my SELECT thing", " SELECT * FROM T", "", "hello"])
    def test_keyword_must_be_at_start(self, text):
        assert not is_query_literal(text)


class TestExtractTable:
    def test_from(self):
        assert extract_table("SELECT * FROM Orders WHERE x=1", "FROM") == "Orders"

    def test_missing_keyword(self):
        assert extract_table("DELETE everything", "FROM") == UNKNOWN_TABLE

    def test_case_insensitive_and_whitespace(self):
        assert extract_table("select id from\n   dbo.Users  where 1=1", "FROM") == "dbo.Users"

    def test_keyword_at_end(self):
        assert extract_table("SELECT 1 FROM", "FROM") == UNKNOWN_TABLE


class TestClassifyQuery:
    def test_kinds_and_tables(self):
        assert classify_query("SELECT name FROM Users", {}).target_table == "Users"
        assert classify_query("INSERT INTO Orders (Id) VALUES (1)", {}).target_table == "Orders"
        assert classify_query("update Products set Price = 2", {}).target_table == "Products"
        delete = classify_query("DELETE FROM Carts", {})
        assert delete.kind is QueryKind.DELETE
        assert delete.target_table == "Carts"

    def test_clause_only_literal_has_no_kind(self):
        query = classify_query("WHERE Id = 3", {})
        assert query.kind is None
        assert query.target_table == UNKNOWN_TABLE

    def test_referenced_variables_in_binding_order(self):
        bindings = {"userId": "42", "limit": "10", "other": "x"}
        query = classify_query("SELECT * FROM T WHERE Id = userId LIMIT limit", bindings)
        assert query.referenced_variables == (
            VariableReference("userId", "42"),
            VariableReference("limit", "10"),
        )


class TestLiteralValue:
    @pytest.mark.parametrize("source,value", [
        ('"SELECT 1"', "SELECT 1"),
        ('@"SELECT 1"', "SELECT 1"),
        ('"""SELECT 1"""', "SELECT 1"),
        ('"SELECT 1"u8', "SELECT 1"),
        ('""', ""),
    ])
    def test_strips_quoting(self, source, value):
        assert literal_value(source) == value
