"""Tests for the query builder and search modes."""

import pytest

from record_attributes.errors import UnknownSearchModeError
from record_attributes.query import CONDITION_BUILDERS, Query, SearchMode, escape_sql


class TestSearchMode:
    """Tests for SearchMode."""

    def test_coerce_name(self):
        """Test coercing mode names."""
        assert SearchMode.coerce("exact") is SearchMode.EXACT
        assert SearchMode.coerce("GreaterThanEqual") is SearchMode.GREATER_THAN_EQUAL
        assert SearchMode.coerce(SearchMode.BETWEEN) is SearchMode.BETWEEN

    def test_coerce_unknown(self):
        """Test that unknown modes are rejected."""
        with pytest.raises(UnknownSearchModeError):
            SearchMode.coerce("fuzzy")

    def test_every_single_value_mode_has_builder(self):
        """Test that all modes except between build through the lookup table."""
        assert set(CONDITION_BUILDERS) == set(SearchMode) - {SearchMode.BETWEEN}
        for builder in CONDITION_BUILDERS.values():
            assert callable(getattr(Query, builder))


class TestEscape:
    """Tests for escape_sql."""

    def test_quotes_doubled(self):
        assert escape_sql("O'Brien") == "O''Brien"

    def test_backslash_escaped(self):
        assert escape_sql("a\\b") == "a\\\\b"

    def test_non_string(self):
        assert escape_sql(42) == "42"


class TestConditions:
    """Tests for condition builders."""

    def test_exact(self):
        assert Query().exact_condition("t.a", "x") == "t.a = 'x'"

    def test_substring(self):
        assert Query().substring_condition("t.a", "x") == "UPPER(t.a) LIKE UPPER('%x%')"

    def test_wildcard(self):
        assert Query().wildcard_condition("t.a", "a*b") == "UPPER(t.a) LIKE UPPER('a%b')"

    def test_comparisons(self):
        query = Query()
        assert query.greaterthan_condition("t.a", "1") == "t.a > '1'"
        assert query.greaterthanequal_condition("t.a", "1") == "t.a >= '1'"
        assert query.lessthan_condition("t.a", "1") == "t.a < '1'"
        assert query.lessthanequal_condition("t.a", "1") == "t.a <= '1'"

    def test_between(self):
        assert Query().between_condition("t.a", "1", "9") == "t.a BETWEEN '1' AND '9'"

    def test_condition_dispatch(self):
        """Test dispatching by mode."""
        query = Query()
        assert query.condition("exact", "t.a", "x") == "t.a = 'x'"
        assert query.condition(SearchMode.REGEXP, "t.a", "^x") == "t.a REGEXP '^x'"

    def test_condition_rejects_between(self):
        """Test that range mode cannot be built from a single value."""
        with pytest.raises(UnknownSearchModeError):
            Query().condition(SearchMode.BETWEEN, "t.a", "x")

    def test_condition_rejects_unknown(self):
        with pytest.raises(UnknownSearchModeError):
            Query().condition("nearby", "t.a", "x")


class TestBuildSelect:
    """Tests for rendering a SELECT statement."""

    def test_fields_and_expressions(self):
        """Test columns followed by aliased expressions."""
        query = Query("customers")
        query.add_field("name", "customers")
        query.add_expression("total", "SELECT 1", "c_")

        assert query.build_select() == "SELECT customers.name, (SELECT 1) AS c_total FROM customers"

    def test_field_alias(self):
        query = Query()
        query.add_field("name", "t", "p_")

        assert query.fields == ["t.name AS p_name"]

    def test_conditions_order_limit(self):
        """Test WHERE, ORDER BY and LIMIT clauses."""
        query = Query("t")
        query.add_condition("t.a = '1'")
        query.add_condition(None)
        query.add_condition("t.b > '2'")
        query.add_order_by("t.a DESC")
        query.set_limit(10, 20)

        assert query.build_select() == (
            "SELECT * FROM t WHERE (t.a = '1') AND (t.b > '2') ORDER BY t.a DESC LIMIT 10 OFFSET 20"
        )

    def test_no_limit(self):
        """Test that a -1 limit renders no LIMIT clause."""
        query = Query("t")
        query.set_limit(-1)

        assert query.build_select() == "SELECT * FROM t"
