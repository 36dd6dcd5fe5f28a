"""SQL query builder used by the attribute query and search passes."""

from __future__ import annotations

from enum import Enum
from typing import Any

from record_attributes.errors import UnknownSearchModeError


class SearchMode(str, Enum):
    """Operators that turn user search input into a filter condition."""

    EXACT = "exact"
    SUBSTRING = "substring"
    WILDCARD = "wildcard"
    REGEXP = "regexp"
    SOUNDEX = "soundex"
    GREATER_THAN = "greaterthan"
    GREATER_THAN_EQUAL = "greaterthanequal"
    LESS_THAN = "lessthan"
    LESS_THAN_EQUAL = "lessthanequal"
    BETWEEN = "between"

    @classmethod
    def coerce(cls, mode: SearchMode | str) -> SearchMode:
        """Return ``mode`` as a SearchMode, rejecting unknown names."""
        if isinstance(mode, SearchMode):
            return mode
        try:
            return cls(str(mode).lower())
        except ValueError:
            raise UnknownSearchModeError(mode) from None


# Single-value modes and the Query method that builds each condition
CONDITION_BUILDERS: dict[SearchMode, str] = {
    SearchMode.EXACT: "exact_condition",
    SearchMode.SUBSTRING: "substring_condition",
    SearchMode.WILDCARD: "wildcard_condition",
    SearchMode.REGEXP: "regexp_condition",
    SearchMode.SOUNDEX: "soundex_condition",
    SearchMode.GREATER_THAN: "greaterthan_condition",
    SearchMode.GREATER_THAN_EQUAL: "greaterthanequal_condition",
    SearchMode.LESS_THAN: "lessthan_condition",
    SearchMode.LESS_THAN_EQUAL: "lessthanequal_condition",
}


def escape_sql(value: Any) -> str:
    """Escape a value for use inside a single-quoted SQL literal."""
    return str(value).replace("\\", "\\\\").replace("'", "''")


class Query:
    """Collects the parts of a SELECT statement.

    Values handed to the ``*_condition`` builders must already be escaped
    with :func:`escape_sql`.
    """

    def __init__(self, table: str = "", alias: str = "") -> None:
        self.tables: list[str] = []
        self.fields: list[str] = []
        self.expressions: list[tuple[str, str]] = []
        self.conditions: list[str] = []
        self.order_by: list[str] = []
        self.limit: int | None = None
        self.offset: int = 0
        if table:
            self.add_table(table, alias)

    def add_table(self, table: str, alias: str = "") -> None:
        """Add a table to the FROM clause."""
        self.tables.append(f"{table} {alias}" if alias else table)

    def add_field(self, name: str, table: str = "", alias_prefix: str = "") -> None:
        """Select a stored column."""
        column = f"{table}.{name}" if table else name
        if alias_prefix:
            column = f"{column} AS {alias_prefix}{name}"
        self.fields.append(column)

    def add_expression(self, name: str, expression: str, alias_prefix: str = "") -> None:
        """Select a computed expression under the alias ``alias_prefix + name``."""
        self.expressions.append((f"{alias_prefix}{name}", expression))

    def add_condition(self, condition: str | None) -> None:
        """Add a WHERE condition; ``None`` (no filter) is ignored."""
        if condition:
            self.conditions.append(condition)

    def add_order_by(self, statement: str) -> None:
        self.order_by.append(statement)

    def set_limit(self, limit: int | None, offset: int = 0) -> None:
        self.limit = limit
        self.offset = offset

    # ---- Condition builders ----

    def exact_condition(self, field: str, value: str) -> str:
        return f"{field} = '{value}'"

    def substring_condition(self, field: str, value: str) -> str:
        return f"UPPER({field}) LIKE UPPER('%{value}%')"

    def wildcard_condition(self, field: str, value: str) -> str:
        return f"UPPER({field}) LIKE UPPER('{value.replace('*', '%')}')"

    def regexp_condition(self, field: str, value: str) -> str:
        return f"{field} REGEXP '{value}'"

    def soundex_condition(self, field: str, value: str) -> str:
        return f"SOUNDEX({field}) = SOUNDEX('{value}')"

    def greaterthan_condition(self, field: str, value: str) -> str:
        return f"{field} > '{value}'"

    def greaterthanequal_condition(self, field: str, value: str) -> str:
        return f"{field} >= '{value}'"

    def lessthan_condition(self, field: str, value: str) -> str:
        return f"{field} < '{value}'"

    def lessthanequal_condition(self, field: str, value: str) -> str:
        return f"{field} <= '{value}'"

    def between_condition(self, field: str, value_from: str, value_to: str) -> str:
        return f"{field} BETWEEN '{value_from}' AND '{value_to}'"

    def condition(self, mode: SearchMode | str, field: str, value: str) -> str:
        """Build the single-value condition for ``mode``.

        Raises:
            UnknownSearchModeError: If the mode is unknown or needs a range
                (``between``).
        """
        mode = SearchMode.coerce(mode)
        builder = CONDITION_BUILDERS.get(mode)
        if builder is None:
            raise UnknownSearchModeError(mode.value)
        return getattr(self, builder)(field, value)

    # ---- Rendering ----

    def build_select(self) -> str:
        """Render the collected parts as a SELECT statement."""
        columns = list(self.fields)
        columns += [f"({expression}) AS {alias}" for alias, expression in self.expressions]

        sql = f"SELECT {', '.join(columns) or '*'}"
        if self.tables:
            sql += f" FROM {', '.join(self.tables)}"
        if self.conditions:
            sql += " WHERE " + " AND ".join(f"({c})" for c in self.conditions)
        if self.order_by:
            sql += f" ORDER BY {', '.join(self.order_by)}"
        if self.limit is not None and self.limit >= 0:
            sql += f" LIMIT {self.limit}"
            if self.offset:
                sql += f" OFFSET {self.offset}"
        return sql
