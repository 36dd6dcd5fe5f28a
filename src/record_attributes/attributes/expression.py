"""Attributes whose value is an arbitrary SQL expression."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from record_attributes.attributes.attribute import Attribute
from record_attributes.attributes.search_types import SearchStrategy, SearchType, strategy_for
from record_attributes.config import settings
from record_attributes.flags import AttributeFlag, Storage
from record_attributes.query import Query, SearchMode


class ExpressionAttribute(Attribute):
    """Selects an SQL expression (a subquery, a computed column, ...) as a field.

    The expression may contain the table placeholder (``[table]`` by
    default), which is replaced by the table name of the query the attribute
    is added to. Values are never stored.

    Example::

        ExpressionAttribute(
            "order_count",
            "SELECT COUNT(*) FROM orders WHERE orders.customer_id = [table].id",
            SearchType.NUMBER,
        )
    """

    def __init__(
        self,
        name: str,
        expression: str,
        search_type_or_flags: SearchType | str | AttributeFlag | int = SearchType.STRING,
        flags: AttributeFlag | int = AttributeFlag.NONE,
        *,
        label: str | None = None,
    ) -> None:
        """Initialize an expression attribute.

        Args:
            name: Attribute name, also the alias of the selected expression.
            expression: SQL expression, optionally containing the table placeholder.
            search_type_or_flags: The search type, or the flags when an int is given.
            flags: Attribute flags (used when a search type is given).
            label: Optional fixed label.
        """
        if isinstance(search_type_or_flags, int):
            flags = search_type_or_flags
            search_type_or_flags = SearchType.STRING

        super().__init__(
            name, AttributeFlag(flags) | AttributeFlag.HIDE_ADD | AttributeFlag.READONLY_EDIT, label=label
        )
        self._expression = expression
        self._search_type = SearchType(search_type_or_flags)
        self.set_storage_type(Storage.NONE)

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def search_type(self) -> SearchType:
        return self._search_type

    def get_search_type(self) -> SearchType:
        return self._search_type

    @property
    def strategy(self) -> SearchStrategy:
        return strategy_for(self._search_type)

    def expression_for(self, table: str) -> str:
        """Return the expression with the table placeholder replaced."""
        return self._expression.replace(settings.table_placeholder, table)

    def storage_type(self, mode: str = "") -> Storage:
        return Storage.NONE

    def db_field_type(self) -> str:
        # No known column type, and never stored anyway
        return ""

    def add_to_query(
        self,
        query: Query,
        table_name: str = "",
        alias_prefix: str = "",
        record: Mapping[str, Any] | None = None,
        level: int = 0,
        mode: str = "",
    ) -> None:
        query.add_expression(self.name, self.expression_for(table_name), alias_prefix)

    def get_order_by_statement(
        self, extra: Sequence[str] | None = None, table: str = "", direction: str = "ASC"
    ) -> str:
        """Return ``(expression)``, case folded for string expressions."""
        if not table:
            table = self.require_owner().table

        result = f"({self.expression_for(table)})"
        if self._search_type == SearchType.STRING:
            result = f"{settings.case_fold_function}({result})"
        return f"{result} {direction}" if direction else result

    def get_search_modes(self) -> list[SearchMode]:
        return self.strategy.modes(self)

    def search(
        self,
        record: Mapping[str, Any] | None = None,
        extended: bool = False,
        field_prefix: str = "",
    ) -> str:
        return self.strategy.render(self, record, extended, field_prefix)

    def get_search_condition(
        self,
        query: Query,
        table: str,
        value: Any,
        search_mode: SearchMode | str,
        field_name: str = "",
    ) -> str | None:
        """Build a search condition on the wrapped expression.

        A forced search mode set on the attribute replaces ``search_mode``.
        Returns None when no condition applies (empty input).
        """
        if self.forced_search_mode is not None:
            search_mode = self.forced_search_mode
        mode = SearchMode.coerce(search_mode)

        expression = f"({self.expression_for(table)})"
        return self.strategy.condition(self, query, table, expression, value, mode)
