"""Search type variants and the strategy each one uses.

An expression attribute has no column type of its own, so its search
widget, search modes and condition building come from the strategy
selected by its search type.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from record_attributes.attributes.attribute import Attribute
from record_attributes.attributes.date import DateAttribute
from record_attributes.attributes.number import NumberAttribute, render_number_search
from record_attributes.config import settings
from record_attributes.query import Query, SearchMode

logger = logging.getLogger(__name__)


class SearchType(str, Enum):
    """Value domain of an expression attribute."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"


class SearchStrategy:
    """Search behaviour for one search type."""

    def modes(self, attribute: Attribute) -> list[SearchMode]:
        raise NotImplementedError

    def render(
        self,
        attribute: Attribute,
        record: Mapping[str, Any] | None,
        extended: bool,
        field_prefix: str,
    ) -> str:
        raise NotImplementedError

    def condition(
        self,
        attribute: Attribute,
        query: Query,
        table: str,
        expression: str,
        value: Any,
        mode: SearchMode,
    ) -> str | None:
        """Build the condition for ``expression``, or None for no filter."""
        raise NotImplementedError


class StringSearch(SearchStrategy):
    def modes(self, attribute: Attribute) -> list[SearchMode]:
        return list(Attribute.SEARCH_MODES)

    def render(self, attribute, record, extended, field_prefix):  # type: ignore[no-untyped-def]
        return Attribute.search(attribute, record, extended, field_prefix)

    def condition(self, attribute, query, table, expression, value, mode):  # type: ignore[no-untyped-def]
        if mode == SearchMode.BETWEEN:
            return NumberAttribute.get_between_condition(query, expression, value)
        if value is None or value == "":
            logger.debug("No search condition for %r: empty value", attribute.name)
            return None
        return query.condition(mode, expression, attribute.escape_sql(value))


class NumberSearch(SearchStrategy):
    def modes(self, attribute: Attribute) -> list[SearchMode]:
        return list(NumberAttribute.SEARCH_MODES)

    def render(self, attribute, record, extended, field_prefix):  # type: ignore[no-untyped-def]
        return render_number_search(attribute, record, extended, field_prefix)

    def condition(self, attribute, query, table, expression, value, mode):  # type: ignore[no-untyped-def]
        value, mode = NumberAttribute.process_search_value(value, mode)
        if mode == SearchMode.BETWEEN:
            return NumberAttribute.get_between_condition(query, expression, value)

        bound = NumberAttribute.pick_bound(value)
        if bound is None:
            logger.debug("No search condition for %r: empty range", attribute.name)
            return None
        return query.condition(mode, expression, attribute.escape_sql(bound))


class DateSearch(SearchStrategy):
    def _transient(self, attribute: Attribute) -> DateAttribute:
        # Stand-in column attribute; it is never added to the entity type
        date = DateAttribute(attribute.name, search_size=settings.date_search_size)
        date.attach(attribute.owner)
        return date

    def modes(self, attribute: Attribute) -> list[SearchMode]:
        return list(DateAttribute.SEARCH_MODES)

    def render(self, attribute, record, extended, field_prefix):  # type: ignore[no-untyped-def]
        return self._transient(attribute).search(record, extended, field_prefix)

    def condition(self, attribute, query, table, expression, value, mode):  # type: ignore[no-untyped-def]
        return self._transient(attribute).get_search_condition(query, table, value, mode, expression)


STRATEGIES: dict[SearchType, SearchStrategy] = {
    SearchType.STRING: StringSearch(),
    SearchType.NUMBER: NumberSearch(),
    SearchType.DATE: DateSearch(),
}


def strategy_for(search_type: SearchType | str) -> SearchStrategy:
    """Return the strategy for a search type."""
    return STRATEGIES[SearchType(search_type)]
