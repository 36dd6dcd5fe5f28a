"""Numeric attribute and the numeric search strategy helpers."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from markupsafe import Markup

from record_attributes.attributes.attribute import Attribute
from record_attributes.flags import AttributeFlag
from record_attributes.query import Query, SearchMode, escape_sql

logger = logging.getLogger(__name__)

# A search value split into its lower and upper bound ("" when unset)
SearchRange = dict[str, str]


def _clean(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _as_number(value: str) -> float | None:
    try:
        return float(value)
    except ValueError:
        return None


def render_number_search(
    attribute: Attribute,
    record: Mapping[str, Any] | None,
    extended: bool,
    field_prefix: str,
) -> str:
    """Render the numeric search widget on behalf of ``attribute``.

    The simple widget is one input that also accepts ``from/to``; the
    extended widget has separate from and to inputs.
    """
    value = (record or {}).get(attribute.name)
    name = attribute.search_field_name(field_prefix)
    size = attribute.search_size

    if not extended:
        if isinstance(value, Mapping):
            value = value.get("from")
        return Markup(
            '<input type="text" id="{id}" name="{name}" class="form-control" value="{value}" size="{size}">'
        ).format(id=name, name=name, value=_clean(value), size=size)

    bounds = value if isinstance(value, Mapping) else {"from": value, "to": ""}
    inputs = [
        Markup('{label} <input type="text" id="{id}_{key}" name="{name}[{key}]" value="{value}" size="{size}">').format(
            label=attribute.text(f"search_{key}"),
            id=name,
            name=name,
            key=key,
            value=_clean(bounds.get(key)),
            size=size,
        )
        for key in ("from", "to")
    ]
    return Markup(" ").join(inputs)


class NumberAttribute(Attribute):
    """A numeric column with range-aware searching."""

    SEARCH_MODES: list[SearchMode] = [
        SearchMode.EXACT,
        SearchMode.BETWEEN,
        SearchMode.GREATER_THAN,
        SearchMode.GREATER_THAN_EQUAL,
        SearchMode.LESS_THAN,
        SearchMode.LESS_THAN_EQUAL,
    ]

    def __init__(
        self,
        name: str,
        flags: AttributeFlag | int = AttributeFlag.NONE,
        *,
        decimals: int | None = None,
        label: str | None = None,
    ) -> None:
        super().__init__(name, flags, label=label)
        self.decimals = decimals
        self.search_size = 10

    def db_field_type(self) -> str:
        return "decimal" if self.decimals else "number"

    def search(
        self,
        record: Mapping[str, Any] | None = None,
        extended: bool = False,
        field_prefix: str = "",
    ) -> str:
        return render_number_search(self, record, extended, field_prefix)

    @staticmethod
    def process_search_value(value: Any, search_mode: SearchMode | str) -> tuple[SearchRange, SearchMode]:
        """Normalize search input into a from/to range.

        A mapping is taken as the range. A scalar ``"a/b"`` becomes a range
        and switches the mode to BETWEEN; any other scalar becomes the lower
        bound.

        Returns:
            The range and the (possibly changed) search mode.
        """
        mode = SearchMode.coerce(search_mode)
        if isinstance(value, Mapping):
            return {"from": _clean(value.get("from")), "to": _clean(value.get("to"))}, mode

        text = _clean(value)
        if "/" in text:
            low, high = text.split("/", 1)
            return {"from": low.strip(), "to": high.strip()}, SearchMode.BETWEEN
        return {"from": text, "to": ""}, mode

    @staticmethod
    def get_between_condition(query: Query, field: str, value: Any) -> str | None:
        """Build a range condition; open ends become >= or <= conditions.

        Returns None when neither bound is set.
        """
        if not isinstance(value, Mapping):
            value, _ = NumberAttribute.process_search_value(value, SearchMode.BETWEEN)

        low = _clean(value.get("from"))
        high = _clean(value.get("to"))

        if low and high:
            low_num, high_num = _as_number(low), _as_number(high)
            if low_num is not None and high_num is not None and low_num > high_num:
                low, high = high, low
            return query.between_condition(field, escape_sql(low), escape_sql(high))
        if low:
            return query.greaterthanequal_condition(field, escape_sql(low))
        if high:
            return query.lessthanequal_condition(field, escape_sql(high))
        return None

    @staticmethod
    def pick_bound(value: SearchRange) -> str | None:
        """Single-value modes use the lower bound, else the upper bound."""
        if value["from"] != "":
            return value["from"]
        if value["to"] != "":
            return value["to"]
        return None

    def get_search_condition(
        self,
        query: Query,
        table: str,
        value: Any,
        search_mode: SearchMode | str,
        field_name: str = "",
    ) -> str | None:
        column = field_name or f"{table}.{self.name}"
        value, mode = self.process_search_value(value, search_mode)
        if mode == SearchMode.BETWEEN:
            return self.get_between_condition(query, column, value)

        bound = self.pick_bound(value)
        if bound is None:
            logger.debug("No search condition for %r: empty range", self.name)
            return None
        return query.condition(mode, column, self.escape_sql(bound))
