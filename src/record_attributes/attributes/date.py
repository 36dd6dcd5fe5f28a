"""Date attribute."""

from __future__ import annotations

import datetime
import logging
from collections.abc import Mapping
from typing import Any

from markupsafe import Markup

from record_attributes.attributes.attribute import Attribute
from record_attributes.flags import AttributeFlag
from record_attributes.query import Query, SearchMode, escape_sql

logger = logging.getLogger(__name__)


def parse_date(value: Any) -> datetime.date | None:
    """Parse a date from a date object, a {year, month, day} mapping or an ISO string.

    Returns None for empty or invalid input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime.datetime):
        return value.date()
    if isinstance(value, datetime.date):
        return value
    try:
        if isinstance(value, Mapping):
            return datetime.date(int(value["year"]), int(value["month"]), int(value["day"]))
        return datetime.date.fromisoformat(str(value).strip())
    except (KeyError, TypeError, ValueError):
        logger.debug("Ignoring invalid date search value %r", value)
        return None


class DateAttribute(Attribute):
    """A date column searched by exact date or date range."""

    SEARCH_MODES: list[SearchMode] = [
        SearchMode.BETWEEN,
        SearchMode.EXACT,
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
        search_size: int | None = None,
        label: str | None = None,
    ) -> None:
        super().__init__(name, flags, label=label)
        if search_size is not None:
            self.search_size = search_size

    def db_field_type(self) -> str:
        return "date"

    def display(self, record: Mapping[str, Any], mode: str = "") -> str:
        date = parse_date(self.value(record))
        return date.isoformat() if date is not None else ""

    def search(
        self,
        record: Mapping[str, Any] | None = None,
        extended: bool = False,
        field_prefix: str = "",
    ) -> str:
        value = (record or {}).get(self.name)
        name = self.search_field_name(field_prefix)
        if not extended:
            if isinstance(value, Mapping):
                value = value.get("from")
            return Markup(
                '<input type="date" id="{id}" name="{name}" class="form-control" value="{value}" size="{size}">'
            ).format(id=name, name=name, value=value or "", size=self.search_size)

        bounds = value if isinstance(value, Mapping) else {"from": value}
        inputs = [
            Markup('{label} <input type="date" id="{id}_{key}" name="{name}[{key}]" value="{value}" size="{size}">').format(
                label=self.text(f"search_{key}"),
                id=name,
                name=name,
                key=key,
                value=bounds.get(key) or "",
                size=self.search_size,
            )
            for key in ("from", "to")
        ]
        return Markup(" ").join(inputs)

    def get_search_condition(
        self,
        query: Query,
        table: str,
        value: Any,
        search_mode: SearchMode | str,
        field_name: str = "",
    ) -> str | None:
        """Build a date condition; ``field_name`` overrides the column reference.

        A mapping with ``from``/``to`` (or a ``"from/to"`` string) searches a
        range. Returns None when no valid date was given.
        """
        mode = SearchMode.coerce(search_mode)
        column = field_name or f"{table}.{self.name}"

        if isinstance(value, Mapping) and ("from" in value or "to" in value):
            low, high = parse_date(value.get("from")), parse_date(value.get("to"))
            mode = SearchMode.BETWEEN
        elif isinstance(value, str) and "/" in value:
            first, second = value.split("/", 1)
            low, high = parse_date(first), parse_date(second)
            mode = SearchMode.BETWEEN
        else:
            low = high = parse_date(value)

        if mode == SearchMode.BETWEEN:
            if low and high:
                if low > high:
                    low, high = high, low
                return query.between_condition(column, low.isoformat(), high.isoformat())
            if low:
                return query.greaterthanequal_condition(column, low.isoformat())
            if high:
                return query.lessthanequal_condition(column, high.isoformat())
            return None

        if low is None:
            return None
        return query.condition(mode, column, escape_sql(low.isoformat()))
