"""Base attribute: a named logical field on an entity type."""

from __future__ import annotations

import logging
import weakref
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from markupsafe import Markup, escape

from record_attributes.config import settings
from record_attributes.errors import AttributeConfigError, RecordError
from record_attributes.flags import AttributeFlag, DisabledMode, Load, Storage
from record_attributes.language import Translator, humanize
from record_attributes.query import Query, SearchMode, escape_sql

if TYPE_CHECKING:
    from record_attributes.entity import EntityType

logger = logging.getLogger(__name__)

# Flag that hides an attribute in each render/query mode
HIDE_FLAGS: dict[str, AttributeFlag] = {
    "add": AttributeFlag.HIDE_ADD,
    "edit": AttributeFlag.HIDE_EDIT,
    "view": AttributeFlag.HIDE_VIEW,
    "list": AttributeFlag.HIDE_LIST,
    "search": AttributeFlag.HIDE_SEARCH,
}

READONLY_FLAGS: dict[str, AttributeFlag] = {
    "add": AttributeFlag.READONLY_ADD,
    "edit": AttributeFlag.READONLY_EDIT,
}


class Attribute:
    """A stored column rendered as a text input and searched as a string.

    Subclasses override the query, search and render hooks to change how the
    attribute takes part in each pass. The owning entity type is held through
    a weak reference and attached when the attribute is added to it.
    """

    SEARCH_MODES: list[SearchMode] = [
        SearchMode.SUBSTRING,
        SearchMode.EXACT,
        SearchMode.WILDCARD,
        SearchMode.REGEXP,
    ]

    def __init__(
        self,
        name: str,
        flags: AttributeFlag | int = AttributeFlag.NONE,
        *,
        label: str | None = None,
    ) -> None:
        self.name = name
        self.flags = AttributeFlag(flags)
        self.label = label
        self.tabs: list[str] = ["default"]
        self.sections: list[str] = []
        self.disabled_modes = DisabledMode.NONE
        self.search_size = settings.search_size
        self.forced_search_mode: SearchMode | None = None
        self._storage = Storage.ADD_TO_QUERY
        self._load = Load.ADD_TO_QUERY
        self._owner_ref: weakref.ReferenceType[EntityType] | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"

    def field_name(self) -> str:
        return self.name

    # ---- Owner ----

    def attach(self, owner: EntityType | None) -> None:
        """Point this attribute at its owning entity type (non-owning)."""
        self._owner_ref = weakref.ref(owner) if owner is not None else None

    @property
    def owner(self) -> EntityType | None:
        """The owning entity type, or None when detached."""
        return self._owner_ref() if self._owner_ref is not None else None

    def require_owner(self) -> EntityType:
        """Return the owning entity type, raising if the attribute is detached."""
        owner = self.owner
        if owner is None:
            raise AttributeConfigError(f"Attribute '{self.name}' is not attached to an entity type")
        return owner

    def text(self, key: str, default: str | None = None) -> str:
        """Look up localized text through the owner, or the default catalogue."""
        owner = self.owner
        if owner is not None:
            return owner.text(key, default)
        return Translator().text(key, default=default)

    # ---- Flags and placement ----

    def has_flag(self, flag: AttributeFlag) -> bool:
        """Return whether every bit of ``flag`` is set."""
        return (self.flags & flag) == flag

    def add_flag(self, flag: AttributeFlag) -> None:
        self.flags |= flag

    def remove_flag(self, flag: AttributeFlag) -> None:
        self.flags &= ~flag

    def is_hidden(self, mode: str) -> bool:
        """Return whether the attribute is flagged hidden for ``mode``."""
        flag = HIDE_FLAGS.get(mode)
        return flag is not None and self.has_flag(flag)

    def is_readonly(self, mode: str) -> bool:
        flag = READONLY_FLAGS.get(mode)
        return flag is not None and self.has_flag(flag)

    def add_disabled_mode(self, mode: DisabledMode) -> None:
        self.disabled_modes |= mode

    def has_disabled_mode(self, mode: DisabledMode) -> bool:
        return (self.disabled_modes & mode) == mode

    def set_tabs(self, tabs: Sequence[str]) -> None:
        self.tabs = list(tabs)

    def get_tabs(self) -> list[str]:
        return list(self.tabs)

    def set_sections(self, sections: Sequence[str]) -> None:
        self.sections = list(sections)

    def get_sections(self) -> list[str]:
        return list(self.sections)

    def post_init(self) -> None:
        """Hook run once by the owner after all attributes are added."""
        pass

    # ---- Storage ----

    def storage_type(self, mode: str = "") -> Storage:
        return self._storage

    def set_storage_type(self, storage: Storage) -> None:
        self._storage = storage

    def load_type(self, mode: str = "") -> Load:
        return self._load

    def set_load_type(self, load: Load) -> None:
        self._load = load

    def db_field_type(self) -> str:
        return "varchar"

    def escape_sql(self, value: Any) -> str:
        return escape_sql(value)

    # ---- Query ----

    def add_to_query(
        self,
        query: Query,
        table_name: str = "",
        alias_prefix: str = "",
        record: Mapping[str, Any] | None = None,
        level: int = 0,
        mode: str = "",
    ) -> None:
        """Add this attribute's column to a SELECT query."""
        query.add_field(self.name, table_name, alias_prefix)

    def get_order_by_statement(
        self, extra: Sequence[str] | None = None, table: str = "", direction: str = "ASC"
    ) -> str:
        """Return an ORDER BY fragment for this attribute."""
        if not table:
            table = self.require_owner().table
        result = f"{table}.{self.name}"
        return f"{result} {direction}" if direction else result

    # ---- Search ----

    def get_search_modes(self) -> list[SearchMode]:
        return list(self.SEARCH_MODES)

    def set_forced_search_mode(self, mode: SearchMode | str | None) -> None:
        """Force a search mode regardless of what callers ask for.

        Only :class:`ExpressionAttribute` honours the forced mode.
        """
        self.forced_search_mode = SearchMode.coerce(mode) if mode is not None else None

    def search_field_name(self, field_prefix: str = "") -> str:
        return f"{field_prefix}{self.name}"

    def search(
        self,
        record: Mapping[str, Any] | None = None,
        extended: bool = False,
        field_prefix: str = "",
    ) -> str:
        """Return the HTML search input for this attribute."""
        value = (record or {}).get(self.name)
        if isinstance(value, Mapping):
            value = value.get("from")
        name = self.search_field_name(field_prefix)
        return Markup(
            '<input type="text" id="{id}" name="{name}" class="form-control" value="{value}" size="{size}">'
        ).format(id=name, name=name, value="" if value is None else value, size=self.search_size)

    def get_search_condition(
        self,
        query: Query,
        table: str,
        value: Any,
        search_mode: SearchMode | str,
        field_name: str = "",
    ) -> str | None:
        """Build a WHERE condition from search input.

        Returns None (no filter) for empty input. Range searches are not
        supported on plain string attributes.
        """
        mode = SearchMode.coerce(search_mode)
        if value is None or value == "":
            logger.debug("No search condition for %r: empty value", self.name)
            return None
        column = field_name or f"{table}.{self.name}"
        return query.condition(mode, column, self.escape_sql(value))

    # ---- Rendering ----

    def value(self, record: Mapping[str, Any]) -> Any:
        return record.get(self.name)

    def get_label(self, record: Mapping[str, Any] | None = None, mode: str = "") -> str:
        if self.label is not None:
            return self.label
        owner = self.owner
        if owner is None:
            return humanize(self.name)
        return owner.text(self.name)

    def edit(self, record: Mapping[str, Any], field_prefix: str = "", mode: str = "") -> str:
        """Return the HTML edit widget."""
        value = self.value(record)
        name = f"{field_prefix}{self.name}"
        return Markup('<input type="text" id="{id}" name="{name}" value="{value}">').format(
            id=name, name=name, value="" if value is None else value
        )

    def display(self, record: Mapping[str, Any], mode: str = "") -> str:
        """Return the HTML-escaped value for view pages."""
        value = self.value(record)
        return "" if value is None else str(escape(value))

    def get_edit(self, mode: str, record: Mapping[str, Any], field_prefix: str = "") -> str:
        """Edit widget for ``mode``; read-only modes render the view instead."""
        if self.is_readonly(mode):
            return self.display(record, mode)
        return self.edit(record, field_prefix, mode)

    def get_view(self, mode: str, record: Mapping[str, Any]) -> str:
        return self.display(record, mode)

    # ---- Validation ----

    def get_error(self, errors: Sequence[RecordError]) -> bool:
        """Return whether any entry in ``errors`` concerns this attribute."""
        return any(error.concerns(self.name) for error in errors)

    def is_empty(self, record: Mapping[str, Any]) -> bool:
        value = self.value(record)
        return value is None or value == ""
