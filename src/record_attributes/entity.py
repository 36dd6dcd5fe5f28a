"""Entity types: the owners of attributes and the passes run over them."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from typing import Any

from record_attributes.attributes.attribute import Attribute
from record_attributes.errors import (
    AttributeConfigError,
    DuplicateAttributeError,
    RecordError,
    UnknownAttributeError,
)
from record_attributes.flags import AttributeFlag, DisabledMode, Load, Storage
from record_attributes.language import Translator
from record_attributes.query import Query, SearchMode

logger = logging.getLogger(__name__)


class EntityType:
    """An entity type with its ordered attribute registry.

    Entity types are assembled once and reused across requests. After all
    attributes are added, :meth:`init` runs each attribute's ``post_init``
    exactly once; the query and render passes call it implicitly.
    """

    def __init__(
        self,
        type: str,
        table: str | None = None,
        module: str = "",
        translator: Translator | None = None,
    ) -> None:
        """Initialize an entity type.

        Args:
            type: Entity type name.
            table: Table name; defaults to the type name.
            module: Module the entity type belongs to.
            translator: Text lookup for labels; defaults to a new Translator.
        """
        self.type = type
        self.table = table or type
        self.module = module
        self.translator = translator or Translator()
        self._attributes: dict[str, Attribute] = {}
        self._initialized = False

    def __repr__(self) -> str:
        return f"EntityType({self.type!r}, table={self.table!r})"

    def __contains__(self, name: str) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[Attribute]:
        return iter(self._attributes.values())

    # ---- Registry ----

    def add(
        self,
        attribute: Attribute,
        tabs: list[str] | None = None,
        sections: list[str] | None = None,
    ) -> Attribute:
        """Register an attribute and attach it to this entity type."""
        if self._initialized:
            raise AttributeConfigError(
                f"Cannot add attribute '{attribute.name}' to '{self.type}' after init()"
            )
        if attribute.name in self._attributes:
            raise DuplicateAttributeError(self.type, attribute.name)
        if tabs is not None:
            attribute.set_tabs(tabs)
        if sections is not None:
            attribute.set_sections(sections)
        attribute.attach(self)
        self._attributes[attribute.name] = attribute
        return attribute

    def get_attribute(self, name: str) -> Attribute:
        """Get an attribute by name, raising if not found."""
        attribute = self._attributes.get(name)
        if attribute is None:
            raise UnknownAttributeError(self.type, name)
        return attribute

    def attributes(self) -> list[Attribute]:
        return list(self._attributes.values())

    def text(self, key: str, default: str | None = None) -> str:
        return self.translator.text(key, module=self.module, default=default)

    def init(self) -> None:
        """Run every attribute's post-init wiring, once."""
        if self._initialized:
            return
        for attribute in self._attributes.values():
            attribute.post_init()
        self._initialized = True
        logger.debug("Initialized entity type %r with %d attributes", self.type, len(self._attributes))

    # ---- Query passes ----

    def build_select_query(self, mode: str = "select", alias_prefix: str = "") -> Query:
        """Let every loadable attribute add itself to a new SELECT query."""
        self.init()
        query = Query(self.table)
        for attribute in self._attributes.values():
            if attribute.load_type(mode) & Load.ADD_TO_QUERY:
                attribute.add_to_query(query, self.table, alias_prefix, None, 0, mode)
        return query

    def search_query(
        self,
        values: Mapping[str, Any],
        modes: Mapping[str, SearchMode | str] | None = None,
        query: Query | None = None,
    ) -> Query:
        """Add a condition for every search value.

        The mode per attribute defaults to its first search mode. Values for
        attributes hidden from search are ignored; empty values add no
        condition.
        """
        if query is None:
            query = self.build_select_query("search")
        modes = modes or {}
        for name, value in values.items():
            attribute = self.get_attribute(name)
            if attribute.has_flag(AttributeFlag.HIDE_SEARCH):
                logger.debug("Ignoring search value for unsearchable attribute %r", name)
                continue
            mode = modes.get(name) or attribute.get_search_modes()[0]
            query.add_condition(attribute.get_search_condition(query, self.table, value, mode))
        return query

    def order_by(self, name: str, direction: str = "ASC") -> str:
        """Return the ORDER BY fragment for the named attribute."""
        attribute = self.get_attribute(name)
        if attribute.has_flag(AttributeFlag.NO_SORT):
            raise AttributeConfigError(f"Attribute '{name}' of '{self.type}' cannot be sorted")
        return attribute.get_order_by_statement(table=self.table, direction=direction)

    def storable_attributes(self, mode: str = "add") -> list[Attribute]:
        """Attributes that take part in INSERT/UPDATE statements."""
        return [a for a in self._attributes.values() if a.storage_type(mode) != Storage.NONE]

    # ---- Validation ----

    def validate(self, record: Mapping[str, Any], mode: str = "add") -> list[RecordError]:
        """Check obligatory attributes; returns the error list."""
        errors: list[RecordError] = []
        for attribute in self._attributes.values():
            if not attribute.has_flag(AttributeFlag.OBLIGATORY) or attribute.is_hidden(mode):
                continue
            if attribute.is_empty(record):
                errors.append(RecordError((attribute.name,), self.text("error_obligatoryfield")))
        return errors

    # ---- Render passes ----

    def render_edit(self, record: Mapping[str, Any], mode: str = "edit", field_prefix: str = "") -> dict[str, str]:
        """Edit HTML per attribute, skipping hidden and disabled attributes."""
        self.init()
        return {
            a.name: a.get_edit(mode, record, field_prefix)
            for a in self._attributes.values()
            if not a.is_hidden(mode) and not a.has_disabled_mode(DisabledMode.EDIT)
        }

    def render_view(self, record: Mapping[str, Any], mode: str = "view") -> dict[str, str]:
        """View HTML per attribute, skipping hidden and disabled attributes."""
        self.init()
        return {
            a.name: a.get_view(mode, record)
            for a in self._attributes.values()
            if not a.is_hidden(mode) and not a.has_disabled_mode(DisabledMode.VIEW)
        }
