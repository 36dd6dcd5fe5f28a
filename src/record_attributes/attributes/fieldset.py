"""Fieldsets: several attributes rendered together through a template."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from markupsafe import Markup, escape

from record_attributes.attributes.attribute import Attribute
from record_attributes.config import settings
from record_attributes.errors import RecordError
from record_attributes.flags import AttributeFlag, DisabledMode, Load, RenderKind, Storage
from record_attributes.parsing import FieldReference
from record_attributes.template import StringParser

logger = logging.getLogger(__name__)


class FieldSet(Attribute):
    """Combines multiple attributes into one attribute in edit and view mode.

    The template references attributes as ``[name]`` (or ``[name.sub]``),
    e.g. ``"[street] [number], [zipcode] [city]"``. Referenced attributes are
    taken out of the normal per-field layout and rendered inside the
    fieldset instead.
    """

    def __init__(self, name: str, template: str, flags: AttributeFlag | int = AttributeFlag.NONE) -> None:
        super().__init__(name, AttributeFlag(flags) | AttributeFlag.NO_SORT | AttributeFlag.HIDE_SEARCH)
        self._template = ""
        self._parser: StringParser | None = None
        self.set_template(template)
        self.set_load_type(Load.NONE)
        self.set_storage_type(Storage.NONE)

    def is_empty(self, record: Mapping[str, Any]) -> bool:
        # Never empty, so an obligatory fieldset is only a visual cue
        return False

    # ---- Template ----

    def get_template(self) -> str:
        return self._template

    def set_template(self, template: str) -> None:
        """Replace the template; field references are re-read on next use."""
        self._template = template
        self._parser = None

    template = property(get_template, set_template)

    @property
    def parser(self) -> StringParser:
        if self._parser is None:
            self._parser = StringParser(self._template)
        return self._parser

    def _references(self) -> list[FieldReference]:
        return [s for s in self.parser.segments if isinstance(s, FieldReference)]

    def field_references(self) -> list[str]:
        """Referenced fields, deduplicated, in template order."""
        return list(dict.fromkeys(self.parser.get_fields()))

    def attribute_names(self) -> list[str]:
        """Names of the constituent attributes, deduplicated."""
        return list(dict.fromkeys(ref.attribute for ref in self._references()))

    def constituents(self) -> list[Attribute]:
        """Resolve every constituent through the owner.

        Raises:
            UnknownAttributeError: If the template references a missing attribute.
        """
        owner = self.require_owner()
        return [owner.get_attribute(name) for name in self.attribute_names()]

    # ---- Owner wiring ----

    def post_init(self) -> None:
        """Disable normal rendering of the constituents and move them to our tabs/sections."""
        for attr in self.constituents():
            attr.add_disabled_mode(DisabledMode.VIEW | DisabledMode.EDIT)
            attr.set_tabs(self.get_tabs())
            attr.set_sections(self.get_sections())
            logger.debug("Fieldset %r takes over rendering of %r", self.name, attr.name)

    # ---- Validation ----

    def get_error(self, errors: Sequence[RecordError]) -> bool:
        """Return whether any constituent attribute has an error."""
        owner = self.require_owner()
        for name in self.attribute_names():
            if owner.get_attribute(name).get_error(errors):
                return True
        return False

    # ---- Rendering ----

    def _render_field(self, kind: RenderKind, attr: Attribute, record: Mapping[str, Any], mode: str, field_prefix: str) -> str:
        if kind is RenderKind.EDIT:
            if attr.is_hidden(mode):
                return ""
            return attr.get_edit(mode, record, field_prefix)
        if mode == "view" and attr.has_flag(AttributeFlag.HIDE_VIEW):
            return ""
        return attr.get_view(mode, record)

    def render_fieldset(
        self,
        kind: RenderKind,
        record: Mapping[str, Any],
        mode: str = "",
        field_prefix: str = "",
    ) -> str:
        """Render every constituent and substitute them into the template."""
        owner = self.require_owner()
        rendered: dict[str, str] = {}
        replacements: dict[str, str] = {}

        for ref in self._references():
            attr_name = ref.attribute
            if attr_name not in rendered:
                attr = owner.get_attribute(attr_name)
                field = self._render_field(kind, attr, record, mode, field_prefix)
                if field:
                    label = "" if attr.has_flag(AttributeFlag.NO_LABEL) else f"{escape(attr.get_label(record, mode))}: "
                    # The id lets a partial refresh replace just this field
                    field = Markup('{label}<div id="{module}_{type}_{name}">{field}</div>').format(
                        label=Markup(label),
                        module=owner.module,
                        type=owner.type,
                        name=attr_name,
                        field=Markup(field),
                    )
                rendered[attr_name] = field
            replacements[ref.name] = rendered[attr_name]

        return Markup('<div class="{css}">{body}</div>').format(
            css=settings.fieldset_css_class,
            body=Markup(self.parser.parse(replacements)),
        )

    def edit(self, record: Mapping[str, Any], field_prefix: str = "", mode: str = "") -> str:
        return self.render_fieldset(RenderKind.EDIT, record, mode, field_prefix)

    def display(self, record: Mapping[str, Any], mode: str = "") -> str:
        return self.render_fieldset(RenderKind.DISPLAY, record, mode)
