"""String templates with [field] placeholders."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from record_attributes.parsing import FieldReference, Segment, TemplateParser, TextSegment


class StringParser:
    """Substitutes values into a template such as ``"[start] - [end] of [count]"``.

    Placeholders may reference nested values with dots (``[address.city]``).
    The template is parsed once, on first use.
    """

    def __init__(self, template: str) -> None:
        self.template = template
        self._segments: list[Segment] | None = None

    @property
    def segments(self) -> list[Segment]:
        """Return the parsed template segments."""
        if self._segments is None:
            self._segments = TemplateParser().parse(self.template)
        return self._segments

    def get_fields(self) -> list[str]:
        """Return the placeholder references in template order.

        Duplicates are kept; callers that need each field once should
        deduplicate themselves.
        """
        return [s.name for s in self.segments if isinstance(s, FieldReference)]

    def parse(self, data: Mapping[str, Any]) -> str:
        """Return the template with every placeholder substituted.

        References missing from ``data`` are replaced by an empty string.
        """
        parts: list[str] = []
        for segment in self.segments:
            if isinstance(segment, TextSegment):
                parts.append(segment.text)
            else:
                value = _lookup(data, segment)
                parts.append("" if value is None else str(value))
        return "".join(parts)


def _lookup(data: Mapping[str, Any], ref: FieldReference) -> Any:
    """Find the value for a reference: full dotted key first, then nested walk."""
    if ref.name in data:
        return data[ref.name]

    value: Any = data
    for step in ref.path:
        if not isinstance(value, Mapping) or step not in value:
            return None
        value = value[step]
    return value
