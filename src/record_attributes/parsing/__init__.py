"""Parsing module for the template placeholder language."""

from record_attributes.parsing.template_parser import (
    FieldReference,
    Segment,
    TemplateParser,
    TextSegment,
)

__all__ = [
    "FieldReference",
    "Segment",
    "TemplateParser",
    "TextSegment",
]
