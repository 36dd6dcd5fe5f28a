"""Attribute types."""

from record_attributes.attributes.attribute import Attribute
from record_attributes.attributes.date import DateAttribute
from record_attributes.attributes.expression import ExpressionAttribute
from record_attributes.attributes.fieldset import FieldSet
from record_attributes.attributes.number import NumberAttribute
from record_attributes.attributes.search_types import SearchStrategy, SearchType, strategy_for

__all__ = [
    "Attribute",
    "DateAttribute",
    "ExpressionAttribute",
    "FieldSet",
    "NumberAttribute",
    "SearchStrategy",
    "SearchType",
    "strategy_for",
]
