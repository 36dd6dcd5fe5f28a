"""Record Attributes - expression and fieldset attributes for record-oriented entity types."""

from record_attributes.attributes import (
    Attribute,
    DateAttribute,
    ExpressionAttribute,
    FieldSet,
    NumberAttribute,
    SearchType,
)
from record_attributes.datagrid import DataGrid, DataGridSummary, SummaryContext
from record_attributes.entity import EntityType
from record_attributes.errors import (
    AttributeConfigError,
    DuplicateAttributeError,
    RecordError,
    UnknownAttributeError,
    UnknownSearchModeError,
)
from record_attributes.flags import AttributeFlag, DisabledMode, Load, RenderKind, Storage
from record_attributes.language import Translator
from record_attributes.query import Query, SearchMode
from record_attributes.template import StringParser

__all__ = [
    # Main API
    "EntityType",
    "Query",
    "StringParser",
    # Attributes
    "Attribute",
    "DateAttribute",
    "ExpressionAttribute",
    "FieldSet",
    "NumberAttribute",
    "SearchType",
    "SearchMode",
    # Flags
    "AttributeFlag",
    "DisabledMode",
    "Load",
    "RenderKind",
    "Storage",
    # Data grid
    "DataGrid",
    "DataGridSummary",
    "SummaryContext",
    # Errors
    "AttributeConfigError",
    "DuplicateAttributeError",
    "RecordError",
    "UnknownAttributeError",
    "UnknownSearchModeError",
    "Translator",
]

__version__ = "0.1.0"
