"""Exceptions and validation error entries."""

from __future__ import annotations

from dataclasses import dataclass


class AttributeConfigError(Exception):
    """Raised for attribute definitions that can never work (developer mistakes)."""

    pass


class UnknownAttributeError(AttributeConfigError, KeyError):
    """Raised when an attribute name is not registered on the entity type."""

    def __init__(self, entity_type: str, name: str):
        self.entity_type = entity_type
        self.name = name
        super().__init__(f"Attribute '{name}' not found on entity type '{entity_type}'")

    def __str__(self) -> str:
        return self.args[0]


class DuplicateAttributeError(AttributeConfigError, ValueError):
    """Raised when an entity type already has an attribute with the same name."""

    def __init__(self, entity_type: str, name: str):
        self.entity_type = entity_type
        self.name = name
        super().__init__(f"Attribute '{name}' is already defined on entity type '{entity_type}'")


class UnknownSearchModeError(ValueError):
    """Raised when a search mode name is not one of the supported modes."""

    def __init__(self, mode: object):
        self.mode = mode
        super().__init__(f"Unknown search mode: {mode!r}")


@dataclass(frozen=True)
class RecordError:
    """A validation error on one or more attributes of a record."""

    attributes: tuple[str, ...]
    message: str

    def concerns(self, name: str) -> bool:
        """Return whether this error is reported against the named attribute."""
        return name in self.attributes
