"""Attribute flags, disabled modes and storage/load types."""

from __future__ import annotations

from enum import Enum, IntFlag


class AttributeFlag(IntFlag):
    """Flags controlling visibility, editing, labeling and sorting of an attribute."""

    NONE = 0
    OBLIGATORY = 1 << 0
    PRIMARY = 1 << 1
    HIDE_LIST = 1 << 2
    HIDE_ADD = 1 << 3
    HIDE_EDIT = 1 << 4
    HIDE_VIEW = 1 << 5
    HIDE_SEARCH = 1 << 6
    READONLY_ADD = 1 << 7
    READONLY_EDIT = 1 << 8
    NO_LABEL = 1 << 9
    NO_SORT = 1 << 10

    HIDE = HIDE_LIST | HIDE_ADD | HIDE_EDIT | HIDE_VIEW | HIDE_SEARCH
    READONLY = READONLY_ADD | READONLY_EDIT


class DisabledMode(IntFlag):
    """Contexts in which an attribute is left out of the normal per-field layout."""

    NONE = 0
    VIEW = 1
    EDIT = 2


class Storage(IntFlag):
    """How an attribute takes part in INSERT/UPDATE statements."""

    NONE = 0
    ADD_TO_QUERY = 1
    PRE = 2
    POST = 4


class Load(IntFlag):
    """How an attribute takes part in SELECT statements."""

    NONE = 0
    ADD_TO_QUERY = 1
    PRE = 2
    POST = 4


class RenderKind(Enum):
    """What a fieldset renders its constituents as."""

    EDIT = "edit"
    DISPLAY = "display"
