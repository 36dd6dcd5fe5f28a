"""Data grid window and its summary line."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from markupsafe import Markup

from record_attributes.config import settings
from record_attributes.language import Translator
from record_attributes.template import StringParser

logger = logging.getLogger(__name__)

# Limit value meaning "show all records"
NO_LIMIT = -1


@dataclass
class DataGrid:
    """The result window of a paginated record list."""

    limit: int
    count: int
    offset: int = 0
    module: str = ""
    translator: Translator = field(default_factory=Translator)

    def text(self, key: str) -> str:
        return self.translator.text(key, module=self.module)


@dataclass(frozen=True)
class SummaryContext:
    """Values shown in a grid summary; ``start`` is 1-based."""

    start: int
    end: int
    count: int
    limit: int
    page: int
    pages: int

    @classmethod
    def from_window(cls, offset: int, limit: int, count: int) -> SummaryContext | None:
        """Compute the summary values, or None for an empty or zero-limit window."""
        if count == 0:
            return None
        if limit == NO_LIMIT:
            limit = count
        if limit == 0:
            logger.debug("Zero limit for a window of %d records; no summary", count)
            return None

        start = offset
        end = min(start + limit, count)
        return cls(
            start=start + 1,
            end=end,
            count=count,
            limit=limit,
            page=start // limit + 1,
            pages=math.ceil(count / limit),
        )

    def as_params(self) -> dict[str, int]:
        return {
            "start": self.start,
            "end": self.end,
            "count": self.count,
            "limit": self.limit,
            "page": self.page,
            "pages": self.pages,
        }


class DataGridComponent:
    """Base class for parts rendered around a data grid."""

    def __init__(self, grid: DataGrid) -> None:
        self.grid = grid

    def render(self) -> str | None:
        raise NotImplementedError


class DataGridSummary(DataGridComponent):
    """Renders e.g. "11 - 20 of 25 (page 2 of 3)" for a grid."""

    def context(self) -> SummaryContext | None:
        return SummaryContext.from_window(self.grid.offset, self.grid.limit, self.grid.count)

    def render(self) -> str | None:
        """Return the summary HTML, or None when there is nothing to summarize."""
        context = self.context()
        if context is None:
            return None

        template = self.grid.text("datagrid_summary")
        try:
            result = StringParser(template).parse(context.as_params())
        except SyntaxError as e:
            logger.warning("Invalid datagrid_summary text %r (%s); using the default", template, e)
            default = self.grid.translator.builtin_text("datagrid_summary")
            result = StringParser(default).parse(context.as_params())

        # Translations are trusted markup
        return Markup('<div class="{css}">{result}</div>').format(
            css=settings.summary_css_class, result=Markup(result)
        )
