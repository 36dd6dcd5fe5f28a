"""Tests for the data grid summary."""

from record_attributes.datagrid import DataGrid, DataGridSummary, SummaryContext
from record_attributes.language import Translator


class TestSummaryContext:
    """Tests for the window arithmetic."""

    def test_second_page(self):
        context = SummaryContext.from_window(offset=10, limit=10, count=25)

        assert context == SummaryContext(start=11, end=20, count=25, limit=10, page=2, pages=3)

    def test_last_partial_page(self):
        context = SummaryContext.from_window(offset=20, limit=10, count=25)

        assert (context.start, context.end, context.page, context.pages) == (21, 25, 3, 3)

    def test_no_limit(self):
        """Test that -1 means all records on one page."""
        context = SummaryContext.from_window(offset=0, limit=-1, count=5)

        assert context == SummaryContext(start=1, end=5, count=5, limit=5, page=1, pages=1)

    def test_zero_count(self):
        assert SummaryContext.from_window(offset=0, limit=10, count=0) is None

    def test_zero_limit(self):
        assert SummaryContext.from_window(offset=0, limit=0, count=10) is None

    def test_params(self):
        context = SummaryContext.from_window(offset=0, limit=10, count=3)

        assert context.as_params() == {"start": 1, "end": 3, "count": 3, "limit": 10, "page": 1, "pages": 1}


class TestDataGridSummary:
    """Tests for rendering the summary."""

    def test_render(self):
        grid = DataGrid(limit=10, count=25, offset=10)

        assert DataGridSummary(grid).render() == '<div class="dgridsummary">11 - 20 of 25 (page 2 of 3)</div>'

    def test_render_nothing_for_empty_grid(self):
        assert DataGridSummary(DataGrid(limit=10, count=0, offset=0)).render() is None

    def test_render_nothing_for_zero_limit(self):
        assert DataGridSummary(DataGrid(limit=0, count=10, offset=0)).render() is None

    def test_render_without_limit(self):
        grid = DataGrid(limit=-1, count=5, offset=0)

        assert DataGridSummary(grid).render() == '<div class="dgridsummary">1 - 5 of 5 (page 1 of 1)</div>'

    def test_localized_template(self):
        translator = Translator(catalogue={"en": {"datagrid_summary": "[start]-[end]/[count] [limit] [page]/[pages]"}})
        grid = DataGrid(limit=10, count=25, offset=10, translator=translator)

        assert DataGridSummary(grid).render() == '<div class="dgridsummary">11-20/25 10 2/3</div>'

    def test_dutch(self):
        grid = DataGrid(limit=10, count=25, offset=0, translator=Translator(language="nl"))

        assert DataGridSummary(grid).render() == '<div class="dgridsummary">1 - 10 van 25 (pagina 1 van 3)</div>'

    def test_module_text_override(self):
        translator = Translator(catalogue={"en": {"crm.datagrid_summary": "[count] customers"}})
        grid = DataGrid(limit=10, count=25, module="crm", translator=translator)

        assert DataGridSummary(grid).render() == '<div class="dgridsummary">25 customers</div>'

    def test_translation_markup_not_escaped(self):
        """Test that markup in a translated summary is kept as is."""
        translator = Translator(catalogue={"en": {"datagrid_summary": "<b>[start]</b> &ndash; [end]"}})
        grid = DataGrid(limit=10, count=25, offset=10, translator=translator)

        assert DataGridSummary(grid).render() == '<div class="dgridsummary"><b>11</b> &ndash; 20</div>'

    def test_invalid_translation_uses_builtin_text(self):
        """Test that a malformed translation falls back to the shipped summary."""
        translator = Translator(catalogue={"en": {"datagrid_summary": "[start]-[end] [1]"}})
        grid = DataGrid(limit=10, count=25, offset=10, translator=translator)

        assert DataGridSummary(grid).render() == '<div class="dgridsummary">11 - 20 of 25 (page 2 of 3)</div>'

    def test_invalid_translation_uses_builtin_text_for_language(self):
        translator = Translator(language="nl", catalogue={"nl": {"datagrid_summary": "[start"}})
        grid = DataGrid(limit=10, count=25, offset=0, translator=translator)

        assert DataGridSummary(grid).render() == '<div class="dgridsummary">1 - 10 van 25 (pagina 1 van 3)</div>'


class TestBuiltinText:
    """Tests for Translator.builtin_text."""

    def test_ignores_overrides(self):
        translator = Translator(catalogue={"en": {"search_from": "since"}})

        assert translator.text("search_from") == "since"
        assert translator.builtin_text("search_from") == "from"

    def test_english_fallback(self):
        assert Translator(language="de").builtin_text("search_to") == "to"

    def test_humanized_fallback(self):
        assert Translator().builtin_text("no_such_key") == "No such key"
