"""Tests for the template lexer, parser and StringParser."""

import pytest

from record_attributes.parsing import FieldReference, TemplateParser, TextSegment
from record_attributes.parsing.template_lexer import TemplateLexer
from record_attributes.template import StringParser


class TestTemplateLexer:
    """Tests for the template lexer."""

    def test_tokenize_text_and_placeholder(self):
        """Test tokenizing literal text around a placeholder."""
        lexer = TemplateLexer()
        lexer.build()

        tokens = lexer.tokenize("Hello [name]!")
        token_types = [t.type for t in tokens]

        assert token_types == ["TEXT", "LBRACKET", "IDENTIFIER", "RBRACKET", "TEXT"]
        assert tokens[0].value == "Hello "
        assert tokens[4].value == "!"

    def test_tokenize_dotted_reference(self):
        """Test tokenizing a dotted field reference."""
        lexer = TemplateLexer()
        lexer.build()

        tokens = lexer.tokenize("[address.city]")
        token_types = [t.type for t in tokens]

        assert token_types == ["LBRACKET", "IDENTIFIER", "DOT", "IDENTIFIER", "RBRACKET"]

    def test_whitespace_inside_brackets_ignored(self):
        """Test that spaces inside a placeholder are not tokens."""
        lexer = TemplateLexer()
        lexer.build()

        tokens = lexer.tokenize("[ name ]")
        token_types = [t.type for t in tokens]

        assert token_types == ["LBRACKET", "IDENTIFIER", "RBRACKET"]

    def test_whitespace_in_text_kept(self):
        """Test that literal text keeps its whitespace and newlines."""
        lexer = TemplateLexer()
        lexer.build()

        tokens = lexer.tokenize("  a\n b ")

        assert [t.value for t in tokens] == ["  a\n b "]

    def test_closing_bracket_in_text(self):
        """Test that a lone ']' is plain text."""
        lexer = TemplateLexer()
        lexer.build()

        tokens = lexer.tokenize("a ] b")

        assert [t.type for t in tokens] == ["TEXT"]

    def test_illegal_character_in_reference(self):
        """Test error on an illegal character inside a placeholder."""
        lexer = TemplateLexer()
        lexer.build()

        with pytest.raises(SyntaxError):
            lexer.tokenize("[first-name]")


class TestTemplateParser:
    """Tests for the template parser."""

    def test_parse_segments(self):
        """Test parsing text and references into segments."""
        parser = TemplateParser()

        segments = parser.parse("[street] [number], [address.city]")

        assert segments == [
            FieldReference(path=["street"]),
            TextSegment(text=" "),
            FieldReference(path=["number"]),
            TextSegment(text=", "),
            FieldReference(path=["address", "city"]),
        ]

    def test_reference_names(self):
        """Test the name and attribute of a dotted reference."""
        ref = FieldReference(path=["address", "city"])

        assert ref.name == "address.city"
        assert ref.attribute == "address"

    def test_parse_empty(self):
        """Test that an empty template has no segments."""
        parser = TemplateParser()

        assert parser.parse("") == []

    def test_parse_text_only(self):
        """Test a template without placeholders."""
        parser = TemplateParser()

        assert parser.parse("no fields here") == [TextSegment(text="no fields here")]

    def test_unclosed_placeholder(self):
        """Test error on a placeholder without closing bracket."""
        parser = TemplateParser()

        with pytest.raises(SyntaxError):
            parser.parse("Hello [name")

    def test_empty_placeholder(self):
        """Test error on '[]'."""
        parser = TemplateParser()

        with pytest.raises(SyntaxError):
            parser.parse("Hello []")

    def test_parser_reusable_after_error(self):
        """Test that a failed parse does not affect the next one."""
        parser = TemplateParser()

        with pytest.raises(SyntaxError):
            parser.parse("[name")

        assert parser.parse("x") == [TextSegment(text="x")]


class TestStringParser:
    """Tests for StringParser."""

    def test_get_fields_in_order_with_duplicates(self):
        """Test that get_fields keeps template order and duplicates."""
        parser = StringParser("[b] [a.sub] [b]")

        assert parser.get_fields() == ["b", "a.sub", "b"]

    def test_parse_substitutes(self):
        """Test substituting values."""
        parser = StringParser("[start] - [end] of [count]")

        assert parser.parse({"start": 11, "end": 20, "count": 25}) == "11 - 20 of 25"

    def test_parse_full_dotted_key(self):
        """Test that a dotted reference matches a key with the same name."""
        parser = StringParser("[a.sub]")

        assert parser.parse({"a.sub": "x", "a": {"sub": "y"}}) == "x"

    def test_parse_nested_mapping(self):
        """Test that a dotted reference walks nested mappings."""
        parser = StringParser("[address.city]")

        assert parser.parse({"address": {"city": "Springfield"}}) == "Springfield"

    def test_unknown_reference_becomes_empty(self):
        """Test that missing references are replaced by an empty string."""
        parser = StringParser("[a]|[b]|[c.d]")

        assert parser.parse({"a": "x"}) == "x||"

    def test_no_placeholders_remain(self):
        """Test that a full substitution leaves no placeholder tokens."""
        parser = StringParser("<[p1]> and <[p2]>")

        result = parser.parse({"p1": "one", "p2": "two"})

        assert result == "<one> and <two>"
        assert "[" not in result and "]" not in result

    def test_template_parsed_lazily(self):
        """Test that a malformed template fails on first use, not construction."""
        parser = StringParser("[broken")

        with pytest.raises(SyntaxError):
            parser.get_fields()
