"""Parser for attribute templates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import ply.yacc as yacc

from record_attributes.parsing.template_lexer import TemplateLexer


@dataclass
class TextSegment:
    """Literal text between placeholders."""

    text: str


@dataclass
class FieldReference:
    """A [name] or [name.sub] placeholder."""

    path: list[str]

    @property
    def name(self) -> str:
        """The reference as written, e.g. ``address.city``."""
        return ".".join(self.path)

    @property
    def attribute(self) -> str:
        """The part of the reference before the first dot."""
        return self.path[0]


Segment = Union[TextSegment, FieldReference]


class TemplateParser:
    """Parser for the template placeholder language."""

    tokens = TemplateLexer.tokens

    def __init__(self) -> None:
        self.lexer = TemplateLexer()
        self.lexer.build()
        self.parser: yacc.LRParser = None  # type: ignore

    def p_template(self, p: yacc.YaccProduction) -> None:
        """template : segments"""
        p[0] = p[1]

    def p_segments_multiple(self, p: yacc.YaccProduction) -> None:
        """segments : segments segment"""
        p[0] = p[1]
        p[0].append(p[2])

    def p_segments_empty(self, p: yacc.YaccProduction) -> None:
        """segments : empty"""
        p[0] = []

    def p_segment_text(self, p: yacc.YaccProduction) -> None:
        """segment : TEXT"""
        p[0] = TextSegment(text=p[1])

    def p_segment_placeholder(self, p: yacc.YaccProduction) -> None:
        """segment : LBRACKET path RBRACKET"""
        p[0] = FieldReference(path=p[2])

    def p_path_single(self, p: yacc.YaccProduction) -> None:
        """path : IDENTIFIER"""
        p[0] = [p[1]]

    def p_path_dotted(self, p: yacc.YaccProduction) -> None:
        """path : path DOT IDENTIFIER"""
        p[0] = p[1] + [p[3]]

    def p_empty(self, p: yacc.YaccProduction) -> None:
        """empty :"""
        pass

    def p_error(self, p: yacc.YaccProduction) -> None:
        if p:
            raise SyntaxError(f"Template: Syntax error at '{p.value}' (position {p.lexpos})")
        raise SyntaxError("Template: Unexpected end of input (unclosed '[')")

    def build(self, **kwargs: Any) -> None:
        """Build the parser."""
        self.parser = yacc.yacc(module=self, start="template", **kwargs)

    def parse(self, data: str) -> list[Segment]:
        """Parse a template string into text segments and field references."""
        if self.parser is None:
            self.build(debug=False, write_tables=False)

        # A failed parse can leave the lexer inside a placeholder
        self.lexer.lexer.begin("INITIAL")
        segments = self.parser.parse(data, lexer=self.lexer.lexer)
        if segments is None:
            segments = []
        return segments
