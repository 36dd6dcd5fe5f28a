"""Lexer for attribute templates (literal text with [field] placeholders)."""

import ply.lex as lex


class TemplateLexer:
    """Lexer for tokenizing template strings."""

    tokens = [
        "TEXT",
        "LBRACKET",
        "RBRACKET",
        "IDENTIFIER",
        "DOT",
    ]

    # Lexer states: field state between [ and ]
    states = (("field", "exclusive"),)

    def __init__(self) -> None:
        self.lexer: lex.LexToken = None  # type: ignore

    def t_LBRACKET(self, t: lex.LexToken) -> lex.LexToken:
        r"\["
        t.lexer.begin("field")
        return t

    def t_TEXT(self, t: lex.LexToken) -> lex.LexToken:
        r"[^\[]+"
        t.lexer.lineno += t.value.count("\n")
        return t

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Template: Illegal character '{t.value[0]}' at position {t.lexpos}")

    # --- Exclusive field state tokens ---

    t_field_ignore = " \t"

    def t_field_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[a-zA-Z_][a-zA-Z0-9_]*"
        return t

    def t_field_DOT(self, t: lex.LexToken) -> lex.LexToken:
        r"\."
        return t

    def t_field_RBRACKET(self, t: lex.LexToken) -> lex.LexToken:
        r"\]"
        t.lexer.begin("INITIAL")
        return t

    def t_field_error(self, t: lex.LexToken) -> None:
        t.lexer.begin("INITIAL")
        raise SyntaxError(
            f"Template: Illegal character '{t.value[0]}' in field reference at position {t.lexpos}"
        )

    # --- Lexer methods ---

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
        self.lexer.begin("INITIAL")
        self.lexer.input(data)

    def token(self) -> lex.LexToken | None:
        """Return the next token."""
        return self.lexer.token()

    def tokenize(self, data: str) -> list[lex.LexToken]:
        """Tokenize the input and return all tokens."""
        self.input(data)
        tokens = []
        while True:
            tok = self.token()
            if tok is None:
                break
            tokens.append(tok)
        return tokens
