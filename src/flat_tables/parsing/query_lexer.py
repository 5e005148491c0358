"""Lexer for the FTQ (Flat Tables Query) language."""

from __future__ import annotations

import re

import ply.lex as lex

# Backslash escapes recognised inside string literals; any other escaped
# character stands for itself
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "0": "\0"}
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


class QueryLexer:
    """Lexer for tokenizing FTQ statements."""

    # Reserved keywords
    reserved = {
        "create": "CREATE",
        "drop": "DROP",
        "database": "DATABASE",
        "databases": "DATABASES",
        "table": "TABLE",
        "tables": "TABLES",
        "use": "USE",
        "show": "SHOW",
        "describe": "DESCRIBE",
        "truncate": "TRUNCATE",
        "insert": "INSERT",
        "into": "INTO",
        "values": "VALUES",
        "select": "SELECT",
        "from": "FROM",
        "where": "WHERE",
        "delete": "DELETE",
        "alter": "ALTER",
        "add": "ADD",
        "column": "COLUMN",
        "true": "TRUE",
        "false": "FALSE",
    }

    # Token list
    tokens = [
        "IDENTIFIER",
        "INTEGER",
        "FLOAT",
        "STRING",
        "STAR",
        "COMMA",
        "LPAREN",
        "RPAREN",
        "EQ",
        "NEQ",
        "LT",
        "LTE",
        "GT",
        "GTE",
        "SEMICOLON",
    ] + list(reserved.values())

    # Simple tokens
    t_STAR = r"\*"
    t_COMMA = r","
    t_LPAREN = r"\("
    t_RPAREN = r"\)"
    t_EQ = r"="
    t_NEQ = r"!="
    t_LTE = r"<="
    t_LT = r"<"
    t_GTE = r">="
    t_GT = r">"
    t_SEMICOLON = r";"

    # Ignored characters (newlines are handled by t_NEWLINE)
    t_ignore = " \t"

    def __init__(self) -> None:
        self.lexer: lex.Lexer = None  # type: ignore

    # Numbers keep their source text: every stored value is a string
    def t_FLOAT(self, t: lex.LexToken) -> lex.LexToken:
        r"-?\d+\.\d+"
        return t

    def t_INTEGER(self, t: lex.LexToken) -> lex.LexToken:
        r"-?\d+"
        return t

    def t_STRING(self, t: lex.LexToken) -> lex.LexToken:
        r'"([^"\\]|\\.)*"|\'([^\'\\]|\\.)*\''
        # Remove quotes and handle escapes
        t.value = _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), t.value[1:-1])
        return t

    def t_BACKTICK_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"`[^`]+`"
        # Strip backticks; always an IDENTIFIER, even for keywords
        t.value = t.value[1:-1]
        t.type = "IDENTIFIER"
        return t

    def t_IDENTIFIER(self, t: lex.LexToken) -> lex.LexToken:
        r"[a-zA-Z_][a-zA-Z0-9_]*"
        # Keywords are case-insensitive
        t.type = self.reserved.get(t.value.lower(), "IDENTIFIER")
        return t

    def t_NEWLINE(self, t: lex.LexToken) -> None:
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_COMMENT(self, t: lex.LexToken) -> None:
        r"--[^\n]*"
        pass

    def t_error(self, t: lex.LexToken) -> None:
        raise SyntaxError(f"Illegal character '{t.value[0]}' at position {t.lexpos}")

    def build(self, **kwargs) -> None:  # type: ignore
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)

    def input(self, data: str) -> None:
        """Set the input string to tokenize."""
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

