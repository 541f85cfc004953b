"""Token definitions for the Monkey language."""

from __future__ import annotations

from dataclasses import dataclass


ILLEGAL = 'ILLEGAL'
EOF = 'EOF'

# Identifiers and literals
IDENT = 'IDENT'
INT = 'INT'
STRING = 'STRING'

# Operators
ASSIGN = 'ASSIGN'
PLUS = 'PLUS'
MINUS = 'MINUS'
BANG = 'BANG'
ASTERISK = 'ASTERISK'
SLASH = 'SLASH'
LT = 'LT'
GT = 'GT'
EQ = 'EQ'
NOT_EQ = 'NOT_EQ'

# Delimiters
COMMA = 'COMMA'
SEMICOLON = 'SEMICOLON'
COLON = 'COLON'
LPAREN = 'LPAREN'
RPAREN = 'RPAREN'
LBRACE = 'LBRACE'
RBRACE = 'RBRACE'
LBRACKET = 'LBRACKET'
RBRACKET = 'RBRACKET'

# Keywords
FUNCTION = 'FUNCTION'
LET = 'LET'
TRUE = 'TRUE'
FALSE = 'FALSE'
IF = 'IF'
ELSE = 'ELSE'
RETURN = 'RETURN'

KEYWORDS = {
    'fn': FUNCTION,
    'let': LET,
    'true': TRUE,
    'false': FALSE,
    'if': IF,
    'else': ELSE,
    'return': RETURN,
}


@dataclass(frozen=True, order=True)
class Token:
    kind: str
    literal: str

    def __repr__(self) -> str:
        return f"Token({self.kind}, {self.literal!r})"


def lookup_ident(ident: str) -> str:
    """Return the keyword kind for `ident`, or IDENT for plain names."""
    return KEYWORDS.get(ident, IDENT)
