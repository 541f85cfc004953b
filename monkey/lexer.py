"""Tokenizer for the Monkey language.

Scanning is delegated to a Lark lexer built from the terminal definitions
below. Lark yields identifiers, integers, strings and punctuation; keywords
are recognised afterwards with `lookup_ident`, and any character that no
other terminal accepts comes through as an ILLEGAL token so that the parser
can report it.

The `Lexer` class exposes the token stream the parser consumes:
`next_token()` returns the next token and keeps returning an EOF token
once the input is exhausted.
"""

from __future__ import annotations

from typing import Iterator, List

from lark import Lark

from . import token
from .errors import LexerError
from .token import Token, lookup_ident


# Every real terminal carries priority 2 so that the ILLEGAL catch-all
# (default priority) is always tried last.
MONKEY_TERMINALS = r"""
    start: (IDENT | INT | STRING
           | EQ | NOT_EQ | ASSIGN | PLUS | MINUS | BANG | ASTERISK | SLASH
           | LT | GT | COMMA | SEMICOLON | COLON
           | LPAREN | RPAREN | LBRACE | RBRACE | LBRACKET | RBRACKET
           | ILLEGAL)*

    IDENT.2: /[a-zA-Z_]+/
    INT.2: /[0-9]+/
    STRING.2: /"[^"]*"/

    EQ.2: "=="
    NOT_EQ.2: "!="
    ASSIGN.2: "="
    PLUS.2: "+"
    MINUS.2: "-"
    BANG.2: "!"
    ASTERISK.2: "*"
    SLASH.2: "/"
    LT.2: "<"
    GT.2: ">"

    COMMA.2: ","
    SEMICOLON.2: ";"
    COLON.2: ":"
    LPAREN.2: "("
    RPAREN.2: ")"
    LBRACE.2: "{"
    RBRACE.2: "}"
    LBRACKET.2: "["
    RBRACKET.2: "]"

    ILLEGAL: /./

    WHITESPACE: /[ \t\r\n]+/
    %ignore WHITESPACE
"""


MONKEY_LEXER = Lark(
    MONKEY_TERMINALS,
    parser='lalr',
    lexer='basic',
)


class Lexer:
    """Token stream over a Monkey source string."""

    def __init__(self, source: str):
        self.source = source
        self._stream: Iterator = MONKEY_LEXER.lex(source)
        self._done = False

    def next_token(self) -> Token:
        if self._done:
            return Token(token.EOF, '')
        raw = next(self._stream, None)
        if raw is None:
            self._done = True
            return Token(token.EOF, '')
        kind = raw.type
        literal = str(raw.value)
        if kind == token.IDENT:
            return Token(lookup_ident(literal), literal)
        if kind == token.STRING:
            return Token(token.STRING, literal[1:-1])
        if kind == token.ILLEGAL and literal == '"':
            raise LexerError(f"unterminated string literal at {raw.line}:{raw.column}")
        return Token(kind, literal)

    def __iter__(self) -> Iterator[Token]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.kind == token.EOF:
                return


def tokenize(source: str) -> List[Token]:
    """Return every token of `source`, ending with a single EOF token."""
    return list(Lexer(source))
