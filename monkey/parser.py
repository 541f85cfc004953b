"""Parser for the Monkey language.

Statements are parsed by plain recursive descent. Expressions use
precedence climbing (a Pratt parser): every token kind that can start an
expression has a prefix handler, every token kind that can continue one has
an infix handler and a precedence, and `parse_expression` keeps folding the
expression built so far into the next infix handler for as long as the
upcoming operator binds more tightly than the caller's precedence. Since the
comparison is strict, operators of equal precedence associate to the left.

The parser keeps two tokens of lookahead, `cur_token` and `peek_token`, and
stops at the first error by raising `ParseError`; no partial program is
returned.

The `parse_program` function is the public entry point and returns a
`Program` AST node representing the entire source.
"""

from __future__ import annotations

import functools
from enum import IntEnum
from typing import Callable, Dict, List, Optional

from . import token
from .ast import (
    Program, Statement, Expression, LetStatement, ReturnStatement,
    ExpressionStatement, BlockStatement, Identifier, IntegerLiteral,
    StringLiteral, BooleanLiteral, PrefixExpression, InfixExpression,
    IfExpression, FunctionLiteral, CallExpression, ArrayLiteral,
    IndexExpression, HashLiteral,
)
from .errors import ParseError
from .lexer import Lexer
from .objects import INT64_MAX
from .stack import call_with_deep_stack
from .token import Token


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -x or !x
    CALL = 7         # f(x)
    INDEX = 8        # a[i]


PRECEDENCES: Dict[str, Precedence] = {
    token.EQ: Precedence.EQUALS,
    token.NOT_EQ: Precedence.EQUALS,
    token.LT: Precedence.LESSGREATER,
    token.GT: Precedence.LESSGREATER,
    token.PLUS: Precedence.SUM,
    token.MINUS: Precedence.SUM,
    token.SLASH: Precedence.PRODUCT,
    token.ASTERISK: Precedence.PRODUCT,
    token.LPAREN: Precedence.CALL,
    token.LBRACKET: Precedence.INDEX,
}


def traced(method):
    """Report BEGIN/END of a parse method to the parser's trace callback."""
    name = method.__name__

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        if self.trace is None:
            return method(self, *args, **kwargs)
        self._trace_line(f"BEGIN {name}")
        self._trace_depth += 1
        try:
            return method(self, *args, **kwargs)
        finally:
            self._trace_depth -= 1
            self._trace_line(f"END {name}")
    return wrapper


class Parser:
    def __init__(self, lexer: Lexer, trace: Optional[Callable[[str], None]] = None):
        self.lexer = lexer
        self.trace = trace
        self._trace_depth = 0
        self.cur_token: Token = Token(token.EOF, '')
        self.peek_token: Token = Token(token.EOF, '')

        self.prefix_parse_fns: Dict[str, Callable[[], Expression]] = {
            token.IDENT: self.parse_identifier,
            token.INT: self.parse_integer_literal,
            token.STRING: self.parse_string_literal,
            token.TRUE: self.parse_boolean,
            token.FALSE: self.parse_boolean,
            token.BANG: self.parse_prefix_expression,
            token.MINUS: self.parse_prefix_expression,
            token.LPAREN: self.parse_grouped_expression,
            token.IF: self.parse_if_expression,
            token.FUNCTION: self.parse_function_literal,
            token.LBRACKET: self.parse_array_literal,
            token.LBRACE: self.parse_hash_literal,
        }
        self.infix_parse_fns: Dict[str, Callable[[Expression], Expression]] = {
            token.PLUS: self.parse_infix_expression,
            token.MINUS: self.parse_infix_expression,
            token.SLASH: self.parse_infix_expression,
            token.ASTERISK: self.parse_infix_expression,
            token.EQ: self.parse_infix_expression,
            token.NOT_EQ: self.parse_infix_expression,
            token.LT: self.parse_infix_expression,
            token.GT: self.parse_infix_expression,
            token.LPAREN: self.parse_call_expression,
            token.LBRACKET: self.parse_index_expression,
        }

        # Read two tokens so that cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    def _trace_line(self, msg: str):
        self.trace('\t' * self._trace_depth + msg)

    # Token cursor

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind: str) -> bool:
        return self.cur_token.kind == kind

    def peek_token_is(self, kind: str) -> bool:
        return self.peek_token.kind == kind

    def expect_peek(self, kind: str):
        """Advance if the next token has the expected kind, else fail."""
        if not self.peek_token_is(kind):
            raise ParseError(f"expected next token to be {kind}, got {self.peek_token.kind} instead")
        self.next_token()

    def peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.kind, Precedence.LOWEST)

    # Statements

    @traced
    def parse_program(self) -> Program:
        program = Program()
        while not self.cur_token_is(token.EOF):
            program.statements.append(self.parse_statement())
            self.next_token()
        return program

    @traced
    def parse_statement(self) -> Statement:
        if self.cur_token_is(token.LET):
            return self.parse_let_statement()
        if self.cur_token_is(token.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    @traced
    def parse_let_statement(self) -> LetStatement:
        let_token = self.cur_token
        self.expect_peek(token.IDENT)
        name = Identifier(self.cur_token, self.cur_token.literal)
        self.expect_peek(token.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return LetStatement(let_token, name, value)

    @traced
    def parse_return_statement(self) -> ReturnStatement:
        return_token = self.cur_token
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return ReturnStatement(return_token, value)

    @traced
    def parse_expression_statement(self) -> ExpressionStatement:
        stmt_token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if self.peek_token_is(token.SEMICOLON):
            self.next_token()
        return ExpressionStatement(stmt_token, expression)

    @traced
    def parse_block_statement(self) -> BlockStatement:
        block_token = self.cur_token
        statements: List[Statement] = []
        self.next_token()
        while not self.cur_token_is(token.RBRACE):
            if self.cur_token_is(token.EOF):
                raise ParseError(f"expected next token to be {token.RBRACE}, got {token.EOF} instead")
            statements.append(self.parse_statement())
            self.next_token()
        return BlockStatement(block_token, statements)

    # Expressions

    @traced
    def parse_expression(self, precedence: Precedence) -> Expression:
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            raise ParseError(f"no prefix parse function for {self.cur_token.kind} found")
        left = prefix()
        while not self.peek_token_is(token.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)
        return left

    @traced
    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    @traced
    def parse_integer_literal(self) -> Expression:
        literal = self.cur_token.literal
        # The lexer only produces digit runs, so the range is the only check
        value = int(literal)
        if value > INT64_MAX:
            raise ParseError(f"could not parse {literal} as integer")
        return IntegerLiteral(self.cur_token, value)

    @traced
    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    @traced
    def parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self.cur_token_is(token.TRUE))

    @traced
    def parse_prefix_expression(self) -> Expression:
        prefix_token = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(prefix_token, prefix_token.literal, right)

    @traced
    def parse_infix_expression(self, left: Expression) -> Expression:
        infix_token = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        right = self.parse_expression(precedence)
        return InfixExpression(infix_token, left, infix_token.literal, right)

    @traced
    def parse_grouped_expression(self) -> Expression:
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(token.RPAREN)
        return expression

    @traced
    def parse_if_expression(self) -> Expression:
        if_token = self.cur_token
        self.expect_peek(token.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(token.RPAREN)
        self.expect_peek(token.LBRACE)
        consequence = self.parse_block_statement()
        alternative = None
        if self.peek_token_is(token.ELSE):
            self.next_token()
            self.expect_peek(token.LBRACE)
            alternative = self.parse_block_statement()
        return IfExpression(if_token, condition, consequence, alternative)

    @traced
    def parse_function_literal(self) -> Expression:
        fn_token = self.cur_token
        self.expect_peek(token.LPAREN)
        parameters = self.parse_function_parameters()
        self.expect_peek(token.LBRACE)
        body = self.parse_block_statement()
        return FunctionLiteral(fn_token, parameters, body)

    @traced
    def parse_function_parameters(self) -> List[Identifier]:
        identifiers: List[Identifier] = []
        if self.peek_token_is(token.RPAREN):
            self.next_token()
            return identifiers
        self.expect_peek(token.IDENT)
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        while self.peek_token_is(token.COMMA):
            self.next_token()
            self.expect_peek(token.IDENT)
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        self.expect_peek(token.RPAREN)
        return identifiers

    @traced
    def parse_call_expression(self, function: Expression) -> Expression:
        call_token = self.cur_token
        arguments = self.parse_expression_list(token.RPAREN)
        return CallExpression(call_token, function, arguments)

    @traced
    def parse_index_expression(self, left: Expression) -> Expression:
        index_token = self.cur_token
        self.next_token()
        index = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(token.RBRACKET)
        return IndexExpression(index_token, left, index)

    @traced
    def parse_array_literal(self) -> Expression:
        array_token = self.cur_token
        return ArrayLiteral(array_token, self.parse_expression_list(token.RBRACKET))

    @traced
    def parse_expression_list(self, end: str) -> List[Expression]:
        """Parse `expr, expr, ...` up to and including the `end` token."""
        items: List[Expression] = []
        if self.peek_token_is(end):
            self.next_token()
            return items
        self.next_token()
        items.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is(token.COMMA):
            self.next_token()
            self.next_token()
            items.append(self.parse_expression(Precedence.LOWEST))
        self.expect_peek(end)
        return items

    @traced
    def parse_hash_literal(self) -> Expression:
        hash_token = self.cur_token
        pairs = []
        while not self.peek_token_is(token.RBRACE):
            self.next_token()
            key = self.parse_expression(Precedence.LOWEST)
            self.expect_peek(token.COLON)
            self.next_token()
            value = self.parse_expression(Precedence.LOWEST)
            pairs.append((key, value))
            if not self.peek_token_is(token.RBRACE):
                self.expect_peek(token.COMMA)
        self.expect_peek(token.RBRACE)
        return HashLiteral(hash_token, pairs)


def parse_program(source: str, trace: Optional[Callable[[str], None]] = None) -> Program:
    """Tokenize and parse Monkey source code into a Program AST."""
    parser = Parser(Lexer(source), trace=trace)
    try:
        return call_with_deep_stack(parser.parse_program)
    except RecursionError:
        raise ParseError("expression nested too deeply") from None
