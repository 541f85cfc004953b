"""Abstract Syntax Tree (AST) definitions for the Monkey language.

The parser builds these nodes and the interpreter walks them. Every node
keeps the token that introduced it, and `str(node)` gives the canonical
rendering used by the shell and by the tests: prefix and infix expressions
are fully parenthesized so that precedence is visible, and the rendering of
a program parses back to a tree with the same rendering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .token import Token


@dataclass
class Node:
    """Base class for all AST nodes."""
    token: Token

    def token_literal(self) -> str:
        return self.token.literal


class Statement(Node):
    pass


class Expression(Node):
    pass


def render_statements(statements: List[Statement]) -> str:
    # An expression statement needs its `;` back when something follows it,
    # otherwise `(a)` followed by `(b)` would read as a call.
    parts = []
    last = len(statements) - 1
    for i, stmt in enumerate(statements):
        text = str(stmt)
        if isinstance(stmt, ExpressionStatement) and i < last:
            text += ';'
        parts.append(text)
    return ''.join(parts)


@dataclass
class Program:
    statements: List[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ''

    def __str__(self) -> str:
        return render_statements(self.statements)


###############################################################################
# Expressions
###############################################################################


@dataclass
class Identifier(Expression):
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    value: int

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class StringLiteral(Expression):
    value: str

    def __str__(self) -> str:
        return f'"{self.value}"'


@dataclass
class BooleanLiteral(Expression):
    value: bool

    def __str__(self) -> str:
        return self.token.literal


@dataclass
class PrefixExpression(Expression):
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    condition: Expression
    consequence: 'BlockStatement'
    alternative: Optional['BlockStatement'] = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    parameters: List[Identifier]
    body: 'BlockStatement'

    def __str__(self) -> str:
        params = ', '.join(str(p) for p in self.parameters)
        return f"{self.token_literal()}({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    function: Expression  # Identifier or FunctionLiteral in practice
    arguments: List[Expression]

    def __str__(self) -> str:
        args = ', '.join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression]

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass
class IndexExpression(Expression):
    left: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.left}[{self.index}])"


@dataclass
class HashLiteral(Expression):
    pairs: List[Tuple[Expression, Expression]]

    def __str__(self) -> str:
        entries = ', '.join(f"{k}: {v}" for k, v in self.pairs)
        return '{' + entries + '}'


###############################################################################
# Statements
###############################################################################


@dataclass
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value};"


@dataclass
class ReturnStatement(Statement):
    return_value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value};"


@dataclass
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    statements: List[Statement]

    def __str__(self) -> str:
        if not self.statements:
            return '{ }'
        return '{ ' + render_statements(self.statements) + ' }'
