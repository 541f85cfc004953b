"""JSON serialization/deserialization for Monkey AST.

This module converts between Monkey AST dataclasses and plain Python
dict/list structures suitable for JSON encoding. Every node carries the
token that introduced it, so tokens are serialized as `{"kind", "literal"}`
objects alongside the node's own fields.
"""

from __future__ import annotations

from typing import Any, Dict

from .ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    StringLiteral,
    BooleanLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    ArrayLiteral,
    IndexExpression,
    HashLiteral,
)
from .errors import ParseError
from .objects import INT64_MAX
from .token import Token


def token_to_obj(tok: Token) -> Dict[str, Any]:
    return {"kind": tok.kind, "literal": tok.literal}


def token_from_obj(o: Dict[str, Any]) -> Token:
    return Token(o["kind"], o["literal"])


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        return {"type": "Program", "statements": [ast_to_obj(s) for s in node.statements]}

    tok = token_to_obj(node.token)
    if isinstance(node, LetStatement):
        return {"type": "LetStatement", "token": tok, "name": ast_to_obj(node.name), "value": ast_to_obj(node.value)}
    if isinstance(node, ReturnStatement):
        return {"type": "ReturnStatement", "token": tok, "return_value": ast_to_obj(node.return_value)}
    if isinstance(node, ExpressionStatement):
        return {"type": "ExpressionStatement", "token": tok, "expression": ast_to_obj(node.expression)}
    if isinstance(node, BlockStatement):
        return {"type": "BlockStatement", "token": tok, "statements": [ast_to_obj(s) for s in node.statements]}
    if isinstance(node, Identifier):
        return {"type": "Identifier", "token": tok, "value": node.value}
    if isinstance(node, IntegerLiteral):
        return {"type": "IntegerLiteral", "token": tok, "value": node.value}
    if isinstance(node, StringLiteral):
        return {"type": "StringLiteral", "token": tok, "value": node.value}
    if isinstance(node, BooleanLiteral):
        return {"type": "BooleanLiteral", "token": tok, "value": node.value}
    if isinstance(node, PrefixExpression):
        return {"type": "PrefixExpression", "token": tok, "operator": node.operator, "right": ast_to_obj(node.right)}
    if isinstance(node, InfixExpression):
        return {
            "type": "InfixExpression",
            "token": tok,
            "left": ast_to_obj(node.left),
            "operator": node.operator,
            "right": ast_to_obj(node.right),
        }
    if isinstance(node, IfExpression):
        return {
            "type": "IfExpression",
            "token": tok,
            "condition": ast_to_obj(node.condition),
            "consequence": ast_to_obj(node.consequence),
            "alternative": ast_to_obj(node.alternative),
        }
    if isinstance(node, FunctionLiteral):
        return {
            "type": "FunctionLiteral",
            "token": tok,
            "parameters": [ast_to_obj(p) for p in node.parameters],
            "body": ast_to_obj(node.body),
        }
    if isinstance(node, CallExpression):
        return {
            "type": "CallExpression",
            "token": tok,
            "function": ast_to_obj(node.function),
            "arguments": [ast_to_obj(a) for a in node.arguments],
        }
    if isinstance(node, ArrayLiteral):
        return {"type": "ArrayLiteral", "token": tok, "elements": [ast_to_obj(e) for e in node.elements]}
    if isinstance(node, IndexExpression):
        return {"type": "IndexExpression", "token": tok, "left": ast_to_obj(node.left), "index": ast_to_obj(node.index)}
    if isinstance(node, HashLiteral):
        return {"type": "HashLiteral", "token": tok, "pairs": [[ast_to_obj(k), ast_to_obj(v)] for (k, v) in node.pairs]}

    raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    if t == "Program":
        return Program(statements=[ast_from_obj(s) for s in obj["statements"]])

    tok = token_from_obj(obj["token"])
    if t == "LetStatement":
        return LetStatement(tok, name=ast_from_obj(obj["name"]), value=ast_from_obj(obj["value"]))
    if t == "ReturnStatement":
        return ReturnStatement(tok, return_value=ast_from_obj(obj["return_value"]))
    if t == "ExpressionStatement":
        return ExpressionStatement(tok, expression=ast_from_obj(obj["expression"]))
    if t == "BlockStatement":
        return BlockStatement(tok, statements=[ast_from_obj(s) for s in obj["statements"]])
    if t == "Identifier":
        return Identifier(tok, value=obj["value"])
    if t == "IntegerLiteral":
        value = int(obj["value"])
        if not 0 <= value <= INT64_MAX:
            raise ParseError(f"could not parse {obj['value']} as integer")
        return IntegerLiteral(tok, value=value)
    if t == "StringLiteral":
        return StringLiteral(tok, value=obj["value"])
    if t == "BooleanLiteral":
        return BooleanLiteral(tok, value=bool(obj["value"]))
    if t == "PrefixExpression":
        return PrefixExpression(tok, operator=obj["operator"], right=ast_from_obj(obj["right"]))
    if t == "InfixExpression":
        return InfixExpression(
            tok,
            left=ast_from_obj(obj["left"]),
            operator=obj["operator"],
            right=ast_from_obj(obj["right"]),
        )
    if t == "IfExpression":
        return IfExpression(
            tok,
            condition=ast_from_obj(obj["condition"]),
            consequence=ast_from_obj(obj["consequence"]),
            alternative=ast_from_obj(obj.get("alternative")),
        )
    if t == "FunctionLiteral":
        return FunctionLiteral(
            tok,
            parameters=[ast_from_obj(p) for p in obj["parameters"]],
            body=ast_from_obj(obj["body"]),
        )
    if t == "CallExpression":
        return CallExpression(
            tok,
            function=ast_from_obj(obj["function"]),
            arguments=[ast_from_obj(a) for a in obj["arguments"]],
        )
    if t == "ArrayLiteral":
        return ArrayLiteral(tok, elements=[ast_from_obj(e) for e in obj["elements"]])
    if t == "IndexExpression":
        return IndexExpression(tok, left=ast_from_obj(obj["left"]), index=ast_from_obj(obj["index"]))
    if t == "HashLiteral":
        return HashLiteral(tok, pairs=[(ast_from_obj(k), ast_from_obj(v)) for (k, v) in obj["pairs"]])

    raise ValueError(f"Unknown AST node type: {t}")
