import json

import pytest

from monkey.ast import LetStatement
from monkey.ast_json import ast_from_obj, ast_to_obj
from monkey.errors import ParseError
from monkey.interpreter import Interpreter
from monkey.objects import Integer
from monkey.parser import parse_program
from monkey.token import Token


SOURCE = """
let people = [{"name": "Alice", true: -1}];
let get = fn(list, i) { if (i < len(list)) { return list[i]; } else { "none" } };
get(people, 0)["name"];
!false != (3 * 4 / 2 > 5);
"""


def test_round_trip_preserves_rendering_and_tokens():
    program = parse_program(SOURCE)
    text = json.dumps(ast_to_obj(program))
    restored = ast_from_obj(json.loads(text))
    assert str(restored) == str(program)
    assert restored == program


def test_let_statement_shape():
    obj = ast_to_obj(parse_program("let x = 5;"))
    stmt = obj["statements"][0]
    assert stmt["type"] == "LetStatement"
    assert stmt["token"] == {"kind": "LET", "literal": "let"}
    assert stmt["name"] == {"type": "Identifier", "token": {"kind": "IDENT", "literal": "x"}, "value": "x"}
    assert stmt["value"]["value"] == 5


def test_restored_program_runs():
    program = ast_from_obj(ast_to_obj(parse_program("let f = fn(a) { a * 2 }; f(21)")))
    assert isinstance(program.statements[0], LetStatement)
    assert program.statements[0].token == Token("LET", "let")
    assert Interpreter().run(program) == Integer(42)


def test_unknown_node_type():
    with pytest.raises(ValueError):
        ast_from_obj({"type": "WhileStatement", "token": {"kind": "IDENT", "literal": "while"}})


def test_unsupported_object():
    with pytest.raises(TypeError):
        ast_to_obj(object())
    with pytest.raises(TypeError):
        ast_from_obj([1, 2])


def test_integer_literal_out_of_range():
    obj = ast_to_obj(parse_program("7"))
    obj["statements"][0]["expression"]["value"] = 2 ** 63
    with pytest.raises(ParseError) as exc_info:
        ast_from_obj(obj)
    assert exc_info.value.message == f"could not parse {2 ** 63} as integer"
