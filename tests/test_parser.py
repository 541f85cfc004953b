from pathlib import Path

import pytest

from monkey.ast import (
    ExpressionStatement, FunctionLiteral, HashLiteral, IfExpression,
    InfixExpression, LetStatement, ReturnStatement,
)
from monkey.errors import ParseError
from monkey.parser import parse_program


@pytest.mark.parametrize('source, expected', [
    ("-a * b", "((-a) * b)"),
    ("!-a", "(!(-a))"),
    ("a + b + c", "((a + b) + c)"),
    ("a * b / c", "((a * b) / c)"),
    ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
    ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
    ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
    ("true", "true"),
    ("3 > 5 == false", "((3 > 5) == false)"),
    ("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
    ("(5 + 5) * 2", "((5 + 5) * 2)"),
    ("-(5 + 5)", "(-(5 + 5))"),
    ("!(true == true)", "(!(true == true))"),
    ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
    ("add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))", "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))"),
    ("a * [1, 2, 3, 4][b * c] * d", "((a * ([1, 2, 3, 4][(b * c)])) * d)"),
    ("add(a * b[2], b[1], 2 * [1, 2][1])", "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))"),
    ("3 + 4; -5 * 5", "(3 + 4);((-5) * 5)"),
])
def test_operator_precedence(source, expected):
    assert str(parse_program(source)) == expected


def test_let_statements():
    program = parse_program("let x = 5; let y = true; let foobar = y;")
    assert [type(s) for s in program.statements] == [LetStatement] * 3
    assert [s.name.value for s in program.statements] == ['x', 'y', 'foobar']
    assert str(program) == "let x = 5;let y = true;let foobar = y;"


def test_return_statements():
    program = parse_program("return 5; return x + y")
    assert all(isinstance(s, ReturnStatement) for s in program.statements)
    assert str(program.statements[1]) == "return (x + y);"


def test_if_else_expression():
    program = parse_program("if (x < y) { x } else { y }")
    expr = program.statements[0].expression
    assert isinstance(expr, IfExpression)
    assert str(expr.condition) == "(x < y)"
    assert expr.alternative is not None
    assert str(program) == "if ((x < y)) { x } else { y }"


def test_function_literal():
    program = parse_program("fn(x, y) { x + y; }")
    fn = program.statements[0].expression
    assert isinstance(fn, FunctionLiteral)
    assert [p.value for p in fn.parameters] == ['x', 'y']
    assert str(fn) == "fn(x, y) { (x + y) }"


@pytest.mark.parametrize('source, params', [
    ("fn() {};", []),
    ("fn(x) {};", ['x']),
    ("fn(x, y, z) {};", ['x', 'y', 'z']),
])
def test_function_parameters(source, params):
    fn = parse_program(source).statements[0].expression
    assert [p.value for p in fn.parameters] == params


def test_empty_block_renders_braces():
    assert str(parse_program("fn() {}")) == "fn() { }"


def test_string_and_hash_literals():
    program = parse_program('{"one": 1, "two": 2}')
    hash_lit = program.statements[0].expression
    assert isinstance(hash_lit, HashLiteral)
    assert len(hash_lit.pairs) == 2
    assert str(program) == '{"one": 1, "two": 2}'
    assert str(parse_program("{}")) == "{}"


def test_hash_literal_with_expressions():
    program = parse_program('{"one": 0 + 1, "two": 10 - 8}')
    assert str(program) == '{"one": (0 + 1), "two": (10 - 8)}'


def test_expression_statement_keeps_token():
    stmt = parse_program("foobar;").statements[0]
    assert isinstance(stmt, ExpressionStatement)
    assert stmt.token_literal() == 'foobar'


def test_infix_expression_fields():
    expr = parse_program("5 != 6").statements[0].expression
    assert isinstance(expr, InfixExpression)
    assert expr.operator == '!='
    assert (expr.left.value, expr.right.value) == (5, 6)


@pytest.mark.parametrize('source, message', [
    ("let = 5;", "expected next token to be IDENT, got ASSIGN instead"),
    ("let x 5;", "expected next token to be ASSIGN, got INT instead"),
    ("let x = ;", "no prefix parse function for SEMICOLON found"),
    ("if (x { 1 }", "expected next token to be RPAREN, got LBRACE instead"),
    ("fn(x, 1) { x }", "expected next token to be IDENT, got INT instead"),
    ("fn(x) { x", "expected next token to be RBRACE, got EOF instead"),
    ("a @ b", "no prefix parse function for ILLEGAL found"),
    ("99999999999999999999", "could not parse 99999999999999999999 as integer"),
])
def test_parse_errors(source, message):
    with pytest.raises(ParseError) as exc_info:
        parse_program(source)
    assert exc_info.value.message == message


def test_largest_integer_literal_is_accepted():
    program = parse_program("9223372036854775807")
    assert program.statements[0].expression.value == 9223372036854775807


@pytest.mark.parametrize('source', [
    "let x = 5; x * 2",
    "if (a) { b } c",
    "let f = fn(a, b) { let c = a + b; return c; }; f(1, 2)",
    '{"a": [1, 2][0], true: fn() { }}["a"]',
    "-(-5); !!true; (1 + 2) * 3",
])
def test_rendering_is_idempotent(source):
    first = str(parse_program(source))
    assert str(parse_program(first)) == first


def test_example_programs_render_idempotently():
    for path in sorted(Path('examples').glob('*.monkey')):
        first = str(parse_program(path.read_text(encoding='utf-8')))
        assert str(parse_program(first)) == first, path.name


def test_parser_trace_reports_nesting():
    lines = []
    parse_program("1 + 2", trace=lines.append)
    assert lines[0] == "BEGIN parse_program"
    assert lines[-1] == "END parse_program"
    assert "\tBEGIN parse_statement" in lines


def test_deep_nesting_parses():
    program = parse_program('-' * 400 + '1')
    assert str(program).startswith('(-(-(-')


def test_excessive_nesting_is_a_parse_error():
    with pytest.raises(ParseError) as exc_info:
        parse_program('[' * 20000 + ']' * 20000)
    assert exc_info.value.message == "expression nested too deeply"
