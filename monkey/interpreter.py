"""Tree-walking interpreter for the Monkey language.

`Interpreter.evaluate` walks an AST produced by `monkey.parser` and returns
a runtime value from `monkey.objects`. Nothing in here raises for a faulty
Monkey program: failures are `Error` values, and every step checks its
operands for an `Error` before going further so the first failure is the one
that reaches the top. `return` works the same way, as a `ReturnValue` that
blocks hand back unchanged until the enclosing function call unwraps it.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from .ast import (
    Node, Program, LetStatement, ReturnStatement, ExpressionStatement,
    BlockStatement, Identifier, IntegerLiteral, StringLiteral, BooleanLiteral,
    PrefixExpression, InfixExpression, IfExpression, FunctionLiteral,
    CallExpression, ArrayLiteral, IndexExpression, HashLiteral,
)
from .builtin_function import Builtin
from .environment import Environment
from .objects import (
    NULL, FALSE, TRUE, Integer, Boolean, String, Null, Array, Hash, Function,
    Quote, ReturnValue, Error, is_error, is_hashable, native_bool_to_boolean,
    type_name, inspect, wrap_int64,
)
from .parser import parse_program
from .stack import call_with_deep_stack
from .std import build_builtins


class Interpreter:
    """Core interpreter that evaluates Monkey ASTs."""
    def __init__(self, builtins: Optional[Mapping[str, Builtin]] = None,
                 debug_level: int = 0, debug_file: Optional[str] = 'debug.txt'):
        self.builtins = builtins if builtins is not None else build_builtins()
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Any:
        if env is None:
            env = Environment()
        result = call_with_deep_stack(self.eval_program, program, env)
        if self.debug_level >= 1:
            self.debug(f"result: {type_name(result)} {inspect(result)}")
        return result

    def evaluate(self, node: Node, env: Environment) -> Any:
        # Statements
        if isinstance(node, Program):
            return self.eval_program(node, env)
        if isinstance(node, BlockStatement):
            return self.eval_block_statement(node, env)
        if isinstance(node, ExpressionStatement):
            return self.evaluate(node.expression, env)
        if isinstance(node, LetStatement):
            value = self.evaluate(node.value, env)
            if is_error(value):
                return value
            env.set(node.name.value, value)
            if self.debug_level >= 2:
                self.debug(f"let {node.name.value} = {inspect(value)}")
            return value
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.return_value, env)
            if is_error(value):
                return value
            return ReturnValue(value)

        # Expressions
        if isinstance(node, IntegerLiteral):
            return Integer(node.value)
        if isinstance(node, StringLiteral):
            return String(node.value)
        if isinstance(node, BooleanLiteral):
            return native_bool_to_boolean(node.value)
        if isinstance(node, Identifier):
            return self.eval_identifier(node, env)
        if isinstance(node, PrefixExpression):
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.eval_prefix_expression(node.operator, right)
        if isinstance(node, InfixExpression):
            left = self.evaluate(node.left, env)
            if is_error(left):
                return left
            right = self.evaluate(node.right, env)
            if is_error(right):
                return right
            return self.eval_infix_expression(node.operator, left, right)
        if isinstance(node, IfExpression):
            return self.eval_if_expression(node, env)
        if isinstance(node, FunctionLiteral):
            return Function(node.parameters, node.body, env)
        if isinstance(node, CallExpression):
            if isinstance(node.function, Identifier) and node.function.value == 'quote':
                return self.eval_quote(node)
            func = self.evaluate(node.function, env)
            if is_error(func):
                return func
            args = self.eval_expressions(node.arguments, env)
            if len(args) == 1 and is_error(args[0]):
                return args[0]
            return self.call_function(func, args)
        if isinstance(node, ArrayLiteral):
            elements = self.eval_expressions(node.elements, env)
            if len(elements) == 1 and is_error(elements[0]):
                return elements[0]
            return Array(elements)
        if isinstance(node, IndexExpression):
            left = self.evaluate(node.left, env)
            if is_error(left):
                return left
            index = self.evaluate(node.index, env)
            if is_error(index):
                return index
            return self.eval_index_expression(left, index)
        if isinstance(node, HashLiteral):
            return self.eval_hash_literal(node, env)
        raise TypeError(f"evaluate: unexpected node type {type(node).__name__}")

    def eval_program(self, program: Program, env: Environment) -> Any:
        result: Any = NULL
        for stmt in program.statements:
            result = self.evaluate(stmt, env)
            if isinstance(result, ReturnValue):
                return result.value
            if is_error(result):
                return result
        return result

    def eval_block_statement(self, block: BlockStatement, env: Environment) -> Any:
        result: Any = NULL
        for stmt in block.statements:
            result = self.evaluate(stmt, env)
            # leave the wrapper in place; only a function call unwraps it
            if isinstance(result, (ReturnValue, Error)):
                return result
        return result

    def eval_expressions(self, nodes: List[Node], env: Environment) -> List[Any]:
        """Evaluate left to right; on failure the result is just `[error]`."""
        values = []
        for node in nodes:
            value = self.evaluate(node, env)
            if is_error(value):
                return [value]
            values.append(value)
        return values

    def eval_quote(self, node: CallExpression) -> Any:
        # `quote` is a special form: its argument is kept as an unevaluated node
        if len(node.arguments) != 1:
            return Error(f"wrong number of arguments. got={len(node.arguments)}, want=1")
        return Quote(node.arguments[0])

    def eval_identifier(self, node: Identifier, env: Environment) -> Any:
        value = env.get(node.value)
        if value is not None:
            return value
        builtin = self.builtins.get(node.value)
        if builtin is not None:
            return builtin
        return Error(f"identifier not found: {node.value}")

    def eval_if_expression(self, node: IfExpression, env: Environment) -> Any:
        condition = self.evaluate(node.condition, env)
        if is_error(condition):
            return condition
        truthy = self.is_truthy(condition)
        if self.debug_level >= 3:
            self.debug(f"if condition {inspect(condition)} -> {truthy}")
        if truthy:
            return self.evaluate(node.consequence, env)
        if node.alternative is not None:
            return self.evaluate(node.alternative, env)
        return NULL

    def call_function(self, func: Any, args: List[Any]) -> Any:
        if isinstance(func, Function):
            if len(args) != len(func.parameters):
                return Error(f"wrong number of arguments. got={len(args)}, want={len(func.parameters)}")
            # New scope for the call; the closure's env is its parent
            call_env = func.env.enclosed()
            for param, arg in zip(func.parameters, args):
                call_env.set(param.value, arg)
            if self.debug_level >= 2:
                self.debug(f"call {inspect(func)} with ({', '.join(inspect(a) for a in args)})")
            result = self.evaluate(func.body, call_env)
            if isinstance(result, ReturnValue):
                return result.value
            return result
        if isinstance(func, Builtin):
            # None means variadic
            if func.arity is not None and len(args) != func.arity:
                return Error(f"wrong number of arguments. got={len(args)}, want={func.arity}")
            if self.debug_level >= 2:
                self.debug(f"call builtin {func.name}")
            return func.fn(args)
        return Error(f"not a function: {type_name(func)}")

    def is_truthy(self, value: Any) -> bool:
        # Only false and null are falsy; 0, "" and [] are all truthy
        if isinstance(value, Boolean):
            return value.value
        if isinstance(value, Null):
            return False
        return True

    def eval_prefix_expression(self, op: str, right: Any) -> Any:
        if op == '!':
            return FALSE if self.is_truthy(right) else TRUE
        if op == '-':
            if not isinstance(right, Integer):
                return Error(f"unknown operator: -{type_name(right)}")
            return Integer(wrap_int64(-right.value))
        return Error(f"unknown operator: {op}{type_name(right)}")

    def eval_infix_expression(self, op: str, left: Any, right: Any) -> Any:
        if isinstance(left, Integer) and isinstance(right, Integer):
            return self.eval_integer_infix_expression(op, left.value, right.value)
        if isinstance(left, Boolean) and isinstance(right, Boolean):
            if op == '==':
                return native_bool_to_boolean(left.value == right.value)
            if op == '!=':
                return native_bool_to_boolean(left.value != right.value)
        if isinstance(left, String) and isinstance(right, String) and op == '+':
            return String(left.value + right.value)
        return Error(f"unknown operator: {type_name(left)} {op} {type_name(right)}")

    def eval_integer_infix_expression(self, op: str, a: int, b: int) -> Any:
        if op == '+':
            return Integer(wrap_int64(a + b))
        if op == '-':
            return Integer(wrap_int64(a - b))
        if op == '*':
            return Integer(wrap_int64(a * b))
        if op == '/':
            if b == 0:
                return Error('division by zero')
            # integer division truncating toward zero
            quotient = abs(a) // abs(b)
            if (a < 0) != (b < 0):
                quotient = -quotient
            return Integer(wrap_int64(quotient))
        if op == '<':
            return native_bool_to_boolean(a < b)
        if op == '>':
            return native_bool_to_boolean(a > b)
        if op == '==':
            return native_bool_to_boolean(a == b)
        if op == '!=':
            return native_bool_to_boolean(a != b)
        return Error(f"unknown operator: INTEGER {op} INTEGER")

    def eval_index_expression(self, left: Any, index: Any) -> Any:
        if isinstance(left, Array) and isinstance(index, Integer):
            i = index.value
            if i < 0 or i >= len(left.elements):
                return NULL
            return left.elements[i]
        if isinstance(left, Hash):
            if not is_hashable(index):
                return Error(f"unusable as hash key: {type_name(index)}")
            return left.pairs.get(index, NULL)
        return Error(f"index operator not supported: {type_name(left)}")

    def eval_hash_literal(self, node: HashLiteral, env: Environment) -> Any:
        pairs = {}
        for key_node, value_node in node.pairs:
            key = self.evaluate(key_node, env)
            if is_error(key):
                return key
            if not is_hashable(key):
                return Error(f"unusable as hash key: {type_name(key)}")
            value = self.evaluate(value_node, env)
            if is_error(value):
                return value
            pairs[key] = value
        return Hash(pairs)


def run_program(source: str, debug_level: int = 0) -> Any:
    """Convenience function to parse and evaluate a Monkey program from source."""
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program)
    finally:
        interpreter.close()
