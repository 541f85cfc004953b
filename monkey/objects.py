"""Runtime values for the Monkey interpreter.

Each kind of value the evaluator can produce has its own class. Integers,
booleans and strings are frozen dataclasses, so they compare and hash by
content and can be used directly as hash-map keys; every other value is
either mutable or compared by identity and is rejected as a key.

Errors are values too. The evaluator returns an `Error` like any other
result and checks for it before each further step, so a failure deep inside
an expression travels back to the top unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List

from .builtin_function import Builtin

if TYPE_CHECKING:
    from .ast import BlockStatement, Identifier, Node
    from .environment import Environment


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary Python int into the signed 64-bit range."""
    value &= (1 << 64) - 1
    if value > INT64_MAX:
        value -= 1 << 64
    return value


@dataclass(frozen=True)
class Integer:
    value: int


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class String:
    value: str


class Null:
    """Marker object for the Monkey `null` value."""
    def __repr__(self) -> str:
        return 'NULL'


@dataclass
class Array:
    """An ordered list of values.

    Built-ins never modify an array in place; `push` and `rest` return new
    arrays.
    """
    elements: List[Any] = field(default_factory=list)


@dataclass
class Hash:
    """A mapping from hashable values (Integer, Boolean, String) to values."""
    pairs: Dict[Any, Any] = field(default_factory=dict)


@dataclass(eq=False)
class Function:
    parameters: List['Identifier']
    body: 'BlockStatement'
    env: 'Environment'  # defining scope, shared by reference

    def __repr__(self) -> str:
        return f"<function {inspect(self)}>"


@dataclass
class Quote:
    """An unevaluated expression captured by the `quote` special form."""
    node: 'Node'


@dataclass
class ReturnValue:
    value: Any


@dataclass
class Error:
    message: str


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool_to_boolean(value: bool) -> Boolean:
    return TRUE if value else FALSE


def is_hashable(value: Any) -> bool:
    return isinstance(value, (Integer, Boolean, String))


def is_error(value: Any) -> bool:
    return isinstance(value, Error)


def type_name(value: Any) -> str:
    """Return the Monkey type name of a runtime value."""
    if isinstance(value, Integer):
        return 'INTEGER'
    if isinstance(value, Boolean):
        return 'BOOLEAN'
    if isinstance(value, String):
        return 'STRING'
    if isinstance(value, Null):
        return 'NULL'
    if isinstance(value, Array):
        return 'ARRAY'
    if isinstance(value, Hash):
        return 'HASH'
    if isinstance(value, Function):
        return 'FUNCTION'
    if isinstance(value, Builtin):
        return 'BUILTIN'
    if isinstance(value, Quote):
        return 'QUOTE'
    if isinstance(value, ReturnValue):
        return 'RETURN_VALUE'
    if isinstance(value, Error):
        return 'ERROR'
    return type(value).__name__


def inspect(value: Any) -> str:
    """Render a runtime value the way the shell prints it."""
    if isinstance(value, Integer):
        return str(value.value)
    if isinstance(value, Boolean):
        return 'true' if value.value else 'false'
    if isinstance(value, String):
        return value.value
    if isinstance(value, Null):
        return 'null'
    if isinstance(value, Array):
        return '[' + ', '.join(inspect(e) for e in value.elements) + ']'
    if isinstance(value, Hash):
        entries = ', '.join(f"{inspect(k)}: {inspect(v)}" for k, v in value.pairs.items())
        return '{' + entries + '}'
    if isinstance(value, Function):
        params = ', '.join(str(p) for p in value.parameters)
        return f"fn({params}) {value.body}"
    if isinstance(value, Builtin):
        return 'builtin function'
    if isinstance(value, Quote):
        return f"QUOTE({value.node})"
    if isinstance(value, ReturnValue):
        return inspect(value.value)
    if isinstance(value, Error):
        return f"ERROR: {value.message}"
    return str(value)
