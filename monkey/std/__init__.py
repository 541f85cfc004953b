from types import MappingProxyType
from typing import Any, List, Mapping, Optional, TextIO

from .basic_io import BasicIO
from monkey.builtin_function import Builtin
from monkey.objects import NULL, Array, Error, Integer, String, type_name


def build_builtins(out: Optional[TextIO] = None) -> Mapping[str, Builtin]:
    """Create the read-only table of built-in functions.

    Arity is declared on each `Builtin` and checked by the interpreter before
    the function runs, so the functions below only validate argument types.
    `out` redirects `puts`; by default it writes to the current sys.stdout.
    """
    basic_io = BasicIO(out)

    def std_len(args: List[Any]) -> Any:
        arg = args[0]
        if isinstance(arg, String):
            return Integer(len(arg.value))
        if isinstance(arg, Array):
            return Integer(len(arg.elements))
        return Error(f"argument to `len` not supported, got {type_name(arg)}")

    def std_first(args: List[Any]) -> Any:
        arr = args[0]
        if not isinstance(arr, Array):
            return Error(f"argument to `first` must be ARRAY, got {type_name(arr)}")
        if arr.elements:
            return arr.elements[0]
        return NULL

    def std_last(args: List[Any]) -> Any:
        arr = args[0]
        if not isinstance(arr, Array):
            return Error(f"argument to `last` must be ARRAY, got {type_name(arr)}")
        if arr.elements:
            return arr.elements[-1]
        return NULL

    def std_rest(args: List[Any]) -> Any:
        arr = args[0]
        if not isinstance(arr, Array):
            return Error(f"argument to `rest` must be ARRAY, got {type_name(arr)}")
        if arr.elements:
            return Array(list(arr.elements[1:]))
        return NULL

    def std_push(args: List[Any]) -> Any:
        arr, value = args
        if not isinstance(arr, Array):
            return Error(f"argument to `push` must be ARRAY, got {type_name(arr)}")
        return Array(list(arr.elements) + [value])

    def std_puts(args: List[Any]) -> Any:
        return basic_io.puts(args)

    table = {
        'len': Builtin('len', 1, std_len),
        'first': Builtin('first', 1, std_first),
        'last': Builtin('last', 1, std_last),
        'rest': Builtin('rest', 1, std_rest),
        'push': Builtin('push', 2, std_push),
        'puts': Builtin('puts', None, std_puts),
    }
    return MappingProxyType(table)
