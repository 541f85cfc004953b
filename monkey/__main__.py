"""CLI entry point for the Monkey interpreter.

Usage:
    python -m monkey [-v|-vv|-vvv|-vvvv] [program_file]
    python -m monkey [-v...] --emit-ast <program_file>
    python -m monkey [-v...] --ast <ast_json_file>
    python -m monkey --tokens <program_file>

Options:
  -v            Increase debug verbosity (can be repeated)
  --emit-ast    Parse the given .monkey file and emit an AST JSON file
  --ast         Execute a previously emitted AST JSON file
  --tokens      Print the token stream of the given .monkey file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero; `-vvvv` also traces the parser. Without a
program file the interactive shell is started.
"""

import argparse
import json
import sys
from pathlib import Path
from .ast_json import ast_to_obj, ast_from_obj
from .errors import MonkeyError
from .interpreter import Interpreter
from .lexer import tokenize
from .objects import Error
from .parser import parse_program
from .repl import Shell


def read_source(path: str) -> str:
    program_file = Path(path)
    if not program_file.exists():
        print(f"Error: file {program_file} not found", file=sys.stderr)
        sys.exit(1)
    with open(program_file, 'r', encoding='utf-8') as f:
        return f.read()


def execute(ast_program, interpreter: Interpreter) -> None:
    try:
        result = interpreter.run(ast_program)
    except RecursionError:
        print("Runtime error: maximum recursion depth exceeded", file=sys.stderr)
        sys.exit(1)
    finally:
        interpreter.close()
    if isinstance(result, Error):
        print(f"Runtime error: {result.message}", file=sys.stderr)
        sys.exit(1)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Monkey language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='MONKEY_FILE', help='emit AST JSON for the given .monkey file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    group.add_argument('--tokens', metavar='MONKEY_FILE', help='print the tokens of the given .monkey file')
    parser.add_argument('program', nargs='?', help='Monkey program file (.monkey) to execute')
    args = parser.parse_args(argv)

    # Token dump mode
    if args.tokens:
        source = read_source(args.tokens)
        try:
            tokens = tokenize(source)
        except MonkeyError as e:
            print(f"Lexer error: {e.message}", file=sys.stderr)
            sys.exit(1)
        for tok in tokens:
            print(repr(tok))
        return

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(args.emit_ast)
        try:
            ast_program = parse_program(source)
        except MonkeyError as e:
            print(f"Parse error: {e.message}", file=sys.stderr)
            sys.exit(1)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        if not ast_path.exists():
            print(f"Error: file {ast_path} not found", file=sys.stderr)
            sys.exit(1)
        try:
            with open(ast_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            ast_program = ast_from_obj(data)
        except MonkeyError as e:
            print(f"Parse error: {e.message}", file=sys.stderr)
            sys.exit(1)
        except (KeyError, TypeError, ValueError, RecursionError) as e:
            # json.JSONDecodeError is a ValueError
            print(f"Parse error: invalid AST file {ast_path}: {e!r}", file=sys.stderr)
            sys.exit(1)
        execute(ast_program, Interpreter(debug_level=args.v))
        return

    # No program: interactive shell
    if not args.program:
        Shell().cmdloop()
        return

    source = read_source(args.program)
    interpreter = Interpreter(debug_level=args.v)
    trace = interpreter.debug if args.v >= 4 else None
    try:
        ast_program = parse_program(source, trace=trace)
    except MonkeyError as e:
        interpreter.close()
        print(f"Parse error: {e.message}", file=sys.stderr)
        sys.exit(1)
    execute(ast_program, interpreter)


if __name__ == '__main__':
    main()
