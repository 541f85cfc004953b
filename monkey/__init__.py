# Monkey language package
# This package provides a tokenizer, parser and tree-walking interpreter for Monkey.
from .errors import MonkeyError, LexerError, ParseError
from .interpreter import run_program, Interpreter
from .parser import parse_program

__all__ = [
    'run_program',
    'parse_program',
    'Interpreter',
    'MonkeyError',
    'LexerError',
    'ParseError',
]
