# Slang language package
# This package provides a parser and tree-walking interpreter for Slang.
from .errors import SlangError
from .environment import Environment
from .parser import parse_expression, parse_program
from .interpreter import Interpreter, run_program, run_file

__all__ = [
    'SlangError',
    'Environment',
    'parse_expression',
    'parse_program',
    'Interpreter',
    'run_program',
    'run_file',
]
