"""CLI entry point for the Slang interpreter.

Usage:
    python -m slang [-v|-vv|-vvv]              start the interactive prompt
    python -m slang [-v|-vv|-vvv] <script>     run a .slang file

Options:
  -v            Increase debug verbosity (can be repeated)

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. At the prompt, type `exit` to leave.
"""

import argparse
import builtins
import sys
from pathlib import Path
from typing import Optional

from .ast import IfStmt, Program
from .errors import LexError, ParseError, SlangError
from .interpreter import Interpreter
from .parser import parse_program
from .scanner import scan_tokens
from .types import to_string

USAGE = 'Usage: slang [script]'


def execute_input(interpreter: Interpreter, program: Program) -> None:
    try:
        result = interpreter.run(program)
    except SlangError as e:
        print(e, file=sys.stderr)
    else:
        if result is not None:
            print(to_string(result))


def continues_if(line: str) -> bool:
    try:
        first = scan_tokens(line)[0]
    except LexError:
        return False
    return first.kind in ('ELSE', 'ELIF')


def run_prompt(interpreter: Interpreter) -> None:
    """Read-evaluate-print loop.

    Input that stops in the middle of a construct (an open block, a
    dangling operator) is continued on the next line; end of input abandons
    it. An `if` whose block closes at the end of a line waits for the next
    line in case it carries an `else` or `elif`. Errors are reported and the
    loop carries on with the environment intact.
    """
    buffer = ''
    pending: Optional[Program] = None
    while True:
        try:
            line = builtins.input('.. ' if buffer else '>> ')
        except EOFError:
            if pending is not None:
                execute_input(interpreter, pending)
            break
        if pending is not None:
            if not continues_if(line):
                execute_input(interpreter, pending)
                buffer = ''
            pending = None
        if not buffer and line.strip() == 'exit':
            break
        buffer += line + '\n'
        try:
            program = parse_program(buffer)
        except ParseError as e:
            if e.incomplete:
                continue
            print(e, file=sys.stderr)
            buffer = ''
            continue
        except SlangError as e:
            print(e, file=sys.stderr)
            buffer = ''
            continue
        if program.body and isinstance(program.body[-1], IfStmt) and line.rstrip().endswith('}'):
            pending = program
            continue
        execute_input(interpreter, program)
        buffer = ''


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog='slang', description="Slang language interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('scripts', nargs='*', metavar='script', help='Slang program file (.slang) to execute')
    args = parser.parse_args(argv)

    if len(args.scripts) > 1:
        print(USAGE)
        return 0

    interpreter = Interpreter(debug_level=args.v)
    try:
        if not args.scripts:
            run_prompt(interpreter)
            return 0
        program_file = Path(args.scripts[0])
        if not program_file.exists():
            print(f"Error: file {program_file} not found", file=sys.stderr)
            return 1
        with open(program_file, 'r', encoding='utf-8') as f:
            source = f.read()
        try:
            interpreter.run_source(source)
        except SlangError as e:
            print(e, file=sys.stderr)
            return 1
        return 0
    finally:
        interpreter.close()


if __name__ == '__main__':
    sys.exit(main())
