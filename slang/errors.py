from typing import Any, Dict, List, Optional


class SlangError(Exception):
    """Base type for all Slang errors.

    Every error carries a kind (``name``), a human readable message and,
    once known, the source line it was raised on.
    """
    name = 'Error'

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is not None:
            return f"{self.name} [line {self.line}]: {self.message}"
        return f"{self.name}: {self.message}"


class LexError(SlangError):
    name = 'LexError'


class ParseError(SlangError):
    """Raised for structurally invalid input.

    ``incomplete`` is set when the parser ran out of tokens, which lets the
    REPL keep reading continuation lines instead of reporting the error.
    """
    name = 'ParseError'

    def __init__(self, message: str, line: Optional[int] = None, incomplete: bool = False):
        super().__init__(message, line)
        self.incomplete = incomplete


class UndefinedVariableError(SlangError):
    name = 'UndefinedVariableError'

    def __init__(self, variable: str, snapshot: List[Dict[str, Any]], line: Optional[int] = None):
        super().__init__(f'undefined variable {variable}', line)
        self.variable = variable
        self.snapshot = snapshot


class UninitializedVariableError(SlangError):
    name = 'UninitializedVariableError'

    def __init__(self, variable: str, line: Optional[int] = None):
        super().__init__(f'uninitialized variable {variable}', line)
        self.variable = variable


class TypeMismatchError(SlangError):
    name = 'TypeMismatchError'


class ShapeError(SlangError):
    name = 'ShapeError'


class DivisionByZeroError(SlangError):
    name = 'DivisionByZeroError'


class CallError(SlangError):
    name = 'CallError'
