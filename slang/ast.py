"""Expression tree and statement definitions for the Slang language.

Expressions are either atoms (literals, identifier references, array
literals and function calls) or a `Cons` applying an operator to a tuple
of operand expressions. Expression nodes are frozen: once the parser has
built a tree, evaluation only reads it.

``str()`` of an expression gives its canonical form: fully parenthesised
infix text that parses back to an equivalent tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

from .types import format_number


class Op(Enum):
    PLUS = '+'
    MINUS = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    MOD = '%'
    EQUAL = '=='
    NOT_EQUAL = '!='
    LESS = '<'
    GREATER = '>'
    LESS_EQUAL = '<='
    GREATER_EQUAL = '>='
    AND = 'and'
    OR = 'or'
    NOT = '!'
    INDEXING = '[]'
    ACCESS = '.'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Node:
    """Base class for all expression nodes."""
    pass


@dataclass(frozen=True)
class Atom(Node):
    """Base class for leaf expressions."""
    pass


@dataclass(frozen=True)
class Literal(Atom):
    value: Any  # float, str or bool

    def __str__(self) -> str:
        if isinstance(self.value, bool):
            return 'true' if self.value else 'false'
        if isinstance(self.value, float):
            return format_number(self.value)
        return f'"{self.value}"'


@dataclass(frozen=True)
class Identifier(Atom):
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ArrayLiteral(Atom):
    elements: Tuple[Node, ...]

    def __str__(self) -> str:
        return '[' + ', '.join(str(e) for e in self.elements) + ']'


@dataclass(frozen=True)
class FnCall(Atom):
    name: str
    args: Tuple[Node, ...]

    def __str__(self) -> str:
        return f"{self.name}(" + ', '.join(str(a) for a in self.args) + ')'


@dataclass(frozen=True)
class Cons(Node):
    op: Op
    operands: Tuple[Node, ...]

    def __str__(self) -> str:
        if len(self.operands) == 1:
            return f"({self.op}{self.operands[0]})"
        if len(self.operands) == 2:
            left, right = self.operands
            if self.op is Op.INDEXING:
                return f"({left}[{right}])"
            if self.op is Op.ACCESS:
                return f"({left}.{right})"
            return f"({left} {self.op} {right})"
        return f"({self.op} " + ' '.join(str(o) for o in self.operands) + ')'


###############################################################################
# Statements
###############################################################################


@dataclass
class Stmt:
    """Base class for statements. ``line`` is where the statement starts."""
    pass


@dataclass
class Block:
    statements: List[Stmt] = field(default_factory=list)


@dataclass
class ExprStmt(Stmt):
    expr: Node
    line: int = 0


@dataclass
class PrintStmt(Stmt):
    expr: Node
    line: int = 0


@dataclass
class Declaration(Stmt):
    name: str
    rhs: Node
    alias: bool
    line: int = 0


@dataclass
class IfStmt(Stmt):
    condition: Node
    then_block: Block
    else_block: Block = field(default_factory=Block)
    line: int = 0


@dataclass
class WhileStmt(Stmt):
    condition: Node
    body: Block
    line: int = 0


@dataclass
class Program:
    body: List[Stmt]


def statement_line(stmt: Stmt) -> Optional[int]:
    line = getattr(stmt, 'line', 0)
    return line or None
