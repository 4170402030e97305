"""Interpreter for the Slang language.

`Interpreter.evaluate` reduces an expression tree to a value without
touching the environment; `Interpreter.execute` runs statements, which are
the only thing that mutate it. Blocks run inside a fresh innermost scope
that is dropped again however the block exits.

Errors are raised as `SlangError` subclasses. An error leaving a statement
is tagged with that statement's line if it does not carry one already.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional, TextIO

from .ast import (
    Op, Node, Literal, Identifier, ArrayLiteral, FnCall, Cons,
    Stmt, Block, ExprStmt, PrintStmt, Declaration, IfStmt, WhileStmt, Program,
    statement_line,
)
from .builtin_function import BuiltinFunction, default_builtins
from .environment import Environment
from .errors import CallError, ShapeError, SlangError, TypeMismatchError, UninitializedVariableError
from .parser import parse_program
from . import types
from .types import ArrayVal, to_string, type_name


BINARY_OPS: Dict[Op, Callable[[Any, Any], Any]] = {
    Op.PLUS: types.add,
    Op.MINUS: types.subtract,
    Op.MULTIPLY: types.multiply,
    Op.DIVIDE: types.divide,
    Op.MOD: types.modulus,
    Op.EQUAL: types.equal,
    Op.NOT_EQUAL: types.not_equal,
    Op.LESS: types.less,
    Op.GREATER: types.greater,
    Op.LESS_EQUAL: types.less_equal,
    Op.GREATER_EQUAL: types.greater_equal,
    Op.AND: types.logical_and,
    Op.OR: types.logical_or,
}

UNARY_OPS: Dict[Op, Callable[[Any], Any]] = {
    Op.MINUS: types.negate,
    Op.NOT: types.logical_not,
}


class Interpreter:
    """Core interpreter that executes Slang programs."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', output: Optional[TextIO] = None):
        self.global_env = Environment()
        self.functions: Dict[str, BuiltinFunction] = default_builtins()
        self.output = output
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None

    def debug(self, msg: str):
        if self.debug_level > 0 and self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def register(self, name: str, arity: Optional[int], fn: Callable[[List[Any]], Any]):
        """Make a Python callable available to Slang code as ``name(...)``."""
        self.functions[name] = BuiltinFunction(name, arity, fn)

    # Public API
    def run(self, program: Program, env: Optional[Environment] = None) -> Any:
        """Execute a program in the outermost scope of ``env``.

        Returns the value of the last statement, which is ``None`` unless it
        was an expression statement.
        """
        if env is None:
            env = self.global_env
        result = None
        for stmt in program.body:
            result = self.execute(stmt, env)
        return result

    def run_source(self, source: str, env: Optional[Environment] = None) -> Any:
        return self.run(parse_program(source), env)

    def execute_block(self, block: Block, env: Environment):
        with env.scope():
            if self.debug_level >= 2:
                self.debug(f"enter scope (depth {env.depth})")
            for stmt in block.statements:
                self.execute(stmt, env)
        if self.debug_level >= 2:
            self.debug(f"leave scope (depth {env.depth})")

    def execute(self, stmt: Stmt, env: Environment) -> Any:
        if self.debug_level >= 1:
            self.debug(f"line {statement_line(stmt)}: {type(stmt).__name__}")
        try:
            return self.execute_statement(stmt, env)
        except SlangError as e:
            if e.line is None:
                e.line = statement_line(stmt)
            raise
        except RecursionError:
            raise ShapeError('expression nested too deeply', statement_line(stmt)) from None

    def execute_statement(self, stmt: Stmt, env: Environment) -> Any:
        if isinstance(stmt, ExprStmt):
            return self.evaluate(stmt.expr, env)
        if isinstance(stmt, PrintStmt):
            print(to_string(self.evaluate(stmt.expr, env)), file=self.output)
            return None
        if isinstance(stmt, Declaration):
            if not stmt.alias and not env.is_bound(stmt.name):
                raise UninitializedVariableError(stmt.name)
            value = self.evaluate(stmt.rhs, env)
            env.declare(stmt.name, value, stmt.alias)
            if self.debug_level >= 2:
                self.debug(f"declare {stmt.name}: {type_name(value)} = {to_string(value)}")
            return None
        if isinstance(stmt, IfStmt):
            if self.check_condition(stmt.condition, env, 'if'):
                self.execute_block(stmt.then_block, env)
            else:
                self.execute_block(stmt.else_block, env)
            return None
        if isinstance(stmt, WhileStmt):
            while self.check_condition(stmt.condition, env, 'while'):
                self.execute_block(stmt.body, env)
            return None
        raise NotImplementedError(f"execute: unexpected statement type {type(stmt)}")

    def check_condition(self, condition: Node, env: Environment, keyword: str) -> bool:
        value = self.evaluate(condition, env)
        if self.debug_level >= 3:
            self.debug(f"{keyword} condition {condition} -> {to_string(value)}")
        if not isinstance(value, bool):
            raise TypeMismatchError(f'{keyword} condition must be Boolean, got {type_name(value)}')
        return value

    def evaluate(self, node: Node, env: Environment) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Identifier):
            return env.get(node.name)
        if isinstance(node, ArrayLiteral):
            return ArrayVal([self.evaluate(el, env) for el in node.elements])
        if isinstance(node, FnCall):
            args = [self.evaluate(arg, env) for arg in node.args]
            return self.call_function(node.name, args)
        if isinstance(node, Cons):
            return self.evaluate_cons(node, env)
        raise ShapeError(f'invalid expression: {node!r}')

    def evaluate_cons(self, node: Cons, env: Environment) -> Any:
        op = node.op
        operands = node.operands
        if op is Op.INDEXING and len(operands) == 2:
            target = self.evaluate(operands[0], env)
            idx = self.evaluate(operands[1], env)
            return types.index(target, idx)
        if op is Op.ACCESS and len(operands) == 2 and isinstance(operands[1], Identifier):
            target = self.evaluate(operands[0], env)
            return types.access(target, operands[1].name)
        if op in BINARY_OPS and len(operands) == 2:
            left = self.evaluate(operands[0], env)
            right = self.evaluate(operands[1], env)
            return BINARY_OPS[op](left, right)
        if op in UNARY_OPS and len(operands) == 1:
            return UNARY_OPS[op](self.evaluate(operands[0], env))
        raise ShapeError(f'invalid expression: {op} with {len(operands)} operand(s)')

    def call_function(self, name: str, args: List[Any]) -> Any:
        func = self.functions.get(name)
        if func is None:
            raise CallError(f'undefined function {name}')
        if func.arity is not None and len(args) != func.arity:
            raise ShapeError(f"{name} expects {func.arity} argument(s), got {len(args)}")
        try:
            return func.fn(args)
        except SlangError:
            raise
        except Exception as e:
            raise CallError(f'{name} failed: {e}') from e


def run_program(source: str, debug_level: int = 0) -> Any:
    """Convenience function to parse and run a Slang program from source string."""
    program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level)
    try:
        return interpreter.run(program)
    finally:
        interpreter.close()


def run_file(file_path: str, debug_level: int = 0) -> Any:
    """Run a Slang file and return the value of its last statement."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level)
