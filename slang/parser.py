"""Parser for the Slang language.

Expressions are parsed with a Pratt (binding power) parser. Every infix
operator has a pair of binding powers ``(left, right)``; `Parser.expr_bp`
keeps absorbing operators whose left binding power is at least the minimum
it was called with, and parses each right-hand side with the operator's
right binding power. A right power one above the left power makes
operators of the same level associate to the left.

Statements are newline terminated:

    let x = 1
    x = x + 1
    x += 1
    print x
    if x > 1 { ... } elif x < 0 { ... } else { ... }
    while x > 0 { ... }
    x * 2

`parse_program` and `parse_expression` are the public entry points.
"""

from __future__ import annotations

from typing import Dict, List, Tuple, Union

from .ast import (
    Op, Node, Literal, Identifier, ArrayLiteral, FnCall, Cons,
    Stmt, Block, ExprStmt, PrintStmt, Declaration, IfStmt, WhileStmt, Program,
)
from .errors import ParseError
from .scanner import Token, scan_tokens


INFIX_OPS: Dict[str, Op] = {
    'OR': Op.OR,
    'AND': Op.AND,
    'EQUAL': Op.EQUAL,
    'BANG_EQUAL': Op.NOT_EQUAL,
    'LESS': Op.LESS,
    'GREATER': Op.GREATER,
    'LESS_EQUAL': Op.LESS_EQUAL,
    'GREATER_EQUAL': Op.GREATER_EQUAL,
    'PLUS': Op.PLUS,
    'MINUS': Op.MINUS,
    'STAR': Op.MULTIPLY,
    'SLASH': Op.DIVIDE,
    'PERCENT': Op.MOD,
    'LSQB': Op.INDEXING,
    'DOT': Op.ACCESS,
}

PREFIX_OPS: Dict[str, Op] = {
    'MINUS': Op.MINUS,
    'BANG': Op.NOT,
}

PREFIX_BP = 11


def infix_binding_power(op: Op) -> Tuple[int, int]:
    if op is Op.OR:
        return 1, 2
    if op is Op.AND:
        return 3, 4
    if op in (Op.EQUAL, Op.NOT_EQUAL, Op.LESS, Op.GREATER, Op.LESS_EQUAL, Op.GREATER_EQUAL):
        return 5, 6
    if op in (Op.PLUS, Op.MINUS):
        return 7, 8
    if op in (Op.MULTIPLY, Op.DIVIDE, Op.MOD):
        return 9, 10
    if op in (Op.INDEXING, Op.ACCESS):
        return 13, 14
    raise ValueError(f'{op} is not an infix operator')


COMPOUND_ASSIGN = {
    'PLUS_ASSIGN': Op.PLUS,
    'MINUS_ASSIGN': Op.MINUS,
}

STATEMENT_END = ('NEWLINE', 'EOF', 'RBRACE')


class Parser:
    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0

    def peek(self, offset: int = 0) -> Token:
        i = self.pos + offset
        if i < len(self.tokens):
            return self.tokens[i]
        last = self.tokens[-1].line if self.tokens else 1
        return Token('EOF', '', None, last)

    def next(self) -> Token:
        token = self.peek()
        if self.pos < len(self.tokens):
            self.pos += 1
        return token

    def match(self, *kinds: str) -> bool:
        return self.peek().kind in kinds

    def consume(self, kind: str, what: str) -> Token:
        token = self.peek()
        if token.kind != kind:
            raise self.error(token, f'expected {what}')
        self.pos += 1
        return token

    def error(self, token: Token, message: str) -> ParseError:
        return ParseError(f'{message}, got {token}', token.line, incomplete=token.kind == 'EOF')

    def skip_newlines(self):
        while self.match('NEWLINE'):
            self.pos += 1

    # Expressions

    def parse_expression(self) -> Node:
        return self.expr_bp(0)

    def expr_bp(self, min_bp: int) -> Node:
        lhs = self.parse_operand()
        while True:
            token = self.peek()
            op = INFIX_OPS.get(token.kind)
            if op is None:
                break
            l_bp, r_bp = infix_binding_power(op)
            if l_bp < min_bp:
                break
            self.next()
            if op is Op.INDEXING:
                idx = self.expr_bp(0)
                self.consume('RSQB', "']' to close index")
                lhs = Cons(op, (lhs, idx))
            elif op is Op.ACCESS:
                name = self.consume('IDENTIFIER', 'field name after .')
                lhs = Cons(op, (lhs, Identifier(name.lexeme)))
            else:
                rhs = self.expr_bp(r_bp)
                lhs = Cons(op, (lhs, rhs))
        return lhs

    def parse_operand(self) -> Node:
        token = self.next()
        kind = token.kind
        if kind in ('NUMBER', 'STRING'):
            return Literal(token.literal)
        if kind == 'TRUE':
            return Literal(True)
        if kind == 'FALSE':
            return Literal(False)
        if kind == 'IDENTIFIER':
            if self.match('LPAR'):
                self.next()
                args = self.parse_list('RPAR', "')' to close call")
                return FnCall(token.lexeme, tuple(args))
            return Identifier(token.lexeme)
        if kind == 'LPAR':
            expr = self.expr_bp(0)
            self.consume('RPAR', "')'")
            return expr
        if kind == 'LSQB':
            elements = self.parse_list('RSQB', "']' to close array")
            return ArrayLiteral(tuple(elements))
        if kind in PREFIX_OPS:
            operand = self.expr_bp(PREFIX_BP)
            return Cons(PREFIX_OPS[kind], (operand,))
        raise self.error(token, 'expected an expression')

    def parse_list(self, closer: str, what: str) -> List[Node]:
        items: List[Node] = []
        if self.match(closer):
            self.next()
            return items
        while True:
            items.append(self.expr_bp(0))
            if self.match('COMMA'):
                self.next()
                continue
            self.consume(closer, what)
            return items

    # Statements

    def parse_program(self) -> Program:
        statements: List[Stmt] = []
        self.skip_newlines()
        while not self.match('EOF'):
            statements.append(self.parse_statement())
            self.end_statement()
            self.skip_newlines()
        return Program(statements)

    def end_statement(self):
        token = self.peek()
        if token.kind not in STATEMENT_END:
            raise self.error(token, 'expected end of statement')

    def parse_statement(self) -> Stmt:
        token = self.peek()
        line = token.line
        if token.kind == 'LET':
            self.next()
            name = self.consume('IDENTIFIER', 'variable name after let')
            self.consume('ASSIGN', "'='")
            return Declaration(name.lexeme, self.parse_expression(), alias=True, line=line)
        if token.kind == 'PRINT':
            self.next()
            return PrintStmt(self.parse_expression(), line=line)
        if token.kind == 'IF':
            self.next()
            return self.parse_if(line)
        if token.kind == 'WHILE':
            self.next()
            condition = self.parse_expression()
            body = self.parse_block()
            return WhileStmt(condition, body, line=line)
        if token.kind == 'IDENTIFIER':
            follow = self.peek(1).kind
            if follow == 'ASSIGN':
                self.pos += 2
                return Declaration(token.lexeme, self.parse_expression(), alias=False, line=line)
            if follow in COMPOUND_ASSIGN:
                self.pos += 2
                rhs = Cons(COMPOUND_ASSIGN[follow], (Identifier(token.lexeme), self.parse_expression()))
                return Declaration(token.lexeme, rhs, alias=False, line=line)
        return ExprStmt(self.parse_expression(), line=line)

    def parse_if(self, line: int) -> IfStmt:
        condition = self.parse_expression()
        then_block = self.parse_block()
        else_block = Block()
        # else/elif may sit on the line after the closing brace
        save = self.pos
        self.skip_newlines()
        if self.match('ELIF'):
            elif_line = self.next().line
            else_block = Block([self.parse_if(elif_line)])
        elif self.match('ELSE'):
            self.next()
            else_block = self.parse_block()
        else:
            self.pos = save
        return IfStmt(condition, then_block, else_block, line=line)

    def parse_block(self) -> Block:
        self.consume('LBRACE', "'{' to open block")
        statements: List[Stmt] = []
        self.skip_newlines()
        while not self.match('RBRACE'):
            if self.match('EOF'):
                raise self.error(self.peek(), "expected '}' to close block")
            statements.append(self.parse_statement())
            self.end_statement()
            self.skip_newlines()
        self.next()
        return Block(statements)


def _tokens(source: Union[str, List[Token]]) -> List[Token]:
    if isinstance(source, str):
        return scan_tokens(source)
    return list(source)


def parse_expression(source: Union[str, List[Token]]) -> Node:
    """Parse a single expression; trailing tokens other than newlines are an error."""
    parser = Parser(_tokens(source))
    try:
        expr = parser.parse_expression()
    except RecursionError:
        raise ParseError('expression nested too deeply', parser.peek().line) from None
    parser.skip_newlines()
    if not parser.match('EOF'):
        raise parser.error(parser.peek(), 'unexpected token after expression')
    return expr


def parse_program(source: Union[str, List[Token]]) -> Program:
    """Parse Slang source code (or an already scanned token list) into a Program."""
    parser = Parser(_tokens(source))
    try:
        return parser.parse_program()
    except RecursionError:
        raise ParseError('expression nested too deeply', parser.peek().line) from None
