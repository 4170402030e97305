"""Tokenizer for the Slang language.

Source text is split into tokens by a Lark basic lexer. The grammar below
only exists to declare the terminals: its single rule accepts any sequence
of them so that Lark keeps every terminal in the lexer. Identifiers that
spell a keyword are retyped after lexing.

The scanner produces a flat list of `Token` objects terminated by an `EOF`
token. Whitespace and `#` comments are dropped; newlines are kept because
they terminate statements.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Optional, Union

from lark import Lark
from lark.exceptions import UnexpectedCharacters

from .errors import LexError


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str
    literal: Optional[Union[float, str]]
    line: int

    def __str__(self) -> str:
        if self.kind == 'EOF':
            return 'end of input'
        if self.kind == 'NEWLINE':
            return 'newline'
        return repr(self.lexeme)


SLANG_TOKENS = r"""
    start: (NUMBER | STRING | NAME | NEWLINE
           | LPAR | RPAR | LBRACE | RBRACE | LSQB | RSQB | COMMA | DOT
           | PLUS_ASSIGN | MINUS_ASSIGN | PLUS | MINUS | STAR | SLASH | PERCENT
           | EQUAL | BANG_EQUAL | BANG | LESS_EQUAL | GREATER_EQUAL | LESS | GREATER
           | ASSIGN)*

    NUMBER: /\d+(?:\.\d+)?(?:[eE][+-]?\d+)?/
    STRING: /"[^"]*"/
    NAME: /[A-Za-z_][A-Za-z0-9_]*/
    NEWLINE: /\r?\n/

    LPAR: "("
    RPAR: ")"
    LBRACE: "{"
    RBRACE: "}"
    LSQB: "["
    RSQB: "]"
    COMMA: ","
    DOT: "."
    PLUS_ASSIGN: "+="
    MINUS_ASSIGN: "-="
    PLUS: "+"
    MINUS: "-"
    STAR: "*"
    SLASH: "/"
    PERCENT: "%"
    EQUAL: "=="
    BANG_EQUAL: "!="
    BANG: "!"
    LESS_EQUAL: "<="
    GREATER_EQUAL: ">="
    LESS: "<"
    GREATER: ">"
    ASSIGN: "="

    COMMENT: /#[^\n]*/
    %import common.WS_INLINE
    %ignore WS_INLINE
    %ignore COMMENT
"""


SLANG_LEXER = Lark(SLANG_TOKENS, parser='lalr', lexer='basic')


KEYWORDS = {
    'let': 'LET',
    'print': 'PRINT',
    'if': 'IF',
    'elif': 'ELIF',
    'else': 'ELSE',
    'while': 'WHILE',
    'true': 'TRUE',
    'false': 'FALSE',
    'and': 'AND',
    'or': 'OR',
}


def scan_tokens(source: str) -> List[Token]:
    """Convert source code into a list of tokens ending with `EOF`.

    Raises `LexError` for characters that start no token, including an
    opening quote without a closing one.
    """
    tokens: List[Token] = []
    line = 1
    try:
        for raw in SLANG_LEXER.lex(source):
            kind = raw.type
            lexeme = str(raw)
            literal: Optional[Union[float, str]] = None
            if kind == 'NUMBER':
                literal = float(lexeme)
                if not math.isfinite(literal):
                    raise LexError(f'number literal {lexeme} is out of range', raw.line)
            elif kind == 'STRING':
                literal = lexeme[1:-1]
            elif kind == 'NAME':
                kind = KEYWORDS.get(lexeme, 'IDENTIFIER')
            line = raw.line
            tokens.append(Token(kind, lexeme, literal, line))
            if kind == 'NEWLINE':
                line += 1
            elif kind == 'STRING':
                line += lexeme.count('\n')
    except UnexpectedCharacters as e:
        if e.char == '"':
            raise LexError('unterminated string literal', e.line)
        raise LexError(f'unexpected character {e.char!r}', e.line)
    tokens.append(Token('EOF', '', None, line))
    return tokens
