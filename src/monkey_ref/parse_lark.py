"""
Lark reference parser for Monkey.

`grammar.lark` restates the Pratt parser's precedence table as layered LALR
rules. `ToAst` turns the Lark tree into the same `tree` dataclasses that
`parser_rd` builds, so the two front ends can be compared node for node.
Unlike `parser_rd`, syntax errors here are raised (`lark.UnexpectedInput`),
not collected.
"""

from __future__ import annotations

import re
import sys
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.visitors import v_args

from .lexer_rd import ESCAPES
from .tree import (
    ArrayLiteral,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FunctionLiteral,
    HashLiteral,
    Identifier,
    IfExpression,
    IndexExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)

GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")

_ESCAPE_RE = re.compile(r"\\(.)", re.S)


def _unescape(body: str) -> str:
    return _ESCAPE_RE.sub(lambda m: ESCAPES.get(m.group(1), m.group(0)), body)


@v_args(inline=True)
class ToAst(Transformer):
    """Lark tree -> `tree` dataclasses."""

    def start(self, *stmts):
        return Program(tuple(stmts))

    def block(self, *stmts):
        return BlockStatement(tuple(stmts))

    def let_stmt(self, name: Token, value):
        return LetStatement(Identifier(str(name)), value)

    def return_stmt(self, value):
        return ReturnStatement(value)

    def expr_stmt(self, value):
        return ExpressionStatement(value)

    def infix(self, left, op: Token, right):
        return InfixExpression(str(op), left, right)

    def prefix_op(self, op: Token, operand):
        return PrefixExpression(str(op), operand)

    def call(self, fn, *args):
        return CallExpression(fn, tuple(args))

    def index(self, collection, idx):
        return IndexExpression(collection, idx)

    def integer(self, tok: Token):
        return IntegerLiteral(int(tok))

    def string(self, tok: Token):
        return StringLiteral(_unescape(str(tok)[1:-1]))

    def true(self):
        return BooleanLiteral(True)

    def false(self):
        return BooleanLiteral(False)

    def identifier(self, tok: Token):
        return Identifier(str(tok))

    def if_expr(self, condition, consequence, alternative=None):
        return IfExpression(condition, consequence, alternative)

    def fn_lit(self, *children):
        *names, body = children
        return FunctionLiteral(tuple(Identifier(str(n)) for n in names), body)

    def array(self, *items):
        return ArrayLiteral(tuple(items))

    def hash(self, *pairs):
        return HashLiteral(tuple(pairs))

    def pair(self, key, value):
        return (key, value)


@lru_cache(maxsize=None)
def build_parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        lexer="basic",
        start="start",
        maybe_placeholders=False,
        propagate_positions=True,
    )


def parse_lark(source: str) -> Program:
    """Parse `source` with the reference grammar; raises on the first syntax error."""
    tree = build_parser().parse(source)
    return ToAst().transform(tree)


if __name__ == "__main__":
    from .tree import pretty

    source = sys.stdin.read() if len(sys.argv) < 2 or sys.argv[1] == "-" else Path(sys.argv[1]).read_text()
    print(pretty(parse_lark(source)), end="")
