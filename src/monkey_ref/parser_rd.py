"""
Recursive Descent Parser for Monkey

Structure:
- Lexer: lazy token stream from source
- Parser: recursive descent per statement, Pratt parsing for expressions
- AST: frozen dataclasses from `tree`

Syntax errors never escape `parse_program()`: each one aborts the statement
being parsed, is recorded in `Parser.errors`, and parsing resumes at the next
statement boundary.
"""

import logging
from enum import IntEnum
from typing import Callable, Dict, List, Optional, Tuple

from .lexer_rd import Lexer
from .token_types import TT, Tok
from .tree import (
    ArrayLiteral,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
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
    Statement,
    StringLiteral,
)
from .types import INT64_MAX, INT64_MIN

log = logging.getLogger(__name__)


# ============================================================================
# Parser
# ============================================================================

class ParseError(Exception):
    """Parse error with position info"""
    def __init__(self, message: str, token: Optional[Tok] = None):
        self.message = message
        self.token = token
        super().__init__(
            f"{message} (line {token.line}, col {token.column})" if token else message
        )


class Prec(IntEnum):
    """Binding power, lowest to highest"""
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x !x
    CALL = 7         # f(x) a[i]


PRECEDENCES: Dict[TT, Prec] = {
    TT.EQ: Prec.EQUALS,
    TT.NEQ: Prec.EQUALS,
    TT.LT: Prec.LESSGREATER,
    TT.GT: Prec.LESSGREATER,
    TT.PLUS: Prec.SUM,
    TT.MINUS: Prec.SUM,
    TT.STAR: Prec.PRODUCT,
    TT.SLASH: Prec.PRODUCT,
    TT.LPAR: Prec.CALL,
    TT.LSQB: Prec.CALL,
}

# Human-readable spelling of token types for diagnostics
_TT_DISPLAY = {
    TT.EOF: 'end of input',
    TT.IDENT: 'identifier',
    TT.INT: 'integer',
    TT.STRING: 'string',
}


def describe(token_type: TT) -> str:
    return _TT_DISPLAY.get(token_type, token_type.name)


class Parser:
    """
    Pratt parser for Monkey.

    `self.current` is always the next unconsumed token. Prefix rules are
    entered with `self.current` on their leading token; infix rules are
    entered with the left operand already parsed and `self.current` on the
    operator.
    """

    def __init__(self, lexer: Lexer):
        self.lexer = lexer
        self.current: Tok = lexer.next_token()
        self.errors: List[str] = []
        self.block_depth = 0  # braces opened by the statement being parsed

        self.prefix_rules: Dict[TT, Callable[[], Expression]] = {
            TT.IDENT: self.parse_identifier,
            TT.INT: self.parse_integer_literal,
            TT.STRING: self.parse_string_literal,
            TT.TRUE: self.parse_boolean_literal,
            TT.FALSE: self.parse_boolean_literal,
            TT.NEG: self.parse_prefix_expr,
            TT.MINUS: self.parse_prefix_expr,
            TT.LPAR: self.parse_grouped_expr,
            TT.IF: self.parse_if_expr,
            TT.FN: self.parse_function_literal,
            TT.LSQB: self.parse_array_literal,
            TT.LBRACE: self.parse_hash_literal,
        }

        self.infix_rules: Dict[TT, Callable[[Expression], Expression]] = {
            TT.PLUS: self.parse_infix_expr,
            TT.MINUS: self.parse_infix_expr,
            TT.STAR: self.parse_infix_expr,
            TT.SLASH: self.parse_infix_expr,
            TT.EQ: self.parse_infix_expr,
            TT.NEQ: self.parse_infix_expr,
            TT.LT: self.parse_infix_expr,
            TT.GT: self.parse_infix_expr,
            TT.LPAR: self.parse_call_expr,
            TT.LSQB: self.parse_index_expr,
        }

    # ========================================================================
    # Token Navigation
    # ========================================================================

    def advance(self) -> Tok:
        """Consume current token and move to next"""
        prev = self.current
        if prev.type != TT.EOF:
            self.current = self.lexer.next_token()
        return prev

    def check(self, *types: TT) -> bool:
        """Check if current token matches any of the given types"""
        return self.current.type in types

    def match(self, *types: TT) -> bool:
        """Check and consume if current token matches"""
        if self.check(*types):
            self.advance()
            return True
        return False

    def expect(self, token_type: TT) -> Tok:
        """Consume token of expected type or raise error"""
        if not self.check(token_type):
            raise ParseError(
                f"expected next token to be {describe(token_type)}, "
                f"got {describe(self.current.type)} instead",
                self.current,
            )
        return self.advance()

    def current_precedence(self) -> Prec:
        return PRECEDENCES.get(self.current.type, Prec.LOWEST)

    # ========================================================================
    # Top-Level Parsing
    # ========================================================================

    def parse_program(self) -> Program:
        """Parse entire program, collecting errors per statement"""
        statements: List[Statement] = []

        while not self.check(TT.EOF):
            if self.match(TT.SEMI):
                continue

            self.block_depth = 0
            try:
                statements.append(self.parse_statement())
            except ParseError as exc:
                self.errors.append(str(exc))
                self.synchronize(self.block_depth)

        if self.errors:
            log.debug("parse finished with %d error(s)", len(self.errors))

        return Program(tuple(statements))

    def synchronize(self, open_blocks: int = 0) -> None:
        """
        Skip tokens up to the next top-level statement boundary.

        The failed statement may have left `open_blocks` braces (blocks or
        hash literals) unclosed; those are skipped first, together with any
        trailing `else` block.
        After that the boundary is a `;` (consumed), a `let`/`return`
        (kept), or a stray `}` (consumed).
        """
        depth = open_blocks

        while not self.check(TT.EOF):
            if depth == 0 and self.check(TT.LET, TT.RETURN):
                return

            tok = self.advance()

            if tok.type == TT.LBRACE:
                depth += 1
            elif tok.type == TT.RBRACE:
                if depth == 0:
                    return
                depth -= 1
                if depth == 0 and open_blocks and not self.check(TT.ELSE):
                    return
            elif tok.type == TT.SEMI and depth == 0:
                return

    # ========================================================================
    # Statements
    # ========================================================================

    def parse_statement(self) -> Statement:
        if self.check(TT.LET):
            return self.parse_let_stmt()
        if self.check(TT.RETURN):
            return self.parse_return_stmt()
        return self.parse_expression_stmt()

    def parse_let_stmt(self) -> LetStatement:
        """let <ident> = <expr>;"""
        self.expect(TT.LET)
        name_tok = self.expect(TT.IDENT)
        self.expect(TT.ASSIGN)
        value = self.parse_expr(Prec.LOWEST)
        self.match(TT.SEMI)
        return LetStatement(Identifier(name_tok.value), value)

    def parse_return_stmt(self) -> ReturnStatement:
        """return <expr>;"""
        self.expect(TT.RETURN)
        value = self.parse_expr(Prec.LOWEST)
        self.match(TT.SEMI)
        return ReturnStatement(value)

    def parse_expression_stmt(self) -> ExpressionStatement:
        value = self.parse_expr(Prec.LOWEST)
        self.match(TT.SEMI)
        return ExpressionStatement(value)

    def parse_block_stmt(self) -> BlockStatement:
        """{ <stmt>* }"""
        self.expect(TT.LBRACE)
        self.block_depth += 1
        statements: List[Statement] = []

        while not self.check(TT.RBRACE, TT.EOF):
            if self.match(TT.SEMI):
                continue
            statements.append(self.parse_statement())

        self.expect(TT.RBRACE)
        self.block_depth -= 1
        return BlockStatement(tuple(statements))

    # ========================================================================
    # Expressions - Pratt
    # ========================================================================

    def parse_expr(self, precedence: Prec) -> Expression:
        """
        Parse an expression whose operators all bind tighter than
        `precedence`.
        """
        prefix = self.prefix_rules.get(self.current.type)
        if prefix is None:
            self.no_prefix_rule()
        left = prefix()

        while not self.check(TT.SEMI) and precedence < self.current_precedence():
            infix = self.infix_rules[self.current.type]
            left = infix(left)

        return left

    def no_prefix_rule(self) -> None:
        tok = self.current
        if tok.type == TT.ILLEGAL:
            if tok.value.startswith('"'):
                raise ParseError("unterminated string literal", tok)
            raise ParseError(f"illegal character {tok.value!r}", tok)
        raise ParseError(f"no parse function for token {describe(tok.type)} found", tok)

    def parse_identifier(self) -> Expression:
        return Identifier(self.advance().value)

    def parse_integer_literal(self) -> Expression:
        tok = self.advance()
        value = int(tok.value)
        if not INT64_MIN <= value <= INT64_MAX:
            raise ParseError(f"could not parse {tok.value} as integer", tok)
        return IntegerLiteral(value)

    def parse_string_literal(self) -> Expression:
        return StringLiteral(self.advance().value)

    def parse_boolean_literal(self) -> Expression:
        return BooleanLiteral(self.advance().type == TT.TRUE)

    def parse_prefix_expr(self) -> Expression:
        """-expr, !expr"""
        op = self.advance()
        operand = self.parse_expr(Prec.PREFIX)
        return PrefixExpression(op.value, operand)

    def parse_infix_expr(self, left: Expression) -> Expression:
        """Left-associative binary operator"""
        op = self.advance()
        right = self.parse_expr(PRECEDENCES[op.type])
        return InfixExpression(op.value, left, right)

    def parse_grouped_expr(self) -> Expression:
        """( expr ) - grouping resets precedence"""
        self.expect(TT.LPAR)
        expr = self.parse_expr(Prec.LOWEST)
        self.expect(TT.RPAR)
        return expr

    def parse_if_expr(self) -> Expression:
        """if (cond) { ... } [else { ... }]"""
        self.expect(TT.IF)
        self.expect(TT.LPAR)
        condition = self.parse_expr(Prec.LOWEST)
        self.expect(TT.RPAR)
        consequence = self.parse_block_stmt()

        alternative = None
        if self.match(TT.ELSE):
            alternative = self.parse_block_stmt()

        return IfExpression(condition, consequence, alternative)

    def parse_function_literal(self) -> Expression:
        """fn(a, b) { ... }"""
        self.expect(TT.FN)
        self.expect(TT.LPAR)
        params = self.parse_params()
        body = self.parse_block_stmt()
        return FunctionLiteral(params, body)

    def parse_params(self) -> Tuple[Identifier, ...]:
        """Parameter names up to and including the closing `)`"""
        params: List[Identifier] = []

        if self.match(TT.RPAR):
            return tuple(params)

        params.append(Identifier(self.expect(TT.IDENT).value))
        while self.match(TT.COMMA):
            params.append(Identifier(self.expect(TT.IDENT).value))

        self.expect(TT.RPAR)
        return tuple(params)

    def parse_expr_list(self, end: TT) -> Tuple[Expression, ...]:
        """Comma-separated expressions up to and including `end`"""
        items: List[Expression] = []

        if self.match(end):
            return tuple(items)

        items.append(self.parse_expr(Prec.LOWEST))
        while self.match(TT.COMMA):
            items.append(self.parse_expr(Prec.LOWEST))

        self.expect(end)
        return tuple(items)

    def parse_call_expr(self, function: Expression) -> Expression:
        """callee(args)"""
        self.expect(TT.LPAR)
        return CallExpression(function, self.parse_expr_list(TT.RPAR))

    def parse_index_expr(self, collection: Expression) -> Expression:
        """collection[index]"""
        self.expect(TT.LSQB)
        index = self.parse_expr(Prec.LOWEST)
        self.expect(TT.RSQB)
        return IndexExpression(collection, index)

    def parse_array_literal(self) -> Expression:
        """[a, b, c]"""
        self.expect(TT.LSQB)
        return ArrayLiteral(self.parse_expr_list(TT.RSQB))

    def parse_hash_literal(self) -> Expression:
        """{k: v, ...}"""
        self.expect(TT.LBRACE)
        self.block_depth += 1
        pairs: List[Tuple[Expression, Expression]] = []

        while not self.check(TT.RBRACE):
            key = self.parse_expr(Prec.LOWEST)
            self.expect(TT.COLON)
            value = self.parse_expr(Prec.LOWEST)
            pairs.append((key, value))

            if not self.check(TT.RBRACE):
                self.expect(TT.COMMA)

        self.expect(TT.RBRACE)
        self.block_depth -= 1
        return HashLiteral(tuple(pairs))


# ============================================================================
# Entry points
# ============================================================================

def parse_source(source: str) -> Tuple[Program, List[str]]:
    """Parse source text, returning the program and its syntax errors"""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors


if __name__ == '__main__':
    import sys

    from .tree import pretty

    source = sys.stdin.read() if len(sys.argv) < 2 or sys.argv[1] == '-' else open(sys.argv[1]).read()
    program, errors = parse_source(source)

    for err in errors:
        print(f"Parse error: {err}", file=sys.stderr)
    if errors:
        sys.exit(1)

    print(pretty(program), end='')
