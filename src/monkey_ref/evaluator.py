from __future__ import annotations

from typing import Optional

from .runtime import (
    FALSE,
    TRUE,
    Frame,
    MkError,
    MkString,
    MkInt,
    MkValue,
    new_global_frame,
)
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
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
    StringLiteral,
)

from .eval.blocks import eval_block, eval_if, eval_let, eval_program, eval_return
from .eval.expr import eval_infix, eval_prefix
from .eval.fn import eval_call, eval_function_literal
from .eval.literals import eval_array, eval_hash, eval_index

# ---------------- Public API ----------------

def eval_expr(ast: Node, frame: Optional[Frame] = None) -> MkValue:
    """Evaluate a whole tree, in a fresh global frame unless one is given."""
    if frame is None:
        frame = new_global_frame()

    return eval_node(ast, frame)

# ---------------- Core evaluator ----------------
#
# Runtime errors and `return` travel as ordinary return values (MkError,
# MkReturn); every helper checks what it gets back and stops early. No
# Python exception is used for language-level control flow.

def eval_node(n: Node, frame: Frame) -> MkValue:
    match n:
        # statements
        case Program(statements=stmts):
            return eval_program(stmts, frame, eval_node)
        case BlockStatement(statements=stmts):
            return eval_block(stmts, frame, eval_node)
        case ExpressionStatement(value=value):
            return eval_node(value, frame)
        case LetStatement():
            return eval_let(n, frame, eval_node)
        case ReturnStatement():
            return eval_return(n, frame, eval_node)

        # literals
        case IntegerLiteral(value=v):
            return MkInt(v)
        case BooleanLiteral(value=b):
            return TRUE if b else FALSE
        case StringLiteral(value=s):
            return MkString(s)
        case ArrayLiteral():
            return eval_array(n, frame, eval_node)
        case HashLiteral():
            return eval_hash(n, frame, eval_node)
        case FunctionLiteral():
            return eval_function_literal(n, frame)

        # expressions
        case Identifier(name=name):
            return _eval_identifier(name, frame)
        case PrefixExpression():
            return eval_prefix(n, frame, eval_node)
        case InfixExpression():
            return eval_infix(n, frame, eval_node)
        case IfExpression():
            return eval_if(n, frame, eval_node)
        case CallExpression():
            return eval_call(n, frame, eval_node)
        case IndexExpression():
            return eval_index(n, frame, eval_node)

    raise TypeError(f"Unknown node: {type(n).__name__}")

def _eval_identifier(name: str, frame: Frame) -> MkValue:
    val = frame.get(name)
    if val is None:
        return MkError(f"identifier not found: {name}")

    return val
