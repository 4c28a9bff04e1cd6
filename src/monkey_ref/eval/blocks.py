from __future__ import annotations

from typing import Sequence

from ..runtime import NULL, Frame, MkReturn, MkValue, is_signal
from ..tree import IfExpression, LetStatement, ReturnStatement, Statement
from .common import EvalFunc
from .helpers import is_truthy

def eval_program(statements: Sequence[Statement], frame: Frame, eval_func: EvalFunc) -> MkValue:
    """
    Top-level statement list. A `return` ends the program and yields its
    value; an error ends it and is the result.
    """
    result: MkValue = NULL

    for stmt in statements:
        result = eval_func(stmt, frame)

        if isinstance(result, MkReturn):
            return result.value
        if is_signal(result):
            return result

    return result

def eval_block(statements: Sequence[Statement], frame: Frame, eval_func: EvalFunc) -> MkValue:
    """
    Nested statement list. Signals are passed up untouched so a `return`
    deep inside nested blocks still reaches its function boundary.
    """
    result: MkValue = NULL

    for stmt in statements:
        result = eval_func(stmt, frame)

        if is_signal(result):
            return result

    return result

def eval_let(node: LetStatement, frame: Frame, eval_func: EvalFunc) -> MkValue:
    value = eval_func(node.value, frame)
    if is_signal(value):
        return value

    # always the current scope, never an enclosing one
    frame.define(node.name.name, value)
    return NULL

def eval_return(node: ReturnStatement, frame: Frame, eval_func: EvalFunc) -> MkValue:
    value = eval_func(node.value, frame)
    if is_signal(value):
        return value

    return MkReturn(value)

def eval_if(node: IfExpression, frame: Frame, eval_func: EvalFunc) -> MkValue:
    condition = eval_func(node.condition, frame)
    if is_signal(condition):
        return condition

    if is_truthy(condition):
        return eval_func(node.consequence, frame)

    if node.alternative is not None:
        return eval_func(node.alternative, frame)

    return NULL
