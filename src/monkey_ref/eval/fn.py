from __future__ import annotations

from typing import List, Sequence

from ..runtime import Frame, MkFn, MkValue, call_value, is_signal
from ..tree import CallExpression, Expression, FunctionLiteral
from .common import EvalFunc

def eval_function_literal(node: FunctionLiteral, frame: Frame) -> MkValue:
    # Capture the defining frame; the body runs only when called.
    return MkFn(params=node.parameters, body=node.body, frame=frame)

def eval_args(args: Sequence[Expression], frame: Frame, eval_func: EvalFunc) -> List[MkValue] | MkValue:
    """Evaluate arguments left to right; the first signal aborts the call."""
    values: List[MkValue] = []

    for arg in args:
        val = eval_func(arg, frame)
        if is_signal(val):
            return val
        values.append(val)

    return values

def eval_call(node: CallExpression, frame: Frame, eval_func: EvalFunc) -> MkValue:
    callee = eval_func(node.function, frame)
    if is_signal(callee):
        return callee

    args = eval_args(node.arguments, frame, eval_func)
    if not isinstance(args, list):
        return args

    return call_value(callee, args, eval_func)
