from __future__ import annotations

from ..runtime import (
    Frame,
    MkBool,
    MkError,
    MkInt,
    MkString,
    MkValue,
    is_signal,
    native_bool,
)
from ..tree import InfixExpression, PrefixExpression
from .common import EvalFunc, checked_int, type_mismatch, unknown_infix, unknown_prefix
from .helpers import is_truthy

def eval_prefix(node: PrefixExpression, frame: Frame, eval_func: EvalFunc) -> MkValue:
    operand = eval_func(node.operand, frame)
    if is_signal(operand):
        return operand

    return apply_prefix_operator(node.operator, operand)

def apply_prefix_operator(op: str, operand: MkValue) -> MkValue:
    match op, operand:
        case '!', _:
            return native_bool(not is_truthy(operand))
        case '-', MkInt(value=v):
            return checked_int(-v, f"-({v})")
        case _:
            return unknown_prefix(op, operand)

def eval_infix(node: InfixExpression, frame: Frame, eval_func: EvalFunc) -> MkValue:
    # operands evaluate left to right; the first signal wins
    left = eval_func(node.left, frame)
    if is_signal(left):
        return left

    right = eval_func(node.right, frame)
    if is_signal(right):
        return right

    return apply_binary_operator(node.operator, left, right)

def apply_binary_operator(op: str, left: MkValue, right: MkValue) -> MkValue:
    match left, right:
        case MkInt(value=a), MkInt(value=b):
            return _integer_op(op, a, b)
        case MkString(value=a), MkString(value=b):
            return _string_op(op, a, b, left, right)
        case MkBool(value=a), MkBool(value=b):
            return _bool_op(op, a, b, left, right)

    if type(left) is not type(right):
        return type_mismatch(op, left, right)

    return unknown_infix(op, left, right)

def _integer_op(op: str, a: int, b: int) -> MkValue:
    match op:
        case '+':
            return checked_int(a + b, f"{a} + {b}")
        case '-':
            return checked_int(a - b, f"{a} - {b}")
        case '*':
            return checked_int(a * b, f"{a} * {b}")
        case '/':
            if b == 0:
                return MkError("division by zero")
            return checked_int(truncating_div(a, b), f"{a} / {b}")
        case '<':
            return native_bool(a < b)
        case '>':
            return native_bool(a > b)
        case '==':
            return native_bool(a == b)
        case '!=':
            return native_bool(a != b)

    return unknown_infix(op, MkInt(a), MkInt(b))

def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q

def _string_op(op: str, a: str, b: str, left: MkValue, right: MkValue) -> MkValue:
    match op:
        case '+':
            return MkString(a + b)
        case '==':
            return native_bool(a == b)
        case '!=':
            return native_bool(a != b)

    return unknown_infix(op, left, right)

def _bool_op(op: str, a: bool, b: bool, left: MkValue, right: MkValue) -> MkValue:
    match op:
        case '==':
            return native_bool(a == b)
        case '!=':
            return native_bool(a != b)

    return unknown_infix(op, left, right)
