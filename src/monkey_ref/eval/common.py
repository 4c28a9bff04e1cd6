from __future__ import annotations

from ..runtime import INT64_MAX, INT64_MIN, EvalFunc, MkError, MkInt, MkValue, type_name

def checked_int(value: int, what: str) -> MkInt | MkError:
    """Wrap an arithmetic result, refusing anything outside signed 64-bit."""
    if INT64_MIN <= value <= INT64_MAX:
        return MkInt(value)

    return MkError(f"integer overflow: {what}")

def type_mismatch(op: str, left: MkValue, right: MkValue) -> MkError:
    return MkError(f"type mismatch: {type_name(left)} {op} {type_name(right)}")

def unknown_infix(op: str, left: MkValue, right: MkValue) -> MkError:
    return MkError(f"unknown operator: {type_name(left)} {op} {type_name(right)}")

def unknown_prefix(op: str, operand: MkValue) -> MkError:
    return MkError(f"unknown operator: {op}{type_name(operand)}")
