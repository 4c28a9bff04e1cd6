from __future__ import annotations

import importlib
from typing import Callable, List

from .types import (
    NULL, FALSE, TRUE,
    MkInt, MkBool, MkString, MkNull, MkArray, MkHash,
    MkFn, MkBuiltin, MkReturn, MkError,
    MkValue, Frame, Builtins, BuiltinFn, HashKey,
    native_bool, is_signal, is_error, type_name, hash_key,
    INT64_MIN, INT64_MAX,
)
from .tree import Node

_STDLIB_INITIALIZED = False

def init_stdlib() -> None:
    """Load stdlib modules (idempotent) so register_stdlib hooks run."""
    global _STDLIB_INITIALIZED

    if _STDLIB_INITIALIZED:
        return

    importlib.import_module("monkey_ref.stdlib")
    _STDLIB_INITIALIZED = True

def new_global_frame() -> Frame:
    """Global scope for one session, seeded with the builtins."""
    init_stdlib()
    return Frame()

def register_stdlib(name: str, *, arity: int | None = None):
    def dec(fn: BuiltinFn):
        Builtins.stdlib_functions[name] = MkBuiltin(name=name, fn=fn, arity=arity)
        return fn

    return dec

def wrong_arity(want: int, got: int) -> MkError:
    return MkError(f"wrong number of arguments: want={want}, got={got}")

EvalFunc = Callable[[Node, Frame], MkValue]

def call_value(callee: MkValue, args: List[MkValue], eval_func: EvalFunc) -> MkValue:
    """
    Apply a function value to already evaluated arguments.

    A user function runs in a fresh child of its closure frame; a `return`
    inside it stops at this boundary.
    """
    match callee:
        case MkFn():
            if len(args) != len(callee.params):
                return wrong_arity(len(callee.params), len(args))

            callee_frame = callee.frame.child()
            for param, val in zip(callee.params, args):
                callee_frame.define(param.name, val)

            result = eval_func(callee.body, callee_frame)
            if isinstance(result, MkReturn):
                return result.value
            return result
        case MkBuiltin():
            if callee.arity is not None and len(args) != callee.arity:
                return wrong_arity(callee.arity, len(args))
            return callee.fn(args)
        case _:
            return MkError(f"not a function: {type_name(callee)}")
