"""Built-in functions, registered into every global frame via register_stdlib."""

from __future__ import annotations

from typing import List

from .runtime import (
    NULL,
    MkArray,
    MkError,
    MkHash,
    MkInt,
    MkString,
    MkValue,
    register_stdlib,
    type_name,
)

def _unsupported(fn_name: str, arg: MkValue) -> MkError:
    return MkError(f"argument to `{fn_name}` not supported, got {type_name(arg)}")

@register_stdlib("len", arity=1)
def std_len(args: List[MkValue]) -> MkValue:
    match args[0]:
        case MkString(value=s):
            return MkInt(len(s))
        case MkArray(items=items):
            return MkInt(len(items))
        case MkHash(pairs=pairs):
            return MkInt(len(pairs))
        case other:
            return _unsupported("len", other)

@register_stdlib("first", arity=1)
def std_first(args: List[MkValue]) -> MkValue:
    arr = args[0]
    if not isinstance(arr, MkArray):
        return _unsupported("first", arr)

    return arr.items[0] if arr.items else NULL

@register_stdlib("last", arity=1)
def std_last(args: List[MkValue]) -> MkValue:
    arr = args[0]
    if not isinstance(arr, MkArray):
        return _unsupported("last", arr)

    return arr.items[-1] if arr.items else NULL

@register_stdlib("rest", arity=1)
def std_rest(args: List[MkValue]) -> MkValue:
    arr = args[0]
    if not isinstance(arr, MkArray):
        return _unsupported("rest", arr)

    return MkArray(arr.items[1:]) if arr.items else NULL

@register_stdlib("push", arity=2)
def std_push(args: List[MkValue]) -> MkValue:
    arr, item = args
    if not isinstance(arr, MkArray):
        return _unsupported("push", arr)

    # arrays are immutable; push builds a new one
    return MkArray(arr.items + (item,))

@register_stdlib("keys", arity=1)
def std_keys(args: List[MkValue]) -> MkValue:
    h = args[0]
    if not isinstance(h, MkHash):
        return _unsupported("keys", h)

    return MkArray(tuple(key for key, _ in h.pairs.values()))

@register_stdlib("type", arity=1)
def std_type(args: List[MkValue]) -> MkValue:
    return MkString(type_name(args[0]))
