from __future__ import annotations

from typing import Dict, List, Tuple

from ..runtime import (
    NULL,
    Frame,
    HashKey,
    MkArray,
    MkError,
    MkHash,
    MkInt,
    MkValue,
    hash_key,
    is_signal,
    type_name,
)
from ..tree import ArrayLiteral, HashLiteral, IndexExpression
from .common import EvalFunc

def eval_array(node: ArrayLiteral, frame: Frame, eval_func: EvalFunc) -> MkValue:
    items: List[MkValue] = []

    for element in node.elements:
        val = eval_func(element, frame)
        if is_signal(val):
            return val
        items.append(val)

    return MkArray(tuple(items))

def eval_hash(node: HashLiteral, frame: Frame, eval_func: EvalFunc) -> MkValue:
    pairs: Dict[HashKey, Tuple[MkValue, MkValue]] = {}

    for key_node, value_node in node.pairs:
        key = eval_func(key_node, frame)
        if is_signal(key):
            return key

        hk = hash_key(key)
        if hk is None:
            return MkError(f"unusable as hash key: {type_name(key)}")

        value = eval_func(value_node, frame)
        if is_signal(value):
            return value

        # a repeated key keeps its first position but takes the later value
        pairs[hk] = (key, value)

    return MkHash(pairs)

def eval_index(node: IndexExpression, frame: Frame, eval_func: EvalFunc) -> MkValue:
    collection = eval_func(node.collection, frame)
    if is_signal(collection):
        return collection

    index = eval_func(node.index, frame)
    if is_signal(index):
        return index

    return index_value(collection, index)

def index_value(collection: MkValue, index: MkValue) -> MkValue:
    match collection, index:
        case MkArray(items=items), MkInt(value=i):
            # out of range (negative included) is null, not an error
            if 0 <= i < len(items):
                return items[i]
            return NULL
        case MkHash(pairs=pairs), _:
            hk = hash_key(index)
            if hk is None:
                return MkError(f"unusable as hash key: {type_name(index)}")
            pair = pairs.get(hk)
            return pair[1] if pair is not None else NULL
        case MkArray(), _:
            return MkError(f"index operator not supported: ARRAY[{type_name(index)}]")
        case _:
            return MkError(f"index operator not supported: {type_name(collection)}")
