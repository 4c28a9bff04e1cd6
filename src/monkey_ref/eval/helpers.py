from __future__ import annotations

from ..runtime import MkBool, MkNull, MkValue

def is_truthy(val: MkValue) -> bool:
    """Only `false` and `null` are falsy; 0, "" and [] are truthy."""
    match val:
        case MkBool(value=b):
            return b
        case MkNull():
            return False
        case _:
            return True
