from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple
from typing_extensions import TypeAlias, TypeGuard

from .tree import BlockStatement, Identifier

# ---------- Value Model ----------
#
# repr() of a value is its user-facing rendering: decimal integers, bare
# string contents, `[a, b]`, `{k: v}`, `null`, `ERROR: msg`.

# MkInt is confined to signed 64-bit
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

@dataclass(frozen=True)
class MkInt:
    value: int
    def __repr__(self) -> str:
        return str(self.value)

@dataclass(frozen=True)
class MkBool:
    value: bool
    def __repr__(self) -> str:
        return "true" if self.value else "false"

@dataclass(frozen=True)
class MkString:
    value: str
    def __repr__(self) -> str:
        return self.value

@dataclass(frozen=True)
class MkNull:
    def __repr__(self) -> str:
        return "null"

@dataclass(frozen=True)
class MkArray:
    items: Tuple['MkValue', ...]
    def __repr__(self) -> str:
        return "[" + ", ".join(repr(x) for x in self.items) + "]"

HashKey: TypeAlias = Tuple[str, object]

@dataclass(frozen=True)
class MkHash:
    # hash key -> (original key value, value); insertion ordered
    pairs: Dict[HashKey, Tuple['MkValue', 'MkValue']] = field(default_factory=dict)
    def __repr__(self) -> str:
        return "{" + ", ".join(f"{k!r}: {v!r}" for k, v in self.pairs.values()) + "}"

@dataclass(frozen=True, eq=False)
class MkFn:
    params: Tuple[Identifier, ...]
    body: BlockStatement
    frame: 'Frame'  # Closure frame (definition site)
    def __repr__(self) -> str:
        return "<fn(" + ", ".join(p.name for p in self.params) + ")>"

BuiltinFn = Callable[[List['MkValue']], 'MkValue']

@dataclass(frozen=True, eq=False)
class MkBuiltin:
    name: str
    fn: BuiltinFn
    arity: Optional[int] = None
    def __repr__(self) -> str:
        return f"<builtin {self.name}>"

@dataclass(frozen=True)
class MkReturn:
    """Internal control-flow marker for `return`; unwrapped at call boundaries."""
    value: 'MkValue'
    def __repr__(self) -> str:
        return repr(self.value)

@dataclass(frozen=True)
class MkError:
    message: str
    def __repr__(self) -> str:
        return f"ERROR: {self.message}"

MkValue: TypeAlias = (
    MkInt
    | MkBool
    | MkString
    | MkNull
    | MkArray
    | MkHash
    | MkFn
    | MkBuiltin
    | MkReturn
    | MkError
)

NULL = MkNull()
TRUE = MkBool(True)
FALSE = MkBool(False)

def native_bool(b: bool) -> MkBool:
    return TRUE if b else FALSE

def is_signal(value: MkValue) -> TypeGuard[MkReturn | MkError]:
    """True for values that stop evaluation of the enclosing statements."""
    return isinstance(value, (MkReturn, MkError))

def is_error(value: MkValue) -> TypeGuard[MkError]:
    return isinstance(value, MkError)

def type_name(value: MkValue) -> str:
    match value:
        case MkInt():
            return "INTEGER"
        case MkBool():
            return "BOOLEAN"
        case MkString():
            return "STRING"
        case MkNull():
            return "NULL"
        case MkArray():
            return "ARRAY"
        case MkHash():
            return "HASH"
        case MkFn():
            return "FUNCTION"
        case MkBuiltin():
            return "BUILTIN"
        case MkReturn():
            return "RETURN_VALUE"
        case MkError():
            return "ERROR"
    raise TypeError(f"Unexpected value type {type(value).__name__}")

def hash_key(value: MkValue) -> Optional[HashKey]:
    """Key for a hashable value (integer, boolean, string); None otherwise."""
    match value:
        case MkInt(value=v):
            return ("INTEGER", v)
        case MkBool(value=b):
            return ("BOOLEAN", b)
        case MkString(value=s):
            return ("STRING", s)
        case _:
            return None

# ---------- Environment ----------

class Builtins:
    stdlib_functions: Dict[str, MkBuiltin] = {}

class Frame:
    """
    One scope of bindings plus a link to the enclosing scope.

    The global frame (no parent) is seeded with the builtins. Function calls
    get a fresh child of the frame the function was defined in.
    """
    def __init__(self, parent: Optional['Frame'] = None):
        self.parent = parent
        self.vars: Dict[str, MkValue] = {}

        if parent is None:
            self.vars.update(Builtins.stdlib_functions)

    def define(self, name: str, val: MkValue) -> None:
        self.vars[name] = val

    def get(self, name: str) -> Optional[MkValue]:
        frame: Optional[Frame] = self
        while frame is not None:
            if name in frame.vars:
                return frame.vars[name]
            frame = frame.parent
        return None

    def child(self) -> 'Frame':
        return Frame(parent=self)

    def user_bindings(self) -> Dict[str, MkValue]:
        """Bindings of this frame, minus untouched builtins."""
        return {
            name: val for name, val in self.vars.items()
            if Builtins.stdlib_functions.get(name) is not val
        }
