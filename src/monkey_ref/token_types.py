"""
Token Types for the Monkey Parser

Shared between lexer, parser and the REPL highlighter.
"""

from dataclasses import dataclass
from enum import Enum, auto


class TT(Enum):
    """Token Types"""

    # Special
    ILLEGAL = auto()
    EOF = auto()
    COMMENT = auto()

    # Literals
    IDENT = auto()
    INT = auto()
    STRING = auto()

    # Operators
    ASSIGN = auto()
    PLUS = auto()
    MINUS = auto()
    NEG = auto()  # !
    STAR = auto()
    SLASH = auto()

    # Comparison
    LT = auto()
    GT = auto()
    EQ = auto()
    NEQ = auto()

    # Punctuation
    COMMA = auto()
    COLON = auto()
    SEMI = auto()
    LPAR = auto()
    RPAR = auto()
    LBRACE = auto()
    RBRACE = auto()
    LSQB = auto()
    RSQB = auto()

    # Keywords
    FN = auto()
    LET = auto()
    IF = auto()
    ELSE = auto()
    RETURN = auto()
    TRUE = auto()
    FALSE = auto()


@dataclass(frozen=True)
class Tok:
    """Token with position info"""

    type: TT
    value: str
    line: int = 0
    column: int = 0

    def __repr__(self):
        return f"Tok({self.type.name}, {self.value!r}, {self.line}:{self.column})"
