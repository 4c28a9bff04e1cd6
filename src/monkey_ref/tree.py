"""AST node classes produced by the parsers and consumed by the evaluator.

Nodes are frozen dataclasses, so two parses of equivalent source compare
equal. `str(node)` renders a canonical, fully parenthesised source form;
`pretty(node)` renders an indented structural dump.
"""
from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional, Tuple, Union
from typing_extensions import TypeAlias


# ---------- Expressions ----------

@dataclass(frozen=True)
class Identifier:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IntegerLiteral:
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class StringLiteral:
    value: str

    def __str__(self) -> str:
        escaped = self.value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'


@dataclass(frozen=True)
class PrefixExpression:
    operator: str
    operand: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.operand})"


@dataclass(frozen=True)
class InfixExpression:
    operator: str
    left: Expression
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass(frozen=True)
class IfExpression:
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self) -> str:
        out = f"if {self.condition} {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass(frozen=True)
class FunctionLiteral:
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass(frozen=True)
class CallExpression:
    function: Expression
    arguments: Tuple[Expression, ...]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


@dataclass(frozen=True)
class ArrayLiteral:
    elements: Tuple[Expression, ...]

    def __str__(self) -> str:
        return "[" + ", ".join(str(e) for e in self.elements) + "]"


@dataclass(frozen=True)
class IndexExpression:
    collection: Expression
    index: Expression

    def __str__(self) -> str:
        return f"({self.collection}[{self.index}])"


@dataclass(frozen=True)
class HashLiteral:
    pairs: Tuple[Tuple[Expression, Expression], ...]

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.pairs) + "}"


Expression: TypeAlias = Union[
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    CallExpression,
    ArrayLiteral,
    IndexExpression,
    HashLiteral,
]


# ---------- Statements ----------

@dataclass(frozen=True)
class LetStatement:
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement:
    value: Expression

    def __str__(self) -> str:
        return f"return {self.value};"


@dataclass(frozen=True)
class ExpressionStatement:
    value: Expression

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class BlockStatement:
    statements: Tuple[Statement, ...]

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + " ".join(str(s) for s in self.statements) + " }"


Statement: TypeAlias = Union[LetStatement, ReturnStatement, ExpressionStatement, BlockStatement]


@dataclass(frozen=True)
class Program:
    statements: Tuple[Statement, ...]

    def __str__(self) -> str:
        return " ".join(str(s) for s in self.statements)


Node: TypeAlias = Union[Program, Statement, Expression]


def pretty(node: Node, indent: str = '  ') -> str:
    """Return an indented dump of the tree, one node or leaf per line."""
    def _pretty(value: object, level: int) -> str:
        pad = indent * level

        if isinstance(value, tuple):
            return ''.join(_pretty(item, level) for item in value)

        if not hasattr(value, '__dataclass_fields__'):
            return f'{pad}{value!r}\n'

        leaves = []
        children = []
        for f in fields(value):
            attr = getattr(value, f.name)
            if hasattr(attr, '__dataclass_fields__') or isinstance(attr, tuple):
                children.append((f.name, attr))
            elif attr is not None:
                leaves.append(f'{f.name}={attr!r}')

        head = type(value).__name__
        if leaves:
            head += ' ' + ' '.join(leaves)
        lines = [f'{pad}{head}\n']

        for name, attr in children:
            lines.append(f'{pad}{indent}.{name}\n')
            lines.append(_pretty(attr, level + 2))
        return ''.join(lines)

    return _pretty(node, 0)
