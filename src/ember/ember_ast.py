"""
Defines the abstract syntax tree (AST) node types for the Ember programming language.

The tree is a pair of closed families of immutable nodes:

Expressions (Expr):
    Literal, Variable, Unary, Binary, Logical, Grouping, Assign, Get, Set, Super, Call

Statements (Stmt):
    Let, Function, Class, Expression, Print, Return, If, While, For, Block

Every node is a frozen dataclass; ordered children are stored as tuples so that a
finished tree can never be mutated. Operators are recorded as their token type
(e.g. "PLUS", "LAND", "PLUS_EQ"), leaving all interpretation to later stages.

Nodes compare structurally, which is what the test suite relies on, and can be
serialized with `to_dict()` for JSON output or debugging.

Example:
    >>> Binary(Literal(1.0), "PLUS", Variable("x")).to_dict()["kind"]
    'binary'
"""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, TypedDict, Union

LiteralValue = Union[bool, float, str]


class ASTDict(TypedDict, total=False):
    """Serialized shape of a node: its kind plus one entry per field."""

    kind: str


def _snake_case(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_serialize(v) for v in value]
    return value


@dataclass(frozen=True)
class Node:
    """Common base for expression and statement nodes."""

    @property
    def kind(self) -> str:
        """Snake-case node kind, e.g. "binary" or "expression"."""
        return _snake_case(type(self).__name__)

    def to_dict(self) -> ASTDict:
        """Converts the node (and all descendants) into nested plain dictionaries."""
        result: dict[str, Any] = {"kind": self.kind}
        for f in fields(self):
            result[f.name] = _serialize(getattr(self, f.name))
        return result  # type: ignore[return-value]


# Expressions


@dataclass(frozen=True)
class Expr(Node):
    pass


@dataclass(frozen=True, eq=False)
class Literal(Expr):
    """Boolean, number or string constant.

    Equality includes the value's type, so `Literal(True)` and `Literal(1.0)` differ.
    """

    value: LiteralValue

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Literal)
            and type(self.value) is type(other.value)
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((type(self.value), self.value))


@dataclass(frozen=True)
class Variable(Expr):
    name: str


@dataclass(frozen=True)
class Unary(Expr):
    op: str
    right: Expr


@dataclass(frozen=True)
class Binary(Expr):
    """Arithmetic and bitwise operators (`+ - * / & | ^` and the words `and or xor`)."""

    left: Expr
    op: str
    right: Expr


@dataclass(frozen=True)
class Logical(Expr):
    """Short-circuit and relational operators (`&& || == != < <= > >=`)."""

    left: Expr
    op: str
    right: Expr


@dataclass(frozen=True)
class Grouping(Expr):
    expression: Expr


@dataclass(frozen=True)
class Assign(Expr):
    """Assignment to a variable; `op` is "ASSIGN" or a compound operator."""

    name: str
    op: str
    value: Expr


@dataclass(frozen=True)
class Get(Expr):
    object: Expr
    name: str


@dataclass(frozen=True)
class Set(Expr):
    object: Expr
    name: str
    op: str
    value: Expr


@dataclass(frozen=True)
class Super(Expr):
    method: str


@dataclass(frozen=True)
class Call(Expr):
    callee: Expr
    arguments: tuple[Expr, ...] = ()


# Statements


@dataclass(frozen=True)
class Stmt(Node):
    pass


@dataclass(frozen=True)
class Let(Stmt):
    name: str
    value: Expr | None = None
    is_const: bool = False


@dataclass(frozen=True)
class Block(Stmt):
    statements: tuple[Stmt, ...] = ()


@dataclass(frozen=True)
class Function(Stmt):
    name: str
    params: tuple[str, ...]
    body: Block


@dataclass(frozen=True)
class Class(Stmt):
    name: str
    superclass: str | None
    methods: tuple[Function, ...] = ()


@dataclass(frozen=True)
class Expression(Stmt):
    expr: Expr


@dataclass(frozen=True)
class Print(Stmt):
    expr: Expr


@dataclass(frozen=True)
class Return(Stmt):
    value: Expr | None = None


@dataclass(frozen=True)
class If(Stmt):
    condition: Expr
    then_branch: Stmt
    else_branch: Stmt | None = None


@dataclass(frozen=True)
class While(Stmt):
    condition: Expr
    body: Stmt


@dataclass(frozen=True)
class For(Stmt):
    """Three-clause loop, kept as written; lowering to `while` happens later."""

    initializer: Stmt | None
    condition: Expr | None
    increment: Expr | None
    body: Stmt


__all__ = [
    "ASTDict",
    "Assign",
    "Binary",
    "Block",
    "Call",
    "Class",
    "Expr",
    "Expression",
    "For",
    "Function",
    "Get",
    "Grouping",
    "If",
    "Let",
    "Literal",
    "LiteralValue",
    "Logical",
    "Node",
    "Print",
    "Return",
    "Set",
    "Stmt",
    "Super",
    "Unary",
    "Variable",
    "While",
]
