"""Shard AST node definitions.

Every node is a Python dataclass carrying ``line`` and ``col`` for
source-location tracking.  A single ``Node`` base class provides
these fields so concrete nodes only declare domain-specific data.

Each child node is owned by exactly one parent: the parser builds the
tree bottom-up and never shares a subtree between two parents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


# ── Operators ───────────────────────────────────────────────────────────────

class Operator(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    GREATER = ">"
    LESS = "<"
    GREATER_EQUAL = ">="
    LESS_EQUAL = "<="
    EQUAL = "=="
    NOT_EQUAL = "!="

    @property
    def is_comparison(self) -> bool:
        return self in COMPARISON_OPERATORS

    def __str__(self) -> str:
        return self.value


COMPARISON_OPERATORS = frozenset({
    Operator.GREATER,
    Operator.LESS,
    Operator.GREATER_EQUAL,
    Operator.LESS_EQUAL,
    Operator.EQUAL,
    Operator.NOT_EQUAL,
})


# ── Base ────────────────────────────────────────────────────────────────────

@dataclass
class Node:
    """Base class for every AST node."""
    line: int = 0
    col: int = 0


# ── Program ─────────────────────────────────────────────────────────────────

@dataclass
class Program(Node):
    statements: list = field(default_factory=list)

    def add_statement(self, statement: Node) -> None:
        self.statements.append(statement)


# ── Expressions ─────────────────────────────────────────────────────────────

@dataclass
class NumberLiteral(Node):
    value: float = 0.0


@dataclass
class Identifier(Node):
    name: str = ""


@dataclass
class BinaryOp(Node):
    left: Any = None
    op: Operator = Operator.ADD
    right: Any = None


# ── Statements ──────────────────────────────────────────────────────────────

@dataclass
class LetDeclaration(Node):
    name: str = ""
    value: Any = None


@dataclass
class PrintCall(Node):
    argument: Any = None


@dataclass
class IfStatement(Node):
    condition: Any = None
    then_branch: Any = None
    else_branch: Any = None


# ── Debug rendering ─────────────────────────────────────────────────────────

def dump(node: Node | None, indent: int = 0) -> str:
    """Render *node* and its children as an indented, line-per-node tree."""
    pad = "  " * indent
    if node is None:
        return f"{pad}<empty>"
    if isinstance(node, Program):
        lines = [f"{pad}Program"]
        lines.extend(dump(stmt, indent + 1) for stmt in node.statements)
        return "\n".join(lines)
    if isinstance(node, NumberLiteral):
        return f"{pad}Number {node.value!r}"
    if isinstance(node, Identifier):
        return f"{pad}Identifier {node.name}"
    if isinstance(node, BinaryOp):
        return "\n".join([
            f"{pad}BinaryOp {node.op}",
            dump(node.left, indent + 1),
            dump(node.right, indent + 1),
        ])
    if isinstance(node, LetDeclaration):
        return f"{pad}Let {node.name}\n{dump(node.value, indent + 1)}"
    if isinstance(node, PrintCall):
        return f"{pad}Print\n{dump(node.argument, indent + 1)}"
    if isinstance(node, IfStatement):
        lines = [f"{pad}If", dump(node.condition, indent + 1), f"{pad}Then", dump(node.then_branch, indent + 1)]
        if node.else_branch is not None:
            lines.extend([f"{pad}Else", dump(node.else_branch, indent + 1)])
        return "\n".join(lines)
    raise TypeError(f"Unsupported AST node type: {type(node).__name__}")
