"""Shard interpreter - walks the AST and evaluates it directly."""

from __future__ import annotations

import sys
from typing import TextIO

from shard.ast_nodes import (
    Program,
    NumberLiteral,
    Identifier,
    BinaryOp,
    Operator,
    LetDeclaration,
    PrintCall,
    IfStatement,
)
from shard.environment import Environment
from shard.errors import EvaluationError
from shard.lexer import MAX_TOKEN_LENGTH
from shard.parser import parse_source


NUMBER_FORMATS = ("shortest", "%.15g")


def format_number(value: float, style: str = "shortest") -> str:
    """Render *value* the way ``print`` writes it.

    ``shortest`` is the shortest decimal that round-trips to the same
    double, with integral values written without a fractional part.
    ``%.15g`` reproduces C ``printf`` output.
    """
    if style == "%.15g":
        return "%.15g" % value
    if style != "shortest":
        raise ValueError(f"Unknown number format: {style!r}")
    text = repr(value)
    return text[:-2] if text.endswith(".0") else text


_ARITHMETIC = {
    Operator.ADD: lambda a, b: a + b,
    Operator.SUBTRACT: lambda a, b: a - b,
    Operator.MULTIPLY: lambda a, b: a * b,
}

_COMPARISONS = {
    Operator.GREATER: lambda a, b: a > b,
    Operator.LESS: lambda a, b: a < b,
    Operator.GREATER_EQUAL: lambda a, b: a >= b,
    Operator.LESS_EQUAL: lambda a, b: a <= b,
    Operator.EQUAL: lambda a, b: a == b,
    Operator.NOT_EQUAL: lambda a, b: a != b,
}


class Interpreter:
    """Evaluate a Shard AST against a single flat environment.

    Failures raise :class:`EvaluationError` carrying the location of the
    node that failed. The first error aborts the whole walk; side effects
    of statements that already ran (printed lines, stored variables) are
    kept.
    """

    def __init__(
        self,
        environment: Environment | None = None,
        out: TextIO | None = None,
        number_format: str = "shortest",
    ) -> None:
        if number_format not in NUMBER_FORMATS:
            raise ValueError(f"Unknown number format: {number_format!r}")
        self.environment = environment if environment is not None else Environment()
        self.out = out
        self.number_format = number_format

    def run(self, program: Program) -> float | None:
        """Execute a whole program and return the result of its last statement."""
        return self.evaluate(program)

    def evaluate(self, node) -> float | None:
        """Evaluate *node*, returning its numeric result.

        Only an ``if`` without a taken branch (and an empty program)
        produce no result.
        """
        if isinstance(node, NumberLiteral):
            return node.value
        if isinstance(node, Identifier):
            return self._eval_identifier(node)
        if isinstance(node, BinaryOp):
            return self._eval_binary(node)
        if isinstance(node, LetDeclaration):
            return self._eval_let(node)
        if isinstance(node, PrintCall):
            return self._eval_print(node)
        if isinstance(node, IfStatement):
            return self._eval_if(node)
        if isinstance(node, Program):
            return self._eval_program(node)

        raise EvaluationError(
            f"Unsupported AST node type: {type(node).__name__}",
            getattr(node, "line", 0),
            getattr(node, "col", 0),
        )

    # -- Node handlers -----------------------------------------------------

    def _eval_identifier(self, node: Identifier) -> float:
        value = self.environment.get(node.name)
        if value is None:
            raise EvaluationError(f"Undefined variable: {node.name}", node.line, node.col)
        return value

    def _eval_binary(self, node: BinaryOp) -> float:
        # Left is fully evaluated first; a failure there never reaches the right.
        left = self._operand(node.left)
        right = self._operand(node.right)

        if node.op in _ARITHMETIC:
            return _ARITHMETIC[node.op](left, right)
        if node.op == Operator.DIVIDE:
            if right == 0.0:
                raise EvaluationError("Division by zero", node.line, node.col)
            return left / right
        if node.op in _COMPARISONS:
            return 1.0 if _COMPARISONS[node.op](left, right) else 0.0

        raise EvaluationError(f"Unknown binary operator: {node.op!s}", node.line, node.col)

    def _operand(self, node) -> float:
        value = self.evaluate(node)
        if value is None:
            raise EvaluationError("Expression produced no value", node.line, node.col)
        return value

    def _eval_let(self, node: LetDeclaration) -> float:
        value = self._operand(node.value)
        self.environment.set(node.name, value)
        return value

    def _eval_print(self, node: PrintCall) -> float:
        value = self._operand(node.argument)
        out = self.out if self.out is not None else sys.stdout
        out.write(format_number(value, self.number_format) + "\n")
        out.flush()
        return value

    def _eval_if(self, node: IfStatement) -> float | None:
        condition = self._operand(node.condition)
        if condition != 0.0:
            return self.evaluate(node.then_branch)
        if node.else_branch is not None:
            return self.evaluate(node.else_branch)
        return None

    def _eval_program(self, node: Program) -> float | None:
        result = None
        for stmt in node.statements:
            result = self.evaluate(stmt)
        return result


def execute(
    source: str,
    environment: Environment | None = None,
    out: TextIO | None = None,
    config: dict | None = None,
) -> float | None:
    """Full pipeline: source -> AST -> evaluation.

    The whole source is parsed before anything runs, so a syntax error
    anywhere means no statement executes.
    """
    config = config or {}
    max_token_length = config.get("lexer", {}).get("max_token_length", MAX_TOKEN_LENGTH)
    number_format = config.get("output", {}).get("number_format", "shortest")

    program = parse_source(source, max_token_length=max_token_length)
    interpreter = Interpreter(environment=environment, out=out, number_format=number_format)
    return interpreter.run(program)
