"""Evaluation of sisplot expressions and execution of statements.

Both passes over a program share this code: validation runs it against a
:class:`~sisplot.context.ValidatingContext`, real execution against a
:class:`~sisplot.context.RuntimeContext`.
"""

from __future__ import annotations

import logging
from typing import Sequence

from .ast.nodes import (
    Expression,
    Variable,
    Constant,
    Add,
    Subtract,
    Multiply,
    Divide,
    Call,
    Statement,
    Assignment,
    VoidCall,
    Loop,
    ErrorStatement,
)
from .context import Context, ValidatingContext
from .errors import (
    IllegalAssignmentTarget,
    InvalidLoopRange,
    MathError,
    SisplotError,
    StatementError,
    ValidationError,
)

logger = logging.getLogger(__name__)


# --- Expressions ---

def evaluate(expr: Expression, context: Context) -> float:
    """Evaluate an expression to a float.

    Raises:
        UndefinedVariable, NoSuchFunction, WrongArity, MathError: propagated
            unwrapped; the enclosing statement adds phase and position.
    """
    if isinstance(expr, Constant):
        return expr.value
    elif isinstance(expr, Variable):
        return context.value_of(expr.name)
    elif isinstance(expr, Add):
        return evaluate(expr.left, context) + evaluate(expr.right, context)
    elif isinstance(expr, Subtract):
        return evaluate(expr.left, context) - evaluate(expr.right, context)
    elif isinstance(expr, Multiply):
        return evaluate(expr.left, context) * evaluate(expr.right, context)
    elif isinstance(expr, Divide):
        numerator = evaluate(expr.left, context)
        denominator = evaluate(expr.right, context)
        if denominator == 0.0:
            raise MathError("divide", f"division by zero in {expr}")
        return numerator / denominator
    elif isinstance(expr, Call):
        args = [evaluate(arg, context) for arg in expr.args]
        return context.dispatch(expr.name, args)
    else:
        raise TypeError(f"Unsupported expression node: {type(expr).__name__}")


# --- Statements ---

def check_loop_range(start: float, end: float, step: float | None) -> None:
    """Reject steps that are zero or point away from the end of the range.

    Raises:
        InvalidLoopRange: If the step cannot be used for the range.
    """
    if step is None:
        return
    if start != end and step == 0:
        raise InvalidLoopRange(
            "cannot use zero step unless start (%g) == end (%g)" % (start, end)
        )
    if start > end and step > 0:
        raise InvalidLoopRange(
            "must use negative step for start (%g) > end (%g)" % (start, end)
        )
    if start < end and step < 0:
        raise InvalidLoopRange(
            "must use positive step for start (%g) < end (%g)" % (start, end)
        )


def _execute_loop(loop: Loop, context: Context) -> None:
    start = evaluate(loop.start, context)
    end = evaluate(loop.end, context)
    step = evaluate(loop.step, context) if loop.step is not None else None
    check_loop_range(start, end, step)

    for value in context.range(start, end, step, loop.inclusive):
        context.assign(loop.name, value)
        for stmt in loop.body:
            execute_statement(stmt, context)


def execute_statement(stmt: Statement, context: Context) -> None:
    """Execute one statement.

    Raises:
        StatementError: Carrying the phase label and the statement's position,
            with the underlying failure as its cause.
    """
    if isinstance(stmt, Assignment):
        try:
            context.assign(stmt.name, evaluate(stmt.expr, context))
        except SisplotError as e:
            raise StatementError("assignment error", stmt.position, e) from e
    elif isinstance(stmt, VoidCall):
        try:
            evaluate(stmt.call, context)
        except SisplotError as e:
            raise StatementError("call error", stmt.position, e) from e
    elif isinstance(stmt, Loop):
        try:
            _execute_loop(stmt, context)
        except SisplotError as e:
            raise StatementError("loop error", stmt.position, e) from e
    elif isinstance(stmt, ErrorStatement):
        cause = IllegalAssignmentTarget(stmt.message)
        raise StatementError(stmt.phase, stmt.position, cause) from cause
    else:
        raise TypeError(f"Unsupported statement node: {type(stmt).__name__}")


def execute_statements(statements: Sequence[Statement], context: Context) -> None:
    """Execute statements in order, stopping at the first failure."""
    for stmt in statements:
        execute_statement(stmt, context)


# --- Validation ---

def validate(statements: list[Statement]) -> list[Statement]:
    """Dry-run a program to surface semantic errors before rendering.

    Every statement is executed once against a fresh ValidatingContext:
    render calls produce no output and each loop body runs exactly once
    with the loop variable set to the start of its range.

    Returns:
        The same statement list, unchanged.

    Raises:
        ValidationError: For the first failing statement.
    """
    context = ValidatingContext()
    try:
        execute_statements(statements, context)
    except StatementError as e:
        raise ValidationError.from_statement_error(e) from e.cause
    logger.debug("validated %d top-level statements", len(statements))
    return statements


# vim: set ts=4 sw=4 expandtab:
