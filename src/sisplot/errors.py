"""Exceptions raised while parsing, validating and running sisplot programs.

Every error raised by the library derives from :class:`SisplotError`.
Failures inside a statement are wrapped in a :class:`StatementError`
that names the failing phase ("assignment error", "loop error",
"call error") and the statement's source position; the underlying cause
is chained with ``raise ... from`` and kept on the ``cause`` attribute.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .ast.builder import Position


class SisplotError(Exception):
    """Base class for all sisplot errors."""


class ParseError(SisplotError):
    """Raised when source text does not match the grammar.

    Attributes:
        line: Line of the failed match (1-indexed).
        column: Column of the failed match (1-indexed).
    """

    def __init__(self, message: str, line: int = 0, column: int = 0):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column


class UndefinedVariable(SisplotError):
    def __init__(self, name: str):
        super().__init__(f"undefined variable {name}")
        self.name = name


class NoSuchFunction(SisplotError):
    def __init__(self, name: str):
        super().__init__(f"{name}: no such function")
        self.name = name


class WrongArity(SisplotError):
    def __init__(self, name: str, expected: int, got: int):
        super().__init__(
            f"{name}: wrong number of arguments: requires {expected}, got {got}"
        )
        self.name = name
        self.expected = expected
        self.got = got


class MathError(SisplotError):
    """Arithmetic failure: division by zero, domain or range errors."""

    def __init__(self, operation: str, reason: str):
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason


class InvalidLoopRange(SisplotError):
    """A loop step that is zero or points away from the loop's end."""


class IllegalAssignmentTarget(SisplotError):
    """Assignment (or loop) target that is not a variable, e.g. ``pi``."""


class RenderError(SisplotError):
    """Base class for render target failures."""


class RuntimeIOError(RenderError):
    """The writer behind a render target failed."""


class UnnormalizedInputError(RenderError):
    """A radius outside [-1, 1] was given to a target requiring normalized input."""


class StatementError(SisplotError):
    """A statement failed; wraps the cause with a phase label and position.

    Attributes:
        phase: Phase label, e.g. "assignment error".
        position: Source position of the failing statement.
        cause: The wrapped exception, or None.
    """

    def __init__(self, phase: str, position: "Position", cause: Exception | None = None):
        super().__init__(f"{phase} at line {position.line}, column {position.column}")
        self.phase = phase
        self.position = position
        self.cause = cause

    def root_cause(self) -> Exception:
        """Follow the chain of wrapped statement errors to the innermost cause."""
        err: Exception = self
        while isinstance(err, StatementError) and err.cause is not None:
            err = err.cause
        return err


class ValidationError(StatementError):
    """Raised by the validation pass; same shape as :class:`StatementError`."""

    @classmethod
    def from_statement_error(cls, err: StatementError) -> "ValidationError":
        return cls(err.phase, err.position, err.cause)


def format_error(err: BaseException) -> str:
    """Render an error followed by its chain of causes, one per line."""
    lines = []
    depth = 0
    current: BaseException | None = err
    while current is not None:
        lines.append("  " * depth + str(current))
        depth += 1
        current = getattr(current, "cause", None) or current.__cause__
        if not isinstance(current, SisplotError):
            break
    return "\n".join(lines)


# vim: set ts=4 sw=4 expandtab:
