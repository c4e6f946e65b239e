from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .builder import Position


# --- AST nodes classes. ---

@dataclass(frozen=True)
class ASTNode(object):
    """Base class for all AST nodes.

    All sisplot AST nodes inherit from this class. Nodes are immutable once
    built. The source position is carried on every node but is ignored when
    comparing nodes, so trees parsed from differently laid out source compare
    equal.

    Attributes:
        position: The source position of this node in the original program.
    """
    position: "Position" = field(compare=False)

    def __str__(self) -> str:
        """Return a string representation of the AST node."""
        raise NotImplementedError


# --- Expressions ---

@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for all sisplot expressions.

    Every expression evaluates to a single float against a Context. The
    closed set of expression nodes is: Variable, Constant, Add, Subtract,
    Multiply, Divide and Call.
    """
    pass


@dataclass(frozen=True)
class Variable(Expression):
    """A variable lookup.

    Examples:
        x
        θ
        _tmp1

    Attributes:
        name: The variable name.
    """
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class Constant(Expression):
    """A numeric constant.

    Numeric literals, including their sign, and the reserved names ``pi``,
    ``π`` and ``e`` all parse to a Constant.

    Attributes:
        value: The numeric value as a float.
    """
    value: float

    def __str__(self):
        return "%g" % self.value


@dataclass(frozen=True)
class BinaryOp(Expression):
    """Base class for the arithmetic operators.

    Attributes:
        left: The left operand.
        right: The right operand.
    """
    left: Expression
    right: Expression

    symbol = "?"

    def __str__(self):
        return f"({self.left}) {self.symbol} ({self.right})"


@dataclass(frozen=True)
class Add(BinaryOp):
    symbol = "+"


@dataclass(frozen=True)
class Subtract(BinaryOp):
    symbol = "-"


@dataclass(frozen=True)
class Multiply(BinaryOp):
    symbol = "*"


@dataclass(frozen=True)
class Divide(BinaryOp):
    symbol = "/"


@dataclass(frozen=True)
class Call(Expression):
    """A call to a built-in function.

    Calls are recognised by their syntax, ``name(arg, ...)``; whether the
    function exists is only checked when the call is evaluated.

    Examples:
        cos(θ)
        render(r, θ)
        render_arc(1, 0, pi / 2)

    Attributes:
        name: The function name.
        args: The argument expressions, at least one.
    """
    name: str
    args: tuple[Expression, ...]

    def __str__(self):
        return f"{self.name}({', '.join(str(arg) for arg in self.args)})"


# --- Statements ---

@dataclass(frozen=True)
class Statement(ASTNode):
    """Base class for all sisplot statements.

    The closed set of statement nodes is: Assignment, VoidCall, Loop and
    ErrorStatement.
    """
    pass


@dataclass(frozen=True)
class Assignment(Statement):
    """Assigns the value of an expression to a variable.

    Example:
        r = sin(θ * 4)

    Attributes:
        name: The variable being assigned.
        expr: The value expression.
    """
    name: str
    expr: Expression

    def __str__(self):
        return f"{self.name} = {self.expr}"


@dataclass(frozen=True)
class VoidCall(Statement):
    """A function call whose result is discarded.

    Example:
        render(r, θ)

    Attributes:
        call: The call expression.
    """
    call: Call

    def __str__(self):
        return str(self.call)


@dataclass(frozen=True)
class Loop(Statement):
    """A counted loop over a numeric range.

    Examples:
        for θ over [0, 2 * pi) { render(1, θ) }
        for r over [5, 0] by -1 { render(r, 0) }

    Attributes:
        name: The loop variable.
        start: The first value of the range.
        end: The end of the range.
        step: The step expression, or None for the default step.
        inclusive: True if the range was closed with ``]``.
        body: The statements executed on every iteration.
    """
    name: str
    start: Expression
    end: Expression
    step: Expression | None
    inclusive: bool
    body: tuple[Statement, ...]

    def __str__(self):
        closer = "]" if self.inclusive else ")"
        step = f" by {self.step}" if self.step is not None else ""
        body = " ".join(str(stmt) for stmt in self.body)
        return f"for {self.name} over [{self.start}, {self.end}{closer}{step} {{ {body} }}"


@dataclass(frozen=True)
class ErrorStatement(Statement):
    """A statement that always fails when executed.

    The parser emits one in place of a construct that is syntactically
    well formed but illegal, such as assigning to ``pi``, so that the
    problem is reported with its position during validation.

    Attributes:
        message: The error message.
        phase: The phase label used when the statement fails.
    """
    message: str
    phase: str = "assignment error"

    def __str__(self):
        return f"<error: {self.message}>"


# vim: set ts=4 sw=4 expandtab:
