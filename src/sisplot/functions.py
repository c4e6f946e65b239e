"""Built-in functions of the sisplot language.

The registry is a static table mapping each function name to its arity
and an evaluation rule. Rules receive the active context, so render
functions can reach the context's render target.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Sequence

from .errors import MathError, NoSuchFunction, WrongArity

if TYPE_CHECKING:
    from .context import Context


@dataclass(frozen=True)
class Function:
    """A registry entry.

    Attributes:
        name: The function name as used in programs.
        arity: The exact number of arguments required.
        rule: Callable ``(context, args) -> float``.
    """
    name: str
    arity: int
    rule: Callable[["Context", Sequence[float]], float]

    def __call__(self, context, args):
        return self.rule(context, args)


def _math(name, fn):
    def rule(context, args):
        try:
            return float(fn(*args))
        except (ValueError, OverflowError, ZeroDivisionError) as e:
            raise MathError(name, str(e)) from e
    return rule


def _render(context, args):
    r, theta = args
    context.render.vertex(r, theta)
    return 0.0


def _render_arc(context, args):
    r, theta, sweep = args
    context.render.arc(r, theta, sweep)
    return 0.0


_UNARY = {
    "cos": math.cos,
    "sin": math.sin,
    "tan": math.tan,
    "acos": math.acos,
    "asin": math.asin,
    "atan": math.atan,
    "cosh": math.cosh,
    "sinh": math.sinh,
    "tanh": math.tanh,
    "abs": abs,
    "ceil": math.ceil,
    "floor": math.floor,
    "sqrt": math.sqrt,
    "ln": math.log,
    "log10": math.log10,
}

_BINARY = {
    "pow": math.pow,
    "min": min,
    "max": max,
}


FUNCTIONS: dict[str, Function] = {}

for _name, _fn in _UNARY.items():
    FUNCTIONS[_name] = Function(_name, 1, _math(_name, _fn))

for _name, _fn in _BINARY.items():
    FUNCTIONS[_name] = Function(_name, 2, _math(_name, _fn))

FUNCTIONS["render"] = Function("render", 2, _render)
FUNCTIONS["render_arc"] = Function("render_arc", 3, _render_arc)

del _name, _fn


def names() -> set[str]:
    """Return the names of all built-in functions."""
    return set(FUNCTIONS)


def arity(name: str) -> int:
    """Return the number of arguments the named function requires.

    Raises:
        NoSuchFunction: If no function has that name.
    """
    try:
        return FUNCTIONS[name].arity
    except KeyError:
        raise NoSuchFunction(name) from None


def signatures() -> dict[str, int]:
    """Return a mapping of every function name to its arity."""
    return {name: fn.arity for name, fn in FUNCTIONS.items()}


def dispatch(context: "Context", name: str, args: Sequence[float]) -> float:
    """Invoke the named function with already evaluated arguments.

    Raises:
        NoSuchFunction: If no function has that name.
        WrongArity: If the argument count does not match the function's arity.
        MathError: If the computation fails (e.g. ``sqrt(-1)``).
    """
    fn = FUNCTIONS.get(name)
    if fn is None:
        raise NoSuchFunction(name)
    if len(args) != fn.arity:
        raise WrongArity(name, fn.arity, len(args))
    return fn(context, args)


# vim: set ts=4 sw=4 expandtab:
