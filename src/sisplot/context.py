"""Runtime environments for sisplot programs.

A context holds variable bindings, produces loop ranges and dispatches
function calls. :class:`RuntimeContext` executes a program for real
against a render target; :class:`ValidatingContext` is the dry-run
environment used by validation.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from . import functions
from .errors import UndefinedVariable
from .render import NoopRenderTarget, RenderTarget

# Default loop step; negated for descending ranges.
DEFAULT_STEP = 0.01

# Assignments to this name are discarded.
SINK = "_"


class Context:
    """Base class for execution contexts.

    Provides variable assignment, variable lookup and function dispatch.
    Subclasses supply ``range()`` and the ``render`` target.
    """

    render: RenderTarget

    def __init__(self):
        self._vars: dict[str, float] = {}

    def value_of(self, name: str) -> float:
        """Return the current value of a variable.

        Raises:
            UndefinedVariable: If the variable was never assigned.
        """
        try:
            return self._vars[name]
        except KeyError:
            raise UndefinedVariable(name) from None

    def assign(self, name: str, value: float) -> None:
        """Bind a variable. Assignments to ``_`` are discarded."""
        if name != SINK:
            self._vars[name] = value

    def dispatch(self, name: str, args: Sequence[float]) -> float:
        """Invoke a built-in function; see :func:`sisplot.functions.dispatch`."""
        return functions.dispatch(self, name, args)

    def range(self, start: float, end: float, step: float | None, inclusive: bool) -> Iterator[float]:
        raise NotImplementedError


class RuntimeContext(Context):
    """Context for executing a program against a render target."""

    def __init__(self, render: RenderTarget):
        super().__init__()
        self.render = render

    def range(self, start, end, step=None, inclusive=False):
        """Generate the values of a loop range.

        Values are produced lazily by repeated addition of the step. An
        ascending range continues while the value is below ``end`` (or equal
        to it when inclusive), a descending range while it is above (or
        equal). When ``start == end`` exactly one value is produced. Without
        a step, 0.01 is used, negated for descending ranges. An explicit
        step is used as given.
        """
        if start == end:
            yield start
            return

        if start < end:
            if step is None:
                step = DEFAULT_STEP
            if inclusive:
                def keep_going(value):
                    return value <= end
            else:
                def keep_going(value):
                    return value < end
        else:
            if step is None:
                step = -DEFAULT_STEP
            if inclusive:
                def keep_going(value):
                    return value >= end
            else:
                def keep_going(value):
                    return value > end

        current = start
        while keep_going(current):
            yield current
            current += step


class ValidatingContext(Context):
    """Context for validating a program without producing output.

    Render calls succeed and are discarded, and every range yields only its
    start value so each loop body runs exactly once.
    """

    def __init__(self):
        super().__init__()
        self.render = NoopRenderTarget()

    def range(self, start, end, step=None, inclusive=False):
        yield start


# vim: set ts=4 sw=4 expandtab:
