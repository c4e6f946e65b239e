"""Entry points tying the parser, validator and executor together."""

from __future__ import annotations

import logging

from .ast import getASTfromString
from .ast.nodes import Statement
from .context import RuntimeContext
from .interpreter import execute_statements, validate
from .render import RenderTarget

logger = logging.getLogger(__name__)


def parse(source: str, origin: str = "<string>") -> list[Statement]:
    """Parse program text into a list of statements.

    Raises:
        ParseError: If the text does not match the grammar.
    """
    return getASTfromString(source, origin=origin)


def execute(statements: list[Statement], target: RenderTarget) -> None:
    """Run statements against a fresh runtime context bound to ``target``.

    The target is closed once every statement has succeeded. If a statement
    fails the error propagates and the target is left open; anything a
    buffering target recorded is discarded with it.

    Raises:
        StatementError: For the first failing statement.
        RenderError: If closing the target fails.
    """
    context = RuntimeContext(target)
    execute_statements(statements, context)
    target.close()


def run(source: str, target: RenderTarget, origin: str = "<string>") -> None:
    """Parse, validate and execute a program, rendering into ``target``."""
    statements = validate(parse(source, origin=origin))
    logger.debug("executing program from %s", origin)
    execute(statements, target)


__all__ = ["parse", "validate", "execute", "run"]


# vim: set ts=4 sw=4 expandtab:
