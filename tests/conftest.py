"""Pytest configuration and shared fixtures for sisplot tests."""

import io

import pytest
from sisplot import getSisplotParser
from sisplot.ast import parse_ast
from sisplot.ast.builder import Position
from sisplot.context import RuntimeContext
from sisplot.render import RenderTarget


@pytest.fixture
def parser():
    """Create a parser instance for testing."""
    return getSisplotParser()


class RecordingRenderTarget(RenderTarget):
    """Render target that records every command it accepts."""

    def __init__(self):
        self.commands = []
        self.closed = 0

    def accept(self, cmd):
        self.commands.append(cmd)

    def close(self):
        self.closed += 1


class FailingWriter(io.StringIO):
    """Text stream whose writes always fail."""

    def write(self, s):
        raise OSError("boom")


@pytest.fixture
def recorder():
    return RecordingRenderTarget()


@pytest.fixture
def runtime(recorder):
    """A RuntimeContext bound to a recording render target."""
    return RuntimeContext(recorder)


def pos(line=1, column=1):
    """Helper to create a Position for testing."""
    return Position(origin="<test>", line=line, column=column)


def parse_expr(parser, code):
    """Parse ``x = <code>`` and return the assigned expression."""
    statements = parse_ast(parser, f"x = {code}")
    assert len(statements) == 1
    return statements[0].expr
