"""Tests for AST node generation from parsed sisplot code."""

import math

import pytest
from sisplot.ast import (
    parse_ast,
    getASTfromString,
    getASTfromFile,
    Variable, Constant, Add, Subtract, Multiply, Divide, Call,
    Assignment, VoidCall, Loop, ErrorStatement,
)
from sisplot.errors import ParseError

from conftest import parse_expr, pos


def C(value):
    return Constant(value=float(value), position=pos())


def V(name):
    return Variable(name=name, position=pos())


class TestNumberLiterals:
    """Test numeric literal parsing."""

    @pytest.mark.parametrize("code, value", [
        ("1.0", 1.0),
        ("2", 2.0),
        (".5", 0.5),
        ("+1.0", 1.0),
        ("+2", 2.0),
        ("+.5", 0.5),
        ("-1.0", -1.0),
        ("-2", -2.0),
        ("-.5", -0.5),
    ])
    def test_number(self, parser, code, value):
        """Signs fold into the constant."""
        assert parse_expr(parser, code) == C(value)

    def test_pi_and_e(self, parser):
        """Reserved names parse to constants."""
        assert parse_expr(parser, "pi") == C(math.pi)
        assert parse_expr(parser, "π") == C(math.pi)
        assert parse_expr(parser, "e") == C(math.e)

    def test_reserved_prefix_is_a_variable(self, parser):
        """Only the whole identifier is reserved."""
        assert parse_expr(parser, "ex") == V("ex")
        assert parse_expr(parser, "pie") == V("pie")


class TestArithmetic:
    """Test operator parsing, precedence and associativity."""

    @pytest.mark.parametrize("code, expected", [
        ("1.0+0.5", Add(left=C(1.0), right=C(0.5), position=pos())),
        ("1.0+-0.5", Add(left=C(1.0), right=C(-0.5), position=pos())),
        ("-1.0+-0.5", Add(left=C(-1.0), right=C(-0.5), position=pos())),
        ("1.0-0.5", Subtract(left=C(1.0), right=C(0.5), position=pos())),
        ("1.0--0.5", Subtract(left=C(1.0), right=C(-0.5), position=pos())),
        ("2*-4", Multiply(left=C(2), right=C(-4), position=pos())),
        ("-2/-4", Divide(left=C(-2), right=C(-4), position=pos())),
    ])
    def test_binary_operators(self, parser, code, expected):
        assert parse_expr(parser, code) == expected

    def test_precedence(self, parser):
        """Multiplication binds tighter than addition."""
        assert parse_expr(parser, "1 + 2 * 3") == Add(
            left=C(1), right=Multiply(left=C(2), right=C(3), position=pos()), position=pos()
        )
        assert parse_expr(parser, "1 + 2 / 3") == Add(
            left=C(1), right=Divide(left=C(2), right=C(3), position=pos()), position=pos()
        )

    def test_grouping(self, parser):
        """Parentheses bind tightest."""
        assert parse_expr(parser, "(1 + 2) * 3") == Multiply(
            left=Add(left=C(1), right=C(2), position=pos()), right=C(3), position=pos()
        )

    def test_left_associative(self, parser):
        """Operators of equal precedence fold left to right."""
        assert parse_expr(parser, "1 - 2 - 3") == Subtract(
            left=Subtract(left=C(1), right=C(2), position=pos()), right=C(3), position=pos()
        )
        assert parse_expr(parser, "8 / 4 / 2") == Divide(
            left=Divide(left=C(8), right=C(4), position=pos()), right=C(2), position=pos()
        )

    def test_parser_is_reusable(self, parser):
        """Successive parses with one parser do not share results."""
        assert parse_expr(parser, "1 + 2 * 3") == Add(
            left=C(1), right=Multiply(left=C(2), right=C(3), position=pos()), position=pos()
        )
        assert parse_expr(parser, "1 + 2 / 3") == Add(
            left=C(1), right=Divide(left=C(2), right=C(3), position=pos()), position=pos()
        )
        assert parse_expr(parser, "4 - 5") == Subtract(left=C(4), right=C(5), position=pos())

    def test_variables(self, parser):
        assert parse_expr(parser, "(3*pi + x) / 2") == Divide(
            left=Add(
                left=Multiply(left=C(3), right=C(math.pi), position=pos()),
                right=V("x"),
                position=pos(),
            ),
            right=C(2),
            position=pos(),
        )

    def test_greek_and_underscore_variables(self, parser):
        assert parse_expr(parser, "θ") == V("θ")
        assert parse_expr(parser, "_r2") == V("_r2")

    @pytest.mark.parametrize("code", [
        "1 +", "+ 1", "1 -", "- 1", "1 *", "* 1", "1 /", "/ 1", "(1 + 2", "-x",
    ])
    def test_malformed_expressions(self, parser, code):
        with pytest.raises(ParseError):
            parse_ast(parser, f"x = {code}")


class TestCalls:
    """Test function call parsing."""

    def test_single_argument(self, parser):
        assert parse_expr(parser, "ex(1)") == Call(name="ex", args=(C(1),), position=pos())

    def test_multiple_arguments(self, parser):
        assert parse_expr(parser, "pick(1, 2)") == Call(
            name="pick", args=(C(1), C(2)), position=pos()
        )

    def test_expression_argument(self, parser):
        assert parse_expr(parser, "xypdq(1+2)") == Call(
            name="xypdq", args=(Add(left=C(1), right=C(2), position=pos()),), position=pos()
        )

    def test_nested_calls(self, parser):
        inner = Call(name="z", args=(C(1),), position=pos())
        middle = Call(name="y", args=(inner,), position=pos())
        assert parse_expr(parser, "x(y(z(1)))") == Call(name="x", args=(middle,), position=pos())

    def test_call_requires_an_argument(self, parser):
        with pytest.raises(ParseError):
            parse_ast(parser, "x = cos()")


class TestStatements:
    """Test statement parsing."""

    def test_assignment(self, parser):
        assert parse_ast(parser, "x = 1") == [Assignment(name="x", expr=C(1), position=pos())]

    def test_repeated_assignment(self, parser):
        """Statements need no separator."""
        assert parse_ast(parser, "x = 1 y = 2 + 3") == [
            Assignment(name="x", expr=C(1), position=pos()),
            Assignment(name="y", expr=Add(left=C(2), right=C(3), position=pos()), position=pos()),
        ]

    @pytest.mark.parametrize("code, message", [
        ("pi = 1", "3.14159 is not a variable"),
        ("π = 1", "3.14159 is not a variable"),
        ("e = 1", "2.71828 is not a variable"),
    ])
    def test_assign_to_reserved_constant(self, parser, code, message):
        """Assigning to a constant parses to an ErrorStatement."""
        statements = parse_ast(parser, code)
        assert statements == [ErrorStatement(message=message, phase="assignment error", position=pos())]

    def test_void_call(self, parser):
        assert parse_ast(parser, "render(0, 0)") == [
            VoidCall(call=Call(name="render", args=(C(0), C(0)), position=pos()), position=pos())
        ]

    def test_empty_program(self, parser):
        with pytest.raises(ParseError):
            parse_ast(parser, "")

    def test_keyword_prefix_is_a_variable(self, parser):
        """A name starting with a keyword is an ordinary variable."""
        assert parse_ast(parser, "format = 1") == [Assignment(name="format", expr=C(1), position=pos())]

    def test_comments_are_skipped(self, parser):
        code = """
        // leading comment
        x = 1 /* inline */ + 2
        """
        assert parse_ast(parser, code) == [
            Assignment(name="x", expr=Add(left=C(1), right=C(2), position=pos()), position=pos())
        ]


class TestLoops:
    """Test loop parsing."""

    def test_exclusive_loop(self, parser):
        code = """
          for x over [0, 100) {
            y = x + 5
            z = y / 10
          }"""
        assert parse_ast(parser, code) == [
            Loop(
                name="x",
                start=C(0),
                end=C(100),
                step=None,
                inclusive=False,
                body=(
                    Assignment(name="y", expr=Add(left=V("x"), right=C(5), position=pos()), position=pos()),
                    Assignment(name="z", expr=Divide(left=V("y"), right=C(10), position=pos()), position=pos()),
                ),
                position=pos(),
            )
        ]

    def test_inclusive_loop_with_step(self, parser):
        statements = parse_ast(parser, "for r over [5, 0] by -1 { render(r, 0) }")
        assert len(statements) == 1
        loop = statements[0]
        assert isinstance(loop, Loop)
        assert loop.inclusive is True
        assert loop.step == C(-1)
        assert loop.start == C(5)
        assert loop.end == C(0)

    def test_nested_loops(self, parser):
        code = "for a over [0, 1) { for b over [0, 1) { render(a, b) } }"
        outer = parse_ast(parser, code)[0]
        assert isinstance(outer, Loop)
        assert len(outer.body) == 1
        inner = outer.body[0]
        assert isinstance(inner, Loop)
        assert inner.name == "b"
        assert isinstance(inner.body[0], VoidCall)

    def test_loop_over_reserved_constant(self, parser):
        statements = parse_ast(parser, "for pi over [0, 1) { render(1, 1) }")
        assert statements == [ErrorStatement(message="3.14159 is not a variable", phase="loop error", position=pos())]

    def test_loop_requires_body(self, parser):
        with pytest.raises(ParseError):
            parse_ast(parser, "for x over [0, 1) { }")

    def test_loop_requires_range_end(self, parser):
        with pytest.raises(ParseError):
            parse_ast(parser, "for x over [0, 1 { render(x, 0) }")


class TestPositions:
    """Test source positions recorded on nodes."""

    def test_statement_positions(self, parser):
        statements = parse_ast(parser, "q = 1\nz = x")
        assert (statements[0].position.line, statements[0].position.column) == (1, 1)
        assert (statements[1].position.line, statements[1].position.column) == (2, 1)

    def test_indented_positions(self, parser):
        statements = parse_ast(parser, "for x over [0, 1) {\n    y = x\n}")
        inner = statements[0].body[0]
        assert (inner.position.line, inner.position.column) == (2, 5)
        assert inner.expr.position.column == 9

    def test_positions_are_ignored_by_equality(self, parser):
        assert parse_ast(parser, "x = 1") == parse_ast(parser, "\n\n   x =    1")

    def test_origin(self):
        statements = getASTfromString("x = 1", origin="prog.sp")
        assert statements[0].position.origin == "prog.sp"

    def test_parse_error_position(self, parser):
        with pytest.raises(ParseError) as exc_info:
            parse_ast(parser, "x = 1\ny = * 2")
        assert exc_info.value.line == 2
        assert exc_info.value.column >= 1


class TestFileParsing:
    """Test getASTfromFile."""

    def test_parse_file(self, tmp_path):
        path = tmp_path / "prog.sp"
        path.write_text("x = 1\nrender(x, 0)\n", encoding="utf-8")
        statements = getASTfromFile(str(path))
        assert len(statements) == 2
        assert statements[0].position.origin == str(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            getASTfromFile(str(tmp_path / "missing.sp"))
