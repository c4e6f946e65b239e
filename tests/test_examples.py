"""Run the sample programs under tests/programs end to end."""

import io
from pathlib import Path

import pytest
from sisplot import run
from sisplot.ast import getASTfromFile
from sisplot.interpreter import validate
from sisplot.render import NormalizingRenderTarget, SVGRenderTarget, VertsRenderTarget

PROGRAMS_DIR = Path(__file__).parent / "programs"
PROGRAMS = sorted(PROGRAMS_DIR.glob("*.sp"))


def _read(path):
    return path.read_text(encoding="utf-8")


@pytest.mark.parametrize("path", PROGRAMS, ids=lambda p: p.stem)
def test_program_validates(path):
    statements = getASTfromFile(str(path))
    assert validate(statements) is statements


@pytest.mark.parametrize("path", PROGRAMS, ids=lambda p: p.stem)
def test_program_renders_vertices(path):
    out = io.StringIO()
    run(_read(path), VertsRenderTarget(out), origin=str(path))
    lines = out.getvalue().splitlines()
    assert lines
    for line in lines:
        theta, r = line.split(" ")
        float(theta)
        float(r)


@pytest.mark.parametrize("path", PROGRAMS, ids=lambda p: p.stem)
def test_program_renders_svg(path):
    out = io.StringIO()
    run(_read(path), NormalizingRenderTarget(SVGRenderTarget(out, size=400)), origin=str(path))
    assert out.getvalue().endswith("</svg></body></html>")


def test_vertex_counts():
    counts = {}
    for path in PROGRAMS:
        out = io.StringIO()
        run(_read(path), VertsRenderTarget(out))
        counts[path.stem] = len(out.getvalue().splitlines())
    assert counts["arcs"] == 16
    assert counts["nested"] == 48
