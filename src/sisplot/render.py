"""Render targets: sinks for the drawing commands a program emits.

A program drives a single render target through ``accept()`` and closes
it exactly once when it completes. Targets are composed as decorators:

* :class:`VertsRenderTarget` writes plain ``theta r`` vertex lines.
* :class:`BufferingRenderTarget` records commands and replays them on close.
* :class:`NormalizingRenderTarget` rescales all radii into [-1, 1] on close.
* :class:`SVGRenderTarget` writes an HTML-wrapped SVG preview.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import TextIO

from .errors import RuntimeIOError, UnnormalizedInputError

logger = logging.getLogger(__name__)


# --- Render commands ---

@dataclass(frozen=True)
class RenderCommand:
    """Base class for drawing commands in polar coordinates.

    Attributes:
        r: The radius.
        theta: The angle in radians.
    """
    r: float
    theta: float


@dataclass(frozen=True)
class Vertex(RenderCommand):
    """A single point."""


@dataclass(frozen=True)
class Arc(RenderCommand):
    """A constant-radius sweep starting at theta.

    Attributes:
        sweep: The swept angle in radians; negative sweeps run clockwise.
    """
    sweep: float


# --- Render targets ---

class RenderTarget:
    """Base class for render targets."""

    def accept(self, cmd: RenderCommand) -> None:
        raise NotImplementedError

    def close(self) -> None:
        raise NotImplementedError

    def vertex(self, r: float, theta: float) -> None:
        self.accept(Vertex(r, theta))

    def arc(self, r: float, theta: float, sweep: float) -> None:
        self.accept(Arc(r, theta, sweep))


class NoopRenderTarget(RenderTarget):
    """Accepts and discards every command."""

    def accept(self, cmd):
        pass

    def close(self):
        pass


class CountingRenderTarget(RenderTarget):
    """Counts the commands it accepts."""

    def __init__(self):
        self.count = 0
        self.closed = False

    def accept(self, cmd):
        self.count += 1

    def close(self):
        self.closed = True


class VertsRenderTarget(RenderTarget):
    """Writes vertices as ``"theta r"`` lines with five decimal places.

    Arcs have no native representation in this format and are written as
    their start and end points.
    """

    def __init__(self, writer: TextIO):
        self.writer = writer

    def _write_point(self, r, theta):
        try:
            self.writer.write("%.5f %.5f\n" % (theta, r))
        except OSError as e:
            raise RuntimeIOError(f"failed to write vertex: {e}") from e

    def accept(self, cmd):
        if isinstance(cmd, Arc):
            self._write_point(cmd.r, cmd.theta)
            self._write_point(cmd.r, cmd.theta + cmd.sweep)
        elif isinstance(cmd, Vertex):
            self._write_point(cmd.r, cmd.theta)
        else:
            raise TypeError(f"Unsupported render command: {cmd!r}")

    def close(self):
        try:
            self.writer.flush()
        except OSError as e:
            raise RuntimeIOError(f"failed to flush output: {e}") from e


class BufferingRenderTarget(RenderTarget):
    """Records commands and replays them, in order, to the wrapped target on close."""

    def __init__(self, target: RenderTarget):
        self.target = target
        self.buffer: list[RenderCommand] = []

    def accept(self, cmd):
        self.buffer.append(cmd)

    def close(self):
        logger.debug("replaying %d buffered commands", len(self.buffer))
        for cmd in self.buffer:
            self.target.accept(cmd)
        self.target.close()


class NormalizingRenderTarget(BufferingRenderTarget):
    """Buffers commands and scales every radius into [-1, 1] before replaying.

    The scale factor is the largest absolute radius in the buffer, so the
    largest radius becomes exactly 1 (or -1). A buffer whose radii are all
    zero is replayed unchanged. Angles are never modified.
    """

    def normalization_factor(self) -> float:
        max_r = max((abs(cmd.r) for cmd in self.buffer), default=0.0)
        return max_r if max_r > 0.0 else 1.0

    def close(self):
        factor = self.normalization_factor()
        logger.debug("normalizing %d commands by %g", len(self.buffer), factor)

        def normalize(r):
            return min(1.0, max(-1.0, r / factor))

        self.buffer = [replace(cmd, r=normalize(cmd.r)) for cmd in self.buffer]
        super().close()


# --- SVG output ---

SVG_HEADER = '<html><body><svg height="%d" width="%d">\n'
SVG_FOOTER = '</svg></body></html>'

DEFAULT_STROKE_COLOR = "black"
DEFAULT_STROKE_WIDTH = 5
GUIDE_COLOR = "#cccccc"
GUIDE_TICKS = 128


def svg_polyline(points, stroke_color=DEFAULT_STROKE_COLOR, stroke_width=DEFAULT_STROKE_WIDTH) -> str:
    coords = " ".join("%.5f,%.5f" % (x, y) for x, y in points)
    return (
        f'<polyline points="{coords}" '
        f'style="fill:none;stroke:{stroke_color};stroke-width:{stroke_width}" />\n'
    )


def svg_path(d, stroke_color=DEFAULT_STROKE_COLOR, stroke_width=DEFAULT_STROKE_WIDTH) -> str:
    return f'<path d="{d}" style="fill:none;stroke:{stroke_color};stroke-width:{stroke_width}" />\n'


def svg_circle(cx, cy, r, stroke_color=DEFAULT_STROKE_COLOR, stroke_width=DEFAULT_STROKE_WIDTH) -> str:
    return (
        '<circle cx="%.5f" cy="%.5f" r="%.5f" ' % (cx, cy, r)
        + f'style="fill:none;stroke:{stroke_color};stroke-width:{stroke_width}" />\n'
    )


def arc_flags(sweep: float) -> tuple[int, int]:
    """Return the SVG (large-arc, sweep) flags for an arc sweeping ``sweep`` radians.

    The y axis points down in SVG, so a positive (counter-clockwise) sweep
    uses sweep flag 0.
    """
    large_arc = 1 if abs(sweep) > math.pi else 0
    sweep_flag = 1 if sweep < 0.0 else 0
    return large_arc, sweep_flag


class SVGRenderTarget(RenderTarget):
    """Writes an HTML document containing an SVG preview of the plot.

    Input must already be normalized (see :class:`NormalizingRenderTarget`).
    Radius 0 maps to the centre of a ``size`` x ``size`` drawing and radius 1
    to its edge. Runs of vertices become one ``<polyline>``; each arc becomes
    a ``<path>`` using the elliptical arc command.

    Args:
        writer: Text stream to write to.
        size: Width and height of the drawing in pixels.
        draw_unit_circle: If True, draw a faint unit circle with radial ticks on close.
    """

    def __init__(self, writer: TextIO, size: int = 1000, draw_unit_circle: bool = False):
        self.writer = writer
        self.size = size
        self.scale = size / 2.0
        self.draw_unit_circle = draw_unit_circle
        self._started = False
        self._closed = False
        self._points: list[tuple[float, float]] = []
        self.polylines = 0
        self.paths = 0

    def _write(self, text):
        try:
            self.writer.write(text)
        except OSError as e:
            raise RuntimeIOError(f"failed to write SVG: {e}") from e

    def _start_once(self):
        if not self._started:
            self._started = True
            self._write(SVG_HEADER % (self.size, self.size))

    def to_cartesian(self, r: float, theta: float) -> tuple[float, float]:
        # r in [-1, 1] scales to [-scale, scale], shifted to [0, size].
        # SVG y grows down the screen, hence the negation.
        x = r * self.scale * math.cos(theta) + self.scale
        y = -(r * self.scale * math.sin(theta)) + self.scale
        return x, y

    def _flush_points(self, end_point=None):
        if not self._points:
            return
        if end_point is not None:
            self._points.append(end_point)
        self._write(svg_polyline(self._points))
        self.polylines += 1
        self._points = []

    @staticmethod
    def _check_normalized(cmd):
        if abs(cmd.r) > 1.0:
            raise UnnormalizedInputError(
                f"SVG rendering requires normalized input, got r={cmd.r:g}"
            )

    def accept(self, cmd):
        self._start_once()
        self._check_normalized(cmd)
        if isinstance(cmd, Arc):
            self._render_arc(cmd)
        elif isinstance(cmd, Vertex):
            self._points.append(self.to_cartesian(cmd.r, cmd.theta))
        else:
            raise TypeError(f"Unsupported render command: {cmd!r}")

    def _render_arc(self, arc):
        x, y = self.to_cartesian(arc.r, arc.theta)
        x2, y2 = self.to_cartesian(arc.r, arc.theta + arc.sweep)

        # The pending polyline runs up to the start of the arc.
        self._flush_points(end_point=(x, y))

        large_arc, sweep_flag = arc_flags(arc.sweep)
        radius = arc.r * self.scale
        self._write(svg_path(
            "M %.5f,%.5f A %.5f,%.5f 0 %d %d %.5f,%.5f" % (
                x, y, radius, radius, large_arc, sweep_flag, x2, y2,
            )
        ))
        self.paths += 1

        # The next polyline continues from the end of the arc.
        self._points.append((x2, y2))

    def _draw_guide(self):
        self._write(svg_circle(self.scale, self.scale, self.scale, GUIDE_COLOR, 1))
        center = self.to_cartesian(0.0, 0.0)
        for i in range(GUIDE_TICKS):
            color = "red" if i % (GUIDE_TICKS // 4) == 0 else GUIDE_COLOR
            tip = self.to_cartesian(1.0, math.pi / (GUIDE_TICKS / 2) * i)
            self._write(svg_polyline([center, tip], color, 1))

    def close(self):
        if not self._closed:
            self._start_once()
            self._flush_points()
            if self.draw_unit_circle:
                self._draw_guide()
            self._write(SVG_FOOTER)
            self._closed = True
            logger.debug("wrote SVG with %d polylines and %d paths", self.polylines, self.paths)
        try:
            self.writer.flush()
        except OSError as e:
            raise RuntimeIOError(f"failed to flush output: {e}") from e


# vim: set ts=4 sw=4 expandtab:
