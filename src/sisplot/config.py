"""Output configuration and render target construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TextIO

from .render import (
    NormalizingRenderTarget,
    RenderTarget,
    SVGRenderTarget,
    VertsRenderTarget,
)

DEFAULT_SVG_SIZE = 1000


@dataclass
class RenderConfig:
    """How a program's output is rendered.

    Attributes:
        svg: Write an HTML-wrapped SVG preview instead of vertex lines.
            Implies normalization.
        svg_size: Width and height of the SVG in pixels.
        svg_unit_circle: Draw the unit circle guide on the SVG.
        normalize: Scale vertex output so every radius lies in [-1, 1].
    """
    svg: bool = False
    svg_size: int = DEFAULT_SVG_SIZE
    svg_unit_circle: bool = False
    normalize: bool = False

    def __post_init__(self):
        if self.svg_size <= 0:
            raise ValueError(f"svg_size must be positive, got {self.svg_size}")

    @classmethod
    def from_args(cls, args) -> "RenderConfig":
        """Build a config from parsed command-line arguments."""
        return cls(
            svg=args.svg,
            svg_size=args.svg_size,
            svg_unit_circle=args.svg_unit_circle,
            normalize=args.normalize,
        )


def build_render_target(config: RenderConfig, writer: TextIO) -> RenderTarget:
    """Build the render target chain described by ``config`` around ``writer``."""
    if config.svg:
        return NormalizingRenderTarget(
            SVGRenderTarget(writer, config.svg_size, config.svg_unit_circle)
        )
    target = VertsRenderTarget(writer)
    if config.normalize:
        return NormalizingRenderTarget(target)
    return target


# vim: set ts=4 sw=4 expandtab:
