"""
Renderer: vector rectangles / SVG markup and nearest-neighbour rasters.

Both renderings are pure functions of a finished ``QrSymbol``.
"""

from typing import List, NamedTuple

from PIL import Image, ImageOps

from qrlive.config import Color
from qrlive.symbol import QrSymbol

QUIET_ZONE = 4


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int


def _check_border(border: int) -> None:
    if border < QUIET_ZONE:
        raise ValueError(f"Quiet zone must be at least {QUIET_ZONE} modules, got {border}")


def css_color(color: Color) -> str:
    if isinstance(color, str):
        return color
    r, g, b = color
    return f"#{r:02x}{g:02x}{b:02x}"


#==============================================================================
# VECTOR
#==============================================================================

def vector_rects(symbol: QrSymbol, border: int = QUIET_ZONE) -> List[Rect]:
    """One 1x1 rectangle per dark module, offset by the quiet zone."""
    _check_border(border)
    return [Rect(col + border, row + border, 1, 1)
            for row in range(symbol.size)
            for col in range(symbol.size)
            if symbol.modules[row][col]]


def to_svg(symbol: QrSymbol, border: int = QUIET_ZONE,
           dark: Color = 'black', light: Color = 'white') -> str:
    """
    Serialize the symbol as an SVG document at one user unit per module.

    The document has no fixed pixel size beyond its intrinsic ``viewBox``;
    consumers scale it to whatever resolution they need.
    """
    rects = vector_rects(symbol, border)
    dim = symbol.size + 2 * border
    body = "\n    ".join(
        f'<rect x="{r.x}" y="{r.y}" width="{r.width}" height="{r.height}"/>'
        for r in rects
    )
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
        f'width="{dim}" height="{dim}" viewBox="0 0 {dim} {dim}" '
        'shape-rendering="crispEdges">\n'
        f'  <rect width="{dim}" height="{dim}" fill="{css_color(light)}"/>\n'
        f'  <g fill="{css_color(dark)}">\n'
        f'    {body}\n'
        '  </g>\n'
        '</svg>\n'
    )


#==============================================================================
# RASTER
#==============================================================================

def rasterize(symbol: QrSymbol, size: int = 512, border: int = QUIET_ZONE,
              dark: Color = 'black', light: Color = 'white') -> Image.Image:
    """
    Render the symbol as a ``size`` x ``size`` RGB image.

    Scaling is nearest-neighbour so module edges stay sharp. ``size`` must be
    at least one pixel per module including the quiet zone.
    """
    _check_border(border)
    dim = symbol.size + 2 * border
    if size < dim:
        raise ValueError(f"Raster size {size} is smaller than the {dim} modules to draw")

    pixels = bytearray([255]) * (dim * dim)
    for row in range(symbol.size):
        offset = (row + border) * dim + border
        for col, is_dark in enumerate(symbol.modules[row]):
            if is_dark:
                pixels[offset + col] = 0

    img = Image.frombytes('L', (dim, dim), bytes(pixels))
    img = img.resize((size, size), Image.Resampling.NEAREST)
    return ImageOps.colorize(img, black=dark, white=light)
