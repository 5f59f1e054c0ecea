"""PostScript drawing-program writer.

Layout of the generated program::

    <header>
    /angle <angle, 2 decimals> def
    /order <order // base_order> def
    /rotateimage <rotate, 2 decimals> def
    <procedure definitions and page setup>
    <r g b> setrgbcolor
    n <x0> <y0> m <x1> <y1> l s       ; one pair of lines per segment
    ...
    stroke
    grestore
    showpage
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Mapping

from ._fmt import _fmt
from .errors import _require
from .interpreter import Line
from .rewriter import ExpandedDrawing
from .symbols import Color

logger = logging.getLogger(__name__)

BASE_ORDER_ENV = "BASE_ORDER"
_BYTE_RE = re.compile(r"\+?[0-9]+")

HEADER = """%!PS-Adobe-2.0
%%Title: L-system drawing
%%Creator: turtle-graph
%%Pages: 1
%%BoundingBox: 0 0 612 792
%%EndComments

"""

SETUP = """
/n { newpath } bind def
/m { moveto } bind def
/l { lineto } bind def
/s { stroke } bind def

/scalefactor 2 order exp def

gsave
306 396 translate
rotateimage rotate
1 scalefactor div dup scale
0.5 scalefactor mul setlinewidth
1 setlinecap
1 setlinejoin

"""

TRAILER = "stroke\n\ngrestore\n\nshowpage\nquit\n"


def _parse_byte(raw: str) -> int | None:
    # No surrounding whitespace, optional "+", 0..255.
    if _BYTE_RE.fullmatch(raw) is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        return None
    return value if value <= 255 else None


def resolve_base_order(
    value: int | None, environ: Mapping[str, str] = os.environ
) -> int:
    """Pick the order scale factor: explicit value, then $BASE_ORDER, then 1.

    $BASE_ORDER is read as a byte; anything that is not a plain integer in
    0..255 (whitespace and signs other than "+" included) is ignored. Zero,
    from either source, is an error.
    """
    if value is None:
        raw = environ.get(BASE_ORDER_ENV)
        if raw is not None:
            value = _parse_byte(raw)
            if value is None:
                logger.warning(
                    "%s=%r is not a byte value, using 1", BASE_ORDER_ENV, raw
                )
        if value is None:
            value = 1
    _require(0 < value <= 255, f"base order must be in 1..255, got {value}")
    return value


def color_command(color: Color) -> str:
    r, g, b = color.rgb
    return f"{_fmt(r, 2)} {_fmt(g, 2)} {_fmt(b, 2)} setrgbcolor"


def line_command(line: Line) -> str:
    (x0, y0), (x1, y1) = line.start, line.end
    return f"n {x0:.2f} {y0:.2f} m {x1:.2f} {y1:.2f} l s"


def postscript_program(
    drawing: ExpandedDrawing, lines: Iterable[Line], *, base_order: int = 1
) -> str:
    _require(base_order > 0, f"base order must be > 0, got {base_order}")

    out: list[str] = [HEADER]
    out.append(
        f"/angle {drawing.angle:.2f} def\n"
        f"/order {drawing.order // base_order} def\n"
        f"/rotateimage {drawing.rotate:.2f} def\n"
    )
    out.append(SETUP)
    for line in lines:
        out.append(color_command(line.color))
        out.append("\n")
        out.append(line_command(line))
        out.append("\n")
    out.append(TRAILER)
    return "".join(out)

