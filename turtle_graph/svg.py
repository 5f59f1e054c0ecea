"""SVG output for interpreted drawings.

Connected segments of the same colour are merged into one ``<polyline>``;
a colour change, a ``G`` move or a ``]`` jump starts a new one.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ._fmt import _fmt
from .errors import _require
from .interpreter import Line, Point
from .symbols import Color


@dataclass(frozen=True)
class SvgStyle:
    stroke_width: float = 1.0
    fill: str = "none"
    stroke_linecap: str = "round"
    stroke_linejoin: str = "round"


@dataclass
class Polyline:
    color: Color
    points: list[Point] = field(default_factory=list)


def merge_lines(lines: Iterable[Line]) -> list[Polyline]:
    out: list[Polyline] = []
    for line in lines:
        cur = out[-1] if out else None
        if cur is None or cur.color is not line.color or cur.points[-1] != line.start:
            cur = Polyline(line.color, [line.start])
            out.append(cur)
        cur.points.append(line.end)
    return out


def compute_bounds(polylines: list[Polyline]) -> tuple[float, float, float, float]:
    _require(len(polylines) > 0, "No drawable geometry produced.")
    xs = [x for pl in polylines for x, _ in pl.points]
    ys = [y for pl in polylines for _, y in pl.points]
    return (min(xs), min(ys), max(xs), max(ys))


def _rgb(color: Color) -> str:
    r, g, b = (round(c * 255) for c in color.rgb)
    return f"rgb({r},{g},{b})"


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


def svg_document(
    lines: Iterable[Line],
    *,
    margin: float,
    precision: int,
    flip_y: bool,
    rotate: float = 0.0,
    style: SvgStyle = SvgStyle(),
    background: str | None = None,
    title: str | None = None,
) -> str:
    def num(v: float) -> str:
        return _fmt(v, precision)

    polylines = merge_lines(lines)
    lo_x, lo_y, hi_x, hi_y = compute_bounds(polylines)
    # A straight drawing has zero extent on one axis; only the margin saves it.
    lo_x, lo_y = lo_x - margin, lo_y - margin
    hi_x, hi_y = hi_x + margin, hi_y + margin
    width, height = hi_x - lo_x, hi_y - lo_y
    _require(
        width > 0 and height > 0,
        "Drawing has zero width or height; use a margin > 0 for collinear lines.",
    )

    box = f"{num(lo_x)} {num(lo_y)} {num(width)} {num(height)}"
    doc = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" viewBox="{box}">',
    ]
    if title:
        doc.append(f"  <title>{_escape(title)}</title>")
    if background and background.lower() != "none":
        doc.append(
            f'  <rect x="{num(lo_x)}" y="{num(lo_y)}" width="{num(width)}" '
            f'height="{num(height)}" fill="{background}" />'
        )

    transform: list[str] = []
    if flip_y:
        transform.append(f"translate(0,{num(lo_y + hi_y)}) scale(1,-1)")
    if rotate:
        centre = f"{num((lo_x + hi_x) / 2)},{num((lo_y + hi_y) / 2)}"
        transform.append(f"rotate({num(rotate)},{centre})")

    pen = (
        f'stroke-width="{num(style.stroke_width)}" fill="{style.fill}" '
        f'stroke-linecap="{style.stroke_linecap}" '
        f'stroke-linejoin="{style.stroke_linejoin}"'
    )
    body = [
        '<polyline points="{}" stroke="{}" {} />'.format(
            " ".join(f"{num(x)},{num(y)}" for x, y in pl.points), _rgb(pl.color), pen
        )
        for pl in polylines
    ]

    if transform:
        doc.append(f'  <g transform="{" ".join(transform)}">')
        doc.extend("    " + el for el in body)
        doc.append("  </g>")
    else:
        doc.extend("  " + el for el in body)

    doc.append("</svg>")
    return "\n".join(doc) + "\n"
