"""Turtle interpretation of an expanded symbol sequence.

The turtle starts at (0, 0) with heading 0 and a black pen, and steps a
fixed 100 units per ``F``/``G``. Each ``+``/``-`` turns by 360/angle
degrees. ``[`` saves the full state and ``]`` restores the latest one; an
unmatched ``]`` does nothing. ``C`` followed by a palette digit ``0``-``6``
switches pen colour, and the symbol after ``C`` is consumed whatever it is.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import ConfigError
from .rewriter import ExpandedDrawing
from .sequence import Sequence
from .symbols import DEFAULT_COLOR, Color, Symbol, SymbolKind, format_symbols

logger = logging.getLogger(__name__)

Point = tuple[float, float]

STEP = 100.0

_COLOR_SWITCH = "C"


@dataclass(frozen=True)
class TurtleState:
    x: float
    y: float
    z: float
    heading: float
    color: Color


@dataclass(frozen=True)
class Line:
    start: Point
    end: Point
    color: Color


def interpret(symbols: Iterable[Symbol], angle: float) -> list[Line]:
    """Walk ``symbols`` once and return the line segments drawn.

    Raises ConfigError at the first turn when ``angle`` is zero.
    """
    x, y, z = 0.0, 0.0, STEP
    heading = 0.0
    color = DEFAULT_COLOR
    base_turn = math.tau / angle if angle else None

    stack: Sequence[TurtleState] = Sequence()
    lines: list[Line] = []
    walked = 0

    it = iter(symbols)
    for sym in it:
        walked += 1
        kind = sym.kind

        if kind is SymbolKind.FORWARD or kind is SymbolKind.MOVE:
            nx = x + z * math.cos(heading)
            ny = y + z * math.sin(heading)
            if kind is SymbolKind.FORWARD:
                lines.append(Line((x, y), (nx, ny), color))
            x, y = nx, ny

        elif kind is SymbolKind.TURN_POSITIVE or kind is SymbolKind.TURN_NEGATIVE:
            if base_turn is None:
                raise ConfigError(f"angle is 0; cannot interpret turn symbol '{sym}'")
            if kind is SymbolKind.TURN_POSITIVE:
                heading += base_turn
            else:
                heading -= base_turn

        elif kind is SymbolKind.PUSH_STATE:
            stack.append(TurtleState(x, y, z, heading, color))

        elif kind is SymbolKind.POP_STATE:
            st = stack.remove_back()
            if st is not None:
                x, y, z, heading, color = st.x, st.y, st.z, st.heading, st.color

        elif sym.char == _COLOR_SWITCH:
            arg = next(it, None)
            if arg is None:
                continue
            walked += 1
            if arg.kind is SymbolKind.CUSTOM:
                new_color = Color.from_digit(arg.char)
                if new_color is not None:
                    color = new_color

    logger.debug(
        "interpreted %d symbols: %d lines, %d unclosed states",
        walked,
        len(lines),
        len(stack),
    )
    return lines


def serialize(symbols: Iterable[Symbol]) -> str:
    return format_symbols(symbols)


def render(drawing: ExpandedDrawing) -> tuple[list[Line], str]:
    """Return the drawn lines and the plain-text symbol string."""
    lines = interpret(drawing.symbols, drawing.angle)
    return lines, serialize(drawing.symbols)
