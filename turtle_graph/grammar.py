"""Grammar description: parsing of the line-oriented grammar text.

Syntax::

    angle <integer 0-255>        ; base turn is 360/angle degrees
    order <integer 0-255>        ; number of rewriting passes
    rotate <integer>             ; image rotation in degrees
    axiom <symbols>
    <symbol>=<symbols>           ; production rule

Everything after ``;`` on a line is ignored. Keyword lines may appear in
any order; when a keyword is repeated the last line wins, and a value that
does not parse leaves the field unset rather than failing.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from .errors import ConfigError
from .symbols import Symbol, format_symbols, parse_symbols

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?[0-9]+")

_BYTE_RANGE = (0, 255)
_I32_RANGE = (-(2**31), 2**31 - 1)


@dataclass
class Grammar:
    angle: int | None = None
    order: int | None = None
    rotate: int | None = None
    axiom: list[Symbol] = field(default_factory=list)
    # Insertion ordered; rules are applied in this order on every pass.
    rules: dict[Symbol, list[Symbol]] = field(default_factory=dict)

    def describe(self) -> str:
        lines = [
            f"angle {self.angle}" if self.angle is not None else "angle -",
            f"order {self.order}" if self.order is not None else "order -",
            f"rotate {self.rotate}" if self.rotate is not None else "rotate -",
            f"axiom {format_symbols(self.axiom)}",
        ]
        for lhs, rhs in self.rules.items():
            lines.append(f"{lhs}={format_symbols(rhs)}")
        return "\n".join(lines)


# -------------------------
# Field parsing
# -------------------------


def _parse_int(text: str, bounds: tuple[int, int], key: str) -> int | None:
    text = text.strip()
    lo, hi = bounds
    if _INT_RE.fullmatch(text) is None or (lo >= 0 and text.startswith("-")):
        logger.warning("%s: %r is not an integer, leaving it unset", key, text)
        return None
    try:
        value = int(text)
    except ValueError:
        # Digit strings past the interpreter's conversion limit.
        logger.warning(
            "%s: %d-digit value is out of range, leaving it unset", key, len(text)
        )
        return None
    if not lo <= value <= hi:
        logger.warning(
            "%s: %d is outside %d..%d, leaving it unset", key, value, lo, hi
        )
        return None
    return value


def _strip_comment(line: str) -> str:
    line = line.strip()
    cut = line.find(";")
    return line if cut < 0 else line[:cut]


def parse_grammar(text: str) -> Grammar:
    g = Grammar()

    # Only "\n" ends a line; other line-break characters are symbols.
    for lineno, raw in enumerate(text.split("\n"), start=1):
        word = _strip_comment(raw.removesuffix("\r"))

        if word.startswith("angle"):
            g.angle = _parse_int(word[len("angle"):], _BYTE_RANGE, "angle")
        elif word.startswith("order"):
            g.order = _parse_int(word[len("order"):], _BYTE_RANGE, "order")
        elif word.startswith("rotate"):
            g.rotate = _parse_int(word[len("rotate"):], _I32_RANGE, "rotate")
        elif word.startswith("axiom"):
            g.axiom = parse_symbols(word[len("axiom"):].strip())
        else:
            rule = word.replace(" ", "")
            if len(rule) < 2 or rule[1] != "=":
                if rule:
                    logger.debug("line %d: ignoring %r", lineno, raw)
                continue
            lhs = Symbol.from_char(rule[0])
            if lhs in g.rules:
                logger.warning(
                    "line %d: duplicate rule for %r ignored, keeping the first",
                    lineno,
                    str(lhs),
                )
                continue
            g.rules[lhs] = parse_symbols(rule[2:])

    return g


def load_grammar(path: str) -> Grammar:
    with open(path, encoding="utf-8", newline="") as f:
        try:
            text = f.read()
        except UnicodeDecodeError as e:
            raise ConfigError(f"Grammar file {path} is not valid UTF-8: {e}") from e
    return parse_grammar(text)
