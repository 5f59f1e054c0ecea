"""Turtle symbols and the pen colour palette."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass

# -------------------------
# Symbols
# -------------------------


class SymbolKind(enum.IntEnum):
    FORWARD = 0
    MOVE = 1
    TURN_POSITIVE = 2
    TURN_NEGATIVE = 3
    PUSH_STATE = 4
    POP_STATE = 5
    CUSTOM = 6


_FIXED_CHARS: dict[str, SymbolKind] = {
    "F": SymbolKind.FORWARD,
    "G": SymbolKind.MOVE,
    "+": SymbolKind.TURN_POSITIVE,
    "-": SymbolKind.TURN_NEGATIVE,
    "[": SymbolKind.PUSH_STATE,
    "]": SymbolKind.POP_STATE,
}
_KIND_CHARS: dict[SymbolKind, str] = {k: c for c, k in _FIXED_CHARS.items()}


@dataclass(frozen=True, order=True)
class Symbol:
    """One grammar symbol. ``char`` is only set for ``CUSTOM``."""

    kind: SymbolKind
    char: str = ""

    def __post_init__(self) -> None:
        if self.kind is SymbolKind.CUSTOM:
            if len(self.char) != 1 or self.char in _FIXED_CHARS:
                raise ValueError(
                    f"custom symbol needs one non-reserved character, got {self.char!r}"
                )
        elif self.char:
            raise ValueError(f"{self.kind.name} symbol carries no character")

    @classmethod
    def from_char(cls, c: str) -> Symbol:
        kind = _FIXED_CHARS.get(c)
        if kind is not None:
            return _FIXED[kind]
        return cls(SymbolKind.CUSTOM, c)

    @classmethod
    def custom(cls, c: str) -> Symbol:
        return cls(SymbolKind.CUSTOM, c)

    def __str__(self) -> str:
        if self.kind is SymbolKind.CUSTOM:
            return self.char
        return _KIND_CHARS[self.kind]


_FIXED: dict[SymbolKind, Symbol] = {k: Symbol(k) for k in _KIND_CHARS}

FORWARD = _FIXED[SymbolKind.FORWARD]
MOVE = _FIXED[SymbolKind.MOVE]
TURN_POSITIVE = _FIXED[SymbolKind.TURN_POSITIVE]
TURN_NEGATIVE = _FIXED[SymbolKind.TURN_NEGATIVE]
PUSH_STATE = _FIXED[SymbolKind.PUSH_STATE]
POP_STATE = _FIXED[SymbolKind.POP_STATE]


def parse_symbols(text: str) -> list[Symbol]:
    return [Symbol.from_char(c) for c in text]


def format_symbols(symbols: Iterable[Symbol]) -> str:
    return "".join(str(s) for s in symbols)


# -------------------------
# Colours
# -------------------------


class Color(enum.Enum):
    """Pen colours; values are RGB components in 0..1."""

    RED = (1.0, 0.0, 0.0)
    GREEN = (0.0, 1.0, 0.0)
    DARK_BLUE = (0.0, 0.0, 1.0)
    BLACK = (0.0, 0.0, 0.0)
    BROWN = (0.7, 0.3, 0.0)
    DARK_GREEN = (0.0, 0.5, 0.0)
    WHITE = (1.0, 1.0, 1.0)

    @property
    def rgb(self) -> tuple[float, float, float]:
        return self.value

    @classmethod
    def from_digit(cls, c: str) -> Color | None:
        """Palette lookup for the character following a ``C`` symbol."""
        return _PALETTE.get(c)


_PALETTE: dict[str, Color] = {
    "0": Color.BLACK,
    "1": Color.RED,
    "2": Color.DARK_BLUE,
    "3": Color.GREEN,
    "4": Color.BROWN,
    "5": Color.DARK_GREEN,
    "6": Color.WHITE,
}

DEFAULT_COLOR = Color.BLACK
