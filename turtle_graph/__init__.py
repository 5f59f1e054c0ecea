"""L-system expansion and turtle-graphics rendering."""

from .errors import ConfigError
from .grammar import Grammar, load_grammar, parse_grammar
from .interpreter import Line, TurtleState, interpret, render, serialize
from .rewriter import ExpandedDrawing, apply_rule, expand, rewrite_pass
from .sequence import Sequence
from .symbols import Color, Symbol, SymbolKind

__all__ = [
    "Color",
    "ConfigError",
    "ExpandedDrawing",
    "Grammar",
    "Line",
    "Sequence",
    "Symbol",
    "SymbolKind",
    "TurtleState",
    "apply_rule",
    "expand",
    "interpret",
    "load_grammar",
    "parse_grammar",
    "render",
    "rewrite_pass",
    "serialize",
]
