"""In-place expansion of a grammar's axiom.

Each pass applies the rules one after another, in grammar order, to the
same working sequence. A rule scans the sequence once and splices a fresh
copy of its production over every matching element; the copy just spliced
in is not rescanned by the same rule, but later rules in the same pass do
see it. So with ``A=B`` listed before ``B=C`` a single pass turns ``A``
into ``C``, while with the rules swapped it only reaches ``B``.

There is no cap on growth: a grammar whose productions lengthen the
sequence is expanded for the full ``order`` however large it gets.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .grammar import Grammar
from .sequence import Sequence
from .symbols import Symbol, format_symbols

logger = logging.getLogger(__name__)


@dataclass
class ExpandedDrawing:
    angle: float
    order: int
    rotate: float
    symbols: Sequence[Symbol]

    def serialize(self) -> str:
        return format_symbols(self.symbols)


def apply_rule(
    seq: Sequence[Symbol], lhs: Symbol, rhs: Iterable[Symbol]
) -> int:
    """Splice ``rhs`` over every ``lhs`` in ``seq``; return the match count."""
    production = list(rhs)
    matches = 0
    for h in seq.iter_mut():
        if seq[h] == lhs:
            seq.splice_replace(h, Sequence(production))
            matches += 1
    return matches


def rewrite_pass(seq: Sequence[Symbol], rules: dict[Symbol, list[Symbol]]) -> None:
    for lhs, rhs in rules.items():
        apply_rule(seq, lhs, rhs)


def iter_passes(grammar: Grammar) -> Iterator[Sequence[Symbol]]:
    """Yield the working sequence after each pass.

    The same object is yielded every time and keeps being rewritten, so
    consumers that stop early get a partially expanded sequence.
    """
    seq = Sequence(grammar.axiom)
    for i in range(grammar.order or 0):
        rewrite_pass(seq, grammar.rules)
        logger.debug("pass %d: %d symbols", i + 1, len(seq))
        yield seq


def expand(grammar: Grammar) -> ExpandedDrawing:
    seq: Sequence[Symbol] | None = None
    for seq in iter_passes(grammar):
        pass
    if seq is None:
        seq = Sequence(grammar.axiom)
    return ExpandedDrawing(
        angle=float(grammar.angle or 0),
        order=grammar.order or 0,
        rotate=float(grammar.rotate or 0),
        symbols=seq,
    )
