#!/usr/bin/env python3
from turtle_graph.grammar import parse_grammar
from turtle_graph.rewriter import apply_rule, expand, iter_passes, rewrite_pass
from turtle_graph.sequence import Sequence
from turtle_graph.symbols import FORWARD, Symbol, format_symbols, parse_symbols


def _expand(text: str) -> str:
    return expand(parse_grammar(text)).serialize()


class TestExpand:
    def test_order_one(self) -> None:
        drawing = expand(parse_grammar("order 1\naxiom F\nF=F+F"))
        assert drawing.serialize() == "F+F"
        assert len(drawing.symbols) == 3

    def test_order_two_has_seven_symbols(self) -> None:
        drawing = expand(parse_grammar("order 2\naxiom F\nF=F+F"))
        assert drawing.serialize() == "F+F+F+F"
        assert len(drawing.symbols) == 7

    def test_order_unset_keeps_axiom(self) -> None:
        assert _expand("axiom F+F\nF=FF") == "F+F"

    def test_zero_order_keeps_axiom(self) -> None:
        assert _expand("order 0\naxiom FX\nF=F+F\nX=FF") == "FX"

    def test_symbol_without_rule_unchanged(self) -> None:
        assert _expand("order 5\naxiom F+-X\nY=F") == "F+-X"

    def test_later_rule_sees_earlier_production(self) -> None:
        assert _expand("order 1\naxiom A\nA=B\nB=C") == "C"

    def test_earlier_rule_does_not_see_later_production(self) -> None:
        assert _expand("order 1\naxiom A\nB=C\nA=B") == "B"
        assert _expand("order 2\naxiom A\nB=C\nA=B") == "C"

    def test_algae_is_order_sensitive(self) -> None:
        # B produced by A's rule is rewritten by B's rule in the same pass.
        assert _expand("order 1\naxiom A\nA=AB\nB=A") == "AA"
        assert _expand("order 2\naxiom A\nA=AB\nB=A") == "AAAA"

    def test_empty_production_erases(self) -> None:
        assert _expand("order 1\naxiom FXFX\nX=") == "FF"

    def test_parameters(self) -> None:
        drawing = expand(parse_grammar("angle 8\norder 2\nrotate -90\naxiom F"))
        assert drawing.angle == 8.0
        assert drawing.order == 2
        assert drawing.rotate == -90.0

    def test_defaults(self) -> None:
        drawing = expand(parse_grammar(""))
        assert drawing.angle == 0.0
        assert drawing.order == 0
        assert drawing.rotate == 0.0
        assert len(drawing.symbols) == 0

    def test_grammar_not_mutated(self) -> None:
        g = parse_grammar("order 3\naxiom F\nF=F[+F]F")
        expand(g)
        assert format_symbols(g.axiom) == "F"
        assert format_symbols(g.rules[FORWARD]) == "F[+F]F"

    def test_tail_consistent_after_expansion(self) -> None:
        drawing = expand(parse_grammar("order 2\naxiom +F\nF=F-F"))
        seq = drawing.symbols
        assert seq[seq.tail] == FORWARD
        seq.append(Symbol.custom("Z"))
        assert seq.remove_back() == Symbol.custom("Z")
        assert format_symbols(seq) == "+F-F-F-F"


class TestRules:
    def test_apply_rule_counts_matches(self) -> None:
        seq = Sequence(parse_symbols("FXF"))
        assert apply_rule(seq, FORWARD, parse_symbols("GG")) == 2
        assert format_symbols(seq) == "GGXGG"

    def test_each_match_gets_own_copy(self) -> None:
        seq = Sequence(parse_symbols("FF"))
        apply_rule(seq, FORWARD, parse_symbols("F+"))
        handles = list(seq.handles())
        assert len(set(handles)) == 4
        seq[handles[1]] = Symbol.custom("x")
        assert format_symbols(seq) == "FxF+"

    def test_rewrite_pass(self) -> None:
        seq = Sequence(parse_symbols("XY"))
        rules = {
            Symbol.custom("X"): parse_symbols("Y"),
            Symbol.custom("Y"): parse_symbols("F"),
        }
        rewrite_pass(seq, rules)
        assert format_symbols(seq) == "FF"

    def test_iter_passes(self) -> None:
        g = parse_grammar("order 3\naxiom F\nF=FF")
        lengths = [len(seq) for seq in iter_passes(g)]
        assert lengths == [2, 4, 8]

    def test_order_zero_result_is_independent_of_axiom(self) -> None:
        g = parse_grammar("axiom F+F\nF=FF")
        drawing = expand(g)
        drawing.symbols.remove_back()
        assert format_symbols(g.axiom) == "F+F"
        assert drawing.serialize() == "F+"

    def test_no_passes_at_order_zero(self) -> None:
        assert list(iter_passes(parse_grammar("axiom F\nF=FF"))) == []
