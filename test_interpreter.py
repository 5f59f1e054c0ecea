#!/usr/bin/env python3
import pytest

from turtle_graph.errors import ConfigError
from turtle_graph.grammar import parse_grammar
from turtle_graph.interpreter import STEP, Line, interpret, render, serialize
from turtle_graph.rewriter import expand
from turtle_graph.symbols import Color, parse_symbols


def _lines(text: str, angle: float = 0.0) -> list[Line]:
    return interpret(parse_symbols(text), angle)


def _assert_point(p: tuple[float, float], x: float, y: float) -> None:
    assert p[0] == pytest.approx(x, abs=1e-9)
    assert p[1] == pytest.approx(y, abs=1e-9)


class TestMovement:
    def test_single_forward(self) -> None:
        lines = _lines("F")
        assert lines == [Line((0.0, 0.0), (100.0, 0.0), Color.BLACK)]
        assert STEP == 100.0

    def test_move_draws_nothing(self) -> None:
        lines = _lines("GF")
        assert len(lines) == 1
        _assert_point(lines[0].start, 100, 0)
        _assert_point(lines[0].end, 200, 0)

    def test_turn_positive(self) -> None:
        lines = _lines("+F", angle=4)
        _assert_point(lines[0].end, 0, 100)

    def test_turn_negative(self) -> None:
        lines = _lines("-F", angle=4)
        _assert_point(lines[0].end, 0, -100)

    def test_turns_accumulate(self) -> None:
        lines = _lines("++++F", angle=8)
        _assert_point(lines[0].end, -100, 0)

    def test_custom_symbols_ignored(self) -> None:
        assert len(_lines("XYZF")) == 1


class TestStateStack:
    def test_branch(self) -> None:
        lines = _lines("F[+F]F", angle=4)
        assert len(lines) == 3
        _assert_point(lines[1].start, 100, 0)
        _assert_point(lines[1].end, 100, 100)
        _assert_point(lines[2].start, 100, 0)
        _assert_point(lines[2].end, 200, 0)

    def test_heading_restored(self) -> None:
        lines = _lines("[+]F", angle=4)
        _assert_point(lines[0].end, 100, 0)

    def test_nested_branches(self) -> None:
        lines = _lines("[F[+F]F]F", angle=4)
        assert len(lines) == 4
        _assert_point(lines[2].start, 100, 0)
        _assert_point(lines[2].end, 200, 0)
        _assert_point(lines[3].start, 0, 0)

    def test_pop_on_empty_stack_is_noop(self) -> None:
        lines = _lines("]]F")
        assert len(lines) == 1
        _assert_point(lines[0].start, 0, 0)

    def test_unmatched_push(self) -> None:
        assert len(_lines("[F[F")) == 2

    def test_color_restored_on_pop(self) -> None:
        lines = _lines("[C1F]F")
        assert [ln.color for ln in lines] == [Color.RED, Color.BLACK]


class TestColor:
    def test_palette_digit(self) -> None:
        lines = _lines("C3F")
        assert len(lines) == 1
        assert lines[0].color is Color.GREEN

    def test_digit_consumed_next_symbol_interpreted(self) -> None:
        lines = _lines("C3FC4F")
        assert [ln.color for ln in lines] == [Color.GREEN, Color.BROWN]

    def test_out_of_range_digit_ignored(self) -> None:
        lines = _lines("C9F")
        assert lines[0].color is Color.BLACK

    def test_lookahead_consumed_even_if_not_digit(self) -> None:
        # The F after C is swallowed, and so is the + (no angle error).
        assert _lines("CF") == []
        lines = _lines("C+F")
        assert len(lines) == 1
        _assert_point(lines[0].end, 100, 0)

    def test_trailing_color_switch(self) -> None:
        assert len(_lines("FC")) == 1


class TestAngleZero:
    def test_turn_with_zero_angle_raises(self) -> None:
        with pytest.raises(ConfigError):
            _lines("F+F")

    def test_no_turn_with_zero_angle_is_fine(self) -> None:
        assert len(_lines("F[G]F")) == 2


class TestRender:
    def test_render_returns_lines_and_string(self) -> None:
        drawing = expand(parse_grammar("angle 4\norder 1\naxiom F\nF=F+F"))
        lines, text = render(drawing)
        assert text == "F+F"
        assert len(lines) == 2
        _assert_point(lines[1].end, 100, 100)

    def test_serialize(self) -> None:
        assert serialize(parse_symbols("F[+X]C3")) == "F[+X]C3"
