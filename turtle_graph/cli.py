"""Command line entry point.

Run:
  python -m turtle_graph render grammar.txt drawing.ps syntax.txt
  python -m turtle_graph expand grammar.txt
  python -m turtle_graph validate grammar.txt
  python -m turtle_graph --help
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .errors import ConfigError, _require
from .grammar import Grammar, load_grammar
from .interpreter import interpret, render
from .postscript import postscript_program, resolve_base_order
from .rewriter import expand, iter_passes
from .sequence import Sequence
from .svg import SvgStyle, svg_document
from .symbols import Symbol

logger = logging.getLogger(__name__)

HELP_EPILOG = r"""
GRAMMAR SYNTAX

One directive per line; everything after ';' is a comment.

  angle <integer 0-255>
      Turns are 360/angle degrees. Unset means 0, which is only an error
      once a '+' or '-' has to be drawn.

  order <integer 0-255>
      Number of rewriting passes (default 0).

  rotate <integer>
      Image rotation in degrees (default 0).

  axiom <symbols>
      The initial word (default empty).

  <symbol>=<symbols>
      Production rule. Spaces are ignored. The first rule for a symbol
      wins; rules are applied in file order within each pass. An empty
      right-hand side erases the symbol.

A value that does not parse leaves the field unset.

SYMBOLS

  F   draw forward 100 units        G   move forward 100 units
  +   turn by +360/angle degrees    -   turn by -360/angle degrees
  [   save position/heading/colour  ]   restore the last saved state
  C<d>  set pen colour, d = 0 black, 1 red, 2 dark blue, 3 green,
        4 brown, 5 dark green, 6 white

Any other character is carried through unchanged and draws nothing.

Example (Koch curve):

  angle 6
  order 3
  axiom F
  F=F+F--F+F

ENVIRONMENT

  BASE_ORDER   integer divisor applied to the /order line of PostScript
               output when --base-order is not given (default 1).
"""

_VALIDATE_SYMBOL_LIMIT = 100_000


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="turtle-graph",
        description="L-system expander and turtle-graphics renderer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug).",
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser(
        "render",
        help="Expand a grammar and write the drawing and the symbol string.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pr.add_argument("grammar", help="Path to the grammar file.")
    pr.add_argument("output", help="Path to write the drawing to.")
    pr.add_argument("syntax", help="Path to write the expanded symbol string to.")
    pr.add_argument(
        "--format",
        choices=["ps", "svg"],
        default="ps",
        help="Drawing format (default: ps).",
    )
    pr.add_argument(
        "--base-order",
        type=int,
        default=None,
        help="Divisor for the PostScript /order line (default: $BASE_ORDER or 1).",
    )
    svg = pr.add_argument_group("svg options")
    svg.add_argument("--margin", type=float, default=10.0)
    svg.add_argument("--precision", type=int, default=2)
    svg.add_argument(
        "--no-flip-y",
        dest="flip_y",
        action="store_false",
        help="Keep SVG's downward y axis instead of flipping it.",
    )
    svg.add_argument("--background", default=None)
    svg.add_argument("--stroke-width", type=float, default=1.0)

    pe = sub.add_parser(
        "expand",
        help="Print the expanded symbol string.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pe.add_argument("grammar", help="Path to the grammar file.")

    pv = sub.add_parser(
        "validate",
        help="Check a grammar and print a brief summary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pv.add_argument("grammar", help="Path to the grammar file.")

    return p


# -------------------------
# Commands
# -------------------------


def _write_text(path: str, text: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)


def cmd_render(args: argparse.Namespace) -> None:
    if args.format == "svg":
        _require(0 <= args.precision <= 10, "--precision must be between 0 and 10")
    base_order = resolve_base_order(args.base_order)

    grammar = load_grammar(args.grammar)
    drawing = expand(grammar)
    lines, syntax = render(drawing)

    # Build the drawing before touching either output file.
    if args.format == "svg":
        document = svg_document(
            lines,
            margin=args.margin,
            precision=args.precision,
            flip_y=args.flip_y,
            rotate=drawing.rotate,
            style=SvgStyle(stroke_width=args.stroke_width),
            background=args.background,
            title=os.path.basename(args.grammar),
        )
    else:
        document = postscript_program(drawing, lines, base_order=base_order)

    _write_text(args.syntax, syntax)
    logger.info("wrote %d symbols to %s", len(drawing.symbols), args.syntax)
    _write_text(args.output, document)
    logger.info("wrote %d lines to %s", len(lines), args.output)


def cmd_expand(args: argparse.Namespace) -> None:
    drawing = expand(load_grammar(args.grammar))
    print(drawing.serialize())


def _bounded_expand(grammar: Grammar) -> tuple[Sequence[Symbol], int]:
    """Expand pass by pass, stopping once the limit is exceeded."""
    seq: Sequence[Symbol] | None = None
    passes = 0
    for seq in iter_passes(grammar):
        passes += 1
        if len(seq) > _VALIDATE_SYMBOL_LIMIT:
            break
    if seq is None:
        seq = Sequence(grammar.axiom)
    return seq, passes


def cmd_validate(args: argparse.Namespace) -> None:
    grammar = load_grammar(args.grammar)

    print(grammar.describe())
    print(f"axiom length: {len(grammar.axiom)}")
    print(f"rules: {len(grammar.rules)}")

    seq, passes = _bounded_expand(grammar)
    order = grammar.order or 0
    lines = interpret(seq, float(grammar.angle or 0))
    print(f"passes: {passes}/{order}")
    print(f"symbols: {len(seq)}")
    print(f"lines: {len(lines)}")
    if passes < order:
        print(
            f"warning: expansion exceeds {_VALIDATE_SYMBOL_LIMIT} symbols after "
            f"{passes} passes; stopped early"
        )


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.cmd == "render":
            cmd_render(args)
        elif args.cmd == "expand":
            cmd_expand(args)
        elif args.cmd == "validate":
            cmd_validate(args)
        else:
            raise AssertionError("unreachable")
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0
