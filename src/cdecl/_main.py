"""Command line entry point: read simplified C declarations and describe each one in English."""

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from typing import Optional

from .c_context import CContext
from .c_render import render


__all__ = ("main",)


def _input_path(value: str) -> str:
    if value != "-" and not os.path.isfile(value):
        msg = f"{value!r} is not a regular file"
        raise argparse.ArgumentTypeError(msg)
    return value


def _build_argparser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(
        "cdecl",
        description="Parse simplified C declarations and describe them in English.",
    )
    argparser.add_argument(
        "-i",
        "--input",
        type=_input_path,
        default="-",
        help='file to read declarations from; "-" or no value reads standard input',
    )
    argparser.add_argument("-T", "--trace", action="store_true", help="trace both the lexer and the parser")
    argparser.add_argument("--trace-lexer", action="store_true", help="log every token read")
    argparser.add_argument("--trace-parser", action="store_true", help="log every completed declarator")
    return argparser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_argparser().parse_args(argv)

    trace_lexer: bool = args.trace or args.trace_lexer
    trace_parser: bool = args.trace or args.trace_parser
    if trace_lexer or trace_parser:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.input == "-":
        ctx = CContext("<stdin>", trace_lexer=trace_lexer, trace_parser=trace_parser)
        succeeded = ctx.parse(sys.stdin.read())
    else:
        ctx = CContext(trace_lexer=trace_lexer, trace_parser=trace_parser)
        succeeded = ctx.parse_file(args.input)

    if not succeeded:
        print(f"cdecl: {ctx.last_error}", file=sys.stderr)
        return 1

    for decl in ctx.results:
        print(render(decl))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
