from __future__ import annotations

"""
Read-eval-print loop and command line entry point for Monkey.

Each unit of input is one line; a line ending in a backslash continues on
the next one. Units that fail to parse print their errors (tab-indented)
and are not evaluated. Otherwise the result's rendering is printed unless
the unit produced no value.
"""

import argparse
import logging
import sys
from contextlib import redirect_stdout
from pathlib import Path
from typing import Iterator, Optional, Sequence, TextIO

from monkey.config import get_prompt, get_recursion_limit
from monkey.errors import MonkeySyntaxError
from monkey.interpreter import Interpreter
from monkey.types.objects import is_error

log = logging.getLogger(__name__)


def read_unit(lines: Iterator[str]) -> Optional[str]:
    """Join backslash-continued lines into one unit; None at end of input."""
    parts: list[str] = []
    for line in lines:
        line = line.rstrip("\r\n")
        if not line.endswith("\\"):
            parts.append(line)
            return "".join(parts)
        parts.append(line[:-1])
    return "".join(parts) if parts else None


def print_parser_errors(out: TextIO, errors: Sequence[str]) -> None:
    out.write("Woops! We ran into some monkey business here!\n")
    out.write(" parser errors:\n")
    for msg in errors:
        out.write(f"\t{msg}\n")


def eval_unit(interp: Interpreter, code: str, out: TextIO) -> None:
    try:
        result = interp.eval(code)
    except MonkeySyntaxError as ex:
        print_parser_errors(out, ex.errors)
        return
    if result is not None:
        out.write(result.inspect())
        out.write("\n")


def start(inp: TextIO, out: TextIO, interp: Interpreter | None = None, prompt: str | None = None) -> None:
    """Run the loop until an empty unit or end of input."""
    interp = interp if interp is not None else Interpreter()
    prompt = prompt if prompt is not None else get_prompt()
    lines = iter(inp)
    while True:
        out.write(prompt)
        out.flush()
        code = read_unit(lines)
        if not code:
            return
        # `puts` prints to stdout; send it to the session stream
        with redirect_stdout(out):
            eval_unit(interp, code, out)


def run_file(interp: Interpreter, path: Path, out: TextIO) -> int:
    try:
        with redirect_stdout(out):
            result = interp.eval(path.read_text(encoding="utf-8"))
    except MonkeySyntaxError as ex:
        print_parser_errors(out, ex.errors)
        return 1
    if result is not None:
        out.write(result.inspect())
        out.write("\n")
        if is_error(result):
            return 1
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="monkey", description="The Monkey programming language")
    parser.add_argument("file", nargs="?", type=Path, help="source file to run (default: start the REPL)")
    parser.add_argument("--no-prelude", action="store_true", help="do not load the standard prelude")
    parser.add_argument("-v", "--verbose", action="store_true", help="log macro expansion and prelude loading")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    interp = Interpreter(prelude=None if args.no_prelude else "auto")
    if args.file is not None:
        return run_file(interp, args.file, sys.stdout)

    log.debug("starting REPL")
    print("Hello! This is the Monkey programming language!")
    print("Feel free to type in commands")
    start(sys.stdin, sys.stdout, interp)
    return 0


if __name__ == "__main__":
    sys.exit(main())
