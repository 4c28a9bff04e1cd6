from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from .evaluator import eval_node
from .parser_rd import parse_source
from .runtime import NULL, Frame, MkValue, is_error, new_global_frame, type_name
from .tree import LetStatement, pretty
from .utils import debug_enabled, recursion_limit, render

log = logging.getLogger(__name__)

def run(src: str, frame: Frame) -> Tuple[MkValue, List[str]]:
    """
    Lex, parse and, if there were no syntax errors, evaluate `src` in
    `frame`. Top-level `let`s stay bound in `frame` for later runs.

    Returns the result value and the syntax errors; with syntax errors the
    value is null and nothing was evaluated.
    """
    program, errors = parse_source(src)

    if errors:
        log.debug("skipping evaluation: %d syntax error(s)", len(errors))
        return NULL, errors

    result = eval_node(program, frame)
    log.debug("evaluated %d statement(s) -> %s", len(program.statements), type_name(result))
    return result, []

def repl_eval(src: str, frame: Frame) -> Tuple[MkValue, List[str], bool]:
    """
    Like `run`, also reporting whether the input ended in a `let`, whose
    null result the REPL does not echo.
    """
    program, errors = parse_source(src)

    if errors:
        return NULL, errors, False

    result = eval_node(program, frame)
    is_stmt = bool(program.statements) and isinstance(program.statements[-1], LetStatement)
    return result, [], is_stmt

def _load_source(arg: Optional[str]) -> str:
    """
    Resolve CLI input into source text.
    - None or "-" => read stdin.
    - Existing path => read file contents.
    - Otherwise treat the argument as literal source.
    """

    if arg is None or arg == "-":
        data = sys.stdin.read()
        if not data:
            raise SystemExit("No input provided on stdin")
        return data

    candidate = Path(arg)
    if candidate.is_file():
        return candidate.read_text(encoding="utf-8")

    return arg

def configure_host() -> None:
    """Apply environment-driven settings for the CLI and REPL processes."""
    if debug_enabled():
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    limit = recursion_limit()
    if limit is not None:
        sys.setrecursionlimit(limit)

def main() -> None:
    show_ast = False
    arg = None

    for token in sys.argv[1:]:
        if token == "--ast":
            show_ast = True
            continue

        if token in ("-h", "--help"):
            print("usage: monkey [--ast] [PATH | - | SOURCE]")
            return

        if token.startswith("--"):
            raise SystemExit(f"Unknown option: {token}")

        if arg is None:
            arg = token
        else:
            raise SystemExit(f"Unexpected argument: {token}")

    configure_host()

    if arg is None and sys.stdin.isatty() and not show_ast:
        from .repl import repl
        repl()
        return

    source = _load_source(arg)

    if show_ast:
        program, errors = parse_source(source)
        _report_syntax_errors(errors)
        print(pretty(program), end="")
        return

    result, errors = run(source, new_global_frame())
    _report_syntax_errors(errors)

    if is_error(result):
        print(render(result), file=sys.stderr)
        raise SystemExit(1)

    print(render(result))

def _report_syntax_errors(errors: List[str]) -> None:
    if not errors:
        return

    print("parse errors:", file=sys.stderr)
    for err in errors:
        print(f"\t{err}", file=sys.stderr)
    raise SystemExit(1)

if __name__ == "__main__":
    main()
