"""Interactive REPL for Monkey, powered by prompt_toolkit."""

from __future__ import annotations

import re
import sys
from typing import List

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import Completer, Completion
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.shortcuts import clear

from .lexer_rd import tokenize
from .repl_highlight import MonkeyLexer
from .runner import repl_eval
from .runtime import Frame, MkNull, is_error, new_global_frame
from .token_types import TT
from .utils import render

# Zero-width and invisible characters to strip from input.
_INVISIBLE_RE = re.compile("[\u200b\u200c\u200d\ufeff\u00a0\r]")

# Slash commands: name => (description, argument_hint).
_SLASH_CMDS = {
    "/clear": ("Clear the terminal screen", ""),
    "/env": ("List bindings made this session", ""),
    "/reset": ("Reset the REPL environment", ""),
}

_DEPTH_OPEN = {TT.LPAR, TT.LSQB, TT.LBRACE}
_DEPTH_CLOSE = {TT.RPAR, TT.RSQB, TT.RBRACE}


def open_depth(text: str) -> int:
    """Number of brackets still open at the end of *text*."""
    depth = 0

    for tok in tokenize(text):
        if tok.type in _DEPTH_OPEN:
            depth += 1
        elif tok.type in _DEPTH_CLOSE:
            depth = max(depth - 1, 0)

    return depth


class _SlashCompleter(Completer):
    """Autocomplete slash commands on the primary prompt."""

    def get_completions(self, document, complete_event):
        text = document.text_before_cursor
        if not text.startswith("/"):
            return

        for cmd, (desc, hint) in _SLASH_CMDS.items():
            if cmd.startswith(text):
                yield Completion(
                    cmd,
                    start_position=-len(text),
                    display_meta=desc,
                )


def _handle_slash(line: str, frame_box: List[Frame]) -> bool:
    """Handle slash commands. Returns True if the line was a command."""
    stripped = line.strip()
    if not stripped.startswith("/"):
        return False

    cmd = stripped.split(None, 1)[0]

    if cmd == "/clear":
        clear()
        return True

    if cmd == "/env":
        for name, val in frame_box[0].user_bindings().items():
            print(f"{name} = {render(val)}")
        return True

    if cmd == "/reset":
        frame_box[0] = new_global_frame()
        print("Environment reset.")
        return True

    print(f"Unknown command: {cmd}", file=sys.stderr)
    return True


def _normalize(text: str) -> str:
    """Strip invisible characters from input."""
    return _INVISIBLE_RE.sub("", text)


def print_result(result, errors: List[str], is_stmt: bool) -> None:
    """Render one evaluation; syntax and runtime errors go to stderr."""
    if errors:
        print("parse errors:", file=sys.stderr)
        for err in errors:
            print(f"\t{err}", file=sys.stderr)
        return

    if is_error(result):
        print(render(result), file=sys.stderr)
        return

    if is_stmt and isinstance(result, MkNull):
        return

    print(render(result))


def repl() -> None:
    """Interactive read-eval-print loop with prompt_toolkit."""
    # Use a mutable box so /reset can swap the frame.
    frame_box: List[Frame] = [new_global_frame()]

    history = InMemoryHistory()
    bindings = KeyBindings()

    @bindings.add("enter")
    def _enter(event):
        buf = event.app.current_buffer

        # Keep reading lines while a bracket is open.
        if not buf.text.startswith("/") and open_depth(buf.text) > 0:
            buf.insert_text("\n" + "    " * open_depth(buf.text))
            return

        buf.validate_and_handle()

    session: PromptSession[str] = PromptSession(
        history=history,
        lexer=MonkeyLexer(),
        completer=_SlashCompleter(),
        complete_while_typing=True,
        key_bindings=bindings,
        multiline=True,
        prompt_continuation="... ",
    )

    print("monkey repl (Ctrl-D to exit, / for commands)")

    while True:
        try:
            text = session.prompt(">> ")
        except EOFError:
            print()
            break
        except KeyboardInterrupt:
            print("KeyboardInterrupt")
            continue

        text = _normalize(text)
        if not text.strip():
            continue

        # Slash command?
        if _handle_slash(text, frame_box):
            continue

        # Host faults (RecursionError) are not caught here.
        result, errors, is_stmt = repl_eval(text, frame_box[0])
        print_result(result, errors, is_stmt)
