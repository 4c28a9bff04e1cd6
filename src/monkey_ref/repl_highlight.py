"""prompt_toolkit lexer for live Monkey syntax highlighting in the REPL."""

from __future__ import annotations

from typing import Callable

from prompt_toolkit.document import Document
from prompt_toolkit.formatted_text import StyleAndTextTuples
from prompt_toolkit.lexers import Lexer

from .lexer_rd import Lexer as MkLexer
from .token_types import TT, Tok

# Map highlight groups → prompt_toolkit style strings.
GROUP_STYLE = {
    "keyword": "bold ansicyan",
    "boolean": "ansicyan",
    "number": "ansimagenta",
    "string": "ansigreen",
    "identifier": "",
    "function": "bold ansiyellow",
    "operator": "",
    "punctuation": "",
    "comment": "italic ansigray",
    "error": "bold ansired",
}

_TT_GROUP = {
    TT.FN: "keyword",
    TT.LET: "keyword",
    TT.IF: "keyword",
    TT.ELSE: "keyword",
    TT.RETURN: "keyword",
    TT.TRUE: "boolean",
    TT.FALSE: "boolean",
    TT.INT: "number",
    TT.STRING: "string",
    TT.IDENT: "identifier",
    TT.PLUS: "operator",
    TT.MINUS: "operator",
    TT.STAR: "operator",
    TT.SLASH: "operator",
    TT.NEG: "operator",
    TT.LT: "operator",
    TT.GT: "operator",
    TT.EQ: "operator",
    TT.NEQ: "operator",
    TT.ASSIGN: "operator",
    TT.LPAR: "punctuation",
    TT.RPAR: "punctuation",
    TT.LSQB: "punctuation",
    TT.RSQB: "punctuation",
    TT.LBRACE: "punctuation",
    TT.RBRACE: "punctuation",
    TT.COMMA: "punctuation",
    TT.COLON: "punctuation",
    TT.SEMI: "punctuation",
    TT.COMMENT: "comment",
    TT.ILLEGAL: "error",
}


def _source_span(text: str, tok: Tok) -> tuple[int, int]:
    """Offsets of a single-line token, from its 1-based column."""
    start = tok.column - 1

    if tok.type == TT.STRING:
        # value is unescaped; find the closing quote in the source instead
        end = start + 1
        while end < len(text):
            if text[end] == '\\':
                end += 2
                continue
            if text[end] == '"':
                return start, end + 1
            end += 1
        return start, len(text)

    return start, start + len(tok.value)


def highlight_line(text: str) -> StyleAndTextTuples:
    """Tokenize a single line and return styled fragments."""
    if not text:
        return [("", "")]

    result: StyleAndTextTuples = []
    pos = 0

    for tok in MkLexer(text, emit_comments=True):
        if tok.type == TT.EOF:
            break

        start, end = _source_span(text, tok)

        # Unstyled gap before token.
        if start > pos:
            result.append(("", text[pos:start]))

        group = _TT_GROUP.get(tok.type, "")
        if tok.type == TT.IDENT and text[end:].lstrip().startswith("("):
            group = "function"

        result.append((GROUP_STYLE.get(group, ""), text[start:end]))
        pos = end

    # Trailing unstyled text.
    if pos < len(text):
        result.append(("", text[pos:]))

    return result if result else [("", text)]


class MonkeyLexer(Lexer):
    """prompt_toolkit Lexer that highlights Monkey source using the RD lexer."""

    def lex_document(self, document: Document) -> Callable[[int], StyleAndTextTuples]:
        lines = document.lines

        # Pre-compute highlights per line on first request.
        cache: dict[int, StyleAndTextTuples] = {}

        def get_line(lineno: int) -> StyleAndTextTuples:
            if lineno not in cache:
                if lineno < len(lines):
                    cache[lineno] = highlight_line(lines[lineno])
                else:
                    cache[lineno] = [("", "")]

            return cache[lineno]

        return get_line
