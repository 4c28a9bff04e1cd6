"""
Lexer for Monkey

Turns source text into a lazy stream of tokens.

Features:
- Pull-based: `next_token()` produces one token per call
- Position tracking (line, column)
- `//` line comments, skipped unless the caller asks for them
- Unknown characters become ILLEGAL tokens instead of aborting
"""

from typing import Iterator, List

from .token_types import TT, Tok

# ============================================================================
# Lexer Implementation
# ============================================================================

ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '"': '"',
    '\\': '\\',
}


def is_ident_start(ch: str) -> bool:
    return ch.isascii() and (ch.isalpha() or ch == '_')


def is_ident_char(ch: str) -> bool:
    return ch.isascii() and (ch.isalnum() or ch == '_')


def is_digit(ch: str) -> bool:
    return ch.isascii() and ch.isdigit()


class Lexer:
    """
    Monkey lexer.

    Keeps only the input buffer and the current offset, so the same source
    always yields the same token sequence. Once the input is exhausted every
    further call returns EOF.
    """

    # Keyword mapping
    KEYWORDS = {
        'fn': TT.FN,
        'let': TT.LET,
        'if': TT.IF,
        'else': TT.ELSE,
        'return': TT.RETURN,
        'true': TT.TRUE,
        'false': TT.FALSE,
    }

    # Operator mapping: two-character operators first
    OPERATORS = [
        ('==', TT.EQ),
        ('!=', TT.NEQ),

        ('=', TT.ASSIGN),
        ('+', TT.PLUS),
        ('-', TT.MINUS),
        ('!', TT.NEG),
        ('*', TT.STAR),
        ('/', TT.SLASH),
        ('<', TT.LT),
        ('>', TT.GT),
        (',', TT.COMMA),
        (':', TT.COLON),
        (';', TT.SEMI),
        ('(', TT.LPAR),
        (')', TT.RPAR),
        ('{', TT.LBRACE),
        ('}', TT.RBRACE),
        ('[', TT.LSQB),
        (']', TT.RSQB),
    ]

    def __init__(self, source: str, emit_comments: bool = False):
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.emit_comments = emit_comments

    # ========================================================================
    # Main Tokenization
    # ========================================================================

    def next_token(self) -> Tok:
        """Scan and return the next token"""
        while True:
            self.skip_whitespace()

            if self.peek() == '/' and self.peek(1) == '/':
                line, column = self.line, self.column
                text = self.skip_comment()
                if self.emit_comments:
                    return Tok(TT.COMMENT, text, line, column)
                continue

            break

        line, column = self.line, self.column

        if self.pos >= len(self.source):
            return Tok(TT.EOF, '', line, column)

        ch = self.peek()

        if ch == '"':
            return self.scan_string(line, column)

        if is_digit(ch):
            return self.scan_number(line, column)

        if is_ident_start(ch):
            return self.scan_identifier(line, column)

        return self.scan_operator(line, column)

    def tokenize(self) -> List[Tok]:
        """Tokenize the remaining source, EOF token included"""
        return list(self)

    def __iter__(self) -> Iterator[Tok]:
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == TT.EOF:
                return

    # ========================================================================
    # Token Scanners
    # ========================================================================

    def scan_string(self, line: int, column: int) -> Tok:
        """Scan string literal: "..." """
        start = self.pos
        self.advance()  # opening quote
        value = ''

        while self.pos < len(self.source) and self.peek() != '"':
            if self.peek() == '\\' and self.pos + 1 < len(self.source):
                self.advance()
                esc = self.advance()
                value += ESCAPES.get(esc, '\\' + esc)
            else:
                value += self.advance()

        if self.pos >= len(self.source):
            # Unterminated: hand the raw text to the parser as ILLEGAL
            return Tok(TT.ILLEGAL, self.source[start:], line, column)

        self.advance()  # closing quote
        return Tok(TT.STRING, value, line, column)

    def scan_number(self, line: int, column: int) -> Tok:
        """Scan integer literal"""
        value = ''

        while is_digit(self.peek()):
            value += self.advance()

        return Tok(TT.INT, value, line, column)

    def scan_identifier(self, line: int, column: int) -> Tok:
        """Scan identifier or keyword"""
        value = ''

        while is_ident_char(self.peek()):
            value += self.advance()

        token_type = self.KEYWORDS.get(value, TT.IDENT)
        return Tok(token_type, value, line, column)

    def scan_operator(self, line: int, column: int) -> Tok:
        """Scan operators and punctuation"""
        for op_str, op_type in self.OPERATORS:
            if self.source.startswith(op_str, self.pos):
                self.advance(len(op_str))
                return Tok(op_type, op_str, line, column)

        return Tok(TT.ILLEGAL, self.advance(), line, column)

    # ========================================================================
    # Utilities
    # ========================================================================

    def peek(self, offset: int = 0) -> str:
        """Look ahead at character"""
        idx = self.pos + offset
        if idx < len(self.source):
            return self.source[idx]
        return '\0'

    def advance(self, n: int = 1) -> str:
        """Consume n characters and return them as a string"""
        result = ''
        for _ in range(n):
            if self.pos >= len(self.source):
                break
            ch = self.source[self.pos]
            result += ch
            self.pos += 1
            if ch == '\n':
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        return result

    def skip_whitespace(self) -> None:
        while self.pos < len(self.source) and self.peek() in ' \t\r\n':
            self.advance()

    def skip_comment(self) -> str:
        """Skip comment until end of line, returning its text"""
        text = ''
        while self.pos < len(self.source) and self.peek() not in ('\n', '\r'):
            text += self.advance()
        return text


def tokenize(source: str, emit_comments: bool = False) -> List[Tok]:
    """Convenience function to tokenize source"""
    return Lexer(source, emit_comments=emit_comments).tokenize()
