"""
  Monkey Lexer

- Character-at-a-time scanner with a single character of lookahead
- Emits Token objects one at a time via ``next_token()``:

    - whitespace (space, tab, CR, LF) is skipped
    - ``==`` and ``!=`` are formed with one character of lookahead
    - identifiers are maximal runs of letters and underscores; keywords win
    - integers are maximal runs of digits (a leading ``-`` is a separate token)
    - strings are delimited by double quotes, no escape processing
    - anything else becomes an ILLEGAL token; lexing carries on regardless

Once the input is exhausted every further call returns EOF.
"""

from __future__ import annotations

from typing import Iterator

from monkey.reader.tokens import Token, TokenType, SINGLE_CHAR_TOKENS, lookup_ident

_NUL = ""
_WHITESPACE = " \t\n\r"


def _is_letter(ch: str) -> bool:
    return ("a" <= ch <= "z") or ("A" <= ch <= "Z") or ch == "_"


def _is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


class Lexer:
    def __init__(self, source: str):
        self.source = source
        self.position = 0        # index of ch
        self.read_position = 0   # index after ch
        self.ch = _NUL
        self.line = 0
        self.column = -1
        self._read_char()

    def _read_char(self) -> None:
        if self.ch == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1
        if self.read_position >= len(self.source):
            self.ch = _NUL
        else:
            self.ch = self.source[self.read_position]
        self.position = self.read_position
        self.read_position += 1

    def _peek_char(self) -> str:
        if self.read_position >= len(self.source):
            return _NUL
        return self.source[self.read_position]

    def _skip_whitespace(self) -> None:
        while self.ch != _NUL and self.ch in _WHITESPACE:
            self._read_char()

    def _read_while(self, predicate) -> str:
        start = self.position
        while self.ch != _NUL and predicate(self.ch):
            self._read_char()
        return self.source[start:self.position]

    def _read_string(self) -> tuple[TokenType, str]:
        """Read past the opening quote up to the closing one."""
        start = self.position + 1
        while True:
            self._read_char()
            if self.ch == '"':
                literal = self.source[start:self.position]
                self._read_char()
                return TokenType.STRING, literal
            if self.ch == _NUL:
                return TokenType.ILLEGAL, self.source[start - 1:self.position]

    def next_token(self) -> Token:
        self._skip_whitespace()
        line, column = self.line, self.column
        ch = self.ch

        if ch == _NUL:
            return Token(TokenType.EOF, "", line, column)

        if ch == "=":
            if self._peek_char() == "=":
                self._read_char()
                self._read_char()
                return Token(TokenType.EQ, "==", line, column)
            self._read_char()
            return Token(TokenType.ASSIGN, "=", line, column)

        if ch == "!":
            if self._peek_char() == "=":
                self._read_char()
                self._read_char()
                return Token(TokenType.NOT_EQ, "!=", line, column)
            self._read_char()
            return Token(TokenType.BANG, "!", line, column)

        if ch == '"':
            tok_type, literal = self._read_string()
            return Token(tok_type, literal, line, column)

        if ch in SINGLE_CHAR_TOKENS:
            self._read_char()
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, column)

        if _is_letter(ch):
            ident = self._read_while(_is_letter)
            return Token(lookup_ident(ident), ident, line, column)

        if _is_digit(ch):
            return Token(TokenType.INT, self._read_while(_is_digit), line, column)

        self._read_char()
        return Token(TokenType.ILLEGAL, ch, line, column)

    def __iter__(self) -> Iterator[Token]:
        """Iterate tokens up to and including EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type is TokenType.EOF:
                return


def lex(source: str) -> Iterator[Token]:
    """Token generator: yields Token objects, ending with EOF."""
    return iter(Lexer(source))


def tokenize(source: str) -> list[Token]:
    """Tokenize a whole unit of source text; the last token is EOF."""
    return list(lex(source))
