"""
Token types for the Monkey lexer.

Each TokenType's value is the canonical spelling used in parser error
messages, e.g. ``expected next token to be =, got INT instead``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """All token kinds recognized by the lexer."""

    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # --- Identifiers and literals ---
    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    # --- Operators ---
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # --- Delimiters ---
    COMMA = ","
    SEMICOLON = ";"
    COLON = ":"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"

    # --- Keywords ---
    FUNCTION = "FUNCTION"
    LET = "LET"
    TRUE = "TRUE"
    FALSE = "FALSE"
    IF = "IF"
    ELSE = "ELSE"
    RETURN = "RETURN"
    MACRO = "MACRO"

    def __str__(self) -> str:
        return self.value


KEYWORDS: dict[str, TokenType] = {
    "fn": TokenType.FUNCTION,
    "let": TokenType.LET,
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
    "return": TokenType.RETURN,
    "macro": TokenType.MACRO,
}

# Single-character operators and delimiters that need no lookahead
SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "<": TokenType.LT,
    ">": TokenType.GT,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
    "[": TokenType.LBRACKET,
    "]": TokenType.RBRACKET,
}


def lookup_ident(ident: str) -> TokenType:
    """Keywords take priority over generic identifiers."""
    return KEYWORDS.get(ident, TokenType.IDENT)


@dataclass(frozen=True)
class Token:
    """A single lexical token with its source position (0-based)."""
    type: TokenType
    literal: str
    line: int = 0
    column: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r})"
