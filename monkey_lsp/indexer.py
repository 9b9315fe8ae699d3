from __future__ import annotations

"""
Indexer for Monkey source files that never evaluates code.

The buffer is lexed and parsed with the interpreter's own reader; the parse
errors become diagnostics and the top-level `let` statements become the
document's definitions:
- `let f = fn(...) {...}`      -> function
- `let m = macro(...) {...}`   -> macro
- anything else                -> var

A parse that fails still yields every definition found before and after the
bad statement, since the parser resynchronizes at statement boundaries.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from monkey.reader.ast import LetStatement, FunctionLiteral, MacroLiteral
from monkey.reader.lexer import Lexer
from monkey.reader.parser import Parser
from monkey.reader.tokens import KEYWORDS


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function" | "macro"
    line: int
    col: int
    detail: str = ""


@dataclass
class ParseProblem:
    message: str
    line: int
    col: int


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    problems: List[ParseProblem] = field(default_factory=list)


def _kind_and_detail(stmt: LetStatement) -> tuple[str, str]:
    value = stmt.value
    if isinstance(value, (FunctionLiteral, MacroLiteral)):
        params = ", ".join(p.value for p in value.parameters)
        keyword = value.token_literal()
        kind = "function" if isinstance(value, FunctionLiteral) else "macro"
        return kind, f"{keyword}({params})"
    return "var", str(value)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    parser = Parser(Lexer(text))
    program = parser.parse_program()

    for diag in parser.diagnostics:
        idx.problems.append(ParseProblem(diag.message, diag.line, diag.column))

    for stmt in program.statements:
        if isinstance(stmt, LetStatement):
            kind, detail = _kind_and_detail(stmt)
            tok = stmt.name.token
            idx.symbols[stmt.name.value] = SymbolDef(
                name=stmt.name.value, kind=kind, line=tok.line, col=tok.column, detail=detail
            )
    return idx


# Builtin signatures for quick hover/completion without eval
BUILTIN_SIGNATURES: Dict[str, str] = {
    "len": "len(string_or_array)",
    "first": "first(array)",
    "last": "last(array)",
    "rest": "rest(array)",
    "push": "push(array, element)",
    "puts": "puts(values...)",
    "quote": "quote(expression)",
    "unquote": "unquote(expression)",
}

KEYWORD_NAMES: List[str] = sorted(KEYWORDS)
