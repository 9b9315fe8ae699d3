import pytest

from lsprotocol.types import CompletionItemKind, DiagnosticSeverity, SymbolKind

from monkey_lsp.indexer import build_index, BUILTIN_SIGNATURES, KEYWORD_NAMES
from monkey_lsp.server import (
    diagnostics_for,
    hover_text,
    completion_items,
    document_symbols,
    extract_word_at,
)

SOURCE = """let add = fn(a, b) { a + b };
let twice = macro(x) { quote(unquote(x) * 2) };
let total = add(1, 2);
"""


@pytest.fixture
def idx():
    return build_index(SOURCE)


def test_index_top_level_definitions(idx):
    assert set(idx.symbols) == {"add", "twice", "total"}
    add = idx.symbols["add"]
    assert (add.kind, add.detail, add.line, add.col) == ("function", "fn(a, b)", 0, 4)
    twice = idx.symbols["twice"]
    assert (twice.kind, twice.detail, twice.line) == ("macro", "macro(x)", 1)
    total = idx.symbols["total"]
    assert (total.kind, total.detail) == ("var", "add(1, 2)")
    assert idx.problems == []


def test_index_ignores_nested_lets():
    idx = build_index("let f = fn() { let inner = 1; inner };")
    assert set(idx.symbols) == {"f"}


def test_index_reports_problems_and_keeps_good_definitions():
    idx = build_index("let = 1;\nlet ok = 2;")
    assert [(p.message, p.line, p.col) for p in idx.problems] == [
        ("expected next token to be IDENT, got = instead", 0, 4),
    ]
    assert set(idx.symbols) == {"ok"}


def test_diagnostics_for():
    [diag] = diagnostics_for(build_index("let x = @;"))
    assert diag.message == "no prefix parse function for ILLEGAL found"
    assert diag.severity == DiagnosticSeverity.Error
    assert (diag.range.start.line, diag.range.start.character) == (0, 8)
    assert diag.range.end.character == 9
    assert diag.source == "monkey-ls"


def test_hover_text(idx):
    assert hover_text(idx, "add") == "add: function fn(a, b) (defined at 1:5)"
    assert hover_text(idx, "len") == BUILTIN_SIGNATURES["len"]
    assert hover_text(idx, "nothing") is None


def test_completion_items(idx):
    items = {item.label: item for item in completion_items(idx)}
    for keyword in KEYWORD_NAMES:
        assert items[keyword].kind == CompletionItemKind.Keyword
    assert items["push"].kind == CompletionItemKind.Function
    assert items["add"].kind == CompletionItemKind.Function
    assert items["total"].kind == CompletionItemKind.Variable


def test_document_symbols(idx):
    symbols = {s.name: s for s in document_symbols(idx)}
    assert symbols["add"].kind == SymbolKind.Function
    assert symbols["total"].kind == SymbolKind.Variable
    rng = symbols["twice"].range
    assert (rng.start.line, rng.start.character, rng.end.character) == (1, 4, 9)


@pytest.mark.parametrize(
    "line,char,expected",
    [
        (0, 5, "add"),
        (0, 4, "add"),
        (0, 7, "add"),
        (2, 12, "add"),
        (0, 3, "let"),
        (0, 8, None),
        (9, 0, None),
    ],
)
def test_extract_word_at(line, char, expected):
    assert extract_word_at(SOURCE, line, char) == expected


def test_keyword_names_are_sorted():
    assert KEYWORD_NAMES == sorted(KEYWORD_NAMES)
    assert "macro" in KEYWORD_NAMES
