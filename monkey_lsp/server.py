from __future__ import annotations

"""
A minimal pygls-based Language Server for Monkey.

Features:
- Initialize/Shutdown/Exit
- Text synchronization and document store
- Diagnostics: parser errors at the offending token
- Hover: builtin signatures and top-level definitions
- Completion: keywords, builtins, top-level definitions
- Document Symbols: from indexer

Note: We avoid evaluating the buffer. We build a static index per document.
"""

from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    DidOpenTextDocumentParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    Position,
    Range,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionParams,
    DocumentSymbol,
    DocumentSymbolParams,
    SymbolKind,
)

from monkey_lsp.indexer import build_index, BUILTIN_SIGNATURES, KEYWORD_NAMES, DocumentIndex

_SYMBOL_KINDS = {
    "function": SymbolKind.Function,
    "macro": SymbolKind.Operator,
    "var": SymbolKind.Variable,
}


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class MonkeyLanguageServer(LanguageServer):
    CMD_NAME = "monkey-ls"
    VERSION = "0.1.0"

    def __init__(self):
        super().__init__(self.CMD_NAME, self.VERSION)
        self.documents: Dict[str, DocumentState] = {}


ls = MonkeyLanguageServer()


# --- Text sync ---
def _update(uri: str, text: str) -> None:
    idx = build_index(text)
    ls.documents[uri] = DocumentState(text=text, index=idx)
    ls.publish_diagnostics(uri, diagnostics_for(idx))


@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    _update(params.text_document.uri, params.text_document.text or "")


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        text = params.content_changes[-1].text
    else:
        state = ls.documents.get(uri)
        text = state.text if state else ""
    _update(uri, text)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    if uri in ls.documents:
        del ls.documents[uri]
    ls.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def diagnostics_for(idx: DocumentIndex) -> List[Diagnostic]:
    return [
        Diagnostic(
            range=_mk_range(p.line, p.col),
            message=p.message,
            severity=DiagnosticSeverity.Error,
            source="monkey-ls",
        )
        for p in idx.problems
    ]


# --- Hover ---
def hover_text(idx: DocumentIndex, word: str) -> Optional[str]:
    if word in idx.symbols:
        sdef = idx.symbols[word]
        return f"{word}: {sdef.kind} {sdef.detail} (defined at {sdef.line+1}:{sdef.col+1})"
    if word in BUILTIN_SIGNATURES:
        return BUILTIN_SIGNATURES[word]
    return None


@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None

    word = extract_word_at(state.text, params.position.line, params.position.character)
    if not word:
        return None
    contents = hover_text(state.index, word)
    if contents is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
def completion_items(idx: DocumentIndex) -> List[CompletionItem]:
    items: List[CompletionItem] = []
    for name in KEYWORD_NAMES:
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Keyword))
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    for name, sdef in idx.symbols.items():
        kind = CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable
        items.append(CompletionItem(label=name, kind=kind, detail=sdef.detail))
    return items


@ls.feature(TEXT_DOCUMENT_COMPLETION)
def on_completion(params: CompletionParams) -> CompletionList:
    state = ls.documents.get(params.text_document.uri)
    items = completion_items(state.index) if state else []
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    symbols: List[DocumentSymbol] = []
    for name, sdef in idx.symbols.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(
                name=name,
                detail=sdef.detail,
                kind=_SYMBOL_KINDS.get(sdef.kind, SymbolKind.Variable),
                range=rng,
                selection_range=rng,
            )
        )
    return symbols


@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = ls.documents.get(params.text_document.uri)
    if not state:
        return None
    return document_symbols(state.index)


# --- Helpers ---
def extract_word_at(text: str, line_no: int, character: int) -> Optional[str]:
    lines = text.splitlines(True)
    if line_no >= len(lines):
        return None
    line = lines[line_no]
    # expand to identifier boundaries (letters and underscores)
    start = character
    while start > 0 and (line[start - 1].isalpha() or line[start - 1] == "_"):
        start -= 1
    end = character
    while end < len(line) and (line[end].isalpha() or line[end] == "_"):
        end += 1
    word = line[start:end]
    return word if word else None


def main() -> None:
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
