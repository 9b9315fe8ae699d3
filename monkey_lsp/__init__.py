"""Monkey Language Server package.

This package provides:
- A pygls-based Language Server for the Monkey language.
- An indexer that parses documents for top-level definitions without evaluation.

Note: The LSP does not evaluate user buffers; it builds a static index from text.
"""

__all__ = [
    "server",
    "indexer",
]
