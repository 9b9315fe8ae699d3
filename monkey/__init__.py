# Core type aliases for the Monkey interpreter.
# Syntax trees are dataclasses from monkey.reader.ast, runtime values are
# instances from monkey.types.objects. The aliases below keep signatures in
# the evaluator, special forms and built-ins readable without importing the
# concrete classes everywhere.
#
# Naming guidance:
# - SyntaxNode:    Use in reader/macro code to denote parsed syntax.
# - MonkeyValue:   Use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

SyntaxNode = Any
MonkeyValue = Any

# Evaluator function type: passed into special forms and application helpers
EvaluatorFn = Callable[..., MonkeyValue]
