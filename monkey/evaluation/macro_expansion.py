"""Macro definition and expansion.

Runs once per top-level program, before evaluation, in two phases:

- ``collect_macros`` removes top-level ``let name = macro(...) {...};``
  statements from the program and binds each name to a Macro value that
  captures the *macro* environment.
- ``expand_macros`` rewrites every call whose callee names a macro: the
  arguments are wrapped in Quote values without being evaluated, bound to
  the macro's parameters, the body is evaluated, and the Quote it produces is
  spliced back in place of the call.

Both phases return new trees; the program passed in is left intact.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Optional

from monkey import SyntaxNode
from monkey.errors import MacroExpansionError
from monkey.reader.ast import (
    Program,
    Statement,
    LetStatement,
    MacroLiteral,
    CallExpression,
    Identifier,
)
from monkey.reader.rewrite import rewrite
from monkey.types.environment import Environment
from monkey.types.function import Macro
from monkey.types.objects import Quote, ReturnValue, is_error
from monkey.evaluation.evaluator import evaluate

log = logging.getLogger(__name__)


# ----------------- Definition collection -----------------
def is_macro_definition(statement: Statement) -> bool:
    return isinstance(statement, LetStatement) and isinstance(statement.value, MacroLiteral)


def add_macro(statement: LetStatement, macro_env: Environment) -> Macro:
    literal: MacroLiteral = statement.value
    macro = Macro(literal.parameters, literal.body, macro_env)
    macro_env.set(statement.name.value, macro)
    log.debug("registered macro %s(%s)", statement.name.value,
              ", ".join(p.value for p in literal.parameters))
    return macro


def collect_macros(program: Program, macro_env: Environment) -> Program:
    """Register top-level macro definitions and return the program without them."""
    kept: list[Statement] = []
    for statement in program.statements:
        if is_macro_definition(statement):
            add_macro(statement, macro_env)
            continue
        if isinstance(statement, LetStatement):
            # A plain top-level binding retires a macro of the same name
            if macro_env.store.pop(statement.name.value, None) is not None:
                log.debug("macro %s shadowed by let binding", statement.name.value)
        kept.append(statement)
    return replace(program, statements=kept)


# Older name for the definition phase
define_macros = collect_macros


# ----------------- Expansion -----------------
def macro_for_call(node: SyntaxNode, macro_env: Environment) -> Optional[Macro]:
    """The Macro a call expression invokes, if its callee names one."""
    if not isinstance(node, CallExpression) or not isinstance(node.function, Identifier):
        return None
    value, found = macro_env.get(node.function.value)
    if not found or not isinstance(value, Macro):
        return None
    return value


def expand_1(call: CallExpression, macro: Macro) -> SyntaxNode:
    """Expand a single macro call site into the syntax its macro produces."""
    name = call.function.value
    if len(call.arguments) != len(macro.parameters):
        raise MacroExpansionError(
            f"macro {name} expected {len(macro.parameters)} args, got {len(call.arguments)}"
        )

    quoted_args = [Quote(arg) for arg in call.arguments]
    eval_env = macro.extend_env(quoted_args)
    evaluated = evaluate(macro.body, eval_env)

    if isinstance(evaluated, ReturnValue):
        evaluated = evaluated.value
    if is_error(evaluated):
        raise MacroExpansionError(f"macro {name} failed: {evaluated.message}")
    if not isinstance(evaluated, Quote):
        kind = evaluated.object_type if evaluated is not None else "nothing"
        raise MacroExpansionError(
            f"macro {name} must return quoted syntax, got {kind}"
        )
    log.debug("expanded %s into %s", call, evaluated.node)
    return evaluated.node


def expand_macros(program: Program, macro_env: Environment) -> Program:
    """Rewrite every macro call site until none remain."""

    def _modifier(node: SyntaxNode) -> SyntaxNode:
        macro = macro_for_call(node, macro_env)
        if macro is None:
            return node
        # The spliced syntax may itself call macros
        return rewrite(expand_1(node, macro), _modifier)

    return rewrite(program, _modifier)
