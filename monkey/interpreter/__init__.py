from __future__ import annotations

import logging
from typing import Literal, Optional

from monkey import MonkeyValue
from monkey.errors import MonkeySyntaxError
from monkey.reader.lexer import Lexer
from monkey.reader.parser import Parser
from monkey.reader.ast import Program
from monkey.types.environment import Environment
from monkey.evaluation.evaluator import evaluate
from monkey.evaluation.macro_expansion import collect_macros, expand_macros

log = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading, macro expansion and evaluation of Monkey code.
    Maintains an evaluation Environment and a separate macro Environment
    across calls, so definitions persist from one unit to the next.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        self.macro_env: Environment = Environment()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            try:
                # Lazy import to avoid circular imports
                from monkey.modules.prelude_loader import load_prelude
                load_prelude(self)
            except FileNotFoundError:
                # Be permissive: no prelude found -> proceed
                log.debug("no prelude found, continuing without one")
        elif prelude:
            self.eval_prelude(prelude)

    def parse(self, code: str) -> Program:
        parser = Parser(Lexer(code))
        program = parser.parse_program()
        if parser.errors:
            raise MonkeySyntaxError(parser.errors)
        return program

    def expand(self, program: Program) -> Program:
        program = collect_macros(program, self.macro_env)
        return expand_macros(program, self.macro_env)

    def eval_prelude(self, code: str) -> None:
        self.eval(code)

    def eval(self, code: str) -> Optional[MonkeyValue]:
        """Evaluate one unit of source text.

        Raises MonkeySyntaxError (carrying every message) when the unit does
        not parse; nothing is evaluated in that case. Runtime errors come
        back as Error values. Returns None when the unit produces no value.
        """
        program = self.expand(self.parse(code))
        return evaluate(program, self.env)
