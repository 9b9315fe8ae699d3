import pytest

from monkey.reader.parser import parse
from monkey.types.environment import Environment
from monkey.evaluation.evaluator import evaluate
from monkey.evaluation.macro_expansion import collect_macros, expand_macros


# Every test gets a fresh pair of environments; nothing leaks between tests
# because the only process-wide state is the immutable builtin table.


@pytest.fixture
def env():
    return Environment()


@pytest.fixture
def macro_env():
    return Environment()


@pytest.fixture
def run(env, macro_env):
    """Parse, expand and evaluate a unit of source, asserting it parses."""

    def _run(source: str):
        program, errors = parse(source)
        assert errors == [], f"unexpected parse errors: {errors}"
        program = collect_macros(program, macro_env)
        program = expand_macros(program, macro_env)
        return evaluate(program, env)

    return _run
