import pytest

from monkey.errors import UnquoteConversionError, MacroExpansionError
from monkey.evaluation.special_forms.quote_forms import object_to_node
from monkey.reader.ast import IntegerLiteral, BooleanLiteral, StringLiteral
from monkey.types.objects import Quote, Integer, Boolean, String, Error, NULL


def assert_quote(obj, rendered):
    assert isinstance(obj, Quote), f"not a Quote: {obj!r}"
    assert str(obj.node) == rendered


@pytest.mark.parametrize(
    "source,expected",
    [
        ("quote(5)", "5"),
        ("quote(5 + 8)", "(5 + 8)"),
        ("quote(foobar)", "foobar"),
        ("quote(foobar + barfoo)", "(foobar + barfoo)"),
        ("quote(fn(x) { x * 2 })", "fn(x) (x * 2)"),
    ],
)
def test_quote(run, source, expected):
    assert_quote(run(source), expected)


@pytest.mark.parametrize(
    "source,expected",
    [
        ("quote(unquote(4))", "4"),
        ("quote(unquote(4 + 4))", "8"),
        ("quote(8 + unquote(4 + 4))", "(8 + 8)"),
        ("quote(unquote(4 + 4) + 8)", "(8 + 8)"),
        ("let foobar = 8; quote(foobar)", "foobar"),
        ("let foobar = 8; quote(unquote(foobar))", "8"),
        ("quote(unquote(true))", "true"),
        ("quote(unquote(true == false))", "false"),
        ("quote(unquote(quote(4 + 4)))", "(4 + 4)"),
        (
            "let quotedInfixExpression = quote(4 + 4);"
            "quote(unquote(4 + 4) + unquote(quotedInfixExpression))",
            "(8 + (4 + 4))",
        ),
        ('quote(unquote("a" + "b"))', "ab"),
        ("quote([unquote(1 + 1), unquote(2 + 2)])", "[2, 4]"),
    ],
)
def test_quote_unquote(run, source, expected):
    assert_quote(run(source), expected)


def test_quote_does_not_evaluate(run, capsys):
    assert_quote(run('quote(puts("side effect"))'), "puts(side effect)")
    assert capsys.readouterr().out == ""


def test_quote_inspect(run):
    assert run("quote(1 + 2)").inspect() == "QUOTE((1 + 2))"


def test_unquote_with_wrong_arity_is_left_alone(run):
    assert_quote(run("quote(unquote(1, 2))"), "unquote(1, 2)")


def test_quote_arity_is_an_error(run):
    result = run("quote(1, 2)")
    assert isinstance(result, Error)
    assert result.message == "wrong number of arguments to `quote`. got=2, want=1"


def test_unquoting_unconvertible_value_raises(run):
    with pytest.raises(UnquoteConversionError):
        run("quote(unquote([1, 2]))")
    assert issubclass(UnquoteConversionError, MacroExpansionError)


def test_object_to_node():
    node = object_to_node(Integer(-3))
    assert isinstance(node, IntegerLiteral) and node.value == -3 and str(node) == "-3"
    node = object_to_node(Boolean(True))
    assert isinstance(node, BooleanLiteral) and str(node) == "true"
    node = object_to_node(String("s"))
    assert isinstance(node, StringLiteral) and node.value == "s"
    with pytest.raises(UnquoteConversionError):
        object_to_node(NULL)
