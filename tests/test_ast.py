from monkey.reader.ast import (
    Program,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    Identifier,
    IntegerLiteral,
    InfixExpression,
    CallExpression,
    is_quote_call,
    is_unquote_call,
)
from monkey.reader.parser import parse
from monkey.reader.rewrite import rewrite
from monkey.reader.tokens import Token, TokenType


def ident(name):
    return Identifier(Token(TokenType.IDENT, name), name)


def integer(value):
    return IntegerLiteral(Token(TokenType.INT, str(value)), value)


def parsed(source):
    program, errors = parse(source)
    assert errors == []
    return program


def test_hand_built_program_rendering():
    program = Program(statements=[
        LetStatement(Token(TokenType.LET, "let"), ident("myVar"), ident("anotherVar")),
    ])
    assert str(program) == "let myVar = anotherVar;"
    assert program.token_literal() == "let"


def test_empty_program():
    program = Program(statements=[])
    assert str(program) == ""
    assert program.token_literal() == ""


def test_return_and_expression_statements():
    ret = ReturnStatement(Token(TokenType.RETURN, "return"), integer(5))
    stmt = ExpressionStatement(Token(TokenType.INT, "1"), integer(1))
    assert str(ret) == "return 5;"
    assert str(stmt) == "1"


def test_quote_and_unquote_detection():
    quote_call = CallExpression(Token(TokenType.LPAREN, "("), ident("quote"), [integer(1)])
    unquote_call = CallExpression(Token(TokenType.LPAREN, "("), ident("unquote"), [integer(1)])
    assert is_quote_call(quote_call) and not is_unquote_call(quote_call)
    assert is_unquote_call(unquote_call) and not is_quote_call(unquote_call)
    assert not is_quote_call(ident("quote"))


# -----------------------------------------------------
# rewrite
# -----------------------------------------------------

def _one_to_two(node):
    if isinstance(node, IntegerLiteral) and node.value == 1:
        return integer(2)
    return node


def test_rewrite_replaces_leaf():
    assert rewrite(integer(1), _one_to_two) == integer(2)


def test_rewrite_reaches_every_position():
    sources = {
        "1 + 1": "(2 + 2)",
        "-1": "(-2)",
        "a[1]": "(a[2])",
        "if (1) { 1 } else { 1 }": "if2 2else 2",
        "fn(x) { 1 }": "fn(x) 2",
        "macro(x) { 1 }": "macro(x) 2",
        "f(1, 1)": "f(2, 2)",
        "[1, 1]": "[2, 2]",
        "{1: 1}": "{2:2}",
        "let x = 1;": "let x = 2;",
        "return 1;": "return 2;",
    }
    for source, expected in sources.items():
        assert str(rewrite(parsed(source), _one_to_two)) == expected, source


def test_rewrite_does_not_mutate_input():
    program = parsed("1 + 1")
    rewrite(program, _one_to_two)
    assert str(program) == "(1 + 1)"


def test_rewrite_is_post_order():
    seen = []

    def record(node):
        seen.append(str(node))
        return node

    rewrite(parsed("1 + 2").statements[0].expression, record)
    assert seen == ["1", "2", "(1 + 2)"]


def test_rewrite_sees_rebuilt_children():
    def fold(node):
        if isinstance(node, InfixExpression) and node.operator == "+" \
                and isinstance(node.left, IntegerLiteral) and isinstance(node.right, IntegerLiteral):
            return integer(node.left.value + node.right.value)
        return node

    assert str(rewrite(parsed("(1 + 1) + (1 + 1)"), fold)) == "4"
