import pytest
from hypothesis import given, strategies as st

from monkey.reader.lexer import Lexer, tokenize
from monkey.reader.tokens import TokenType


def _types(source):
    return [(t.type, t.literal) for t in tokenize(source)]


def test_next_token_full_program():
    source = """let five = 5;
let ten = 10;

let add = fn(x, y) {
  x + y;
};

let result = add(five, ten);
!-/*5;
5 < 10 > 5;

if (5 < 10) {
    return true;
} else {
    return false;
}

10 == 10;
10 != 9;
"foobar"
"foo bar"
[1, 2];
{"foo": "bar"}
macro(x, y) { x + y; };
"""
    expected = [
        (TokenType.LET, "let"), (TokenType.IDENT, "five"), (TokenType.ASSIGN, "="),
        (TokenType.INT, "5"), (TokenType.SEMICOLON, ";"),
        (TokenType.LET, "let"), (TokenType.IDENT, "ten"), (TokenType.ASSIGN, "="),
        (TokenType.INT, "10"), (TokenType.SEMICOLON, ";"),
        (TokenType.LET, "let"), (TokenType.IDENT, "add"), (TokenType.ASSIGN, "="),
        (TokenType.FUNCTION, "fn"), (TokenType.LPAREN, "("), (TokenType.IDENT, "x"),
        (TokenType.COMMA, ","), (TokenType.IDENT, "y"), (TokenType.RPAREN, ")"),
        (TokenType.LBRACE, "{"), (TokenType.IDENT, "x"), (TokenType.PLUS, "+"),
        (TokenType.IDENT, "y"), (TokenType.SEMICOLON, ";"), (TokenType.RBRACE, "}"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.LET, "let"), (TokenType.IDENT, "result"), (TokenType.ASSIGN, "="),
        (TokenType.IDENT, "add"), (TokenType.LPAREN, "("), (TokenType.IDENT, "five"),
        (TokenType.COMMA, ","), (TokenType.IDENT, "ten"), (TokenType.RPAREN, ")"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.BANG, "!"), (TokenType.MINUS, "-"), (TokenType.SLASH, "/"),
        (TokenType.ASTERISK, "*"), (TokenType.INT, "5"), (TokenType.SEMICOLON, ";"),
        (TokenType.INT, "5"), (TokenType.LT, "<"), (TokenType.INT, "10"),
        (TokenType.GT, ">"), (TokenType.INT, "5"), (TokenType.SEMICOLON, ";"),
        (TokenType.IF, "if"), (TokenType.LPAREN, "("), (TokenType.INT, "5"),
        (TokenType.LT, "<"), (TokenType.INT, "10"), (TokenType.RPAREN, ")"),
        (TokenType.LBRACE, "{"), (TokenType.RETURN, "return"), (TokenType.TRUE, "true"),
        (TokenType.SEMICOLON, ";"), (TokenType.RBRACE, "}"), (TokenType.ELSE, "else"),
        (TokenType.LBRACE, "{"), (TokenType.RETURN, "return"), (TokenType.FALSE, "false"),
        (TokenType.SEMICOLON, ";"), (TokenType.RBRACE, "}"),
        (TokenType.INT, "10"), (TokenType.EQ, "=="), (TokenType.INT, "10"), (TokenType.SEMICOLON, ";"),
        (TokenType.INT, "10"), (TokenType.NOT_EQ, "!="), (TokenType.INT, "9"), (TokenType.SEMICOLON, ";"),
        (TokenType.STRING, "foobar"),
        (TokenType.STRING, "foo bar"),
        (TokenType.LBRACKET, "["), (TokenType.INT, "1"), (TokenType.COMMA, ","),
        (TokenType.INT, "2"), (TokenType.RBRACKET, "]"), (TokenType.SEMICOLON, ";"),
        (TokenType.LBRACE, "{"), (TokenType.STRING, "foo"), (TokenType.COLON, ":"),
        (TokenType.STRING, "bar"), (TokenType.RBRACE, "}"),
        (TokenType.MACRO, "macro"), (TokenType.LPAREN, "("), (TokenType.IDENT, "x"),
        (TokenType.COMMA, ","), (TokenType.IDENT, "y"), (TokenType.RPAREN, ")"),
        (TokenType.LBRACE, "{"), (TokenType.IDENT, "x"), (TokenType.PLUS, "+"),
        (TokenType.IDENT, "y"), (TokenType.SEMICOLON, ";"), (TokenType.RBRACE, "}"),
        (TokenType.SEMICOLON, ";"),
        (TokenType.EOF, ""),
    ]
    assert _types(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("foo_bar", [(TokenType.IDENT, "foo_bar")]),
        ("letter", [(TokenType.IDENT, "letter")]),
        ("fnx", [(TokenType.IDENT, "fnx")]),
        ("-5", [(TokenType.MINUS, "-"), (TokenType.INT, "5")]),
        ("x1", [(TokenType.IDENT, "x"), (TokenType.INT, "1")]),
        ("a==b", [(TokenType.IDENT, "a"), (TokenType.EQ, "=="), (TokenType.IDENT, "b")]),
        ("!!", [(TokenType.BANG, "!"), (TokenType.BANG, "!")]),
        ("= =", [(TokenType.ASSIGN, "="), (TokenType.ASSIGN, "=")]),
        ('""', [(TokenType.STRING, "")]),
        ('"a\\nb"', [(TokenType.STRING, "a\\nb")]),
    ],
)
def test_maximal_munch_and_operators(source, expected):
    assert _types(source)[:-1] == expected


def test_illegal_characters_do_not_stop_lexing():
    assert _types("1 @ 2 $") == [
        (TokenType.INT, "1"),
        (TokenType.ILLEGAL, "@"),
        (TokenType.INT, "2"),
        (TokenType.ILLEGAL, "$"),
        (TokenType.EOF, ""),
    ]


def test_unterminated_string_is_illegal():
    tokens = tokenize('let s = "abc')
    assert tokens[-2].type is TokenType.ILLEGAL
    assert tokens[-2].literal == '"abc'
    assert tokens[-1].type is TokenType.EOF


def test_eof_is_idempotent():
    lexer = Lexer("x")
    assert lexer.next_token().type is TokenType.IDENT
    for _ in range(3):
        tok = lexer.next_token()
        assert tok.type is TokenType.EOF
        assert tok.literal == ""


def test_token_positions():
    tokens = tokenize("let x = 1;\n  y")
    y = tokens[-2]
    assert (tokens[0].line, tokens[0].column) == (0, 0)
    assert (tokens[3].line, tokens[3].column) == (0, 8)
    assert (y.literal, y.line, y.column) == ("y", 1, 2)


@given(st.text(max_size=200))
def test_lexer_always_terminates_with_eof(source):
    tokens = tokenize(source)
    assert tokens[-1].type is TokenType.EOF
    assert all(t.type is not TokenType.EOF for t in tokens[:-1])
