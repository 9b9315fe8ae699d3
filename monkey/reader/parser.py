"""
  Monkey Parser

Operator-precedence ("Pratt") parser turning a token stream into a Program.

Every token kind may own a prefix handler (it starts an expression) and an
infix handler (it continues one), plus a binding precedence:

    Lowest:  (nothing)
             == !=
             < >
             + -
             * /
             prefix operators (! -)
    Highest: call ( and index [

Parsing never stops at the first error: messages are collected in
``Parser.errors`` and the parser resynchronizes at the next statement
boundary so that later well-formed statements are still parsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Iterable, Iterator, Optional

from monkey.reader.lexer import Lexer
from monkey.reader.tokens import Token, TokenType
from monkey.reader.ast import (
    Program,
    Statement,
    Expression,
    LetStatement,
    ReturnStatement,
    ExpressionStatement,
    BlockStatement,
    Identifier,
    IntegerLiteral,
    BooleanLiteral,
    StringLiteral,
    PrefixExpression,
    InfixExpression,
    IfExpression,
    FunctionLiteral,
    MacroLiteral,
    CallExpression,
    ArrayLiteral,
    IndexExpression,
    HashLiteral,
)

_INT64_MAX = 2**63 - 1


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # ==
    LESSGREATER = 3  # > or <
    SUM = 4          # +
    PRODUCT = 5      # *
    PREFIX = 6       # -X or !X
    CALL = 7         # myFunction(X) and array[index]


PRECEDENCES: dict[TokenType, Precedence] = {
    TokenType.EQ: Precedence.EQUALS,
    TokenType.NOT_EQ: Precedence.EQUALS,
    TokenType.LT: Precedence.LESSGREATER,
    TokenType.GT: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LPAREN: Precedence.CALL,
    TokenType.LBRACKET: Precedence.CALL,
}

PrefixParseFn = Callable[[], Optional[Expression]]
InfixParseFn = Callable[[Expression], Optional[Expression]]


@dataclass(frozen=True)
class ParseDiagnostic:
    """A parse error message with the position of the offending token."""
    message: str
    line: int
    column: int


class TokenStream:
    """Two-token window (current and peek) over any token iterator."""

    def __init__(self, tokens: Iterable[Token]):
        self._tokens: Iterator[Token] = iter(tokens)
        self._last: Token = Token(TokenType.EOF, "")

    def advance(self) -> Token:
        # An exhausted stream reads as EOF, even if its last token was not
        tok = next(self._tokens, None)
        if tok is None:
            if self._last.type is not TokenType.EOF:
                self._last = Token(TokenType.EOF, "", self._last.line, self._last.column)
            return self._last
        self._last = tok
        return tok


class Parser:
    def __init__(self, source: Lexer | Iterable[Token]):
        self.stream = TokenStream(source)
        self.diagnostics: list[ParseDiagnostic] = []

        self.cur_token: Token = self.stream.advance()
        self.peek_token: Token = self.stream.advance()

        self.prefix_parse_fns: dict[TokenType, PrefixParseFn] = {
            TokenType.IDENT: self._parse_identifier,
            TokenType.INT: self._parse_integer_literal,
            TokenType.STRING: self._parse_string_literal,
            TokenType.BANG: self._parse_prefix_expression,
            TokenType.MINUS: self._parse_prefix_expression,
            TokenType.TRUE: self._parse_boolean,
            TokenType.FALSE: self._parse_boolean,
            TokenType.LPAREN: self._parse_grouped_expression,
            TokenType.IF: self._parse_if_expression,
            TokenType.FUNCTION: self._parse_function_literal,
            TokenType.LBRACKET: self._parse_array_literal,
            TokenType.LBRACE: self._parse_hash_literal,
            TokenType.MACRO: self._parse_macro_literal,
        }
        self.infix_parse_fns: dict[TokenType, InfixParseFn] = {
            TokenType.PLUS: self._parse_infix_expression,
            TokenType.MINUS: self._parse_infix_expression,
            TokenType.SLASH: self._parse_infix_expression,
            TokenType.ASTERISK: self._parse_infix_expression,
            TokenType.EQ: self._parse_infix_expression,
            TokenType.NOT_EQ: self._parse_infix_expression,
            TokenType.LT: self._parse_infix_expression,
            TokenType.GT: self._parse_infix_expression,
            TokenType.LPAREN: self._parse_call_expression,
            TokenType.LBRACKET: self._parse_index_expression,
        }

    # =========================================================================
    # Token Navigation
    # =========================================================================

    @property
    def errors(self) -> list[str]:
        return [d.message for d in self.diagnostics]

    def _next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.stream.advance()

    def _cur_token_is(self, t: TokenType) -> bool:
        return self.cur_token.type is t

    def _peek_token_is(self, t: TokenType) -> bool:
        return self.peek_token.type is t

    def _expect_peek(self, t: TokenType) -> bool:
        """Advance if the next token has type ``t``, otherwise record an error."""
        if self._peek_token_is(t):
            self._next_token()
            return True
        self._error(
            f"expected next token to be {t}, got {self.peek_token.type} instead",
            self.peek_token,
        )
        return False

    def _peek_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.peek_token.type, Precedence.LOWEST)

    def _cur_precedence(self) -> Precedence:
        return PRECEDENCES.get(self.cur_token.type, Precedence.LOWEST)

    def _error(self, message: str, token: Token) -> None:
        self.diagnostics.append(ParseDiagnostic(message, token.line, token.column))

    def _synchronize(self) -> None:
        """Skip the rest of a malformed statement, up to its ``;``."""
        while not (self._cur_token_is(TokenType.SEMICOLON) or self._cur_token_is(TokenType.EOF)):
            self._next_token()

    # =========================================================================
    # Statements
    # =========================================================================

    def parse_program(self) -> Program:
        program = Program(statements=[])
        while not self._cur_token_is(TokenType.EOF):
            errors_before = len(self.diagnostics)
            stmt = self._parse_statement()
            if stmt is not None and len(self.diagnostics) == errors_before:
                program.statements.append(stmt)
            else:
                self._synchronize()
            self._next_token()
        return program

    def _parse_statement(self) -> Optional[Statement]:
        if self._cur_token_is(TokenType.LET):
            return self._parse_let_statement()
        if self._cur_token_is(TokenType.RETURN):
            return self._parse_return_statement()
        return self._parse_expression_statement()

    def _parse_let_statement(self) -> Optional[LetStatement]:
        token = self.cur_token
        if not self._expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)
        if not self._expect_peek(TokenType.ASSIGN):
            return None
        self._next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return LetStatement(token, name, value)

    def _parse_return_statement(self) -> Optional[ReturnStatement]:
        token = self.cur_token
        self._next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None
        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ReturnStatement(token, value)

    def _parse_expression_statement(self) -> Optional[ExpressionStatement]:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None
        if self._peek_token_is(TokenType.SEMICOLON):
            self._next_token()
        return ExpressionStatement(token, expression)

    def _parse_block_statement(self) -> BlockStatement:
        block = BlockStatement(self.cur_token, [])
        self._next_token()
        while not self._cur_token_is(TokenType.RBRACE) and not self._cur_token_is(TokenType.EOF):
            stmt = self._parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self._next_token()
        if self._cur_token_is(TokenType.EOF):
            self._error("expected next token to be }, got EOF instead", self.cur_token)
        return block

    # =========================================================================
    # Expressions
    # =========================================================================

    def parse_expression(self, precedence: Precedence) -> Optional[Expression]:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self._error(f"no prefix parse function for {self.cur_token.type} found", self.cur_token)
            return None
        left = prefix()

        while left is not None and not self._peek_token_is(TokenType.SEMICOLON) \
                and precedence < self._peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left
            self._next_token()
            left = infix(left)

        return left

    def _parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def _parse_integer_literal(self) -> Optional[Expression]:
        value = int(self.cur_token.literal)
        if value > _INT64_MAX:
            self._error(f'could not parse "{self.cur_token.literal}" as integer', self.cur_token)
            return None
        return IntegerLiteral(self.cur_token, value)

    def _parse_string_literal(self) -> Expression:
        return StringLiteral(self.cur_token, self.cur_token.literal)

    def _parse_boolean(self) -> Expression:
        return BooleanLiteral(self.cur_token, self._cur_token_is(TokenType.TRUE))

    def _parse_prefix_expression(self) -> Optional[Expression]:
        token = self.cur_token
        self._next_token()
        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(token, token.literal, right)

    def _parse_infix_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        precedence = self._cur_precedence()
        self._next_token()
        # Same precedence on the right keeps operators left-associative
        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(token, left, token.literal, right)

    def _parse_grouped_expression(self) -> Optional[Expression]:
        self._next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None or not self._expect_peek(TokenType.RPAREN):
            return None
        return expression

    def _parse_if_expression(self) -> Optional[Expression]:
        token = self.cur_token
        if not self._expect_peek(TokenType.LPAREN):
            return None
        self._next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None or not self._expect_peek(TokenType.RPAREN):
            return None
        if not self._expect_peek(TokenType.LBRACE):
            return None
        consequence = self._parse_block_statement()

        alternative = None
        if self._peek_token_is(TokenType.ELSE):
            self._next_token()
            if not self._expect_peek(TokenType.LBRACE):
                return None
            alternative = self._parse_block_statement()

        return IfExpression(token, condition, consequence, alternative)

    def _parse_function_parameters(self) -> Optional[list[Identifier]]:
        identifiers: list[Identifier] = []
        if self._peek_token_is(TokenType.RPAREN):
            self._next_token()
            return identifiers

        if not self._expect_peek(TokenType.IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))
        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            if not self._expect_peek(TokenType.IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self._expect_peek(TokenType.RPAREN):
            return None
        return identifiers

    def _parse_callable_literal(self, node_cls):
        token = self.cur_token
        if not self._expect_peek(TokenType.LPAREN):
            return None
        parameters = self._parse_function_parameters()
        if parameters is None or not self._expect_peek(TokenType.LBRACE):
            return None
        body = self._parse_block_statement()
        return node_cls(token, parameters, body)

    def _parse_function_literal(self) -> Optional[Expression]:
        return self._parse_callable_literal(FunctionLiteral)

    def _parse_macro_literal(self) -> Optional[Expression]:
        return self._parse_callable_literal(MacroLiteral)

    def _parse_expression_list(self, end: TokenType) -> Optional[list[Expression]]:
        """Comma separated expressions up to the ``end`` token."""
        items: list[Expression] = []
        if self._peek_token_is(end):
            self._next_token()
            return items

        self._next_token()
        item = self.parse_expression(Precedence.LOWEST)
        if item is None:
            return None
        items.append(item)
        while self._peek_token_is(TokenType.COMMA):
            self._next_token()
            self._next_token()
            item = self.parse_expression(Precedence.LOWEST)
            if item is None:
                return None
            items.append(item)

        if not self._expect_peek(end):
            return None
        return items

    def _parse_call_expression(self, function: Expression) -> Optional[Expression]:
        token = self.cur_token
        arguments = self._parse_expression_list(TokenType.RPAREN)
        if arguments is None:
            return None
        return CallExpression(token, function, arguments)

    def _parse_array_literal(self) -> Optional[Expression]:
        token = self.cur_token
        elements = self._parse_expression_list(TokenType.RBRACKET)
        if elements is None:
            return None
        return ArrayLiteral(token, elements)

    def _parse_index_expression(self, left: Expression) -> Optional[Expression]:
        token = self.cur_token
        self._next_token()
        index = self.parse_expression(Precedence.LOWEST)
        if index is None or not self._expect_peek(TokenType.RBRACKET):
            return None
        return IndexExpression(token, left, index)

    def _parse_hash_literal(self) -> Optional[Expression]:
        token = self.cur_token
        pairs: list[tuple[Expression, Expression]] = []
        while not self._peek_token_is(TokenType.RBRACE):
            self._next_token()
            key = self.parse_expression(Precedence.LOWEST)
            if key is None or not self._expect_peek(TokenType.COLON):
                return None
            self._next_token()
            value = self.parse_expression(Precedence.LOWEST)
            if value is None:
                return None
            pairs.append((key, value))
            if not self._peek_token_is(TokenType.RBRACE) and not self._expect_peek(TokenType.COMMA):
                return None

        if not self._expect_peek(TokenType.RBRACE):
            return None
        return HashLiteral(token, pairs)


def parse(source: str | Iterable[Token]) -> tuple[Program, list[str]]:
    """Parse source text (or an already produced token stream).

    Returns the program together with the accumulated error messages; a
    non-empty error list means the program must not be evaluated.
    """
    if isinstance(source, str):
        source = Lexer(source)
    parser = Parser(source)
    program = parser.parse_program()
    return program, parser.errors
