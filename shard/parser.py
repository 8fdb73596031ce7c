"""Shard parser - recursive-descent parser producing an AST from tokens."""

from __future__ import annotations

from typing import NoReturn

from shard.lexer import Lexer, MAX_TOKEN_LENGTH, Token, TokenType
from shard.errors import ParseError
from shard.ast_nodes import (
    Program,
    NumberLiteral,
    Identifier,
    BinaryOp,
    Operator,
    LetDeclaration,
    PrintCall,
    IfStatement,
)


COMPARISON_TOKENS: dict[TokenType, Operator] = {
    TokenType.GREATER: Operator.GREATER,
    TokenType.LESS: Operator.LESS,
    TokenType.GREATER_EQUAL: Operator.GREATER_EQUAL,
    TokenType.LESS_EQUAL: Operator.LESS_EQUAL,
    TokenType.EQUAL: Operator.EQUAL,
    TokenType.NOT_EQUAL: Operator.NOT_EQUAL,
}

ADDITIVE_TOKENS: dict[TokenType, Operator] = {
    TokenType.PLUS: Operator.ADD,
    TokenType.MINUS: Operator.SUBTRACT,
}

MULTIPLICATIVE_TOKENS: dict[TokenType, Operator] = {
    TokenType.MULTIPLY: Operator.MULTIPLY,
    TokenType.DIVIDE: Operator.DIVIDE,
}

# Recognised by identifier text at the start of a statement, not a keyword.
PRINT_BUILTIN = "print"


class Parser:
    """Recursive-descent parser for the Shard language.

    Pulls tokens from a :class:`Lexer` through a two-token buffer
    (``current`` and ``lookahead``) and produces an AST rooted at a
    ``Program`` node.

    The first malformed construct is fatal: a :class:`ParseError` is
    recorded on the parser and raised. Once an error is recorded the
    parser does no further work; every later call re-raises it.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.error: ParseError | None = None
        self.current: Token = lexer.next_token()
        self.lookahead: Token = lexer.next_token()

    @property
    def has_error(self) -> bool:
        return self.error is not None

    # -- Navigation helpers ------------------------------------------------

    def advance(self) -> Token:
        """Consume and return the current token, shifting the buffer forward."""
        tok = self.current
        self.current = self.lookahead
        self.lookahead = self.lexer.next_token()
        return tok

    def check(self, token_type: TokenType) -> bool:
        return self.current.type == token_type

    def match(self, *types: TokenType) -> Token | None:
        """If the current token matches any of *types*, consume and return it; else None."""
        if self.current.type in types:
            return self.advance()
        return None

    def expect(self, token_type: TokenType, reason: str) -> Token:
        """Consume the current token if it matches *token_type*, else fail with *reason*."""
        if self.current.type != token_type:
            self.fail(reason)
        return self.advance()

    def fail(self, reason: str) -> NoReturn:
        """Record a parse error at the current token and raise it."""
        tok = self.current
        if tok.type == TokenType.ERROR:
            reason = f"Unexpected character {tok.value!r}"
        self.error = ParseError(reason, tok.line, tok.column)
        raise self.error

    def _ensure_clean(self) -> None:
        if self.error is not None:
            raise self.error

    # -- Top-level ---------------------------------------------------------

    def parse(self) -> Program:
        """Parse the full token stream into a ``Program`` AST node."""
        self._ensure_clean()
        program = Program(line=self.current.line, col=self.current.column)
        while not self.check(TokenType.EOF):
            program.add_statement(self.parse_statement())
        return program

    # -- Statement parsing -------------------------------------------------

    def parse_statement(self):
        """Parse a single statement."""
        self._ensure_clean()

        if self.check(TokenType.LET):
            return self.parse_let()
        if self.check(TokenType.IF):
            return self.parse_if()
        if self.check(TokenType.IDENTIFIER) and self.current.value == PRINT_BUILTIN:
            return self.parse_print()

        expr = self.parse_expression()
        self.match(TokenType.SEMICOLON)
        return expr

    def parse_let(self):
        """Parse a declaration: ``let name = value;``."""
        tok = self.advance()  # consume 'let'
        name_tok = self.expect(TokenType.IDENTIFIER, "Expected identifier after 'let'")
        self.expect(TokenType.ASSIGN, "Expected '=' after variable name")
        value = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ';' after let declaration")
        return LetDeclaration(name=name_tok.value, value=value, line=tok.line, col=tok.column)

    def parse_print(self):
        """Parse a print call: ``print(expression)`` with an optional ``;``."""
        tok = self.advance()  # consume 'print'
        self.expect(TokenType.LPAREN, "Expected '(' after 'print'")
        argument = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expected ')' after print argument")
        self.match(TokenType.SEMICOLON)
        return PrintCall(argument=argument, line=tok.line, col=tok.column)

    def parse_if(self):
        """Parse ``if (condition) statement [else statement]``."""
        tok = self.advance()  # consume 'if'
        self.expect(TokenType.LPAREN, "Expected '(' after 'if'")
        condition = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expected ')' after if condition")
        then_branch = self.parse_statement()

        else_branch = None
        if self.match(TokenType.ELSE):
            else_branch = self.parse_statement()

        return IfStatement(
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
            line=tok.line,
            col=tok.column,
        )

    # -- Expression parsing ------------------------------------------------

    def parse_expression(self):
        """Entry point for expression parsing - lowest precedence."""
        self._ensure_clean()
        return self.parse_comparison()

    def _parse_binary(self, operators: dict[TokenType, Operator], operand):
        """Parse a left-associative chain of *operators* between *operand* productions."""
        left = operand()
        while self.current.type in operators:
            op_tok = self.advance()
            right = operand()
            left = BinaryOp(
                left=left,
                op=operators[op_tok.type],
                right=right,
                line=op_tok.line,
                col=op_tok.column,
            )
        return left

    def parse_comparison(self):
        """Parse ``>``, ``<``, ``>=``, ``<=``, ``==``, ``!=`` (loosest binding)."""
        return self._parse_binary(COMPARISON_TOKENS, self.parse_additive)

    def parse_additive(self):
        """Parse ``+`` and ``-``."""
        return self._parse_binary(ADDITIVE_TOKENS, self.parse_term)

    def parse_term(self):
        """Parse ``*`` and ``/`` (tightest binding)."""
        return self._parse_binary(MULTIPLICATIVE_TOKENS, self.parse_primary)

    def parse_primary(self):
        """Parse primary (atomic) expressions."""
        tok = self.current

        if tok.type == TokenType.NUMBER:
            self.advance()
            return NumberLiteral(value=tok.number, line=tok.line, col=tok.column)

        if tok.type == TokenType.IDENTIFIER:
            self.advance()
            return Identifier(name=tok.value, line=tok.line, col=tok.column)

        # Grouped expression: ( expr )
        if tok.type == TokenType.LPAREN:
            self.advance()
            node = self.parse_expression()
            self.expect(TokenType.RPAREN, "Expected ')' after expression")
            return node

        self.fail("Expected number, identifier, or '('")


def parse_source(source: str, max_token_length: int = MAX_TOKEN_LENGTH) -> Program:
    """Convenience: lex + parse *source* and return the Program AST."""
    return Parser(Lexer(source, max_token_length=max_token_length)).parse()
