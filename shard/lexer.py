"""Shard lexer - scans source text into a lazy stream of tokens."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator


# Identifiers and numeric literals longer than this are silently truncated.
MAX_TOKEN_LENGTH = 63

DIGITS = "0123456789"
LETTERS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
WHITESPACE = " \t\r\n\v\f"


# ---------------------------------------------------------------------------
# Token types
# ---------------------------------------------------------------------------

class TokenType(Enum):
    # Literals
    NUMBER = auto()

    # Identifiers
    IDENTIFIER = auto()

    # Keywords
    LET = auto()
    IF = auto()
    ELSE = auto()

    # Operators
    ASSIGN = auto()         # =
    PLUS = auto()           # +
    MINUS = auto()          # -
    MULTIPLY = auto()       # *
    DIVIDE = auto()         # /
    GREATER = auto()        # >
    LESS = auto()           # <
    GREATER_EQUAL = auto()  # >=
    LESS_EQUAL = auto()     # <=
    EQUAL = auto()          # ==
    NOT_EQUAL = auto()      # !=

    # Delimiters
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    SEMICOLON = auto()      # ;

    # Structure
    EOF = auto()
    ERROR = auto()


# ---------------------------------------------------------------------------
# Keyword lookup
# ---------------------------------------------------------------------------

KEYWORDS: dict[str, TokenType] = {
    "let": TokenType.LET,
    "if": TokenType.IF,
    "else": TokenType.ELSE,
}

SINGLE_CHAR_TOKENS: dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULTIPLY,
    "/": TokenType.DIVIDE,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ";": TokenType.SEMICOLON,
}

# First character -> (token without '=', token with a trailing '=').
# A lone "!" is not an operator, so its single form is an ERROR token.
EQUALS_PAIRS: dict[str, tuple[TokenType, TokenType]] = {
    "=": (TokenType.ASSIGN, TokenType.EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    "!": (TokenType.ERROR, TokenType.NOT_EQUAL),
}


# ---------------------------------------------------------------------------
# Token dataclass
# ---------------------------------------------------------------------------

@dataclass
class Token:
    type: TokenType
    value: str
    line: int
    column: int
    number: float = 0.0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, L{self.line}:{self.column})"


# ---------------------------------------------------------------------------
# Lexer
# ---------------------------------------------------------------------------

class Lexer:
    """Scans Shard source text and hands out Token objects on demand.

    The stream is not restartable: once a token has been produced the
    lexer has moved past it. After the end of input every further call
    to :meth:`next_token` returns another EOF token.
    """

    def __init__(self, source: str, max_token_length: int = MAX_TOKEN_LENGTH) -> None:
        self.source = source
        self.max_token_length = max_token_length
        self.pos: int = 0
        self.line: int = 1
        self.col: int = 1

    # -- Character-level helpers -------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at EOF."""
        if self.pos < len(self.source):
            return self.source[self.pos]
        return ""

    def peek(self) -> str:
        """Look ahead one character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < len(self.source):
            return self.source[next_pos]
        return ""

    def advance(self) -> str:
        """Consume and return the current character, advancing position."""
        ch = self._current()
        self.pos += 1
        if ch == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1
        return ch

    def _skip_whitespace(self) -> None:
        while self.pos < len(self.source) and self._current() in WHITESPACE:
            self.advance()

    # -- Main entry points -------------------------------------------------

    def next_token(self) -> Token:
        """Scan and return the next token from the source."""
        self._skip_whitespace()

        if self.pos >= len(self.source):
            return Token(TokenType.EOF, "", self.line, self.col)

        ch = self._current()

        if ch in DIGITS:
            return self._read_number()

        if ch in LETTERS or ch == "_":
            return self._read_identifier()

        line, col = self.line, self.col
        self.advance()

        if ch in SINGLE_CHAR_TOKENS:
            return Token(SINGLE_CHAR_TOKENS[ch], ch, line, col)

        # Two-character operators: peek for a trailing '=' before deciding
        if ch in EQUALS_PAIRS:
            single, double = EQUALS_PAIRS[ch]
            if self._current() == "=":
                self.advance()
                return Token(double, ch + "=", line, col)
            return Token(single, ch, line, col)

        # Unknown character: the error token consumes exactly one character
        return Token(TokenType.ERROR, ch, line, col)

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the first EOF or ERROR token."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type in (TokenType.EOF, TokenType.ERROR):
                return

    def tokenize(self) -> list[Token]:
        """Scan the remaining source and return a list of tokens."""
        return list(self)

    # -- Token readers -----------------------------------------------------

    def _read_run(self, chars: list[str], allowed: str) -> None:
        """Consume a maximal run of *allowed* characters, keeping at most the cap."""
        # Characters past the cap are dropped, not left over to start a new token
        while self.pos < len(self.source) and self._current() in allowed:
            ch = self.advance()
            if len(chars) < self.max_token_length:
                chars.append(ch)

    def _read_number(self) -> Token:
        """Read an integer or float literal: [0-9]+(\\.[0-9]+)?"""
        start_line = self.line
        start_col = self.col
        chars: list[str] = []

        self._read_run(chars, DIGITS)

        # The decimal point only belongs to the number when a digit follows it
        if self._current() == "." and self.peek() != "" and self.peek() in DIGITS:
            ch = self.advance()
            if len(chars) < self.max_token_length:
                chars.append(ch)
            self._read_run(chars, DIGITS)

        text = "".join(chars)
        return Token(TokenType.NUMBER, text, start_line, start_col, number=float(text))

    def _read_identifier(self) -> Token:
        """Read an identifier or keyword: [a-zA-Z_][a-zA-Z0-9_]*"""
        start_line = self.line
        start_col = self.col
        chars: list[str] = []

        self._read_run(chars, LETTERS + DIGITS + "_")

        word = "".join(chars)
        token_type = KEYWORDS.get(word, TokenType.IDENTIFIER)
        return Token(token_type, word, start_line, start_col)
