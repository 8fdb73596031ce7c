"""Tests for Shard lexer - tokenization, operators, positions."""

from shard.lexer import Lexer, Token, TokenType


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def lex(source: str) -> list[Token]:
    """Convenience: tokenize source and return the token list."""
    return Lexer(source).tokenize()


def types(source: str) -> list[TokenType]:
    """Return just the token types (excluding EOF) for quick assertions."""
    return [t.type for t in lex(source) if t.type != TokenType.EOF]


def values(source: str) -> list[str]:
    """Return just the token values (excluding EOF)."""
    return [t.value for t in lex(source) if t.type != TokenType.EOF]


# ---------------------------------------------------------------------------
# Empty / Minimal Input
# ---------------------------------------------------------------------------

class TestEmptyInput:
    def test_empty_string(self):
        tokens = lex("")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_whitespace_only(self):
        tokens = lex("   \t \n \r\n ")
        assert len(tokens) == 1
        assert tokens[0].type == TokenType.EOF

    def test_eof_is_idempotent(self):
        lexer = Lexer("x")
        assert lexer.next_token().type == TokenType.IDENTIFIER
        for _ in range(3):
            assert lexer.next_token().type == TokenType.EOF


# ---------------------------------------------------------------------------
# Numbers
# ---------------------------------------------------------------------------

class TestNumbers:
    def test_integer(self):
        tokens = lex("42")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "42"
        assert tokens[0].number == 42.0

    def test_float(self):
        tokens = lex("3.14")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].number == 3.14

    def test_zero(self):
        assert lex("0")[0].number == 0.0

    def test_multiple_numbers(self):
        assert types("1 2 3") == [TokenType.NUMBER, TokenType.NUMBER, TokenType.NUMBER]
        assert values("1 2 3") == ["1", "2", "3"]

    def test_trailing_dot_is_not_part_of_number(self):
        tokens = lex("5.")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "5"
        assert tokens[1].type == TokenType.ERROR
        assert tokens[1].value == "."

    def test_dot_followed_by_letter_is_not_part_of_number(self):
        tokens = lex("5.x")
        assert tokens[0].value == "5"
        assert tokens[1].type == TokenType.ERROR

    def test_overlong_number_is_truncated(self):
        tokens = lex("1" * 80 + " 2")
        assert tokens[0].type == TokenType.NUMBER
        assert tokens[0].value == "1" * 63
        assert tokens[0].number == float("1" * 63)
        assert tokens[1].value == "2"

    def test_custom_cap(self):
        tokens = Lexer("123456", max_token_length=3).tokenize()
        assert tokens[0].value == "123"
        assert tokens[1].type == TokenType.EOF


# ---------------------------------------------------------------------------
# Identifiers and keywords
# ---------------------------------------------------------------------------

class TestIdentifiers:
    def test_simple_identifier(self):
        tokens = lex("name")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "name"

    def test_identifier_with_digits_and_underscores(self):
        assert values("_tmp2 x_1") == ["_tmp2", "x_1"]
        assert types("_tmp2 x_1") == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_let_keyword(self):
        assert types("let") == [TokenType.LET]

    def test_if_else_keywords(self):
        assert types("if else") == [TokenType.IF, TokenType.ELSE]

    def test_keyword_prefix_is_identifier(self):
        assert types("letter iffy elsewhere") == [TokenType.IDENTIFIER] * 3

    def test_print_is_an_identifier(self):
        tokens = lex("print")
        assert tokens[0].type == TokenType.IDENTIFIER
        assert tokens[0].value == "print"

    def test_keywords_are_case_sensitive(self):
        assert types("LET If") == [TokenType.IDENTIFIER, TokenType.IDENTIFIER]

    def test_overlong_identifier_is_truncated(self):
        tokens = lex("a" * 70)
        assert tokens[0].value == "a" * 63
        assert tokens[1].type == TokenType.EOF


# ---------------------------------------------------------------------------
# Operators and delimiters
# ---------------------------------------------------------------------------

class TestOperators:
    def test_single_character_tokens(self):
        assert types("+ - * / ( ) ;") == [
            TokenType.PLUS,
            TokenType.MINUS,
            TokenType.MULTIPLY,
            TokenType.DIVIDE,
            TokenType.LPAREN,
            TokenType.RPAREN,
            TokenType.SEMICOLON,
        ]

    def test_assign_vs_equal(self):
        assert types("=") == [TokenType.ASSIGN]
        assert types("==") == [TokenType.EQUAL]
        assert types("= =") == [TokenType.ASSIGN, TokenType.ASSIGN]

    def test_comparisons(self):
        assert types("> >= < <= != ==") == [
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
            TokenType.NOT_EQUAL,
            TokenType.EQUAL,
        ]

    def test_comparison_without_spaces(self):
        assert types("a>=b") == [TokenType.IDENTIFIER, TokenType.GREATER_EQUAL, TokenType.IDENTIFIER]

    def test_triple_equals(self):
        assert types("===") == [TokenType.EQUAL, TokenType.ASSIGN]

    def test_operator_values(self):
        assert values("<= != =") == ["<=", "!=", "="]


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    def test_lone_bang_is_error(self):
        tokens = lex("!")
        assert tokens[0].type == TokenType.ERROR
        assert tokens[0].value == "!"

    def test_unknown_character_is_error(self):
        tokens = lex("@")
        assert tokens[0].type == TokenType.ERROR
        assert tokens[0].column == 1

    def test_error_consumes_one_character(self):
        lexer = Lexer("@@1")
        assert lexer.next_token().type == TokenType.ERROR
        assert lexer.next_token().type == TokenType.ERROR
        assert lexer.next_token().type == TokenType.NUMBER

    def test_iteration_stops_at_error(self):
        tokens = lex("1 # 2")
        assert [t.type for t in tokens] == [TokenType.NUMBER, TokenType.ERROR]


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

class TestPositions:
    def test_columns_on_one_line(self):
        tokens = lex("let x = 5;")
        assert [(t.line, t.column) for t in tokens] == [
            (1, 1), (1, 5), (1, 7), (1, 9), (1, 10), (1, 11),
        ]

    def test_newline_resets_column(self):
        tokens = lex("a\n  b")
        assert (tokens[0].line, tokens[0].column) == (1, 1)
        assert (tokens[1].line, tokens[1].column) == (2, 3)

    def test_two_char_operator_position(self):
        tokens = lex("1 >= 2")
        assert tokens[1].column == 3
        assert tokens[2].column == 6

    def test_eof_position(self):
        tokens = lex("x\n")
        assert tokens[-1].type == TokenType.EOF
        assert (tokens[-1].line, tokens[-1].column) == (2, 1)
