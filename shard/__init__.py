"""Shard - a minimal scripting language: tokenize, parse, evaluate."""

from shard.lexer import Lexer, Token, TokenType
from shard.parser import Parser, parse_source
from shard.environment import Environment
from shard.interpreter import Interpreter, execute, format_number
from shard.errors import ShardError, ParseError, EvaluationError, ConfigError

__all__ = [
    "Lexer", "Token", "TokenType", "Parser", "parse_source",
    "Environment", "Interpreter", "execute", "format_number",
    "ShardError", "ParseError", "EvaluationError", "ConfigError",
]
