"""Shard CLI - shard run, shard check, shard tokens, shard ast."""
import sys
import os

from shard.lexer import Lexer
from shard.parser import Parser
from shard.ast_nodes import dump
from shard.interpreter import Interpreter
from shard.config import get_config
from shard.errors import ConfigError, EvaluationError, ParseError
from shard.log import log, set_verbose

COMMANDS = ("run", "check", "tokens", "ast")


def usage():
    print("Usage: shard [-v] <command> <file.shard>", file=sys.stderr)
    print(f"Commands: {', '.join(COMMANDS)}", file=sys.stderr)


def main(argv=None):
    args = list(sys.argv[1:] if argv is None else argv)
    verbose = "-v" in args
    args = [a for a in args if a != "-v"]

    if not args:
        usage()
        sys.exit(1)

    command = args[0]
    if command not in COMMANDS:
        print(f"Unknown command: {command}", file=sys.stderr)
        usage()
        sys.exit(1)

    if len(args) < 2:
        print(f"Usage: shard {command} <file.shard>", file=sys.stderr)
        sys.exit(1)
    filepath = args[1]
    if not os.path.exists(filepath):
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        sys.exit(1)

    try:
        config = get_config()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    set_verbose(verbose or config["log"]["verbose"])

    try:
        with open(filepath, encoding="utf-8") as f:
            source = f.read()
    except (OSError, UnicodeDecodeError):
        print(f"Error: could not read file: {filepath}", file=sys.stderr)
        sys.exit(1)
    log(f"read {len(source)} characters from {filepath}")

    lexer = Lexer(source, max_token_length=config["lexer"]["max_token_length"])

    if command == "tokens":
        for tok in lexer:
            print(f"{tok.line}:{tok.column}\t{tok.type.name}\t{tok.value}")
        sys.exit(0)

    try:
        tree = Parser(lexer).parse()
    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Parse error: expression nested too deeply", file=sys.stderr)
        sys.exit(1)
    log(f"parsed {len(tree.statements)} statement(s)")

    if command == "check":
        print(f"OK: {filepath}")
        sys.exit(0)

    if command == "ast":
        print(dump(tree))
        sys.exit(0)

    interpreter = Interpreter(number_format=config["output"]["number_format"])
    try:
        interpreter.run(tree)
    except EvaluationError as e:
        print(f"Runtime error: {e}", file=sys.stderr)
        sys.exit(1)
    except RecursionError:
        print("Runtime error: expression nested too deeply", file=sys.stderr)
        sys.exit(1)
    log(f"finished with {len(interpreter.environment)} variable(s) bound")
    sys.exit(0)


if __name__ == "__main__":
    main()
