"""Shard error types with source location info."""


class ShardError(Exception):
    def __init__(self, message: str, line: int = 0, column: int = 0):
        self.message = message
        self.line = line
        self.column = column
        super().__init__(self._format())

    def _format(self) -> str:
        if self.line:
            return f"Line {self.line}, Col {self.column}: {self.message}"
        return self.message


class ParseError(ShardError):
    def _format(self) -> str:
        return f"Parse error at line {self.line}, column {self.column}: {self.message}"


class EvaluationError(ShardError):
    pass


class ConfigError(ShardError):
    pass
