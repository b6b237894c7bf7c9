from typing import Optional

from sanskriti.tokens import Token, TokenType
from sanskriti.types import ErrorVal


class SanskritiError(Exception):
    """Base exception for every error raised by the pipeline."""
    def __init__(self, err: ErrorVal):
        super().__init__(f"[line {err.line}] {err.name}: {err.message}")
        self.err = err

    @property
    def line(self) -> Optional[int]:
        return self.err.line

    @property
    def message(self) -> str:
        return self.err.message


class LexError(SanskritiError):
    """Unrecognized character or unterminated string."""
    def __init__(self, message: str, line: int, char: Optional[str] = None):
        super().__init__(ErrorVal('LexError', message, line))
        self.char = char


class ParseError(SanskritiError):
    """A token the grammar did not allow at this point."""
    def __init__(self, token: Token, expected: str):
        if token.type == TokenType.EOF:
            where = 'end'
        else:
            where = f"'{token.lexeme}'"
        super().__init__(ErrorVal('ParseError', f"Error at {where}: {expected}", token.line))
        self.token = token
        self.expected = expected


class LoxRuntimeError(SanskritiError):
    """Failure while evaluating a program."""
    def __init__(self, name: str, message: str, line: Optional[int] = None):
        super().__init__(ErrorVal(name, message, line))
