"""Errors raised while parsing .properties text."""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Kind of problem found in .properties text."""
    MALFORMED_UNICODE_ESCAPE = "malformed_unicode_escape"
    DANGLING_ESCAPE = "dangling_escape"


class ParseError(ValueError):
    """Base class for .properties parse failures.

    Attributes:
        kind: The kind of problem.
        detail: Human readable description of the problem.
        line: Physical line number (1-based), if known.
        column: Column of the offending character (1-based), if known.
    """
    kind: Optional[ErrorKind] = None
    message = "invalid properties text"

    def __init__(
        self,
        detail: str = "",
        line: Optional[int] = None,
        column: Optional[int] = None
    ):
        self.detail = detail
        self.line = line
        self.column = column
        super().__init__(self._describe())

    def _describe(self) -> str:
        text = self.message
        if self.detail:
            text = f"{text}: {self.detail}"

        if self.line is not None and self.column is not None:
            return f"line {self.line}, column {self.column}: {text}"
        if self.line is not None:
            return f"line {self.line}: {text}"
        if self.column is not None:
            return f"column {self.column}: {text}"
        return text

    def at(self, line: int, column: Optional[int]) -> "ParseError":
        """Return a copy of this error located at a physical position."""
        return type(self)(self.detail, line=line, column=column)


class MalformedUnicodeEscape(ParseError):
    """A \\u escape not followed by four hexadecimal digits."""
    kind = ErrorKind.MALFORMED_UNICODE_ESCAPE
    message = "malformed \\uXXXX escape"


class DanglingEscape(ParseError):
    """A backslash with no character left to escape."""
    kind = ErrorKind.DANGLING_ESCAPE
    message = "dangling backslash escape"
