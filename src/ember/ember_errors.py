"""
Shared error vocabulary for the Ember toolchain.

Classes:
    ErrorKind: The category of a failure. The parser only ever raises `SYNTAX`
        (expected-vs-found token mismatches) and `PARSE` (structural violations).
        `VALUE`, `RUNTIME` and `ZERO_DIVISION` belong to later evaluation stages.
    EmberError: The exception raised for every diagnostic, carrying its kind,
        a human-readable message and the source span of the offending token.

Example:
    >>> err = EmberError(ErrorKind.PARSE, "Invalid assignment target", 1, 2, 3)
    >>> str(err)
    'ParseError: Invalid assignment target'
"""

from enum import Enum


class ErrorKind(Enum):
    """Error categories and their display labels."""

    SYNTAX = "SyntaxError"
    VALUE = "ValueError"
    PARSE = "ParseError"
    RUNTIME = "RuntimeError"
    ZERO_DIVISION = "ZeroDivisionError"

    @property
    def label(self) -> str:
        return self.value


class EmberError(Exception):
    """A single diagnostic with its source location.

    Args:
        kind (ErrorKind): The error category.
        message (str): Human-readable description. Defaults to "division by zero"
            for `ZERO_DIVISION` when left empty.
        line (int): 1-based line of the offending token.
        start (int): Offset of the first character of the offending token.
        end (int): Offset just past the last character of the offending token.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str = "",
        line: int = 0,
        start: int = 0,
        end: int = 0,
    ) -> None:
        if not message and kind is ErrorKind.ZERO_DIVISION:
            message = "division by zero"
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.line = line
        self.start = start
        self.end = end

    @property
    def span(self) -> tuple[int, int, int]:
        return (self.line, self.start, self.end)

    def __str__(self) -> str:
        return f"{self.kind.label}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"EmberError({self.kind.name}, {self.message!r}, "
            f"line={self.line}, start={self.start}, end={self.end})"
        )

    def __eq__(self, other: object) -> bool:
        return (
            isinstance(other, EmberError)
            and self.kind is other.kind
            and self.message == other.message
            and self.span == other.span
        )

    def __hash__(self) -> int:
        return hash((self.kind, self.message, self.span))


__all__ = ["EmberError", "ErrorKind"]
