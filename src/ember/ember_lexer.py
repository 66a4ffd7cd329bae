"""
Lexical analyzer for the Ember programming language.

This module turns raw source text into a pull-based stream of tokens for the parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/offset tracking.
    Token: A single token with type, payload, and source span (line, start, end).
    TokenSource: Protocol for anything the parser can pull tokens from.
    Lexer: Converts a CharacterStream into tokens on demand.
    TokenBuffer: Token source over a pre-built list of tokens.

Features:
    - Skips whitespace and single-line comments (`#`)
    - Longest-match recognition of operators and keywords
    - Recognizes identifiers, numbers (integer and decimal) and quoted strings
    - Keeps returning `EOF` once the input is exhausted

Raises:
    EmberError: (Syntax kind) for malformed numbers or unterminated strings.

Example:
    >>> lexer = Lexer(CharacterStream("print 42;"))
    >>> lexer.next_token()
    Token(PRINT, print)
"""

from typing import Any, Protocol

from ember.ember_constants import OPERATORS, token_hashmap
from ember.ember_errors import EmberError, ErrorKind

_MAX_OPERATOR_LEN = max(len(op) for op in OPERATORS)


class CharacterStream:
    """
    A utility for reading characters from a string source with line tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current offset in the source.
        line (int): Current line number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1):
        self.source = source
        self.position = position
        self.line = line

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` from the current position, or "" if out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token.

    Attributes:
        type (str): The canonical token type (e.g. 'IDENT', 'NUMBER', 'EOF').
        value (str): The payload: identifier name, number lexeme, string contents
            or the raw keyword/operator text.
        line (int): The 1-based line number where the token appears.
        start (int): Offset of the token's first character.
        end (int): Offset just past the token's last character.
    """

    def __init__(
        self, type_: str, value: str = "", line: int = 0, start: int = 0, end: int = 0
    ):
        self.type = type_
        self.value = value
        self.line = line
        self.start = start
        self.end = end

    def is_(self, type_: str) -> bool:
        """True if this token has the given type. The payload is never compared."""
        return self.type == type_

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
            and self.line == other.line
            and self.start == other.start
            and self.end == other.end
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value, self.line, self.start, self.end))


class TokenSource(Protocol):
    """Anything that produces tokens on request and repeats `EOF` once exhausted."""

    def next_token(self) -> Token: ...  # pragma: no cover


class Lexer:
    """Lexical analyzer for the Ember language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in " \t\r\n":
                self.advance()
            elif self.peek() == "#":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()

    def make_token(self, type_: str, value: str, line: int, start: int) -> Token:
        return Token(type_, value, line, start, self.stream.position)

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position."""
        line, start = self.stream.line, self.stream.position
        max_token = None
        candidate = ""

        for i in range(_MAX_OPERATOR_LEN):
            ch = self.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in OPERATORS:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return self.make_token(OPERATORS[max_token], max_token, line, start)

        return None

    def read_number(self, line: int, start: int) -> Token:
        num = ""
        has_dot = False
        while not self.stream.end_of_file():
            ch = self.peek()
            if ch.isdigit():
                num += self.advance()
            elif ch == "." and self.peek(1).isdigit():
                if has_dot:
                    raise EmberError(
                        ErrorKind.SYNTAX,
                        f"Invalid number format: {num}.",
                        line,
                        start,
                        self.stream.position,
                    )
                has_dot = True
                num += self.advance()
            else:
                break
        return self.make_token("NUMBER", num, line, start)

    def read_string(self, line: int, start: int) -> Token:
        quote = self.advance()
        val = ""
        while not self.stream.end_of_file():
            if self.peek() == "\\":
                val += self.advance()
                if not self.stream.end_of_file():
                    val += self.advance()
            elif self.peek() == quote:
                break
            else:
                val += self.advance()
        if self.peek() == quote:
            self.advance()
            return self.make_token("STRING", val, line, start)
        raise EmberError(
            ErrorKind.SYNTAX, "Unterminated string", line, start, self.stream.position
        )

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Once the input is exhausted every further call returns an `EOF` token.

        Raises:
            EmberError: If a malformed number or unterminated string is encountered.
        """
        self.skip_whitespace()

        line, start = self.stream.line, self.stream.position
        if self.stream.end_of_file():
            return Token("EOF", "", line, start, start)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch.isalpha() or ch == "_":
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isalnum() or self.peek() == "_"
            ):
                ident += self.advance()
            return self.make_token(token_hashmap.get(ident, "IDENT"), ident, line, start)

        # 2. Number
        if ch.isdigit():
            return self.read_number(line, start)

        # 3. String
        if ch in ('"', "'"):
            return self.read_string(line, start)

        # 4. Operator or delimiter
        token = self.match_operator()
        if token:
            return token

        # 5. Unknown character, left for the parser to report
        return self.make_token("ERROR", self.advance(), line, start)


class TokenBuffer:
    """A token source over a pre-built token list.

    An `EOF` token is appended when the list does not already end with one, and it is
    returned for every request past the end of the list.
    """

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = list(tokens)
        if not self.tokens or not self.tokens[-1].is_("EOF"):
            last = self.tokens[-1] if self.tokens else None
            line = last.line if last else 1
            end = last.end if last else 0
            self.tokens.append(Token("EOF", "", line, end, end))
        self.position = 0

    def next_token(self) -> Token:
        tok = self.tokens[self.position]
        if self.position < len(self.tokens) - 1:
            self.position += 1
        return tok


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely, returning the tokens including the final `EOF`."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.is_("EOF"):
            break
    return tokens


__all__ = [
    "CharacterStream",
    "Lexer",
    "Token",
    "TokenBuffer",
    "TokenSource",
    "token_hashmap",
    "tokenize",
]
