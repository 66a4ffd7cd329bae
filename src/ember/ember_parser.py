"""
Ember Language Parser

Parses a stream of Ember tokens into an abstract syntax tree of statements.

This module implements a single-pass recursive-descent parser with one token of
lookahead. Declarations and statements are dispatched on the current token; expressions
descend a fixed precedence ladder and bottom out at primary expressions.

Precedence (lowest to highest binding)
--------------------------------------
- assignment: `= += -= *= /= %= &= |= ^=` (target must be a variable or property)
- logical-or: `||`
- logical-and: `&&`
- equality: `== !=`
- comparison: `< <= > >=`
- term: `+ - & | ^` (`and`, `or`, `xor`)
- factor: `* /`
- unary: `- + !` (`not`), right-associative
- call / member access: `f(a, b)`, `obj.name`
- primary: literals, identifiers, `( expr )`, `super.name`, `this`

Parser Behavior
---------------
- Fail-fast: the first malformed construct raises `EmberError` and aborts the parse.
  There is no recovery and no partial result.
- `Syntax` errors report an expected-vs-found token mismatch at the current token.
- `Parse` errors report structural violations: invalid assignment targets,
  self-inheriting classes, missing expressions and excessive nesting.

Entry Points
------------
- `Parser.parse_program()`: Parse a full program into a list of statements.
- `Parser.parse_expression()`: Parse exactly one expression (used by the REPL for bare expressions).
- `parse_source()`: Lex and parse a source string in one call.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from ember.ember_ast import (
    Assign,
    Binary,
    Block,
    Call,
    Class,
    Expr,
    Expression,
    For,
    Function,
    Get,
    Grouping,
    If,
    Let,
    Literal,
    Logical,
    Print,
    Return,
    Set,
    Stmt,
    Super,
    Unary,
    Variable,
    While,
)
from ember.ember_constants import (
    ASSIGNMENT_OPS,
    COMPARISON_OPS,
    DEFAULT_MAX_DEPTH,
    EQUALITY_OPS,
    FACTOR_OPS,
    TERM_OPS,
    UNARY_OPS,
)
from ember.ember_errors import EmberError, ErrorKind
from ember.ember_lexer import CharacterStream, Lexer, Token, TokenSource

logger = logging.getLogger(__name__)


class Parser:
    """
    Ember Parser Class

    Pulls tokens from a token source and builds `Stmt`/`Expr` trees. Exactly two tokens
    are retained: `previous` (the last one consumed) and `current` (the lookahead).

    Attributes
    ----------
    source : TokenSource
        Where tokens are pulled from; must keep returning `EOF` once exhausted.
    previous : Token
        The most recently consumed token.
    current : Token
        The next, not yet consumed, token.
    max_depth : int
        Maximum nesting of statements, expressions and unary operands.

    Raises
    ------
    EmberError
        On the first malformed construct encountered.
    """

    def __init__(self, source: TokenSource, max_depth: int = DEFAULT_MAX_DEPTH) -> None:
        self.source = source
        self.max_depth = max_depth
        self.depth = 0
        self.previous: Token = Token("EOF")
        self.current: Token = source.next_token()

    # Token cursor

    def is_(self, type_: str) -> bool:
        return self.current.is_(type_)

    def advance(self) -> str:
        """Shifts current into previous, pulls the next token and returns the consumed type."""
        self.previous = self.current
        self.current = self.source.next_token()
        return self.previous.type

    def expect(self, type_: str) -> str:
        if self.is_(type_):
            return self.advance()
        raise self.error_at(
            self.current,
            ErrorKind.SYNTAX,
            f'Expected: "{type_}" Found: "{self.current.type}"',
        )

    def expect_identifier(self) -> str:
        if self.is_("IDENT"):
            self.advance()
            return self.previous.value
        raise self.error_at(
            self.current,
            ErrorKind.SYNTAX,
            f'Expected: "Identifier" Found: "{self.current.type}"',
        )

    def error_at(self, tok: Token, kind: ErrorKind, message: str) -> EmberError:
        return EmberError(kind, message, tok.line, tok.start, tok.end)

    @contextmanager
    def nested(self) -> Iterator[None]:
        """Tracks recursion so adversarial input fails cleanly instead of overflowing."""
        if self.depth >= self.max_depth:
            raise self.error_at(
                self.current, ErrorKind.PARSE, "Maximum nesting depth exceeded"
            )
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    # Entry points

    def parse_program(self) -> list[Stmt]:
        """Parse declarations until end of input."""
        statements: list[Stmt] = []
        while not self.is_("EOF"):
            statements.append(self.declaration())
        logger.debug("parsed %d top-level statements", len(statements))
        return statements

    parse = parse_program

    def parse_expression(self) -> Expr:
        """Parse a single expression that must span the whole token stream."""
        expr = self.expression()
        self.expect("EOF")
        return expr

    # Declarations

    def declaration(self) -> Stmt:
        with self.nested():
            if self.is_("LET") or self.is_("CONST"):
                return self.let_declaration()
            if self.is_("CLASS"):
                return self.class_declaration()
            if self.is_("FUNCTION"):
                self.advance()
                return self.function_declaration()
            return self.dispatch_statement()

    def let_declaration(self) -> Stmt:
        is_const = self.is_("CONST")
        self.advance()
        name = self.expect_identifier()
        value = None
        if self.is_("ASSIGN"):
            self.advance()
            value = self.expression()
        self.expect("SEMICOLON")
        return Let(name, value, is_const)

    def class_declaration(self) -> Stmt:
        self.expect("CLASS")
        name = self.expect_identifier()
        superclass = None
        if self.is_("LT"):
            self.advance()
            superclass = self.expect_identifier()
            if superclass == name:
                raise self.error_at(
                    self.previous, ErrorKind.PARSE, "Cannot inherit from itself"
                )
        self.expect("LBRACE")
        methods: list[Function] = []
        while not self.is_("RBRACE") and not self.is_("EOF"):
            methods.append(self.function_declaration())
        self.expect("RBRACE")
        return Class(name, superclass, tuple(methods))

    def function_declaration(self) -> Function:
        name = self.expect_identifier()
        self.expect("LPAREN")
        params: list[str] = []
        if not self.is_("RPAREN"):
            params.append(self.expect_identifier())
            while self.is_("COMMA"):
                self.advance()
                params.append(self.expect_identifier())
        self.expect("RPAREN")
        body = self.block_statement()
        return Function(name, tuple(params), body)

    # Statements

    def statement(self) -> Stmt:
        with self.nested():
            return self.dispatch_statement()

    def dispatch_statement(self) -> Stmt:
        handler = self.statement_handlers().get(self.current.type)
        if handler is not None:
            return handler()
        return self.expression_statement()

    def statement_handlers(self) -> dict[str, Callable[[], Stmt]]:
        return {
            "PRINT": self.print_statement,
            "IF": self.if_statement,
            "WHILE": self.while_statement,
            "FOR": self.for_statement,
            "RETURN": self.return_statement,
            "LBRACE": self.block_statement,
        }

    def expression_statement(self) -> Stmt:
        expr = self.expression()
        self.expect("SEMICOLON")
        return Expression(expr)

    def print_statement(self) -> Stmt:
        self.advance()
        expr = self.expression()
        self.expect("SEMICOLON")
        return Print(expr)

    def return_statement(self) -> Stmt:
        self.advance()
        value = None
        if not self.is_("SEMICOLON"):
            value = self.expression()
        self.expect("SEMICOLON")
        return Return(value)

    def for_statement(self) -> Stmt:
        self.advance()
        self.expect("LPAREN")

        initializer: Stmt | None
        if self.is_("SEMICOLON"):
            self.advance()
            initializer = None
        elif self.is_("LET"):
            initializer = self.let_declaration()
        else:
            initializer = self.expression_statement()

        condition = None
        if not self.is_("SEMICOLON"):
            condition = self.expression()
        self.expect("SEMICOLON")

        increment = None
        if not self.is_("RPAREN"):
            increment = self.expression()
        self.expect("RPAREN")

        body = self.statement()
        return For(initializer, condition, increment, body)

    def if_statement(self) -> Stmt:
        self.advance()
        self.expect("LPAREN")
        condition = self.expression()
        self.expect("RPAREN")
        then_branch = self.statement()
        else_branch = None
        if self.is_("ELSE"):
            self.advance()
            else_branch = self.statement()
        return If(condition, then_branch, else_branch)

    def while_statement(self) -> Stmt:
        self.advance()
        self.expect("LPAREN")
        condition = self.expression()
        self.expect("RPAREN")
        body = self.statement()
        return While(condition, body)

    def block_statement(self) -> Block:
        self.expect("LBRACE")
        statements: list[Stmt] = []
        while not self.is_("RBRACE") and not self.is_("EOF"):
            statements.append(self.declaration())
        self.expect("RBRACE")
        return Block(tuple(statements))

    # Expressions

    def expression(self) -> Expr:
        with self.nested():
            return self.assignment()

    def assignment(self) -> Expr:
        left = self.logical_or()
        if self.current.type not in ASSIGNMENT_OPS:
            return left

        op_tok = self.current
        op = self.advance()
        # Right side binds at logical-or level: `a = b = 1` is not a chained assignment.
        right = self.logical_or()
        if isinstance(left, Variable):
            return Assign(left.name, op, right)
        if isinstance(left, Get):
            return Set(left.object, left.name, op, right)
        raise self.error_at(op_tok, ErrorKind.PARSE, "Invalid assignment target")

    def logical_or(self) -> Expr:
        left = self.logical_and()
        while self.is_("LOR"):
            op = self.advance()
            left = Logical(left, op, self.logical_and())
        return left

    def logical_and(self) -> Expr:
        left = self.equality()
        while self.is_("LAND"):
            op = self.advance()
            left = Logical(left, op, self.equality())
        return left

    def equality(self) -> Expr:
        left = self.comparison()
        while self.current.type in EQUALITY_OPS:
            op = self.advance()
            left = Logical(left, op, self.comparison())
        return left

    def comparison(self) -> Expr:
        left = self.term()
        while self.current.type in COMPARISON_OPS:
            op = self.advance()
            left = Logical(left, op, self.term())
        return left

    def term(self) -> Expr:
        left = self.factor()
        while self.current.type in TERM_OPS:
            op = self.advance()
            left = Binary(left, op, self.factor())
        return left

    def factor(self) -> Expr:
        left = self.unary()
        while self.current.type in FACTOR_OPS:
            op = self.advance()
            left = Binary(left, op, self.unary())
        return left

    def unary(self) -> Expr:
        if self.current.type in UNARY_OPS:
            with self.nested():
                op = self.advance()
                return Unary(op, self.unary())
        return self.call()

    def call(self) -> Expr:
        expr = self.primary()
        while True:
            if self.is_("LPAREN"):
                self.advance()
                expr = Call(expr, self.arguments())
            elif self.is_("DOT"):
                self.advance()
                expr = Get(expr, self.expect_identifier())
            else:
                return expr

    def arguments(self) -> tuple[Expr, ...]:
        args: list[Expr] = []
        if not self.is_("RPAREN"):
            args.append(self.expression())
            while self.is_("COMMA"):
                self.advance()
                args.append(self.expression())
        self.expect("RPAREN")
        return tuple(args)

    def primary(self) -> Expr:
        tok = self.current
        if tok.is_("TRUE") or tok.is_("FALSE"):
            self.advance()
            return Literal(tok.is_("TRUE"))
        if tok.is_("NUMBER"):
            self.advance()
            return Literal(float(tok.value))
        if tok.is_("STRING"):
            self.advance()
            return Literal(tok.value)
        if tok.is_("IDENT"):
            self.advance()
            return Variable(tok.value)
        if tok.is_("LPAREN"):
            self.advance()
            expr = self.expression()
            self.expect("RPAREN")
            return Grouping(expr)
        if tok.is_("SUPER"):
            self.advance()
            self.expect("DOT")
            return Super(self.expect_identifier())
        if tok.is_("THIS"):
            self.advance()
            return Variable("this")

        self.advance()
        raise self.error_at(tok, ErrorKind.PARSE, "Expect expression.")


def parse_source(source: str, max_depth: int = DEFAULT_MAX_DEPTH) -> list[Stmt]:
    """Lex and parse `source`, returning its top-level statements."""
    lexer = Lexer(CharacterStream(source))
    return Parser(lexer, max_depth=max_depth).parse_program()


__all__ = ["Parser", "parse_source"]
