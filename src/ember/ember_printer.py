"""
Renders Ember AST nodes as parenthesized prefix text.

The printer is a debugging and inspection aid: every node is rendered in a
Lisp-like form that makes the parsed structure (precedence, associativity,
grouping) visible at a glance.

Example:
    >>> AstPrinter().render(Unary("MINUS", Grouping(Literal(1.0))))
    '(- (group 1.0))'

Raises:
    NotImplementedError: If a node kind has no corresponding `print_*` method.
"""

from collections.abc import Sequence

from ember.ember_ast import (
    Assign,
    Binary,
    Block,
    Call,
    Class,
    Expression,
    For,
    Function,
    Get,
    Grouping,
    If,
    Let,
    Literal,
    Logical,
    Node,
    Print,
    Return,
    Set,
    Super,
    Unary,
    Variable,
    While,
)
from ember.ember_constants import OPERATORS

# Token type → the symbol it is rendered with; word forms share types with symbols.
SYMBOLS: dict[str, str] = {type_: lexeme for lexeme, type_ in OPERATORS.items()}


class AstPrinter:
    """Renders expressions and statements.

    Methods:
        render(node): Renders a node or a sequence of statements (one per line).
        _visit(node): Dispatches to the matching `print_<kind>` method.
    """

    def render(self, node: Node | Sequence[Node]) -> str:
        if isinstance(node, Node):
            return self._visit(node)
        return "\n".join(self._visit(n) for n in node)

    def _visit(self, node: Node) -> str:
        method = getattr(self, f"print_{node.kind}", None)
        if method is None:
            raise NotImplementedError(f"No printer for node kind: {node.kind}")
        return str(method(node))

    def parenthesize(self, name: str, *parts: Node | str | None) -> str:
        rendered = [name]
        for part in parts:
            if part is None:
                rendered.append("nil")
            elif isinstance(part, Node):
                rendered.append(self._visit(part))
            else:
                rendered.append(part)
        return f"({' '.join(rendered)})"

    @staticmethod
    def symbol(op: str) -> str:
        return SYMBOLS.get(op, op)

    # Expressions

    def print_literal(self, node: Literal) -> str:
        if isinstance(node.value, bool):
            return "true" if node.value else "false"
        if isinstance(node.value, str):
            return f'"{node.value}"'
        return repr(node.value)

    def print_variable(self, node: Variable) -> str:
        return node.name

    def print_unary(self, node: Unary) -> str:
        return self.parenthesize(self.symbol(node.op), node.right)

    def print_binary(self, node: Binary) -> str:
        return self.parenthesize(self.symbol(node.op), node.left, node.right)

    print_logical = print_binary  # type: ignore[assignment]

    def print_grouping(self, node: Grouping) -> str:
        return self.parenthesize("group", node.expression)

    def print_assign(self, node: Assign) -> str:
        return self.parenthesize(self.symbol(node.op), node.name, node.value)

    def print_get(self, node: Get) -> str:
        return self.parenthesize(".", node.object, node.name)

    def print_set(self, node: Set) -> str:
        return self.parenthesize(
            self.symbol(node.op), self.parenthesize(".", node.object, node.name), node.value
        )

    def print_super(self, node: Super) -> str:
        return self.parenthesize("super", node.method)

    def print_call(self, node: Call) -> str:
        return self.parenthesize("call", node.callee, *node.arguments)

    # Statements

    def print_let(self, node: Let) -> str:
        return self.parenthesize("const" if node.is_const else "let", node.name, node.value)

    def print_function(self, node: Function) -> str:
        params = f"({' '.join(node.params)})"
        return self.parenthesize("function", node.name, params, node.body)

    def print_class(self, node: Class) -> str:
        parts: list[Node | str | None] = [node.name]
        if node.superclass is not None:
            parts.append(f"< {node.superclass}")
        parts.extend(node.methods)
        return self.parenthesize("class", *parts)

    def print_expression(self, node: Expression) -> str:
        return self.parenthesize(";", node.expr)

    def print_print(self, node: Print) -> str:
        return self.parenthesize("print", node.expr)

    def print_return(self, node: Return) -> str:
        return self.parenthesize("return", node.value)

    def print_if(self, node: If) -> str:
        if node.else_branch is None:
            return self.parenthesize("if", node.condition, node.then_branch)
        return self.parenthesize("if", node.condition, node.then_branch, node.else_branch)

    def print_while(self, node: While) -> str:
        return self.parenthesize("while", node.condition, node.body)

    def print_for(self, node: For) -> str:
        return self.parenthesize(
            "for", node.initializer, node.condition, node.increment, node.body
        )

    def print_block(self, node: Block) -> str:
        return self.parenthesize("block", *node.statements)


__all__ = ["AstPrinter", "SYMBOLS"]
