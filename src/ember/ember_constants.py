"""
Token vocabulary for the Ember language.

Token types are plain upper-case strings. `token_hashmap` maps every keyword and
operator lexeme to its canonical type and is shared by the lexer (longest-match
recognition) and the parser (operator groups per precedence level).

Exports:
    - token_hashmap
    - KEYWORDS, OPERATORS
    - ASSIGNMENT_OPS, EQUALITY_OPS, COMPARISON_OPS, TERM_OPS, FACTOR_OPS, UNARY_OPS
    - DEFAULT_MAX_DEPTH
"""

KEYWORDS: dict[str, str] = {
    "let": "LET",
    "const": "CONST",
    "class": "CLASS",
    "function": "FUNCTION",
    "print": "PRINT",
    "if": "IF",
    "else": "ELSE",
    "while": "WHILE",
    "for": "FOR",
    "return": "RETURN",
    "true": "TRUE",
    "false": "FALSE",
    "super": "SUPER",
    "this": "THIS",
    "and": "AND",
    "or": "OR",
    "not": "NOT",
    "xor": "XOR",
}

OPERATORS: dict[str, str] = {
    # Arithmetic
    "+": "PLUS",
    "-": "MINUS",
    "*": "TIMES",
    "/": "DIVIDE",
    "%": "MOD",
    # Bitwise (additive level)
    "&": "AND",
    "|": "OR",
    "^": "XOR",
    # Short-circuit
    "&&": "LAND",
    "||": "LOR",
    "!": "NOT",
    # Comparison
    "==": "EQ",
    "!=": "NE",
    "<": "LT",
    "<=": "LTE",
    ">": "GT",
    ">=": "GTE",
    # Assignment
    "=": "ASSIGN",
    "+=": "PLUS_EQ",
    "-=": "SUB_EQ",
    "*=": "MUL_EQ",
    "/=": "DIV_EQ",
    "%=": "MOD_EQ",
    "&=": "AND_EQ",
    "|=": "OR_EQ",
    "^=": "XOR_EQ",
    # Delimiters
    "(": "LPAREN",
    ")": "RPAREN",
    "{": "LBRACE",
    "}": "RBRACE",
    ",": "COMMA",
    ".": "DOT",
    ";": "SEMICOLON",
}

token_hashmap: dict[str, str] = {**KEYWORDS, **OPERATORS}

# Operator groups, lowest binding first
ASSIGNMENT_OPS: frozenset[str] = frozenset(
    {
        "ASSIGN",
        "PLUS_EQ",
        "SUB_EQ",
        "MOD_EQ",
        "DIV_EQ",
        "AND_EQ",
        "OR_EQ",
        "MUL_EQ",
        "XOR_EQ",
    }
)
EQUALITY_OPS: frozenset[str] = frozenset({"EQ", "NE"})
COMPARISON_OPS: frozenset[str] = frozenset({"GT", "GTE", "LT", "LTE"})
TERM_OPS: frozenset[str] = frozenset({"PLUS", "MINUS", "AND", "OR", "XOR"})
FACTOR_OPS: frozenset[str] = frozenset({"TIMES", "DIVIDE"})
UNARY_OPS: frozenset[str] = frozenset({"MINUS", "PLUS", "NOT"})

# Deep enough for real programs, shallow enough to stay clear of
# the default recursion limit (each parenthesized level costs ~11 frames).
DEFAULT_MAX_DEPTH = 64

__all__ = [
    "ASSIGNMENT_OPS",
    "COMPARISON_OPS",
    "DEFAULT_MAX_DEPTH",
    "EQUALITY_OPS",
    "FACTOR_OPS",
    "KEYWORDS",
    "OPERATORS",
    "TERM_OPS",
    "UNARY_OPS",
    "token_hashmap",
]
