import pytest
from hypothesis import given
from hypothesis import strategies as st

from ember.ember_constants import KEYWORDS
from ember.ember_errors import EmberError, ErrorKind
from ember.ember_lexer import CharacterStream, Lexer, Token, TokenBuffer, tokenize


def types(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    code = "+ - * / % & | ^ ! = < > ( ) { } , . ;"
    expected = [
        "PLUS",
        "MINUS",
        "TIMES",
        "DIVIDE",
        "MOD",
        "AND",
        "OR",
        "XOR",
        "NOT",
        "ASSIGN",
        "LT",
        "GT",
        "LPAREN",
        "RPAREN",
        "LBRACE",
        "RBRACE",
        "COMMA",
        "DOT",
        "SEMICOLON",
        "EOF",
    ]
    assert types(code) == expected


def test_compound_operators_use_longest_match() -> None:
    code = "+= -= *= /= %= &= |= ^= == != <= >= && ||"
    assert types(code)[:-1] == [
        "PLUS_EQ",
        "SUB_EQ",
        "MUL_EQ",
        "DIV_EQ",
        "MOD_EQ",
        "AND_EQ",
        "OR_EQ",
        "XOR_EQ",
        "EQ",
        "NE",
        "LTE",
        "GTE",
        "LAND",
        "LOR",
    ]


def test_adjacent_operators_without_spaces() -> None:
    assert types("a<=-b") == ["IDENT", "LTE", "MINUS", "IDENT", "EOF"]


@pytest.mark.parametrize("word,expected", sorted(KEYWORDS.items()))  # type: ignore[misc]
def test_keywords(word: str, expected: str) -> None:
    tok = Lexer(CharacterStream(word)).next_token()
    assert tok.type == expected
    assert tok.value == word


def test_identifier_token() -> None:
    tok = Lexer(CharacterStream("my_var2")).next_token()
    assert tok.type == "IDENT"
    assert tok.value == "my_var2"


def test_keyword_prefix_is_identifier() -> None:
    tok = Lexer(CharacterStream("letter")).next_token()
    assert tok == Token("IDENT", "letter", 1, 0, 6)


def test_number_tokens() -> None:
    tokens = tokenize("123 4.5")
    assert tokens[0] == Token("NUMBER", "123", 1, 0, 3)
    assert tokens[1] == Token("NUMBER", "4.5", 1, 4, 7)


def test_number_followed_by_member_access() -> None:
    assert types("1.foo") == ["NUMBER", "DOT", "IDENT", "EOF"]


def test_malformed_number_raises_syntax_error() -> None:
    with pytest.raises(EmberError) as exc:
        tokenize("1.2.3")
    assert exc.value.kind is ErrorKind.SYNTAX


def test_string_token() -> None:
    tok = Lexer(CharacterStream('"hello world"')).next_token()
    assert tok == Token("STRING", "hello world", 1, 0, 13)


def test_single_quoted_string() -> None:
    tok = Lexer(CharacterStream("'hi'")).next_token()
    assert tok.type == "STRING"
    assert tok.value == "hi"


def test_unterminated_string_raises() -> None:
    with pytest.raises(EmberError) as exc:
        tokenize('"oops')
    assert exc.value.kind is ErrorKind.SYNTAX
    assert exc.value.message == "Unterminated string"
    assert exc.value.span == (1, 0, 5)


def test_comments_and_whitespace_are_skipped() -> None:
    src = "# heading\nlet x; # trailing\n"
    assert types(src) == ["LET", "IDENT", "SEMICOLON", "EOF"]


def test_line_tracking_and_offsets() -> None:
    tokens = tokenize("a\n  b")
    assert tokens[0] == Token("IDENT", "a", 1, 0, 1)
    assert tokens[1] == Token("IDENT", "b", 2, 4, 5)


def test_unknown_character_becomes_error_token() -> None:
    tok = Lexer(CharacterStream("@")).next_token()
    assert tok.type == "ERROR"
    assert tok.value == "@"


def test_eof_repeats_after_end_of_input() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next_token().type == "IDENT"
    assert [lexer.next_token().type for _ in range(3)] == ["EOF", "EOF", "EOF"]


def test_token_is_compares_type_only() -> None:
    tok = Token("IDENT", "foo")
    assert tok.is_("IDENT")
    assert not tok.is_("NUMBER")
    assert tok != Token("IDENT", "bar")


def test_token_repr_and_hash() -> None:
    tok = Token("NUMBER", "1", 1, 0, 1)
    assert repr(tok) == "Token(NUMBER, 1)"
    assert len({tok, Token("NUMBER", "1", 1, 0, 1)}) == 1


def test_token_buffer_appends_and_repeats_eof() -> None:
    buf = TokenBuffer([Token("IDENT", "x", 1, 0, 1)])
    assert buf.next_token().type == "IDENT"
    eof = buf.next_token()
    assert eof == Token("EOF", "", 1, 1, 1)
    assert buf.next_token() == eof


def test_token_buffer_keeps_existing_eof() -> None:
    buf = TokenBuffer(tokenize("x"))
    assert len(buf.tokens) == 2


def test_empty_token_buffer() -> None:
    assert TokenBuffer([]).next_token().type == "EOF"


def test_character_stream_past_end_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(EOFError):
        stream.next()


@given(
    name=st.from_regex(r"[a-zA-Z_][a-zA-Z0-9_]{0,10}", fullmatch=True).filter(
        lambda x: x not in KEYWORDS
    )
)  # type: ignore[misc]
def test_identifiers_roundtrip(name: str) -> None:
    tok = Lexer(CharacterStream(name)).next_token()
    assert tok.type == "IDENT"
    assert tok.value == name
    assert (tok.start, tok.end) == (0, len(name))


@given(num=st.integers(min_value=0, max_value=10**9))  # type: ignore[misc]
def test_integer_literals(num: int) -> None:
    tok = Lexer(CharacterStream(str(num))).next_token()
    assert tok.type == "NUMBER"
    assert float(tok.value) == float(num)
