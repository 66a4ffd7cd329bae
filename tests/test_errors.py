import pytest

from ember.ember_errors import EmberError, ErrorKind


@pytest.mark.parametrize(
    "kind,label",
    [
        (ErrorKind.SYNTAX, "SyntaxError"),
        (ErrorKind.VALUE, "ValueError"),
        (ErrorKind.PARSE, "ParseError"),
        (ErrorKind.RUNTIME, "RuntimeError"),
        (ErrorKind.ZERO_DIVISION, "ZeroDivisionError"),
    ],
)  # type: ignore[misc]
def test_display_labels(kind: ErrorKind, label: str) -> None:
    err = EmberError(kind, "boom")
    assert str(err) == f"{label}: boom"


def test_zero_division_default_message() -> None:
    assert str(EmberError(ErrorKind.ZERO_DIVISION)) == "ZeroDivisionError: division by zero"


def test_span_and_attributes() -> None:
    err = EmberError(ErrorKind.PARSE, "Invalid assignment target", 4, 12, 13)
    assert err.kind is ErrorKind.PARSE
    assert err.message == "Invalid assignment target"
    assert err.span == (4, 12, 13)


def test_is_an_exception() -> None:
    with pytest.raises(EmberError, match="Expect expression"):
        raise EmberError(ErrorKind.PARSE, "Expect expression.")


def test_equality_and_hash() -> None:
    e1 = EmberError(ErrorKind.SYNTAX, "x", 1, 2, 3)
    e2 = EmberError(ErrorKind.SYNTAX, "x", 1, 2, 3)
    assert e1 == e2
    assert hash(e1) == hash(e2)
    assert e1 != EmberError(ErrorKind.PARSE, "x", 1, 2, 3)
    assert e1 != EmberError(ErrorKind.SYNTAX, "x", 1, 2, 4)
    assert e1 != "SyntaxError: x"


def test_repr() -> None:
    err = EmberError(ErrorKind.SYNTAX, "bad", 1, 0, 1)
    assert repr(err) == "EmberError(SYNTAX, 'bad', line=1, start=0, end=1)"
