"""
Tests for the parser.
"""

import math

import pytest

from jon import LexError, ParseError, Value, ValueKind, parse
from jon.syntax.lexer import tokenize
from jon.syntax.parser import Parser


@pytest.mark.parametrize(
    "source, expected",
    [
        ("0b101", 5),
        ("0o17", 15),
        ("0xFF", 255),
        ("-12", -12),
        ("1_000", 1000),
        ("+3", 3),
        ("9223372036854775807", 9223372036854775807),
        ("-9223372036854775808", -9223372036854775808),
        ("0x7FFF_FFFF_FFFF_FFFF", 9223372036854775807),
    ],
)
def test_integers(source: str, expected: int) -> None:
    value = parse(source)
    assert value.kind is ValueKind.INT
    assert value.as_int() == expected


def test_float() -> None:
    value = parse("3.14")
    assert value.kind is ValueKind.FLOAT
    assert value.as_float() == 3.14


def test_special_floats() -> None:
    assert math.isnan(parse("nan").as_float())
    assert parse("inf").as_float() == math.inf
    assert parse("-inf").as_float() == -math.inf


def test_scalars() -> None:
    assert parse("null").is_null()
    assert parse("true").as_bool() is True
    assert parse("false").as_bool() is False
    assert parse("'text'").as_string() == "text"
    assert parse("bare text").as_string() == "bare text"


@pytest.mark.parametrize("source", ["9223372036854775808", "-9223372036854775809", "0xFFFF_FFFF_FFFF_FFFF"])
def test_integer_overflow(source: str) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse(source)
    assert "does not fit in 64 bits" in exc_info.value.message


def test_object() -> None:
    value = parse("{name: 'jon', 'quoted key': 1, nested: {ok: true}}")
    assert value.kind is ValueKind.OBJECT
    assert list(value.as_object()) == ["name", "quoted key", "nested"]
    assert value.at("name").as_string() == "jon"
    assert value.at("quoted key").as_int() == 1
    assert value.at("nested").at("ok").as_bool() is True


def test_array() -> None:
    value = parse("[1, 'two', [3], {four: 4}, null]")
    items = value.as_array()
    assert len(items) == 5
    assert items[0] == Value.integer(1)
    assert items[1] == Value.string("two")
    assert items[2] == Value.array([Value.integer(3)])
    assert items[3].at("four").as_int() == 4
    assert items[4].is_null()


def test_empty_containers() -> None:
    assert parse("{}") == Value.object()
    assert parse("[]") == Value.array()
    assert parse("{\n\n}") == Value.object()
    assert parse("[,,]") == Value.array()


def test_separators_are_interchangeable() -> None:
    """Commas, newlines, comments and blank lines do not change the tree."""
    compact = parse("{a: 1, b: [1, 2, 3], c: {d: 'x'}}")
    spaced = parse(
        """
        // leading comment
        {
            a: 1

            b: [
                1
                2,
                3,
            ]
            /* block /* nested */ comment */
            c: {d: 'x'},,
        }
        """
    )
    assert compact == spaced


def test_bare_top_level_object() -> None:
    value = parse("type: 'object'\nprops: {\n}\n")
    assert value == Value.object({"type": Value.string("object"), "props": Value.object()})


def test_bare_top_level_object_with_commas() -> None:
    value = parse("a: 1, b: 2")
    assert value.at("a").as_int() == 1
    assert value.at("b").as_int() == 2


def test_root_may_be_any_value() -> None:
    assert parse("\n[1]\n").kind is ValueKind.ARRAY
    assert parse("42\n").kind is ValueKind.INT


def test_duplicate_key_is_rejected() -> None:
    source = "{a: 1, b: 2, a: 3}"
    with pytest.raises(ParseError) as exc_info:
        parse(source)

    error = exc_info.value
    assert error.message == "Duplicate key 'a'"
    assert error.span.offset == source.rindex("a")


def test_duplicate_key_in_bare_object_is_rejected() -> None:
    with pytest.raises(ParseError):
        parse("a: 1\na: 2")


def test_same_key_in_different_objects_is_allowed() -> None:
    value = parse("{a: {a: 1}, b: {a: 2}}")
    assert value.at("b").at("a").as_int() == 2


@pytest.mark.parametrize(
    "source, message",
    [
        ("", "Expected value, got end of input"),
        ("{a 1}", "Expected `:` after object key, got `}`"),
        ("{a: 1 b: 2}", "Expected `,`, new line or `}`, got string 'b'"),
        ("[1 2]", "Expected `,`, new line or `]`, got number `2`"),
        ("{a: 1", "Expected `,`, new line or `}`, got end of input"),
        ("{", "Expected object key or `}`, got end of input"),
        ("[1,", "Expected value, got end of input"),
        ("{1: 2}", "Expected object key or `}`, got number `1`"),
        ("{a: }", "Expected value, got `}`"),
        ("1 2", "Expected end of input, got number `2`"),
        ("]", "Expected value, got `]`"),
        ("{a:\n1}", "Expected value, got new line"),
    ],
)
def test_syntax_errors(source: str, message: str) -> None:
    with pytest.raises(ParseError) as exc_info:
        parse(source)
    assert exc_info.value.message == message


def test_parse_error_pointer() -> None:
    source = "{\n  port: 80\n  host 'x'\n}"
    with pytest.raises(ParseError) as exc_info:
        parse(source)

    assert str(exc_info.value) == (
        "Line 3, column 8: Expected `:` after object key, got string 'x'\n"
        "  host 'x'\n"
        "       ^^^"
    )


def test_error_offsets_in_characters_and_bytes() -> None:
    source = "{'é': 1 2}"
    with pytest.raises(ParseError) as exc_info:
        parse(source)

    error = exc_info.value
    assert error.span.offset == 8
    assert error.byte_offset == 9
    assert error.column == 9


def test_lex_errors_propagate() -> None:
    with pytest.raises(LexError):
        parse("{a: 'unterminated\n}")


def test_max_depth() -> None:
    assert parse("[[[1]]]", max_depth=3) == Value.from_python([[[1]]])
    with pytest.raises(ParseError) as exc_info:
        parse("[[[[1]]]]", max_depth=3)
    assert exc_info.value.message == "Maximum nesting depth of 3 exceeded"


def test_nesting_beyond_interpreter_stack_is_a_parse_error() -> None:
    source = "[" * 5000 + "]" * 5000
    with pytest.raises(ParseError) as exc_info:
        parse(source, max_depth=10000)
    assert "too deep to parse" in exc_info.value.message


def test_parser_accepts_token_list() -> None:
    source = "{a: [1, 2]}"
    value = Parser(tokenize(source), source).parse()
    assert value == Value.from_python({"a": [1, 2]})


def test_parser_requires_eof_terminated_stream() -> None:
    with pytest.raises(ValueError):
        Parser(tokenize("1")[:-1])


def test_multiline_string_value() -> None:
    value = parse("text: '''line1\nline2'''")
    assert value.at("text").as_string() == "line1\nline2"
