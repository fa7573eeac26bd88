"""
Serialization of Value trees back to jon text.

Output always parses back to an equal tree.
"""

import math
import re
from decimal import Decimal

from ..models.value import Value, ValueKind
from .lexer import Lexer


BARE_KEY = re.compile(r"[A-Za-z_][A-Za-z0-9_\-]*")


class Writer:
    """
    Pretty-printer for Value trees.

    Without indent, containers are written on one line with comma
    separators. With indent, each entry goes on its own line and newlines
    act as the separators.
    """

    def __init__(self, indent: int | str | None = None):
        if isinstance(indent, int):
            indent = " " * indent
        self.indent = indent

    def write(self, value: Value) -> str:
        return self._write(value, 0)

    def _write(self, value: Value, level: int) -> str:
        kind = value.kind

        if kind is ValueKind.NULL:
            return "null"
        if kind is ValueKind.BOOL:
            return "true" if value.data else "false"
        if kind is ValueKind.INT:
            return str(value.data)
        if kind is ValueKind.FLOAT:
            return format_float(value.data)
        if kind is ValueKind.STRING:
            return quote_string(value.data)
        if kind is ValueKind.OBJECT:
            entries = [
                f"{format_key(key)}: {self._write(member, level + 1)}"
                for key, member in value.data.items()
            ]
            return self._container("{", "}", entries, level)
        if kind is ValueKind.ARRAY:
            entries = [self._write(item, level + 1) for item in value.data]
            return self._container("[", "]", entries, level)

        raise AssertionError(f"Unhandled value kind: {kind}")

    def _container(self, opening: str, closing: str, entries: list[str], level: int) -> str:
        if not entries:
            return opening + closing
        if self.indent is None:
            return opening + ", ".join(entries) + closing

        inner = self.indent * (level + 1)
        lines = "\n".join(inner + entry for entry in entries)
        return f"{opening}\n{lines}\n{self.indent * level}{closing}"


def format_float(number: float) -> str:
    """Format a float so it always lexes as FLOAT (no exponent, has a dot)."""
    if math.isnan(number):
        return "nan"
    if math.isinf(number):
        return "inf" if number > 0 else "-inf"

    text = repr(number)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    if "." not in text:
        text += ".0"
    return text


def format_key(key: str) -> str:
    """Write a key bare when it would lex back as the same bare word."""
    if BARE_KEY.fullmatch(key) and key not in Lexer.KEYWORDS:
        return key
    return quote_string(key)


def quote_string(text: str) -> str:
    """
    Quote a string for output.

    Strings have no escape sequences, so the quote style is chosen to
    avoid the content: single, double, or triple quotes for text with
    newlines or both quote characters.
    """
    # The lexer folds CRLF line endings into LF
    if "\r\n" not in text:
        if "\n" not in text:
            for quote in "'\"":
                if quote not in text:
                    return f"{quote}{text}{quote}"

        for quote in "'\"":
            delimiter = quote * 3
            # A trailing quote would merge into the closing delimiter
            if delimiter not in text and not text.endswith(quote):
                return f"{delimiter}{text}{delimiter}"

    raise ValueError(f"String cannot be represented in jon syntax: {text!r}")


def dumps(value: Value, indent: int | str | None = None) -> str:
    """
    Serialize a Value tree to jon text.

    Args:
        value: Root value
        indent: Spaces (or indent string) per nesting level; None for one line

    Raises:
        ValueError: A string contains quote sequences that cannot be written
    """
    return Writer(indent).write(value)
