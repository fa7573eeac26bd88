"""
Lexer (tokenizer) for the jon configuration syntax.

Supports:
- Punctuation: , : { } [ ]
- Significant newlines (used as separators, like commas)
- Single-line (//) and nested multi-line (/* */) comments
- Quoted strings ('...' or "...") and triple-quoted multi-line strings
- Binary, octal, hexadecimal and decimal integers, decimal floats,
  with optional underscore digit separators
- Reserved words: null, true, false, nan, inf, -inf
- Bare words (unquoted keys and text), emitted as strings
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator

from ..const import DEFAULT_FILENAME
from ..logging import get_logger
from .diagnostics import SourceError, Span


logger = get_logger("lexer")


class TokenKind(Enum):
    """Token kinds of the jon syntax."""

    EOF = auto()
    NEWLINE = auto()

    # Punctuation
    COMMA = auto()         # ,
    COLON = auto()         # :
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    LBRACKET = auto()      # [
    RBRACKET = auto()      # ]

    # Reserved words
    NULL = auto()
    FALSE = auto()
    TRUE = auto()
    NAN = auto()
    INF = auto()
    NEG_INF = auto()

    # Numbers
    BIN_INT = auto()       # 0b1010
    OCT_INT = auto()       # 0o17
    HEX_INT = auto()       # 0xFF
    DEC_INT = auto()       # -12, 1_000
    FLOAT = auto()         # 3.14

    # Quoted string, triple-quoted string or bare word
    STRING = auto()


INT_KINDS = {
    TokenKind.BIN_INT: 2,
    TokenKind.OCT_INT: 8,
    TokenKind.HEX_INT: 16,
    TokenKind.DEC_INT: 10,
}

INT_PREFIXES = {
    TokenKind.BIN_INT: "0b",
    TokenKind.OCT_INT: "0o",
    TokenKind.HEX_INT: "0x",
}


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""

    kind: TokenKind
    value: str
    span: Span

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.value!r}, {self.span.offset}+{self.span.length})"

    @property
    def int_base(self) -> int:
        """Radix of an integer token."""
        if self.kind not in INT_KINDS:
            raise ValueError(f"Token {self.kind.name} is not an integer")
        return INT_KINDS[self.kind]

    def describe(self) -> str:
        """Human-readable form used in error messages."""
        kind = self.kind
        if kind is TokenKind.EOF:
            return "end of input"
        if kind is TokenKind.NEWLINE:
            return "new line"
        if kind is TokenKind.STRING:
            return f"string '{self.value}'"
        if kind in INT_PREFIXES:
            return f"number `{INT_PREFIXES[kind]}{self.value}`"
        if kind in (TokenKind.DEC_INT, TokenKind.FLOAT):
            return f"number `{self.value}`"
        return f"`{self.value}`"


class LexError(SourceError):
    """Exception raised for malformed source text."""


class Lexer:
    """
    Tokenizer for the jon syntax.

    Example document:
        // service settings
        name: 'gateway'
        port: 8_080
        hosts: [alpha, beta]
        limits: { cpu: 0.5, mem: 0x4000_0000 }

    Lexing is a single forward scan. Errors are fatal: the first
    malformed construct raises LexError and no tokens are returned.
    """

    PUNCTUATION = {
        ",": TokenKind.COMMA,
        ":": TokenKind.COLON,
        "{": TokenKind.LBRACE,
        "}": TokenKind.RBRACE,
        "[": TokenKind.LBRACKET,
        "]": TokenKind.RBRACKET,
    }

    KEYWORDS = {
        "null": TokenKind.NULL,
        "false": TokenKind.FALSE,
        "true": TokenKind.TRUE,
        "nan": TokenKind.NAN,
        "inf": TokenKind.INF,
        "-inf": TokenKind.NEG_INF,
    }

    HIDDEN = " \t\r"
    QUOTES = "'\""

    # Characters that end a bare word
    WORD_TERMINATORS = ",:{}[]'\"\n"

    BASE_PREFIXES = {
        "b": (TokenKind.BIN_INT, "01", "binary"),
        "o": (TokenKind.OCT_INT, "01234567", "octal"),
        "x": (TokenKind.HEX_INT, "0123456789abcdefABCDEF", "hexadecimal"),
    }

    DECIMAL_DIGITS = "0123456789"

    def __init__(self, source: str, filename: str = DEFAULT_FILENAME):
        self.source = source.replace("\r\n", "\n")
        self.filename = filename
        self.pos = 0

    def _current(self) -> str:
        """Get current character or empty string if at end."""
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> str:
        """Peek at character at offset from current position."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _at_eof(self) -> bool:
        return self.pos >= len(self.source)

    def _starts_with(self, text: str) -> bool:
        return self.source.startswith(text, self.pos)

    def _error(self, message: str, offset: int | None = None, length: int = 1) -> LexError:
        if offset is None:
            offset = self.pos
        return LexError(message, Span(offset, length), self.source, self.filename)

    def _expected(self, expected: str) -> LexError:
        """Build an 'Expected X, got Y' error at the current position."""
        char = self._current()
        if not char:
            got = "end of input"
        elif char == "\n":
            got = "new line"
        else:
            got = f"`{char}`"
        return self._error(f"Expected {expected}, got {got}")

    def _token(self, kind: TokenKind, value: str, start: int, end: int | None = None) -> Token:
        if end is None:
            end = self.pos
        return Token(kind, value, Span(start, end - start))

    def _skip_hidden_and_comments(self) -> None:
        """Skip spaces, tabs, carriage returns and comments (not newlines)."""
        while not self._at_eof():
            char = self._current()
            if char in self.HIDDEN:
                self.pos += 1
            elif self._starts_with("//"):
                # The terminating newline is left for the tokenizer
                end = self.source.find("\n", self.pos)
                self.pos = len(self.source) if end == -1 else end
            elif self._starts_with("/*"):
                self._skip_block_comment()
            else:
                break

    def _skip_block_comment(self) -> None:
        """Skip a /* */ comment, honouring nested comments."""
        start = self.pos
        self.pos += 2
        depth = 1

        while not self._at_eof():
            if self._starts_with("/*"):
                depth += 1
                self.pos += 2
            elif self._starts_with("*/"):
                depth -= 1
                self.pos += 2
                if depth == 0:
                    return
            else:
                self.pos += 1

        raise self._error("Unterminated block comment", start, 2)

    def _read_string(self) -> Token:
        """Read a quoted or triple-quoted string literal."""
        quote = self._current()
        if self._starts_with(quote * 3):
            return self._read_multiline_string(quote)

        start = self.pos
        self.pos += 1
        content_start = self.pos

        while not self._at_eof():
            char = self._current()
            if char == quote:
                value = self.source[content_start:self.pos]
                self.pos += 1
                return self._token(TokenKind.STRING, value, start)
            if char == "\n":
                break
            self.pos += 1

        raise self._error("Unterminated string literal", start, self.pos - start)

    def _read_multiline_string(self, quote: str) -> Token:
        """Read a triple-quoted string; content is copied verbatim."""
        start = self.pos
        delimiter = quote * 3
        content_start = start + 3

        end = self.source.find(delimiter, content_start)
        if end == -1:
            raise self._error(f"Unterminated multi-line string, expected closing {delimiter}", start, 3)

        self.pos = end + 3
        return self._token(TokenKind.STRING, self.source[content_start:end], start)

    def _read_digits(self, digits: str, description: str) -> str:
        """
        Read one or more digits from the given set.

        Underscores are accepted between digits and dropped from the result.
        """
        if self._current() == "" or self._current() not in digits:
            raise self._expected(f"{description} digit")

        result = []
        while not self._at_eof():
            char = self._current()
            if char in digits:
                result.append(char)
                self.pos += 1
            elif char == "_" and self._peek() != "" and self._peek() in digits:
                self.pos += 1
            else:
                break

        return "".join(result)

    def _read_number(self) -> Token:
        """Read an integer or float literal with optional sign and base prefix."""
        start = self.pos
        sign = ""

        if self._current() in "+-":
            sign = self._current()
            self.pos += 1

        prefix = self._peek().lower()
        if self._current() == "0" and prefix in self.BASE_PREFIXES:
            kind, digits, name = self.BASE_PREFIXES[prefix]
            if sign:
                raise self._error(f"Signed {name} numbers are not allowed", start, self.pos - start + 2)
            self.pos += 2
            value = self._read_digits(digits, name)
            return self._token(kind, value, start)

        value = self._read_digits(self.DECIMAL_DIGITS, "decimal")
        if sign == "-":
            value = "-" + value

        if self._current() == ".":
            self.pos += 1
            fraction = self._read_digits(self.DECIMAL_DIGITS, "fractional")
            return self._token(TokenKind.FLOAT, f"{value}.{fraction}", start)

        return self._token(TokenKind.DEC_INT, value, start)

    def _read_word(self) -> Token:
        """Read a bare word: a reserved word or an unquoted string."""
        start = self.pos

        while not self._at_eof():
            char = self._current()
            if char in self.WORD_TERMINATORS or self._starts_with("//") or self._starts_with("/*"):
                break
            self.pos += 1

        # Leading whitespace is already skipped, trailing whitespace is not part of the word
        word = self.source[start:self.pos].rstrip(self.HIDDEN)
        end = start + len(word)

        kind = self.KEYWORDS.get(word, TokenKind.STRING)
        return self._token(kind, word, start, end)

    def _is_number_start(self) -> bool:
        char = self._current()
        if char in self.DECIMAL_DIGITS:
            return True
        return char in "+-" and self._peek() != "" and self._peek() in self.DECIMAL_DIGITS

    def next_token(self) -> Token:
        """Get the next token from the source."""
        self._skip_hidden_and_comments()

        if self._at_eof():
            return self._token(TokenKind.EOF, "", self.pos)

        char = self._current()
        start = self.pos

        if char == "\n":
            self.pos += 1
            return self._token(TokenKind.NEWLINE, "\n", start)

        if char in self.PUNCTUATION:
            self.pos += 1
            return self._token(self.PUNCTUATION[char], char, start)

        if char in self.QUOTES:
            return self._read_string()

        if self._is_number_start():
            return self._read_number()

        return self._read_word()

    def tokenize(self) -> Iterator[Token]:
        """Generate all tokens from the source, ending with EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                break

    def __iter__(self) -> Iterator[Token]:
        """Allow iteration over tokens."""
        return self.tokenize()


def tokenize(source: str, filename: str = DEFAULT_FILENAME) -> list[Token]:
    """Tokenize a source string into a list ending with an EOF token."""
    tokens = list(Lexer(source, filename))
    logger.debug(f"Lexed {len(tokens)} tokens from {filename}")
    return tokens
