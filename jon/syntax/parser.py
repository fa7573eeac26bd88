"""
Recursive descent parser for the jon configuration syntax.

Consumes the token list produced by the lexer and builds one Value tree.
Commas and newlines are interchangeable entry separators; any number of
them may appear between, before or after entries.
"""

from typing import Sequence

from ..const import DEFAULT_FILENAME, DEFAULT_MAX_DEPTH, INT_MAX, INT_MIN
from ..logging import get_logger
from ..models.value import Value
from .diagnostics import SourceError
from .lexer import Lexer, Token, TokenKind


logger = get_logger("parser")


class ParseError(SourceError):
    """Exception raised for tokens that do not fit the grammar."""

    def __init__(self, message: str, token: Token, source: str = "", filename: str = DEFAULT_FILENAME):
        self.token = token
        super().__init__(message, token.span, source, filename)


SEPARATORS = (TokenKind.COMMA, TokenKind.NEWLINE)

SCALAR_KINDS = (
    TokenKind.NULL,
    TokenKind.TRUE,
    TokenKind.FALSE,
    TokenKind.NAN,
    TokenKind.INF,
    TokenKind.NEG_INF,
    TokenKind.BIN_INT,
    TokenKind.OCT_INT,
    TokenKind.HEX_INT,
    TokenKind.DEC_INT,
    TokenKind.FLOAT,
    TokenKind.STRING,
)


class Parser:
    """
    Recursive descent parser with one token of lookahead.

    Grammar:
        document := sep* (members | value) sep*
        value    := object | array | scalar
        object   := '{' sep* (member (sep+ member)*)? sep* '}'
        member   := STRING ':' value
        array    := '[' sep* (value (sep+ value)*)? sep* ']'
        scalar   := NULL | TRUE | FALSE | NAN | INF | NEG_INF
                  | BIN_INT | OCT_INT | HEX_INT | DEC_INT | FLOAT | STRING
        sep      := ',' | NEWLINE

    A document starting with `key:` is a top-level object without braces
    whose members run to the end of input. Duplicate keys are rejected.
    """

    def __init__(
        self,
        tokens: Sequence[Token],
        source: str = "",
        filename: str = DEFAULT_FILENAME,
        max_depth: int = DEFAULT_MAX_DEPTH,
    ):
        if not tokens or tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("Token stream must end with an EOF token")

        self.tokens = tokens
        self.source = source
        self.filename = filename
        self.max_depth = max_depth

        self.pos = 0
        self.depth = 0

    def _current(self) -> Token:
        return self.tokens[self.pos]

    def _peek(self) -> Token:
        return self.tokens[min(self.pos + 1, len(self.tokens) - 1)]

    def _advance(self) -> Token:
        """Advance to next token and return the previous one. Stops at EOF."""
        token = self.tokens[self.pos]
        if token.kind is not TokenKind.EOF:
            self.pos += 1
        return token

    def _check(self, *kinds: TokenKind) -> bool:
        return self._current().kind in kinds

    def _error(self, message: str, token: Token | None = None) -> ParseError:
        return ParseError(message, token or self._current(), self.source, self.filename)

    def _expected(self, expected: str) -> ParseError:
        return self._error(f"Expected {expected}, got {self._current().describe()}")

    def _expect(self, kind: TokenKind, expected: str) -> Token:
        """Expect current token to be of given kind, advance and return it."""
        if not self._check(kind):
            raise self._expected(expected)
        return self._advance()

    def _skip_separators(self) -> bool:
        """Skip commas and newlines. Returns True if any were skipped."""
        skipped = False
        while self._check(*SEPARATORS):
            self._advance()
            skipped = True
        return skipped

    def _enter(self, token: Token) -> None:
        self.depth += 1
        if self.depth > self.max_depth:
            raise self._error(f"Maximum nesting depth of {self.max_depth} exceeded", token)

    def _leave(self) -> None:
        self.depth -= 1

    def parse(self) -> Value:
        """Parse the entire document."""
        self._skip_separators()

        try:
            if self._check(TokenKind.STRING) and self._peek().kind is TokenKind.COLON:
                value = self._parse_members(TokenKind.EOF, "end of input")
            else:
                value = self._parse_value()
                self._skip_separators()
        except RecursionError:
            # max_depth set above what the interpreter stack can hold
            depth = self.depth
            self.depth = 0
            raise self._error(f"Nesting depth of {depth} is too deep to parse") from None

        self._expect(TokenKind.EOF, "end of input")
        logger.debug(f"Parsed {value.type_name} document from {self.filename}")
        return value

    def _parse_value(self) -> Value:
        if self._check(TokenKind.LBRACE):
            return self._parse_object()
        if self._check(TokenKind.LBRACKET):
            return self._parse_array()
        if self._check(*SCALAR_KINDS):
            return self._parse_scalar(self._advance())
        raise self._expected("value")

    def _parse_object(self) -> Value:
        opening = self._expect(TokenKind.LBRACE, "`{`")
        self._enter(opening)
        value = self._parse_members(TokenKind.RBRACE, "`}`")
        self._expect(TokenKind.RBRACE, "`}`")
        self._leave()
        return value

    def _parse_members(self, closing: TokenKind, closing_name: str) -> Value:
        """Parse object members up to (not including) the closing token."""
        members: dict[str, Value] = {}
        self._skip_separators()

        while not self._check(closing):
            key_token = self._expect(TokenKind.STRING, f"object key or {closing_name}")
            key = key_token.value
            if key in members:
                raise self._error(f"Duplicate key '{key}'", key_token)

            self._expect(TokenKind.COLON, "`:` after object key")
            members[key] = self._parse_value()

            if not self._skip_separators() and not self._check(closing):
                raise self._expected(f"`,`, new line or {closing_name}")

        return Value.object(members)

    def _parse_array(self) -> Value:
        opening = self._expect(TokenKind.LBRACKET, "`[`")
        self._enter(opening)
        items: list[Value] = []
        self._skip_separators()

        while not self._check(TokenKind.RBRACKET):
            items.append(self._parse_value())

            if not self._skip_separators() and not self._check(TokenKind.RBRACKET):
                raise self._expected("`,`, new line or `]`")

        self._expect(TokenKind.RBRACKET, "`]`")
        self._leave()
        return Value.array(items)

    def _parse_scalar(self, token: Token) -> Value:
        kind = token.kind

        if kind is TokenKind.NULL:
            return Value.null()
        if kind is TokenKind.TRUE:
            return Value.boolean(True)
        if kind is TokenKind.FALSE:
            return Value.boolean(False)
        if kind is TokenKind.NAN:
            return Value.floating(float("nan"))
        if kind is TokenKind.INF:
            return Value.floating(float("inf"))
        if kind is TokenKind.NEG_INF:
            return Value.floating(float("-inf"))
        if kind is TokenKind.FLOAT:
            return Value.floating(float(token.value))
        if kind is TokenKind.STRING:
            return Value.string(token.value)
        if kind in (TokenKind.BIN_INT, TokenKind.OCT_INT, TokenKind.HEX_INT, TokenKind.DEC_INT):
            number = int(token.value, token.int_base)
            if not INT_MIN <= number <= INT_MAX:
                raise self._error(f"Integer {token.describe()} does not fit in 64 bits", token)
            return Value.integer(number)

        raise AssertionError(f"Unhandled scalar token: {kind.name}")


def parse(text: str, filename: str = DEFAULT_FILENAME, max_depth: int = DEFAULT_MAX_DEPTH) -> Value:
    """
    Parse jon source text into a Value tree.

    Args:
        text: Source text
        filename: Filename for error messages
        max_depth: Maximum nesting of objects and arrays

    Returns:
        The document's root Value

    Raises:
        LexError: Malformed token
        ParseError: Tokens do not fit the grammar
    """
    lexer = Lexer(text, filename)
    tokens = list(lexer)
    logger.debug(f"Lexed {len(tokens)} tokens from {filename}")
    return Parser(tokens, lexer.source, filename, max_depth).parse()
