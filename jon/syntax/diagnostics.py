"""
Source positions and error presentation shared by the lexer and parser.

Errors carry a structured payload (offset, length, message). The
human-readable form with the offending source line and a caret pointer
is produced here, in one place, from that payload.
"""

from dataclasses import dataclass

from ..const import DEFAULT_FILENAME


@dataclass(frozen=True)
class Span:
    """
    Location of a lexeme in the normalized source.

    `offset` and `length` count characters, not bytes; byte_offset()
    converts for callers working with the UTF-8 encoded text.
    """

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    def byte_offset(self, source: str) -> int:
        """Offset of the span start in the UTF-8 encoding of source."""
        return len(source[: self.offset].encode("utf-8"))

    def __repr__(self) -> str:
        return f"Span({self.offset}, {self.length})"


def locate(source: str, offset: int) -> tuple[int, int]:
    """Return 1-based (line, column) for an offset into source."""
    offset = max(0, min(offset, len(source)))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def source_line(source: str, offset: int) -> str:
    """Return the full line of source containing offset, without newline."""
    offset = max(0, min(offset, len(source)))
    line_start = source.rfind("\n", 0, offset) + 1
    line_end = source.find("\n", offset)
    if line_end == -1:
        line_end = len(source)
    return source[line_start:line_end]


def format_pointer(source: str, span: Span) -> str:
    """
    Render the line containing span with carets under the lexeme:

        port: 0x1G
              ^^^
    """
    line = source_line(source, span.offset)
    _, column = locate(source, span.offset)
    col = column - 1
    # Spans running past the end of the line are clipped to it
    width = max(1, min(span.length, len(line) - col))
    return f"{line}\n{' ' * col}{'^' * width}"


class SourceError(Exception):
    """
    Base class for fatal errors tied to a position in the source text.

    Attributes:
        message: What was expected and what was found
        span: Location of the offending lexeme (character offsets)
        byte_offset: Start of the span in the UTF-8 encoded source
        source: Source text the span refers to
        filename: Name used in messages
    """

    def __init__(
        self,
        message: str,
        span: Span,
        source: str = "",
        filename: str = DEFAULT_FILENAME,
    ):
        self.message = message
        self.span = span
        self.source = source
        self.filename = filename
        self.line, self.column = locate(source, span.offset)
        self.byte_offset = span.byte_offset(source)
        super().__init__(self.render())

    def render(self) -> str:
        """Format the error with its line/column header and caret excerpt."""
        header = f"Line {self.line}, column {self.column}: {self.message}"
        if self.filename != DEFAULT_FILENAME:
            header = f"{self.filename}: {header}"
        if not self.source:
            return header
        return f"{header}\n{format_pointer(self.source, self.span)}"
