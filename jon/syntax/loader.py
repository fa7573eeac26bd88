"""
Document loader with file reading and error wrapping.
"""

from pathlib import Path
from typing import TextIO

from ..const import DEFAULT_FILENAME, DEFAULT_MAX_DEPTH
from ..logging import get_logger
from ..models.value import Value
from .lexer import LexError
from .parser import ParseError, parse


logger = get_logger("loader")


class LoadError(Exception):
    """Exception raised when a document cannot be read or parsed."""

    pass


class DocumentLoader:
    """
    Loads jon documents from files, strings or streams.

    Usage:
        loader = DocumentLoader()
        value = loader.load_file("settings.jon")
        # or
        value = loader.load_string(text)
    """

    def __init__(self, max_depth: int = DEFAULT_MAX_DEPTH, encoding: str = "utf-8"):
        self.max_depth = max_depth
        self.encoding = encoding
        self.last_value: Value | None = None

    def load_file(self, path: str | Path) -> Value:
        """
        Load a document from a file.

        Args:
            path: Path to the document

        Returns:
            Root Value of the document

        Raises:
            LoadError: If the file cannot be read or parsed
        """
        path = Path(path)

        if not path.exists():
            raise LoadError(f"Document not found: {path}")

        if not path.is_file():
            raise LoadError(f"Not a file: {path}")

        try:
            source = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Failed to read {path}: {e}") from e

        logger.debug(f"Loading document from {path}")
        return self.load_string(source, str(path))

    def load_string(self, source: str, filename: str = DEFAULT_FILENAME) -> Value:
        """
        Load a document from a string.

        Args:
            source: Document source text
            filename: Filename for error messages

        Raises:
            LoadError: If the document cannot be parsed
        """
        try:
            value = parse(source, filename, self.max_depth)
        except (LexError, ParseError) as e:
            raise LoadError(f"Failed to parse document: {e}") from e

        self.last_value = value
        return value

    def load_stream(self, stream: TextIO, filename: str = "<stdin>") -> Value:
        """Load a document from an open text stream."""
        try:
            source = stream.read()
        except (OSError, UnicodeDecodeError) as e:
            raise LoadError(f"Failed to read {filename}: {e}") from e
        return self.load_string(source, filename)


def load_file(path: str | Path) -> Value:
    """
    Parse a document file.

    Args:
        path: Path to the document

    Returns:
        Root Value of the document
    """
    return DocumentLoader().load_file(path)
