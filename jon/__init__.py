"""
jon: a JSON-superset configuration format.

Usage:
    import jon

    doc = jon.parse(text)
    port = doc.at("port").as_int()

    schema = jon.load_file("service.schema.jon")
    result = jon.validate(doc, schema)
    for violation in result:
        print(violation)
"""

from .const import APP_VERSION
from .models.value import KeyNotFound, TypeMismatch, Value, ValueAccessError, ValueKind
from .schema import SchemaValidator, ValidationResult, Violation, validate
from .syntax.lexer import LexError, Token, TokenKind, tokenize
from .syntax.loader import DocumentLoader, LoadError, load_file
from .syntax.parser import ParseError, parse
from .syntax.writer import dumps

__version__ = APP_VERSION

__all__ = [
    "__version__",
    "parse",
    "dumps",
    "tokenize",
    "load_file",
    "validate",
    "Value",
    "ValueKind",
    "Token",
    "TokenKind",
    "DocumentLoader",
    "SchemaValidator",
    "ValidationResult",
    "Violation",
    "LexError",
    "ParseError",
    "LoadError",
    "ValueAccessError",
    "TypeMismatch",
    "KeyNotFound",
]
