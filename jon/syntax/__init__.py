"""
Text syntax: lexer, parser, writer and file loading.
"""

from .diagnostics import SourceError, Span
from .lexer import Lexer, LexError, Token, TokenKind, tokenize
from .loader import DocumentLoader, LoadError, load_file
from .parser import ParseError, Parser, parse
from .writer import Writer, dumps

__all__ = [
    "Span",
    "SourceError",
    "Lexer",
    "LexError",
    "Token",
    "TokenKind",
    "tokenize",
    "Parser",
    "ParseError",
    "parse",
    "Writer",
    "dumps",
    "DocumentLoader",
    "LoadError",
    "load_file",
]
