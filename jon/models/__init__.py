"""
Data model for jon documents and schemas.
"""

from .value import KeyNotFound, TypeMismatch, Value, ValueAccessError, ValueKind

__all__ = [
    "Value",
    "ValueKind",
    "ValueAccessError",
    "TypeMismatch",
    "KeyNotFound",
]
