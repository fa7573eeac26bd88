"""
Pytest configuration and fixtures.
"""

from pathlib import Path
from typing import Callable

import pytest

from jon import Value, parse


@pytest.fixture
def age_schema() -> Value:
    """Object schema with a single bounded int property."""
    return parse("{type: 'object', props: {age: {type: 'int', maxi: 18}}}")


@pytest.fixture
def write_document(tmp_path: Path) -> Callable[[str, str], Path]:
    """Factory writing a document into the test's temporary directory."""

    def write(name: str, text: str) -> Path:
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path

    return write
