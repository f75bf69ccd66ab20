"""Small text helpers, data-type names and the help screen."""

from __future__ import annotations

import enum
import string
import sys
from pathlib import Path
from typing import TextIO

__all__ = ["QueryKind", "split", "to_upper", "is_known_data_type", "show_help"]

_KNOWN_DATA_TYPES = frozenset(
    {"VARCHAR", "INT", "INTEGER", "TEXT", "DECIMAL", "DOUBLE", "LONG"}
)

_ASCII_UPPER = str.maketrans(string.ascii_lowercase, string.ascii_uppercase)


class QueryKind(enum.Enum):
    """Whether a query only reads or also writes."""

    READ = 0
    WRITE = 1


def split(text: str, delimiter: str) -> list[str]:
    """Split on a single character, keeping empty fields."""
    if len(delimiter) != 1:
        raise ValueError("delimiter must be a single character")
    return text.split(delimiter)


def to_upper(text: str) -> str:
    """Upper-case the ASCII letters of ``text``."""
    return text.translate(_ASCII_UPPER)


def is_known_data_type(name: str) -> bool:
    """Tell whether ``name`` is one of the recognised column type names."""
    return name in _KNOWN_DATA_TYPES


def show_help(path: str | Path = "help.txt", out: TextIO | None = None) -> None:
    """Copy the help file line by line to ``out``."""
    target = sys.stdout if out is None else out
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            target.write(line.rstrip("\n") + "\n")