"""Runtime value helpers for the Sanskriti interpreter.

Values are plain Python objects: numbers are `float`, strings are `str`,
booleans are `bool` and the null sentinel is the `NIL` instance of
`NilVal`. The helpers in this module implement the language rules for
truthiness, equality and display on top of that representation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional


class NilVal:
    """Marker object for the Sanskriti `nil` value."""
    _instance: Optional['NilVal'] = None

    def __new__(cls) -> 'NilVal':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'nil'


NIL = NilVal()


@dataclass
class ErrorVal:
    """Structured payload carried by every pipeline error.

    `name` is the error category (e.g. 'LexError', 'TypeError'),
    `message` the human readable description and `line` the source line
    the error was detected on.
    """
    name: str
    message: str
    line: Optional[int] = None

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r}, line={self.line!r})"


def is_number(value: Any) -> bool:
    # bool is an int subclass, never a float, so this excludes booleans
    return isinstance(value, float)


def type_name(value: Any) -> str:
    if isinstance(value, bool):
        return 'Boolean'
    if isinstance(value, float):
        return 'Number'
    if isinstance(value, str):
        return 'String'
    if isinstance(value, NilVal):
        return 'Nil'
    return type(value).__name__


def is_truthy(value: Any) -> bool:
    """Only nil and false are falsey."""
    if isinstance(value, NilVal):
        return False
    if isinstance(value, bool):
        return value
    return True


def values_equal(a: Any, b: Any) -> bool:
    """Structural equality; values of different kinds are never equal."""
    if type(a) is not type(b):
        return False
    if isinstance(a, NilVal):
        return True
    return a == b


def format_number(n: float) -> str:
    if n.is_integer():
        return f"{n:.1f}"
    if not math.isfinite(n):
        return repr(n)
    # shortest round-trip digits, never in exponent form
    return format(Decimal(repr(n)), 'f')


def to_string(value: Any) -> str:
    """Convert a runtime value into its printed form."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, NilVal):
        return 'nil'
    return str(value)
