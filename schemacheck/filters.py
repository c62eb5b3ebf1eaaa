# File: schemacheck/filters.py
"""
SchemaCheck - Input Filters
============================
Grammars for text inputs of the schema editor.  Every filter answers two
questions about a string:

- ``check(value)``: does the value belong to the grammar?
- ``fix(value)``: what is the closest string that does (or gets closer)?

The validators only ever call ``check``; ``fix`` exists for live input
sanitisation in the editor.  An empty string always passes ``check``,
emptiness is the concern of the "required" rules.

``fix`` is idempotent for every filter: ``fix(fix(x)) == fix(x)``.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("schemacheck.filters")

# ---------------------------------------------------------------------------
# Regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

_INTEGER_RE: re.Pattern[str] = re.compile(r"-?[0-9]*")
_UNSIGNED_INTEGER_RE: re.Pattern[str] = re.compile(r"[0-9]*")
_FLOAT_RE: re.Pattern[str] = re.compile(r"-?[0-9]*[.,]?[0-9]*")
_CURRENCY_RE: re.Pattern[str] = re.compile(r"-?[0-9]*[.,]?[0-9]{0,2}")
_LATIN_RE: re.Pattern[str] = re.compile(r"[a-zA-Z]*")
_HEX_RE: re.Pattern[str] = re.compile(r"[0-9a-f]*", re.IGNORECASE)
_NON_WHITESPACE_RE: re.Pattern[str] = re.compile(r"(?:[a-zA-Z][a-zA-Z0-9_-]*)?")
_IDENTIFIER_RE: re.Pattern[str] = re.compile(r"(?:[a-zA-Z][a-zA-Z0-9_]*)?")

_NON_DIGIT_RE: re.Pattern[str] = re.compile(r"[^0-9]")
_NON_NUMERIC_RE: re.Pattern[str] = re.compile(r"[^0-9.,-]")
_EXTRA_FRACTION_RE: re.Pattern[str] = re.compile(r"([.,][0-9]{2})[0-9]+")
_NON_LATIN_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z]")
_NON_HEX_RE: re.Pattern[str] = re.compile(r"[^0-9a-fA-F]")
_NON_WHITESPACE_INVALID_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9_-]")
_IDENTIFIER_INVALID_RE: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9_]")
_LEADING_NON_LETTERS_RE: re.Pattern[str] = re.compile(r"^[^a-zA-Z]+")


# ---------------------------------------------------------------------------
# Filter container
# ---------------------------------------------------------------------------


class InputFilter:
    """A named ``check`` / ``fix`` pair over strings."""

    __slots__ = ("name", "_check", "_fix")

    def __init__(
        self,
        name: str,
        check: Callable[[str], bool],
        fix: Callable[[str], str],
    ) -> None:
        self.name: str = name
        self._check: Callable[[str], bool] = check
        self._fix: Callable[[str], str] = fix

    def check(self, value: str) -> bool:
        return self._check(value)

    def fix(self, value: str) -> str:
        return self._fix(value)

    def __call__(self, value: str) -> bool:
        return self._check(value)

    def __repr__(self) -> str:
        return f"<InputFilter {self.name}>"


def _matches(pattern: re.Pattern[str]) -> Callable[[str], bool]:
    return lambda value: pattern.fullmatch(value) is not None


def _strips(pattern: re.Pattern[str]) -> Callable[[str], str]:
    return lambda value: pattern.sub("", value)


# ---------------------------------------------------------------------------
# Fixers that need more than a single substitution
# ---------------------------------------------------------------------------


def _fix_integer(value: str) -> str:
    digits: str = _NON_DIGIT_RE.sub("", value)
    return f"-{digits}" if value.startswith("-") else digits


def _fix_currency(value: str) -> str:
    return _EXTRA_FRACTION_RE.sub(r"\1", _NON_NUMERIC_RE.sub("", value))


def _fix_leading_letter(invalid: re.Pattern[str]) -> Callable[[str], str]:
    return lambda value: _LEADING_NON_LETTERS_RE.sub("", invalid.sub("", value))


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

INTEGER: InputFilter = InputFilter("integer", _matches(_INTEGER_RE), _fix_integer)

UNSIGNED_INTEGER: InputFilter = InputFilter(
    "unsignedInteger", _matches(_UNSIGNED_INTEGER_RE), _strips(_NON_DIGIT_RE)
)

FLOAT: InputFilter = InputFilter("float", _matches(_FLOAT_RE), _strips(_NON_NUMERIC_RE))

CURRENCY: InputFilter = InputFilter("currency", _matches(_CURRENCY_RE), _fix_currency)

LATIN: InputFilter = InputFilter("latin", _matches(_LATIN_RE), _strips(_NON_LATIN_RE))

HEX: InputFilter = InputFilter("hex", _matches(_HEX_RE), _strips(_NON_HEX_RE))

NON_WHITESPACE: InputFilter = InputFilter(
    "nonWhitespace",
    _matches(_NON_WHITESPACE_RE),
    _fix_leading_letter(_NON_WHITESPACE_INVALID_RE),
)

# The identifier grammar every model, field and association name must follow.
MODEL_INFO: InputFilter = InputFilter(
    "modelInfo",
    _matches(_IDENTIFIER_RE),
    _fix_leading_letter(_IDENTIFIER_INVALID_RE),
)


def limited_integer(max_value: int) -> InputFilter:
    """
    Unsigned integers not greater than ``max_value``.

    ``fix`` strips non-digits and clamps to ``max_value``.
    """

    def check(value: str) -> bool:
        if _UNSIGNED_INTEGER_RE.fullmatch(value) is None:
            return False
        return value == "" or int(value) <= max_value

    def fix(value: str) -> str:
        cleaned: str = _NON_DIGIT_RE.sub("", value)
        if cleaned and int(cleaned) > max_value:
            return str(max_value)
        return cleaned

    return InputFilter(f"limitedInteger({max_value})", check, fix)


INPUT_FILTERS: Dict[str, InputFilter] = {
    f.name: f
    for f in (
        INTEGER,
        UNSIGNED_INTEGER,
        FLOAT,
        CURRENCY,
        LATIN,
        HEX,
        NON_WHITESPACE,
        MODEL_INFO,
    )
}


def is_identifier(value: str) -> bool:
    """Shorthand for ``MODEL_INFO.check``."""
    return MODEL_INFO.check(value)


__all__: List[str] = [
    "InputFilter",
    "INTEGER",
    "UNSIGNED_INTEGER",
    "FLOAT",
    "CURRENCY",
    "LATIN",
    "HEX",
    "NON_WHITESPACE",
    "MODEL_INFO",
    "limited_integer",
    "INPUT_FILTERS",
    "is_identifier",
]
