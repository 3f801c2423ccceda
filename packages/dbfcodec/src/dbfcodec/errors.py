# packages/dbfcodec/src/dbfcodec/errors.py
from __future__ import annotations

"""Exceptions du codec dBase/FoxBase.

Toutes dérivent de `DbfCodecError` (elle-même une `ValueError`), de sorte qu'un
appelant peut attraper l'ensemble du codec d'un seul `except`. Les erreurs
d'E/S du flux sous-jacent (OSError) ne sont pas ré-emballées.
"""

from typing import Any

__all__ = [
    "DbfCodecError",
    "TruncatedInputError",
    "InvalidFieldTypeError",
    "InvalidDateError",
    "FieldParseError", "NumericParseError", "DateParseError",
    "UnsupportedFieldKindError",
    "UnknownVersionError",
    "OutOfRangeError",
    "FieldEncodeError", "FieldOverflowError", "FieldKindMismatchError",
]


class DbfCodecError(ValueError):
    """Base class of every error raised by dbfcodec."""


class TruncatedInputError(DbfCodecError, EOFError):
    """The source ran out before the expected number of bytes."""

    def __init__(self, what: str, expected: int, got: int) -> None:
        super().__init__(f"{what}: expected {expected} bytes, got {got}")
        self.what = what
        self.expected = expected
        self.got = got


class InvalidFieldTypeError(DbfCodecError):
    def __init__(self, code: Any) -> None:
        super().__init__(f"invalid field type code {code!r}")
        self.code = code


class InvalidDateError(DbfCodecError):
    """Date components out of the encodable range (encode path only)."""

    def __init__(self, date: Any) -> None:
        super().__init__(f"invalid date {date!r}: need 1900 <= year <= 2155, month <= 12, day <= 31")
        self.date = date


class FieldParseError(DbfCodecError):
    """Stored text of a field could not be parsed."""

    def __init__(self, field: str, text: str, reason: str) -> None:
        super().__init__(f"field {field!r}: cannot parse {text!r} ({reason})")
        self.field = field
        self.text = text


class NumericParseError(FieldParseError):
    pass


class DateParseError(FieldParseError):
    pass


class UnsupportedFieldKindError(DbfCodecError):
    """The field kind is part of the taxonomy but has no value codec yet."""

    def __init__(self, kind: Any, field: str = "") -> None:
        where = f" (field {field!r})" if field else ""
        super().__init__(f"unsupported field kind {kind}{where}")
        self.kind = kind
        self.field = field


class UnknownVersionError(DbfCodecError):
    """Operation undefined for an unrecognized version byte."""

    def __init__(self, raw: int, op: str) -> None:
        super().__init__(f"{op}: undefined for unknown version byte 0x{raw:02X}")
        self.raw = raw


class OutOfRangeError(DbfCodecError):
    """Integer does not fit the fixed-width slot it must be packed into."""


class FieldEncodeError(DbfCodecError):
    """A value cannot be serialized into its field slot."""


class FieldOverflowError(FieldEncodeError):
    pass


class FieldKindMismatchError(FieldEncodeError):
    pass
