# packages/dbfcodec/src/dbfcodec/date.py
# -----------------------------------------------------------------------------
# Date dBase : forme binaire 3 octets (en-tête) et forme texte "YYYYMMDD" (champs D)
# Décodage permissif, validation uniquement à l'encodage.

from __future__ import annotations
import datetime as _dt
from dataclasses import dataclass
from typing import BinaryIO

from .errors import DateParseError, InvalidDateError, TruncatedInputError
from .streams import read_exact

__all__ = ["Date", "PACKED_SIZE", "TEXT_SIZE", "YEAR_BASE", "YEAR_MAX"]

PACKED_SIZE = 3
TEXT_SIZE = 8
YEAR_BASE = 1900
YEAR_MAX = YEAR_BASE + 0xFF  # 2155


@dataclass(frozen=True, slots=True)
class Date:
    """Calendar date as stored by dBase. Components are kept verbatim, even out of range."""

    year: int
    month: int
    day: int

    # ------------------------------------------------------------------ decode
    @classmethod
    def from_bytes(cls, b: bytes) -> "Date":
        """[year-1900, month, day] → Date. No validation."""
        if len(b) != PACKED_SIZE:
            raise TruncatedInputError("Date.from_bytes", PACKED_SIZE, len(b))
        return cls(year=YEAR_BASE + b[0], month=b[1], day=b[2])

    @classmethod
    def read_from(cls, source: BinaryIO) -> "Date":
        return cls.from_bytes(read_exact(source, PACKED_SIZE, "Date.read_from"))

    @classmethod
    def from_str(cls, s: str, field: str = "") -> "Date":
        """
        Parse the "YYYYMMDD" text form.

        Each slice s[0:4], s[4:6], s[6:8] must be ASCII digits of exactly that
        width. Characters past index 8 are ignored. Month/day are not range checked.
        """
        parts = []
        for lo, hi in ((0, 4), (4, 6), (6, 8)):
            seg = s[lo:hi]
            if len(seg) != hi - lo or not (seg.isascii() and seg.isdigit()):
                raise DateParseError(field, s, f"chars {lo}..{hi} must be {hi - lo} decimal digits")
            parts.append(int(seg))
        return cls(*parts)

    # ------------------------------------------------------------------ encode
    def validate(self) -> None:
        parts = (self.year, self.month, self.day)
        if not all(isinstance(p, int) and not isinstance(p, bool) for p in parts):
            raise InvalidDateError(self)
        if not (0 <= self.month <= 12 and 0 <= self.day <= 31 and YEAR_BASE <= self.year <= YEAR_MAX):
            raise InvalidDateError(self)

    def to_bytes(self) -> bytes:
        self.validate()
        return bytes((self.year - YEAR_BASE, self.month, self.day))

    def write_to(self, dest: BinaryIO) -> int:
        """Validate, then write 3 bytes. Nothing is written on failure."""
        b = self.to_bytes()
        dest.write(b)
        return len(b)

    def __str__(self) -> str:
        return f"{self.year:04d}{self.month:02d}{self.day:02d}"

    # --------------------------------------------------------- datetime bridge
    @classmethod
    def from_date(cls, d: _dt.date) -> "Date":
        return cls(d.year, d.month, d.day)

    @classmethod
    def today(cls) -> "Date":
        return cls.from_date(_dt.date.today())

    def to_date(self) -> _dt.date:
        try:
            return _dt.date(self.year, self.month, self.day)
        except ValueError:
            raise InvalidDateError(self) from None
