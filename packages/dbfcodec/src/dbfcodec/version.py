# packages/dbfcodec/src/dbfcodec/version.py
# -----------------------------------------------------------------------------
# Octet 0 de l'en-tête (type de fichier) et octet 28 (table flags).

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum

from .errors import UnknownVersionError

__all__ = ["VersionKind", "Version", "TableFlags", "FOXBASE", "DBASE3", "DBASE3_MEMO"]

log = logging.getLogger(__name__)


class VersionKind(Enum):
    FOXBASE = "FoxBase"
    DBASE3 = "dBase III"
    UNKNOWN = "unknown"


# octet -> (kind, has_memo)
_KNOWN = {
    0x02: (VersionKind.FOXBASE, False),
    0x03: (VersionKind.DBASE3, False),
    0x83: (VersionKind.DBASE3, True),
}


@dataclass(frozen=True, slots=True)
class Version:
    """
    File-type tag. `raw` is the byte as found on disk; for the known variants it
    is the canonical byte, for UNKNOWN it is kept so nothing is lost on decode.
    """

    kind: VersionKind
    raw: int

    def __post_init__(self) -> None:
        if not (0 <= self.raw <= 0xFF):
            raise ValueError(f"Version.raw out of byte range: {self.raw}")
        known = _KNOWN.get(self.raw)
        if self.kind is VersionKind.UNKNOWN:
            if known is not None:
                raise ValueError(f"Version: 0x{self.raw:02X} is a known version byte")
        elif known is None or known[0] is not self.kind:
            raise ValueError(f"Version: byte 0x{self.raw:02X} does not encode {self.kind.value}")

    @classmethod
    def from_byte(cls, b: int) -> "Version":
        """Never fails on a byte value: unrecognized bytes give an UNKNOWN version."""
        known = _KNOWN.get(b)
        if known is None:
            log.warning("Unknown version byte: 0x%02X", b)
            return cls(VersionKind.UNKNOWN, b)
        return cls(known[0], b)

    @classmethod
    def dbase3(cls, has_memo: bool) -> "Version":
        return cls(VersionKind.DBASE3, 0x83 if has_memo else 0x03)

    @classmethod
    def unknown(cls, raw: int) -> "Version":
        return cls(VersionKind.UNKNOWN, raw)

    @property
    def is_known(self) -> bool:
        return self.kind is not VersionKind.UNKNOWN

    def has_memo(self) -> bool:
        if self.kind is VersionKind.UNKNOWN:
            raise UnknownVersionError(self.raw, "Version.has_memo")
        return _KNOWN[self.raw][1]

    def to_byte(self) -> int:
        if self.kind is VersionKind.UNKNOWN:
            raise UnknownVersionError(self.raw, "Version.to_byte")
        return self.raw

    def __repr__(self) -> str:
        if self.kind is VersionKind.DBASE3:
            return f"Version.DBase3(has_memo={self.has_memo()})"
        if self.kind is VersionKind.UNKNOWN:
            return f"Version.Unknown(0x{self.raw:02X})"
        return "Version.FoxBase"


FOXBASE = Version(VersionKind.FOXBASE, 0x02)
DBASE3 = Version.dbase3(False)
DBASE3_MEMO = Version.dbase3(True)


@dataclass(frozen=True, slots=True)
class TableFlags:
    """Table flags byte. Bit tests only, any byte value is accepted."""

    raw: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.raw <= 0xFF):
            raise ValueError(f"TableFlags.raw out of byte range: {self.raw}")

    def has_structural_cdx(self) -> bool:
        return (self.raw & 0x01) == 1

    def has_memo_field(self) -> bool:
        return (self.raw & 0x02) == 2

    def is_a_database(self) -> bool:
        # bit 0 set AND bit 1 clear, not "any of the two"
        return (self.raw & 0x03) == 1

    def __int__(self) -> int:
        return self.raw
