# packages/dbfcodec/src/dbfcodec/header.py
# -----------------------------------------------------------------------------
# En-tête fixe de 32 octets (offset 0 du .dbf)
#
#   off  len  champ
#   0    1    version (type de fichier)
#   1    3    date de dernière mise à jour (YY-1900, MM, DD)
#   4    4    nombre d'enregistrements        (u32 LE)
#   8    2    offset du premier enregistrement (u16 LE)
#   10   2    taille d'un enregistrement       (u16 LE)
#   12   2    réservé
#   14   1    transaction incomplète (!= 0)
#   15   1    flag de chiffrement (brut)
#   16   12   réservé
#   28   1    table flags
#   29   1    code page mark
#   30   2    réservé
#
# Les zones réservées sont ignorées à la lecture et écrites à zéro.

from __future__ import annotations
import logging
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Optional

from .date import Date
from .errors import OutOfRangeError
from .streams import Source, as_source, read_exact
from .version import DBASE3, TableFlags, Version

__all__ = ["Header", "HEADER_SIZE", "pack_header", "unpack_header"]

log = logging.getLogger(__name__)

_LE = "<"  # little-endian
_LAYOUT = struct.Struct(_LE + "B 3s I H H 2x B B 12x B B 2x")
HEADER_SIZE = _LAYOUT.size  # 32

_U16 = 0xFFFF
_U32 = 0xFFFFFFFF


@dataclass(frozen=True)
class Header:
    file_type: Version
    last_update: Date
    num_records: int
    offset_to_first_record: int
    size_of_record: int
    is_transaction_incomplete: bool = False
    encryption_flag: int = 0
    table_flags: TableFlags = field(default_factory=TableFlags)
    code_page_mark: int = 0  # aussi appelé "language driver id"

    SIZE = HEADER_SIZE

    @classmethod
    def new(
        cls,
        num_records: int,
        offset: int,
        size_of_record: int,
        last_update: Optional[Date] = None,
    ) -> "Header":
        """Fresh header for a new table: dBase III without memo, flags cleared, dated today."""
        return cls(
            file_type=DBASE3,
            last_update=last_update if last_update is not None else Date.today(),
            num_records=num_records,
            offset_to_first_record=offset,
            size_of_record=size_of_record,
        )

    # ------------------------------------------------------------------ decode
    @classmethod
    def read_from(cls, source: BinaryIO) -> "Header":
        """Consume exactly HEADER_SIZE bytes from `source`."""
        buf = read_exact(source, HEADER_SIZE, "Header.read_from")
        (ver, date, num_records, offset, size, txn, enc, flags, cpm) = _LAYOUT.unpack(buf)
        h = cls(
            file_type=Version.from_byte(ver),
            last_update=Date.from_bytes(date),
            num_records=num_records,
            offset_to_first_record=offset,
            size_of_record=size,
            is_transaction_incomplete=txn != 0,
            encryption_flag=enc,
            table_flags=TableFlags(flags),
            code_page_mark=cpm,
        )
        log.debug("header read: %r", h)
        return h

    # ------------------------------------------------------------------ encode
    def to_bytes(self) -> bytes:
        """Serialize to exactly HEADER_SIZE bytes (reserved zones zeroed)."""
        _check("num_records", self.num_records, _U32)
        _check("offset_to_first_record", self.offset_to_first_record, _U16)
        _check("size_of_record", self.size_of_record, _U16)
        _check("encryption_flag", self.encryption_flag, 0xFF)
        _check("code_page_mark", self.code_page_mark, 0xFF)
        return _LAYOUT.pack(
            self.file_type.to_byte(),
            self.last_update.to_bytes(),
            self.num_records,
            self.offset_to_first_record,
            self.size_of_record,
            1 if self.is_transaction_incomplete else 0,
            self.encryption_flag,
            int(self.table_flags),
            self.code_page_mark,
        )

    def write_to(self, dest: BinaryIO) -> int:
        """Write the 32-byte header. Everything is validated before the single write."""
        b = self.to_bytes()
        dest.write(b)
        log.debug("header written: %d records, record size %d", self.num_records, self.size_of_record)
        return len(b)


def _check(name: str, v: int, hi: int) -> None:
    if not (0 <= int(v) <= hi):
        raise OutOfRangeError(f"Header.{name}={v} out of range [0..{hi}]")


def pack_header(h: Header) -> bytes:
    return h.to_bytes()


def unpack_header(b: Source) -> Header:
    """Decode the header found at the start of `b` (bytes or stream). Trailing bytes are ignored."""
    return Header.read_from(as_source(b))
