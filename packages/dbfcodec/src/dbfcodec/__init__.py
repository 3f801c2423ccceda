# packages/dbfcodec/src/dbfcodec/__init__.py
from __future__ import annotations

"""dbfcodec - codec dBase/FoxBase (public surface).

En-tête 32 octets, version / table flags, date packée, taxonomie des types de
champs et codec de valeurs par type. La lecture de la table des descripteurs,
les fichiers memo/index et l'ouverture des fichiers restent à l'appelant.
"""

__version__ = "0.3.0"

from .config import CodecConfig, DEFAULT_CONFIG
from .errors import (
    DbfCodecError,
    TruncatedInputError,
    InvalidFieldTypeError,
    InvalidDateError,
    FieldParseError, NumericParseError, DateParseError,
    UnsupportedFieldKindError,
    UnknownVersionError,
    OutOfRangeError,
    FieldEncodeError, FieldOverflowError, FieldKindMismatchError,
)
from .date import Date
from .version import Version, VersionKind, TableFlags, FOXBASE, DBASE3, DBASE3_MEMO
from .fieldtype import FieldType
from .header import Header, HEADER_SIZE, pack_header, unpack_header
from .fieldvalue import FieldDescriptor, FieldValue, read_field, write_field, encode_field, supported_kinds
from .record import Record, decode_record, encode_record, record_size

__all__ = [
    "__version__",
    "CodecConfig", "DEFAULT_CONFIG",
    # erreurs
    "DbfCodecError", "TruncatedInputError", "InvalidFieldTypeError", "InvalidDateError",
    "FieldParseError", "NumericParseError", "DateParseError",
    "UnsupportedFieldKindError", "UnknownVersionError", "OutOfRangeError",
    "FieldEncodeError", "FieldOverflowError", "FieldKindMismatchError",
    # en-tête
    "Date", "Version", "VersionKind", "TableFlags", "FOXBASE", "DBASE3", "DBASE3_MEMO",
    "Header", "HEADER_SIZE", "pack_header", "unpack_header",
    # champs
    "FieldType", "FieldDescriptor", "FieldValue",
    "read_field", "write_field", "encode_field", "supported_kinds",
    "Record", "decode_record", "encode_record", "record_size",
]
