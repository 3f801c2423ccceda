# packages/dbfcodec/src/dbfcodec/fieldvalue.py
# -----------------------------------------------------------------------------
# Valeurs de champs (C, N, L, I, F, B, D) <-> octets d'un slot d'enregistrement.
#
# Le dispatch se fait par table : `_CODECS[FieldType] -> _FieldCodec(read, encode)`.
# Un type présent dans la taxonomie mais absent de la table (Memo, General,
# Currency, DateTime, types binaires réservés) lève UnsupportedFieldKindError.

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Dict, Optional

import numpy as np

from .config import DEFAULT_CONFIG, CodecConfig
from .date import TEXT_SIZE, Date
from .errors import (
    FieldEncodeError,
    FieldKindMismatchError,
    FieldOverflowError,
    NumericParseError,
    UnsupportedFieldKindError,
)
from .fieldtype import FieldType
from .streams import read_exact

__all__ = [
    "FieldDescriptor",
    "FieldValue",
    "read_field", "write_field", "encode_field",
    "supported_kinds",
]

_TRUE_BYTES = frozenset(b"1TtYy")

# Types binaires à largeur fixe (little-endian), indépendants de record_length
_BINARY_DTYPES: Dict[FieldType, np.dtype] = {
    FieldType.INTEGER: np.dtype("<i4"),
    FieldType.FLOAT: np.dtype("<f4"),
    FieldType.DOUBLE: np.dtype("<f8"),
}
_I32 = np.iinfo(np.int32)


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """Column metadata as parsed from the field-descriptor table (by the caller)."""

    name: str
    field_type: FieldType
    record_length: int
    decimal_count: int = 0

    def __post_init__(self) -> None:
        if not (0 <= self.record_length <= 0xFF):
            raise ValueError(f"FieldDescriptor.record_length must be in [0..255], got {self.record_length}")
        if not (0 <= self.decimal_count <= 0xFF):
            raise ValueError(f"FieldDescriptor.decimal_count must be in [0..255], got {self.decimal_count}")


@dataclass(frozen=True, slots=True)
class FieldValue:
    """
    Decoded value of one field of one record.

    `field_type` is the variant tag, `value` the payload:
      CHARACTER -> str, NUMERIC -> float, LOGICAL -> bool, INTEGER -> int (int32),
      FLOAT -> float (float32 precision), DOUBLE -> float, DATE -> Date.
    NUMERIC and DATE may hold None when blanks are read under blank_policy="none".
    """

    field_type: FieldType
    value: Any

    @classmethod
    def character(cls, text: str) -> "FieldValue":
        return cls(FieldType.CHARACTER, text)

    @classmethod
    def numeric(cls, x: Optional[float]) -> "FieldValue":
        return cls(FieldType.NUMERIC, x)

    @classmethod
    def logical(cls, b: Optional[bool]) -> "FieldValue":
        return cls(FieldType.LOGICAL, b)

    @classmethod
    def integer(cls, i: int) -> "FieldValue":
        return cls(FieldType.INTEGER, i)

    @classmethod
    def float32(cls, x: float) -> "FieldValue":
        return cls(FieldType.FLOAT, x)

    @classmethod
    def double(cls, x: float) -> "FieldValue":
        return cls(FieldType.DOUBLE, x)

    @classmethod
    def date(cls, d: Optional[Date]) -> "FieldValue":
        return cls(FieldType.DATE, d)

    @property
    def is_null(self) -> bool:
        return self.value is None

    # ------------------------------------------------------------------ I/O
    @classmethod
    def read_from(
        cls,
        source: BinaryIO,
        descriptor: FieldDescriptor,
        config: Optional[CodecConfig] = None,
    ) -> "FieldValue":
        return _codec_for(descriptor).read(source, descriptor, config or DEFAULT_CONFIG)

    def to_bytes(self, descriptor: FieldDescriptor, config: Optional[CodecConfig] = None) -> bytes:
        codec = _codec_for(descriptor)
        if self.field_type is not descriptor.field_type:
            raise FieldKindMismatchError(
                f"field {descriptor.name!r}: {self.field_type.value} value for a {descriptor.field_type.value} field"
            )
        return codec.encode(self.value, descriptor, config or DEFAULT_CONFIG)

    def write_to(
        self,
        dest: BinaryIO,
        descriptor: FieldDescriptor,
        config: Optional[CodecConfig] = None,
    ) -> int:
        """Encode then write in one call; nothing reaches `dest` if encoding fails."""
        b = self.to_bytes(descriptor, config)
        dest.write(b)
        return len(b)


# -----------------------------------------------------------------------------
# Table de dispatch
# -----------------------------------------------------------------------------
Reader = Callable[[BinaryIO, FieldDescriptor, CodecConfig], FieldValue]
Encoder = Callable[[Any, FieldDescriptor, CodecConfig], bytes]


@dataclass(frozen=True)
class _FieldCodec:
    read: Reader
    encode: Encoder


def _codec_for(descriptor: FieldDescriptor) -> _FieldCodec:
    codec = _CODECS.get(descriptor.field_type)
    if codec is None:
        raise UnsupportedFieldKindError(descriptor.field_type.value, descriptor.name)
    return codec


def _what(d: FieldDescriptor) -> str:
    return f"field {d.name!r}"


def _read_text(source: BinaryIO, d: FieldDescriptor, cfg: CodecConfig) -> str:
    raw = read_exact(source, d.record_length, _what(d))
    return raw.decode(cfg.encoding, errors=cfg.errors)


def _fit(d: FieldDescriptor, b: bytes, cfg: CodecConfig, right: bool = False) -> bytes:
    """Pad `b` to the slot width with the configured pad byte."""
    if len(b) > d.record_length:
        raise FieldOverflowError(f"{_what(d)}: {len(b)} bytes do not fit in {d.record_length}")
    return b.rjust(d.record_length, cfg.pad_byte) if right else b.ljust(d.record_length, cfg.pad_byte)


def _encode_text(d: FieldDescriptor, text: str, cfg: CodecConfig) -> bytes:
    try:
        return text.encode(cfg.encoding)
    except UnicodeEncodeError as e:
        raise FieldEncodeError(f"{_what(d)}: {text!r} not representable in {cfg.encoding}") from e


def _expect(d: FieldDescriptor, v: Any, types: tuple, allow_none: bool = False) -> None:
    if v is None and allow_none:
        return
    if isinstance(v, bool) and bool not in types:
        raise FieldKindMismatchError(f"{_what(d)}: bool given for {d.field_type.value}")
    if not isinstance(v, types):
        raise FieldKindMismatchError(f"{_what(d)}: {type(v).__name__} given for {d.field_type.value}")


# ---- Logical (1 octet)
def _read_logical(source: BinaryIO, d: FieldDescriptor, cfg: CodecConfig) -> FieldValue:
    (b,) = read_exact(source, 1, _what(d))
    return FieldValue.logical(b in _TRUE_BYTES)


def _encode_logical(v: Any, d: FieldDescriptor, cfg: CodecConfig) -> bytes:
    _expect(d, v, (bool, np.bool_), allow_none=True)
    if v is None:
        return b"?"  # non initialisé
    return b"T" if v else b"F"


# ---- Integer / Float / Double (binaire LE, largeur fixe)
def _binary_reader(kind: FieldType) -> Reader:
    dt = _BINARY_DTYPES[kind]
    cast = int if kind is FieldType.INTEGER else float

    def read(source: BinaryIO, d: FieldDescriptor, cfg: CodecConfig) -> FieldValue:
        buf = read_exact(source, dt.itemsize, _what(d))
        return FieldValue(kind, cast(np.frombuffer(buf, dtype=dt)[0]))

    return read


def _encode_integer(v: Any, d: FieldDescriptor, cfg: CodecConfig) -> bytes:
    _expect(d, v, (int, np.integer))
    if not (_I32.min <= int(v) <= _I32.max):
        raise FieldOverflowError(f"{_what(d)}: {v} does not fit in a signed 32-bit integer")
    return np.array([v], dtype=_BINARY_DTYPES[FieldType.INTEGER]).tobytes()


def _binary_float_encoder(kind: FieldType) -> Encoder:
    dt = _BINARY_DTYPES[kind]

    def encode(v: Any, d: FieldDescriptor, cfg: CodecConfig) -> bytes:
        _expect(d, v, (int, float, np.integer, np.floating))
        try:
            with np.errstate(over="ignore"):
                arr = np.array([v], dtype=dt)
        except OverflowError:
            raise FieldOverflowError(f"{_what(d)}: {v} overflows {dt.name}") from None
        if np.isinf(arr[0]) and not (isinstance(v, (float, np.floating)) and np.isinf(v)):
            raise FieldOverflowError(f"{_what(d)}: {v} overflows {dt.name}")
        return arr.tobytes()

    return encode


# ---- Character (texte, trim des deux côtés)
def _read_character(source: BinaryIO, d: FieldDescriptor, cfg: CodecConfig) -> FieldValue:
    return FieldValue.character(_read_text(source, d, cfg).strip())


def _encode_character(v: Any, d: FieldDescriptor, cfg: CodecConfig) -> bytes:
    _expect(d, v, (str,))
    return _fit(d, _encode_text(d, v, cfg), cfg)


# ---- Numeric (texte décimal, cadré à droite)
def _read_numeric(source: BinaryIO, d: FieldDescriptor, cfg: CodecConfig) -> FieldValue:
    text = _read_text(source, d, cfg).strip()
    if not text and cfg.blanks_are_none:
        return FieldValue.numeric(None)
    # float() tolère les "_" entre chiffres, pas le format dBase
    if "_" in text:
        raise NumericParseError(d.name, text, "not a decimal number")
    try:
        return FieldValue.numeric(float(text))
    except ValueError:
        raise NumericParseError(d.name, text, "not a decimal number") from None


def _encode_numeric(v: Any, d: FieldDescriptor, cfg: CodecConfig) -> bytes:
    _expect(d, v, (int, float, np.integer, np.floating), allow_none=True)
    if v is None:
        return cfg.pad_byte * d.record_length
    dec = getattr(d, "decimal_count", 0)
    if isinstance(v, (int, np.integer)) and dec == 0:
        # pas de passage par float : exact au-delà de 2**53
        text = str(int(v))
    else:
        try:
            x = float(v)
        except OverflowError:
            raise FieldOverflowError(f"{_what(d)}: {v} does not fit in a float") from None
        if not math.isfinite(x):
            raise FieldEncodeError(f"{_what(d)}: {v} has no dBase numeric text form")
        text = f"{x:.{dec}f}"
    return _fit(d, _encode_text(d, text, cfg), cfg, right=True)


# ---- Date (texte "YYYYMMDD")
def _read_date(source: BinaryIO, d: FieldDescriptor, cfg: CodecConfig) -> FieldValue:
    text = _read_text(source, d, cfg)
    if cfg.blanks_are_none and not text.strip():
        return FieldValue.date(None)
    return FieldValue.date(Date.from_str(text, field=d.name))


def _encode_date(v: Any, d: FieldDescriptor, cfg: CodecConfig) -> bytes:
    _expect(d, v, (Date,), allow_none=True)
    if v is None:
        return cfg.pad_byte * d.record_length
    v.validate()
    if d.record_length < TEXT_SIZE:
        raise FieldOverflowError(f"{_what(d)}: date needs {TEXT_SIZE} bytes, slot has {d.record_length}")
    return _fit(d, str(v).encode("ascii"), cfg)


_CODECS: Dict[FieldType, _FieldCodec] = {
    FieldType.LOGICAL: _FieldCodec(_read_logical, _encode_logical),
    FieldType.INTEGER: _FieldCodec(_binary_reader(FieldType.INTEGER), _encode_integer),
    FieldType.FLOAT: _FieldCodec(_binary_reader(FieldType.FLOAT), _binary_float_encoder(FieldType.FLOAT)),
    FieldType.DOUBLE: _FieldCodec(_binary_reader(FieldType.DOUBLE), _binary_float_encoder(FieldType.DOUBLE)),
    FieldType.CHARACTER: _FieldCodec(_read_character, _encode_character),
    FieldType.NUMERIC: _FieldCodec(_read_numeric, _encode_numeric),
    FieldType.DATE: _FieldCodec(_read_date, _encode_date),
}


def supported_kinds() -> frozenset:
    """Field kinds that have a value codec."""
    return frozenset(_CODECS)


# Alias fonctionnels
def read_field(
    source: BinaryIO, descriptor: FieldDescriptor, config: Optional[CodecConfig] = None
) -> FieldValue:
    return FieldValue.read_from(source, descriptor, config)


def encode_field(
    value: FieldValue, descriptor: FieldDescriptor, config: Optional[CodecConfig] = None
) -> bytes:
    return value.to_bytes(descriptor, config)


def write_field(
    dest: BinaryIO, value: FieldValue, descriptor: FieldDescriptor, config: Optional[CodecConfig] = None
) -> int:
    return value.write_to(dest, descriptor, config)
