# packages/dbfcodec/src/dbfcodec/record.py
# -----------------------------------------------------------------------------
# Un enregistrement = 1 octet de suppression + un slot de `record_length`
# octets par descripteur, dans l'ordre de la table des champs.

from __future__ import annotations
import io
import logging
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional, Sequence

from .config import CodecConfig
from .errors import DbfCodecError, FieldOverflowError, TruncatedInputError
from .fieldvalue import FieldDescriptor, FieldValue

__all__ = ["Record", "DELETED", "ACTIVE", "record_size", "decode_record", "encode_record"]

log = logging.getLogger(__name__)

DELETED = b"*"
ACTIVE = b" "


@dataclass(eq=True)
class Record:
    deleted: bool = False
    values: Dict[str, FieldValue] = field(default_factory=dict)

    def __getitem__(self, name: str) -> FieldValue:
        return self.values[name]


def record_size(descriptors: Sequence[FieldDescriptor]) -> int:
    return 1 + sum(d.record_length for d in descriptors)


def _check_names(descriptors: Sequence[FieldDescriptor]) -> None:
    seen = set()
    for d in descriptors:
        if d.name in seen:
            raise DbfCodecError(f"duplicate field name {d.name!r}")
        seen.add(d.name)


def decode_record(
    raw: bytes,
    descriptors: Sequence[FieldDescriptor],
    config: Optional[CodecConfig] = None,
) -> Record:
    """
    Décode un enregistrement complet (octets bruts) avec la liste des descripteurs.

    Chaque champ est lu dans son propre slot : un type plus étroit que son slot
    (L, I, F, B) ne décale pas les champs suivants. Octets en surplus ignorés.
    """
    _check_names(descriptors)
    need = record_size(descriptors)
    if len(raw) < need:
        raise TruncatedInputError("decode_record", need, len(raw))
    deleted = raw[0:1] == DELETED
    if deleted:
        log.debug("record flagged deleted")
    values: Dict[str, FieldValue] = {}
    off = 1
    for d in descriptors:
        slot = raw[off:off + d.record_length]
        values[d.name] = FieldValue.read_from(io.BytesIO(slot), d, config)
        off += d.record_length
    return Record(deleted=deleted, values=values)


def encode_record(
    values: Mapping[str, FieldValue],
    descriptors: Sequence[FieldDescriptor],
    deleted: bool = False,
    config: Optional[CodecConfig] = None,
) -> bytes:
    """Packe les valeurs dans leurs slots ; les slots plus larges que la valeur sont complétés à zéro."""
    _check_names(descriptors)
    buf = io.BytesIO()
    buf.write(DELETED if deleted else ACTIVE)
    for d in descriptors:
        if d.name not in values:
            raise DbfCodecError(f"encode_record: missing value for field {d.name!r}")
        b = values[d.name].to_bytes(d, config)
        if len(b) > d.record_length:
            raise FieldOverflowError(f"field {d.name!r}: {len(b)} bytes do not fit in {d.record_length}")
        buf.write(b.ljust(d.record_length, b"\x00"))
    return buf.getvalue()
