# packages/dbfcodec/src/dbfcodec/fieldtype.py
from __future__ import annotations
from enum import Enum
from typing import Optional, Union

from .errors import InvalidFieldTypeError

__all__ = ["FieldType"]


class FieldType(Enum):
    """Semantic kind of a column, keyed on disk by a one-character code."""

    CHARACTER = "Character"
    CURRENCY = "Currency"
    NUMERIC = "Numeric"
    FLOAT = "Float"
    DATE = "Date"
    DATETIME = "DateTime"
    DOUBLE = "Double"
    INTEGER = "Integer"
    LOGICAL = "Logical"
    MEMO = "Memo"
    GENERAL = "General"
    # Réservés : pas encore de code attribué, jamais produits au décodage
    BINARY_CHARACTER = "BinaryCharacter"
    BINARY_MEMO = "BinaryMemo"
    PICTURE = "Picture"
    VARBINARY = "Varbinary"
    BINARY_VARCHAR = "BinaryVarchar"

    @classmethod
    def from_code(cls, c: Union[str, bytes]) -> Optional["FieldType"]:
        """Advisory lookup: None when `c` is not one of the mapped codes."""
        if isinstance(c, (bytes, bytearray)):
            c = c.decode("latin-1")
        return _BY_CODE.get(c)

    @classmethod
    def try_from(cls, c: Union[str, bytes]) -> "FieldType":
        t = cls.from_code(c)
        if t is None:
            raise InvalidFieldTypeError(c)
        return t

    @property
    def code(self) -> Optional[str]:
        return _CODE_OF.get(self)

    @property
    def is_reserved(self) -> bool:
        return self not in _CODE_OF


_BY_CODE = {
    "C": FieldType.CHARACTER,
    "Y": FieldType.CURRENCY,
    "N": FieldType.NUMERIC,
    "F": FieldType.FLOAT,
    "D": FieldType.DATE,
    "T": FieldType.DATETIME,
    "B": FieldType.DOUBLE,
    "I": FieldType.INTEGER,
    "L": FieldType.LOGICAL,
    "M": FieldType.MEMO,
    "G": FieldType.GENERAL,
}
_CODE_OF = {t: c for c, t in _BY_CODE.items()}
