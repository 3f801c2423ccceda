# packages/dbfcodec/src/dbfcodec/config.py
from __future__ import annotations
import codecs
import os
from dataclasses import dataclass

__all__ = ["CodecConfig", "DEFAULT_CONFIG", "BLANK_POLICIES"]

#: "error" : un champ N/D entièrement blanc lève une erreur de parse (historique)
#: "none"  : il est décodé comme valeur absente (FieldValue.value is None)
BLANK_POLICIES = ("error", "none")


@dataclass(frozen=True, slots=True)
class CodecConfig:
    """
    Configuration **publique et stable** du codec de valeurs.

    Champs
    ------
    encoding : str, default="utf-8"
        Codec texte des champs C/N/D (ex: "cp437", "cp1252", "utf-8").
        Doit être connu de `codecs.lookup`.
    errors : str, default="replace"
        Gestion des octets invalides au décodage des champs Character.
        Le décodage ne doit jamais échouer : "replace" substitue U+FFFD.
    blank_policy : str, default="error"
        Politique des champs Numeric/Date entièrement blancs (voir BLANK_POLICIES).
    pad_byte : bytes, default=b" "
        Octet de bourrage des slots texte à l'encodage.

    Notes
    -----
    - Immuable (`frozen=True`) : une même instance peut être partagée entre threads.
    - Les validations lèvent une `ValueError` si les bornes sont violées.
    """

    encoding: str = "utf-8"
    errors: str = "replace"
    blank_policy: str = "error"
    pad_byte: bytes = b" "

    def __post_init__(self) -> None:
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"CodecConfig.encoding: unknown codec {self.encoding!r}") from None
        try:
            codecs.lookup_error(self.errors)
        except LookupError:
            raise ValueError(f"CodecConfig.errors: unknown error handler {self.errors!r}") from None
        if self.blank_policy not in BLANK_POLICIES:
            raise ValueError(f"CodecConfig.blank_policy must be one of {BLANK_POLICIES}")
        if not isinstance(self.pad_byte, bytes) or len(self.pad_byte) != 1:
            raise ValueError("CodecConfig.pad_byte must be a single byte")

    @property
    def blanks_are_none(self) -> bool:
        return self.blank_policy == "none"

    @staticmethod
    def from_env() -> "CodecConfig":
        """Build a config from `DBFCODEC_ENCODING` / `DBFCODEC_BLANK_POLICY` (defaults otherwise)."""
        enc = os.getenv("DBFCODEC_ENCODING", "").strip() or "utf-8"
        policy = os.getenv("DBFCODEC_BLANK_POLICY", "").strip().lower() or "error"
        return CodecConfig(encoding=enc, blank_policy=policy)


DEFAULT_CONFIG = CodecConfig()
