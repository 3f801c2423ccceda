from __future__ import annotations
import logging

import pytest

from dbfcodec import DBASE3, DBASE3_MEMO, FOXBASE, TableFlags, UnknownVersionError, Version, VersionKind


def test_version_known_bytes():
    v = Version.from_byte(0x02)
    assert v == FOXBASE and v.kind is VersionKind.FOXBASE
    assert v.has_memo() is False

    v = Version.from_byte(0x03)
    assert v == DBASE3 == Version.dbase3(has_memo=False)
    assert v.has_memo() is False

    v = Version.from_byte(0x83)
    assert v == DBASE3_MEMO == Version.dbase3(has_memo=True)
    assert v.has_memo() is True


def test_version_encode_known():
    for b in (0x02, 0x03, 0x83):
        assert Version.from_byte(b).to_byte() == b


def test_version_unknown_keeps_byte_and_warns(caplog):
    with caplog.at_level(logging.WARNING, logger="dbfcodec.version"):
        v = Version.from_byte(0xFF)
    assert v.kind is VersionKind.UNKNOWN
    assert v.raw == 0xFF
    assert v == Version.unknown(0xFF)
    assert not v.is_known
    assert "0xFF" in caplog.text


def test_version_unknown_refuses_memo_and_encode():
    v = Version.from_byte(0x30)
    with pytest.raises(UnknownVersionError):
        v.has_memo()
    with pytest.raises(UnknownVersionError):
        v.to_byte()


def test_version_rejects_inconsistent_construction():
    with pytest.raises(ValueError):
        Version(VersionKind.UNKNOWN, 0x03)
    with pytest.raises(ValueError):
        Version(VersionKind.FOXBASE, 0x83)
    with pytest.raises(ValueError):
        Version.unknown(0x100)


@pytest.mark.parametrize(
    "raw,cdx,memo,db",
    [
        (0x00, False, False, False),
        (0x01, True, False, True),
        (0x02, False, True, False),
        (0x03, True, True, False),  # bits 0 et 1 : pas une "database"
        (0x07, True, True, False),
        (0x05, True, False, True),
    ],
)
def test_table_flags_bits(raw, cdx, memo, db):
    f = TableFlags(raw)
    assert f.has_structural_cdx() is cdx
    assert f.has_memo_field() is memo
    assert f.is_a_database() is db
    assert int(f) == raw
