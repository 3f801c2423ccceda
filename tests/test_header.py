from __future__ import annotations
import io

import pytest

from dbfcodec import (
    DBASE3, DBASE3_MEMO, HEADER_SIZE, Date, Header, InvalidDateError, OutOfRangeError,
    TableFlags, TruncatedInputError, UnknownVersionError, VersionKind, pack_header, unpack_header,
)

# dBase III, 1999-12-31, 5 enregistrements, offset 193, taille 48, flags 0x01, code page 0x57
SAMPLE = bytes.fromhex(
    "03 630c1f 05000000 c100 3000 0000 00 00"
    "000000000000000000000000 01 57 0000"
)


def test_header_size_constant():
    assert HEADER_SIZE == Header.SIZE == 32
    assert len(SAMPLE) == 32


def test_header_read_fields():
    h = unpack_header(SAMPLE)
    assert h.file_type == DBASE3
    assert h.last_update == Date(1999, 12, 31)
    assert h.num_records == 5
    assert h.offset_to_first_record == 193
    assert h.size_of_record == 48
    assert h.is_transaction_incomplete is False
    assert h.encryption_flag == 0
    assert h.table_flags == TableFlags(0x01)
    assert h.code_page_mark == 0x57


def test_header_read_consumes_exactly_32_bytes():
    src = io.BytesIO(SAMPLE + b"\x0d trailing")
    Header.read_from(src)
    assert src.tell() == HEADER_SIZE


def test_header_write_emits_exactly_32_bytes():
    out = io.BytesIO()
    assert unpack_header(SAMPLE).write_to(out) == HEADER_SIZE
    assert out.tell() == HEADER_SIZE
    assert out.getvalue() == SAMPLE


def test_header_roundtrip_non_reserved_fields():
    h = Header(
        file_type=DBASE3_MEMO,
        last_update=Date(2155, 1, 2),
        num_records=0xFFFFFFFF,
        offset_to_first_record=0xFFFF,
        size_of_record=1,
        is_transaction_incomplete=True,
        encryption_flag=0x7F,
        table_flags=TableFlags(0x07),
        code_page_mark=0xC8,
    )
    b = pack_header(h)
    assert len(b) == HEADER_SIZE
    assert unpack_header(b) == h


def test_header_reserved_bytes_ignored_and_zeroed():
    dirty = bytearray(SAMPLE)
    for i in (12, 13, *range(16, 28), 30, 31):
        dirty[i] = 0xAA
    h = unpack_header(bytes(dirty))
    assert h == unpack_header(SAMPLE)
    assert pack_header(h) == SAMPLE


def test_header_transaction_flag_nonzero_is_true():
    b = bytearray(SAMPLE)
    b[14] = 0x42
    h = unpack_header(bytes(b))
    assert h.is_transaction_incomplete is True
    assert pack_header(h)[14] == 1


def test_header_short_input():
    with pytest.raises(TruncatedInputError) as ei:
        Header.read_from(io.BytesIO(SAMPLE[:31]))
    assert ei.value.expected == 32 and ei.value.got == 31


def test_header_unknown_version_decodes_but_refuses_encode():
    b = bytearray(SAMPLE)
    b[0] = 0x30
    h = unpack_header(bytes(b))
    assert h.file_type.kind is VersionKind.UNKNOWN
    assert h.num_records == 5
    out = io.BytesIO()
    with pytest.raises(UnknownVersionError):
        h.write_to(out)
    assert out.getvalue() == b""


def test_header_invalid_date_writes_nothing():
    b = bytearray(SAMPLE)
    b[2] = 13  # mois 13
    h = unpack_header(bytes(b))
    assert h.last_update.month == 13
    out = io.BytesIO()
    with pytest.raises(InvalidDateError):
        h.write_to(out)
    assert out.getvalue() == b""


def test_header_new_defaults():
    h = Header.new(3, 97, 20, last_update=Date(1990, 12, 25))
    assert h.file_type == DBASE3
    assert h.table_flags == TableFlags(0)
    assert h.is_transaction_incomplete is False
    b = pack_header(h)
    assert b[:12] == bytes.fromhex("03 5a0c19 03000000 6100 1400")
    assert b[12:] == bytes(20)
    assert Header.new(0, 33, 1).last_update == Date.today()


def test_header_out_of_range_counts():
    h = Header.new(0x1_0000_0000, 33, 1, last_update=Date(2000, 1, 1))
    with pytest.raises(OutOfRangeError):
        pack_header(h)


def test_header_file_roundtrip(tmp_path):
    p = tmp_path / "t.dbf"
    with open(p, "wb") as f:
        unpack_header(SAMPLE).write_to(f)
    with open(p, "rb") as f:
        h = Header.read_from(f)
    assert pack_header(h) == SAMPLE
