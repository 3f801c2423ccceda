from __future__ import annotations
import datetime as dt
import io

import pytest

from dbfcodec import Date, DateParseError, InvalidDateError, TruncatedInputError


def test_date_from_bytes_known_values():
    assert Date.from_bytes(bytes([0, 1, 1])) == Date(1900, 1, 1)
    assert Date.from_bytes(bytes([99, 12, 31])) == Date(1999, 12, 31)


def test_date_from_bytes_is_permissive():
    # mois 13 / jour 0 acceptés tels quels au décodage
    assert Date.from_bytes(bytes([255, 13, 0])) == Date(2155, 13, 0)


def test_date_packed_roundtrip_bounds():
    for d in (Date(1900, 1, 1), Date(2155, 12, 31), Date(2024, 2, 29)):
        buf = io.BytesIO()
        assert d.write_to(buf) == 3
        assert Date.from_bytes(buf.getvalue()) == d


@pytest.mark.parametrize("bad", [Date(1899, 1, 1), Date(2156, 1, 1), Date(2000, 13, 1), Date(2000, 1, 32)])
def test_date_encode_rejects_out_of_range(bad):
    buf = io.BytesIO()
    with pytest.raises(InvalidDateError):
        bad.write_to(buf)
    assert buf.getvalue() == b""


def test_date_text_form():
    d = Date.from_str("19991231")
    assert d == Date(1999, 12, 31)
    assert str(d) == "19991231"
    assert str(Date(1900, 1, 2)) == "19000102"
    # pas de contrôle de bornes à la lecture texte
    assert Date.from_str("20001399") == Date(2000, 13, 99)
    # au-delà de 8 caractères : ignoré
    assert Date.from_str("20240101  ") == Date(2024, 1, 1)


@pytest.mark.parametrize("bad", ["", "2024011", "2024-1-1", "        ", "2024O101", "+2024010", "２０２４0101"])
def test_date_text_form_rejects_malformed(bad):
    with pytest.raises(DateParseError):
        Date.from_str(bad)


def test_date_read_from_short_stream():
    with pytest.raises(TruncatedInputError):
        Date.read_from(io.BytesIO(b"\x63\x0c"))


def test_date_datetime_bridge():
    assert Date.from_date(dt.date(2001, 9, 9)).to_date() == dt.date(2001, 9, 9)
    with pytest.raises(InvalidDateError):
        Date(2001, 2, 30).to_date()


@pytest.mark.parametrize("bad", [Date(2000, -1, 5), Date(2000, 1, -5), Date(2000, 1.5, 5), Date(2000, True, 5)])
def test_date_encode_rejects_negative_or_non_int(bad):
    with pytest.raises(InvalidDateError):
        bad.to_bytes()
    buf = io.BytesIO()
    with pytest.raises(InvalidDateError):
        bad.write_to(buf)
    assert buf.getvalue() == b""
