import pytest
from hypothesis import given
from hypothesis import strategies as st

from molecule.number import (
    NUMBER_MAX,
    NUMBER_SIZE,
    hex_string,
    pack_number,
    unpack_number,
)


def test_pack_number_is_little_endian():
    assert pack_number(4) == bytes.fromhex("04000000")
    assert pack_number(0x2B) == bytes.fromhex("2b000000")


@given(st.integers(min_value=0, max_value=NUMBER_MAX))
def test_pack_unpack_round_trip(num):
    packed = pack_number(num)
    assert len(packed) == NUMBER_SIZE
    assert unpack_number(packed) == num


@given(st.integers(min_value=0, max_value=NUMBER_MAX), st.binary(max_size=8))
def test_unpack_reads_only_first_four_bytes(num, tail):
    assert unpack_number(pack_number(num) + tail) == num


@pytest.mark.parametrize("num", [-1, NUMBER_MAX + 1])
def test_pack_out_of_range(num):
    with pytest.raises(ValueError):
        pack_number(num)


@pytest.mark.parametrize("data", [b"", b"\x01", b"\x01\x02\x03"])
def test_unpack_too_short(data):
    with pytest.raises(ValueError):
        unpack_number(data)


def test_hex_string_known_value():
    assert hex_string(bytes.fromhex("0c000000")) == "0c000000"
    assert hex_string(b"") == ""


@given(st.binary(max_size=64))
def test_hex_string_round_trip(data):
    text = hex_string(data)
    assert text == text.lower()
    assert bytes.fromhex(text) == data