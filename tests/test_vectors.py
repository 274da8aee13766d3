import pytest
from hypothesis import given, strategies as st

from molecule.vectors import (
    ArrayCase,
    OptionCase,
    StructOrTableCase,
    UnionCase,
    UnionItem,
    VectorCase,
    VectorFormatError,
    c_array,
    c_byte,
    format_bytes,
    load_cases,
    parse_case,
    parse_hex,
    rust_slice,
)


def test_parse_hex_empty():
    assert parse_hex("0x") == b""


def test_parse_hex_ignores_separators():
    assert parse_hex("0x12_34/56") == b"\x12\x34\x56"


@pytest.mark.parametrize("value", ["12", "0", "0x1", "0xzz", "0x12_3", 18, None])
def test_parse_hex_rejects(value):
    with pytest.raises(VectorFormatError):
        parse_hex(value)


@given(st.binary(max_size=64))
def test_parse_hex_round_trip(data):
    assert parse_hex("0x" + data.hex()) == data
    assert parse_hex("0x" + data.hex().upper()) == data


def test_format_bytes_plain_and_alternate():
    assert format_bytes(b"\x12\x34", False) == "0x12, 0x34"
    assert format_bytes(b"\x12\x34", True) == "0x12u8, 0x34"
    assert format_bytes(b"", True) == ""


def test_c_declarations():
    assert c_array(b"\x01\x02", "expected") == "const uint8_t expected[] = {0x01, 0x02};"
    assert c_byte(b"\x07", "item") == "const uint8_t item = 0x07;"
    assert c_array(b"", "item") == "const uint8_t item[] = {};"


def test_rust_slice():
    assert rust_slice(b"\x01\x02") == "&[0x01u8, 0x02]"
    assert rust_slice(b"") == "&[]"


def test_parse_option_case():
    case = parse_case({"name": "ByteOpt", "item": "0x12", "expected": "0x12"})
    assert case == OptionCase(name="ByteOpt", item=b"\x12", expected=b"\x12")


def test_case_without_data_reads_as_option():
    case = parse_case({"name": "Table0", "expected": "0x04000000"})
    assert isinstance(case, OptionCase)
    assert case.item is None
    assert case.expected == b"\x04\x00\x00\x00"


def test_parse_union_case():
    case = parse_case(
        {"name": "UnionA", "item": {"type": "byte", "data": "0x01"}, "expected": "0x0000000001"}
    )
    assert isinstance(case, UnionCase)
    assert case.item == UnionItem(typ="byte", data=b"\x01")


def test_union_item_with_unknown_key_does_not_match():
    with pytest.raises(VectorFormatError):
        parse_case(
            {"name": "U", "item": {"type": "byte", "data": "0x01", "x": 1}, "expected": "0x"}
        )


def test_parse_array_case_sorted():
    case = parse_case({"name": "Byte3", "data": {2: "0x03", 0: "0x01"}, "expected": "0x010003"})
    assert isinstance(case, ArrayCase)
    assert list(case.data) == [0, 2]
    assert case.data[2] == b"\x03"


def test_empty_data_map_reads_as_array():
    case = parse_case({"name": "Byte3", "data": {}, "expected": "0x000000"})
    assert isinstance(case, ArrayCase)
    assert case.data == {}


def test_parse_struct_case_sorted():
    case = parse_case({"name": "StructA", "data": {"f2": "0x3456", "f1": "0x12"}, "expected": "0x"})
    assert isinstance(case, StructOrTableCase)
    assert list(case.data) == ["f1", "f2"]
    assert case.data["f2"] == b"\x34\x56"


def test_parse_vector_case():
    case = parse_case({"name": "Bytes", "data": ["0x01", "0x02"], "expected": "0x02000000_0102"})
    assert isinstance(case, VectorCase)
    assert case.data == (b"\x01", b"\x02")
    assert case.expected == b"\x02\x00\x00\x00\x01\x02"


@pytest.mark.parametrize(
    "mapping",
    [
        {"name": "X", "expected": "0x", "extra": 1},
        {"name": "X"},
        {"name": 3, "expected": "0x"},
        {"name": "X", "expected": "0xabc"},
        {"name": "X", "data": ["0x1"], "expected": "0x"},
        ["name", "X"],
    ],
)
def test_parse_case_rejects(mapping):
    with pytest.raises(VectorFormatError):
        parse_case(mapping)


def test_load_cases():
    text = """
- name: ByteOpt
  item: "0x12"
  expected: "0x12"
- name: UnionA
  item:
    type: byte
    data: "0x01"
  expected: "0x00000000_01"
- name: Byte3
  data:
    1: "0x12"
  expected: "0x001200"
- name: StructA
  data:
    f1: "0x12"
  expected: "0x12"
- name: Bytes
  data: ["0x01"]
  expected: "0x0100000001"
"""
    cases = load_cases(text)
    assert [type(c) for c in cases] == [
        OptionCase,
        UnionCase,
        ArrayCase,
        StructOrTableCase,
        VectorCase,
    ]
    assert [c.name for c in cases] == ["ByteOpt", "UnionA", "Byte3", "StructA", "Bytes"]
    assert cases[2].data == {1: b"\x12"}


@pytest.mark.parametrize("text", ["name: X", "", "- [unclosed"])
def test_load_cases_rejects(text):
    with pytest.raises(VectorFormatError):
        load_cases(text)