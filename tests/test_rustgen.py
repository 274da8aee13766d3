import pytest

from molecule import verified
from molecule.rustgen import gen_rust_test, gen_rust_tests
from molecule.vectors import (
    ArrayCase,
    OptionCase,
    StructOrTableCase,
    UnionCase,
    UnionItem,
    VectorCase,
    VectorFormatError,
    rust_slice,
)

BYTE = verified.new_primitive("byte")
BYTE3 = verified.ArrayDecl(
    name="Byte3", item=verified.ItemDecl(BYTE), item_count=3, item_size=1
)
BYTE_OPT = verified.OptionDecl(name="ByteOpt", item=verified.ItemDecl(BYTE))
BYTES = verified.FixVecDecl(name="Bytes", item=verified.ItemDecl(BYTE), item_size=1)
STRUCT = verified.StructDecl(
    name="StructX",
    fields=(verified.FieldDecl("f1", BYTE), verified.FieldDecl("f2", BYTE3)),
    field_sizes=(1, 3),
)
UNION = verified.UnionDecl(
    name="UnionA", items=(verified.UnionItemDecl(BYTE, 0),)
)
DECLS = {d.name: d for d in (BYTE3, BYTE_OPT, BYTES, STRUCT, UNION)}


def test_array_uses_nth_setters():
    case = ArrayCase(name="Byte3", expected=b"\x00\x12\x00", data={1: b"\x12"})
    (test,) = gen_rust_test(case, DECLS, 0)
    assert f".nth1(Byte::from_slice({rust_slice(b'\x12')}).unwrap())" in test
    assert test.startswith("#[test]\nfn test_0() {")
    assert f"Byte3::from_slice({rust_slice(b'\x00\x12\x00')}).unwrap()" in test


def test_option_without_item_has_no_set():
    case = OptionCase(name="ByteOpt", item=None, expected=b"")
    (test,) = gen_rust_test(case, DECLS, 5)
    assert ".set(" not in test
    assert "fn test_5()" in test


def test_option_with_item_sets_inner_type():
    case = OptionCase(name="ByteOpt", item=b"\x01", expected=b"\x01")
    (test,) = gen_rust_test(case, DECLS, 0)
    assert f".set(Some(Byte::from_slice({rust_slice(b'\x01')}).unwrap()))" in test


def test_option_with_wrong_decl_kind_raises():
    case = OptionCase(name="Byte3", item=b"\x01", expected=b"\x01")
    with pytest.raises(VectorFormatError):
        gen_rust_test(case, DECLS, 0)


def test_union_maps_byte_to_entity():
    case = UnionCase(
        name="UnionA", item=UnionItem("byte", b"\x07"), expected=b"\x00\x00\x00\x00\x07"
    )
    (test,) = gen_rust_test(case, {}, 0)
    assert f".set(Byte::from_slice({rust_slice(b'\x07')}).unwrap())" in test


def test_struct_fields_use_field_types():
    case = StructOrTableCase(
        name="StructX",
        expected=b"\x01\x02\x03\x04",
        data={"f1": b"\x01", "f2": b"\x02\x03\x04"},
    )
    (test,) = gen_rust_test(case, DECLS, 0)
    assert f".f1(Byte::from_slice({rust_slice(b'\x01')}).unwrap())" in test
    assert f".f2(Byte3::from_slice({rust_slice(b'\x02\x03\x04')}).unwrap())" in test
    assert test.index(".f1(") < test.index(".f2(")


def test_struct_unknown_field_raises():
    case = StructOrTableCase(name="StructX", expected=b"", data={"zz": b"\x01"})
    with pytest.raises(VectorFormatError):
        gen_rust_test(case, DECLS, 0)


def test_vector_checks_total_size_and_pushes():
    case = VectorCase(
        name="Bytes", expected=b"\x02\x00\x00\x00\x01\x02", data=(b"\x01", b"\x02")
    )
    (test,) = gen_rust_test(case, DECLS, 0)
    assert test.count(".push(") == 2
    assert "result.total_size()" in test
    assert "Bytes::NAME" in test


def test_missing_decl_raises():
    case = VectorCase(name="Nope", expected=b"")
    with pytest.raises(VectorFormatError):
        gen_rust_test(case, DECLS, 0)


def test_gen_rust_tests_numbers_consecutively():
    cases = [
        OptionCase(name="ByteOpt", item=None, expected=b""),
        VectorCase(name="Bytes", expected=b"\x00\x00\x00\x00"),
        ArrayCase(name="Byte3", expected=b"\x00\x00\x00"),
    ]
    tests = gen_rust_tests(cases, DECLS)
    assert len(tests) == len(cases)
    for index, test in enumerate(tests):
        assert f"fn test_{index}()" in test