import pytest

from molecule.errors import (
    FieldCountNotMatch,
    HeaderIsBroken,
    OffsetsNotMatch,
    TotalSizeNotMatch,
    UnknownItem,
    VerificationError,
)


def test_total_size_not_match_message_and_fields():
    err = TotalSizeNotMatch("Byte", 1, 2)
    assert str(err) == "Byte total size doesn't match, expect 1, actual 2"
    assert (err.name, err.expected, err.actual) == ("Byte", 1, 2)


def test_header_is_broken_message_and_fields():
    err = HeaderIsBroken("Table1", 8, 3)
    assert str(err).startswith("Table1 ")
    assert "total size is not enough for header" in str(err)
    assert (err.expected, err.actual) == (8, 3)


def test_unknown_item_message():
    err = UnknownItem("UnionA", 8, 9)
    assert str(err) == "UnionA item id (=9) is an unknown id, only has 8 kind of items"
    assert (err.size, err.actual) == (8, 9)


def test_offsets_not_match_message():
    err = OffsetsNotMatch("Table1")
    assert str(err) == "Table1 some offsets is not match"
    assert err.name == "Table1"


def test_field_count_not_match_fields():
    err = FieldCountNotMatch("Table2", 2, 3)
    assert "field count doesn't match" in str(err)
    assert (err.name, err.expected, err.actual) == ("Table2", 2, 3)


@pytest.mark.parametrize(
    "cls, args, message",
    [
        (TotalSizeNotMatch, (1, 0), "A total size doesn't match, expect 1, actual 0"),
        (
            HeaderIsBroken,
            (4, 0),
            "A total size is not enough for header, expect 4, actual 0",
        ),
        (UnknownItem, (1, 5), "A item id (=5) is an unknown id, only has 1 kind of items"),
        (OffsetsNotMatch, (), "A some offsets is not match"),
        (FieldCountNotMatch, (1, 2), "A field count doesn't match, expect 1, actual 2"),
    ],
)
def test_all_errors_are_verification_errors(cls, args, message):
    with pytest.raises(VerificationError) as info:
        raise cls("A", *args)
    assert type(info.value) is cls
    assert info.value.name == "A"
    assert str(info.value) == message