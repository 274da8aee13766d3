"""Test vectors: hex byte strings and the cases read from YAML vector files."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Union

import yaml

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class VectorFormatError(ValueError):
    """A test vector is malformed or does not fit the schema it names."""


def parse_hex(value: object) -> bytes:
    """Decode a ``0x``-prefixed hex string; ``_`` and ``/`` are ignored."""
    if not isinstance(value, str) or len(value) < 2 or not value.startswith("0x"):
        raise VectorFormatError(
            f"invalid value {value!r}: require a 0x-prefixed hexadecimal string"
        )
    digits = value[2:].replace("_", "").replace("/", "")
    if len(digits) % 2 != 0:
        raise VectorFormatError(
            f"invalid value {value!r}: require a 0x-prefixed hexadecimal string"
        )
    if not set(digits) <= _HEX_DIGITS:
        raise VectorFormatError(f"invalid hexadecimal digits in {value!r}")
    return bytes.fromhex(digits)


def format_bytes(data: bytes, alternate: bool = False) -> str:
    """Comma-separated ``0x..`` literals; ``alternate`` types the first as ``u8``."""
    if not data:
        return ""
    first = f"0x{data[0]:02x}u8" if alternate else f"0x{data[0]:02x}"
    return ", ".join([first, *(f"0x{unit:02x}" for unit in data[1:])])


def c_array(data: bytes, name: str) -> str:
    """A C declaration of a constant byte array holding ``data``."""
    return f"const uint8_t {name}[] = {{{format_bytes(data)}}};"


def c_byte(data: bytes, name: str) -> str:
    """A C declaration of a constant single byte holding ``data``."""
    return f"const uint8_t {name} = {format_bytes(data)};"


def rust_slice(data: bytes) -> str:
    """A slice literal holding ``data``."""
    return f"&[{format_bytes(data, True)}]"


@dataclass(frozen=True)
class UnionItem:
    typ: str
    data: bytes


@dataclass(frozen=True)
class OptionCase:
    name: str
    item: bytes | None
    expected: bytes


@dataclass(frozen=True)
class UnionCase:
    name: str
    item: UnionItem | None
    expected: bytes


@dataclass(frozen=True)
class ArrayCase:
    """Array items by index, kept in ascending index order."""

    name: str
    expected: bytes
    data: dict[int, bytes] = field(default_factory=dict)


@dataclass(frozen=True)
class StructOrTableCase:
    """Fields by name, kept in ascending name order."""

    name: str
    expected: bytes
    data: dict[str, bytes] = field(default_factory=dict)


@dataclass(frozen=True)
class VectorCase:
    name: str
    expected: bytes
    data: tuple[bytes, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", tuple(self.data))


TestCase = Union[OptionCase, UnionCase, ArrayCase, StructOrTableCase, VectorCase]


def _check_keys(mapping: Mapping[Any, Any], allowed: set[str], required: set[str]) -> None:
    keys = set(mapping)
    unknown = keys - allowed
    if unknown:
        raise VectorFormatError(f"unknown field(s): {sorted(map(str, unknown))}")
    missing = required - keys
    if missing:
        raise VectorFormatError(f"missing field(s): {sorted(missing)}")


def _name(mapping: Mapping[str, Any]) -> str:
    name = mapping["name"]
    if not isinstance(name, str):
        raise VectorFormatError(f"the name {name!r} is not a string")
    return name


def _parse_option(mapping: Mapping[str, Any]) -> OptionCase:
    _check_keys(mapping, {"name", "item", "expected"}, {"name", "expected"})
    raw_item = mapping.get("item")
    return OptionCase(
        name=_name(mapping),
        item=None if raw_item is None else parse_hex(raw_item),
        expected=parse_hex(mapping["expected"]),
    )


def _parse_union(mapping: Mapping[str, Any]) -> UnionCase:
    _check_keys(mapping, {"name", "item", "expected"}, {"name", "expected"})
    raw_item = mapping.get("item")
    item = None
    if raw_item is not None:
        if not isinstance(raw_item, Mapping):
            raise VectorFormatError("a union item must be a mapping")
        _check_keys(raw_item, {"type", "data"}, {"type", "data"})
        typ = raw_item["type"]
        if not isinstance(typ, str):
            raise VectorFormatError(f"the item type {typ!r} is not a string")
        item = UnionItem(typ=typ, data=parse_hex(raw_item["data"]))
    return UnionCase(name=_name(mapping), item=item, expected=parse_hex(mapping["expected"]))


def _data_mapping(mapping: Mapping[str, Any]) -> Mapping[Any, Any]:
    data = mapping.get("data", {})
    if not isinstance(data, Mapping):
        raise VectorFormatError("the data must be a mapping")
    return data


def _parse_array(mapping: Mapping[str, Any]) -> ArrayCase:
    _check_keys(mapping, {"name", "data", "expected"}, {"name", "expected"})
    data = _data_mapping(mapping)
    for index in data:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise VectorFormatError(f"the index {index!r} is not a non-negative integer")
    items = {index: parse_hex(data[index]) for index in sorted(data)}
    return ArrayCase(name=_name(mapping), expected=parse_hex(mapping["expected"]), data=items)


def _parse_struct_or_table(mapping: Mapping[str, Any]) -> StructOrTableCase:
    _check_keys(mapping, {"name", "data", "expected"}, {"name", "expected"})
    data = _data_mapping(mapping)
    for key in data:
        if not isinstance(key, str):
            raise VectorFormatError(f"the field name {key!r} is not a string")
    fields = {key: parse_hex(data[key]) for key in sorted(data)}
    return StructOrTableCase(
        name=_name(mapping), expected=parse_hex(mapping["expected"]), data=fields
    )


def _parse_vector(mapping: Mapping[str, Any]) -> VectorCase:
    _check_keys(mapping, {"name", "data", "expected"}, {"name", "expected"})
    data = mapping.get("data", [])
    if not isinstance(data, list):
        raise VectorFormatError("the data must be a list")
    return VectorCase(
        name=_name(mapping),
        expected=parse_hex(mapping["expected"]),
        data=tuple(parse_hex(item) for item in data),
    )


_PARSERS: tuple[Callable[[Mapping[str, Any]], TestCase], ...] = (
    _parse_option,
    _parse_union,
    _parse_array,
    _parse_struct_or_table,
    _parse_vector,
)


def parse_case(mapping: object) -> TestCase:
    """Read one case; the first kind of case whose shape fits is taken."""
    if not isinstance(mapping, Mapping):
        raise VectorFormatError("a test case must be a mapping")
    for parser in _PARSERS:
        try:
            return parser(mapping)
        except VectorFormatError:
            continue
    raise VectorFormatError("data did not match any variant of untagged enum Any")


def load_cases(text: str) -> list[TestCase]:
    """Parse a YAML document holding a list of test cases."""
    try:
        document = yaml.safe_load(text)
    except yaml.YAMLError as err:
        raise VectorFormatError(f"failed to parse tests: {err}") from err
    if not isinstance(document, list):
        raise VectorFormatError("failed to parse tests: expected a list of cases")
    return [parse_case(entry) for entry in document]