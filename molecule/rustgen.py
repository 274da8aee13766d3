"""Generate test functions that check builders against test vectors."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from molecule import verified
from molecule.vectors import (
    ArrayCase,
    OptionCase,
    StructOrTableCase,
    TestCase,
    UnionCase,
    VectorCase,
    VectorFormatError,
    rust_slice,
)

Decls = Mapping[str, verified.TopDecl]

_ASSERT_MESSAGE = (
    '"\\nexpect:\\n  struct: {}\\n  data: {:#x};\\n'
    'actual:\\n  struct: {}\\n  data: {:#x}\\n"'
)
_TOTAL_SIZE_MESSAGE = (
    '"\\nstruct: {}:\\n  data: {:#x}\\n'
    '  partial read total_size: {}, actual: {}\\n"'
)


def _entity_name(ident: str) -> str:
    return "Byte" if ident == "byte" else ident


def _decl_of(decls: Decls, name: str, *kinds: type) -> verified.TopDecl:
    decl = decls.get(name)
    if decl is None:
        raise VectorFormatError(f"the type {name} is not declared")
    if not isinstance(decl, kinds):
        raise VectorFormatError(f"Error: type for {name} is incorrect")
    return decl


def _from_slice(typ: str, data: bytes) -> str:
    return f"{_entity_name(typ)}::from_slice({rust_slice(data)}).unwrap()"


def _assert_stmt() -> list[str]:
    return [
        "    assert_eq!(",
        "        result.as_slice(),",
        "        expected.as_slice(),",
        f"        {_ASSERT_MESSAGE},",
        "        result,",
        "        result,",
        "        expected,",
        "        expected,",
        "    );",
    ]


def _total_size_stmt(name: str) -> list[str]:
    return [
        "    assert_eq!(",
        "        result.total_size(),",
        "        result.as_slice().len(),",
        f"        {_TOTAL_SIZE_MESSAGE},",
        f"        {name}::NAME,",
        "        result,",
        "        result.total_size(),",
        "        result.as_slice().len()",
        "    );",
    ]


def _render(
    test_id: int,
    name: str,
    calls: Iterable[str],
    expected: bytes,
    extra: Iterable[str] = (),
) -> str:
    name = _entity_name(name)
    lines = [
        "#[test]",
        f"fn test_{test_id}() {{",
        f"    let result = {name}::new_builder()",
        *(f"        {call}" for call in calls),
        "        .build();",
        f"    let expected = {name}::from_slice({rust_slice(expected)}).unwrap();",
        *_assert_stmt(),
        *extra,
        "}",
    ]
    return "\n".join(lines)


def _gen_option(case: OptionCase, decls: Decls, test_id: int) -> str:
    calls = []
    if case.item is not None:
        decl = _decl_of(decls, case.name, verified.OptionDecl)
        calls.append(f".set(Some({_from_slice(decl.item.typ.name, case.item)}))")
    return _render(test_id, case.name, calls, case.expected)


def _gen_union(case: UnionCase, test_id: int) -> str:
    calls = []
    if case.item is not None:
        calls.append(f".set({_from_slice(case.item.typ, case.item.data)})")
    return _render(test_id, case.name, calls, case.expected)


def _gen_array(case: ArrayCase, decls: Decls, test_id: int) -> str:
    decl = _decl_of(decls, case.name, verified.ArrayDecl)
    item_type = decl.item.typ.name
    calls = [
        f".nth{index}({_from_slice(item_type, data)})"
        for index, data in case.data.items()
    ]
    return _render(test_id, case.name, calls, case.expected)


def _gen_struct_or_table(case: StructOrTableCase, decls: Decls, test_id: int) -> str:
    decl = _decl_of(decls, case.name, verified.StructDecl, verified.TableDecl)
    field_types = {f.name: f.typ.name for f in decl.fields}
    calls = []
    for field_name, data in case.data.items():
        if field_name not in field_types:
            raise VectorFormatError(f"{case.name} has no field {field_name}")
        calls.append(f".{field_name}({_from_slice(field_types[field_name], data)})")
    return _render(test_id, case.name, calls, case.expected)


def _gen_vector(case: VectorCase, decls: Decls, test_id: int) -> str:
    decl = _decl_of(decls, case.name, verified.FixVecDecl, verified.DynVecDecl)
    item_type = decl.item.typ.name
    calls = [f".push({_from_slice(item_type, data)})" for data in case.data]
    return _render(
        test_id,
        case.name,
        calls,
        case.expected,
        _total_size_stmt(_entity_name(case.name)),
    )


def gen_rust_test(case: TestCase, decls: Decls, test_id: int) -> list[str]:
    """Return the test functions generated for ``case``, named after ``test_id``."""
    match case:
        case OptionCase():
            return [_gen_option(case, decls, test_id)]
        case UnionCase():
            return [_gen_union(case, test_id)]
        case ArrayCase():
            return [_gen_array(case, decls, test_id)]
        case StructOrTableCase():
            return [_gen_struct_or_table(case, decls, test_id)]
        case VectorCase():
            return [_gen_vector(case, decls, test_id)]
    raise TypeError(f"not a test case: {case!r}")


def gen_rust_tests(cases: Iterable[TestCase], decls: Decls) -> list[str]:
    """Generate tests for every case, numbering them consecutively from 0."""
    tests: list[str] = []
    for case in cases:
        tests.extend(gen_rust_test(case, decls, len(tests)))
    return tests