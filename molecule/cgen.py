"""Generate the statements of C tests from test vectors."""

from __future__ import annotations

from collections.abc import Mapping

from molecule import verified
from molecule.vectors import (
    ArrayCase,
    OptionCase,
    StructOrTableCase,
    TestCase,
    UnionCase,
    VectorCase,
    VectorFormatError,
    c_array,
    c_byte,
)

Decls = Mapping[str, verified.TopDecl]

_BYTE = "byte"


def _stmts_start(name: str, expected: bytes) -> list[str]:
    return [
        c_array(expected, "expected"),
        "mol_builder_t b;",
        "mol_seg_res_t res;",
        f"MolBuilder_{name}_init(&b);",
    ]


def _stmts_build(name: str) -> list[str]:
    return [f"res = MolBuilder_{name}_build(b); ;", f"test_build_for({name});"]


def _stmts_if(name: str, cond: str, errmsg: str) -> list[str]:
    return [
        f"if ({cond}) {{",
        f'    printf("Error {name}: ");',
        f"    printf({errmsg});",
        '    printf("\\n");',
        "    free(res.seg.ptr);",
        "    return 1;",
        "}",
    ]


def _stmts_end() -> list[str]:
    return ["free(res.seg.ptr);", "return 0;"]


def _decl_of(decls: Decls, name: str, *kinds: type) -> verified.TopDecl:
    decl = decls.get(name)
    if decl is None:
        raise VectorFormatError(f"the type {name} is not declared")
    if not isinstance(decl, kinds):
        raise VectorFormatError(f"Error: type for {name} is incorrect")
    return decl


def _check_content(name: str, seg: str, value: str, label: str, size: int, is_byte: bool) -> list[str]:
    stmts = _stmts_if(
        name,
        f"{seg}.size != {size}",
        f'"{label} size is not match (%d != {size})", {seg}.size',
    )
    cond = f"*{seg}.ptr != {value}" if is_byte else f"memcmp({seg}.ptr, {value}, {size}) != 0"
    stmts += _stmts_if(name, cond, f'"{label} is not match"')
    return stmts


def _gen_option(case: OptionCase, decls: Decls) -> list[str]:
    name = case.name
    stmts = _stmts_start(name, case.expected)
    is_none = "true"
    if case.item is not None:
        _decl_of(decls, name, verified.OptionDecl)
        stmts.append(c_array(case.item, "item"))
        stmts.append(f"MolBuilder_{name}_set(&b, item, {len(case.item)});")
        if case.item:
            is_none = "false"
    stmts += _stmts_build(name)
    if case.item is not None:
        stmts.append(f"bool is_none = MolReader_{name}_is_none(&res.seg);")
        stmts += _stmts_if(name, f"is_none != {is_none}", '"failed to check inner item"')
    return stmts + _stmts_end()


def _gen_union(case: UnionCase, decls: Decls) -> list[str]:
    name = case.name
    item = case.item
    stmts = _stmts_start(name, case.expected)
    if item is not None:
        size = len(item.data)
        if item.typ == _BYTE:
            stmts.append(c_byte(item.data, "item"))
            stmts.append(f"MolBuilder_{name}_set_{item.typ}(&b, item);")
        else:
            stmts.append(c_array(item.data, "item"))
            stmts.append(f"MolBuilder_{name}_set_{item.typ}(&b, item, {size});")
    stmts += _stmts_build(name)
    if item is not None:
        decl = _decl_of(decls, name, verified.UnionDecl)
        item_id = next(
            (inner.id for inner in decl.items if inner.typ.name == item.typ), None
        )
        if item_id is None:
            raise VectorFormatError(f"the union {name} has no item of type {item.typ}")
        stmts.append(f"mol_union_t inner = MolReader_{name}_unpack(&res.seg);")
        stmts += _stmts_if(
            name,
            f"inner.item_id != {item_id}",
            f'"item id is not match (%d != {item_id})", inner.item_id',
        )
        stmts += _stmts_if(
            name,
            f"inner.seg.size != {size}",
            f'"item size is not match (%d != {size})", inner.seg.size',
        )
        cond = (
            "*inner.seg.ptr != item"
            if item.typ == _BYTE
            else f"memcmp(inner.seg.ptr, item, {size}) != 0"
        )
        stmts += _stmts_if(name, cond, '"item is not match"')
    return stmts + _stmts_end()


def _gen_array(case: ArrayCase, decls: Decls) -> list[str]:
    name = case.name
    decl = _decl_of(decls, name, verified.ArrayDecl)
    is_byte = decl.item.typ.name == _BYTE
    stmts = _stmts_start(name, case.expected)
    for index, data in case.data.items():
        item_name = f"item_{index}"
        stmts.append(c_byte(data, item_name) if is_byte else c_array(data, item_name))
        stmts.append(f"MolBuilder_{name}_set_nth{index}(&b, {item_name});")
    stmts += _stmts_build(name)
    for index, data in case.data.items():
        seg = f"seg_{index}"
        stmts.append(f"mol_seg_t {seg} = MolReader_{name}_get_nth{index}(&res.seg);")
        stmts += _check_content(name, seg, f"item_{index}", f"item[{index}]", len(data), is_byte)
    return stmts + _stmts_end()


def _gen_struct_or_table(case: StructOrTableCase, decls: Decls) -> list[str]:
    name = case.name
    decl = _decl_of(decls, name, verified.StructDecl, verified.TableDecl)
    is_struct = isinstance(decl, verified.StructDecl)
    field_types = {f.name: f.typ.name for f in decl.fields}

    def field_type(field_name: str) -> str:
        try:
            return field_types[field_name]
        except KeyError:
            raise VectorFormatError(f"{name} has no field {field_name}") from None

    stmts = _stmts_start(name, case.expected)
    for field_name, data in case.data.items():
        if field_type(field_name) == _BYTE:
            stmts.append(c_byte(data, field_name))
            stmts.append(f"MolBuilder_{name}_set_{field_name}(&b, {field_name});")
        else:
            stmts.append(c_array(data, field_name))
            if is_struct:
                stmts.append(f"MolBuilder_{name}_set_{field_name}(&b, {field_name});")
            else:
                stmts.append(
                    f"MolBuilder_{name}_set_{field_name}(&b, {field_name}, {len(data)});"
                )
    stmts += _stmts_build(name)
    for field_name, data in case.data.items():
        seg = f"seg_{field_name}"
        stmts.append(f"mol_seg_t {seg} = MolReader_{name}_get_{field_name}(&res.seg);")
        stmts += _check_content(
            name,
            seg,
            field_name,
            f"field[{field_name}]",
            len(data),
            field_type(field_name) == _BYTE,
        )
    return stmts + _stmts_end()


def _gen_vector(case: VectorCase, decls: Decls) -> list[str]:
    name = case.name
    decl = _decl_of(decls, name, verified.FixVecDecl, verified.DynVecDecl)
    is_fixed = isinstance(decl, verified.FixVecDecl)
    is_byte = decl.item.typ.name == _BYTE
    stmts = _stmts_start(name, case.expected)
    for index, data in enumerate(case.data):
        item_name = f"item_{index}"
        if is_byte:
            stmts.append(c_byte(data, item_name))
            stmts.append(f"MolBuilder_{name}_push(&b, {item_name});")
        else:
            stmts.append(c_array(data, item_name))
            if is_fixed:
                stmts.append(f"MolBuilder_{name}_push(&b, {item_name});")
            else:
                stmts.append(f"MolBuilder_{name}_push(&b, {item_name}, {len(data)});")
    stmts += _stmts_build(name)
    for index, data in enumerate(case.data):
        res_name = f"res_seg_{index}"
        seg = f"seg_{index}"
        stmts.append(f"mol_seg_res_t {res_name} = MolReader_{name}_get(&res.seg, {index});")
        stmts += _stmts_if(
            name, f"{res_name}.errno != MOL_OK", f'"item[{index}] is not existed"'
        )
        stmts.append(f"mol_seg_t {seg} = {res_name}.seg;")
        stmts += _check_content(name, seg, f"item_{index}", f"item[{index}]", len(data), is_byte)
    return stmts + _stmts_end()


def gen_c_test(case: TestCase, decls: Decls) -> list[str]:
    """Return the body statements of one C test function for ``case``."""
    match case:
        case OptionCase():
            return _gen_option(case, decls)
        case UnionCase():
            return _gen_union(case, decls)
        case ArrayCase():
            return _gen_array(case, decls)
        case StructOrTableCase():
            return _gen_struct_or_table(case, decls)
        case VectorCase():
            return _gen_vector(case, decls)
    raise TypeError(f"not a test case: {case!r}")