"""The default serialized value of every kind of declaration."""

from __future__ import annotations

from molecule import verified
from molecule.number import NUMBER_SIZE, pack_number


def default_content(decl: verified.TopDecl) -> bytes:
    """Return the bytes of the default value of ``decl``."""
    match decl:
        case verified.PrimitiveDecl():
            return b"\x00"
        case verified.OptionDecl():
            return b""
        case verified.UnionDecl():
            first = decl.items[0]
            return pack_number(first.id) + default_content(first.typ)
        case verified.ArrayDecl() | verified.StructDecl():
            return bytes(decl.total_size())
        case verified.FixVecDecl():
            return pack_number(0)
        case verified.DynVecDecl():
            return pack_number(NUMBER_SIZE)
        case verified.TableDecl():
            return _table_default(decl)
    raise TypeError(f"not a declaration: {decl!r}")


def _table_default(decl: verified.TableDecl) -> bytes:
    if not decl.fields:
        return pack_number(NUMBER_SIZE)
    field_data = [default_content(f.typ) for f in decl.fields]
    offsets = []
    offset = NUMBER_SIZE * (len(field_data) + 1)
    for data in field_data:
        offsets.append(offset)
        offset += len(data)
    content = b"".join(
        [pack_number(offset), *map(pack_number, offsets), *field_data]
    )
    assert len(content) == offset
    return content