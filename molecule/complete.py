"""Resolve a raw schema tree into a verified one."""

from __future__ import annotations

from collections.abc import Mapping

from molecule import raw, verified
from molecule.raw import SchemaError
from molecule.verified import new_primitive


def _fixed_size(dep: verified.TopDecl) -> int | None:
    return dep.total_size()


def complete_decl(
    raw_decl: raw.RawDecl, deps: Mapping[str, verified.TopDecl]
) -> verified.TopDecl | None:
    """Resolve one raw declaration against the already resolved ``deps``.

    Returns ``None`` while a type it refers to is not resolved yet, and
    raises :class:`SchemaError` when the declaration can never be valid.
    """
    match raw_decl:
        case raw.OptionDecl():
            dep = deps.get(raw_decl.item.typ)
            if dep is None:
                return None
            return verified.OptionDecl(
                name=raw_decl.name,
                item=verified.ItemDecl(dep),
                imported_depth=raw_decl.imported_depth,
            )
        case raw.UnionDecl():
            if not raw_decl.items:
                raise SchemaError(f"the union ({raw_decl.name}) is empty")
            items = []
            for raw_item in raw_decl.items:
                dep = deps.get(raw_item.typ)
                if dep is None:
                    return None
                items.append(verified.UnionItemDecl(dep, raw_item.id))
            return verified.UnionDecl(
                name=raw_decl.name,
                items=tuple(items),
                imported_depth=raw_decl.imported_depth,
            )
        case raw.ArrayDecl():
            dep = deps.get(raw_decl.item.typ)
            if dep is None:
                return None
            item_size = _fixed_size(dep)
            if item_size is None:
                raise SchemaError(
                    f"the item type ({raw_decl.item.typ}) of array "
                    f"({raw_decl.name}) doesn't have fixed size"
                )
            if item_size == 0:
                raise SchemaError(f"the array ({raw_decl.name}) has no size")
            return verified.ArrayDecl(
                name=raw_decl.name,
                item=verified.ItemDecl(dep),
                item_count=raw_decl.item_count,
                item_size=item_size,
                imported_depth=raw_decl.imported_depth,
            )
        case raw.StructDecl():
            fields = []
            field_sizes = []
            for raw_field in raw_decl.fields:
                dep = deps.get(raw_field.typ)
                if dep is None:
                    return None
                size = _fixed_size(dep)
                if size is None:
                    raise SchemaError(
                        f"the field type ({raw_field.name}) in struct "
                        f"({raw_decl.name}) doesn't have fixed size"
                    )
                field_sizes.append(size)
                fields.append(verified.FieldDecl(raw_field.name, dep))
            if sum(field_sizes) == 0:
                raise SchemaError(f"the struct ({raw_decl.name}) has no size")
            return verified.StructDecl(
                name=raw_decl.name,
                fields=tuple(fields),
                field_sizes=tuple(field_sizes),
                imported_depth=raw_decl.imported_depth,
            )
        case raw.VectorDecl():
            dep = deps.get(raw_decl.item.typ)
            if dep is None:
                return None
            item_size = _fixed_size(dep)
            if item_size is not None:
                return verified.FixVecDecl(
                    name=raw_decl.name,
                    item=verified.ItemDecl(dep),
                    item_size=item_size,
                    imported_depth=raw_decl.imported_depth,
                )
            return verified.DynVecDecl(
                name=raw_decl.name,
                item=verified.ItemDecl(dep),
                imported_depth=raw_decl.imported_depth,
            )
        case raw.TableDecl():
            fields = []
            for raw_field in raw_decl.fields:
                dep = deps.get(raw_field.typ)
                if dep is None:
                    return None
                fields.append(verified.FieldDecl(raw_field.name, dep))
            return verified.TableDecl(
                name=raw_decl.name,
                fields=tuple(fields),
                imported_depth=raw_decl.imported_depth,
            )
    raise TypeError(f"not a raw declaration: {raw_decl!r}")


def complete_ast(raw_ast: raw.RawAst) -> verified.Ast:
    """Resolve every declaration of ``raw_ast``, keeping declaration order."""
    raw_by_name: dict[str, raw.RawDecl] = {}
    for decl in raw_ast.decls:
        if new_primitive(decl.name.lower()) is not None:
            raise SchemaError(f"the name `{decl.name}` is reserved")
        if decl.name in raw_by_name:
            raise SchemaError(f"the name `{decl.name}` is used more than once")
        raw_by_name[decl.name] = decl

    byte = new_primitive("byte")
    assert byte is not None
    resolved: dict[str, verified.TopDecl] = {"byte": byte}
    pending = list(raw_by_name)
    while pending:
        remaining = []
        for name in pending:
            decl = complete_decl(raw_by_name[name], resolved)
            if decl is None:
                remaining.append(name)
            else:
                resolved[name] = decl
        if len(remaining) == len(pending):
            raise SchemaError(
                f"there are {len(remaining)} types which are unable to be "
                f"completed: {sorted(remaining)}"
            )
        pending = remaining

    if raw_ast.syntax_version is None:
        raise SchemaError("the schema has no syntax version")

    imports = tuple(
        verified.ImportStmt(
            name=stmt.name, paths=stmt.paths, path_supers=stmt.path_supers
        )
        for stmt in raw_ast.imports
        if stmt.imported_depth == 0
    )
    return verified.Ast(
        syntax_version=raw_ast.syntax_version.version,
        namespace=raw_ast.namespace,
        imports=imports,
        decls=tuple(resolved[decl.name] for decl in raw_ast.decls),
    )