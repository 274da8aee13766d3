"""The raw schema tree, as read from schema files before names are resolved."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Union

SCHEMA_SUFFIX = ".mol"


class SchemaError(Exception):
    """A schema is malformed or inconsistent."""


@dataclass(frozen=True)
class SyntaxVersion:
    """The schema syntax version; files that declare none use version 1."""

    version: int = 1


@dataclass(frozen=True)
class ImportStmt:
    """An ``import`` statement together with the file it was found in."""

    name: str
    paths: tuple[str, ...] = ()
    path_supers: int = 0
    imported_base: Path = field(default_factory=Path)
    imported_depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", tuple(self.paths))
        object.__setattr__(self, "imported_base", Path(self.imported_base))

    def resolve_path(self) -> Path:
        """The schema file this statement refers to.

        The path is taken relative to the directory of the importing file:
        one ``..`` for every leading ``super``, then the path parts, then the
        name with the schema suffix.
        """
        target = self.imported_base.parent
        for _ in range(self.path_supers):
            target = target / ".."
        for part in self.paths:
            target = target / part
        return (target / self.name).with_suffix(SCHEMA_SUFFIX)


@dataclass(frozen=True)
class ItemDecl:
    typ: str


@dataclass(frozen=True)
class CustomUnionItemDecl:
    typ: str
    id: int


@dataclass(frozen=True)
class FieldDecl:
    name: str
    typ: str


@dataclass(frozen=True)
class OptionDecl:
    name: str
    item: ItemDecl
    imported_depth: int = 0


@dataclass(frozen=True)
class UnionDecl:
    name: str
    items: tuple[CustomUnionItemDecl, ...]
    imported_depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class ArrayDecl:
    name: str
    item: ItemDecl
    item_count: int
    imported_depth: int = 0


@dataclass(frozen=True)
class StructDecl:
    name: str
    fields: tuple[FieldDecl, ...]
    imported_depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
class VectorDecl:
    name: str
    item: ItemDecl
    imported_depth: int = 0


@dataclass(frozen=True)
class TableDecl:
    name: str
    fields: tuple[FieldDecl, ...]
    imported_depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


RawDecl = Union[OptionDecl, UnionDecl, ArrayDecl, StructDecl, VectorDecl, TableDecl]


def assign_union_ids(
    entries: Iterable[tuple[str, int | None]],
) -> list[CustomUnionItemDecl]:
    """Give every union item an id and return the items sorted by id.

    Each entry is ``(type name, explicit id or None)``.  An item without an
    explicit id takes the id after the previous item's, or 0 if it is first.
    A repeated id raises :class:`SchemaError`.
    """
    items: list[CustomUnionItemDecl] = []
    seen: set[int] = set()
    previous: int | None = None
    for typ, explicit in entries:
        if explicit is not None:
            item_id = explicit
        elif previous is not None:
            item_id = previous + 1
        else:
            item_id = 0
        if item_id in seen:
            raise SchemaError(f"Custom Union Item ID {item_id} is duplicated")
        seen.add(item_id)
        items.append(CustomUnionItemDecl(typ=typ, id=item_id))
        previous = item_id
    items.sort(key=lambda item: item.id)
    return items


@dataclass
class RawAst:
    """Declarations and imports gathered from a root schema and its imports."""

    namespace: str = ""
    syntax_version: SyntaxVersion | None = None
    imports: list[ImportStmt] = field(default_factory=list)
    decls: list[RawDecl] = field(default_factory=list)

    def add_import(self, stmt: ImportStmt) -> None:
        self.imports.append(stmt)

    def add_decl(self, decl: RawDecl) -> None:
        self.decls.append(decl)

    def merge_syntax_version(self, version: SyntaxVersion) -> None:
        """Record a file's declared version; all files must agree."""
        if self.syntax_version is None:
            self.syntax_version = version
        elif self.syntax_version != version:
            raise SchemaError("all schema files' syntax version should be same")

    def finish_file(self) -> None:
        """Close one schema file, falling back to the default version."""
        if self.syntax_version is None:
            self.syntax_version = SyntaxVersion()