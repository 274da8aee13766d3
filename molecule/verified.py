"""The verified schema tree: every declaration with its dependencies resolved."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import ClassVar


class TopDecl:
    """Base of every top-level declaration."""

    TYPE_NAME: ClassVar[str] = ""
    name: str
    imported_depth: int

    def is_byte(self) -> bool:
        return False

    def total_size(self) -> int | None:
        """The fixed size in bytes, or ``None`` for dynamically sized types."""
        return None

    def type_name(self) -> str:
        return self.TYPE_NAME


@dataclass(frozen=True)
class ItemDecl:
    typ: TopDecl


@dataclass(frozen=True)
class UnionItemDecl:
    typ: TopDecl
    id: int


@dataclass(frozen=True)
class FieldDecl:
    name: str
    typ: TopDecl


@dataclass(frozen=True)
class PrimitiveDecl(TopDecl):
    TYPE_NAME: ClassVar[str] = "Primitive"

    name: str
    size: int

    @property
    def imported_depth(self) -> int:  # type: ignore[override]
        return sys.maxsize

    def is_byte(self) -> bool:
        return self.size == 1

    def total_size(self) -> int:
        return self.size


@dataclass(frozen=True)
class OptionDecl(TopDecl):
    TYPE_NAME: ClassVar[str] = "Option"

    name: str
    item: ItemDecl
    imported_depth: int = 0


@dataclass(frozen=True)
class UnionDecl(TopDecl):
    TYPE_NAME: ClassVar[str] = "Union"

    name: str
    items: tuple[UnionItemDecl, ...]
    imported_depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class ArrayDecl(TopDecl):
    TYPE_NAME: ClassVar[str] = "Array"

    name: str
    item: ItemDecl
    item_count: int
    item_size: int
    imported_depth: int = 0

    def total_size(self) -> int:
        return self.item_size * self.item_count


@dataclass(frozen=True)
class StructDecl(TopDecl):
    TYPE_NAME: ClassVar[str] = "Struct"

    name: str
    fields: tuple[FieldDecl, ...]
    field_sizes: tuple[int, ...]
    imported_depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))
        object.__setattr__(self, "field_sizes", tuple(self.field_sizes))

    def total_size(self) -> int:
        return sum(self.field_sizes)


@dataclass(frozen=True)
class FixVecDecl(TopDecl):
    TYPE_NAME: ClassVar[str] = "FixVec"

    name: str
    item: ItemDecl
    item_size: int
    imported_depth: int = 0


@dataclass(frozen=True)
class DynVecDecl(TopDecl):
    TYPE_NAME: ClassVar[str] = "DynVec"

    name: str
    item: ItemDecl
    imported_depth: int = 0


@dataclass(frozen=True)
class TableDecl(TopDecl):
    TYPE_NAME: ClassVar[str] = "Table"

    name: str
    fields: tuple[FieldDecl, ...]
    imported_depth: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "fields", tuple(self.fields))


@dataclass(frozen=True)
class ImportStmt:
    name: str
    paths: tuple[str, ...] = ()
    path_supers: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "paths", tuple(self.paths))


@dataclass(frozen=True)
class Ast:
    """A complete schema; ``syntax_version`` is the version number."""

    syntax_version: int
    namespace: str
    imports: tuple[ImportStmt, ...] = ()
    decls: tuple[TopDecl, ...] = field(default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "imports", tuple(self.imports))
        object.__setattr__(self, "decls", tuple(self.decls))

    def major_decls(self) -> list[TopDecl]:
        """Declarations of the root schema file, in declaration order."""
        return [decl for decl in self.decls if decl.imported_depth == 0]


def new_primitive(name: str) -> PrimitiveDecl | None:
    """Return the primitive called ``name``, or ``None`` if there is none."""
    if name == "byte":
        return PrimitiveDecl(name=name, size=1)
    return None