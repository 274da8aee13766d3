# molecule

A library for working with Molecule schemas: the schema model, name
resolution, the default encoding of every kind of declaration, and generation
of test source from YAML test vectors.

## What it contains

- `molecule.number` – `pack_number`, `unpack_number` and `hex_string` for the
  little-endian 32-bit words used for sizes, offsets and item ids
  (`NUMBER_SIZE` is 4). `pack_number` raises `ValueError` for values that do
  not fit in 32 bits; `unpack_number` raises `ValueError` for fewer than four
  bytes.
- `molecule.errors` – `VerificationError` and its subclasses
  `TotalSizeNotMatch`, `HeaderIsBroken`, `UnknownItem`, `OffsetsNotMatch` and
  `FieldCountNotMatch`.
- `molecule.primitive` – the primitive `byte` type as `Byte` (an owned value)
  and `ByteReader` (a view over a one-byte slice). `from_slice` and
  `from_compatible_slice` raise `TotalSizeNotMatch` unless given exactly one
  byte.
- `molecule.raw` – the unresolved schema tree: `RawAst`, `SyntaxVersion`,
  `ImportStmt` (with `resolve_path`), `OptionDecl`, `UnionDecl`, `ArrayDecl`,
  `StructDecl`, `VectorDecl`, `TableDecl` and their item and field
  declarations; `assign_union_ids` numbers union items; `SchemaError` reports
  an invalid schema.
- `molecule.verified` – the resolved schema tree: `Ast` (with
  `major_decls`), `TopDecl` and its kinds `PrimitiveDecl`, `OptionDecl`,
  `UnionDecl`, `ArrayDecl`, `StructDecl`, `FixVecDecl`, `DynVecDecl`,
  `TableDecl`, each with `total_size`, `is_byte` and `type_name`;
  `new_primitive` returns the `byte` primitive.
- `molecule.complete` – `complete_ast` turns a `RawAst` into an `Ast`,
  rejecting reserved and duplicate names, items and fields without a fixed
  size where one is required, empty unions, zero-sized arrays and structs, and
  types that cannot be resolved. `complete_decl` resolves a single
  declaration.
- `molecule.default_content` – `default_content(decl)` returns the bytes of a
  declaration's default value.
- `molecule.vectors` – `load_cases` reads a YAML list of test cases into
  `OptionCase`, `UnionCase`, `ArrayCase`, `StructOrTableCase` and
  `VectorCase`; `parse_hex` decodes `0x`-prefixed hex (ignoring `_` and `/`);
  `format_bytes`, `c_array`, `c_byte` and `rust_slice` format bytes as source
  literals. Malformed vectors raise `VectorFormatError`.
- `molecule.cgen` – `gen_c_test(case, decls)` returns the statements of a C
  test function for one case.
- `molecule.rustgen` – `gen_rust_test` and `gen_rust_tests` return test
  functions, numbered from 0, that build each case and compare it with the
  expected bytes.
- `molecule.program` – `decls_by_name` indexes an `Ast`'s declarations and
  `render_c_program(tests, vectors_name)` assembles a complete C test program
  from test bodies.

## Installation

```
pip install .
```

## Examples

```python
from molecule.number import pack_number, unpack_number, hex_string

header = pack_number(9)
assert unpack_number(header) == 9
print(hex_string(header))  # 09000000
```

```python
from molecule import raw
from molecule.complete import complete_ast
from molecule.default_content import default_content

schema = raw.RawAst(namespace="types")
schema.add_decl(raw.TableDecl("Table1", (raw.FieldDecl("f1", "byte"),)))
schema.finish_file()

ast = complete_ast(schema)
print(default_content(ast.decls[0]).hex())  # 090000000800000000
```

```python
from molecule.vectors import load_cases
from molecule.cgen import gen_c_test
from molecule.program import decls_by_name, render_c_program

cases = load_cases("""
- name: Table1
  data:
    f1: "0x12"
  expected: "0x09000000_08000000_12"
""")
source = render_c_program(
    [gen_c_test(case, decls_by_name(ast)) for case in cases], "vectors.yaml"
)
```

## What it does not do

There is no reader for `.mol` schema files: a `RawAst` is built in code with
`add_decl`, `add_import`, `merge_syntax_version` and `finish_file`. Nor does
the package generate serializer or reader code for a schema, or provide a
command-line tool; the C and test source it produces is returned as strings
for the caller to write out.

## Running the tests

```
pip install ".[test]"
pytest
```