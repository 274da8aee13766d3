"""Assemble a complete C test program from generated test bodies."""

from __future__ import annotations

from collections.abc import Sequence

from molecule import verified

_MACRO_WIDTH = 68
_INNER = " " * 8


def _bail(*printf_lines: str) -> list[str]:
    """Lines that report a failure, release the result and return 1."""
    return [
        *(_INNER + line for line in printf_lines),
        _INNER + "free(res.seg.ptr);",
        _INNER + "return 1;",
    ]


def _build_check_macro() -> str:
    """The ``test_build_for`` macro shared by every generated test."""
    body = [
        "#define test_build_for(Name)",
        "    uint32_t size = sizeof(expected);",
        "    char *name = #Name;",
        "    if (res.errno != MOL_OK) {",
        *_bail('printf("Error %s: failed to build\\n", name);'),
        "    } else if (res.seg.size != size) {",
        *_bail(
            'printf("Error %s: size is not match (%d != %d)\\n",',
            "        name, res.seg.size, size);",
        ),
        "    } else if (memcmp(res.seg.ptr, expected, size) != 0) {",
        *_bail('printf("Error %s: content is not match\\n", name);'),
        "    }",
        "    mol_errno errno = MolReader_ ## Name ## _verify(&res.seg,false);",
        "    if (errno != MOL_OK) {",
        *_bail('printf("Error %s: failed to verify (%d)\\n", name, errno);'),
        "    }",
    ]
    continued = [line.ljust(_MACRO_WIDTH) + "\\" for line in body[:-1]]
    return "\n".join([*continued, body[-1]])


_HEADER = '#include "tests-utils.h"\n' + _build_check_macro()


def decls_by_name(ast: verified.Ast) -> dict[str, verified.TopDecl]:
    """Index the declarations of ``ast`` by their names."""
    return {decl.name: decl for decl in ast.decls}


def _main_function(count: int, vectors_name: str) -> list[str]:
    lines = [
        "int main(int argc, char *argv[]) {",
        f'    test_start("Test Vector ({vectors_name})");',
        "    int failed_cnt = 0;",
    ]
    for test_id in range(count):
        lines += [
            f"    if (test_{test_id}() != 0) {{",
            f'        printf("test test_{test_id} ... failed\\n");',
            "        failed_cnt += 1;",
            "    }",
        ]
    lines += [
        "    if (failed_cnt != 0) {",
        f'        printf("[Error] %d/{count} tests are failed.\\n", failed_cnt);',
        "        return 1;",
        "    } else {",
        f'        printf("ALL tests are passed ({count}).\\n");',
        "    }",
        "    return 0;",
        "}",
    ]
    return lines


def render_c_program(tests: Sequence[Sequence[str]], vectors_name: str) -> str:
    """Return the source of a C program running every test body in ``tests``."""
    lines = [_HEADER, ""]
    for test_id, stmts in enumerate(tests):
        lines.append(f"uint32_t test_{test_id} () {{")
        lines.extend(f"    {stmt}" for stmt in stmts)
        lines.append("}")
    lines.extend(_main_function(len(tests), vectors_name))
    return "\n".join(lines) + "\n"