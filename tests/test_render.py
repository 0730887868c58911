"""Test the English renderings produced by `c_render`."""

import pytest
from cdecl.c_decl import ArraySuffix, Declaration, Declarator, Parameter, ParameterList, PointerRun
from cdecl.c_render import ABSTRACT_PLACEHOLDER, render, render_declarator, render_parameter, render_suffix
from cdecl.c_types import BaseType, DeclSpec, QualifiedType, Qualifier, StorageClass, TypeSpec


INT = QualifiedType.unqualified(TypeSpec(BaseType.SIGNED_INT))
CHAR = QualifiedType.unqualified(TypeSpec(BaseType.CHAR))
CONST_CHAR = QualifiedType(Qualifier.CONST, TypeSpec(BaseType.CHAR))

PTR = PointerRun((Qualifier.NONE,))


@pytest.mark.parametrize(
    ("suffix", "expected"),
    [
        (ArraySuffix(3), "array[3] of"),
        pytest.param(ArraySuffix(), "array[] of", id="unsized array"),
        (PTR, "pointer to"),
        (PointerRun((Qualifier.CONST,)), "const pointer to"),
        (
            PointerRun((Qualifier.NONE, Qualifier.CONST_VOLATILE, Qualifier.NONE)),
            "pointer to const volatile pointer to pointer to",
        ),
        (ParameterList(), "function () returning"),
        (ParameterList([Parameter(INT), Parameter(CHAR)]), "function (signed int, char) returning"),
        (ParameterList([Parameter(INT)], variadic=True), "function (signed int, ...) returning"),
    ],
)
def test_render_suffix(suffix, expected: str):
    assert render_suffix(suffix) == expected


@pytest.mark.parametrize(
    ("param", "expected"),
    [
        (Parameter(INT), "signed int"),
        pytest.param(Parameter(INT, Declarator()), "signed int", id="empty abstract declarator"),
        (Parameter(CONST_CHAR, Declarator(suffixes=[PTR])), "pointer to const char"),
        (Parameter(CONST_CHAR, Declarator("s", [PTR])), "s: pointer to const char"),
        (Parameter(INT, Declarator("n")), "n: signed int"),
        (
            Parameter(INT, Declarator("cb", [PTR, ParameterList([Parameter(CHAR, Declarator(suffixes=[PTR]))])])),
            "cb: pointer to function (pointer to char) returning signed int",
        ),
    ],
)
def test_render_parameter(param: Parameter, expected: str):
    assert render_parameter(param) == expected


@pytest.mark.parametrize(
    ("declarator", "expected"),
    [
        (Declarator("x"), "x:"),
        (Declarator("x", [ArraySuffix(3), PTR]), "x: array[3] of pointer to"),
        (Declarator(suffixes=[PTR]), "pointer to"),
    ],
)
def test_render_declarator(declarator: Declarator, expected: str):
    assert render_declarator(declarator) == expected


@pytest.mark.parametrize(
    ("declaration", "expected"),
    [
        pytest.param(
            Declaration(DeclSpec.automatic(INT), Declarator("x")),
            "x:  signed int",
            id="no suffixes leaves an empty phrase",
        ),
        (Declaration(DeclSpec.automatic(INT), Declarator("x", [PTR])), "x: pointer to signed int"),
        (Declaration(DeclSpec.automatic(INT), Declarator("x", [ArraySuffix(3)])), "x: array[3] of signed int"),
        (
            Declaration(DeclSpec.automatic(INT), Declarator("x", [ArraySuffix(3), PTR])),
            "x: array[3] of pointer to signed int",
        ),
        (
            Declaration(DeclSpec.automatic(INT), Declarator("x", [PTR, ArraySuffix(3)])),
            "x: pointer to array[3] of signed int",
        ),
        (
            Declaration(
                DeclSpec(StorageClass.STATIC, QualifiedType(Qualifier.CONST, TypeSpec(BaseType.STRUCT, "node"))),
                Declarator("head", [PTR]),
            ),
            "head: pointer to static const struct node",
        ),
        (
            Declaration(DeclSpec.automatic(INT), Declarator(suffixes=[PTR])),
            f"{ABSTRACT_PLACEHOLDER}: pointer to signed int",
        ),
    ],
)
def test_render_declaration(declaration: Declaration, expected: str):
    assert render(declaration) == expected


def test_render_is_idempotent():
    declaration = Declaration(
        DeclSpec(StorageClass.EXTERN, CHAR),
        Declarator("f", [ParameterList([Parameter(INT)], variadic=True), PTR]),
    )

    first = render(declaration)
    assert first == render(declaration)
    assert first.startswith("f: ")


def test_render_unknown_objects():
    with pytest.raises(TypeError, match="cannot render"):
        render_suffix("array")  # pyright: ignore [reportArgumentType]

    with pytest.raises(TypeError, match="cannot render"):
        render(Declaration(DeclSpec.automatic(INT), Declarator("x", [3])))  # pyright: ignore [reportArgumentType]
