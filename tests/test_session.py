"""Test the `c_session.ParseSession` symbol table."""

import dataclasses

import pytest
from cdecl.c_decl import ArraySuffix, Declaration, Declarator, PointerRun
from cdecl.c_render import render
from cdecl.c_session import ParseSession, SessionState
from cdecl.c_types import BaseType, DeclSpec, QualifiedType, Qualifier, StorageClass, TypeSpec
from cdecl.errors import CDeclParsingError, DeclarationError
from cdecl.utils import Coord


INT_SPEC = DeclSpec.automatic(QualifiedType.unqualified(TypeSpec(BaseType.SIGNED_INT)))
EXTERN_CHAR_SPEC = DeclSpec(StorageClass.EXTERN, QualifiedType.unqualified(TypeSpec(BaseType.CHAR)))


@pytest.fixture
def session() -> ParseSession:
    return ParseSession()


def test_insert_and_lookup(session: ParseSession):
    declaration = session.insert(INT_SPEC, Declarator("x", [ArraySuffix(3)]))

    assert declaration == Declaration(INT_SPEC, Declarator("x", [ArraySuffix(3)]))
    assert session.contains("x")
    assert "x" in session
    assert session.lookup("x") == declaration
    assert session.lookup_index(0) == declaration
    assert len(session) == 1


def test_insert_all_shares_decl_spec(session: ParseSession):
    declarators = [Declarator("a"), Declarator("b", [PointerRun((Qualifier.NONE,))]), Declarator("c", [ArraySuffix(3)])]
    declarations = session.insert_all(INT_SPEC, declarators)

    assert [decl.iden for decl in declarations] == ["a", "b", "c"]
    assert all(decl.decl_spec == INT_SPEC for decl in declarations)
    assert session.all() == tuple(declarations)


def test_all_keeps_insertion_order(session: ParseSession):
    for iden in ["zeta", "alpha", "mu"]:
        session.insert(EXTERN_CHAR_SPEC, Declarator(iden))

    assert [decl.iden for decl in session.all()] == ["zeta", "alpha", "mu"]
    assert [decl.iden for decl in session] == ["zeta", "alpha", "mu"]
    assert session.lookup_index(1).iden == "alpha"


def test_redeclaration_fails_without_changes(session: ParseSession):
    session.insert(INT_SPEC, Declarator("x"))
    before = session.all()

    coord = Coord(3, 7, "decls.h")
    with pytest.raises(DeclarationError, match="redeclared") as exc_info:
        session.insert(EXTERN_CHAR_SPEC, Declarator("x", [ArraySuffix(2)]))

    assert exc_info.value.coord is None
    assert session.all() == before

    with pytest.raises(DeclarationError) as exc_info:
        session.insert(EXTERN_CHAR_SPEC, Declarator("x"), coord)

    assert exc_info.value.coord == coord
    assert str(exc_info.value) == "decls.h:3:7: identifier 'x' redeclared"
    assert session.all() == before


def test_missing_identifier_fails_without_changes(session: ParseSession):
    with pytest.raises(DeclarationError, match="missing identifier"):
        session.insert(INT_SPEC, Declarator(suffixes=[PointerRun((Qualifier.NONE,))]))

    assert len(session) == 0
    assert session.all() == ()


def test_insert_all_stops_at_first_failure(session: ParseSession):
    with pytest.raises(DeclarationError):
        session.insert_all(INT_SPEC, [Declarator("a"), Declarator("a"), Declarator("b")])

    assert [decl.iden for decl in session] == ["a"]
    assert not session.contains("b")


def test_declaration_error_is_a_parsing_error():
    assert issubclass(DeclarationError, CDeclParsingError)


def test_failed_lookups(session: ParseSession):
    session.insert(INT_SPEC, Declarator("x"))

    with pytest.raises(KeyError):
        session.lookup("y")
    with pytest.raises(IndexError):
        session.lookup_index(1)
    with pytest.raises(IndexError):
        session.lookup_index(-1)

    assert session.all() == (Declaration(INT_SPEC, Declarator("x")),)


def test_lifecycle(session: ParseSession):
    assert session.state is SessionState.OPEN
    session.insert(INT_SPEC, Declarator("x"))

    session.close()
    assert session.state is SessionState.CLOSED
    assert session.lookup("x").iden == "x"
    with pytest.raises(RuntimeError, match="closed"):
        session.insert(INT_SPEC, Declarator("y"))
    assert len(session) == 1

    session.reset()
    assert session.state is SessionState.OPEN
    assert len(session) == 0
    assert not session.contains("x")

    session.insert(INT_SPEC, Declarator("x"))
    assert session.lookup_index(0).iden == "x"


def test_session_keeps_its_own_copies(session: ParseSession):
    declarator = Declarator("x")
    inserted = session.insert(INT_SPEC, declarator)
    session.close()

    declarator.append(ArraySuffix(3))
    inserted.declarator.append(PointerRun((Qualifier.NONE,)))
    session.lookup("x").declarator.iden = "y"
    session.lookup_index(0).declarator.append(ArraySuffix(2))
    session.all()[0].declarator.suffixes.clear()
    for decl in session:
        decl.declarator.iden = "z"

    assert render(session.lookup("x")) == "x:  signed int"
    assert session.lookup("x") == Declaration(INT_SPEC, Declarator("x"))
    assert session.all() == (Declaration(INT_SPEC, Declarator("x")),)
    assert not session.contains("y")


def test_declarations_are_frozen(session: ParseSession):
    declaration = session.insert(INT_SPEC, Declarator("x"))

    with pytest.raises(dataclasses.FrozenInstanceError):
        declaration.declarator = Declarator("y")  # pyright: ignore [reportAttributeAccessIssue]
