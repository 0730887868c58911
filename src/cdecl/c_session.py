"""Module for the symbol table that collects the declarations of a single parse."""

import copy
import enum
import logging
from collections.abc import Iterable, Iterator
from typing import Optional

from .c_decl import Declaration, Declarator
from .c_types import DeclSpec
from .errors import DeclarationError
from .utils import Coord


__all__ = ("SessionState", "ParseSession")

logger = logging.getLogger(__name__)


class SessionState(enum.Enum):
    OPEN = "open"
    CLOSED = "closed"


class ParseSession:
    """An insertion-ordered collection of declarations with unique, non-empty identifiers.

    The session is open while a parse is running and accepts inserts. Once closed, it is read-only.

    Notes
    -----
    Inserting never partially succeeds: a declaration is either stored along with its index entry, or the session is
    left exactly as it was and `DeclarationError` is raised.

    The session owns what it stores. Inserting copies the declarator, and every declaration handed out by `insert`,
    the lookups, `all()` and iteration is a copy, so changing one never changes the session.
    """

    def __init__(self) -> None:
        self.state = SessionState.OPEN
        self._declarations: list[Declaration] = []
        self._indices: dict[str, int] = {}

    def __repr__(self) -> str:
        return f"<{type(self).__name__} state={self.state.value} declarations={len(self._declarations)}>"

    # ============================================================================
    # region ---- Lifecycle
    # ============================================================================

    @property
    def is_open(self) -> bool:
        return self.state is SessionState.OPEN

    def close(self) -> None:
        self.state = SessionState.CLOSED

    def reset(self) -> None:
        """Drop every declaration and reopen the session for another parse."""

        self._declarations, self._indices = [], {}
        self.state = SessionState.OPEN

    # endregion

    # ============================================================================
    # region ---- Inserts
    # ============================================================================

    def insert(self, decl_spec: DeclSpec, declarator: Declarator, coord: Optional[Coord] = None) -> Declaration:
        """Record a declaration built from a declaration specifier and a declarator.

        Parameters
        ----------
        decl_spec: DeclSpec
            The storage class and qualified type of the declaration.
        declarator: Declarator
            The declarator. It must be named, with a name not already in the session.
        coord: Coord | None, optional
            The location to report if the declaration is rejected.

        Returns
        -------
        Declaration
            A copy of the stored declaration.

        Raises
        ------
        DeclarationError
            If the declarator has no identifier or its identifier was already declared.
        RuntimeError
            If the session is closed.
        """

        if not self.is_open:
            msg = "cannot insert into a closed parse session"
            raise RuntimeError(msg)

        iden = declarator.iden
        if not iden:
            msg = "declaration is missing identifier"
            raise DeclarationError(msg, coord)
        if iden in self._indices:
            msg = f"identifier {iden!r} redeclared"
            raise DeclarationError(msg, coord)

        declaration = Declaration(decl_spec, copy.deepcopy(declarator))
        self._declarations.append(declaration)
        self._indices[iden] = len(self._declarations) - 1
        logger.debug("Recorded declaration %r at index %d.", iden, self._indices[iden])
        return copy.deepcopy(declaration)

    def insert_all(
        self,
        decl_spec: DeclSpec,
        declarators: Iterable[Declarator],
        coord: Optional[Coord] = None,
    ) -> list[Declaration]:
        """Record one declaration per declarator, all sharing the declaration specifier, e.g. `int a, *b, c[3];`.

        Declarators are inserted in order; one that fails stops the rest, and those before it stay recorded.
        """

        return [self.insert(decl_spec, declarator, coord) for declarator in declarators]

    # endregion

    # ============================================================================
    # region ---- Lookups
    # ============================================================================

    def contains(self, iden: str) -> bool:
        return iden in self._indices

    def lookup(self, iden: str) -> Declaration:
        """Get the declaration for an identifier. Raises `KeyError` if there isn't one."""

        try:
            index = self._indices[iden]
        except KeyError:
            msg = f"no declaration for identifier {iden!r}"
            raise KeyError(msg) from None
        return copy.deepcopy(self._declarations[index])

    def lookup_index(self, index: int) -> Declaration:
        """Get a declaration by its position in insertion order. Raises `IndexError` if out of range."""

        if not (0 <= index < len(self._declarations)):
            msg = f"declaration index {index} out of range for {len(self._declarations)} declaration(s)"
            raise IndexError(msg)
        return copy.deepcopy(self._declarations[index])

    def all(self) -> tuple[Declaration, ...]:
        """Get every declaration, in insertion order."""

        return tuple(copy.deepcopy(self._declarations))

    def __contains__(self, iden: object) -> bool:
        return iden in self._indices

    def __len__(self) -> int:
        return len(self._declarations)

    def __iter__(self) -> Iterator[Declaration]:
        return iter(self.all())

    # endregion
