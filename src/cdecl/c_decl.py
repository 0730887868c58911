"""Module for C declarators and the declarations built from them.

A declarator is kept as an identifier plus a flat sequence of suffixes, ordered the way they're read out after the
identifier. For example, in

    int *x[3];

the suffixes of `x` are `[ArraySuffix(3), PointerRun((Qualifier.NONE,))]`, i.e. "x is an array of 3 pointers to
int". The three kinds of suffix are the only ways a declarator can be extended: array sizes, runs of pointers, and
function parameter lists.
"""

import dataclasses
from collections.abc import Iterable, Iterator
from typing import Optional, Union

from ._typing_compat import TypeAlias
from .c_types import DeclSpec, QualifiedType, Qualifier


__all__ = (
    "ArraySuffix",
    "PointerRun",
    "Parameter",
    "ParameterList",
    "DeclaratorSuffix",
    "Declarator",
    "Declaration",
)


@dataclasses.dataclass(frozen=True)
class ArraySuffix:
    """An array suffix, e.g. `[3]`. A size of 0 means the array is unsized, e.g. `[]`."""

    size: int = 0

    def __post_init__(self) -> None:
        if self.size < 0:
            msg = f"array size must be non-negative, not {self.size}"
            raise ValueError(msg)


@dataclasses.dataclass(frozen=True)
class PointerRun:
    """A run of consecutive pointers, e.g. `* const *`.

    Attributes
    ----------
    quals: tuple[Qualifier, ...]
        One qualifier per pointer, in the order they are read out. For `char * const * p` that is
        `(Qualifier.NONE, Qualifier.CONST)`: "p is a pointer to a const pointer to char".
    """

    quals: tuple[Qualifier, ...]

    def __post_init__(self) -> None:
        if not self.quals:
            msg = "a pointer run needs at least one pointer"
            raise ValueError(msg)

    @property
    def depth(self) -> int:
        return len(self.quals)

    def __iter__(self) -> Iterator[Qualifier]:
        return iter(self.quals)


@dataclasses.dataclass
class Parameter:
    """A function parameter: its qualified type and, optionally, the declarator that goes with it.

    A parameter with no declarator is a plain unnamed type, e.g. the `int` in `f(int)`. Otherwise the declarator may
    be named (`int *p`) or abstract (`int *`), and is owned by the parameter alone.
    """

    qual_type: QualifiedType
    declarator: Optional["Declarator"] = None

    @property
    def iden(self) -> str:
        return self.declarator.iden if (self.declarator is not None) else ""


@dataclasses.dataclass
class ParameterList:
    """The parameter list of a function, in source order, and whether it ends with `...`."""

    params: list[Parameter] = dataclasses.field(default_factory=list)
    variadic: bool = False

    def append(self, param: Parameter) -> None:
        self.params.append(param)

    def set_variadic(self, value: bool = True) -> bool:
        """Mark the function as variadic or not. Returns the previous value."""

        old_value = self.variadic
        self.variadic = value
        return old_value

    def __len__(self) -> int:
        return len(self.params)

    def __iter__(self) -> Iterator[Parameter]:
        return iter(self.params)

    def __getitem__(self, index: int) -> Parameter:
        return self.params[index]


DeclaratorSuffix: TypeAlias = Union[ArraySuffix, PointerRun, ParameterList]


@dataclasses.dataclass
class Declarator:
    """An [abstract] [direct] declarator.

    Attributes
    ----------
    iden: str, default=""
        The declared identifier. Empty for abstract declarators, e.g. the `*` in `f(int *)`.
    suffixes: list[DeclaratorSuffix], default=[]
        The suffixes applied to the identifier, in reading order.
    """

    iden: str = ""
    suffixes: list[DeclaratorSuffix] = dataclasses.field(default_factory=list)

    @property
    def is_abstract(self) -> bool:
        return not self.iden

    def append(self, suffix: DeclaratorSuffix) -> None:
        """Add a suffix after all the current ones, so it's read out last."""

        self.suffixes.append(suffix)

    def prepend(self, suffix: DeclaratorSuffix) -> None:
        """Add a suffix before all the current ones, so it's read out first, right after the identifier."""

        self.suffixes.insert(0, suffix)

    def extend(self, suffixes: Iterable[DeclaratorSuffix]) -> None:
        self.suffixes.extend(suffixes)

    def __len__(self) -> int:
        return len(self.suffixes)

    def __iter__(self) -> Iterator[DeclaratorSuffix]:
        return iter(self.suffixes)

    def __getitem__(self, index: int) -> DeclaratorSuffix:
        return self.suffixes[index]


@dataclasses.dataclass(frozen=True)
class Declaration:
    """A complete declaration: the declaration specifier and a declarator.

    The declaration itself is frozen, but its declarator isn't. `ParseSession` keeps private copies of what it stores.
    """

    decl_spec: DeclSpec
    declarator: Declarator

    @property
    def iden(self) -> str:
        return self.declarator.iden
