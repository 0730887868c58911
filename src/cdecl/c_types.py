"""Module for the non-declarator parts of a C declaration: base types, cv-qualifiers and storage classes."""

import dataclasses
import enum
from collections import Counter
from collections.abc import Iterable
from typing import Optional

from ._typing_compat import Self, override


__all__ = (
    "BaseType",
    "Qualifier",
    "StorageClass",
    "render_type",
    "render_qualifier",
    "render_storage",
    "TypeSpec",
    "QualifiedType",
    "DeclSpec",
)


# ============================================================================
# region -------- Enumerations
# ============================================================================


class BaseType(enum.Enum):
    """The unqualified type of a declaration.

    Notes
    -----
    `STRUCT`, `ENUM` and `TYPEDEF_NAME` are "named" types: a `TypeSpec` holding one of them must also carry the
    identifier of the struct, enum or typedef. Every other member is a builtin and never carries one.
    """

    VOID = "void"
    CHAR = "char"
    SIGNED_CHAR = "signed-char"
    UNSIGNED_CHAR = "unsigned-char"
    SIGNED_INT = "signed-int"
    UNSIGNED_INT = "unsigned-int"
    SIGNED_SHORT = "signed-short"
    UNSIGNED_SHORT = "unsigned-short"
    SIGNED_LONG = "signed-long"
    UNSIGNED_LONG = "unsigned-long"
    FLOAT = "float"
    DOUBLE = "double"
    LONG_DOUBLE = "long-double"
    STRUCT = "struct"
    ENUM = "enum"
    TYPEDEF_NAME = "typedef-name"

    @property
    def is_named(self) -> bool:
        return self in _NAMED_TYPES

    @classmethod
    def from_specifiers(cls, names: Iterable[str]) -> Self:
        """Find the builtin type spelled by a collection of type specifier keywords, in any order.

        Raises
        ------
        ValueError
            If the keywords don't spell one of the supported builtin types, e.g. "long long" or "unsigned float".
        """

        names = list(names)
        key = tuple(sorted(Counter(names).elements()))
        try:
            return _SPECIFIER_COMBINATIONS[key]
        except KeyError:
            msg = f"invalid type specifier combination {' '.join(names)!r}"
            raise ValueError(msg) from None


_NAMED_TYPES = frozenset({BaseType.STRUCT, BaseType.ENUM, BaseType.TYPEDEF_NAME})


def _spellings(base_type: BaseType, *spellings: str) -> dict[tuple[str, ...], BaseType]:
    return {tuple(sorted(spelling.split())): base_type for spelling in spellings}


# fmt: off
_SPECIFIER_COMBINATIONS: dict[tuple[str, ...], BaseType] = {
    **_spellings(BaseType.VOID,             "void"),
    **_spellings(BaseType.CHAR,             "char"),
    **_spellings(BaseType.SIGNED_CHAR,      "signed char"),
    **_spellings(BaseType.UNSIGNED_CHAR,    "unsigned char"),
    **_spellings(BaseType.SIGNED_INT,       "int", "signed", "signed int"),
    **_spellings(BaseType.UNSIGNED_INT,     "unsigned", "unsigned int"),
    **_spellings(BaseType.SIGNED_SHORT,     "short", "short int", "signed short", "signed short int"),
    **_spellings(BaseType.UNSIGNED_SHORT,   "unsigned short", "unsigned short int"),
    **_spellings(BaseType.SIGNED_LONG,      "long", "long int", "signed long", "signed long int"),
    **_spellings(BaseType.UNSIGNED_LONG,    "unsigned long", "unsigned long int"),
    **_spellings(BaseType.FLOAT,            "float"),
    **_spellings(BaseType.DOUBLE,           "double"),
    **_spellings(BaseType.LONG_DOUBLE,      "long double"),
}
# fmt: on


class Qualifier(enum.Enum):
    """A cv-qualifier, applied either to a base type or to one level of pointer."""

    NONE = "none"
    CONST = "const"
    VOLATILE = "volatile"
    CONST_VOLATILE = "const-volatile"

    @classmethod
    def from_keywords(cls, names: Iterable[str]) -> Self:
        """Combine qualifier keywords into one qualifier. Repeats are allowed, e.g. "const const" is just const."""

        seen = set(names)
        unknown = seen - {"const", "volatile"}
        if unknown:
            msg = f"unknown type qualifier(s): {', '.join(sorted(unknown))}"
            raise ValueError(msg)

        if seen == {"const", "volatile"}:
            return cls.CONST_VOLATILE
        elif "const" in seen:
            return cls.CONST
        elif "volatile" in seen:
            return cls.VOLATILE
        else:
            return cls.NONE


class StorageClass(enum.Enum):
    """A storage class specifier. Declarations without one have automatic storage."""

    AUTO = "auto"
    EXTERN = "extern"
    REGISTER = "register"
    STATIC = "static"


# endregion


# ============================================================================
# region -------- Renderers
# ============================================================================

# fmt: off
_TYPE_TEXT = {
    BaseType.VOID:              "void",
    BaseType.CHAR:              "char",
    BaseType.SIGNED_CHAR:       "signed char",
    BaseType.UNSIGNED_CHAR:     "unsigned char",
    BaseType.SIGNED_INT:        "signed int",
    BaseType.UNSIGNED_INT:      "unsigned int",
    BaseType.SIGNED_SHORT:      "signed short",
    BaseType.UNSIGNED_SHORT:    "unsigned short",
    BaseType.SIGNED_LONG:       "signed long",
    BaseType.UNSIGNED_LONG:     "unsigned long",
    BaseType.FLOAT:             "float",
    BaseType.DOUBLE:            "double",
    BaseType.LONG_DOUBLE:       "long double",
    BaseType.STRUCT:            "struct",
    BaseType.ENUM:              "enum",
    BaseType.TYPEDEF_NAME:      "typedef",
}

_QUALIFIER_TEXT = {
    Qualifier.NONE:             "",
    Qualifier.CONST:            "const",
    Qualifier.VOLATILE:         "volatile",
    Qualifier.CONST_VOLATILE:   "const volatile",
}

_STORAGE_TEXT = {
    StorageClass.AUTO:          "",
    StorageClass.EXTERN:        "extern",
    StorageClass.REGISTER:      "register",
    StorageClass.STATIC:        "static",
}
# fmt: on


def _render_member(table: dict[object, str], value: object, kind: str) -> str:
    try:
        return table[value]
    except (KeyError, TypeError):
        msg = f"cannot render unknown {kind} value {value!r}"
        raise ValueError(msg) from None


def render_type(base_type: BaseType) -> str:
    """Return the canonical text for a base type, e.g. "unsigned long"."""

    return _render_member(_TYPE_TEXT, base_type, "base type")


def render_qualifier(qual: Qualifier) -> str:
    """Return the canonical text for a qualifier. This is empty for `Qualifier.NONE`."""

    return _render_member(_QUALIFIER_TEXT, qual, "qualifier")


def render_storage(storage: StorageClass) -> str:
    """Return the canonical text for a storage class. This is empty for `StorageClass.AUTO`."""

    return _render_member(_STORAGE_TEXT, storage, "storage class")


def _join_words(*words: str) -> str:
    return " ".join(word for word in words if word)


# endregion


# ============================================================================
# region -------- Specifiers
# ============================================================================


@dataclasses.dataclass(frozen=True)
class TypeSpec:
    """A base type, along with the identifier for struct, enum, and typedef names.

    Attributes
    ----------
    type: BaseType
        The base type.
    iden: str | None, default=None
        The identifier of the struct, enum, or typedef. Required for those and forbidden for builtins.
    """

    type: BaseType
    iden: Optional[str] = None

    def __post_init__(self) -> None:
        if not isinstance(self.type, BaseType):
            msg = f"expected a BaseType, got {self.type!r}"
            raise TypeError(msg)

        if self.type.is_named and not self.iden:
            msg = f"{render_type(self.type)} type requires an identifier"
            raise ValueError(msg)
        if not self.type.is_named and self.iden:
            msg = f"builtin type {render_type(self.type)!r} cannot have identifier {self.iden!r}"
            raise ValueError(msg)

    @override
    def __str__(self) -> str:
        return _join_words(render_type(self.type), self.iden or "")


@dataclasses.dataclass(frozen=True)
class QualifiedType:
    """A type specifier with its cv-qualifier."""

    qual: Qualifier
    spec: TypeSpec

    @classmethod
    def unqualified(cls, spec: TypeSpec) -> Self:
        return cls(Qualifier.NONE, spec)

    @override
    def __str__(self) -> str:
        return _join_words(render_qualifier(self.qual), str(self.spec))


@dataclasses.dataclass(frozen=True)
class DeclSpec:
    """A declaration specifier: storage class plus qualified type. Shared by every declarator in a declaration."""

    storage: StorageClass
    qual_type: QualifiedType

    @classmethod
    def automatic(cls, qual_type: QualifiedType) -> Self:
        return cls(StorageClass.AUTO, qual_type)

    @override
    def __str__(self) -> str:
        return _join_words(render_storage(self.storage), str(self.qual_type))


# endregion
