# pyright: reportRedeclaration=none, reportUndefinedVariable=none
"""Module for parsing tokens of simplified C declarations into declarations."""

import dataclasses
import logging
from typing import TYPE_CHECKING, Any, NoReturn, Optional, Union

from sly import Parser
from sly.lex import Token
from sly.yacc import YaccProduction as YaccProd, YaccSymbol

from . import c_context
from ._typing_compat import Self
from .c_decl import ArraySuffix, Declaration, Declarator, Parameter, ParameterList, PointerRun
from .c_lexer import CDeclLexer
from .c_render import render, render_declarator, render_parameter
from .c_types import BaseType, DeclSpec, QualifiedType, Qualifier, StorageClass, TypeSpec


if TYPE_CHECKING:
    from sly.types import _


__all__ = ("CDeclParser",)

logger = logging.getLogger(__name__)


# ============================================================================
# region -------- Helpers
# ============================================================================


@dataclasses.dataclass
class _DeclarationSpecifiers:
    """Declaration specifiers for C declarations, as collected by the grammar before they're validated.

    Attributes
    ----------
    qual: list[str], default=[]
        A list of type qualifiers.
    storage: list[str], default=[]
        A list of storage class specifiers.
    type: list[str | TypeSpec], default=[]
        A list of type specifiers. Builtin type keywords are kept as strings; struct, enum and typedef names are
        already TypeSpecs.
    """

    qual: list[str] = dataclasses.field(default_factory=list)
    storage: list[str] = dataclasses.field(default_factory=list)
    type: list[Union[str, TypeSpec]] = dataclasses.field(default_factory=list)

    @classmethod
    def add(cls, decl_spec: Optional[Self], new_item: Any, kind: str, *, append: bool = False) -> Self:
        """Given a declaration specifier and a new specifier of a given kind, add the specifier to its respective list.

        If `append` is True, the new specifier is added to the end of the specifiers list, otherwise it's added at the
        beginning. Returns the declaration specifier, with the new specifier incorporated.
        """

        if decl_spec is None:
            return cls(**{kind: [new_item]})
        else:
            subspec_list: list[Any] = getattr(decl_spec, kind)
            if append:
                subspec_list.append(new_item)
            else:
                subspec_list.insert(0, new_item)

            return decl_spec


# endregion


class CDeclParser(Parser):
    tokens = CDeclLexer.tokens

    def __init__(self, context: "c_context.CContext") -> None:
        super().__init__()
        self.context = context

    # ============================================================================
    # region ---- Declaration helpers
    # ============================================================================

    def _build_qualified_type(self, spec: _DeclarationSpecifiers) -> QualifiedType:
        """Validate the qualifiers and type specifiers of a declaration and combine them into a qualified type."""

        location = self.context.location

        named_types = [typ for typ in spec.type if isinstance(typ, TypeSpec)]
        builtin_names = [typ for typ in spec.type if isinstance(typ, str)]

        if named_types and (builtin_names or len(named_types) > 1):
            names = " ".join(str(typ) for typ in spec.type)
            msg = f"Invalid combination of type specifiers {names!r}"
            self.context.error(msg, location)

        if named_types:
            type_spec = named_types[0]
        else:
            try:
                base_type = BaseType.from_specifiers(builtin_names)
            except ValueError as exc:
                self.context.error(str(exc), location)
            type_spec = TypeSpec(base_type)

        return QualifiedType(Qualifier.from_keywords(spec.qual), type_spec)

    def _build_decl_spec(self, spec: _DeclarationSpecifiers) -> DeclSpec:
        if len(spec.storage) > 1:
            msg = f"Multiple storage classes in declaration specifiers: {' '.join(spec.storage)}"
            self.context.error(msg, self.context.location)

        storage = StorageClass(spec.storage[0]) if spec.storage else StorageClass.AUTO
        return DeclSpec(storage, self._build_qualified_type(spec))

    def _check_parenthesized_identifier(self, decl: Declarator) -> None:
        """Reject an abstract declarator that reads as a parenthesized identifier, e.g. `int (x);` or `int (*(x));`.

        With no pointer after the "(", the grammar takes `(x)` for a parameter list with a single typedef-name
        parameter, which would otherwise surface as a missing identifier.
        """

        if not decl.is_abstract or not decl.suffixes:
            return

        first = decl.suffixes[0]
        if not isinstance(first, ParameterList) or first.variadic or len(first) != 1:
            return

        param = first[0]
        qual_type = param.qual_type
        if (
            qual_type.qual is Qualifier.NONE
            and qual_type.spec.type is BaseType.TYPEDEF_NAME
            and (param.declarator is None or param.declarator.is_abstract)
        ):
            msg = f"Parenthesized declarator {qual_type.spec.iden!r} must start with '*'"
            self.context.error(msg, self.context.location)

    def _trace(self, kind: str, text: str) -> None:
        if self.context.trace_parser:
            logger.debug("%s: completed %s %r", self.context.location, kind, text)

    # endregion

    # ============================================================================
    # region ---- Grammar productions
    #
    # A subset of the declaration grammar in K&R2 A.13
    # ============================================================================

    @_("{ declaration }")
    def translation_unit(self, p: YaccProd) -> list[Declaration]:
        """Handle a translation unit.

        Notes
        -----
        This allows empty input.
        """

        # NOTE: declaration is already a list, so now it's a list of lists.
        return [decl for decls in p.declaration for decl in decls]

    @_('declaration_specifiers [ init_declarator_list ] ";"')
    def declaration(self, p: YaccProd) -> list[Declaration]:
        """Handle a declaration.

        Notes
        -----
        In C, declarations can come several in a line:

            int x, *px, romulo[5];

        Each declarator becomes its own declaration, all sharing the same declaration specifier.

        A declaration without any declarator, e.g. `int;`, is treated as if it had a single abstract declarator, so
        that it's rejected for missing an identifier.
        """

        decl_spec = self._build_decl_spec(p.declaration_specifiers)
        declarators: list[Declarator] = p.init_declarator_list or [Declarator()]
        for decl in declarators:
            self._check_parenthesized_identifier(decl)

        declarations = self.context.session.insert_all(decl_spec, declarators, self.context.location)
        for decl in declarations:
            self._trace("declaration", render(decl))
        return declarations

    # ========
    # region -- Declaration specifiers
    # ========

    @_("type_qualifier [ declaration_specifiers_no_type ]")
    def declaration_specifiers_no_type(self, p: YaccProd):
        """Handle declaration specifiers "without a type".

        Notes
        -----
        To know when declaration-specifiers end and declarators begin, we require the following:

        1. declaration-specifiers must have at least one type-specifier.
        2. No typedef-names are allowed after we've seen any type-specifier.
        """

        return _DeclarationSpecifiers.add(p.declaration_specifiers_no_type, p[0], "qual")

    @_("storage_class_specifier [ declaration_specifiers_no_type ]")
    def declaration_specifiers_no_type(self, p: YaccProd):
        return _DeclarationSpecifiers.add(p.declaration_specifiers_no_type, p[0], "storage")

    @_("declaration_specifiers type_qualifier")
    def declaration_specifiers(self, p: YaccProd):
        return _DeclarationSpecifiers.add(p.declaration_specifiers, p[1], "qual", append=True)

    @_("declaration_specifiers storage_class_specifier")
    def declaration_specifiers(self, p: YaccProd):
        return _DeclarationSpecifiers.add(p.declaration_specifiers, p[1], "storage", append=True)

    @_("declaration_specifiers type_specifier_no_typeid")
    def declaration_specifiers(self, p: YaccProd):
        return _DeclarationSpecifiers.add(p.declaration_specifiers, p[1], "type", append=True)

    @_("type_specifier")
    def declaration_specifiers(self, p: YaccProd):
        return _DeclarationSpecifiers(type=[p.type_specifier])

    @_("declaration_specifiers_no_type type_specifier")
    def declaration_specifiers(self, p: YaccProd):
        return _DeclarationSpecifiers.add(p.declaration_specifiers_no_type, p.type_specifier, "type", append=True)

    @_("AUTO", "EXTERN", "REGISTER", "STATIC")
    def storage_class_specifier(self, p: YaccProd):
        return p[0]

    @_("VOID", "CHAR", "SHORT", "INT", "LONG", "FLOAT", "DOUBLE", "SIGNED", "UNSIGNED")
    def builtin_type_specifier(self, p: YaccProd):
        return p[0]

    @_("builtin_type_specifier", "struct_or_enum_specifier")
    def type_specifier_no_typeid(self, p: YaccProd):
        return p[0]

    @_("typedef_name", "type_specifier_no_typeid")
    def type_specifier(self, p: YaccProd):
        return p[0]

    @_("STRUCT ID")
    def struct_or_enum_specifier(self, p: YaccProd):
        return TypeSpec(BaseType.STRUCT, p.ID)

    @_("ENUM ID")
    def struct_or_enum_specifier(self, p: YaccProd):
        return TypeSpec(BaseType.ENUM, p.ID)

    @_("ID")
    def typedef_name(self, p: YaccProd):
        return TypeSpec(BaseType.TYPEDEF_NAME, p.ID)

    @_("CONST", "VOLATILE")
    def type_qualifier(self, p: YaccProd):
        return p[0]

    @_("type_qualifier { type_qualifier }")
    def type_qualifier_list(self, p: YaccProd):
        return [p.type_qualifier0, *p.type_qualifier1]

    @_("specifier_qualifier_list type_specifier_no_typeid")
    def specifier_qualifier_list(self, p: YaccProd):
        """Handle a specifier qualifier list, i.e. declaration specifiers without storage classes.

        At least one type specifier is required.
        """

        return _DeclarationSpecifiers.add(p.specifier_qualifier_list, p.type_specifier_no_typeid, "type", append=True)

    @_("specifier_qualifier_list type_qualifier")
    def specifier_qualifier_list(self, p: YaccProd):
        return _DeclarationSpecifiers.add(p.specifier_qualifier_list, p.type_qualifier, "qual", append=True)

    @_("type_specifier")
    def specifier_qualifier_list(self, p: YaccProd):
        return _DeclarationSpecifiers(type=[p.type_specifier])

    @_("type_qualifier_list type_specifier")
    def specifier_qualifier_list(self, p: YaccProd):
        return _DeclarationSpecifiers(qual=p.type_qualifier_list, type=[p.type_specifier])

    # endregion

    # ========
    # region -- Declarators
    #
    # Suffixes are only ever appended: by the time a rule is reduced, everything it wraps has already been read out,
    # so whatever the rule adds is read out after it.
    # ========

    @_('init_declarator { "," init_declarator }')
    def init_declarator_list(self, p: YaccProd):
        return [p.init_declarator0, *p.init_declarator1]

    @_("declarator", "abstract_declarator")
    def init_declarator(self, p: YaccProd):
        return p[0]

    @_("direct_declarator")
    def declarator(self, p: YaccProd) -> Declarator:
        self._trace("declarator", render_declarator(p.direct_declarator))
        return p.direct_declarator

    @_("pointer direct_declarator")
    def declarator(self, p: YaccProd) -> Declarator:
        decl: Declarator = p.direct_declarator
        decl.append(p.pointer)
        self._trace("declarator", render_declarator(decl))
        return decl

    @_("ID")
    def direct_declarator(self, p: YaccProd) -> Declarator:
        return Declarator(p.ID)

    @_('"(" pointer direct_declarator ")"')
    def direct_declarator(self, p: YaccProd) -> Declarator:
        """Handle a parenthesized declarator, e.g. the `(*x)` in `int (*x)[3]`.

        Notes
        -----
        The parentheses have to start with a pointer. Parentheses around a plain identifier change nothing, and
        forbidding them means that "(" followed by an identifier always starts a parameter list whose first parameter
        has a typedef-name for its type.
        """

        decl: Declarator = p.direct_declarator
        decl.append(p.pointer)
        return decl

    @_('direct_declarator "[" [ array_size ] "]"')
    def direct_declarator(self, p: YaccProd) -> Declarator:
        decl: Declarator = p.direct_declarator
        decl.append(ArraySuffix(p.array_size or 0))
        return decl

    @_('direct_declarator "(" [ parameter_type_list ] ")"')
    def direct_declarator(self, p: YaccProd) -> Declarator:
        decl: Declarator = p.direct_declarator
        decl.append(p.parameter_type_list or ParameterList())
        return decl

    @_("INT_CONST_DEC")
    def array_size(self, p: YaccProd) -> int:
        # Integer suffixes don't change the size.
        return int(p.INT_CONST_DEC.rstrip("uUlL"), 10)

    @_("INT_CONST_OCT")
    def array_size(self, p: YaccProd) -> int:
        return int(p.INT_CONST_OCT.rstrip("uUlL"), 8)

    @_("INT_CONST_HEX")
    def array_size(self, p: YaccProd) -> int:
        return int(p.INT_CONST_HEX.rstrip("uUlL"), 16)

    @_("TIMES [ type_qualifier_list ] [ pointer ]")
    def pointer(self, p: YaccProd) -> PointerRun:
        """Handle a pointer.

        Notes
        -----
        Pointers are read out from right to left. This is important when different levels have different qualifiers.
        For example:

            char * const * p;

        Means "pointer to const pointer to char"

        While:

            char ** const p;

        Means "const pointer to pointer to char"

        So the pointers to the right of this one, if any, come first.
        """

        qual = Qualifier.from_keywords(p.type_qualifier_list or [])

        inner: Optional[PointerRun] = p.pointer
        if inner is not None:
            return PointerRun((*inner.quals, qual))
        else:
            return PointerRun((qual,))

    @_("parameter_list")
    def parameter_type_list(self, p: YaccProd) -> ParameterList:
        return p.parameter_list

    @_('parameter_list "," ELLIPSIS')
    def parameter_type_list(self, p: YaccProd) -> ParameterList:
        params: ParameterList = p.parameter_list
        params.set_variadic()
        return params

    @_("parameter_declaration")
    def parameter_list(self, p: YaccProd) -> ParameterList:
        return ParameterList([p.parameter_declaration])

    @_('parameter_list "," parameter_declaration')
    def parameter_list(self, p: YaccProd) -> ParameterList:
        params: ParameterList = p.parameter_list
        params.append(p.parameter_declaration)
        return params

    @_("specifier_qualifier_list declarator")
    def parameter_declaration(self, p: YaccProd) -> Parameter:
        param = Parameter(self._build_qualified_type(p.specifier_qualifier_list), p.declarator)
        self._trace("parameter", render_parameter(param))
        return param

    @_("specifier_qualifier_list [ abstract_declarator ]")
    def parameter_declaration(self, p: YaccProd) -> Parameter:
        param = Parameter(self._build_qualified_type(p.specifier_qualifier_list), p.abstract_declarator)
        self._trace("parameter", render_parameter(param))
        return param

    @_("pointer")
    def abstract_declarator(self, p: YaccProd) -> Declarator:
        return Declarator(suffixes=[p.pointer])

    @_("pointer direct_abstract_declarator")
    def abstract_declarator(self, p: YaccProd) -> Declarator:
        decl: Declarator = p.direct_abstract_declarator
        decl.append(p.pointer)
        return decl

    @_("direct_abstract_declarator")
    def abstract_declarator(self, p: YaccProd) -> Declarator:
        return p.direct_abstract_declarator

    @_('"(" abstract_declarator ")"')
    def direct_abstract_declarator(self, p: YaccProd) -> Declarator:
        return p.abstract_declarator

    @_('direct_abstract_declarator "[" [ array_size ] "]"')
    def direct_abstract_declarator(self, p: YaccProd) -> Declarator:
        decl: Declarator = p.direct_abstract_declarator
        decl.append(ArraySuffix(p.array_size or 0))
        return decl

    @_('"[" [ array_size ] "]"')
    def direct_abstract_declarator(self, p: YaccProd) -> Declarator:
        return Declarator(suffixes=[ArraySuffix(p.array_size or 0)])

    @_('direct_abstract_declarator "(" [ parameter_type_list ] ")"')
    def direct_abstract_declarator(self, p: YaccProd) -> Declarator:
        decl: Declarator = p.direct_abstract_declarator
        decl.append(p.parameter_type_list or ParameterList())
        return decl

    @_('"(" [ parameter_type_list ] ")"')
    def direct_abstract_declarator(self, p: YaccProd) -> Declarator:
        return Declarator(suffixes=[p.parameter_type_list or ParameterList()])

    # endregion

    # endregion

    def error(self, token: Optional[Union[Token, YaccSymbol]]) -> NoReturn:
        if token:
            msg = f"Syntax error at {token.value!r}"
        else:
            msg = "Parse error in input. EOF."

        self.context.error(msg, self.context.location)
