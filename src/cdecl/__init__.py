"""A parser for simplified C declarations that describes them in English, in the manner of cdecl. Made with sly."""

from .c_context import CContext, explain, parse, parse_file
from .c_decl import ArraySuffix, Declaration, Declarator, Parameter, ParameterList, PointerRun
from .c_render import render
from .c_session import ParseSession
from .c_types import BaseType, DeclSpec, QualifiedType, Qualifier, StorageClass, TypeSpec
from .errors import CDeclParsingError, DeclarationError


__all__ = (
    "CContext",
    "parse",
    "parse_file",
    "explain",
    "render",
    "CDeclParsingError",
    "DeclarationError",
    "ParseSession",
    "BaseType",
    "Qualifier",
    "StorageClass",
    "TypeSpec",
    "QualifiedType",
    "DeclSpec",
    "ArraySuffix",
    "PointerRun",
    "Parameter",
    "ParameterList",
    "Declarator",
    "Declaration",
)
