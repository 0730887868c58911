"""Module for describing declarations in English, e.g. `int *x[3];` becomes "x: array[3] of pointer to signed int"."""

from typing import Any

from .c_decl import ArraySuffix, Declaration, Declarator, DeclaratorSuffix, Parameter, ParameterList, PointerRun
from .c_types import render_qualifier


__all__ = (
    "ABSTRACT_PLACEHOLDER",
    "DeclarationRenderer",
    "render",
    "render_declarator",
    "render_suffix",
    "render_parameter",
)


ABSTRACT_PLACEHOLDER = "<abstract>"
"""Stands in for the identifier when rendering a top-level declaration whose declarator is abstract."""


class DeclarationRenderer:
    """Turns declarations and their pieces into English phrases.

    Each `visit_*` method handles one type of object, chosen by class name. Anything else is a programmer error and
    raises `TypeError`.
    """

    def visit(self, node: Any) -> str:
        visitor = getattr(self, f"visit_{type(node).__name__}", self.generic_visit)
        return visitor(node)

    def generic_visit(self, node: Any) -> str:
        msg = f"cannot render object of type {type(node).__name__!r}"
        raise TypeError(msg)

    def visit_Declaration(self, node: Declaration) -> str:
        # The separator after the colon is always emitted, so a declaration without suffixes gets two spaces.
        iden = node.declarator.iden or ABSTRACT_PLACEHOLDER
        phrases = " ".join(self.visit(suffix) for suffix in node.declarator)
        return f"{iden}: {phrases} {node.decl_spec}"

    def visit_Declarator(self, node: Declarator) -> str:
        words = [f"{node.iden}:"] if node.iden else []
        words.extend(self.visit(suffix) for suffix in node)
        return " ".join(words)

    def visit_ArraySuffix(self, node: ArraySuffix) -> str:
        size = str(node.size) if node.size else ""
        return f"array[{size}] of"

    def visit_PointerRun(self, node: PointerRun) -> str:
        words: list[str] = []
        for qual in node:
            qual_text = render_qualifier(qual)
            if qual_text:
                words.append(qual_text)
            words.append("pointer to")
        return " ".join(words)

    def visit_ParameterList(self, node: ParameterList) -> str:
        params = [self.visit(param) for param in node]
        if node.variadic:
            params.append("...")
        return f"function ({', '.join(params)}) returning"

    def visit_Parameter(self, node: Parameter) -> str:
        if node.declarator is None:
            return str(node.qual_type)

        declarator_text = self.visit(node.declarator)
        if not declarator_text:
            return str(node.qual_type)
        return f"{declarator_text} {node.qual_type}"


_renderer = DeclarationRenderer()


def render(declaration: Declaration) -> str:
    """Describe a declaration as a single line, e.g. "f: function (signed int, ...) returning signed int"."""

    return _renderer.visit(declaration)


def render_declarator(declarator: Declarator) -> str:
    """Describe a declarator on its own, without the type it applies to, e.g. "p: pointer to"."""

    return _renderer.visit(declarator)


def render_suffix(suffix: DeclaratorSuffix) -> str:
    """Describe a single declarator suffix, e.g. "array[3] of"."""

    return _renderer.visit(suffix)


def render_parameter(param: Parameter) -> str:
    """Describe a function parameter, e.g. "pointer to const char"."""

    return _renderer.visit(param)
