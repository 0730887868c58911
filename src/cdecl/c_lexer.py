# pyright: reportUndefinedVariable=none, reportIndexIssue=none, reportConstantRedefinition=none
"""Module for lexing simplified C declarations."""

from typing import TYPE_CHECKING, NoReturn, Optional

from sly import Lexer
from sly.lex import Token

from . import c_context
from ._typing_compat import override
from .utils import Coord


if TYPE_CHECKING:
    from sly.types import _


__all__ = ("CDeclLexer",)


_hex_prefix = "0[xX]"
_hex_digits = "[0-9a-fA-F]+"

# integer constants (K&R2: A.2.5.1), without the long long suffixes
_integer_suffix_opt = r"(([uU][lL])|([lL][uU]?)|[uU])?"


class CDeclLexer(Lexer):
    # ---- Reserved keywords
    # fmt: off
    keywords = {
        AUTO, EXTERN, REGISTER, STATIC,
        CONST, VOLATILE,
        VOID, CHAR, SHORT, INT, LONG, FLOAT, DOUBLE, SIGNED, UNSIGNED,
        STRUCT, ENUM,
    }

    tokens = keywords | {
        # Identifiers
        ID,

        # Constants, used for array sizes
        INT_CONST_DEC, INT_CONST_OCT, INT_CONST_HEX,

        # Pointers
        TIMES,

        # Ellipsis (...)
        ELLIPSIS,
    }
    # fmt: on

    # ---- Regular delimiters
    literals = {",", ";", "(", ")", "[", "]"}

    ignore = " \t"

    # ---- Comments
    @_(r"/\*(.|\n)*?\*/")
    def ignore_block_comment(self, t: Token) -> None:
        self.lineno += t.value.count("\n")

    ignore_line_comment = r"//[^\n]*"

    # ---- The rest of the tokens
    INT_CONST_HEX = _hex_prefix + _hex_digits + _integer_suffix_opt

    @_("0[0-7]*[89]")
    def BAD_CONST_OCT(self, t: Token) -> NoReturn:
        self.error(t, f"Invalid octal constant {t.value!r}")

    INT_CONST_OCT = "0[0-7]*" + _integer_suffix_opt
    INT_CONST_DEC = "[1-9][0-9]*" + _integer_suffix_opt

    # fmt: off
    TIMES       = r"\*"
    ELLIPSIS    = r"\.\.\."

    # Identifiers and keywords
    # valid C identifiers (K&R2: A.2.3), plus "$" (supported by some compilers)
    ID = r"[a-zA-Z_$][0-9a-zA-Z_$]*"  # pyright: ignore [reportAssignmentType]

    ID["auto"]          = AUTO
    ID["extern"]        = EXTERN
    ID["register"]      = REGISTER
    ID["static"]        = STATIC
    ID["const"]         = CONST
    ID["volatile"]      = VOLATILE
    ID["void"]          = VOID
    ID["char"]          = CHAR
    ID["short"]         = SHORT
    ID["int"]           = INT
    ID["long"]          = LONG
    ID["float"]         = FLOAT
    ID["double"]        = DOUBLE
    ID["signed"]        = SIGNED
    ID["unsigned"]      = UNSIGNED
    ID["struct"]        = STRUCT
    ID["enum"]          = ENUM
    # fmt: on

    @_(r"\n+")
    def ignore_newline(self, t: Token) -> None:
        self.lineno += t.value.count("\n")

    @override
    def error(self, t: Token, msg: Optional[str] = None) -> NoReturn:
        location = Coord.from_token(self.text, t, self.context.filename)
        self.context.error(msg or f"Bad character {t.value[0]!r}", location)

    def __init__(self, context: "c_context.CContext") -> None:
        self.context = context
