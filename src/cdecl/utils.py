"""Some utilities for internal use, e.g. the Coord class."""

import dataclasses
from typing import TYPE_CHECKING

from ._typing_compat import Self, override

if TYPE_CHECKING:
    from sly.lex import Token


__all__ = ("Coord", "find_token_column")


def find_token_column(text: str, t: "Token") -> int:
    """Find the 1-based column of a token within the text it was lexed from."""

    last_cr = text.rfind("\n", 0, t.index)
    return t.index - last_cr


@dataclasses.dataclass(frozen=True)
class Coord:
    """A location in the source: 1-based line and column, plus the name of the input."""

    line: int
    column: int
    filename: str = "<unknown>"

    @classmethod
    def from_token(cls, text: str, t: "Token", filename: str = "<unknown>") -> Self:
        return cls(t.lineno, find_token_column(text, t), filename)

    @override
    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"
