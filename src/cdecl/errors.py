"""Exceptions raised while parsing declarations."""

from typing import Optional

from ._typing_compat import override
from .utils import Coord


__all__ = ("CDeclParsingError", "DeclarationError")


class CDeclParsingError(Exception):
    """Exception raised when the input cannot be turned into declarations.

    Parameters
    ----------
    msg: str
        A description of the problem.
    coord: Coord | None, optional
        Where in the input the problem was found, if known.

    Attributes
    ----------
    msg: str
        A description of the problem.
    coord: Coord | None
        Where in the input the problem was found, if known.
    """

    def __init__(self, msg: str, coord: Optional[Coord] = None) -> None:
        super().__init__(msg, coord)
        self.msg = msg
        self.coord = coord

    @override
    def __str__(self) -> str:
        if self.coord is None:
            return self.msg
        return f"{self.coord}: {self.msg}"


class DeclarationError(CDeclParsingError):
    """Exception raised when a parsed declaration can't be recorded, e.g. it has no identifier or redeclares one."""
