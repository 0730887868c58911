"""Module for driving a parse of simplified C declarations from source text to a finished set of declarations."""

import logging
import os
from collections.abc import Generator
from typing import NoReturn, Optional, Union

from sly.lex import Token

from .c_decl import Declaration
from .c_lexer import CDeclLexer
from .c_parser import CDeclParser
from .c_render import render
from .c_session import ParseSession
from .errors import CDeclParsingError
from .utils import Coord


__all__ = ("CContext", "parse", "parse_file", "explain")

logger = logging.getLogger(__name__)


class CContext:
    """The state shared by the lexer and parser over one or more parses.

    Each call to `parse` or `parse_file` starts over with a fresh parse session. If the parse succeeds, its
    declarations are available through `results` and `result`; if it fails, there are no results and `last_error`
    describes what went wrong.

    Parameters
    ----------
    filename: str, default="<unknown>"
        The name of the input, used in error locations.
    trace_lexer: bool, default=False
        Whether to log every token at DEBUG level.
    trace_parser: bool, default=False
        Whether to log completed declarators, parameters and declarations at DEBUG level.
    """

    def __init__(self, filename: str = "<unknown>", *, trace_lexer: bool = False, trace_parser: bool = False) -> None:
        self.filename = filename
        self.trace_lexer = trace_lexer
        self.trace_parser = trace_parser

        self.lexer = CDeclLexer(self)
        self.parser = CDeclParser(self)
        self.session = ParseSession()
        self.source = ""

        self._location: Optional[Coord] = None
        self._last_error = ""

    # ============================================================================
    # region ---- Parsing
    # ============================================================================

    def _tokenize(self, source: str) -> Generator[Token, None, None]:
        """Lex the source, keeping track of the location of the latest token."""

        for tok in self.lexer.tokenize(source):
            self._location = Coord.from_token(source, tok, self.filename)
            if self.trace_lexer:
                logger.debug("%s: token %s %r", self._location, tok.type, tok.value)
            yield tok

    def parse_strict(self, source: str) -> None:
        """Parse the source, replacing the results of any previous parse.

        Like `parse`, but a failure is raised instead of reported. `last_error` is still set and the results are still
        discarded.

        Raises
        ------
        CDeclParsingError
            If the source couldn't be parsed or holds an invalid declaration.
        """

        self.source = source
        self.session = ParseSession()
        self._location = None
        self._last_error = ""

        try:
            self.parser.parse(self._tokenize(source))
        except CDeclParsingError as exc:
            logger.debug("Parse of %s failed: %s", self.filename, exc)
            self._last_error = str(exc)
            self.session.reset()
            raise
        finally:
            self.session.close()

    def parse(self, source: str) -> bool:
        """Parse the source, replacing the results of any previous parse.

        Returns
        -------
        bool
            Whether the parse succeeded. On failure, `last_error` holds the reason and there are no results.
        """

        try:
            self.parse_strict(source)
        except CDeclParsingError:
            return False
        else:
            return True

    def parse_file(self, file: Union[str, "os.PathLike[str]"], encoding: str = "utf-8") -> bool:
        with open(file, encoding=encoding) as fp:
            source = fp.read()

        self.filename = os.fspath(file)
        return self.parse(source)

    def error(self, msg: str, coord: Optional[Coord] = None) -> NoReturn:
        raise CDeclParsingError(msg, coord)

    # endregion

    # ============================================================================
    # region ---- Results
    # ============================================================================

    @property
    def results(self) -> tuple[Declaration, ...]:
        """The declarations from the latest successful parse, in source order."""

        return self.session.all()

    @property
    def n_results(self) -> int:
        return len(self.session)

    def results_contain(self, iden: str) -> bool:
        return iden in self.session

    def result(self, key: Union[str, int]) -> Declaration:
        """Look up a declaration by identifier or by position.

        Raises
        ------
        KeyError
            If `key` is an identifier that wasn't declared.
        IndexError
            If `key` is an out-of-range position.
        """

        if isinstance(key, int):
            return self.session.lookup_index(key)
        else:
            return self.session.lookup(key)

    @property
    def last_error(self) -> str:
        """A description of why the latest parse failed, or an empty string if it succeeded."""

        return self._last_error

    @property
    def location(self) -> Optional[Coord]:
        """The location of the most recently read token, if any."""

        return self._location

    # endregion


def parse(source: str, filename: str = "") -> tuple[Declaration, ...]:
    """Parse simplified C declarations.

    Parameters
    ----------
    source: str
        The declarations, e.g. "int *x[3]; char f(int, ...);".
    filename: str, default=""
        The name of the input, used in error locations.

    Returns
    -------
    tuple[Declaration, ...]
        The declarations, in source order.

    Raises
    ------
    CDeclParsingError
        If the source couldn't be parsed or holds an invalid declaration.
    """

    context = CContext(filename or "<unknown>")
    context.parse_strict(source)
    return context.results


def parse_file(file: Union[str, "os.PathLike[str]"], encoding: str = "utf-8") -> tuple[Declaration, ...]:
    with open(file, encoding=encoding) as fp:
        source = fp.read()

    return parse(source, filename=os.fspath(file))


def explain(source: str) -> list[str]:
    """Parse simplified C declarations and describe each one in English, e.g. "x: array[3] of pointer to signed int"."""

    return [render(decl) for decl in parse(source)]
