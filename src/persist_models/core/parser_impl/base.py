"""
Base parser class for persistent model definitions.

Provides the character cursor, backtracking combinators, identifier tokens
and the lossless line parsers used by all parser mixins.
"""

from bisect import bisect_right
from collections.abc import Callable
from pathlib import Path
from typing import TypeVar

from .. import ir
from ..errors import (
    ParseError,
    StructuralMismatchError,
    UnterminatedLineError,
    make_parse_error,
)

T = TypeVar("T")

END_OF_LINE_CHARS = ("\n", "\r")
DIGITS = "0123456789"

# The one lowercase word that is a keyword rather than a field name.
DERIVING = "deriving"


def is_space_no_newline(ch: str) -> bool:
    """Horizontal whitespace: any whitespace except line terminators."""
    return ch.isspace() and ch not in END_OF_LINE_CHARS


def is_upper(ch: str) -> bool:
    return "A" <= ch <= "Z"


def is_lower(ch: str) -> bool:
    return "a" <= ch <= "z"


def is_identifier_tail(ch: str) -> bool:
    """Letter, digit or underscore."""
    return ch.isalpha() or ch in DIGITS or ch == "_"


class BaseParser:
    """
    Base parser class with cursor and combinator utilities.

    The grammar is whitespace sensitive, so the parser works directly on
    characters. Productions raise a ParseError subclass on failure; ordered
    alternation restores the cursor and tries the next production unless the
    error is committed (``backtrackable = False``).
    """

    def __init__(self, text: str, file: Path | None = None):
        """
        Initialize parser.

        Args:
            text: Source text to parse
            file: Source file path (for error reporting)
        """
        self.text = text
        self.file = file or Path("<string>")
        self.pos = 0
        self._line_starts = [0] + [i + 1 for i, ch in enumerate(text) if ch == "\n"]
        self._furthest: ParseError | None = None

    # ------------------------------------------------------------------
    # Cursor
    # ------------------------------------------------------------------

    def current_char(self) -> str | None:
        """Get current character or None if at end."""
        if self.pos >= len(self.text):
            return None
        return self.text[self.pos]

    def peek_char(self, offset: int = 1) -> str | None:
        """Peek ahead at character."""
        pos = self.pos + offset
        if pos >= len(self.text):
            return None
        return self.text[pos]

    def advance(self, count: int = 1) -> str:
        """Consume and return the next ``count`` characters."""
        consumed = self.text[self.pos : self.pos + count]
        self.pos += len(consumed)
        return consumed

    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def location(self, pos: int | None = None) -> tuple[int, int]:
        """Return the 1-indexed (line, column) of ``pos``."""
        if pos is None:
            pos = self.pos
        line = bisect_right(self._line_starts, pos)
        column = pos - self._line_starts[line - 1] + 1
        return line, column

    def error(
        self,
        message: str,
        error_class: type[ParseError] = StructuralMismatchError,
        pos: int | None = None,
    ) -> ParseError:
        """
        Build a ParseError at ``pos`` (default: the cursor).

        Backtrackable errors are remembered when they are the furthest seen,
        so a failed top-level parse can report what was actually expected.
        """
        if pos is None:
            pos = self.pos
        line, column = self.location(pos)
        err = make_parse_error(
            message, self.file, line, column, error_class=error_class, offset=pos
        )
        if err.backtrackable and (self._furthest is None or pos > self._furthest.offset):
            self._furthest = err
        return err

    def failure(self, expected: str) -> ParseError:
        """
        Error for a repetition that stopped before the input it had to cover.

        Returns the furthest recorded failure when it lies at or beyond the
        cursor, otherwise a generic mismatch naming ``expected``.
        """
        if self._furthest is not None and self._furthest.offset >= self.pos:
            return self._furthest
        return self.error(f"Expected {expected}")

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    def attempt(self, production: Callable[..., T], *args: object) -> T | None:
        """
        Run ``production``; on a backtrackable failure rewind and return None.

        Productions passed here never return None on success.
        """
        start = self.pos
        try:
            return production(*args)
        except ParseError as e:
            if not e.backtrackable:
                raise
            self.pos = start
            return None

    def choice(self, productions: tuple[Callable[[], T], ...], expected: str) -> T:
        """Try ``productions`` in order and return the first success."""
        for production in productions:
            result = self.attempt(production)
            if result is not None:
                return result
        raise self.error(f"Expected {expected}")

    def many(self, production: Callable[[], T]) -> list[T]:
        """Zero or more repetitions of ``production``."""
        results: list[T] = []
        while True:
            start = self.pos
            result = self.attempt(production)
            if result is None or self.pos == start:
                return results
            results.append(result)

    def many1(self, production: Callable[[], T]) -> list[T]:
        """One or more repetitions; the first failure propagates."""
        first = production()
        return [first, *self.many(production)]

    def spaced(self, production: Callable[[], T]) -> Callable[[], T]:
        """Wrap ``production`` so it needs one-or-more whitespace in front."""

        def run() -> T:
            self.expect_spaces()
            return production()

        return run

    # ------------------------------------------------------------------
    # Literals and whitespace
    # ------------------------------------------------------------------

    def match_string(self, literal: str) -> bool:
        """Consume ``literal`` if it is next; report whether it was."""
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def expect_string(self, literal: str) -> str:
        """
        Expect ``literal`` at the cursor and consume it.

        Raises:
            StructuralMismatchError: If the text differs
        """
        if not self.match_string(literal):
            raise self.error(f"Expected '{literal}'")
        return literal

    def skip_spaces(self) -> str:
        """Consume zero or more horizontal whitespace characters."""
        start = self.pos
        while self.pos < len(self.text) and is_space_no_newline(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def expect_spaces(self) -> str:
        """Consume one or more horizontal whitespace characters."""
        spaces = self.skip_spaces()
        if not spaces:
            raise self.error("Expected whitespace")
        return spaces

    def take_till_end_of_line(self) -> str:
        """Consume everything up to (not including) the line terminator."""
        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] not in END_OF_LINE_CHARS:
            self.pos += 1
        return self.text[start : self.pos]

    def expect_end_of_line(self) -> None:
        """
        Consume ``\\n`` or ``\\r\\n``.

        Raises:
            UnterminatedLineError: If neither follows
        """
        if not (self.match_string("\n") or self.match_string("\r\n")):
            raise self.error("Expected end of line", UnterminatedLineError)

    def finish_line(self) -> None:
        """Discard trailing content, then need a terminator or end of input."""
        self.take_till_end_of_line()
        if not self.at_end():
            self.expect_end_of_line()

    # ------------------------------------------------------------------
    # Identifiers
    # ------------------------------------------------------------------

    def _identifier_tail(self) -> str:
        start = self.pos
        while self.pos < len(self.text) and is_identifier_tail(self.text[self.pos]):
            self.pos += 1
        return self.text[start : self.pos]

    def _expect_boundary(self) -> None:
        # Lookahead only; ']' ends an identifier inside a list type.
        ch = self.current_char()
        if ch is not None and not ch.isspace() and ch != "]":
            raise self.error(f"Unexpected character {ch!r} after identifier")

    def parse_token(self, what: str) -> str:
        """One or more letters, digits or underscores (modifier values)."""
        token = self._identifier_tail()
        if not token:
            raise self.error(f"Expected {what}")
        return token

    def parse_type_identifier(self) -> str:
        """
        Parse an uppercase-initial identifier such as ``Person``.

        Raises:
            StructuralMismatchError: If no type name is at the cursor
        """
        ch = self.current_char()
        if ch is None or not is_upper(ch):
            raise self.error("Expected type name")
        name = self.advance() + self._identifier_tail()
        self._expect_boundary()
        return name

    def parse_type_name(self) -> str:
        """Type identifier with an optional, ignored ``!`` or ``~`` prefix."""
        if self.current_char() in ("!", "~"):
            self.advance()
        return self.parse_type_identifier()

    def parse_field_identifier(self) -> str:
        """
        Parse a lowercase- or underscore-initial identifier such as ``name``.

        Raises:
            StructuralMismatchError: If no field name is at the cursor, or the
                name is the ``deriving`` keyword
        """
        start = self.pos
        ch = self.current_char()
        if ch is None or not (is_lower(ch) or ch == "_"):
            raise self.error("Expected field name")
        name = self.advance() + self._identifier_tail()
        self._expect_boundary()
        if name == DERIVING:
            raise self.error("'deriving' is a keyword and cannot be a field name", pos=start)
        return name

    # ------------------------------------------------------------------
    # Lossless lines
    # ------------------------------------------------------------------

    def parse_whitespace_line(self) -> ir.WhiteSpaceLine:
        """Parse a blank or whitespace-only line."""
        spaces = self.skip_spaces()
        self.expect_end_of_line()
        return ir.WhiteSpaceLine(text=spaces + "\n")

    def parse_comment_line(self) -> ir.CommentLine:
        """Parse a ``--`` comment line."""
        self.expect_string("--")
        comment = self.take_till_end_of_line()
        self.expect_end_of_line()
        return ir.CommentLine(text="--" + comment + "\n")
