"""
Error types for persistent model parsing and configuration.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class PersistModelsError(Exception):
    """Base exception for all persist-models errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


class ParseError(PersistModelsError):
    """
    Raised when model definition text cannot be parsed.

    Every parse failure is fatal to the whole operation; subclasses only
    describe what went wrong.
    """

    # Ordered alternation may try another production after this error.
    backtrackable = True

    @property
    def offset(self) -> int:
        """Character offset of the failure, or -1 when unknown."""
        return getattr(self, "_offset", -1)


class StructuralMismatchError(ParseError):
    """
    Raised when a required keyword, identifier or delimiter is absent.

    Examples:
    - Missing type name after a strictness marker
    - Missing ``]`` after an opened ``[``
    - No field name after ``Primary``
    """

    pass


class UnterminatedLineError(ParseError):
    """Raised when a line needs a terminator and none follows."""

    pass


class IntegerLiteralError(ParseError):
    """
    Raised when a ``maxlen=`` value is not a base-10 integer.

    Unlike the other parse errors this one is committed: it aborts the whole
    parse instead of letting another production be tried.
    """

    backtrackable = False


class MarkerNotFoundError(ParseError):
    """Raised when an embedded block's opening or closing marker is missing."""

    backtrackable = False


class ConfigError(PersistModelsError):
    """
    Raised when a persist_models.toml manifest cannot be used.

    Examples:
    - Invalid TOML
    - A marker list that is not a list of strings
    """

    pass


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the source file where error occurred
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional source lines around the error location
    """

    file: Path
    line: int
    column: int
    snippet: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "models:10:5"
        """
        location = f"{self.file}:{self.line}:{self.column}"
        if self.snippet:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if not self.snippet:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet starts up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^^^")

        return "\n".join(formatted)


def make_snippet(text: str, line: int, radius: int = 2) -> str:
    """
    Cut the lines around ``line`` out of ``text`` for an error snippet.

    Args:
        text: Full source text
        line: Error line (1-indexed)
        radius: Number of lines to keep on each side

    Returns:
        The selected lines joined with newlines
    """
    lines = text.splitlines()
    start = max(0, line - 1 - radius)
    end = min(len(lines), line + radius)
    return "\n".join(lines[start:end])


def make_parse_error(
    message: str,
    file: Path,
    line: int,
    column: int,
    snippet: str | None = None,
    error_class: type[ParseError] = StructuralMismatchError,
    offset: int = -1,
) -> ParseError:
    """
    Helper to create a ParseError with context.

    Args:
        message: Error description
        file: Source file path
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        snippet: Optional code snippet
        error_class: Concrete ParseError subclass to raise
        offset: Character offset of the failure in the source text

    Returns:
        ParseError with context attached
    """
    context = ErrorContext(file=file, line=line, column=column, snippet=snippet)
    error = error_class(message, context)
    error._offset = offset
    return error


def with_file(error: ParseError, file: Path, text: str | None = None) -> ParseError:
    """
    Rebuild a ParseError so its context points at ``file``.

    Args:
        error: Error raised while parsing in-memory text
        file: File the text was read from
        text: Source text, used to attach a snippet

    Returns:
        A new error of the same class with the updated context
    """
    line = error.context.line if error.context else 1
    column = error.context.column if error.context else 1
    snippet = make_snippet(text, line) if text is not None else None
    return make_parse_error(
        error.message,
        file,
        line,
        column,
        snippet=snippet,
        error_class=type(error),
        offset=error.offset,
    )
