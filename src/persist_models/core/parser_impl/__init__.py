"""
Persistent models parser package.

This package provides a recursive-descent parser for model definition text.
The parser is built using mixins to separate parsing logic by construct type.

The main exports are:
- Parser: The complete parser class
- parse_models_file: Parse a whole model definition file
- parse_embedded_models_block: Parse a block embedded in other source text

Usage:
    from persist_models.core.parser_impl import parse_models_file

    models = parse_models_file(text)
"""

import logging
from collections.abc import Sequence
from pathlib import Path

from .. import ir
from ..errors import MarkerNotFoundError, ParseError, with_file
from .base import BaseParser
from .entity import EntityParserMixin
from .modifiers import ModifierParserMixin
from .types import TypeParserMixin

logger = logging.getLogger(__name__)

DEFAULT_OPEN_MARKERS: tuple[str, ...] = ("[persistLowerCase|", "[persistUpperCase|")
DEFAULT_CLOSE_MARKER = "|]"

ITEM_EXPECTED = "entity, blank line or comment"


class Parser(
    BaseParser,
    TypeParserMixin,
    ModifierParserMixin,
    EntityParserMixin,
):
    """
    Complete model definition parser.

    This class composes all parser mixins:

    - TypeParserMixin: Field type signatures
    - ModifierParserMixin: Field flags and key/value options
    - EntityParserMixin: Entity headers and child lines

    A Parser holds the cursor for a single parse; create one per input.
    """

    def parse_models_file_item(self) -> ir.ModelsFileItem:
        """Parse one top-level item: entity, blank line or comment."""
        return self.choice(
            (
                self.parse_entity,
                self.parse_whitespace_line,
                self.parse_comment_line,
            ),
            ITEM_EXPECTED,
        )

    def parse(self) -> ir.ModelsFile:
        """
        Parse the input as a model definition file.

        Items are read until one no longer matches; the parse stops there
        and whatever follows is left unread. Only a committed error, such as
        a non-integer ``maxlen=``, fails the parse.

        Returns:
            ModelsFile with the items read, in document order

        Raises:
            IntegerLiteralError: If a ``maxlen=`` value is not an integer
        """
        items = self.many(self.parse_models_file_item)

        if not self.at_end():
            logger.debug("Stopped reading items at %d:%d", *self.location())

        return ir.ModelsFile(items=items)

    def parse_embedded(
        self,
        open_markers: Sequence[str] = DEFAULT_OPEN_MARKERS,
        close_marker: str = DEFAULT_CLOSE_MARKER,
    ) -> ir.ModelsFile:
        """
        Parse the first embedded block in the input.

        Skips to the earliest opening marker, then parses items until the
        closing marker. Text after the closing marker is ignored.

        Raises:
            MarkerNotFoundError: If either marker is missing
            ParseError: If text before the closing marker is not an item
        """
        self.pos = self._find_open_marker(open_markers)
        logger.debug("Embedded block starts at %d:%d", *self.location())

        items: list[ir.ModelsFileItem] = []
        while not self.match_string(close_marker):
            if self.at_end():
                raise self.error(
                    f"Expected closing marker '{close_marker}'", MarkerNotFoundError
                )
            item = self.attempt(self.parse_models_file_item)
            if item is None:
                raise self.failure(f"{ITEM_EXPECTED} or '{close_marker}'")
            items.append(item)

        return ir.ModelsFile(items=items)

    def _find_open_marker(self, open_markers: Sequence[str]) -> int:
        found = [
            (index, marker)
            for marker in open_markers
            if (index := self.text.find(marker, self.pos)) != -1
        ]
        if not found:
            expected = ", ".join(f"'{m}'" for m in open_markers)
            raise self.error(
                f"Expected opening marker (one of {expected})",
                MarkerNotFoundError,
                pos=len(self.text),
            )
        index, marker = min(found)
        return index + len(marker)


def parse_models_file(text: str, file: Path | None = None) -> ir.ModelsFile:
    """
    Parse model definition text.

    Args:
        text: Model definition source
        file: Source file path (for error reporting)

    Returns:
        ModelsFile with the entities, blank lines and comments read before
        the first line that is none of them

    Raises:
        IntegerLiteralError: If a ``maxlen=`` value is not an integer
    """
    parser = Parser(text, file)
    try:
        models = parser.parse()
    except ParseError as e:
        raise with_file(e, parser.file, text) from None
    logger.debug("Parsed %d items from %s", len(models.items), parser.file)
    return models


def parse_embedded_models_block(
    text: str,
    file: Path | None = None,
    *,
    open_markers: Sequence[str] = DEFAULT_OPEN_MARKERS,
    close_marker: str = DEFAULT_CLOSE_MARKER,
) -> ir.ModelsFile:
    """
    Find and parse a model definition block embedded in other text.

    Args:
        text: Host source text, e.g. a Haskell module
        file: Source file path (for error reporting)
        open_markers: Literal markers that open the block
        close_marker: Literal marker that closes the block

    Returns:
        ModelsFile for the block contents

    Raises:
        MarkerNotFoundError: If the block is not opened or not closed
        ParseError: If the block contents cannot be parsed
    """
    parser = Parser(text, file)
    try:
        models = parser.parse_embedded(open_markers, close_marker)
    except ParseError as e:
        raise with_file(e, parser.file, text) from None
    logger.debug("Parsed %d embedded items from %s", len(models.items), parser.file)
    return models


__all__ = [
    "DEFAULT_CLOSE_MARKER",
    "DEFAULT_OPEN_MARKERS",
    "Parser",
    "parse_embedded_models_block",
    "parse_models_file",
]
