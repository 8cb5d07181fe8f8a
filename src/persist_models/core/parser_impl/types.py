"""
Field type parsing for persistent model definitions.

Handles the type signature that follows a field name:
optional list brackets, strictness marker, type name and ``Maybe`` suffix.
"""

from typing import TYPE_CHECKING, Any

from .. import ir


class TypeParserMixin:
    """
    Mixin providing field type parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        attempt: Any
        current_char: Any
        advance: Any
        match_string: Any
        expect_string: Any
        expect_spaces: Any
        parse_type_name: Any

    def parse_strictness(self) -> ir.Strictness:
        """Parse an optional ``!`` (explicit strict) or ``~`` (lazy) marker."""
        ch = self.current_char()
        if ch == "!":
            self.advance()
            return ir.Strictness.EXPLICIT_STRICT
        if ch == "~":
            self.advance()
            return ir.Strictness.LAZY
        return ir.Strictness.STRICT

    def parse_field_type(self) -> ir.EntityFieldType:
        """
        Parse a field type signature.

        Grammar:
            ['['] strictness TypeName [']'] [whitespace+ 'Maybe']

        The closing bracket must follow the type name directly when an
        opening bracket was consumed.

        Raises:
            StructuralMismatchError: If the type name or the closing bracket
                is missing
        """
        is_list = self.match_string("[")
        strictness = self.parse_strictness()
        type_name = self.parse_type_name()

        if is_list:
            self.expect_string("]")

        is_maybe = self.attempt(self._parse_maybe_suffix) is not None

        return ir.EntityFieldType(
            type_name=type_name,
            strictness=strictness,
            is_list=is_list,
            is_maybe=is_maybe,
        )

    def _parse_maybe_suffix(self) -> bool:
        self.expect_spaces()
        self.expect_string("Maybe")
        return True
