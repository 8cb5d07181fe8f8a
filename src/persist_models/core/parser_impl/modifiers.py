"""
Field modifier parsing for persistent model definitions.

Both modifier groups that may trail a field type share one scanner:

- flags: ``MigrationOnly`` and ``SafeToRemove``
- options: ``default=``, ``sql=``, ``sqltype=`` and ``maxlen=``

Each kind is accepted at most once per field and in any order. After a kind
matches it leaves the candidate set, so a keyword repeated later on the line
is no longer recognised and ends up in the discarded rest of the line.
"""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar

from .. import ir
from ..errors import IntegerLiteralError

K = TypeVar("K")
V = TypeVar("V")

OptionValue = str | int


class ModifierParserMixin:
    """
    Mixin providing field flag and option parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    if TYPE_CHECKING:
        pos: Any
        attempt: Any
        error: Any
        expect_string: Any
        expect_spaces: Any
        skip_spaces: Any
        parse_token: Any
        _identifier_tail: Any

    def scan_modifiers(
        self,
        candidates: list[K],
        parse_one: Callable[[K], V],
    ) -> list[tuple[K, V]]:
        """
        Collect modifiers from ``candidates``, each kind at most once.

        Every round needs one-or-more whitespace, then tries the remaining
        kinds in their declared order. A round where nothing matches ends the
        scan and rewinds to before its whitespace; that is not a failure.

        Args:
            candidates: Modifier kinds in the order they are attempted
            parse_one: Production for a single kind

        Returns:
            (kind, value) pairs in the order they appeared
        """
        remaining = list(candidates)
        found: list[tuple[K, V]] = []

        while remaining:
            round_start = self.pos
            if self.attempt(self.expect_spaces) is None:
                break

            for kind in remaining:
                value = self.attempt(parse_one, kind)
                if value is not None:
                    break
            else:
                self.pos = round_start
                break

            remaining.remove(kind)
            found.append((kind, value))

        return found

    def parse_field_flags(self) -> list[ir.FieldFlag]:
        """Parse ``MigrationOnly`` / ``SafeToRemove`` flags."""
        return [flag for flag, _ in self.scan_modifiers(list(ir.FieldFlag), self._parse_flag)]

    def parse_field_options(self) -> dict[ir.FieldOption, OptionValue]:
        """
        Parse ``key=value`` options.

        Raises:
            IntegerLiteralError: If a ``maxlen=`` value is not an integer
        """
        return dict(self.scan_modifiers(list(ir.FieldOption), self._parse_option))

    def _parse_flag(self, flag: ir.FieldFlag) -> ir.FieldFlag:
        self.expect_string(flag.value)
        return flag

    def _parse_option(self, option: ir.FieldOption) -> OptionValue:
        self.expect_string(option.value)
        self.skip_spaces()
        self.expect_string("=")
        self.skip_spaces()

        if option is ir.FieldOption.MAX_LEN:
            return self._parse_max_len_value()
        return self.parse_token(f"value for {option.value}=")

    def _parse_max_len_value(self) -> int:
        start = self.pos
        value = self._identifier_tail()
        if not (value.isascii() and value.isdigit()):
            raise self.error(
                f"Expected an integer for maxlen=, got {value!r}",
                IntegerLiteralError,
                pos=start,
            )
        return int(value)
