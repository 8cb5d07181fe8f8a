"""
Entity parsing for persistent model definitions.

Handles the entity header line and the indented child lines beneath it:
fields, unique constraints, deriving clauses, primary and foreign keys.
"""

from typing import TYPE_CHECKING, Any

from .. import ir

# Literal keywords that open a child line.
DERIVING_KEYWORD = "deriving"
PRIMARY_KEYWORD = "Primary"
FOREIGN_KEYWORD = "Foreign"
JSON_KEYWORD = "json"
SQL_KEYWORD = "sql"

ENTITY_CHILD_EXPECTED = "field, deriving, Primary, Foreign, unique constraint, blank line or comment"


class EntityParserMixin:
    """
    Mixin providing entity and entity child parsing.

    Note: This mixin expects to be combined with BaseParser via multiple inheritance.
    """

    # Type stubs for methods provided by BaseParser and other mixins
    if TYPE_CHECKING:
        attempt: Any
        choice: Any
        many: Any
        many1: Any
        spaced: Any
        match_string: Any
        expect_string: Any
        expect_spaces: Any
        skip_spaces: Any
        finish_line: Any
        parse_token: Any
        parse_type_identifier: Any
        parse_type_name: Any
        parse_field_identifier: Any
        parse_whitespace_line: Any
        parse_comment_line: Any
        parse_field_type: Any
        parse_field_flags: Any
        parse_field_options: Any

    def parse_entity(self) -> ir.Entity:
        """
        Parse an entity: header line followed by its children.

        Header grammar:
            TypeName [ws] ['json'] [ws] ['sql' [ws] '=' [ws] token] rest-of-line

        The body ends at the first line no child production accepts.
        """
        name = self.parse_type_identifier()
        self.skip_spaces()
        derives_json = self.match_string(JSON_KEYWORD)
        self.skip_spaces()
        sql_table_name = self.attempt(self._parse_entity_sql_table)
        self.finish_line()

        children = self.many(self.parse_entity_child)

        return ir.Entity(
            name=name,
            derives_json=derives_json,
            sql_table_name=sql_table_name,
            children=children,
        )

    def _parse_entity_sql_table(self) -> str:
        self.expect_string(SQL_KEYWORD)
        self.skip_spaces()
        self.expect_string("=")
        self.skip_spaces()
        return self.parse_token("table name")

    def parse_entity_child(self) -> ir.EntityChild:
        """Parse one child line, trying each kind in priority order."""
        return self.choice(
            (
                self.parse_entity_field,
                self.parse_entity_derive,
                self.parse_entity_primary,
                self.parse_entity_foreign,
                self.parse_entity_unique,
                self.parse_whitespace_line,
                self.parse_comment_line,
            ),
            ENTITY_CHILD_EXPECTED,
        )

    def parse_entity_field(self) -> ir.EntityField:
        """
        Parse a field line.

        Grammar:
            ws+ fieldName ws+ fieldType flags* options* rest-of-line

        Raises:
            StructuralMismatchError: If the name or type is malformed
            IntegerLiteralError: If maxlen= has a non-integer value
        """
        self.expect_spaces()
        name = self.parse_field_identifier()
        self.expect_spaces()
        field_type = self.parse_field_type()
        flags = self.parse_field_flags()
        options = self.parse_field_options()
        self.finish_line()

        return ir.EntityField(
            name=name,
            type=field_type,
            migration_only=ir.FieldFlag.MIGRATION_ONLY in flags,
            safe_to_remove=ir.FieldFlag.SAFE_TO_REMOVE in flags,
            default_value=options.get(ir.FieldOption.DEFAULT),
            sql_row=options.get(ir.FieldOption.SQL),
            sql_type=options.get(ir.FieldOption.SQL_TYPE),
            max_len=options.get(ir.FieldOption.MAX_LEN),
        )

    def parse_entity_unique(self) -> ir.EntityUnique:
        """Parse a unique constraint: ``UniqueName field1 field2 ...``."""
        self.expect_spaces()
        name = self.parse_type_name()
        field_names = self._parse_field_name_list()
        self.finish_line()
        return ir.EntityUnique(name=name, field_names=field_names)

    def parse_entity_derive(self) -> ir.EntityDerive:
        """Parse ``deriving Class1 Class2 ...``."""
        self.expect_spaces()
        self.expect_string(DERIVING_KEYWORD)
        class_names = self.many1(self.spaced(self.parse_type_name))
        self.finish_line()
        return ir.EntityDerive(class_names=class_names)

    def parse_entity_primary(self) -> ir.EntityPrimary:
        """Parse ``Primary field1 field2 ...``."""
        self.expect_spaces()
        self.expect_string(PRIMARY_KEYWORD)
        field_names = self._parse_field_name_list()
        self.finish_line()
        return ir.EntityPrimary(field_names=field_names)

    def parse_entity_foreign(self) -> ir.EntityForeign:
        """Parse ``Foreign Target field1 field2 ...``."""
        self.expect_spaces()
        self.expect_string(FOREIGN_KEYWORD)
        self.expect_spaces()
        foreign_entity = self.parse_type_name()
        field_names = self._parse_field_name_list()
        self.finish_line()
        return ir.EntityForeign(foreign_entity=foreign_entity, field_names=field_names)

    def _parse_field_name_list(self) -> list[str]:
        return self.many1(self.spaced(self.parse_field_identifier))
