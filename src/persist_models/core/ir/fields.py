"""
Field type definitions for the persist-models IR.

This module contains the field type signature and the field declaration
produced for each field line of an entity.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict


class Strictness(str, Enum):
    """Evaluation strictness marker in front of a field type."""

    STRICT = "strict"  # no marker
    EXPLICIT_STRICT = "explicit_strict"  # !
    LAZY = "lazy"  # ~


class FieldFlag(str, Enum):
    """Bare-keyword flags that may follow a field type."""

    MIGRATION_ONLY = "MigrationOnly"
    SAFE_TO_REMOVE = "SafeToRemove"


class FieldOption(str, Enum):
    """Key/value annotations that may follow a field's flags."""

    DEFAULT = "default"
    SQL = "sql"
    SQL_TYPE = "sqltype"
    MAX_LEN = "maxlen"


class EntityFieldType(BaseModel):
    """
    A field's type signature.

    Examples:
        - Text: EntityFieldType(type_name="Text")
        - [!Text]: EntityFieldType(type_name="Text", strictness=EXPLICIT_STRICT, is_list=True)
        - ~Int Maybe: EntityFieldType(type_name="Int", strictness=LAZY, is_maybe=True)
    """

    type_name: str
    strictness: Strictness = Strictness.STRICT
    is_list: bool = False
    is_maybe: bool = False

    model_config = ConfigDict(frozen=True)


class EntityField(BaseModel):
    """
    A single field declared inside an entity.

    Attributes:
        name: Field identifier
        type: Field type signature
        migration_only: MigrationOnly flag present
        safe_to_remove: SafeToRemove flag present
        default_value: Raw value of default=
        sql_row: Raw value of sql=
        sql_type: Raw value of sqltype=
        max_len: Value of maxlen=
    """

    kind: Literal["field"] = "field"
    name: str
    type: EntityFieldType
    migration_only: bool = False
    safe_to_remove: bool = False
    default_value: str | None = None
    sql_row: str | None = None
    sql_type: str | None = None
    max_len: int | None = None

    model_config = ConfigDict(frozen=True)

    @property
    def is_nullable(self) -> bool:
        """Check if the field type carries the Maybe suffix."""
        return self.type.is_maybe
