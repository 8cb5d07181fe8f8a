"""
Entity types for the persist-models IR.

This module contains the entity declaration and the relational annotations
(unique, deriving, primary, foreign) that can appear among its children.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from .fields import EntityField
from .lines import CommentLine, WhiteSpaceLine


class EntityUnique(BaseModel):
    """
    Unique constraint over one or more fields.

    Example:
        UniqueEmail email -> EntityUnique(name="UniqueEmail", field_names=["email"])
    """

    kind: Literal["unique"] = "unique"
    name: str
    field_names: list[str] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class EntityDerive(BaseModel):
    """``deriving`` clause listing class names."""

    kind: Literal["derive"] = "derive"
    class_names: list[str] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class EntityPrimary(BaseModel):
    """Custom primary key over one or more fields."""

    kind: Literal["primary"] = "primary"
    field_names: list[str] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


class EntityForeign(BaseModel):
    """
    Composite foreign key into another entity.

    Example:
        Foreign Tree fkparent parent -> EntityForeign(foreign_entity="Tree", field_names=["fkparent", "parent"])
    """

    kind: Literal["foreign"] = "foreign"
    foreign_entity: str
    field_names: list[str] = Field(min_length=1)

    model_config = ConfigDict(frozen=True)


EntityChild = (
    EntityField
    | EntityDerive
    | EntityPrimary
    | EntityForeign
    | EntityUnique
    | WhiteSpaceLine
    | CommentLine
)


class Entity(BaseModel):
    """
    A top-level entity declaration.

    Attributes:
        name: Entity type name
        derives_json: ``json`` appeared on the header line
        sql_table_name: Table name given with ``sql=`` on the header line
        children: Body lines in document order
    """

    kind: Literal["entity"] = "entity"
    name: str
    derives_json: bool = False
    sql_table_name: str | None = None
    children: list[EntityChild] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def fields(self) -> list[EntityField]:
        """Field declarations in document order."""
        return [c for c in self.children if isinstance(c, EntityField)]

    @property
    def uniques(self) -> list[EntityUnique]:
        return [c for c in self.children if isinstance(c, EntityUnique)]

    @property
    def derives(self) -> list[EntityDerive]:
        return [c for c in self.children if isinstance(c, EntityDerive)]

    @property
    def foreigns(self) -> list[EntityForeign]:
        return [c for c in self.children if isinstance(c, EntityForeign)]

    @property
    def primary(self) -> EntityPrimary | None:
        """First Primary declaration, if any."""
        for child in self.children:
            if isinstance(child, EntityPrimary):
                return child
        return None

    def get_field(self, name: str) -> EntityField | None:
        """Get field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None
