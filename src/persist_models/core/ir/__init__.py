"""
persist-models Intermediate Representation (IR) types.

The parser produces these immutable models; they are re-exported here so
callers can write ``from persist_models.core import ir``.
"""

# Entities and relational annotations
from .entity import (
    Entity,
    EntityChild,
    EntityDerive,
    EntityForeign,
    EntityPrimary,
    EntityUnique,
)

# Fields
from .fields import (
    EntityField,
    EntityFieldType,
    FieldFlag,
    FieldOption,
    Strictness,
)

# Lossless line tokens
from .lines import (
    CommentLine,
    WhiteSpaceLine,
)

# File
from .models_file import (
    ModelsFile,
    ModelsFileItem,
)

__all__ = [
    "CommentLine",
    "Entity",
    "EntityChild",
    "EntityDerive",
    "EntityField",
    "EntityFieldType",
    "EntityForeign",
    "EntityPrimary",
    "EntityUnique",
    "FieldFlag",
    "FieldOption",
    "ModelsFile",
    "ModelsFileItem",
    "Strictness",
    "WhiteSpaceLine",
]
