"""
File-level IR type: the ordered result of one parse.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .entity import Entity
from .lines import CommentLine, WhiteSpaceLine

ModelsFileItem = Entity | WhiteSpaceLine | CommentLine


class ModelsFile(BaseModel):
    """
    Parsed model definitions in document order.

    Attributes:
        items: Entities, blank lines and comment lines as they appeared
    """

    items: list[ModelsFileItem] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def entities(self) -> list[Entity]:
        return [item for item in self.items if isinstance(item, Entity)]

    def get_entity(self, name: str) -> Entity | None:
        """Get entity by name."""
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None
