"""Pydantic V2 schemas for the rules resource catalog.

The catalog is a reference library of skills and of qualities/drawbacks,
each optionally pointing at the rulebook page that describes it. It is
independent of the skills and traits recorded on individual characters.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from campaign_manager.core.constants import MAX_NAME_LENGTH
from campaign_manager.models.enums import SkillType


PageNumber = Annotated[int, Field(ge=1)]


class ResourceSkill(BaseModel):
    """A skill entry in the catalog.

    Attributes:
        id: Unique identifier.
        name: Skill name.
        description: Optional rules text.
        type: Regular or special skill.
        page: Optional rulebook page.
        created_at: When the entry was created.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str | None = None
    type: SkillType = SkillType.REGULAR
    page: PageNumber | None = None
    created_at: datetime = Field(default_factory=datetime.now)


class ResourceQualityDrawback(BaseModel):
    """A quality or drawback entry in the catalog.

    A positive ``cost`` is paid for a quality; a negative one is refunded
    by a drawback.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(min_length=1, max_length=MAX_NAME_LENGTH)
    description: str | None = None
    cost: int
    page: PageNumber | None = None
    created_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_drawback(self) -> bool:
        """Whether the entry refunds points."""
        return self.cost < 0


__all__ = [
    "ResourceSkill",
    "ResourceQualityDrawback",
]
