"""Loot data model for Monster Gauntlet."""

from pydantic import BaseModel, Field


class Loot(BaseModel):
    """A named, valued item dropped by a defeated monster."""
    id: int = 0
    name: str
    value: int = Field(ge=0)        # Economic worth in gold
